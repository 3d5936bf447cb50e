"""
Services package

Data-access services that enforce the storage-layer contracts on top of the schema.
"""

from .account_service import AccountService
from .auth_service import AuthService, LockoutPolicy
from .automation_service import AutomationService
from .budget_service import BudgetService
from .currency_service import CurrencyService
from .notification_service import NotificationService
from .plan_service import PlanService
from .session_service import SessionService
from .tag_service import TagService
from .transaction_service import TransactionService
from .user_service import UserService

__all__ = [
    "AccountService",
    "AuthService",
    "AutomationService",
    "BudgetService",
    "CurrencyService",
    "LockoutPolicy",
    "NotificationService",
    "PlanService",
    "SessionService",
    "TagService",
    "TransactionService",
    "UserService",
]
