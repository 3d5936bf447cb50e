from fastapi import FastAPI

from . import (
    accounts,
    auth,
    automations,
    budgets,
    currencies,
    notifications,
    plans,
    tags,
    transactions,
    users,
    vitals,
)

ROUTERS = (
    vitals.router,
    users.router,
    auth.router,
    plans.router,
    currencies.router,
    tags.router,
    accounts.router,
    budgets.router,
    transactions.router,
    automations.router,
    notifications.router,
)


def register_routers(app: FastAPI) -> None:
    for router in ROUTERS:
        app.include_router(router)
