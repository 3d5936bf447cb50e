"""Command line entry point: ``finance-fusion serve|init-db|purge-sessions``."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from . import __version__
from .core.config import settings
from .core.logging import setup_logging

logger = logging.getLogger("finance_fusion")


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    logger.info("Listening on %s:%s", args.host, args.port)
    uvicorn.run("finance_fusion.main:app", host=args.host, port=args.port, log_level=settings.LOG_LEVEL.lower())
    return 0


def _init_db(args: argparse.Namespace) -> int:
    from .core.database import init_db

    init_db()
    logger.info("Created tables on %s", settings.DATABASE_URL)
    return 0


def _purge_sessions(args: argparse.Namespace) -> int:
    from .core.database import SessionLocal
    from .services import SessionService

    db = SessionLocal()
    try:
        removed = SessionService(db).purge_expired()
    finally:
        db.close()
    print(removed)
    return 0


def _seed(args: argparse.Namespace) -> int:
    from .seed import seed

    user = seed()
    logger.info("Demo user \"%s\" ready (id %s)", user.username, user.id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finance-fusion", description="Finance Fusion server")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the REST API")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.REST_PORT)
    serve.set_defaults(func=_serve)

    init = sub.add_parser("init-db", help="create all tables (development databases)")
    init.set_defaults(func=_init_db)

    purge = sub.add_parser("purge-sessions", help="delete expired login sessions")
    purge.set_defaults(func=_purge_sessions)
    demo = sub.add_parser("seed", help="create a demo user, plan and currencies")
    demo.set_defaults(func=_seed)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.LOG_LEVEL)
    logger.info("Finance Fusion version: %s", __version__)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
