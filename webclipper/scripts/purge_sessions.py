# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Delete expired sessions once and report how many were removed."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from webclipper.domain import StorageError
from webclipper.infrastructure.db import build_engine, build_session_factory, init_db
from webclipper.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
)
from webclipper.shared.config import load_config
from webclipper.shared.logging import logger, setup_logging


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Purge expired login sessions")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Override DATABASE_URL",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the schema before purging",
    )
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level, log_file=config.log_file)
    database = config.database
    if args.database_url:
        database = database.model_copy(update={"url": args.database_url})

    engine = build_engine(database)
    try:
        if args.init_db:
            init_db(engine)
        sessions = SqlAlchemySessionRepository(build_session_factory(engine))
        try:
            purged = sessions.delete_expired()
        except StorageError as exc:
            logger.opt(exception=exc.cause).error("purge_sessions: failed")
            return 1
    finally:
        engine.dispose()

    logger.info(f"purge_sessions: removed={purged}")
    print(f"Purged {purged} expired session(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
