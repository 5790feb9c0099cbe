# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import argparse
from collections.abc import Sequence

from webclipper.infrastructure.db import build_engine, init_db
from webclipper.shared.config import load_config
from webclipper.shared.logging import setup_logging


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the users and sessions tables")
    parser.add_argument("--database-url", type=str, default=None, help="Override DATABASE_URL")
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level, log_file=config.log_file)
    database = config.database
    if args.database_url:
        database = database.model_copy(update={"url": args.database_url})

    engine = build_engine(database)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    print(f"Schema ready at {database.url.split('@')[-1]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
