# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""One-shot sweep of expired or logged-out sessions."""

from __future__ import annotations

import argparse

from blog.infrastructure.container import Container
from blog.infrastructure.db import init_db
from blog.shared.config import AppConfig, load_config
from blog.shared.logging import setup_logging


def run(config: AppConfig) -> int:
    container = Container(config)
    init_db(container.engine)
    try:
        return container.cleanup_sessions_use_case.execute()
    finally:
        container.engine.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Purge expired and inactive sessions")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args(argv)

    config = load_config()
    if args.database_url:
        config = config.model_copy(
            update={"database": config.database.model_copy(update={"url": args.database_url})}
        )
    setup_logging(config.log_level)
    removed = run(config)
    print(f"Removed {removed} session(s)")


if __name__ == "__main__":
    main()
