#!/usr/bin/env python3
"""
Au Revoir Bitbucket - Migrate all repositories from a Bitbucket workspace
to a GitHub organization.

Every repository listed in the workspace is cloned as a bare mirror,
created as a private repository in the GitHub organization when it does not
exist there yet, and mirror-pushed. Credentials are read from a .env file
(BB_USERNAME, BB_PASSWORD, BB_ORGANIZATION, GH_USERNAME, GH_TOKEN,
GH_ORGANIZATION).
"""

from __future__ import annotations

import os
import sys
from typing import NoReturn

from config import DEFAULT_LOG_FILE
from env_config import load_config
from logging_utils import Logger
from migration_orchestrator import MigrationOrchestrator

# Exit codes
EXIT_EXECUTION_ERROR = 1


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    logger = Logger(os.getenv("MIGRATION_LOG_FILE") or DEFAULT_LOG_FILE)
    logger.info("starting repository migration")

    cfg = load_config(logger)
    logger.log_file = cfg.settings.log_file
    orchestrator = MigrationOrchestrator(cfg, logger)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
