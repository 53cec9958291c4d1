#!/usr/bin/env python3
"""Environment file loading and configuration building."""

from __future__ import annotations

import os
import sys
from typing import Dict, Mapping, Optional, Tuple

from dotenv import dotenv_values

from config import (DEFAULT_IGNORE_LIST, DEFAULT_LOG_FILE, DEFAULT_PAGES,
                    DEFAULT_WORK_DIR, GITHUB_API_URL, BitbucketConfig,
                    Config, GitHubConfig, MigrationSettings)
from logging_utils import Logger
from security import SecurityValidator
from utils import parse_name_list

# Exit codes
EXIT_MISSING_CONFIGURATION = 2

DEFAULT_ENV_FILE = ".env"

REQUIRED_VARIABLES = (
    "BB_USERNAME",
    "BB_PASSWORD",
    "BB_ORGANIZATION",
    "GH_USERNAME",
    "GH_TOKEN",
    "GH_ORGANIZATION",
)


def _read_env_file(
    env_file: str, logger: Logger, environ: Optional[Mapping[str, str]]
) -> Dict[str, str]:
    """Layer the values of env_file over the process environment."""
    if not os.path.isfile(env_file):
        logger.error(
            f"{env_file} file not found. Please create one with "
            f"{', '.join(REQUIRED_VARIABLES)}."
        )
        sys.exit(EXIT_MISSING_CONFIGURATION)

    values = dict(os.environ if environ is None else environ)
    for key, value in dotenv_values(env_file).items():
        values[key] = value if value is not None else ""
    logger.info(f"{env_file} file loaded successfully.")
    return values


def _get_required_values(values: Mapping[str, str], logger: Logger) -> Dict[str, str]:
    """Return the required variables, exiting if any of them is empty."""
    missing = [name for name in REQUIRED_VARIABLES if not values.get(name)]
    if missing:
        logger.error(
            "One or more required environment variables "
            f"({', '.join(REQUIRED_VARIABLES)}) are not set: {', '.join(missing)}"
        )
        sys.exit(EXIT_MISSING_CONFIGURATION)
    return {name: values[name] for name in REQUIRED_VARIABLES}


def _validate_values(
    required: Mapping[str, str], values: Mapping[str, str], logger: Logger
) -> Tuple[str, str, str, int, str]:
    """Validate organizations, API URL, page count and working directory."""
    try:
        bb_organization = SecurityValidator.validate_organization(
            required["BB_ORGANIZATION"]
        )
        gh_organization = SecurityValidator.validate_organization(
            required["GH_ORGANIZATION"]
        )
        gh_api_url = SecurityValidator.validate_url(
            values.get("GH_API_URL") or GITHUB_API_URL, ["https"]
        )

        raw_pages = values.get("MIGRATION_PAGES") or str(DEFAULT_PAGES)
        try:
            pages = int(raw_pages)
        except ValueError:
            raise ValueError(f"MIGRATION_PAGES must be an integer, got '{raw_pages}'")
        if pages < 1:
            raise ValueError("MIGRATION_PAGES must be at least 1")

        work_dir = SecurityValidator.validate_file_path(
            values.get("MIGRATION_WORK_DIR") or DEFAULT_WORK_DIR
        )
    except ValueError as e:
        logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_MISSING_CONFIGURATION)

    return bb_organization, gh_organization, gh_api_url, pages, work_dir


def load_config(
    logger: Logger,
    env_file: str = DEFAULT_ENV_FILE,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Load the environment file and return a configuration object.

    Exits with EXIT_MISSING_CONFIGURATION when the file is missing, any
    required variable is empty or an optional setting is invalid.
    """
    values = _read_env_file(env_file, logger, environ)
    required = _get_required_values(values, logger)
    bb_organization, gh_organization, gh_api_url, pages, work_dir = (
        _validate_values(required, values, logger)
    )

    ignore_list = DEFAULT_IGNORE_LIST
    if values.get("MIGRATION_IGNORE"):
        ignore_list = parse_name_list(values["MIGRATION_IGNORE"])

    return Config(
        bitbucket=BitbucketConfig(
            username=required["BB_USERNAME"],
            password=required["BB_PASSWORD"],
            organization=bb_organization,
        ),
        github=GitHubConfig(
            username=required["GH_USERNAME"],
            token=required["GH_TOKEN"],
            organization=gh_organization,
            api_url=gh_api_url,
        ),
        settings=MigrationSettings(
            ignore_list=ignore_list,
            pages=pages,
            work_dir=work_dir,
            log_file=values.get("MIGRATION_LOG_FILE") or DEFAULT_LOG_FILE,
        ),
    )
