#!/usr/bin/env python3
"""Configuration dataclasses for au-revoir-bitbucket."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

BITBUCKET_API_URL = "https://api.bitbucket.org/2.0"
BITBUCKET_GIT_URL = "https://bitbucket.org"
GITHUB_API_URL = "https://api.github.com"

# Repositories that are never migrated
DEFAULT_IGNORE_LIST = frozenset(
    {"springboard", "springboard-library", "springboard-sites", "rundeckjobs2"}
)

DEFAULT_PAGES = 1  # increase if the workspace has more than 100 repos
DEFAULT_PAGE_LEN = 100
DEFAULT_WORK_DIR = "repos"
DEFAULT_LOG_FILE = "migration.log"


@dataclass
class BitbucketConfig:
    """Bitbucket-specific configuration."""
    username: str
    password: str
    organization: str
    api_url: str = BITBUCKET_API_URL
    git_url: str = BITBUCKET_GIT_URL


@dataclass
class GitHubConfig:
    """GitHub-specific configuration."""
    username: str
    token: str
    organization: str
    api_url: str = GITHUB_API_URL


@dataclass
class MigrationSettings:
    """Migration behavior configuration."""
    ignore_list: FrozenSet[str] = field(default_factory=lambda: DEFAULT_IGNORE_LIST)
    pages: int = DEFAULT_PAGES
    page_len: int = DEFAULT_PAGE_LEN
    work_dir: str = DEFAULT_WORK_DIR
    log_file: str = DEFAULT_LOG_FILE
    private: bool = True


@dataclass
class Config:
    """Main configuration for Bitbucket-to-GitHub migration."""
    bitbucket: BitbucketConfig
    github: GitHubConfig
    settings: MigrationSettings
