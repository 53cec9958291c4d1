#!/usr/bin/env python3
"""Main orchestrator for migrating a Bitbucket workspace to a GitHub organization."""

from __future__ import annotations

import os
import shutil
from collections import Counter
from enum import Enum
from typing import Optional

from bitbucket_source import BitbucketSource
from config import Config
from git_mirror import GitMirror
from github_target import GitHubTarget
from logging_utils import Logger
from security import SecurityValidator
from utils import strip_org_prefix

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


class RepoState(Enum):
    """Terminal state of a single repository within a run."""
    IGNORED = "ignored"
    ALREADY_CLONED = "already_cloned"
    CLONE_FAILED = "clone_failed"
    EXISTS_ON_DEST = "exists_on_dest"
    PROBE_FAILED = "probe_failed"
    CREATE_FAILED = "create_failed"
    PUSH_FAILED = "push_failed"
    PUSHED = "pushed"
    FAILED = "failed"


class MigrationOrchestrator:
    def __init__(
        self,
        cfg: Config,
        logger: Logger,
        source: Optional[BitbucketSource] = None,
        target: Optional[GitHubTarget] = None,
        git: Optional[GitMirror] = None,
    ) -> None:
        self.cfg = cfg
        self.logger = logger
        self.bb = source or BitbucketSource(cfg.bitbucket, logger)
        self.gh = target or GitHubTarget(cfg.github, logger)
        self.git = git or GitMirror(logger)
        self.results: Counter = Counter()

    def run(self) -> int:
        work_dir = self.cfg.settings.work_dir
        try:
            os.makedirs(work_dir, exist_ok=True)
        except OSError as e:
            self.logger.error(f"failed to create '{work_dir}' directory: {e}")
            return EXIT_EXECUTION_ERROR
        self.logger.info(f"created or ensured '{work_dir}' directory exists")

        try:
            self.gh.connect()
            for full_name in self.bb.iter_repositories(
                self.cfg.settings.pages, self.cfg.settings.page_len
            ):
                try:
                    state = self._process_repository(full_name)
                except Exception as e:
                    self.logger.error(f"unexpected error processing '{full_name}': {e}")
                    state = RepoState.FAILED
                self.results[state] += 1
        except Exception as e:
            self.logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR
        finally:
            self._cleanup_work_dir()
            self._log_summary()

        self.logger.info("repository migration finished")
        return EXIT_SUCCESS

    def _process_repository(self, full_name: str) -> RepoState:
        """Clone, probe, create and push a single repository."""
        name = strip_org_prefix(full_name, self.cfg.bitbucket.organization)
        self.logger.info(f"processing repository: {full_name}")

        if name in self.cfg.settings.ignore_list:
            self.logger.warn(f"skipping repository '{name}' as it is in the ignore list")
            return RepoState.IGNORED

        try:
            name = SecurityValidator.validate_repo_name(name)
        except ValueError as e:
            self.logger.error(f"refusing to clone '{full_name}': {e}")
            return RepoState.CLONE_FAILED

        repo_dir = os.path.join(self.cfg.settings.work_dir, name)
        if os.path.isdir(repo_dir):
            self.logger.info(
                f"skipping repository '{name}' as it has already been cloned locally"
            )
            return RepoState.ALREADY_CLONED

        self.logger.info(f"cloning bare repository '{full_name}' from Bitbucket")
        if not self.git.clone_bare(
            self.bb.clone_url(full_name),
            repo_dir,
            self.cfg.bitbucket.username,
            self.cfg.bitbucket.password,
        ):
            self.logger.error(f"failed to clone repository '{full_name}' from Bitbucket")
            return RepoState.CLONE_FAILED
        self.logger.info(f"successfully cloned '{name}'")

        org = self.cfg.github.organization
        self.logger.info(f"checking if repository '{name}' exists in GitHub organization '{org}'")
        status = self.gh.repo_status(name)
        if status == 200:
            self.logger.info(
                f"repository '{name}' already exists in GitHub. Skipping creation and push."
            )
            return RepoState.EXISTS_ON_DEST
        if status != 404:
            self.logger.error(
                f"failed to check existence of '{name}' in GitHub. Received status "
                f"code: {status}. Response: {self.gh.describe_repo(name)}"
            )
            return RepoState.PROBE_FAILED

        self.logger.info(f"repository '{name}' not found in GitHub. Creating it in '{org}'.")
        html_url = self.gh.create_repo(name, private=self.cfg.settings.private)
        if html_url is None:
            return RepoState.CREATE_FAILED
        self.logger.info(f"successfully created GitHub repository: {html_url}")

        self.logger.info(f"pushing repository '{name}' to GitHub")
        if not self.git.push_mirror(
            repo_dir,
            self.gh.push_url(name),
            self.cfg.github.username,
            self.cfg.github.token,
        ):
            self.logger.error(f"failed to push repository '{name}' to GitHub")
            return RepoState.PUSH_FAILED
        self.logger.info(f"successfully pushed '{name}' to GitHub")
        return RepoState.PUSHED

    def _cleanup_work_dir(self) -> None:
        """Remove the working directory holding every local mirror."""
        work_dir = self.cfg.settings.work_dir
        self.logger.info(f"cleaning up local repositories directory: {work_dir}")
        if not os.path.exists(work_dir):
            return
        try:
            # Packed git objects are read-only
            for root, dirs, files in os.walk(work_dir):
                for d in dirs:
                    os.chmod(os.path.join(root, d), 0o700)
                for f in files:
                    os.chmod(os.path.join(root, f), 0o600)
            shutil.rmtree(work_dir)
            self.logger.info(f"'{work_dir}' directory removed successfully")
        except OSError as e:
            self.logger.warn(
                f"failed to remove '{work_dir}' directory: {e}. "
                "Manual cleanup may be required."
            )

    def _log_summary(self) -> None:
        total = sum(self.results.values())
        counts = ", ".join(
            f"{state.value}={self.results[state]}"
            for state in RepoState
            if self.results[state]
        )
        self.logger.info(f"processed {total} repositories" + (f": {counts}" if counts else ""))
