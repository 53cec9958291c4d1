#!/usr/bin/env python3
"""GitHub API wrapper for probing and creating repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse

import github
import requests

if TYPE_CHECKING:
    from github.Organization import Organization

from config import GITHUB_API_URL, GitHubConfig
from logging_utils import Logger


class GitHubTarget:
    """Wrapper around the GitHub API to check for and create repositories."""

    def __init__(
        self,
        config: GitHubConfig,
        logger: Logger,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self.session = session
        self.api: Optional[github.Github] = None
        self.org: Optional["Organization"] = None

    def connect(self) -> None:
        """Build the HTTP session and PyGithub client; no request is sent."""
        self.logger.info(f"init github API: {self.config.api_url}")
        if self.session is None:
            self.session = requests.Session()
        self.session.auth = (self.config.username, self.config.token)
        self.session.headers.update(self._get_api_headers())

        auth = github.Auth.Login(self.config.username, self.config.token)
        if self.config.api_url != GITHUB_API_URL:
            self.api = github.Github(base_url=self.config.api_url, auth=auth)
        else:
            self.api = github.Github(auth=auth)

    @staticmethod
    def _get_api_headers() -> dict:
        """Get standard API headers for GitHub requests."""
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _git_base_url(self) -> str:
        """Return base URL for Git operations derived from API endpoint."""
        parsed = urlparse(self.config.api_url)
        if parsed.netloc == "api.github.com":
            return "https://github.com"

        base_path = parsed.path.rstrip("/")
        if base_path.endswith("/api/v3"):
            base_path = base_path[: -len("/api/v3")]
        base = f"{parsed.scheme}://{parsed.netloc}"
        if base_path:
            base += base_path
        return base

    def git_hostname(self) -> str:
        """Return the hostname that serves repositories, e.g. 'github.com'."""
        parsed = urlparse(self.config.api_url)
        if parsed.netloc == "api.github.com":
            return "github.com"
        return parsed.netloc

    def push_url(self, name: str) -> str:
        """Get the HTTPS remote URL of a repository in the target organization."""
        return f"{self._git_base_url()}/{self.config.organization}/{name}.git"

    def _repo_api_url(self, name: str) -> str:
        return f"{self.config.api_url}/repos/{self.config.organization}/{name}"

    def repo_status(self, name: str) -> Optional[int]:
        """Return the HTTP status of GET /repos/{org}/{name}, or None on transport errors."""
        if self.session is None:
            self.connect()
        try:
            response = self.session.get(self._repo_api_url(name), timeout=30)
        except requests.RequestException as e:
            self.logger.error(f"failed to contact github api for '{name}': {e}")
            return None
        return response.status_code

    def describe_repo(self, name: str) -> str:
        """Fetch the response body of GET /repos/{org}/{name} for diagnostics."""
        if self.session is None:
            self.connect()
        try:
            response = self.session.get(self._repo_api_url(name), timeout=30)
        except requests.RequestException as e:
            return f"<request failed: {e}>"
        return response.text

    def _get_org(self) -> "Organization":
        if self.org is None:
            if self.api is None:
                self.connect()
            self.org = self.api.get_organization(self.config.organization)
        return self.org

    def create_repo(self, name: str, private: bool = True) -> Optional[str]:
        """Create a repository and return its html_url.

        Returns None when creation fails or the returned html_url does not
        point at the destination host.
        """
        try:
            repo = self._get_org().create_repo(name=name, private=private)
        except github.GithubException as e:
            self.logger.error(
                f"failed to create GitHub repository '{name}'. "
                f"Response: {e.status} {e.data}"
            )
            return None
        except requests.RequestException as e:
            self.logger.error(f"failed to create GitHub repository '{name}': {e}")
            return None

        html_url = getattr(repo, "html_url", None)
        if not html_url or self.git_hostname() not in html_url:
            self.logger.error(
                f"failed to create GitHub repository '{name}'. "
                f"Response: {getattr(repo, 'raw_data', None)}"
            )
            return None
        return html_url
