#!/usr/bin/env python3
"""Bitbucket API wrapper for listing repositories in a workspace."""

from __future__ import annotations

from typing import Iterator, List, Optional

import requests

from config import BitbucketConfig
from logging_utils import Logger


class BitbucketSource:
    """Wrapper around the Bitbucket 2.0 API to enumerate repositories."""

    def __init__(
        self,
        config: BitbucketConfig,
        logger: Logger,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self.session = session or requests.Session()
        self.session.auth = (config.username, config.password)

    def clone_url(self, full_name: str) -> str:
        """Return the HTTPS clone URL for a repository full name."""
        return f"{self.config.git_url.rstrip('/')}/{full_name}.git"

    def list_page(self, page: int, page_len: int = 100) -> Optional[List[str]]:
        """Return the full names listed on one page.

        Returns None when the page could not be fetched or parsed, and an
        empty list once the listing is exhausted.
        """
        url = f"{self.config.api_url}/repositories/{self.config.organization}"
        try:
            response = self.session.get(
                url, params={"pagelen": page_len, "page": page}, timeout=30
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(
                f"failed to fetch repositories from Bitbucket API (page {page}): {e}. "
                "Check credentials and organization name."
            )
            return None

        try:
            values = response.json().get("values")
        except (ValueError, AttributeError) as e:
            self.logger.error(
                f"failed to parse Bitbucket API response (page {page}): {e}"
            )
            return None
        if not isinstance(values, list):
            self.logger.error(
                f"unexpected Bitbucket API response (page {page}): missing 'values'"
            )
            return None

        names: List[str] = []
        for entry in values:
            full_name = entry.get("full_name") if isinstance(entry, dict) else None
            if not isinstance(full_name, str) or not full_name:
                self.logger.warn(f"skipping listing entry without full_name (page {page})")
                continue
            names.append(full_name)
        return names

    def iter_repositories(self, pages: int, page_len: int = 100) -> Iterator[str]:
        """Yield repository full names page by page, stopping at the first empty page."""
        for page in range(1, pages + 1):
            self.logger.info(
                f"processing page {page} of Bitbucket repositories for "
                f"organization {self.config.organization}"
            )
            names = self.list_page(page, page_len)
            if names is None:
                continue
            if not names:
                self.logger.info(
                    f"no repositories found on page {page} or end of repositories reached"
                )
                break
            self.logger.debug(f"found {len(names)} repositories on page {page}")
            yield from names
