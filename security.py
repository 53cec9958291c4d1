#!/usr/bin/env python3
"""Security validation utilities for au-revoir-bitbucket."""

import os
import re
from typing import List, Optional


class SecurityValidator:
    """Security validation utilities for input sanitization and validation."""

    MAX_REPO_NAME_LENGTH = 100
    MAX_URL_LENGTH = 2048
    MAX_ORGANIZATION_LENGTH = 100
    MAX_PATH_LENGTH = 500

    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    SAFE_ORGANIZATION_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

    # Patterns to redact, applied in order
    REDACTION_PATTERNS = [
        (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
        (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),  # Token assignments
        (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),  # Password assignments
        (r"ATBB[A-Za-z0-9_=-]+", "[BITBUCKET_TOKEN_REDACTED]"),  # Bitbucket app passwords
        (r"ATCTT[A-Za-z0-9_=-]+", "[BITBUCKET_TOKEN_REDACTED]"),  # Atlassian API tokens
        (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained tokens
        (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Classic GitHub tokens
    ]

    @classmethod
    def validate_repo_name(cls, name: str) -> str:
        """Validate a repository name used as a single local path component."""
        if not name or not isinstance(name, str):
            raise ValueError("Repository name must be a non-empty string")

        if len(name) > cls.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"Repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        # Check for path traversal attempts
        if ".." in name or "/" in name or "\\" in name:
            raise ValueError("Repository name contains invalid path characters")

        if "\x00" in name or any(ord(c) < 32 for c in name):
            raise ValueError(
                "Repository name contains null bytes or control characters"
            )

        if not cls.SAFE_REPO_NAME_PATTERN.match(name):
            raise ValueError("Repository name contains invalid characters")

        return name

    @classmethod
    def validate_organization(cls, organization: str) -> str:
        """Validate a Bitbucket workspace or GitHub organization name."""
        if not organization or not isinstance(organization, str):
            raise ValueError("Organization must be a non-empty string")

        if len(organization) > cls.MAX_ORGANIZATION_LENGTH:
            raise ValueError(
                "Organization exceeds maximum length of "
                f"{cls.MAX_ORGANIZATION_LENGTH}"
            )

        if not cls.SAFE_ORGANIZATION_PATTERN.match(organization):
            raise ValueError(f"Organization '{organization}' contains invalid characters")

        return organization

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API base URL and return it without a trailing slash."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValueError("URL contains null bytes or control characters")

        if "://" not in url:
            raise ValueError("URL must include a scheme")

        scheme = url.split("://")[0].lower()
        if allowed_schemes and scheme not in allowed_schemes:
            raise ValueError(
                f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
            )

        return url.rstrip("/")

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate file path for security."""
        if not path or not isinstance(path, str):
            raise ValueError("File path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"File path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("File path contains null bytes")

        if ".." in path:
            raise ValueError("File path contains path traversal sequences")

        return os.path.normpath(path)

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        sanitized = message
        for pattern, replacement in cls.REDACTION_PATTERNS:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
