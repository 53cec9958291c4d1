#!/usr/bin/env python3
"""Logging utilities for au-revoir-bitbucket."""

from __future__ import annotations

import sys
import time
from typing import Optional

import colorama

from security import SecurityValidator

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)


class Logger:
    """Formatted, credential-safe run log mirrored to stdout and a log file.

    A single instance is created by the entry point and handed to every
    stage, so each stage can be given its own logger in tests.
    """

    PROCESS_NAME = "au-revoir-bitbucket"

    def __init__(self, log_file: Optional[str] = None) -> None:
        self.log_file = log_file

    def debug(self, *messages: str) -> None:
        self._write("DEBUG", colorama.Fore.LIGHTBLACK_EX, *messages)

    def info(self, *messages: str) -> None:
        self._write("INFO", colorama.Fore.CYAN, *messages)

    def warn(self, *messages: str) -> None:
        self._write("WARNING", colorama.Fore.YELLOW, *messages)

    def error(self, *messages: str) -> None:
        self._write("ERROR", colorama.Fore.RED, *messages)

    def _write(self, level: str, color: str, *messages: str) -> None:
        line = self._format_line(level, *messages)
        sys.stdout.write(f"{color}{line}{colorama.Style.RESET_ALL}\n")
        if self.log_file:
            # Reopened per line; the log is append-only and never read back
            with open(self.log_file, "a", encoding="utf-8") as handle:
                handle.write(line + "\n")

    @staticmethod
    def _format_line(level: str, *messages: str) -> str:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        message = " ".join(str(m) for m in messages)
        message = SecurityValidator.sanitize_for_logging(message)
        return f"[{timestamp}] [{level}] {message}"
