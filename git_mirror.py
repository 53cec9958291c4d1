#!/usr/bin/env python3
"""Git transport: bare mirror clones and mirror pushes."""

from __future__ import annotations

import os
import subprocess
import tempfile
from typing import List, Optional

from logging_utils import Logger

ASKPASS_USERNAME_VAR = "AU_REVOIR_GIT_USERNAME"
ASKPASS_PASSWORD_VAR = "AU_REVOIR_GIT_PASSWORD"


class GitMirror:
    """Runs git with credentials injected through a GIT_ASKPASS helper."""

    def __init__(self, logger: Logger, git_binary: str = "git") -> None:
        self.logger = logger
        self.git_binary = git_binary

    @staticmethod
    def _create_askpass_script() -> str:
        """Create a temporary askpass script that echoes credentials from the env."""
        fd, path = tempfile.mkstemp(prefix="arb_askpass_", text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as script:
                script.write("#!/bin/sh\n")
                script.write("case \"$1\" in\n")
                script.write(f"  *Username*) printf '%s\\n' \"${ASKPASS_USERNAME_VAR}\" ;;\n")
                script.write(f"  *Password*) printf '%s\\n' \"${ASKPASS_PASSWORD_VAR}\" ;;\n")
                script.write("  *) exit 1 ;;\n")
                script.write("esac\n")
            os.chmod(path, 0o700)
        except Exception:
            os.unlink(path)
            raise
        return path

    def _cleanup_askpass_script(self, path: Optional[str]) -> None:
        """Remove temporary askpass script if it exists."""
        if not path:
            return
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as error:
            self.logger.warn(f"failed to clean up temporary credential helper: {error}")

    def _run_git(
        self,
        args: List[str],
        username: str,
        password: str,
        cwd: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        env = os.environ.copy()
        askpass_script: Optional[str] = None
        try:
            askpass_script = self._create_askpass_script()
            env.update(
                {
                    "GIT_ASKPASS": askpass_script,
                    "GIT_TERMINAL_PROMPT": "0",
                    ASKPASS_USERNAME_VAR: username,
                    ASKPASS_PASSWORD_VAR: password,
                }
            )
            return subprocess.run(
                [self.git_binary, *args],
                cwd=cwd,
                check=True,
                capture_output=True,
                text=True,
                errors="replace",
                env=env,
            )
        finally:
            self._cleanup_askpass_script(askpass_script)

    def clone_bare(
        self, source_url: str, destination: str, username: str, password: str
    ) -> bool:
        """Clone source_url as a bare mirror into destination."""
        try:
            self._run_git(
                ["clone", "--quiet", "--mirror", source_url, destination],
                username,
                password,
            )
        except subprocess.CalledProcessError as e:
            self.logger.error(
                f"git clone failed for {source_url}: {(e.stderr or e.stdout or '').strip()}"
            )
            return False
        except OSError as e:
            self.logger.error(f"failed to run git clone for {source_url}: {e}")
            return False
        return True

    def push_mirror(
        self, repo_dir: str, target_url: str, username: str, password: str
    ) -> bool:
        """Mirror-push every ref of the bare repository in repo_dir to target_url."""
        if not os.path.isdir(repo_dir):
            self.logger.error(f"failed to change directory to {repo_dir}: not a directory")
            return False
        try:
            self._run_git(
                ["push", "--quiet", "--mirror", target_url],
                username,
                password,
                cwd=repo_dir,
            )
        except subprocess.CalledProcessError as e:
            self.logger.error(
                f"git push failed for {target_url}: {(e.stderr or e.stdout or '').strip()}"
            )
            return False
        except OSError as e:
            self.logger.error(f"failed to change directory to {repo_dir}: {e}")
            return False
        return True
