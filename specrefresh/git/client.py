"""Git clone/commit/push capability."""

from __future__ import annotations

import base64
import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable

from ..errors import CloneFailed, PushFailed
from ..logging import get_logger
from ..paths import make_temp_directory


class GitClient:
    """Wraps the git CLI for the clone and publish steps of a refresh run."""

    def __init__(self, runner: Callable[..., str] | None = None, executable: str = "git") -> None:
        self._runner = runner or self._default_runner
        self.executable = executable
        self.logger = get_logger("git")

    def clone_to_temp_directory(self, url: str) -> Path:
        """Clone ``url`` into a new uniquely named temp directory and return it."""
        destination = make_temp_directory(prefix="specrefresh-clone-")
        self.logger.info("Cloning %s into %s", url, destination)
        try:
            self._run(
                [self.executable, "clone", url, str(destination)],
                cwd=destination.parent,
            )
        except (subprocess.CalledProcessError, OSError) as exc:
            raise CloneFailed(
                f"Failed to clone {url}",
                exit_code=getattr(exc, "returncode", None),
                stderr=_stderr_of(exc),
            ) from exc
        return destination

    def commit_and_push(
        self,
        repo_path: Path | str,
        message: str,
        token: str,
        author_name: str,
        author_email: str,
    ) -> bool:
        """Commit every change in ``repo_path`` and push it; False when nothing changed."""
        repo = Path(repo_path)
        try:
            self._run([self.executable, "add", "--all"], cwd=repo)
            status = self._run(
                [self.executable, "status", "--porcelain"], cwd=repo, capture_output=True
            )
            if not status.strip():
                self.logger.info("No changes detected in %s; skipping commit", repo)
                return False

            env = os.environ.copy()
            env["GIT_AUTHOR_NAME"] = author_name
            env["GIT_AUTHOR_EMAIL"] = author_email
            env["GIT_COMMITTER_NAME"] = author_name
            env["GIT_COMMITTER_EMAIL"] = author_email
            self._run([self.executable, "commit", "-m", message], cwd=repo, env=env)

            self._run(
                [self.executable, "push", "origin", "HEAD"],
                cwd=repo,
                env=credential_env(token, os.environ.copy()),
            )
        except (subprocess.CalledProcessError, OSError) as exc:
            # The cause carries the environment and argv of the failed call.
            raise PushFailed(
                f"Failed to publish changes from {repo}",
                exit_code=getattr(exc, "returncode", None),
                stderr=_scrub(_stderr_of(exc), token),
            ) from None

        self.logger.info("Pushed changes from %s", repo)
        return True

    # ------------------------------------------------------------------
    # Helpers

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        return self._runner(args, cwd=cwd, env=env, capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=True,
            text=True,
            capture_output=capture_output,
        )
        if capture_output:
            return completed.stdout
        return ""


def credential_env(token: str, env: dict[str, str]) -> dict[str, str]:
    """Add an HTTP authorization header for ``token`` to a git process environment.

    The header travels through git's environment config so the token never
    appears in the command line.
    """
    count = int(env.get("GIT_CONFIG_COUNT", "0") or "0")
    env["GIT_CONFIG_COUNT"] = str(count + 1)
    env[f"GIT_CONFIG_KEY_{count}"] = "http.extraheader"
    env[f"GIT_CONFIG_VALUE_{count}"] = f"AUTHORIZATION: basic {basic_credential(token)}"
    return env


def basic_credential(token: str) -> str:
    return base64.b64encode(f"x-access-token:{token}".encode("utf-8")).decode("ascii")


def _scrub(text: str, token: str) -> str:
    if not token:
        return text
    return text.replace(token, "***").replace(basic_credential(token), "***")


def _stderr_of(exc: BaseException) -> str:
    stderr = getattr(exc, "stderr", None)
    if isinstance(stderr, bytes):
        return stderr.decode("utf-8", errors="ignore")
    return stderr or str(exc)


__all__ = ["GitClient", "credential_env"]
