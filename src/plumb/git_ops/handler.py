"""Clone and checkout via the git command line."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """Raised when a git invocation fails or git is not installed."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no output"
        if returncode is None:
            message = f"'{' '.join(command)}' could not be run: {detail}"
        else:
            message = f"'{' '.join(command)}' exited with {returncode}: {detail}"
        super().__init__(message)


class GitHandler:
    """Thin synchronous wrapper around ``git clone`` and ``git checkout``.

    Interrupting a call (Ctrl-C) kills the child process and propagates;
    whatever the child already wrote to disk stays there.
    """

    def __init__(self, git_binary: str = "git", timeout: float | None = None) -> None:
        self.git_binary = git_binary
        self.timeout = timeout

    def clone(self, url: str, destination: Path) -> None:
        """Clone ``url`` into ``destination``."""
        logger.info(f"Cloning {url} into {destination}")
        self._run(["clone", url, str(destination)])

    def checkout(self, revision: str, path: Path) -> None:
        """Check out ``revision`` (tag, branch or commit) in the repo at ``path``."""
        logger.info(f"Checking out {revision} in {path}")
        self._run(["-C", str(path), "checkout", "--quiet", revision])

    def _run(self, args: list[str]) -> str:
        command = [self.git_binary, *args]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise GitCommandError(command, None, f"{self.git_binary} not found") from None
        except subprocess.TimeoutExpired:
            raise GitCommandError(
                command, None, f"timed out after {self.timeout}s"
            ) from None

        if result.returncode != 0:
            logger.debug(f"git stderr: {result.stderr}")
            raise GitCommandError(command, result.returncode, result.stderr)
        return result.stdout
