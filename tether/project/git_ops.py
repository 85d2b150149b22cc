"""
Git Operations for Project Management.

This module runs the external git executable on behalf of projects.

Key features:
- Single narrow runner interface (args, cwd) -> GitResult
- Non-interactive environment: credential and terminal prompts disabled
- Clone, pull, revision and branch queries built on the runner
"""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from tether.log import get_logger

logger = get_logger(__name__)

# Turns a hung credential prompt into an immediate failure
NON_INTERACTIVE_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_ASKPASS": "0",
    "SSH_ASKPASS": "0",
}


class GitError(Exception):
    """Base exception for git-related errors."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class RevisionQueryError(GitError):
    """Raised when HEAD's revision or branch cannot be read."""

    pass


@dataclass
class GitResult:
    """
    Outcome of a git invocation.

    Attributes:
        args: Arguments passed to git (without the binary)
        returncode: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined output, for diagnostics."""
        return self.stdout + self.stderr


def git_env() -> dict[str, str]:
    """Current environment with interactive prompts disabled."""
    env = os.environ.copy()
    env.update(NON_INTERACTIVE_ENV)
    return env


class GitRunner:
    """
    Runs the git executable.

    Any object with a compatible run() method can stand in for this
    class, which is how tests avoid spawning real processes.
    """

    def __init__(self, binary: str = "git"):
        self.binary = binary

    def run(self, args: list[str], cwd: Path | None = None) -> GitResult:
        """
        Run git with the given arguments.

        Args:
            args: Arguments after the binary name
            cwd: Working directory, None for the current one

        Returns:
            GitResult with exit status and captured output

        Raises:
            GitError: If the git executable cannot be started
        """
        # Execute git with prompts disabled
        try:
            proc = subprocess.run(
                [self.binary, *args],
                cwd=cwd,
                env=git_env(),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitError(f"{self.binary} command not found. Please install git.") from e

        return GitResult(
            args=list(args),
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )


def _check(result: GitResult, message: str) -> GitResult:
    if not result.ok:
        logger.warning(
            "git_command_failed",
            args=result.args,
            returncode=result.returncode,
            output=result.output,
        )
        raise GitError(f"{message} (exit {result.returncode}): {result.output.strip()}", result.output)
    return result


def clone(runner: GitRunner, url: str, folder: Path, branch: str = "") -> None:
    """
    Shallow, recursive clone of a repository.

    Args:
        runner: Git runner
        url: Repository URL
        folder: Destination folder
        branch: Branch to check out, empty for the remote default

    Raises:
        GitError: If git exits non-zero
    """
    # Build clone command
    args = ["clone", "--recursive", "--depth", "1"]
    if branch:
        args.extend(["-b", branch])
    args.extend([url, str(folder)])
    # Execute clone
    _check(runner.run(args), f"git clone failed for {url}")


def pull(runner: GitRunner, folder: Path, branch: str = "") -> None:
    """
    Pull from origin, including submodules.

    Args:
        runner: Git runner
        folder: Existing checkout
        branch: Branch to pull, empty for the tracked one

    Raises:
        GitError: If git exits non-zero
    """
    # Build pull command
    args = ["pull", "--recurse-submodules", "origin"]
    if branch:
        args.append(branch)
    # Execute pull inside the checkout
    _check(runner.run(args, cwd=folder), f"git pull failed for {folder}")


def _query(runner: GitRunner, folder: Path, args: list[str]) -> str:
    result = runner.run(args, cwd=folder)
    if not result.ok:
        raise RevisionQueryError(
            f"git {' '.join(args)} failed in {folder}: {result.stderr.strip()}",
            result.output,
        )
    return result.stdout.strip()


def commit(runner: GitRunner, folder: Path) -> str:
    """
    Short identifier of the checked out commit.

    Raises:
        RevisionQueryError: If git exits non-zero
    """
    return _query(runner, folder, ["rev-parse", "--short", "HEAD"])


def branch(runner: GitRunner, folder: Path) -> str:
    """
    Name of the checked out branch ("HEAD" when detached).

    Raises:
        RevisionQueryError: If git exits non-zero
    """
    return _query(runner, folder, ["rev-parse", "--abbrev-ref", "HEAD"])
