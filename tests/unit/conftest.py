"""Shared fixtures: a fake git runner that never spawns processes."""

import threading
import time
from pathlib import Path

import pytest

from tether.project import GitResult, LockRegistry


class FakeGitRunner:
    """
    Stand-in for GitRunner.

    clone creates the destination folder, pull moves HEAD to the next
    queued revision, rev-parse answers from in-memory tables.
    """

    def __init__(self):
        self.calls: list[tuple[list[str], Path | None]] = []
        self.failing_urls: set[str] = set()
        self.partial_on_failure = False
        self.clone_delay = 0.0
        self.pull_fails = False
        self.heads: dict[Path, list[str]] = {}
        self.branches: dict[Path, str] = {}
        self._lock = threading.Lock()

    def commands(self, name: str) -> list[list[str]]:
        with self._lock:
            return [args for args, _ in self.calls if args[0] == name]

    def run(self, args, cwd=None):
        with self._lock:
            self.calls.append((list(args), cwd))

        command = args[0]
        if command == "clone":
            return self._clone(args)
        if command == "pull":
            return self._pull(args, cwd)
        if command == "rev-parse":
            return self._rev_parse(args, cwd)
        return GitResult(args=list(args), returncode=1, stderr=f"unsupported: {command}\n")

    def _clone(self, args):
        url, dest = args[-2], Path(args[-1])
        if self.clone_delay:
            time.sleep(self.clone_delay)
        if url in self.failing_urls:
            if self.partial_on_failure:
                dest.mkdir(parents=True)
            return GitResult(
                args=list(args),
                returncode=128,
                stderr=f"fatal: repository '{url}' not found\n",
            )
        dest.mkdir(parents=True)
        if "-b" in args:
            self.branches[dest] = args[args.index("-b") + 1]
        else:
            self.branches.setdefault(dest, "master")
        self.heads.setdefault(dest, ["abc1234"])
        return GitResult(args=list(args), returncode=0, stderr="Cloning into...\n")

    def _pull(self, args, cwd):
        if self.pull_fails:
            return GitResult(
                args=list(args),
                returncode=1,
                stdout="",
                stderr="fatal: couldn't find remote ref\n",
            )
        heads = self.heads.setdefault(Path(cwd), ["abc1234"])
        if len(heads) > 1:
            heads.pop(0)
        return GitResult(args=list(args), returncode=0, stdout="Already up to date.\n")

    def _rev_parse(self, args, cwd):
        folder = Path(cwd)
        if "--abbrev-ref" in args:
            if folder not in self.branches:
                return GitResult(
                    args=list(args), returncode=128, stderr="fatal: not a git repository\n"
                )
            return GitResult(args=list(args), returncode=0, stdout=self.branches[folder] + "\n")

        heads = self.heads.get(folder)
        if not heads:
            return GitResult(
                args=list(args), returncode=128, stderr="fatal: not a git repository\n"
            )
        return GitResult(args=list(args), returncode=0, stdout=heads[0] + "\n")


@pytest.fixture
def runner() -> FakeGitRunner:
    return FakeGitRunner()


@pytest.fixture
def locks() -> LockRegistry:
    return LockRegistry()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path.resolve()
