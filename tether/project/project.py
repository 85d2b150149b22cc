"""
Project Abstraction.

A project is a remote repository reference materialized under a home
directory.

Key features:
- Deterministic folder per URL (see tether.project.folder)
- Two constructors: fresh from a spec line, rehydrated from a folder name
- Idempotent, per-folder serialized download
- Update with revision change reporting
"""

from dataclasses import dataclass
from pathlib import Path

from tether.log import get_logger
from tether.project import folder as folder_codec
from tether.project import git_ops
from tether.project.git_ops import GitError, GitRunner
from tether.project.locks import LockRegistry
from tether.project.spec import RemoteReference, parse

logger = get_logger(__name__)

# What `git rev-parse --abbrev-ref HEAD` prints for a detached HEAD
DETACHED_HEAD = "HEAD"


class ProjectError(Exception):
    """Base exception for project-related errors."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class MaterializeError(ProjectError):
    """Raised when a project cannot be cloned."""

    pass


class RefreshError(ProjectError):
    """Raised when a project cannot be updated."""

    pass


@dataclass(frozen=True)
class Revision:
    """
    Revisions seen before and after an update.

    Attributes:
        old: Short commit id before pulling
        new: Short commit id after pulling
    """

    old: str
    new: str

    @property
    def changed(self) -> bool:
        return self.old != self.new


@dataclass(frozen=True)
class Project:
    """
    A remote repository and its local folder.

    Attributes:
        reference: Remote reference (url, branch, inner path)
        folder: Local checkout folder, home / encode(url)
    """

    reference: RemoteReference
    folder: Path

    @classmethod
    def from_line(cls, home: Path, line: str) -> "Project":
        """
        Build a project from a specification line.

        Args:
            home: Directory holding all checkouts
            line: Specification line

        Returns:
            Project whose folder may not exist yet
        """
        reference = parse(line)
        return cls.from_reference(home, reference)

    @classmethod
    def from_reference(cls, home: Path, reference: RemoteReference) -> "Project":
        """Build a project for an already parsed reference."""
        return cls(
            reference=reference,
            folder=Path(home) / folder_codec.encode(reference.url),
        )

    @classmethod
    def from_folder(
        cls,
        home: Path,
        folder_name: str,
        runner: GitRunner | None = None,
    ) -> "Project":
        """
        Rebuild a project from an existing checkout folder.

        The URL is decoded from the folder name and the branch is read
        from the checkout. A failed or detached branch lookup leaves the
        branch empty.

        Args:
            home: Directory holding all checkouts
            folder_name: Name of the checkout folder inside home
            runner: Git runner used for the branch lookup

        Returns:
            Rehydrated project
        """
        runner = runner or GitRunner()
        path = Path(home) / folder_name

        try:
            current = git_ops.branch(runner, path)
        except GitError as e:
            logger.debug("rehydrate_branch_unknown", folder=str(path), error=str(e))
            current = ""
        if current == DETACHED_HEAD:
            current = ""

        reference = RemoteReference(url=folder_codec.decode(folder_name), branch=current)
        return cls(reference=reference, folder=path)

    @property
    def url(self) -> str:
        return self.reference.url

    @property
    def branch(self) -> str:
        return self.reference.branch

    def download(self, locks: LockRegistry, runner: GitRunner | None = None) -> None:
        """
        Clone the project unless its folder already exists.

        Holds the folder's lock for the whole operation, so concurrent
        downloads of the same folder clone once. A folder left behind by
        a failed clone is treated as already downloaded.

        Args:
            locks: Lock registry shared by the run
            runner: Git runner

        Raises:
            MaterializeError: If git clone fails
        """
        runner = runner or GitRunner()
        with locks.acquire(self.folder):
            if self.folder.exists():
                return
            try:
                git_ops.clone(runner, self.url, self.folder, self.branch)
            except GitError as e:
                raise MaterializeError(
                    f"Failed to clone {self.url}: {e}", e.output
                ) from e
            logger.info("project_cloned", url=self.url, folder=str(self.folder))

    def update(self, runner: GitRunner | None = None) -> Revision:
        """
        Pull the latest changes into an existing checkout.

        Does not take the folder lock.

        Args:
            runner: Git runner

        Returns:
            Revision before and after the pull

        Raises:
            RefreshError: If the folder is missing or git pull fails
            RevisionQueryError: If HEAD cannot be read
        """
        runner = runner or GitRunner()
        if not self.folder.exists():
            raise RefreshError(f"{self.url} is not present at {self.folder}, nothing to update")

        logger.debug("project_updating", url=self.url)
        old = git_ops.commit(runner, self.folder)
        try:
            git_ops.pull(runner, self.folder, self.branch)
        except GitError as e:
            raise RefreshError(f"Failed to update {self.url}: {e}", e.output) from e
        new = git_ops.commit(runner, self.folder)

        revision = Revision(old=old, new=new)
        if revision.changed:
            logger.info("project_updated", url=self.url, old=old, new=new)
        else:
            logger.debug("project_unchanged", url=self.url, revision=new)
        return revision

    def path(self) -> Path:
        """Folder joined with the inner path, existence not checked."""
        if self.reference.inner:
            return self.folder / self.reference.inner
        return self.folder
