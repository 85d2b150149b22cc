"""
Project Manager.

This module owns the state shared by every project operation in a run.

Key features:
- One lock registry and one git runner per run
- Materialize projects from specification lines
- Discover (rehydrate) existing checkouts under home
- Concurrent update of every checkout with per-project outcomes
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from tether.log import get_logger
from tether.project.git_ops import GitError, GitRunner
from tether.project.locks import LockRegistry
from tether.project.project import Project, ProjectError, Revision

logger = get_logger(__name__)


class ProjectManager:
    """
    Entry point to the project layer for a single run.

    Example:
        manager = ProjectManager(Path("~/.cache/tether").expanduser())
        project = manager.materialize("ohmyzsh/ohmyzsh path:plugins/aws")
        print(project.path())
    """

    def __init__(
        self,
        home: Path,
        runner: GitRunner | None = None,
        locks: LockRegistry | None = None,
    ):
        """
        Initialize ProjectManager.

        Args:
            home: Directory holding all checkouts
            runner: Git runner (default: GitRunner())
            locks: Lock registry (default: a fresh one)
        """
        self.home = Path(home).expanduser().resolve()
        self.runner = runner or GitRunner()
        self.locks = locks or LockRegistry()

    def project(self, line: str) -> Project:
        """Parse a specification line into a project under home."""
        return Project.from_line(self.home, line)

    def materialize(self, line: str) -> Project:
        """
        Parse a line and download its project.

        Args:
            line: Specification line

        Returns:
            The downloaded project

        Raises:
            MaterializeError: If the clone fails
        """
        project = self.project(line)
        project.download(self.locks, self.runner)
        return project

    def discover(self) -> list[Project]:
        """
        Rehydrate every checkout under home.

        Returns:
            Projects sorted by folder name, empty if home does not exist
        """
        if not self.home.is_dir():
            return []

        return [
            Project.from_folder(self.home, entry.name, self.runner)
            for entry in sorted(self.home.iterdir())
            if entry.is_dir()
        ]

    def update_all(
        self, parallelism: int = 1
    ) -> list[tuple[Project, Revision | Exception]]:
        """
        Update every discovered checkout.

        Failures do not stop other updates; each project is paired with
        either its Revision or the error it raised.

        Args:
            parallelism: Maximum number of concurrent updates

        Returns:
            (project, outcome) pairs in discovery order
        """
        projects = self.discover()

        def _update(project: Project) -> Revision | Exception:
            try:
                return project.update(self.runner)
            except (ProjectError, GitError) as e:
                logger.warning("project_update_failed", url=project.url, error=str(e))
                return e

        with ThreadPoolExecutor(max_workers=max(1, parallelism)) as pool:
            outcomes = list(pool.map(_update, projects))

        return list(zip(projects, outcomes, strict=True))
