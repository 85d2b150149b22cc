"""
Bundles - Shell snippets for materialized projects.

A bundle downloads a project and renders what a shell needs to use it.

Kinds:
- clone: download only, empty snippet
- path: export the project path on $PATH
- zsh: source the project's zsh/sh files (default)
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from tether.project.git_ops import GitError
from tether.project.manager import ProjectManager
from tether.project.project import Project, ProjectError

KIND_MARKER = "kind:"
DEFAULT_KIND = "zsh"

# First glob with any match wins
ZSH_GLOBS = ("*.plugin.zsh", "*.zsh", "*.sh", "*.zsh-theme")


class BundleError(Exception):
    """Base exception for bundle-related errors."""

    pass


def _clone(project: Project) -> str:
    return ""


def _path(project: Project) -> str:
    return f'export PATH="{project.path()}:$PATH"'


def _zsh(project: Project) -> str:
    path = project.path()
    if path.is_file():
        return f'source "{path}"'

    for pattern in ZSH_GLOBS:
        files = sorted(path.glob(pattern))
        if files:
            return "\n".join(f'source "{file}"' for file in files)
    return ""


_RENDERERS = {
    "clone": _clone,
    "path": _path,
    "zsh": _zsh,
}


def kind_of(line: str) -> str:
    """Bundle kind named by a line's kind: token (last one wins)."""
    kind = DEFAULT_KIND
    for part in line.split()[1:]:
        if part.startswith(KIND_MARKER):
            kind = part[len(KIND_MARKER):]
    return kind


@dataclass
class BundleResult:
    """
    Outcome of bundling one line.

    Attributes:
        line: Specification line
        snippet: Rendered shell snippet (empty on error)
        error: Error raised while bundling, None on success
    """

    line: str
    snippet: str = ""
    error: Exception | None = None


def get(manager: ProjectManager, line: str) -> str:
    """
    Download a line's project and render its snippet.

    Args:
        manager: Project manager for the run
        line: Specification line, optionally with a kind: token

    Returns:
        Shell snippet

    Raises:
        BundleError: If the kind is unknown
        MaterializeError: If the download fails
    """
    kind = kind_of(line)
    renderer = _RENDERERS.get(kind)
    if renderer is None:
        raise BundleError(f"Unknown bundle kind: {kind}")

    project = manager.materialize(line)
    return renderer(project)


def read_lines(lines: Iterable[str]) -> list[str]:
    """Strip lines and drop blanks and # comments."""
    result = []
    for raw in lines:
        line = raw.strip()
        if line and not line.startswith("#"):
            result.append(line)
    return result


def bundle_lines(
    manager: ProjectManager,
    lines: Iterable[str],
    parallelism: int = 1,
) -> list[BundleResult]:
    """
    Bundle many lines concurrently.

    Args:
        manager: Project manager for the run
        lines: Raw specification lines
        parallelism: Maximum number of concurrent downloads

    Returns:
        One BundleResult per non-blank line, in input order
    """

    def _bundle(line: str) -> BundleResult:
        try:
            return BundleResult(line=line, snippet=get(manager, line))
        except (BundleError, ProjectError, GitError) as e:
            return BundleResult(line=line, error=e)

    with ThreadPoolExecutor(max_workers=max(1, parallelism)) as pool:
        return list(pool.map(_bundle, read_lines(lines)))


def render(results: Iterable[BundleResult]) -> str:
    """Join the snippets of successful results."""
    return "\n".join(r.snippet for r in results if r.error is None and r.snippet)
