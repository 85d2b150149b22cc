"""
Specification Line Parser.

This module turns a single specification line into a RemoteReference.

Line grammar:
    <reference> [branch:<name>] [path:<subpath>]

Parsing never fails: unknown tokens are dropped and a bad reference only
shows up later, when git tries to clone it.
"""

from dataclasses import dataclass

DEFAULT_HOST = "https://github.com/"

BRANCH_MARKER = "branch:"
PATH_MARKER = "path:"

# References starting with one of these are already complete URLs
URL_PREFIXES: tuple[str, ...] = (
    "http://",
    "https://",
    "git://",
    "ssh://",
    "git@gitlab.com:",
    "git@github.com:",
)


@dataclass(frozen=True)
class RemoteReference:
    """
    A remote repository reference.

    Attributes:
        url: Absolute repository URL (or SSH shorthand)
        branch: Branch to check out, empty for the remote default
        inner: Subpath inside the repository, empty for the root
    """

    url: str
    branch: str = ""
    inner: str = ""


def resolve_url(repo: str) -> str:
    """
    Expand an owner/name shorthand into a full URL.

    Args:
        repo: First token of a specification line

    Returns:
        The token itself when it is already a URL, otherwise the
        shorthand expanded against the default host
    """
    if repo.startswith(URL_PREFIXES):
        return repo
    return DEFAULT_HOST + repo


def parse(line: str) -> RemoteReference:
    """
    Parse a specification line.

    Args:
        line: Specification line, e.g. "ohmyzsh/ohmyzsh path:plugins/aws"

    Returns:
        RemoteReference for the line
    """
    parts = line.split() or [""]
    branch = ""
    inner = ""

    for part in parts[1:]:
        if part.startswith(BRANCH_MARKER):
            branch = part[len(BRANCH_MARKER):]
        elif part.startswith(PATH_MARKER):
            inner = part[len(PATH_MARKER):]

    return RemoteReference(url=resolve_url(parts[0]), branch=branch, inner=inner)
