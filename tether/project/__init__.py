"""
Tether Project Layer - Remote repositories materialized on local disk.

This module handles:
- Specification line parsing
- URL <-> folder name mapping
- Per-folder locking of clones
- Git clone/pull/revision queries
- Project download, update and path
"""

from tether.project.folder import decode, encode
from tether.project.git_ops import GitError, GitResult, GitRunner, RevisionQueryError
from tether.project.locks import LockRegistry
from tether.project.manager import ProjectManager
from tether.project.project import (
    MaterializeError,
    Project,
    ProjectError,
    RefreshError,
    Revision,
)
from tether.project.spec import RemoteReference, parse

__all__ = [
    "GitError",
    "GitResult",
    "GitRunner",
    "LockRegistry",
    "MaterializeError",
    "Project",
    "ProjectError",
    "ProjectManager",
    "RefreshError",
    "RemoteReference",
    "Revision",
    "RevisionQueryError",
    "decode",
    "encode",
    "parse",
]
