"""
Tether - Remote plugin sources materialized on local disk.

This is the main package that exports the public API.
"""

__version__ = "0.1.0"

from tether.project import (
    LockRegistry,
    MaterializeError,
    Project,
    ProjectManager,
    RefreshError,
    RemoteReference,
)

__all__ = [
    "__version__",
    "LockRegistry",
    "MaterializeError",
    "Project",
    "ProjectManager",
    "RefreshError",
    "RemoteReference",
]
