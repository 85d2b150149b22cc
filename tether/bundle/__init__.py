"""
Tether Bundles - Shell output for materialized projects.

This module handles:
- Bundle kind selection from a line's kind: token
- Snippet rendering (clone, path, zsh)
- Concurrent bundling of many lines
"""

from tether.bundle.bundles import (
    BundleError,
    BundleResult,
    bundle_lines,
    get,
    kind_of,
    read_lines,
    render,
)

__all__ = [
    "BundleError",
    "BundleResult",
    "bundle_lines",
    "get",
    "kind_of",
    "read_lines",
    "render",
]
