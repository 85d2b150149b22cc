"""
Folder Naming.

This module maps remote repository URLs to filesystem-safe folder names
and back.

Key features:
- Fixed, ordered table of literal replacements
- Encode applies the table top to bottom, decode bottom to top
- Pure functions, no failure mode
"""

# Order matters: markers introduced by an earlier row must never be
# touched by a later one.
_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    (":", "-COLON-"),
    ("/", "-SLASH-"),
    ("@", "-AT-"),
)


def encode(url: str) -> str:
    """
    Convert a repository URL into a folder name.

    Args:
        url: Repository URL

    Returns:
        Folder name safe to use as a single path component
    """
    result = url
    for literal, marker in _REPLACEMENTS:
        result = result.replace(literal, marker)
    return result


def decode(folder_name: str) -> str:
    """
    Convert a folder name produced by encode() back into its URL.

    Names that never went through encode() are decoded on a best-effort
    basis.

    Args:
        folder_name: Folder name

    Returns:
        Repository URL
    """
    result = folder_name
    for literal, marker in reversed(_REPLACEMENTS):
        result = result.replace(marker, literal)
    return result
