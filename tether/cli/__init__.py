"""
Tether CLI - Command-line front end.

Usage:
    tether bundle [LINE ...]     Download lines (or stdin) and print shell snippets
    tether update                Update every downloaded project
    tether path LINE             Print a line's local path
    tether list                  List downloaded projects
    tether home                  Print the checkout home
    tether init-config           Write a default config file
"""

__all__ = []
