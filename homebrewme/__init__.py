"""
homebrewme - move manually installed macOS apps under Homebrew

Scans /Applications, finds the matching Homebrew cask for each app,
compares versions and, once confirmed, swaps the manual install for the
cask-managed one.
"""

__version__ = "1.0.0"
