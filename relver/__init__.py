"""Release and version automation over git history and JSON version files."""

__version__ = "0.1.0"
