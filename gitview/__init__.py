"""Building blocks for a git history viewer: references, command templates and formatting helpers."""

__version__ = "0.1.0"
__all__ = ["inputdialog", "refs", "types", "utils"]