"""devsync — sync local markdown files with dev.to articles."""

__version__ = "0.3.0"
