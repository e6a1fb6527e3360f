"""TeachAssist: productivity backend for teachers."""

__version__ = "0.1.0"
