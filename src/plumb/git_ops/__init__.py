"""Git subprocess wrappers."""

from .handler import GitCommandError, GitHandler

__all__ = ["GitCommandError", "GitHandler"]
