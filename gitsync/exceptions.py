"""Exceptions related to gitsync."""

__all__ = [
    "GitSyncException",
    "InputException",
]


class GitSyncException(Exception):
    """Generic base exception used for this library."""


class InputException(GitSyncException):
    """Raised when the input documents or values are not formatted as expected."""
