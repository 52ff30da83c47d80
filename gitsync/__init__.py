"""
gitsync tracks the observed synchronization state of GitSync resources.

A GitSync mirrors a path in a Git repository into a cluster and namespace. The
reconciler that drives syncing reports its progress through the status: a
lifecycle phase plus an ordered set of typed conditions.
"""

__all__ = [
    "conditions",
    "context",
    "exceptions",
    "manifest",
    "status",
]
