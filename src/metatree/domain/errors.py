from __future__ import annotations

"""
Domain Error Taxonomy.

Separates internal contract failures of the tree index (programming errors
that must surface immediately) from recoverable input problems raised while
loading entry manifests from disk.
"""

# -----------------------------------------------------------------------------
# CONTRACT FAILURES
# -----------------------------------------------------------------------------

class ContractViolation(AssertionError):
    """
    Raised when a precondition of the tree index is broken.

    Signals an internal bug (e.g. querying a directory path that was never
    produced by the index), never bad user input.
    """


class DuplicatePathError(ContractViolation):
    """Raised when two entries of the same storage share a path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Duplicate entry path in storage: '{path}'")
        self.path = path

# -----------------------------------------------------------------------------
# INPUT FAILURES
# -----------------------------------------------------------------------------

class ManifestError(ValueError):
    """Raised when a manifest or verification status file is malformed."""
