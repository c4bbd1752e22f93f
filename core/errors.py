"""
Eitango – Error taxonomy
=========================
"""

from __future__ import annotations


class EitangoError(Exception):
    """Base class for every error raised by the core package."""


class FetchError(EitangoError):
    """The remote snapshot could not be fetched (network, timeout, decoding)."""


class PersistenceError(EitangoError):
    """Committing local changes failed."""


class DuplicateKeyError(EitangoError):
    """An entry with the same english text already exists."""

    def __init__(self, english: str) -> None:
        super().__init__(f"entry {english!r} already exists")
        self.english = english


class NotFoundError(EitangoError):
    """No entry with the given id."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"entry {entry_id} not found")
        self.entry_id = entry_id


class SyncFailed(EitangoError):
    """A sync aborted; ``cause`` is the FetchError or PersistenceError."""

    def __init__(self, cause: EitangoError) -> None:
        super().__init__(str(cause))
        self.cause = cause


class SyncInProgressError(EitangoError):
    """Another sync is already running against the same store."""
