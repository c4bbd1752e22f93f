"""
Eitango – Cloud → local sync
=============================
Merges a remote snapshot into the local store. Remote records are matched to
local entries by their english text; matches get their japanese overwritten,
everything else becomes a new entry. Nothing is ever deleted locally.
"""

from __future__ import annotations

import logging
import threading
from itertools import islice
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.errors import (
    EitangoError,
    FetchError,
    PersistenceError,
    SyncFailed,
    SyncInProgressError,
)
from core.preferences import PreferenceStore
from core.remote import RemoteVocabularyRecord
from core.store import VocabularyStore

log = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    def fetch_snapshot(self) -> Sequence[RemoteVocabularyRecord]: ...


@dataclass(frozen=True)
class SyncResult:
    new_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0

    def summary(self) -> str:
        return f"Sync complete. New: {self.new_count}, updated: {self.updated_count}"


def normalize_text(value: Any) -> Optional[str]:
    """Return the trimmed text of a wire value, or None if the field is absent."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def failure_summary(exc: EitangoError) -> str:
    """One human-readable line for a failed sync."""
    cause = exc.cause if isinstance(exc, SyncFailed) else exc
    if isinstance(cause, FetchError):
        return f"Could not fetch vocabulary from the cloud: {cause}"
    if isinstance(cause, PersistenceError):
        return f"Could not save vocabulary: {cause}"
    if isinstance(cause, SyncInProgressError):
        return "A sync is already running."
    return f"Sync failed: {cause}"


class SyncReconciler:
    """Upsert remote snapshots into one store, one sync at a time."""

    def __init__(
        self,
        store: VocabularyStore,
        preferences: PreferenceStore | None = None,
        *,
        limit: int = settings.FETCH_LIMIT,
    ) -> None:
        self._store = store
        self._preferences = preferences
        self._limit = limit
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def sync(self, source: SnapshotSource) -> SyncResult:
        """Fetch a snapshot from *source* and merge it."""
        self._acquire()
        try:
            try:
                snapshot = source.fetch_snapshot()
            except FetchError as exc:
                log.warning("Sync aborted, fetch failed: %s", exc)
                raise SyncFailed(exc) from exc
            return self._reconcile(snapshot)
        finally:
            self._lock.release()

    def reconcile(self, snapshot: Iterable[RemoteVocabularyRecord]) -> SyncResult:
        """Merge an already-fetched snapshot."""
        self._acquire()
        try:
            return self._reconcile(snapshot)
        finally:
            self._lock.release()

    # ------------------------------------------------------------------

    def _acquire(self) -> None:
        if not self._lock.acquire(blocking=False):
            raise SyncInProgressError("a sync is already running for this store")

    def _reconcile(self, snapshot: Iterable[RemoteVocabularyRecord]) -> SyncResult:
        new_count = updated_count = skipped = 0

        records = list(islice(snapshot, self._limit + 1))
        if len(records) > self._limit:
            log.debug("Snapshot exceeds %d records, ignoring the rest", self._limit)
            records = records[: self._limit]

        # later duplicates of the same english win, keeping first-seen order
        merged: dict[str, str] = {}
        for record in records:
            english = normalize_text(record.english)
            japanese = normalize_text(record.japanese)
            if not english or japanese is None:
                log.debug("Skipping remote record %s: missing field", record.id)
                skipped += 1
                continue
            merged[english] = japanese

        try:
            for english, japanese in merged.items():
                existing = self._store.find_by_english(english)
                if existing is not None:
                    if existing.japanese != japanese:
                        self._store.update_japanese(existing.id, japanese)
                        updated_count += 1
                else:
                    self._store.add(english, japanese)
                    new_count += 1
            if self._preferences is not None:
                self._preferences.stage_last_sync_at(datetime.now(timezone.utc))
        except SQLAlchemyError as exc:
            self._store.discard()
            log.error("Sync aborted, merge failed: %s", exc)
            failure = PersistenceError(f"could not read vocabulary: {exc}")
            raise SyncFailed(failure) from exc
        except Exception:
            # nothing from a half-merged snapshot may be committed later
            self._store.discard()
            raise

        # entries and the sync timestamp commit together
        try:
            self._store.save()
        except PersistenceError as exc:
            log.error("Sync aborted, save failed: %s", exc)
            raise SyncFailed(exc) from exc

        result = SyncResult(new_count, updated_count, skipped)
        log.info(
            "Sync finished: new=%d updated=%d skipped=%d",
            new_count, updated_count, skipped,
        )
        return result
