"""
Eitango – Local vocabulary store
=================================
Thin wrapper around a SQLAlchemy session that exposes the vocabulary
operations used by the list screen, the quiz and the sync reconciler.

Mutations are staged in the session and only become durable on ``save()``,
so a caller can batch several changes into one logical operation.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import DuplicateKeyError, NotFoundError, PersistenceError
from db.models import VocabularyItem

log = logging.getLogger(__name__)

SEED_ENTRIES = [
    ("dog", "犬"),
    ("cat", "猫"),
    ("apple", "りんご"),
    ("computer", "コンピューター"),
    ("school trip", "課外活動"),
    ("make a shift", "シフトの作成"),
]


class VocabularyStore:
    """Query and mutate the vocabulary table through one session."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._listeners: List[Callable[[], None]] = []

    @property
    def session(self) -> Session:
        return self._session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> List[VocabularyItem]:
        """Every entry, ascending by english, then by id."""
        return (
            self._session.query(VocabularyItem)
            .order_by(VocabularyItem.english.asc(), VocabularyItem.id.asc())
            .all()
        )

    def find_by_english(self, text: str) -> Optional[VocabularyItem]:
        return (
            self._session.query(VocabularyItem)
            .filter(VocabularyItem.english == text)
            .first()
        )

    def get(self, entry_id: str) -> Optional[VocabularyItem]:
        return self._session.get(VocabularyItem, entry_id)

    def search(self, text: str) -> List[VocabularyItem]:
        """Case-insensitive substring match on either field."""
        needle = (text or "").strip().lower()
        if not needle:
            return self.list_all()
        pattern = f"%{needle}%"
        return (
            self._session.query(VocabularyItem)
            .filter(or_(
                func.lower(VocabularyItem.english).like(pattern),
                func.lower(VocabularyItem.japanese).like(pattern),
            ))
            .order_by(VocabularyItem.english.asc(), VocabularyItem.id.asc())
            .all()
        )

    def count(self) -> int:
        return self._session.query(VocabularyItem).count()

    def count_added_on(self, day: date, tz=None) -> int:
        """Number of entries whose created_at falls on *day* in *tz* (local by default)."""
        tz = tz or datetime.now().astimezone().tzinfo
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = start + timedelta(days=1)
        return sum(
            1 for item in self.list_all()
            if start <= _aware(item.created_at) < end
        )

    # ------------------------------------------------------------------
    # Mutations (staged until save())
    # ------------------------------------------------------------------

    def insert(self, entry: VocabularyItem) -> VocabularyItem:
        if self.find_by_english(entry.english) is not None:
            raise DuplicateKeyError(entry.english)
        if entry.id is None:
            entry.id = str(uuid.uuid4())
        if entry.created_at is None:
            entry.created_at = datetime.now(timezone.utc)
        if entry.japanese is None:
            entry.japanese = ""
        self._session.add(entry)
        return entry

    def add(self, english: str, japanese: str = "") -> VocabularyItem:
        """Build a new entry with a fresh id and insert it."""
        return self.insert(VocabularyItem(
            id=str(uuid.uuid4()),
            english=english,
            japanese=japanese,
            created_at=datetime.now(timezone.utc),
        ))

    def update_japanese(self, entry_id: str, new_japanese: str) -> VocabularyItem:
        item = self.get(entry_id)
        if item is None:
            raise NotFoundError(entry_id)
        item.japanese = new_japanese
        return item

    def delete(self, entry_id: str) -> None:
        item = self.get(entry_id)
        if item is None:
            return
        self._session.delete(item)

    # ------------------------------------------------------------------
    # Transaction control
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Commit staged mutations; roll them back on failure."""
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            log.error("Commit failed: %s", exc)
            raise PersistenceError(f"could not save vocabulary: {exc}") from exc
        self._notify()

    def discard(self) -> None:
        self._session.rollback()

    def seed_if_empty(self) -> int:
        """Populate an empty store with the example entries. Returns how many."""
        if self.count() > 0:
            return 0
        for english, japanese in SEED_ENTRIES:
            self.add(english, japanese)
        self.save()
        log.info("Seeded %d example entries", len(SEED_ENTRIES))
        return len(SEED_ENTRIES)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call *callback* after every successful save. Returns an unsubscriber."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
