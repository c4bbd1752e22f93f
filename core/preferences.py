"""
Eitango – Preferences
======================
Key/value settings persisted next to the vocabulary. Values are JSON-encoded
so booleans and strings round-trip unchanged.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import PersistenceError
from db.models import Preference

log = logging.getLogger(__name__)

SHOW_JAPANESE_FIRST = "show_japanese_first"
DISPLAY_ORDER = "display_order"
LAST_SYNC_AT = "last_sync_at"

DISPLAY_ORDERS = ("english", "newest")


class PreferenceStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, key: str, default: Any = None) -> Any:
        row = self._session.get(Preference, key)
        if row is None:
            return default
        try:
            return json.loads(row.value)
        except ValueError:
            log.warning("Ignoring unreadable preference %s=%r", key, row.value)
            return default

    def stage(self, key: str, value: Any) -> None:
        """Write *value* into the session without committing."""
        encoded = json.dumps(value, ensure_ascii=False)
        row = self._session.get(Preference, key)
        if row is None:
            self._session.add(Preference(key=key, value=encoded))
        else:
            row.value = encoded

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and commit immediately."""
        self.stage(key, value)
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise PersistenceError(f"could not save preference {key}: {exc}") from exc

    # ── Typed accessors ───────────────────────────────────────────────

    @property
    def show_japanese_first(self) -> bool:
        return bool(self.get(SHOW_JAPANESE_FIRST, False))

    @show_japanese_first.setter
    def show_japanese_first(self, value: bool) -> None:
        self.set(SHOW_JAPANESE_FIRST, bool(value))

    @property
    def display_order(self) -> str:
        value = self.get(DISPLAY_ORDER, DISPLAY_ORDERS[0])
        return value if value in DISPLAY_ORDERS else DISPLAY_ORDERS[0]

    @display_order.setter
    def display_order(self, value: str) -> None:
        if value not in DISPLAY_ORDERS:
            raise ValueError(f"display_order must be one of {DISPLAY_ORDERS}, got {value!r}")
        self.set(DISPLAY_ORDER, value)

    @property
    def last_sync_at(self) -> Optional[datetime]:
        raw = self.get(LAST_SYNC_AT)
        if not raw:
            return None
        try:
            value = datetime.fromisoformat(raw)
        except (TypeError, ValueError):
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    @last_sync_at.setter
    def last_sync_at(self, value: datetime) -> None:
        self.set(LAST_SYNC_AT, value.isoformat())

    def stage_last_sync_at(self, value: datetime) -> None:
        """Record the sync time as part of the caller's pending transaction."""
        self.stage(LAST_SYNC_AT, value.isoformat())
