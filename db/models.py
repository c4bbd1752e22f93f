"""
Eitango – SQLAlchemy ORM Models
================================
Defines the data schema: vocabulary items (english/japanese pairs) and
key/value preferences.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# VocabularyItem – one english/japanese pair
# ---------------------------------------------------------------------------
class VocabularyItem(Base):
    __tablename__ = "vocabulary_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    english = Column(Text, nullable=False)          # merge key
    japanese = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("english", name="uq_vocabulary_english"),
    )

    def __repr__(self) -> str:
        return f"<VocabularyItem id={self.id} english={self.english!r} japanese={self.japanese!r}>"


# ---------------------------------------------------------------------------
# Preference – settings screen values and sync bookkeeping
# ---------------------------------------------------------------------------
class Preference(Base):
    __tablename__ = "preferences"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)           # JSON-encoded
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<Preference {self.key}={self.value}>"
