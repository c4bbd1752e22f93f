"""
Tests for persisted preferences.
"""

from datetime import datetime, timezone

import pytest

from core.preferences import PreferenceStore
from db.models import Preference


class TestDefaults:
    def test_defaults(self, prefs):
        assert prefs.show_japanese_first is False
        assert prefs.display_order == "english"
        assert prefs.last_sync_at is None
        assert prefs.get("missing", "fallback") == "fallback"


class TestRoundTrip:
    def test_show_japanese_first(self, prefs, session):
        prefs.show_japanese_first = True

        assert PreferenceStore(session).show_japanese_first is True

    def test_overwrite_value(self, prefs):
        prefs.set("k", 1)
        prefs.set("k", 2)

        assert prefs.get("k") == 2

    def test_last_sync_at(self, prefs):
        when = datetime(2026, 10, 1, 8, 30, tzinfo=timezone.utc)
        prefs.last_sync_at = when

        assert prefs.last_sync_at == when


class TestStaging:
    def test_stage_waits_for_commit(self, prefs, session):
        prefs.stage("k", "v")
        session.rollback()

        assert prefs.get("k") is None

    def test_stage_last_sync_at(self, prefs, session):
        when = datetime(2026, 10, 1, 8, 30, tzinfo=timezone.utc)
        prefs.stage_last_sync_at(when)
        session.commit()

        assert prefs.last_sync_at == when


class TestValidation:
    def test_display_order_rejects_unknown(self, prefs):
        with pytest.raises(ValueError):
            prefs.display_order = "random"

    def test_unreadable_value_falls_back(self, prefs, session):
        session.add(Preference(key="display_order", value="not json"))
        session.commit()

        assert prefs.display_order == "english"
