"""
Tests for merging remote snapshots into the local store.
"""

import pytest
from sqlalchemy.exc import OperationalError

from core.errors import FetchError, PersistenceError, SyncFailed, SyncInProgressError
from core.remote import RemoteVocabularyRecord
from core.sync import SyncReconciler, SyncResult, failure_summary, normalize_text


def rec(english, japanese, rid=None):
    return RemoteVocabularyRecord(id=rid or f"r-{english}", english=english, japanese=japanese)


class FakeSource:
    def __init__(self, records=(), error=None):
        self.records = list(records)
        self.error = error
        self.calls = 0

    def fetch_snapshot(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.records)


def _pairs(store):
    return [(i.english, i.japanese) for i in store.list_all()]


@pytest.fixture
def reconciler(store, prefs):
    return SyncReconciler(store, prefs)


class TestNormalizeText:
    def test_strips_whitespace(self):
        assert normalize_text("  dog \n") == "dog"

    def test_absent_is_none(self):
        assert normalize_text(None) is None

    def test_non_string_converted(self):
        assert normalize_text(42) == "42"


class TestReconcile:
    def test_new_entries_on_empty_store(self, reconciler, store):
        result = reconciler.reconcile([rec("cat", "猫"), rec("dog", "犬")])

        assert result == SyncResult(new_count=2, updated_count=0)
        assert _pairs(store) == [("cat", "猫"), ("dog", "犬")]

    def test_existing_entry_updated(self, reconciler, store):
        store.add("dog", "犬")
        store.save()

        result = reconciler.reconcile([rec("dog", "いぬ")])

        assert (result.new_count, result.updated_count) == (0, 1)
        assert store.find_by_english("dog").japanese == "いぬ"

    def test_update_keeps_id_and_created_at(self, reconciler, store):
        original = store.add("dog", "犬")
        store.save()
        entry_id, created = original.id, original.created_at

        reconciler.reconcile([rec("dog", "いぬ")])

        item = store.find_by_english("dog")
        assert item.id == entry_id
        assert item.created_at == created

    def test_second_run_is_noop(self, reconciler):
        snapshot = [rec("apple", "りんご"), rec("cat", "猫"), rec("dog", "犬")]

        first = reconciler.reconcile(snapshot)
        second = reconciler.reconcile(snapshot)

        assert first.new_count == 3
        assert (second.new_count, second.updated_count) == (0, 0)

    def test_second_run_noop_with_duplicates_in_snapshot(self, reconciler, store):
        snapshot = [rec("dog", "犬", "a"), rec("dog", "いぬ", "b")]

        first = reconciler.reconcile(snapshot)
        second = reconciler.reconcile(snapshot)

        assert (first.new_count, first.updated_count) == (1, 0)
        assert (second.new_count, second.updated_count) == (0, 0)
        assert _pairs(store) == [("dog", "いぬ")]

    def test_missing_japanese_skipped(self, reconciler, store):
        result = reconciler.reconcile([rec("dog", None)])

        assert (result.new_count, result.updated_count) == (0, 0)
        assert result.skipped_count == 1
        assert store.count() == 0

    def test_missing_or_blank_english_skipped(self, reconciler, store):
        result = reconciler.reconcile([rec(None, "犬", "x"), rec("   ", "猫", "y")])

        assert result.skipped_count == 2
        assert store.count() == 0

    def test_empty_japanese_is_kept(self, reconciler, store):
        result = reconciler.reconcile([rec("dog", "")])

        assert result.new_count == 1
        assert store.find_by_english("dog").japanese == ""

    def test_fields_normalized_before_matching(self, reconciler, store):
        store.add("dog", "犬")
        store.save()

        result = reconciler.reconcile([rec("  dog ", " 犬 ")])

        assert (result.new_count, result.updated_count) == (0, 0)
        assert _pairs(store) == [("dog", "犬")]

    def test_local_only_entries_untouched(self, reconciler, store):
        store.add("zebra", "シマウマ")
        store.save()

        reconciler.reconcile([rec("cat", "猫")])

        assert _pairs(store) == [("cat", "猫"), ("zebra", "シマウマ")]

    def test_records_last_sync(self, reconciler, prefs):
        assert prefs.last_sync_at is None

        reconciler.reconcile([rec("cat", "猫")])

        assert prefs.last_sync_at is not None

    def test_last_sync_committed_with_entries(self, reconciler, store, prefs, monkeypatch):
        def no_separate_commit(key, value):
            raise PersistenceError("preference commit failed")

        monkeypatch.setattr(prefs, "set", no_separate_commit)

        result = reconciler.reconcile([rec("cat", "猫")])

        assert result.new_count == 1
        assert _pairs(store) == [("cat", "猫")]
        assert prefs.last_sync_at is not None

    def test_snapshot_capped_at_limit(self, store):
        capped = SyncReconciler(store, limit=2)

        result = capped.reconcile([rec("a", "1"), rec("b", "2"), rec("c", "3")])

        assert result.new_count == 2
        assert _pairs(store) == [("a", "1"), ("b", "2")]


class TestSyncFailures:
    def test_fetch_failure_wrapped(self, reconciler, store, prefs):
        source = FakeSource(error=FetchError("timeout"))

        with pytest.raises(SyncFailed) as info:
            reconciler.sync(source)

        assert isinstance(info.value.cause, FetchError)
        assert store.count() == 0
        assert prefs.last_sync_at is None

    def test_save_failure_discards_merge(self, reconciler, store, monkeypatch):
        store.add("dog", "犬")
        store.save()

        def boom():
            raise OperationalError("COMMIT", {}, Exception("database or disk is full"))

        monkeypatch.setattr(store.session, "commit", boom)

        with pytest.raises(SyncFailed) as info:
            reconciler.sync(FakeSource([rec("dog", "いぬ"), rec("cat", "猫")]))

        assert isinstance(info.value.cause, PersistenceError)
        assert _pairs(store) == [("dog", "犬")]

    def test_save_failure_leaves_last_sync_unset(self, reconciler, store, prefs, monkeypatch):
        def boom():
            raise OperationalError("COMMIT", {}, Exception("database or disk is full"))

        monkeypatch.setattr(store.session, "commit", boom)

        with pytest.raises(SyncFailed):
            reconciler.reconcile([rec("cat", "猫")])

        assert prefs.last_sync_at is None

    def test_read_failure_wrapped_and_lock_released(self, reconciler, store, monkeypatch):
        def locked(text):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(store, "find_by_english", locked)

        with pytest.raises(SyncFailed) as info:
            reconciler.reconcile([rec("cat", "猫")])

        assert isinstance(info.value.cause, PersistenceError)
        assert not reconciler.running
        monkeypatch.undo()
        assert store.count() == 0
        assert reconciler.reconcile([rec("cat", "猫")]).new_count == 1

    def test_reentrant_sync_rejected(self, reconciler):
        class ReentrantSource:
            def fetch_snapshot(self):
                return reconciler.sync(FakeSource())

        with pytest.raises(SyncInProgressError):
            reconciler.sync(ReentrantSource())

        assert not reconciler.running

    def test_lock_released_after_failure(self, reconciler, store):
        with pytest.raises(SyncFailed):
            reconciler.sync(FakeSource(error=FetchError("offline")))

        result = reconciler.sync(FakeSource([rec("cat", "猫")]))
        assert result.new_count == 1


class TestSyncSuccess:
    def test_sync_fetches_then_merges(self, reconciler, store):
        source = FakeSource([rec("cat", "猫"), rec("dog", "犬")])

        result = reconciler.sync(source)

        assert source.calls == 1
        assert result.summary() == "Sync complete. New: 2, updated: 0"
        assert store.count() == 2


class TestFailureSummary:
    def test_fetch_message(self):
        message = failure_summary(SyncFailed(FetchError("timed out")))
        assert message.startswith("Could not fetch")
        assert "timed out" in message

    def test_persistence_message(self):
        message = failure_summary(SyncFailed(PersistenceError("disk full")))
        assert message.startswith("Could not save")
