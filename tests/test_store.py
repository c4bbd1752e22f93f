"""
Tests for the local vocabulary store contract.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from core.errors import DuplicateKeyError, NotFoundError, PersistenceError
from core.store import SEED_ENTRIES
from db.models import VocabularyItem


def _pairs(items):
    return [(i.english, i.japanese) for i in items]


def _failing_commit():
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


class TestQueries:
    def test_list_all_sorted_by_english(self, store):
        for english, japanese in [("dog", "犬"), ("apple", "りんご"), ("cat", "猫")]:
            store.add(english, japanese)
        store.save()

        assert _pairs(store.list_all()) == [("apple", "りんご"), ("cat", "猫"), ("dog", "犬")]

    def test_find_by_english_exact(self, store):
        store.add("dog", "犬")
        store.save()

        assert store.find_by_english("dog").japanese == "犬"
        assert store.find_by_english("Dog") is None
        assert store.find_by_english("do") is None

    def test_search_either_field_case_insensitive(self, store):
        store.add("Dog", "犬")
        store.add("hot dog", "ホットドッグ")
        store.add("cat", "猫")
        store.save()

        assert _pairs(store.search("DOG")) == [("Dog", "犬"), ("hot dog", "ホットドッグ")]
        assert _pairs(store.search("猫")) == [("cat", "猫")]

    def test_empty_search_returns_everything(self, store):
        store.add("dog", "犬")
        store.add("cat", "猫")
        store.save()

        assert len(store.search("  ")) == 2

    def test_count_added_on(self, store):
        store.add("dog", "犬")
        store.insert(VocabularyItem(
            english="old", japanese="古い",
            created_at=datetime.now(timezone.utc) - timedelta(days=3),
        ))
        store.save()

        today = datetime.now(timezone.utc).date()
        assert store.count_added_on(today, tz=timezone.utc) == 1


class TestMutations:
    def test_insert_duplicate_raises(self, store):
        store.add("dog", "犬")
        store.save()

        with pytest.raises(DuplicateKeyError):
            store.add("dog", "いぬ")

    def test_add_generates_id_and_timestamp(self, store):
        item = store.add("dog", "犬")

        assert item.id
        assert item.created_at is not None

    def test_update_japanese(self, store):
        item = store.add("dog", "犬")
        store.save()

        store.update_japanese(item.id, "いぬ")
        store.save()

        assert store.find_by_english("dog").japanese == "いぬ"

    def test_update_missing_id_raises(self, store):
        with pytest.raises(NotFoundError):
            store.update_japanese("no-such-id", "x")

    def test_delete(self, store):
        item = store.add("dog", "犬")
        store.save()

        store.delete(item.id)
        store.save()

        assert store.list_all() == []

    def test_delete_absent_id_is_noop(self, store):
        store.add("dog", "犬")
        store.save()

        store.delete("no-such-id")
        store.save()

        assert store.count() == 1


class TestSave:
    def test_save_failure_raises_and_discards(self, store, monkeypatch):
        monkeypatch.setattr(store.session, "commit", _failing_commit)
        store.add("dog", "犬")

        with pytest.raises(PersistenceError):
            store.save()

        assert store.list_all() == []

    def test_discard_drops_pending(self, store):
        store.add("dog", "犬")
        store.discard()

        assert store.count() == 0

    def test_subscribers_notified_after_save(self, store):
        calls = []
        unsubscribe = store.subscribe(lambda: calls.append(1))

        store.add("dog", "犬")
        store.save()
        unsubscribe()
        store.add("cat", "猫")
        store.save()

        assert calls == [1]

    def test_subscribers_not_notified_on_failure(self, store, monkeypatch):
        calls = []
        store.subscribe(lambda: calls.append(1))
        monkeypatch.setattr(store.session, "commit", _failing_commit)
        store.add("dog", "犬")

        with pytest.raises(PersistenceError):
            store.save()
        assert calls == []


class TestSeeding:
    def test_seed_empty_store(self, store):
        assert store.seed_if_empty() == len(SEED_ENTRIES)
        assert [i.english for i in store.list_all()] == sorted(e for e, _ in SEED_ENTRIES)

    def test_seed_skipped_when_populated(self, store):
        store.add("dog", "犬")
        store.save()

        assert store.seed_if_empty() == 0
        assert store.count() == 1
