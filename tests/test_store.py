import json
from pathlib import Path

import pytest

from civic_sense.store import JsonStore, StoreError


@pytest.mark.unit
class TestJsonStore:
    def test_missing_collection_is_empty_and_not_created(self, data_dir: Path):
        store = JsonStore("posts")

        assert store.load_all() == []
        assert not store.path.exists()

    def test_replace_all_then_load_all(self, data_dir: Path):
        # Arrange
        store = JsonStore("posts")
        records = [{"id": "p1", "title": "Pothole on 5th Cross"}]

        # Act
        store.replace_all(records)

        # Assert
        assert store.path == data_dir / "posts.json"
        assert store.load_all() == records
        assert [p.name for p in data_dir.iterdir()] == ["posts.json"]

    def test_corrupt_collection_raises(self, data_dir: Path):
        # Arrange
        data_dir.mkdir(parents=True)
        (data_dir / "posts.json").write_text("{not json")

        # Act & Assert
        with pytest.raises(StoreError, match="Corrupt posts data"):
            JsonStore("posts").load_all()

    def test_non_array_collection_raises(self, data_dir: Path):
        data_dir.mkdir(parents=True)
        (data_dir / "posts.json").write_text(json.dumps({"id": "p1"}))

        with pytest.raises(StoreError):
            JsonStore("posts").load_all()

    def test_append_and_prepend_keep_order(self):
        # Arrange
        store = JsonStore("news")

        # Act
        store.append({"id": "a"})
        store.append({"id": "b"})
        store.prepend({"id": "c"})

        # Assert
        assert [record["id"] for record in store.load_all()] == ["c", "a", "b"]
        assert not store.lock_path.exists()

    def test_mutate_does_not_write_when_change_raises(self):
        # Arrange
        store = JsonStore("posts")
        store.replace_all([{"id": "p1", "likes": 0}])
        before = store.path.read_text()

        def change(records):
            records[0]["likes"] = 99
            raise LookupError("nope")

        # Act
        with pytest.raises(LookupError):
            store.mutate(change)

        # Assert
        assert store.path.read_text() == before
        assert not store.lock_path.exists()

    def test_find(self):
        store = JsonStore("posts")
        store.replace_all([{"id": "p1"}, {"id": "p2", "title": "Streetlights"}])

        assert store.find("p2") == {"id": "p2", "title": "Streetlights"}
        assert store.find("p3") is None
