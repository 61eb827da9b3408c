"""Tests for key-value storage backends."""

import pytest
from promptsmith.core.config import StorageSettings
from promptsmith.core.exceptions import ConfigurationError, StorageError
from promptsmith.storage import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    create_store,
)


class TestMemoryKeyValueStore:
    """Tests for the in-memory store."""

    def test_set_and_get(self):
        """Test storing and reading a value."""
        store = MemoryKeyValueStore()
        store.set("favorites", "[]")
        assert store.get("favorites") == "[]"
        assert store.get("missing") is None

    def test_remove(self):
        """Test removing keys."""
        store = MemoryKeyValueStore()
        store.set("a", "1")
        assert store.remove("a") is True
        assert store.remove("a") is False
        assert store.keys() == []


class TestFileKeyValueStore:
    """Tests for the file-backed store."""

    def test_creates_directory(self, tmp_path):
        """Test that the storage directory is created."""
        target = tmp_path / "nested" / "store"
        FileKeyValueStore(str(target))
        assert target.is_dir()

    def test_persists_across_instances(self, tmp_path):
        """Test that values survive a new store instance."""
        FileKeyValueStore(str(tmp_path)).set("custom-templates", '[{"id": "x"}]')
        store = FileKeyValueStore(str(tmp_path))
        assert store.get("custom-templates") == '[{"id": "x"}]'
        assert (tmp_path / "custom-templates.json").exists()

    def test_unsafe_key_names(self, tmp_path):
        """Test that path separators in keys stay inside the directory."""
        store = FileKeyValueStore(str(tmp_path))
        store.set("a/b", "1")
        assert (tmp_path / "a_b.json").exists()
        assert store.get("a/b") == "1"

    def test_keys_and_remove(self, tmp_path):
        """Test listing and removing keys."""
        store = FileKeyValueStore(str(tmp_path))
        store.set("one", "1")
        store.set("two", "2")
        assert sorted(store.keys()) == ["one", "two"]
        assert store.remove("one") is True
        assert store.remove("one") is False
        assert store.keys() == ["two"]

    def test_write_failure_raises_storage_error(self, tmp_path):
        """Test that OS errors are wrapped."""
        store = FileKeyValueStore(str(tmp_path))
        # A directory where the file should go makes the write fail
        (tmp_path / "blocked.json").mkdir()
        with pytest.raises(StorageError) as exc_info:
            store.set("blocked", "x")
        assert exc_info.value.key == "blocked"
        assert exc_info.value.cause is not None

    def test_remove_failure_raises_storage_error(self, tmp_path):
        """Test that a failed delete is wrapped."""
        store = FileKeyValueStore(str(tmp_path))
        (tmp_path / "blocked.json").mkdir()
        with pytest.raises(StorageError) as exc_info:
            store.remove("blocked")
        assert exc_info.value.key == "blocked"
        assert isinstance(exc_info.value.cause, OSError)


class TestCreateStore:
    """Tests for the store factory."""

    def test_memory_backend(self):
        """Test default backend."""
        assert isinstance(create_store(StorageSettings()), MemoryKeyValueStore)

    def test_file_backend(self, tmp_path):
        """Test file backend."""
        settings = StorageSettings(backend="file", path=str(tmp_path / "data"))
        store = create_store(settings)
        assert isinstance(store, FileKeyValueStore)

    def test_env_selects_backend(self, monkeypatch, tmp_path):
        """Test backend selection from the environment."""
        monkeypatch.setenv("PS_STORAGE_BACKEND", "file")
        monkeypatch.setenv("PS_STORAGE_PATH", str(tmp_path / "env-store"))
        assert isinstance(create_store(), FileKeyValueStore)

    def test_unknown_backend(self):
        """Test unknown backend."""
        with pytest.raises(ConfigurationError):
            create_store(StorageSettings(backend="redis"))
