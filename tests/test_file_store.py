"""Tests for FileStore.

Covers atomic writes, non-overwriting copies, deletes, and the refusal
to modify files under the bundle root.
"""

import pytest
from unittest.mock import patch

from plistkeeper.core.errors import SettingsIOError
from plistkeeper.core.file_store import FileStore


class TestFileStore:
    """Tests for FileStore operations."""

    def _make_store(self, tmp_path):
        return FileStore(tmp_path / "cache", tmp_path / "bundle")

    def test_write_creates_parents_and_reads_back(self, tmp_path):
        store = self._make_store(tmp_path)
        target = tmp_path / "cache" / "nested" / "A.plist"

        store.write(target, b"payload")

        assert store.exists(target)
        assert store.read(target) == b"payload"

    def test_write_leaves_no_temp_file(self, tmp_path):
        store = self._make_store(tmp_path)
        store.write(tmp_path / "cache" / "A.plist", b"x")
        assert sorted(p.name for p in (tmp_path / "cache").iterdir()) == ["A.plist"]

    def test_write_failure_cleans_up(self, tmp_path):
        store = self._make_store(tmp_path)
        target = tmp_path / "cache" / "A.plist"

        with patch("plistkeeper.core.file_store.os.replace", side_effect=OSError("boom")):
            with pytest.raises(SettingsIOError, match="Failed to write"):
                store.write(target, b"x")

        assert not target.exists()
        assert not (tmp_path / "cache" / "A.plist.tmp").exists()

    def test_exists_is_false_for_directories(self, tmp_path):
        store = self._make_store(tmp_path)
        (tmp_path / "cache" / "A.plist").mkdir(parents=True)
        assert store.exists(tmp_path / "cache" / "A.plist") is False

    def test_read_missing_file(self, tmp_path):
        store = self._make_store(tmp_path)
        with pytest.raises(SettingsIOError):
            store.read(tmp_path / "cache" / "missing.plist")

    def test_copy(self, tmp_path):
        store = self._make_store(tmp_path)
        source = tmp_path / "bundle" / "A.plist"
        source.parent.mkdir()
        source.write_bytes(b"template")

        store.copy(source, tmp_path / "cache" / "A.plist")

        assert (tmp_path / "cache" / "A.plist").read_bytes() == b"template"

    def test_copy_never_overwrites(self, tmp_path):
        store = self._make_store(tmp_path)
        store.write(tmp_path / "cache" / "A.plist", b"new")
        store.write(tmp_path / "cache" / "A.plist.init", b"old")

        with pytest.raises(SettingsIOError, match="already exists"):
            store.copy(tmp_path / "cache" / "A.plist", tmp_path / "cache" / "A.plist.init")

        assert (tmp_path / "cache" / "A.plist.init").read_bytes() == b"old"

    def test_copy_missing_source(self, tmp_path):
        store = self._make_store(tmp_path)
        with pytest.raises(SettingsIOError, match="does not exist"):
            store.copy(tmp_path / "cache" / "A.plist.init", tmp_path / "cache" / "A.plist")

    def test_delete(self, tmp_path):
        store = self._make_store(tmp_path)
        target = tmp_path / "cache" / "A.plist"
        store.write(target, b"x")

        store.delete(target)

        assert not target.exists()
        with pytest.raises(SettingsIOError, match="does not exist"):
            store.delete(target)

    def test_bundle_root_is_read_only(self, tmp_path):
        store = self._make_store(tmp_path)
        template = tmp_path / "bundle" / "A.plist"
        template.parent.mkdir()
        template.write_bytes(b"template")

        with pytest.raises(SettingsIOError, match="Refusing"):
            store.write(template, b"changed")
        with pytest.raises(SettingsIOError, match="Refusing"):
            store.delete(template)
        with pytest.raises(SettingsIOError, match="Refusing"):
            store.copy(tmp_path / "other", template)

        assert template.read_bytes() == b"template"

    def test_shared_root_stays_writable(self, tmp_path):
        store = FileStore(tmp_path, tmp_path)
        store.write(tmp_path / "A.plist", b"x")
        assert store.read(tmp_path / "A.plist") == b"x"

    def test_default_roots_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLISTKEEPER_CACHE_DIR", str(tmp_path / "c"))
        monkeypatch.setenv("PLISTKEEPER_BUNDLE_DIR", str(tmp_path / "b"))

        store = FileStore.default()

        assert store.cache_root == tmp_path / "c"
        assert store.bundle_root == tmp_path / "b"
