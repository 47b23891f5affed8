from __future__ import annotations

import os

import pytest

from quiz_author.bank.errors import StorageError
from quiz_author.bank.storage import FileStorage, MemoryStorage


def test_memory_storage_get_and_set():
    storage = MemoryStorage({"questions": "[]"})

    assert storage.get_item("questions") == "[]"
    assert storage.get_item("quizzes") is None
    storage.set_item("quizzes", "[1]")
    assert storage.get_item("quizzes") == "[1]"
    assert sorted(storage.keys()) == ["questions", "quizzes"]


def test_file_storage_missing_key_returns_none(tmp_path):
    storage = FileStorage(tmp_path / "bank")

    assert storage.get_item("questions") is None


def test_file_storage_writes_json_file(tmp_path):
    storage = FileStorage(tmp_path / "bank")

    storage.set_item("questions", '[{"id": "q1"}]')

    path = tmp_path / "bank" / "questions.json"
    assert storage.path_for("questions") == path
    assert path.read_text(encoding="utf-8") == '[{"id": "q1"}]'
    assert path.stat().st_mode & 0o777 == 0o600
    assert storage.get_item("questions") == '[{"id": "q1"}]'


def test_file_storage_leaves_no_temp_files(tmp_path):
    storage = FileStorage(tmp_path)

    storage.set_item("quizzes", "[]")
    storage.set_item("quizzes", "[1, 2]")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["quizzes.json"]


@pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
def test_file_storage_rejects_unsafe_keys(tmp_path, key):
    storage = FileStorage(tmp_path)

    with pytest.raises(StorageError):
        storage.set_item(key, "[]")


def test_file_storage_wraps_write_errors(tmp_path, monkeypatch):
    storage = FileStorage(tmp_path)

    def fail_replace(src, dst):  # noqa: ANN001
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(StorageError, match="disk full"):
        storage.set_item("questions", "[]")


def test_file_storage_wraps_read_errors(tmp_path):
    storage = FileStorage(tmp_path)
    (tmp_path / "questions.json").mkdir()

    with pytest.raises(StorageError):
        storage.get_item("questions")


def test_file_storage_cleans_up_after_failed_replace(tmp_path, monkeypatch):
    storage = FileStorage(tmp_path)

    def fail_replace(src, dst):  # noqa: ANN001
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(StorageError):
        storage.set_item("questions", "[]")
    assert list(tmp_path.iterdir()) == []


def test_file_storage_rejects_unencodable_text(tmp_path):
    storage = FileStorage(tmp_path)
    storage.set_item("questions", "[]")

    with pytest.raises(StorageError):
        storage.set_item("questions", '["Bad \udcff text"]')
    assert sorted(p.name for p in tmp_path.iterdir()) == ["questions.json"]
    assert storage.get_item("questions") == "[]"
