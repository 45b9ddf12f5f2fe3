"""
Unit tests for file storage.
"""

import pytest

from neo_persistent_config.core.exceptions import StorageError
from neo_persistent_config.storage.file import FILE_HEADER, FileStorage


@pytest.fixture
def file_name(tmp_path):
    return tmp_path / "storage" / "persistent_config.py"


class TestFileStorage:
    """Test the Python literal file storage."""

    def test_missing_file_is_empty(self, file_name):
        assert FileStorage(file_name).get() == {}

    def test_save_creates_file(self, file_name):
        """Test the directory and file are created on first save."""
        storage = FileStorage(file_name)

        storage.save({"mail.driver": "smtp", "mail.port": 25, "debug": False, "empty": None})

        assert file_name.exists()
        assert file_name.read_text(encoding="utf-8").startswith(FILE_HEADER)
        assert storage.get() == {"mail.driver": "smtp", "mail.port": 25, "debug": False, "empty": None}

    def test_values_survive_new_instance(self, file_name):
        """Test another storage instance reads the same file."""
        FileStorage(file_name).save({"app.name": "Neo"})

        assert FileStorage(file_name).get() == {"app.name": "Neo"}

    def test_save_merges(self, file_name):
        storage = FileStorage(file_name)
        storage.save({"a": "1", "b": "2"})

        storage.save({"b": "3"})

        assert storage.get() == {"a": "1", "b": "3"}

    def test_clear(self, file_name):
        storage = FileStorage(file_name)
        storage.save({"a": "1"})

        storage.clear()

        assert not file_name.exists()
        assert storage.get() == {}
        assert storage.clear()

    def test_clear_value(self, file_name):
        storage = FileStorage(file_name)
        storage.save({"a": "1", "b": "2"})

        storage.clear_value("a")

        assert storage.get() == {"b": "2"}

    def test_file_is_not_executed(self, file_name, tmp_path):
        """Test code in the file is rejected instead of run."""
        marker = tmp_path / "marker"
        file_name.parent.mkdir(parents=True)
        file_name.write_text(f"VALUES = {{'a': open({str(marker)!r}, 'w').write('x')}}\n", encoding="utf-8")

        with pytest.raises(StorageError):
            FileStorage(file_name).get()

        assert not marker.exists()

    def test_invalid_file(self, file_name):
        file_name.parent.mkdir(parents=True)
        file_name.write_text("VALUES = {", encoding="utf-8")

        with pytest.raises(StorageError):
            FileStorage(file_name).get()

    def test_compose_file_content(self, file_name):
        content = FileStorage(file_name).compose_file_content({"a": "1"})

        assert content == FILE_HEADER + "VALUES = {'a': '1'}\n"
