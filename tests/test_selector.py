"""
Тесты для модуля selector.py
"""

import pytest
import tempfile
import shutil
import os
from pathlib import Path
from datetime import datetime, timedelta

from downloads_sorter.selector import extract_extension, is_old_enough, get_modified_time, select_files


def touch(path: Path, modified: datetime) -> Path:
    """Создает файл с заданным временем изменения."""
    path.write_text("content")
    timestamp = modified.timestamp()
    os.utime(path, (timestamp, timestamp))
    return path


class TestExtractExtension:
    """Тесты для extract_extension."""

    @pytest.mark.parametrize("filename, expected", [
        ("report.pdf", "pdf"),
        ("archive.tar.gz", "gz"),
        ("Setup.AppImage", "AppImage"),
        (".bashrc", "bashrc"),
        ("README", "README"),
        ("trailing.", ""),
    ])
    def test_extract_extension(self, filename, expected):
        """Тест выделения расширения, включая граничные случаи."""
        assert extract_extension(filename) == expected


class TestIsOldEnough:
    """Тесты для is_old_enough."""

    NOW = datetime(2024, 3, 15, 12, 0, 0)

    def test_exactly_threshold_not_selected(self):
        """Тест: файл ровно заданного возраста еще не подходит."""
        modified = self.NOW - timedelta(days=30)
        assert not is_old_enough(modified, 30, self.NOW)

    def test_one_second_older_selected(self):
        """Тест: файл на секунду старше подходит."""
        modified = self.NOW - timedelta(days=30, seconds=1)
        assert is_old_enough(modified, 30, self.NOW)

    def test_newer_file(self):
        """Тест: новый файл не подходит."""
        assert not is_old_enough(self.NOW - timedelta(days=10), 30, self.NOW)

    def test_zero_days(self):
        """Тест нулевого порога."""
        assert is_old_enough(self.NOW - timedelta(seconds=1), 0, self.NOW)
        assert not is_old_enough(self.NOW, 0, self.NOW)


class TestSelectFiles:
    """Тесты для select_files."""

    NOW = datetime(2024, 3, 15, 12, 0, 0)

    @pytest.fixture
    def temp_dir(self):
        """Создает временную директорию для тестов."""
        temp_path = tempfile.mkdtemp()
        yield Path(temp_path)
        shutil.rmtree(temp_path, ignore_errors=True)

    @pytest.fixture
    def mapping(self):
        return {"pdf": Path("/dest/docs"), "zip": Path("/dest/archives")}

    def test_select_by_extension_and_age(self, temp_dir, mapping):
        """Тест: отбираются только известные и достаточно старые файлы."""
        touch(temp_dir / "a.pdf", self.NOW - timedelta(days=45))
        touch(temp_dir / "b.zip", self.NOW - timedelta(days=10))
        touch(temp_dir / "c.txt", self.NOW - timedelta(days=60))

        selected = select_files({"a.pdf", "b.zip", "c.txt"}, mapping, temp_dir, 30, self.NOW)

        assert selected == {"a.pdf"}

    def test_empty_listing(self, temp_dir, mapping):
        """Тест пустого списка файлов."""
        assert select_files(set(), mapping, temp_dir, 30, self.NOW) == set()

    def test_no_dot_filename_matches_whole_name(self, temp_dir):
        """Тест: имя без точки сравнивается целиком."""
        touch(temp_dir / "Makefile", self.NOW - timedelta(days=45))

        selected = select_files({"Makefile"}, {"Makefile": Path("/dest")}, temp_dir, 30, self.NOW)

        assert selected == {"Makefile"}

    def test_missing_file_not_selected(self, temp_dir, mapping):
        """Тест: исчезнувший файл не отбирается."""
        assert select_files({"gone.pdf"}, mapping, temp_dir, 30, self.NOW) == set()

    def test_extension_checked_before_stat(self, temp_dir, mapping, monkeypatch):
        """Тест: файлы с неизвестным расширением не проверяются по времени."""
        touch(temp_dir / "a.pdf", self.NOW - timedelta(days=100))
        touch(temp_dir / "c.txt", self.NOW - timedelta(days=100))
        calls = []
        original_stat = Path.stat

        def counting_stat(path, *args, **kwargs):
            calls.append(path.name)
            return original_stat(path, *args, **kwargs)

        monkeypatch.setattr(Path, "stat", counting_stat)

        selected = select_files({"a.pdf", "c.txt"}, mapping, temp_dir, 30, self.NOW)

        assert selected == {"a.pdf"}
        assert "a.pdf" in calls
        assert "c.txt" not in calls

    def test_get_modified_time(self, temp_dir):
        """Тест получения времени изменения файла."""
        modified = datetime(2024, 1, 1, 8, 30, 0)
        path = touch(temp_dir / "file.pdf", modified)

        assert get_modified_time(path) == modified
        assert get_modified_time(temp_dir / "missing.pdf") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
