"""
Модуль для операций с файловой системой.

Обеспечивает просмотр сортируемого каталога и перемещение файлов
в каталоги назначения.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Set

from .logger import SorterLogger


class FileOperationError(Exception):
    """Исключение для ошибок операций с файлами."""
    pass


class DirectoryNotFoundError(FileOperationError):
    """Исключение для случая, когда сортируемый каталог недоступен."""
    pass


@dataclass(frozen=True)
class MoveOutcome:
    """Результат перемещения одного файла."""
    filename: str
    source: Path
    destination: Path
    success: bool
    reason: str = ""


class FileOps:
    """Класс для операций с файловой системой."""

    def __init__(self, sort_dir: Path, logger: Optional[SorterLogger] = None):
        """
        Инициализация операций с файлами.

        Args:
            sort_dir: Абсолютный путь сортируемого каталога
            logger: Логгер для записи операций
        """
        self.sort_dir = Path(sort_dir)
        self.logger = logger

    def scan_directory(self) -> Set[str]:
        """
        Возвращает имена файлов сортируемого каталога (без подкаталогов).

        Returns:
            Set[str]: Имена файлов

        Raises:
            DirectoryNotFoundError: Если каталог не существует или недоступен
        """
        if not self.sort_dir.is_dir():
            raise DirectoryNotFoundError(f"Каталог не найден: {self.sort_dir}")

        try:
            return {entry.name for entry in self.sort_dir.iterdir() if not entry.is_dir()}
        except OSError as e:
            raise DirectoryNotFoundError(f"Ошибка чтения каталога {self.sort_dir}: {e}")

    def _ensure_directory_exists(self, directory: Path) -> None:
        """
        Создает каталог назначения если он не существует.

        Raises:
            FileOperationError: Если каталог не удалось создать
        """
        if directory.is_dir():
            return

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Ошибка создания каталога {directory}: {e}")

        if self.logger:
            self.logger.log_directory_created(directory)

    def move_file(self, filename: str, destination_dir: Path) -> MoveOutcome:
        """
        Перемещает файл из сортируемого каталога в каталог назначения.

        Существующий файл с тем же именем перезаписывается. Ошибки не
        пробрасываются, а возвращаются в результате.

        Args:
            filename: Имя файла
            destination_dir: Каталог назначения

        Returns:
            MoveOutcome: Результат перемещения
        """
        destination_dir = Path(destination_dir)
        source_path = self.sort_dir / filename
        target_path = destination_dir / filename

        def failure(reason: str) -> MoveOutcome:
            return MoveOutcome(filename, source_path, target_path, False, reason)

        if not source_path.exists():
            return failure(f"Исходный файл не найден: {source_path}")

        if target_path.resolve() == source_path.resolve():
            return failure(f"Каталог назначения совпадает с сортируемым каталогом: {destination_dir}")

        try:
            self._ensure_directory_exists(destination_dir)
        except FileOperationError as e:
            return failure(str(e))

        if target_path.is_dir():
            return failure(f"В каталоге назначения уже есть каталог с таким именем: {target_path}")

        try:
            shutil.move(str(source_path), str(target_path))
        except (OSError, shutil.Error) as e:
            return failure(f"Ошибка перемещения файла: {e}")

        return MoveOutcome(filename, source_path, target_path, True)
