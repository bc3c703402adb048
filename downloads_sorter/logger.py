"""
Модуль для настройки и управления логированием приложения.

Обеспечивает централизованную настройку логирования с ротацией файлов,
цветным выводом в консоль и различными уровнями детализации.
"""

import copy
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .config_loader import LoggingConfig


LOGGER_NAME = 'downloads_sorter'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        # Запись общая для всех обработчиков, поэтому меняем копию
        record = copy.copy(record)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


class SorterLogger:
    """Класс для управления логированием приложения Downloads Sorter."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с файловым и консольным выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        # Очищаем существующие обработчики
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # Конвертируем MB в байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def log_sort_start(self, sort_dir: Path, age_days: int) -> None:
        """
        Логирует начало сортировки.

        Args:
            sort_dir: Сортируемый каталог
            age_days: Минимальный возраст файлов в днях
        """
        self.logger.info(f"🚀 Сортировка файлов в {sort_dir}")
        self.logger.info(f"⏳ Учитываются файлы старше {age_days} дн.")
        self.logger.debug(f"⏰ Время начала: {datetime.now().strftime(DATE_FORMAT)}")

    def log_sort_end(self, moved_files: int, failed_files: int, duration: Optional[float] = None) -> None:
        """
        Логирует завершение сортировки.

        Args:
            moved_files: Перемещено файлов
            failed_files: Ошибок при перемещении
            duration: Продолжительность в секундах (опционально)
        """
        self.logger.info(f"✅ Перемещено файлов: {moved_files}")
        if failed_files:
            self.logger.warning(f"⚠️ Не удалось переместить: {failed_files}")
        if duration is not None:
            self.logger.debug(f"⏱️ Продолжительность: {duration:.2f} сек")

    def log_mapping(self, mapping: Mapping[str, Path]) -> None:
        """Логирует таблицу каталогов назначения."""
        self.logger.debug("📂 Каталоги назначения:")
        for extension in sorted(mapping):
            self.logger.debug(f"   • *.{extension}: {mapping[extension]}")

    def log_file_list(self, title: str, filenames: Iterable[str], level: int = logging.DEBUG) -> None:
        """
        Логирует количество и список файлов.

        Args:
            title: Заголовок списка
            filenames: Имена файлов
            level: Уровень сообщения с количеством файлов
        """
        filenames = sorted(filenames)
        self.logger.log(level, f"📊 {title}: {len(filenames)}")
        for filename in filenames:
            self.logger.debug(f"   - {filename}")

    def log_file_moved(self, filename: str, target_path: Path) -> None:
        """Логирует успешное перемещение файла."""
        self.logger.info(f"📁 Файл {filename} перемещен в {target_path}")

    def log_file_error(self, filename: str, error) -> None:
        """
        Логирует ошибку при обработке файла.

        Args:
            filename: Имя файла
            error: Исключение или описание ошибки
        """
        self.logger.error(f"❌ Ошибка при перемещении файла {filename}: {error}")

    def log_directory_created(self, directory: Path) -> None:
        """Логирует создание каталога назначения."""
        self.logger.debug(f"📂 Создан каталог: {directory}")

    def log_system_info(self, info: str) -> None:
        """Логирует системную информацию."""
        self.logger.info(f"ℹ️ {info}")

    def log_debug(self, message: str) -> None:
        """Логирует отладочное сообщение."""
        self.logger.debug(f"🔍 {message}")

    def log_warning(self, message: str) -> None:
        """
        Логирует предупреждение.

        Args:
            message: Сообщение предупреждения
        """
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")
