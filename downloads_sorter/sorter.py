"""
Модуль бизнес-логики сортировки.

Объединяет просмотр каталога, отбор файлов и их перемещение
в каталоги назначения в один запуск.
"""

import logging
from datetime import datetime
from typing import List, Optional

from .file_ops import DirectoryNotFoundError, FileOps, MoveOutcome
from .logger import SorterLogger
from .resolver import SortContext
from .selector import extract_extension, select_files


class SortError(Exception):
    """Исключение для ошибок, прерывающих сортировку."""
    pass


class SortStats:
    """Класс для хранения статистики сортировки."""

    def __init__(self):
        self.found_files = 0
        self.selected_files = 0
        self.moved_files = 0
        self.failed_files = 0
        self.start_time = None
        self.end_time = None
        self.outcomes: List[MoveOutcome] = []

    def add_outcome(self, outcome: MoveOutcome) -> None:
        """Учитывает результат перемещения файла."""
        self.outcomes.append(outcome)
        if outcome.success:
            self.moved_files += 1
        else:
            self.failed_files += 1

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность сортировки в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None


class Sorter:
    """Основной класс сортировки каталога загрузок."""

    def __init__(self, context: SortContext, logger: SorterLogger):
        """
        Инициализация сортировщика.

        Args:
            context: Контекст запуска (каталог, таблица расширений, возраст)
            logger: Логгер для записи операций
        """
        self.context = context
        self.logger = logger
        self.file_ops = FileOps(context.sort_dir, logger)

    def run(self, now: Optional[datetime] = None) -> SortStats:
        """
        Выполняет сортировку.

        Args:
            now: Момент, относительно которого считается возраст файлов

        Returns:
            SortStats: Статистика сортировки

        Raises:
            SortError: Если сортируемый каталог недоступен
        """
        stats = SortStats()
        stats.start_time = datetime.now()
        if now is None:
            now = stats.start_time

        self.logger.log_sort_start(self.context.sort_dir, self.context.age_days)
        self.logger.log_mapping(self.context.mapping)

        try:
            filenames = self.file_ops.scan_directory()
        except DirectoryNotFoundError as e:
            self.logger.log_critical_error("Сортировка прервана", e)
            raise SortError(str(e))

        stats.found_files = len(filenames)
        self.logger.log_file_list("Найдено файлов", filenames)

        selected = select_files(
            filenames,
            self.context.mapping,
            self.context.sort_dir,
            self.context.age_days,
            now
        )
        stats.selected_files = len(selected)
        self.logger.log_file_list("Файлов для сортировки", selected, level=logging.INFO)

        for filename in sorted(selected):
            stats.add_outcome(self._move_single_file(filename))

        stats.end_time = datetime.now()
        self.logger.log_sort_end(stats.moved_files, stats.failed_files, stats.get_duration())

        return stats

    def _move_single_file(self, filename: str) -> MoveOutcome:
        """Перемещает один файл в каталог, заданный для его расширения."""
        destination_dir = self.context.mapping[extract_extension(filename)]
        outcome = self.file_ops.move_file(filename, destination_dir)

        if outcome.success:
            self.logger.log_file_moved(filename, outcome.destination)
        else:
            self.logger.log_file_error(filename, outcome.reason)

        return outcome


def create_sorter(context: SortContext, logger: SorterLogger) -> Sorter:
    """
    Удобная функция для создания объекта сортировщика.

    Args:
        context: Контекст запуска
        logger: Логгер

    Returns:
        Sorter: Объект сортировщика
    """
    return Sorter(context, logger)
