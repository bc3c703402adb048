"""
Модуль отбора файлов для сортировки.

Файл отбирается, если его расширение есть в таблице расширений
и он не изменялся дольше заданного количества дней.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Mapping, Optional, Set


def extract_extension(filename: str) -> str:
    """
    Возвращает часть имени после последней точки.

    Для имени без точки возвращается все имя, для имени,
    оканчивающегося точкой, пустая строка.
    """
    return filename[filename.rfind('.') + 1:]


def is_old_enough(modified: datetime, age_days: int, now: datetime) -> bool:
    """Проверяет, что с момента изменения прошло строго больше age_days дней."""
    return modified + timedelta(days=age_days) < now


def get_modified_time(path: Path) -> Optional[datetime]:
    """Возвращает время последнего изменения файла (локальное время) или None."""
    try:
        return datetime.fromtimestamp(path.stat().st_mtime)
    except OSError:
        return None


def select_files(filenames: Iterable[str],
                 mapping: Mapping[str, Path],
                 sort_dir: Path,
                 age_days: int,
                 now: Optional[datetime] = None) -> Set[str]:
    """
    Отбирает файлы с известным расширением, достигшие нужного возраста.

    Args:
        filenames: Имена файлов сортируемого каталога
        mapping: Расширение -> каталог назначения
        sort_dir: Сортируемый каталог
        age_days: Минимальный возраст файла в днях
        now: Текущее время (по умолчанию datetime.now())

    Returns:
        Set[str]: Имена отобранных файлов
    """
    if now is None:
        now = datetime.now()

    selected = set()
    for filename in filenames:
        # Расширение проверяется до обращения к файловой системе
        if extract_extension(filename) not in mapping:
            continue

        modified = get_modified_time(Path(sort_dir) / filename)
        if modified is not None and is_old_enough(modified, age_days, now):
            selected.add(filename)

    return selected
