"""
Модуль нормализации путей.

Преобразует таблицу расширений из конфигурации (вместе с переопределениями
из командной строки) в таблицу абсолютных каталогов назначения и собирает
контекст одного запуска сортировки.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .config_loader import Config


PathLike = Union[str, Path]


@dataclass(frozen=True)
class SortContext:
    """Неизменяемые параметры одного запуска сортировки."""
    sort_dir: Path
    mapping: Mapping[str, Path] = field(default_factory=dict)
    age_days: int = 30


def normalize_destination(destination: str, sort_dir: PathLike, home_dir: PathLike) -> Path:
    """
    Приводит каталог назначения к абсолютному пути.

    Args:
        destination: Каталог из конфигурации ("~/...", абсолютный или относительный)
        sort_dir: Абсолютный путь сортируемого каталога
        home_dir: Абсолютный путь домашнего каталога

    Returns:
        Path: Абсолютный путь каталога назначения
    """
    if destination.startswith('~'):
        return Path(str(home_dir) + destination[1:])
    if destination.startswith(os.sep):
        return Path(destination)
    return Path(sort_dir) / destination


def resolve_mapping(raw_mapping: Mapping[str, str],
                    overrides: Optional[Mapping[str, str]],
                    sort_dir: PathLike,
                    home_dir: PathLike) -> Dict[str, Path]:
    """
    Объединяет таблицу расширений с переопределениями и нормализует пути.

    Переопределения заменяют одноименные расширения. Пустые и некорректные
    пути не отклоняются: ошибка проявится при перемещении файла.

    Returns:
        Dict[str, Path]: Расширение -> абсолютный каталог назначения
    """
    merged = dict(raw_mapping)
    merged.update(overrides or {})

    return {
        extension: normalize_destination(destination, sort_dir, home_dir)
        for extension, destination in merged.items()
    }


def resolve_sort_directory(home_dir: PathLike, sort_dir: str) -> Path:
    """
    Возвращает абсолютный путь сортируемого каталога.

    Путь сортируемого каталога всегда задается относительно домашнего
    каталога: "Downloads", "/Downloads" и "~/Downloads" равнозначны.
    """
    if sort_dir.startswith('~'):
        sort_dir = sort_dir[1:]
    return Path(home_dir) / sort_dir.lstrip(os.sep)


def build_context(config: Config,
                  overrides: Optional[Mapping[str, str]] = None,
                  sort_dir: Optional[str] = None,
                  age_days: Optional[int] = None) -> SortContext:
    """
    Собирает контекст запуска из конфигурации и аргументов командной строки.

    Args:
        config: Загруженная конфигурация
        overrides: Дополнительные расширения из командной строки
        sort_dir: Сортируемый каталог относительно домашнего (вместо конфигурации)
        age_days: Возраст файлов в днях (вместо конфигурации)

    Returns:
        SortContext: Контекст запуска
    """
    home_dir = config.sorter.home_dir
    sort_dir_abs = resolve_sort_directory(home_dir, sort_dir if sort_dir is not None else config.sorter.sort_dir)
    mapping = resolve_mapping(config.file_types, overrides, sort_dir_abs, home_dir)

    return SortContext(
        sort_dir=sort_dir_abs,
        mapping=MappingProxyType(mapping),
        age_days=config.sorter.age_days if age_days is None else age_days
    )
