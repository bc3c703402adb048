"""
Модуль для загрузки и валидации конфигурации приложения.

Обеспечивает загрузку параметров сортировки, таблицы расширений
и настроек логирования из INI-файла (по умолчанию встроенного
config/settings.ini).
"""

import configparser
from pathlib import Path
from typing import Dict, Optional
from dataclasses import dataclass, field


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "settings.ini"
DEFAULT_SORT_DIR = "Downloads"
DEFAULT_AGE_DAYS = 30


@dataclass
class SorterConfig:
    """Параметры сортировки."""
    sort_dir: str
    home_dir: Path
    age_days: int = DEFAULT_AGE_DAYS


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str
    log_file: Optional[Path]
    max_log_size: int
    backup_count: int


@dataclass
class Config:
    """Основная конфигурация приложения."""
    sorter: SorterConfig
    logging: LoggingConfig
    file_types: Dict[str, str] = field(default_factory=dict)


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path=DEFAULT_CONFIG_PATH):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        config_parser = configparser.ConfigParser(interpolation=None)
        # Расширения файлов чувствительны к регистру
        config_parser.optionxform = str

        try:
            config_parser.read(self.config_path, encoding='utf-8')

            sorter_config = self._load_sorter_config(config_parser)
            file_types = self._load_file_types(config_parser)
            logging_config = self._load_logging_config(config_parser)

            self._config = Config(
                sorter=sorter_config,
                logging=logging_config,
                file_types=file_types
            )

            self._validate_config()

            return self._config

        except Exception as e:
            self._config = None
            raise ValueError(f"Ошибка загрузки конфигурации: {e}")

    def _load_sorter_config(self, parser: configparser.ConfigParser) -> SorterConfig:
        """Загружает параметры сортировки."""
        section = 'sorter'

        if not parser.has_section(section):
            raise ValueError(f"Секция '{section}' не найдена в конфигурации")

        home_dir = parser.get(section, 'home_dir', fallback='').strip()

        return SorterConfig(
            sort_dir=parser.get(section, 'sort_dir', fallback=DEFAULT_SORT_DIR),
            home_dir=Path(home_dir).expanduser() if home_dir else Path.home(),
            age_days=parser.getint(section, 'age_days', fallback=DEFAULT_AGE_DAYS)
        )

    def _load_file_types(self, parser: configparser.ConfigParser) -> Dict[str, str]:
        """Загружает таблицу соответствия расширений и каталогов."""
        section = 'file_types'

        if not parser.has_section(section):
            raise ValueError(f"Секция '{section}' не найдена в конфигурации")

        return {extension: destination.strip() for extension, destination in parser.items(section)}

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        if not parser.has_section(section):
            raise ValueError(f"Секция '{section}' не найдена в конфигурации")

        log_file = parser.get(section, 'log_file', fallback='').strip()

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file).expanduser() if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        if not self._config.sorter.home_dir.is_absolute():
            raise ValueError(f"Домашний каталог должен быть абсолютным путем: {self._config.sorter.home_dir}")

        if self._config.sorter.age_days < 0:
            raise ValueError("Возраст файлов не может быть отрицательным")

        if self._config.logging.max_log_size <= 0:
            raise ValueError("Размер лог-файла должен быть больше 0")

        if self._config.logging.backup_count < 0:
            raise ValueError("Количество резервных лог-файлов не может быть отрицательным")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self._config.logging.level.upper() not in valid_levels:
            raise ValueError(f"Некорректный уровень логирования: {self._config.logging.level}")


def load_config(config_path=DEFAULT_CONFIG_PATH) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()
