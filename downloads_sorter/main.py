"""
Главный модуль CLI интерфейса для сортировки каталога загрузок.

Загружает конфигурацию, применяет аргументы командной строки
и выполняет один запуск сортировки.
"""

import argparse
import sys
from typing import Dict, List, Optional, Tuple

from .config_loader import DEFAULT_CONFIG_PATH, load_config
from .logger import SorterLogger
from .resolver import SortContext, build_context
from .sorter import SortError, create_sorter


class DownloadsSorterCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config = None
        self.logger = None

    def setup(self, config_path=DEFAULT_CONFIG_PATH, verbose: bool = False) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Args:
            config_path: Путь к файлу конфигурации
            verbose: Подробный вывод (уровень DEBUG)

        Returns:
            bool: True если инициализация успешна
        """
        try:
            self.config = load_config(config_path)

            if verbose:
                self.config.logging.level = 'DEBUG'

            self.logger = SorterLogger(self.config.logging)
            self.logger.log_debug(f"Конфигурация загружена из: {config_path}")
            return True

        except Exception as e:
            print(f"❌ Ошибка инициализации: {e}")
            self.config = None
            self.logger = None
            return False

    def parse_age(self, value: Optional[str]) -> Optional[int]:
        """
        Разбирает возраст файлов из аргумента -a.

        Returns:
            Optional[int]: Возраст в днях или None, если значение некорректно
        """
        try:
            age_days = int(value)
        except (TypeError, ValueError):
            age_days = -1

        if age_days < 0:
            self.logger.log_warning(
                f"Некорректное число '{value}': ожидается неотрицательное целое. "
                f"Используется значение по умолчанию {self.config.sorter.age_days}"
            )
            return None

        self.logger.log_system_info(f"Учитываются файлы старше {age_days} дн.")
        return age_days

    def parse_file_types(self, values: Optional[List[Optional[str]]]) -> Dict[str, str]:
        """
        Разбирает аргументы -ft=<расширение>:<каталог>.

        Returns:
            Dict[str, str]: Расширение -> каталог назначения
        """
        overrides = {}
        for value in values or []:
            extension, sep, destination = (value or '').partition(':')
            if not sep or not extension:
                self.logger.log_warning(f"Некорректный тип файла '{value}': ожидается <расширение>:<каталог>")
                continue

            overrides[extension] = destination
            self.logger.log_debug(f"Добавлен тип файла: {extension} с каталогом: {destination}")

        return overrides

    def apply_arguments(self, args: argparse.Namespace, unknown: List[str]) -> SortContext:
        """
        Применяет аргументы командной строки к конфигурации.

        Args:
            args: Распознанные аргументы
            unknown: Нераспознанные аргументы

        Returns:
            SortContext: Контекст запуска
        """
        for arg in unknown:
            self.logger.log_warning(f"Неизвестный аргумент: {arg}")

        if not isinstance(args.verbose, bool):
            self.logger.log_warning(f"Аргумент -v не принимает значение, '{args.verbose}' проигнорировано")
        if not args.config:
            self.logger.log_warning("Не указан путь в аргументе --config, используется встроенная конфигурация")

        sort_dir = None
        if args.path is not None:
            if args.path:
                sort_dir = args.path
            else:
                self.logger.log_warning("Пустой путь в аргументе -p, используется путь из конфигурации")
        elif args.path_given:
            self.logger.log_warning("Не указан путь в аргументе -p, используется путь из конфигурации")

        age_days = None
        if args.age is not None or args.age_given:
            age_days = self.parse_age(args.age)

        overrides = self.parse_file_types(args.file_types)

        return build_context(self.config, overrides=overrides, sort_dir=sort_dir, age_days=age_days)

    def cmd_sort(self, args: argparse.Namespace, unknown: List[str]) -> int:
        """
        Команда сортировки каталога.

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        context = self.apply_arguments(args, unknown)
        sorter = create_sorter(context, self.logger)

        try:
            sorter.run()
        except SortError:
            return 1

        return 0


class _GivenFlag(argparse.Action):
    """Сохраняет значение и отмечает, что аргумент был указан."""

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        setattr(namespace, f"{self.dest}_given", True)


def create_parser() -> argparse.ArgumentParser:
    """Создает парсер аргументов командной строки."""
    parser = argparse.ArgumentParser(
        prog='downloads-sorter',
        description="Сортировка старых файлов каталога загрузок по расширениям",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Примеры использования:

  # Сортировка по встроенной конфигурации (~/Downloads, файлы старше 30 дней)
  downloads-sorter

  # Другой каталог относительно домашнего
  downloads-sorter -p=/Desktop

  # Дополнительный тип файла и возраст 7 дней
  downloads-sorter -ft=torrent:~/Torrents -a=7
        """
    )

    parser.add_argument(
        '-p', '--path',
        dest='path',
        nargs='?',
        action=_GivenFlag,
        help='Сортируемый каталог относительно домашнего (по умолчанию из конфигурации)'
    )
    parser.add_argument(
        '-ft', '--file-type',
        dest='file_types',
        nargs='?',
        action='append',
        help='Дополнительный тип файла в формате <расширение>:<каталог> (можно повторять)'
    )
    parser.add_argument(
        '-a', '--age',
        dest='age',
        nargs='?',
        action=_GivenFlag,
        help='Минимальный возраст файлов в днях (по умолчанию: 30)'
    )
    parser.add_argument(
        '--config',
        nargs='?',
        default=str(DEFAULT_CONFIG_PATH),
        help='Путь к файлу конфигурации (по умолчанию: встроенный settings.ini)'
    )
    parser.add_argument(
        '--verbose', '-v',
        nargs='?',
        const=True,
        default=False,
        help='Подробный вывод'
    )
    parser.set_defaults(path_given=False, age_given=False)

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Разбирает аргументы, возвращая распознанные и нераспознанные."""
    return create_parser().parse_known_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI."""
    args, unknown = parse_arguments(argv)

    # -v со значением (-v=1) тоже включает подробный вывод
    verbose = args.verbose is not False
    config_path = args.config or str(DEFAULT_CONFIG_PATH)

    cli = DownloadsSorterCLI()

    if not cli.setup(config_path, verbose=verbose):
        return 1

    try:
        return cli.cmd_sort(args, unknown)

    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return 1
    except Exception as e:
        print(f"❌ Неожиданная ошибка: {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
