"""
Downloads Sorter

Утилита для сортировки каталога загрузок по расширениям файлов
с учетом возраста файлов.
"""

__version__ = "1.0.0"
__author__ = "Downloads Sorter Team"
__description__ = "Utility for sorting old downloads into directories by file extension"
