"""
Logger Module - встроенный модуль логирования.

Обязательный инфраструктурный модуль, регистрируется первым.
"""

from .module import LoggerModule

__all__ = ["LoggerModule"]
