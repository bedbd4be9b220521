"""
ConfigInspector — инспекция конфигурации сервиса.

Отдаёт оператору фактическую конфигурацию, конфигурацию по умолчанию
или структурный diff между ними.

Обе стороны перед сравнением проходят через YAML (dump → load), чтобы
сравнивать одинаковые generic-значения (dict/list/скаляры) без знания схемы
конфигурации. Побочный эффект: различия, которые YAML не сохраняет,
могут давать ложные срабатывания (например, 1 и 1.0).
"""

import dataclasses
from enum import Enum
from typing import Any, Dict

import yaml


class ConfigInspectorError(Exception):
    """Базовая ошибка инспекции конфигурации."""


class SerializationError(ConfigInspectorError):
    """Не удалось привести конфигурацию к generic-представлению."""


class UnsupportedTypeError(ConfigInspectorError):
    """
    Узел конфигурации имеет тип, который diff не умеет сравнивать.

    Это пробел в покрытии типов, а не ошибка пользователя.
    """

    def __init__(self, value: Any):
        self.type_name = type(value).__name__
        super().__init__(f"unsupported type {self.type_name}")


class ConfigMode(str, Enum):
    """Режим отображения конфигурации (query-параметр `mode`)."""

    FULL = "full"
    DEFAULTS = "defaults"
    DIFF = "diff"

    @classmethod
    def parse(cls, raw: Any) -> "ConfigMode":
        """Неизвестные и пустые значения означают FULL."""
        if isinstance(raw, str):
            value = raw.strip().lower()
            if value == cls.DIFF.value:
                return cls.DIFF
            if value == cls.DEFAULTS.value:
                return cls.DEFAULTS
        return cls.FULL


# Скаляры, которые сравниваются по точному типу и значению
_STRICT_SCALARS = (bool, int, str, type(None))


def _plain(value: Any) -> Any:
    # dataclass -> dict, остальное YAML представит сам (или упадёт)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def dump_yaml(value: Any) -> str:
    """
    Сериализовать значение в YAML-документ.

    Raises:
        SerializationError: если значение не представимо в YAML
    """
    try:
        return yaml.safe_dump(_plain(value), sort_keys=False, allow_unicode=True)
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise SerializationError(f"failed to serialize config: {e}") from e


def lower_config(value: Any) -> Dict[Any, Any]:
    """
    Привести конфигурацию к generic-mapping через YAML round-trip.

    Args:
        value: dataclass, dict или любое YAML-представимое значение

    Returns:
        dict из generic-значений (пустой dict для пустого документа)

    Raises:
        SerializationError: если dump/load не удался или документ не mapping
    """
    document = dump_yaml(value)
    try:
        obj = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise SerializationError(f"failed to decode config: {e}") from e

    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise SerializationError(
            f"config must decode to a mapping, got: {type(obj).__name__}"
        )
    return obj


def _deep_equal(a: Any, b: Any) -> bool:
    """Глубокое сравнение с точным совпадением типов (True != 1, 1 != 1.0)."""
    if type(a) is not type(b):
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        if a.keys() != b.keys():
            return False
        return all(_deep_equal(v, b[k]) for k, v in a.items())
    return a == b


def diff_config(default_config: Dict[Any, Any], actual_config: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Вычислить структурный diff actual относительно default.

    В результат попадают только ключи actual_config, значение которых
    отличается от default. Ключи, которые есть только в default, не попадают
    никогда. Вложенный mapping, равный default, исчезает целиком.

    Args:
        default_config: конфигурация по умолчанию (generic-mapping)
        actual_config: фактическая конфигурация (generic-mapping)

    Returns:
        dict с отличающимися ключами; значения берутся из actual_config

    Raises:
        UnsupportedTypeError: если встретился узел неизвестного типа.
            Частичный результат не возвращается.
    """
    output: Dict[Any, Any] = {}

    for key, value in actual_config.items():
        if key not in default_config:
            output[key] = value
            continue

        default_value = default_config[key]

        if isinstance(value, _STRICT_SCALARS):
            if type(default_value) is not type(value) or default_value != value:
                output[key] = value
        elif isinstance(value, (list, float)):
            if not _deep_equal(default_value, value):
                output[key] = value
        elif isinstance(value, dict):
            if not isinstance(default_value, dict):
                output[key] = value
                continue
            nested = diff_config(default_value, value)
            if nested:
                output[key] = nested
        else:
            raise UnsupportedTypeError(value)

    return output


def render_config(actual_config: Any, default_config: Any, mode: ConfigMode) -> Any:
    """
    Выбрать представление конфигурации для ответа.

    Args:
        actual_config: фактическая конфигурация приложения
        default_config: конфигурация по умолчанию
        mode: режим (full, defaults, diff)

    Returns:
        actual_config, default_config или diff (dict)

    Raises:
        SerializationError: если одну из сторон не удалось привести к mapping
        UnsupportedTypeError: если diff встретил неизвестный тип
    """
    if mode is ConfigMode.DIFF:
        default_obj = lower_config(default_config)
        actual_obj = lower_config(actual_config)
        return diff_config(default_obj, actual_obj)
    if mode is ConfigMode.DEFAULTS:
        return default_config
    return actual_config
