# models/validation.py

from datetime import datetime
from enum import Enum
from typing import Optional, Type, TypeVar, Union

E = TypeVar("E", bound=Enum)


class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass


def validate_enum_value(value: Union[str, E], enum_class: Type[E], field_name: str = "value") -> E:
    """Валидация значений enum (принимает сам член enum или его значение)"""
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} должен быть одним из: {valid_values}")


def validate_non_negative_int(value: int, field_name: str = "value") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field_name} должен быть неотрицательным целым числом")
    return value


def validate_time_of_day(value: Optional[str], field_name: str = "time") -> Optional[str]:
    """Время в формате HH:MM"""
    if value is None:
        return None
    try:
        datetime.strptime(value, "%H:%M")
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} должен быть в формате HH:MM")
    return value


def datetime_to_str(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def datetime_from_str(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value is not None else None
