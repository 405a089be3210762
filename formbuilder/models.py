from enum import Enum
from typing import Any, Iterable

from sqlalchemy import inspect
from sqlalchemy.engine import Result
from sqlalchemy.orm import DeclarativeBase

__all__ = [
    'ModelKind',
    'model_kind',
    'Base',
    'ModelCollection',
]


class ModelKind(Enum):
    plain = 1
    # exposes to_dict()
    record = 2
    # exposes all()
    collection = 3


def model_kind(value: Any) -> ModelKind:
    """
    Returns the kind a value declares through the `__model_kind__` attribute
    of its class. Anything that doesn't declare one is a plain value.
    """

    kind = getattr(type(value), '__model_kind__', ModelKind.plain)
    if not isinstance(kind, ModelKind):
        raise TypeError(f'invalid model kind {kind!r} on {type(value).__name__}')

    return kind


class Base(DeclarativeBase):
    __model_kind__ = ModelKind.record

    def to_dict(self) -> dict[str, Any]:
        mapper = inspect(self).mapper
        return {attr.key: getattr(self, attr.key) for attr in mapper.column_attrs}


class ModelCollection(list):
    __model_kind__ = ModelKind.collection

    def all(self) -> list[Any]:
        return list(self)

    @classmethod
    def from_result(cls, result: Result | Iterable[Any]) -> 'ModelCollection':
        if isinstance(result, Result):
            return cls(result.scalars().all())

        return cls(result)
