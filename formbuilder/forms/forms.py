from typing import Any, Iterator, Mapping, Optional

import logging

from .fields import *
from ..dynamic import Dynamic
from ..helper import FormHelper, InvalidArgumentError

__all__ = [
    'Form'
]


class Form:
    def __init__(self,
        helper: 'FormHelper',
        name: Optional[str] = None,
        model: Any = None
    ):
        self.helper: 'FormHelper' = helper
        self.name: str | None = name
        self.model: Any = model
        self.fields: dict[str, FormField] = {}

        self.log: logging.Logger = logging.getLogger('formbuilder.forms')

        self._data: dict[str, Any] = {}
        if model is not None:
            self._data = dict(self.helper.convert_model_to_dict(model) or {})

    def add(self, name: str, type: str = 'text', /, **options: Any) -> 'Form':
        self.helper.check_field_name(name, self.__class__.__name__)

        if name in self.fields:
            raise InvalidArgumentError(f'Field [{name}] already exists in the form {self.__class__.__name__}.')

        field_class = self.helper.get_field_class(type)
        field = field_class(name, type, self.helper, options, self)

        if name in self._data:
            field.fill(self._data[name])

        self.log.debug('added field %r of type %r to %s', name, type, self.__class__.__name__)
        self.fields[name] = field
        return self

    def __getitem__(self, key: str) -> FormField:
        return self.fields[key]

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[FormField]:
        return iter(self.fields.values())

    def get_rules(self) -> Dynamic:
        return self.helper.merge_fields_rules(self.fields.values())

    def clear(self) -> None:
        for field in self.fields.values():
            field.clear()

    def fill(self, values: Mapping[str, Any] | Any) -> None:
        values = self.helper.convert_model_to_dict(values) or {}
        self._data.update(values)

        for name, value in values.items():
            if name in self.fields:
                self.fields[name].fill(value)

    @property
    def value(self) -> Dynamic:
        return Dynamic({name: field.value for name, field in self.fields.items() if field.has_value})
