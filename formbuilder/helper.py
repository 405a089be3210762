from enum import Enum
import math
import re
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Protocol

import importlib
import logging

from .config import FormBuilderConfig
from .dynamic import Dynamic
from .logging import configure_logger
from .models import ModelKind, model_kind
from .translation import Translator

__all__ = [
    'InvalidArgumentError',
    'UnsupportedTypeError',
    'View',
    'FieldClass',
    'FIELD_NAMESPACE',
    'FIELD_TYPES',
    'RESERVED_FIELD_NAMES',
    'FormHelper',
]


class InvalidArgumentError(ValueError):
    pass


class UnsupportedTypeError(InvalidArgumentError):
    pass


class View(Protocol):
    def make(self, template: str, data: Optional[dict[str, Any]] = None) -> Any:
        ...


class FieldClass(Enum):
    input = 'InputType'
    select = 'SelectType'
    textarea = 'TextareaType'
    button = 'ButtonType'
    checkable = 'CheckableType'
    choice = 'ChoiceType'
    child_form = 'ChildFormType'
    entity = 'EntityType'
    collection = 'CollectionType'
    repeated = 'RepeatedType'
    static = 'StaticType'


FIELD_NAMESPACE = 'formbuilder.forms.fields'

FIELD_TYPES: Mapping[str, FieldClass] = MappingProxyType({
    'text': FieldClass.input,
    'email': FieldClass.input,
    'url': FieldClass.input,
    'tel': FieldClass.input,
    'search': FieldClass.input,
    'password': FieldClass.input,
    'hidden': FieldClass.input,
    'number': FieldClass.input,
    'date': FieldClass.input,
    'file': FieldClass.input,
    'image': FieldClass.input,
    'color': FieldClass.input,
    'datetime-local': FieldClass.input,
    'month': FieldClass.input,
    'range': FieldClass.input,
    'time': FieldClass.input,
    'week': FieldClass.input,
    'select': FieldClass.select,
    'textarea': FieldClass.textarea,
    'button': FieldClass.button,
    'submit': FieldClass.button,
    'reset': FieldClass.button,
    'radio': FieldClass.checkable,
    'checkbox': FieldClass.checkable,
    'choice': FieldClass.choice,
    'form': FieldClass.child_form,
    'entity': FieldClass.entity,
    'collection': FieldClass.collection,
    'repeated': FieldClass.repeated,
    'static': FieldClass.static,
})

# numeric strings the way php's is_numeric accepts them
NUMERIC_REGEX = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')

RESERVED_FIELD_NAMES: tuple[str, ...] = (
    'save',
)


def _is_blank(value: Any) -> bool:
    return not value or (isinstance(value, str) and not value.strip())


def _is_numeric(key: Any) -> bool:
    if isinstance(key, bool):
        return False

    if isinstance(key, int):
        return True

    if isinstance(key, float):
        return math.isfinite(key)

    if isinstance(key, str):
        return NUMERIC_REGEX.match(key) is not None

    return False


def _attribute_value(value: Any) -> str:
    if value is True:
        return '1'

    if value is False:
        return ''

    return str(value)


# containers are copied, anything else (forms, models, classes) is shared
def _copy_option(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy_option(item) for key, item in value.items()}

    if isinstance(value, list):
        return [_copy_option(item) for item in value]

    return value


class FormHelper:
    """
    Configuration and formatting helper shared by forms and their fields.

    `config` is a nested mapping; its `custom_fields` entry maps extra type
    names to field classes (or dotted paths to them) and is registered on
    construction.
    """

    def __init__(self,
        view: Optional[View],
        translator: Translator,
        config: Optional[Mapping[str, Any]] = None
    ):
        if config is None: config = {}

        self.log: logging.Logger = logging.getLogger('formbuilder.helper')

        self._view: View | None = view
        self._translator: Translator = translator
        self._config: Dynamic = Dynamic(config)
        self._custom_types: dict[str, Any] = {}

        self._load_custom_types()

    @classmethod
    def from_config(cls,
        config: FormBuilderConfig,
        view: Optional[View],
        translator: Translator
    ) -> 'FormHelper':
        settings = config.settings

        level = settings.get('log_level', logging.INFO)
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

        configure_logger('formbuilder', settings.get('log_file'), level)

        return cls(view, translator, settings)

    def get_config(self, key: Optional[str], default: Any = None) -> Any:
        return self._config.get_dotted(key, default)

    def get_view(self) -> View | None:
        return self._view

    def get_translator(self) -> Translator:
        return self._translator

    def merge_options(self, first: Mapping[str, Any], second: Mapping[str, Any]) -> dict[str, Any]:
        """
        Recursively replaces the values of `first` with the ones in `second`.
        Mappings present on both sides are merged, any other value is replaced.
        """

        merged = {key: _copy_option(value) for key, value in first.items()}
        for key, value in second.items():
            current = merged.get(key)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                merged[key] = self.merge_options(current, value)
            else:
                merged[key] = _copy_option(value)

        return merged

    def get_field_type(self, type: str) -> Any:
        if _is_blank(type):
            raise InvalidArgumentError('Field type must be provided.')

        if type in self._custom_types:
            return self._custom_types[type]

        field_class = FIELD_TYPES.get(type)
        if field_class is None:
            self.log.debug('unsupported field type %r', type)
            available = list(FIELD_TYPES.keys()) + list(self._custom_types.keys())
            raise UnsupportedTypeError(
                'Unsupported field type [{}]. Available types are: {}'.format(type, ', '.join(available))
            )

        return f'{FIELD_NAMESPACE}.{field_class.value}'

    def get_field_class(self, type: str) -> Any:
        identifier = self.get_field_type(type)
        if not isinstance(identifier, str):
            return identifier

        module_name, _, class_name = identifier.rpartition('.')
        if not module_name:
            raise InvalidArgumentError(f'Field class [{identifier}] for type [{type}] is not a dotted path.')

        module = importlib.import_module(module_name)
        try:
            return getattr(module, class_name)
        except AttributeError:
            raise InvalidArgumentError(f'Field class [{identifier}] for type [{type}] does not exist.') from None

    def prepare_attributes(self, options: Any) -> str | None:
        """
        Converts an attribute mapping into `name="value" ` pairs.

        `None` values are skipped and numeric keys turn their value into a
        boolean attribute (`{0: 'checked'}` renders `checked="checked" `).
        `True` renders as `1` and `False` as an empty value.
        Values are not escaped.
        """

        if not options:
            return None

        if isinstance(options, Mapping):
            items = options.items()
        else:
            items = enumerate(options)

        attributes = []
        for name, option in items:
            if option is not None:
                option = _attribute_value(option)
                name = option if _is_numeric(name) else name
                attributes.append(f'{name}="{option}" ')

        return ''.join(attributes)

    def add_custom_field(self, name: str, cls: Any) -> Any:
        if name not in self._custom_types:
            self.log.debug('registering custom field type %r: %r', name, cls)
            self._custom_types[name] = cls
            return cls

        raise InvalidArgumentError(f'Custom field [{name}] already exists on this form object.')

    def _load_custom_types(self) -> None:
        custom_fields = self.get_config('custom_fields') or {}

        for field_name, field_class in dict(custom_fields).items():
            self.add_custom_field(field_name, field_class)

    def convert_model_to_dict(self, model: Any) -> Any:
        # tagged models are objects, so an empty collection is still a collection
        kind = model_kind(model)
        if kind is ModelKind.record:
            return model.to_dict()

        if kind is ModelKind.collection:
            return model.all()

        if not model:
            return None

        return model

    def format_label(self, name: Optional[str]) -> str | None:
        if not name:
            return None

        if self._translator.has(name):
            translated = self._translator.get(name)

            if isinstance(translated, str):
                return translated

        label = name.replace('_', ' ')
        return label[:1].upper() + label[1:]

    def merge_fields_rules(self, fields: Iterable[Any]) -> Dynamic:
        rules = {}
        attributes = {}
        messages = {}

        for field in fields:
            field_rules = field.get_validation_rules()
            if field_rules:
                rules.update(field_rules.get('rules') or {})
                attributes.update(field_rules.get('attributes') or {})
                messages.update(field_rules.get('error_messages') or {})

        return Dynamic(
            rules=rules,
            attributes=attributes,
            error_messages=messages,
        )

    def transform_to_dot_syntax(self, string: str) -> str:
        for search, replace in (('.', '_'), ('[]', ''), ('[', '.'), (']', '')):
            string = string.replace(search, replace)

        return string

    def check_field_name(self, name: Optional[str], class_name: str) -> bool:
        if _is_blank(name):
            raise InvalidArgumentError(f'Please provide valid field name for class [{class_name}]')

        if name in RESERVED_FIELD_NAMES:
            raise InvalidArgumentError(
                f'Field name [{name}] in form [{class_name}] is a reserved word. Please use a different field name.'
                f'\nList of all reserved words: {", ".join(RESERVED_FIELD_NAMES)}'
            )

        return True
