from typing import Any, ClassVar, Optional, Mapping, TYPE_CHECKING

from ..dynamic import Dynamic
from ..helper import InvalidArgumentError

if TYPE_CHECKING:
    from ..helper import FormHelper
    from .forms import Form

__all__ = [
    'FormField',
    'InputType',
    'SelectType',
    'TextareaType',
    'ButtonType',
    'CheckableType',
    'ChoiceType',
    'ChildFormType',
    'EntityType',
    'CollectionType',
    'RepeatedType',
    'StaticType',
]


class FormField:
    """
    Base class of every field type.

    Options are merged over the class `defaults`, so subclasses only declare
    what they add. The ones every field understands:

    - `label`: defaults to the formatted field name
    - `attr`: html attributes, see `FormHelper.prepare_attributes`
    - `rules`: validation rule expression (`'required|email'`)
    - `error_messages`: overrides keyed by rule, or by `<name>.<rule>`
    - `default_value`: value used while nothing was filled in
    """

    template: ClassVar[str] = 'text'
    defaults: ClassVar[dict[str, Any]] = {}
    has_value: ClassVar[bool] = True

    def __init__(self,
        name: str,
        type: str,
        helper: 'FormHelper',
        options: Optional[Mapping[str, Any]] = None,
        parent: Optional['Form'] = None
    ):
        if options is None: options = {}

        owner = type_name(parent) if parent is not None else self.__class__.__name__
        helper.check_field_name(name, owner)

        self.name: str = name
        self.type: str = type
        self.helper: 'FormHelper' = helper
        self.parent: Optional['Form'] = parent

        base = helper.merge_options(self._base_options(), self.defaults)
        self.options: dict[str, Any] = helper.merge_options(base, options)

        self._value: Any = None

    def _base_options(self) -> dict[str, Any]:
        return {
            'label': self.helper.format_label(self.name),
            'attr': {},
            'rules': None,
            'error_messages': {},
            'default_value': None,
        }

    @property
    def real_name(self) -> str:
        if self.parent is not None and self.parent.name:
            return f'{self.parent.name}[{self.name}]'
        return self.name

    def get_name_key(self) -> str:
        return self.helper.transform_to_dot_syntax(self.real_name)

    def get_option(self, key: str, default: Any = None) -> Any:
        return Dynamic(self.options).get_dotted(key, default)

    def set_option(self, key: str, value: Any) -> None:
        self.options[key] = value

    def attributes(self) -> str | None:
        return self.helper.prepare_attributes(self.get_option('attr'))

    def get_validation_rules(self) -> dict[str, dict[str, Any]]:
        rules = self.get_option('rules')
        if not rules:
            return {}

        name = self.get_name_key()

        messages = {}
        for key, message in (self.get_option('error_messages') or {}).items():
            if '.' not in key:
                key = f'{name}.{key}'
            messages[key] = message

        return {
            'rules': {name: rules},
            'attributes': {name: self.get_option('label')},
            'error_messages': messages,
        }

    def clear(self) -> None:
        self._value = None

    def fill(self, value: Any) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        if self._value is not None:
            return self._value
        else:
            return self.get_option('default_value')

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value


def type_name(obj: Any) -> str:
    return obj.__class__.__name__


class InputType(FormField):
    def attributes(self) -> str | None:
        attr = self.helper.merge_options({'type': self.type}, self.get_option('attr') or {})
        return self.helper.prepare_attributes(attr)


class TextareaType(FormField):
    template = 'textarea'


class SelectType(FormField):
    template = 'select'
    defaults = {
        'choices': {},
        'empty_value': None,
        'selected': None,
    }

    @property
    def value(self) -> Any:
        if self._value is not None:
            return self._value
        return self.get_option('selected', self.get_option('default_value'))


class ButtonType(FormField):
    template = 'button'
    has_value = False

    def _base_options(self) -> dict[str, Any]:
        options = super()._base_options()
        options['attr'] = {'type': self.type}
        return options

    def fill(self, value: Any) -> None:
        pass


class CheckableType(FormField):
    template = 'checkbox'
    defaults = {
        'value': 1,
        'checked': None,
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.initial_checked: Any = self.options.get('checked')

    def fill(self, value: Any) -> None:
        self._value = value
        self.options['checked'] = bool(value)

    def clear(self) -> None:
        super().clear()
        self.options['checked'] = self.initial_checked

    @property
    def checked(self) -> bool:
        return bool(self.get_option('checked'))

    @property
    def value(self) -> Any:
        return self.get_option('value') if self.checked else None


class ChoiceType(FormField):
    template = 'choice'
    defaults = {
        'choices': {},
        'expanded': False,
        'multiple': False,
        'selected': None,
    }

    def fill(self, value: Any) -> None:
        if self.get_option('multiple') and value is not None and not isinstance(value, (list, tuple, set)):
            value = [value]
        self._value = value

    @property
    def value(self) -> Any:
        if self._value is not None:
            return self._value
        return self.get_option('selected', self.get_option('default_value'))


class EntityType(ChoiceType):
    """
    Choice field whose choices come from models, either the `query` option
    (any iterable of models) or `class.query` when the model class has one.
    `property` names the label column and `property_key` the value column.
    """

    defaults = {
        **ChoiceType.defaults,
        'class': None,
        'query': None,
        'property': 'name',
        'property_key': 'id',
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if not self.get_option('choices'):
            self.options['choices'] = self._load_choices()

    def _load_choices(self) -> dict[Any, Any]:
        query = self.get_option('query')
        if query is None:
            model_class = self.get_option('class')
            query = getattr(model_class, 'query', None)
        if query is None:
            return {}

        rows = self.helper.convert_model_to_dict(query) or []

        label = self.get_option('property')
        key = self.get_option('property_key')

        choices = {}
        for row in rows:
            row = self.helper.convert_model_to_dict(row)
            choices[row[key]] = row[label]

        return choices


class ChildFormType(FormField):
    """
    Embeds another form. The child form is renamed after this field so its
    fields bind as `parent[child]`.
    """

    template = 'child_form'
    defaults = {
        'form': None,
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        form = self.form
        if form is None:
            raise InvalidArgumentError(f'child form field [{self.name}] needs a form option')

        form.name = self.real_name

    @property
    def form(self) -> 'Form | None':
        return self.options.get('form')

    def get_validation_rules(self) -> dict[str, dict[str, Any]]:
        return dict(self.form.get_rules())

    def clear(self) -> None:
        super().clear()
        self.form.clear()

    def fill(self, value: Any) -> None:
        self.form.fill(value)

    @property
    def value(self) -> Dynamic:
        return self.form.value


class CollectionType(FormField):
    """
    List of fields of the same `type`, built from the filled data.
    Children are named `name[0]`, `name[1]`, ...
    """

    template = 'collection'
    defaults = {
        'type': 'text',
        'options': {},
        'data': None,
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.children: list[FormField] = []
        data = self.get_option('data')
        if data is not None:
            self.fill(data)

    def _make_child(self, index: int) -> FormField:
        child_type = self.get_option('type')
        child_class = self.helper.get_field_class(child_type)
        options = self.helper.merge_options({'label': self.get_option('label')}, self.get_option('options') or {})
        return child_class(f'{self.real_name}[{index}]', child_type, self.helper, options)

    def clear(self) -> None:
        super().clear()
        self.children = []

    def fill(self, value: Any) -> None:
        values = self.helper.convert_model_to_dict(value) or []
        self.children = []
        for index, item in enumerate(values):
            child = self._make_child(index)
            child.fill(item)
            self.children.append(child)

    def get_validation_rules(self) -> dict[str, dict[str, Any]]:
        own = super().get_validation_rules()
        merged = self.helper.merge_fields_rules(self.children)
        if own:
            for key in ('rules', 'attributes', 'error_messages'):
                merged[key] = {**own[key], **merged[key]}

        if not merged.rules:
            return {}
        return dict(merged)

    @property
    def value(self) -> list[Any]:
        return [child.value for child in self.children]


class RepeatedType(FormField):
    """
    Pair of fields of the same `type` that must match, the second one being
    named `<name>_confirmation`.
    """

    template = 'repeated'
    defaults = {
        'type': 'password',
        'second_name': None,
        'first_options': {},
        'second_options': {},
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        child_type = self.get_option('type')
        child_class = self.helper.get_field_class(child_type)
        second_name = self.get_option('second_name') or f'{self.name}_confirmation'

        first_options = self.helper.merge_options(
            {'rules': self.get_option('rules'), 'label': self.get_option('label')},
            self.get_option('first_options') or {}
        )
        second_options = self.helper.merge_options(
            {'label': self.helper.format_label(second_name)},
            self.get_option('second_options') or {}
        )

        self.first: FormField = child_class(self.name, child_type, self.helper, first_options, self.parent)
        self.second: FormField = child_class(second_name, child_type, self.helper, second_options, self.parent)

    def get_validation_rules(self) -> dict[str, dict[str, Any]]:
        merged = self.helper.merge_fields_rules([self.first, self.second])
        if not merged.rules:
            return {}
        return dict(merged)

    def clear(self) -> None:
        super().clear()
        self.first.clear()
        self.second.clear()

    def fill(self, value: Any) -> None:
        if isinstance(value, Mapping):
            self.first.fill(value.get('first'))
            self.second.fill(value.get('second'))
        else:
            self.first.fill(value)
            self.second.fill(value)

    @property
    def matches(self) -> bool:
        return self.first.value == self.second.value

    @property
    def value(self) -> Any:
        return self.first.value


class StaticType(FormField):
    template = 'static'
    defaults = {
        'tag': 'div',
    }
