from . import fields as _fields, forms as _forms
from .fields import *
from .forms import *

__all__ = _fields.__all__ + _forms.__all__
