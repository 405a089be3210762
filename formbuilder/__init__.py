from . import _version
from .dynamic import Dynamic
from .config import *
from .logging import *
from .translation import *
from .models import *
from .helper import *
from .forms import *

__version__ = _version.__version__
