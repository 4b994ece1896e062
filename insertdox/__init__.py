"""Insert Doxygen comment blocks in front of C function definitions."""

from .config import ConfigError, Options
from .lexer import Annotator, annotate_stream, annotate_text
from .render import BoilerplateError

__version__ = '0.91'

__all__ = [
    'Annotator',
    'BoilerplateError',
    'ConfigError',
    'Options',
    'annotate_stream',
    'annotate_text',
    '__version__',
]
