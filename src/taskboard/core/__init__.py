"""Core board components and abstractions."""

from taskboard.core.config import BoardConfig
from taskboard.core.exceptions import *  # noqa: F403
from taskboard.core.exceptions import __all__ as exceptions__all__
from taskboard.core.types import *  # noqa: F403
from taskboard.core.types import __all__ as types__all__

__all__ = ["BoardConfig"]

__all__ += exceptions__all__
__all__ += types__all__
