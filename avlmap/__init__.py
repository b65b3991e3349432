# flake8: noqa

from .map import BSTMap, Map, Position
from .tree import InvariantError

from ._protocols import Comparator as Comparator
from ._protocols import MapKeys as MapKeys
from ._protocols import MapValues as MapValues
from ._protocols import MapItems as MapItems

from ._version import __version__

__all__ = 'Map', 'BSTMap', 'Position', 'InvariantError'
