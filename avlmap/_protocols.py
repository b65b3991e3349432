from typing import Iterable
from typing import Iterator
from typing import Tuple
from typing import TypeVar

from typing_extensions import Protocol


KT = TypeVar('KT')
KT_co = TypeVar('KT_co', covariant=True)
KT_contra = TypeVar('KT_contra', contravariant=True)
T = TypeVar('T')
VT = TypeVar('VT')
VT_co = TypeVar('VT_co', covariant=True)


class Comparator(Protocol[KT_contra]):
    def __call__(self, __a: KT_contra, __b: KT_contra) -> bool: ...


class MapKeys(Protocol[KT_co]):
    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[KT_co]: ...
    def __reversed__(self) -> Iterator[KT_co]: ...


class MapValues(Protocol[VT_co]):
    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[VT_co]: ...
    def __reversed__(self) -> Iterator[VT_co]: ...


class MapItems(Protocol[KT_co, VT_co]):
    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[Tuple[KT_co, VT_co]]: ...
    def __reversed__(self) -> Iterator[Tuple[KT_co, VT_co]]: ...


class IterableItems(Protocol[KT_co, VT_co]):
    def items(self) -> Iterable[Tuple[KT_co, VT_co]]: ...


class DefaultFactory(Protocol[VT_co]):
    def __call__(self) -> VT_co: ...
