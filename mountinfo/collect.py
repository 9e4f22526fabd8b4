# Copyright (c) The mountinfo authors.
# All rights reserved.
import bisect
from typing import Iterator, List, overload, Sequence, Union

from mountinfo.errors import MountInfoConfigError
from mountinfo.schemas.mount import FieldSelector, MountRecord


def select_field(record: MountRecord, selector: FieldSelector) -> str:
    if selector is FieldSelector.SOURCE:
        return record.source
    if selector is FieldSelector.TARGET:
        return record.target
    if selector is FieldSelector.FSTYPE:
        return record.fstype
    if selector is FieldSelector.OPTIONS:
        return record.options
    raise MountInfoConfigError(f"Invalid field selector: {selector!r}")


class ResultSet(Sequence[str]):
    """Strictly ascending list of strings; adding a value already present is a no-op.

    Examples:
    >>> r = ResultSet()
    >>> for v in ["/var", "/", "/var", "/home"]:
    ...     r.add(v)
    >>> list(r)
    ['/', '/home', '/var']
    """

    def __init__(self) -> None:
        self._values: List[str] = []

    def add(self, value: str) -> bool:
        """Insert `value` in order. Returns False if it was already present."""
        i = bisect.bisect_left(self._values, value)
        if i < len(self._values) and self._values[i] == value:
            return False
        self._values.insert(i, value)
        return True

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[str, Sequence[str]]:
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self._values)

    def __repr__(self) -> str:
        return f"ResultSet({self._values!r})"
