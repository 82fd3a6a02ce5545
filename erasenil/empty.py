#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""
The "empty-constructible" capability used by `EraseNilToEmpty`.

Builtin containers and strings are empty-constructible through their no-argument constructor. Any other class opts in
by implementing `EmptyInitializable`:

>>> from dataclasses import dataclass
>>> @dataclass
... class Point:
...     x: int
...     y: int
...
...     @classmethod
...     def empty(cls) -> 'Point':
...         return cls(0, 0)
...
>>> make_empty(Point)
Point(x=0, y=0)
>>> make_empty(list[str]), make_empty(dict[str, int]), make_empty(str)
([], {}, '')
>>> is_empty_initializable(int)
False
>>> try:
...     make_empty(int)
... except PolicyError as e:
...     print(e)
int is not empty-initializable
"""

import inspect
from typing import Any, Optional, Protocol, get_origin, runtime_checkable

from typing_extensions import Self

from erasenil.exceptions import PolicyError
from erasenil.utils.typing import type_name

_BUILTIN_EMPTY_TYPES: tuple[type, ...] = (list, tuple, set, frozenset, dict, str, bytes)


@runtime_checkable
class EmptyInitializable(Protocol):
    """ A type that can produce its canonical empty (or zero) instance with no arguments.
    """

    @classmethod
    def empty(cls) -> Self:
        ...


def _origin_class(type_: Any) -> Optional[type]:
    origin = get_origin(type_) or type_
    return origin if isinstance(origin, type) else None


def _implements_empty(origin: type) -> bool:
    # the runtime protocol check only looks for the attribute
    return issubclass(origin, EmptyInitializable) and isinstance(inspect.getattr_static(origin, 'empty'), classmethod)


def _is_builtin_empty(origin: type) -> bool:
    # named tuples subclass tuple but can't be built without their fields
    if issubclass(origin, tuple) and hasattr(origin, '_fields'):
        return False
    return issubclass(origin, _BUILTIN_EMPTY_TYPES)


def is_empty_initializable(type_: Any) -> bool:
    """Whether `make_empty` can build an instance of the given type (type arguments are ignored)."""
    origin = _origin_class(type_)
    if origin is None:
        return False
    return _implements_empty(origin) or _is_builtin_empty(origin)


def make_empty(type_: Any) -> Any:
    """ Build a fresh empty instance of `type_`, raises PolicyError if the type isn't empty-constructible.

    A new instance is returned on every call, so mutable values are never shared.
    """
    origin = _origin_class(type_)
    if origin is not None:
        if _implements_empty(origin):
            return origin.empty()
        if _is_builtin_empty(origin):
            return origin()
    raise PolicyError(f'{type_name(type_)} is not empty-initializable')
