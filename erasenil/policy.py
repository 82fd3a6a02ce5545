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
Policies decide which value a field is erased to when it's missing or null.

A policy is a stateless class, it is never instantiated, it only answers two questions: what is the type of the wrapped
value and what is the erased value. Custom policies are declared by subclassing `EraseNilPolicy`:

>>> class EraseNilToTwo(EraseNilPolicy[int]):
...     @classmethod
...     def value_type(cls) -> type[int]:
...         return int
...
...     @classmethod
...     def erased_value(cls) -> int:
...         return 2
...
>>> EraseNilToTwo.erased_value()
2

The built-in policies:

>>> EraseNilToTrue.erased_value(), EraseNilToFalse.erased_value()
(True, False)
>>> EraseNilToZero.erased_value(), EraseNilToZero[float].erased_value()
(0, 0.0)
>>> EraseNilToEmpty[list[str]].erased_value(), EraseNilToEmpty[str].erased_value()
([], '')
"""

from abc import ABC, abstractmethod
from inspect import isabstract
from numbers import Number
from typing import Any, Generic, TypeVar, get_origin

from typing_extensions import override

from erasenil.empty import is_empty_initializable, make_empty
from erasenil.exceptions import PolicyError
from erasenil.utils.typing import SpecializableMixin, get_specialized_arg, is_specialized, type_name

V = TypeVar('V')


class EraseNilPolicy(ABC, Generic[V]):
    """ Base class for every policy, it pairs a value type with the value used when the field is erased.

    Implementations must be deterministic: `erased_value()` always returns an equal value, and a fresh one when the
    value is mutable.
    """

    @classmethod
    @abstractmethod
    def value_type(cls) -> Any:
        """The type of the wrapped value, it is used to validate and serialize present values."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def erased_value(cls) -> V:
        """The value observed when the field was erased."""
        raise NotImplementedError


def check_policy(policy: Any, /) -> type[EraseNilPolicy]:
    """ Make sure `policy` is a usable policy class and return it.

    Asking the value type early surfaces misuse (like an unspecialized `EraseNilToEmpty`) at declaration time instead
    of at the first decode.
    """
    if not (isinstance(policy, type) and issubclass(policy, EraseNilPolicy)):
        raise PolicyError(f'expected an EraseNilPolicy subclass, got {policy!r}')
    if isabstract(policy):
        raise PolicyError(f'{policy.__qualname__} is abstract')
    policy.value_type()
    return policy


class EraseNilToTrue(EraseNilPolicy[bool]):
    @override
    @classmethod
    def value_type(cls) -> type[bool]:
        return bool

    @override
    @classmethod
    def erased_value(cls) -> bool:
        return True


class EraseNilToFalse(EraseNilPolicy[bool]):
    @override
    @classmethod
    def value_type(cls) -> type[bool]:
        return bool

    @override
    @classmethod
    def erased_value(cls) -> bool:
        return False


class EraseNilToZero(SpecializableMixin, EraseNilPolicy[V]):
    """ Erases to the zero of a numeric type, `int` unless specialized, as in `EraseNilToZero[float]`.
    """

    @override
    @classmethod
    def __specialize_arg__(cls, arg: Any, /) -> Any:
        if get_origin(arg) is not None or not (isinstance(arg, type) and issubclass(arg, Number)):
            raise PolicyError(f'{type_name(arg)} is not a numeric type')
        return arg

    @override
    @classmethod
    def value_type(cls) -> Any:
        if is_specialized(cls):
            return get_specialized_arg(cls)
        return int

    @override
    @classmethod
    def erased_value(cls) -> V:
        return cls.value_type()()


class EraseNilToEmpty(SpecializableMixin, EraseNilPolicy[V]):
    """ Erases to the empty value of the type it is specialized with, as in `EraseNilToEmpty[list[str]]`.

    Accepted types are the ones `erasenil.empty.make_empty` can build.
    """

    @override
    @classmethod
    def __specialize_arg__(cls, arg: Any, /) -> Any:
        if not is_empty_initializable(arg):
            raise PolicyError(f'{type_name(arg)} is not empty-initializable')
        return arg

    @override
    @classmethod
    def value_type(cls) -> Any:
        if not is_specialized(cls):
            raise PolicyError(f'{cls.__qualname__}[...] requires the type to erase to')
        return get_specialized_arg(cls)

    @override
    @classmethod
    def erased_value(cls) -> V:
        return make_empty(cls.value_type())
