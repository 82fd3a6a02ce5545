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

from __future__ import annotations

from typing import Any, ClassVar, TypeVar
from weakref import WeakValueDictionary

_NOT_SPECIALIZED = object()


def type_name(type_: Any, /) -> str:
    """ Readable name for a type argument, used in reprs and error messages.

    >>> type_name(int)
    'int'
    >>> type_name(list[str])
    'list[str]'
    >>> type_name(dict[str, int])
    'dict[str, int]'
    """
    if isinstance(type_, type) and not hasattr(type_, '__origin__'):
        return type_.__qualname__
    return repr(type_)


class SpecializableMixin:
    """
    Mixin that turns `C[arg]` into a concrete subclass of `C` that carries `arg` at runtime.

    Plain `typing.Generic` forgets its arguments once an instance is created, which is not enough when behavior depends
    on the argument (a wrapper needs to know its policy, a policy needs to know its value type). Subscribing a class
    that uses this mixin creates (and caches) a subclass, so `C[int] is C[int]` and `C[int].__specialized_arg__` is
    `int`.

    >>> class Box(SpecializableMixin):
    ...     pass
    ...
    >>> Box[int] is Box[int]
    True
    >>> Box[int].__specialized_arg__
    <class 'int'>
    >>> Box[int].__qualname__
    'Box[int]'
    >>> issubclass(Box[int], Box)
    True
    >>> is_specialized(Box), is_specialized(Box[int])
    (False, True)

    Only one argument is accepted, and a specialized class cannot be specialized again:

    >>> try:
    ...     Box[int, str]
    ... except TypeError as e:
    ...     print(e)
    Box[...] expects exactly one type argument; got 2
    >>> try:
    ...     Box[int][str]
    ... except TypeError as e:
    ...     print(e)
    Box[int] is already specialized
    """

    # shared by all subclasses, maps (origin, arg) -> subclass; weak values so dynamically created classes can go away
    # once nothing references them anymore
    __specialization_cache: ClassVar[WeakValueDictionary[tuple[type, Any], type]] = WeakValueDictionary()

    __specialized_arg__: ClassVar[Any]
    __specialized_from__: ClassVar[type]

    @classmethod
    def __specialize_arg__(cls, arg: Any, /) -> Any:
        """ Hook for subclasses to check (and possibly convert) the argument before it is bound.

        It is not called for TypeVar arguments, those are bound as-is so the class can still be used in signatures.
        """
        return arg

    def __class_getitem__(cls, params: Any) -> Any:
        if isinstance(params, tuple):
            if len(params) != 1:
                raise TypeError(f'{cls.__name__}[...] expects exactly one type argument; got {len(params)}')
            params, = params

        if is_specialized(cls):
            raise TypeError(f'{cls.__qualname__} is already specialized')

        arg = params if isinstance(params, TypeVar) else cls.__specialize_arg__(params)

        cache = SpecializableMixin.__specialization_cache
        key = (cls, arg)
        sub = cache.get(key)
        if sub is None:
            sub = type(cls.__name__, (cls,), {
                '__module__': cls.__module__,
                '__qualname__': f'{cls.__qualname__}[{type_name(arg)}]',
                '__specialized_arg__': arg,
                '__specialized_from__': cls,
            })
            cache[key] = sub
        return sub


def is_specialized(cls: type, /) -> bool:
    """Whether `cls` (or one of its bases) was created by subscribing a `SpecializableMixin` class."""
    return getattr(cls, '__specialized_arg__', _NOT_SPECIALIZED) is not _NOT_SPECIALIZED


def get_specialized_arg(cls: type, /) -> Any:
    """Return the argument bound to a specialized class, raise TypeError if it isn't specialized."""
    arg = getattr(cls, '__specialized_arg__', _NOT_SPECIALIZED)
    if arg is _NOT_SPECIALIZED:
        raise TypeError(f'{cls.__qualname__}[...] requires a type argument, got none')
    return arg
