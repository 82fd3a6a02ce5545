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

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import Field, GetCoreSchemaHandler, TypeAdapter
from pydantic_core import CoreSchema, core_schema, to_json
from typing_extensions import Self, override

from erasenil.policy import EraseNilPolicy, check_policy
from erasenil.utils.typing import SpecializableMixin, get_specialized_arg

P = TypeVar('P', bound=EraseNilPolicy)


@lru_cache(maxsize=None)
def get_type_adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


class EraseNilDecoding(SpecializableMixin, Generic[P]):
    """ Holds a field value that falls back to the policy's erased value when it was never set.

    The wrapper must be bound to a policy before use, `EraseNilDecoding[EraseNilToTrue](False)` holds an explicit
    `False`, while `EraseNilDecoding[EraseNilToTrue].erased()` holds nothing and reads as `True`.

    Whether a value was explicitly set is kept internally (see `is_erased`) even when it is equal to the erased value,
    it is only relevant when encoding: erased fields are omitted, explicit ones are always written. Equality and hashing
    only look at the policy and the effective value.

    The erased value is built once per wrapper, on its first read. Changing it in place makes it explicit, as long as
    it no longer equals a fresh erased value.

    >>> from erasenil.policy import EraseNilToEmpty, EraseNilToTrue
    >>> flag = EraseNilDecoding[EraseNilToTrue].erased()
    >>> flag.value, flag.is_erased()
    (True, True)
    >>> flag
    EraseNilDecoding[EraseNilToTrue].erased()
    >>> flag.value = True
    >>> flag.value, flag.is_erased()
    (True, False)
    >>> flag == EraseNilDecoding[EraseNilToTrue].erased()
    True
    >>> tags = EraseNilDecoding[EraseNilToEmpty[list[str]]].erased()
    >>> tags.value.append('foo')
    >>> tags.value, tags.is_erased()
    (['foo'], False)
    """

    __specialized_arg__: ClassVar[type[EraseNilPolicy]]

    _actual_value: Any
    _erased_value: Any

    @override
    @classmethod
    def __specialize_arg__(cls, arg: Any, /) -> Any:
        return check_policy(arg)

    def __new__(cls, *args: Any, **kwargs: Any) -> Self:
        # an unbound wrapper has no erased value to fall back to
        get_specialized_arg(cls)
        return super().__new__(cls)

    def __init__(self, value: Any) -> None:
        if value is None:
            raise TypeError('an explicit value cannot be None, use erased() for an erased field')
        self._actual_value = value
        self._erased_value = None

    @classmethod
    def from_optional(cls, value: Any | None) -> Self:
        """Build a wrapper from an optional value, `None` results in an erased wrapper."""
        self = cls.__new__(cls)
        self._actual_value = value
        self._erased_value = None
        return self

    @classmethod
    def erased(cls) -> Self:
        """Build a wrapper that was filled by erasure."""
        return cls.from_optional(None)

    @classmethod
    def get_policy(cls) -> type[EraseNilPolicy]:
        return get_specialized_arg(cls)

    @classmethod
    def type_adapter(cls) -> TypeAdapter:
        """The pydantic adapter of the policy's value type."""
        return get_type_adapter(cls.get_policy().value_type())

    @classmethod
    def validate_value(cls, value: Any) -> Any:
        """ Validate a non-null value for the policy's value type, in strict mode.

        The value is checked the way its JSON form would be, so `"1"` or `1.0` is not an `int` and `0` or `"false"` is
        not a `bool`. An instance of exactly the value type is taken as it is.

        Raises `pydantic.ValidationError` if the value is not valid.
        """
        if type(value) is cls.get_policy().value_type():
            return value
        return cls.type_adapter().validate_json(to_json(value), strict=True)

    def _promote_erased_value(self) -> None:
        # an erased value that was changed in place becomes the explicit value
        if self._actual_value is not None or self._erased_value is None:
            return
        if self._erased_value != self.get_policy().erased_value():
            self._actual_value = self._erased_value
            self._erased_value = None

    @property
    def actual_value(self) -> Any | None:
        """The value that was explicitly set, or None if it was erased."""
        self._promote_erased_value()
        return self._actual_value

    @property
    def value(self) -> Any:
        """The effective value: the explicit value when set, otherwise the policy's erased value."""
        if self._actual_value is not None:
            return self._actual_value
        if self._erased_value is None:
            self._erased_value = self.get_policy().erased_value()
        return self._erased_value

    @value.setter
    def value(self, value: Any) -> None:
        if value is None:
            raise TypeError('an explicit value cannot be None, use reset() to erase the field')
        self._actual_value = value
        self._erased_value = None

    def reset(self) -> None:
        """Forget the explicit value, the field is omitted again when encoded."""
        self._actual_value = None
        self._erased_value = None

    def is_erased(self) -> bool:
        return self.actual_value is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EraseNilDecoding):
            return NotImplemented
        return self.get_policy() is other.get_policy() and bool(self.value == other.value)

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        name = type(self).__qualname__
        if self.is_erased():
            return f'{name}.erased()'
        return f'{name}({self._actual_value!r})'

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        # null is accepted and erased, anything else must be a valid value of the policy's type
        def validate(value: Any) -> EraseNilDecoding:
            if isinstance(value, EraseNilDecoding):
                value = value.actual_value
            if value is None:
                return cls.erased()
            return cls(cls.validate_value(value))

        def serialize(wrapper: EraseNilDecoding) -> Any:
            return wrapper.value

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(serialize, info_arg=False),
        )


if TYPE_CHECKING:
    # For type checking: EraseNil[P] is just the wrapper
    EraseNil = EraseNilDecoding
else:
    # At runtime: EraseNil[P] returns Annotated[EraseNilDecoding[P], Field(default_factory=...)]
    #
    # Usage:
    #     from erasenil import EraseNil, EraseNilToEmpty, EraseNilToTrue
    #     from erasenil.utils.pydantic import BaseModel
    #
    #     class Settings(BaseModel):
    #         enabled: EraseNil[EraseNilToTrue]
    #         tags: EraseNil[EraseNilToEmpty[list[str]]]
    #
    # Behavior:
    #     - Deserialization: a missing key or null results in an erased wrapper
    #     - Serialization: the effective value, erased fields are omitted by erasenil's BaseModel

    class _EraseNilMeta(type):
        """Metaclass that makes EraseNil[P] return the annotated wrapper type at runtime."""

        def __getitem__(cls, policy: type[EraseNilPolicy]) -> Any:
            wrapper_type = EraseNilDecoding[policy]
            return Annotated[wrapper_type, Field(default_factory=wrapper_type.erased)]

    class EraseNil(metaclass=_EraseNilMeta):
        """EraseNil[P] declares a model field wrapped by EraseNilDecoding[P] that defaults to erased."""
        pass
