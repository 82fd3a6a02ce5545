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

from typing import TypeVar

import pytest

from erasenil.utils.typing import SpecializableMixin, get_specialized_arg, is_specialized, type_name

T = TypeVar('T')


class Box(SpecializableMixin):
    pass


class PositiveBox(SpecializableMixin):
    @classmethod
    def __specialize_arg__(cls, arg: object, /) -> object:
        if arg not in (int, float):
            raise TypeError('expected a number type')
        return arg


def test_specialization() -> None:
    assert Box[int] is Box[int]
    assert Box[int] is not Box[str]
    assert Box[(int,)] is Box[int]
    assert get_specialized_arg(Box[int]) is int
    assert Box[int].__specialized_from__ is Box
    assert Box[int].__qualname__ == 'Box[int]'
    assert Box[list[int]].__qualname__ == 'Box[list[int]]'
    assert Box[int].__module__ == Box.__module__


def test_is_specialized() -> None:
    assert not is_specialized(Box)
    assert is_specialized(Box[int])

    class SubBox(Box[int]):
        pass

    assert is_specialized(SubBox)

    with pytest.raises(TypeError):
        get_specialized_arg(Box)


def test_specialization_errors() -> None:
    with pytest.raises(TypeError):
        Box[int, str]
    with pytest.raises(TypeError):
        Box[int][str]


def test_specialize_arg_hook() -> None:
    assert get_specialized_arg(PositiveBox[int]) is int
    with pytest.raises(TypeError):
        PositiveBox[str]
    # type vars skip the hook
    assert get_specialized_arg(PositiveBox[T]) is T


@pytest.mark.parametrize(
    ['type_', 'expected'],
    [
        (int, 'int'),
        (list[str], 'list[str]'),
        (dict[str, int], 'dict[str, int]'),
        (Box, 'Box'),
        (Box[int], 'Box[int]'),
    ]
)
def test_type_name(type_: object, expected: str) -> None:
    assert type_name(type_) == expected
