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

import json
from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import ValidationError

from erasenil import (
    DecodingError,
    EraseNilDecoding,
    EraseNilToEmpty,
    EraseNilToTrue,
    EraseNilToZero,
    decode_erase_nil,
    decode_value,
    encode_erase_nil,
    encode_value,
)
from erasenil.utils.pydantic import BaseModel

Enabled = EraseNilDecoding[EraseNilToTrue]
Retries = EraseNilDecoding[EraseNilToZero]
Tags = EraseNilDecoding[EraseNilToEmpty[list[str]]]


class Owner(BaseModel):
    id: int

    @classmethod
    def empty(cls) -> 'Owner':
        return cls(id=0)


OwnerField = EraseNilDecoding[EraseNilToEmpty[Owner]]


@dataclass
class Feature:
    name: str
    enabled: Enabled
    retries: Retries
    tags: Tags
    owner: OwnerField

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> 'Feature':
        return cls(
            name=data['name'],
            enabled=decode_erase_nil(data, 'enabled', Enabled),
            retries=decode_erase_nil(data, 'retries', Retries),
            tags=decode_erase_nil(data, 'tags', Tags),
            owner=decode_erase_nil(data, 'owner', OwnerField),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {'name': self.name}
        encode_erase_nil(data, 'enabled', self.enabled)
        encode_erase_nil(data, 'retries', self.retries)
        encode_erase_nil(data, 'tags', self.tags)
        encode_erase_nil(data, 'owner', self.owner)
        return data


@pytest.mark.parametrize(
    'data',
    [
        {'name': 'foo'},
        {'name': 'foo', 'enabled': None, 'retries': None, 'tags': None, 'owner': None},
    ]
)
def test_decode_missing_or_null_is_erased(data: dict[str, Any]) -> None:
    feature = Feature.from_json(data)

    assert feature.enabled.value is True
    assert feature.retries.value == 0
    assert feature.tags.value == []
    assert feature.owner.value == Owner(id=0)
    assert feature.to_json() == {'name': 'foo'}


def test_decode_present_values() -> None:
    data = {'name': 'foo', 'enabled': False, 'retries': 3, 'tags': ['a', 'b'], 'owner': {'id': 7}}
    feature = Feature.from_json(data)

    assert feature.enabled.value is False
    assert feature.retries.value == 3
    assert feature.tags.value == ['a', 'b']
    assert feature.owner.value == Owner(id=7)
    assert feature.to_json() == data


def test_explicit_defaults_round_trip() -> None:
    data = {'name': 'foo', 'enabled': True, 'retries': 0, 'tags': [], 'owner': {'id': 0}}
    feature = Feature.from_json(json.loads(json.dumps(data)))

    assert Feature.from_json({'name': 'foo'}) == feature
    assert json.loads(json.dumps(feature.to_json())) == data


def test_assigned_fields_are_encoded() -> None:
    feature = Feature.from_json({'name': 'foo'})
    feature.enabled.value = True
    feature.tags.value = ['x']

    assert feature.to_json() == {'name': 'foo', 'enabled': True, 'tags': ['x']}


def test_erased_values_changed_in_place_are_encoded() -> None:
    feature = Feature.from_json({'name': 'foo'})
    feature.tags.value.append('x')

    assert feature.to_json() == {'name': 'foo', 'tags': ['x']}


@pytest.mark.parametrize(
    'data',
    [
        {'name': 'foo', 'retries': 'many'},
        {'name': 'foo', 'enabled': 'maybe'},
        {'name': 'foo', 'tags': 'a,b'},
        {'name': 'foo', 'tags': [1, 2]},
        {'name': 'foo', 'owner': {'id': 'x'}},
        {'name': 'foo', 'retries': '3'},
        {'name': 'foo', 'retries': 3.0},
        {'name': 'foo', 'enabled': 'no'},
        {'name': 'foo', 'enabled': 0},
        {'name': 'foo', 'owner': {'id': '7'}},
    ]
)
def test_type_mismatch_propagates(data: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        Feature.from_json(data)


@pytest.mark.parametrize('container', [None, [], 'enabled', 1])
def test_decode_requires_a_json_object(container: Any) -> None:
    with pytest.raises(DecodingError):
        decode_erase_nil(container, 'enabled', Enabled)


def test_encode_erased_leaves_existing_key_untouched() -> None:
    container = {'enabled': 'untouched'}
    encode_erase_nil(container, 'enabled', Enabled.erased())

    assert container == {'enabled': 'untouched'}


def test_single_values() -> None:
    assert decode_value(Enabled, None).is_erased()
    assert decode_value(Enabled, False) == Enabled(False)
    assert not decode_value(Enabled, True).is_erased()

    # outside of a keyed container the effective value is always encoded
    assert encode_value(Enabled.erased()) is True
    assert encode_value(OwnerField.erased()) == {'id': 0}
    assert encode_value(OwnerField(Owner(id=2))) == {'id': 2}

    with pytest.raises(ValidationError):
        decode_value(Retries, [])
    with pytest.raises(ValidationError):
        decode_value(Retries, True)
    with pytest.raises(ValidationError):
        decode_value(Enabled, 1)
