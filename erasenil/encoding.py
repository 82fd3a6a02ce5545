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
Keyed-container decoding with erasure and encoding with omission, for records that (de)serialize themselves by hand.

A container is a JSON object as produced by `json.loads` (or consumed by `json.dumps`). Each field wrapped by an
`EraseNilDecoding` is read with `decode_erase_nil` and written with `encode_erase_nil`, any other field is handled by
the record as usual:

    Enabled = EraseNilDecoding[EraseNilToTrue]

    @dataclass
    class Feature:
        name: str
        enabled: Enabled

        @classmethod
        def from_json(cls, data: dict[str, Any]) -> 'Feature':
            return cls(name=data['name'], enabled=decode_erase_nil(data, 'enabled', Enabled))

        def to_json(self) -> dict[str, Any]:
            data = {'name': self.name}
            encode_erase_nil(data, 'enabled', self.enabled)
            return data

    Feature.from_json({'name': 'foo'}).to_json() == {'name': 'foo'}
    Feature.from_json({'name': 'foo', 'enabled': True}).to_json() == {'name': 'foo', 'enabled': True}

Layout, for a field `key` erased to `E`:

    missing key or null    -> erased wrapper, reads as E, not written back
    valid value v          -> explicit wrapper, reads as v, written back as v
    invalid value          -> pydantic.ValidationError
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

from structlog import get_logger

from erasenil.exceptions import DecodingError
from erasenil.wrapper import EraseNilDecoding

logger = get_logger()

W = TypeVar('W', bound=EraseNilDecoding)


def decode_value(wrapper_type: type[W], json_value: Any) -> W:
    """ Decode a single value, `None` results in an erased wrapper.

    Raises `pydantic.ValidationError` if the value is not valid for the policy's value type, no conversion is attempted
    (`"3"` is not an `int`).
    """
    if json_value is None:
        return wrapper_type.erased()
    return wrapper_type(wrapper_type.validate_value(json_value))


def encode_value(wrapper: EraseNilDecoding) -> Any:
    """ Encode a single value into its JSON compatible form.

    Outside of a keyed container there is nothing to omit, so the effective value is encoded, even when erased.
    """
    return type(wrapper).type_adapter().dump_python(wrapper.value, mode='json')


def decode_erase_nil(container: Mapping[str, Any], key: str, wrapper_type: type[W]) -> W:
    """ Decode the value under `key`, erasing it when the key is missing or its value is null.
    """
    if not isinstance(container, Mapping):
        raise DecodingError(f'expected a JSON object to decode {key!r} from, got {type(container).__name__}')
    json_value = container.get(key)
    if json_value is None:
        logger.debug('erasing field', key=key, policy=wrapper_type.get_policy().__qualname__,
                     reason='null' if key in container else 'missing')
    return decode_value(wrapper_type, json_value)


def encode_erase_nil(container: MutableMapping[str, Any], key: str, wrapper: EraseNilDecoding) -> None:
    """ Encode the wrapper under `key`, or leave the key out if the wrapper was filled by erasure.
    """
    if wrapper.is_erased():
        logger.debug('omitting erased field', key=key, policy=wrapper.get_policy().__qualname__)
        return
    container[key] = encode_value(wrapper)
