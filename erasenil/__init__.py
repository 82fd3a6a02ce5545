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
Decode missing or null fields into a default ("erased") value, and leave them out again when encoding.
"""

from erasenil.empty import EmptyInitializable, is_empty_initializable, make_empty
from erasenil.encoding import decode_erase_nil, decode_value, encode_erase_nil, encode_value
from erasenil.exceptions import DecodingError, EraseNilError, PolicyError
from erasenil.policy import EraseNilPolicy, EraseNilToEmpty, EraseNilToFalse, EraseNilToTrue, EraseNilToZero
from erasenil.version import __version__
from erasenil.wrapper import EraseNil, EraseNilDecoding

__all__ = [
    'DecodingError',
    'EmptyInitializable',
    'EraseNil',
    'EraseNilDecoding',
    'EraseNilError',
    'EraseNilPolicy',
    'EraseNilToEmpty',
    'EraseNilToFalse',
    'EraseNilToTrue',
    'EraseNilToZero',
    'PolicyError',
    '__version__',
    'decode_erase_nil',
    'decode_value',
    'encode_erase_nil',
    'encode_value',
    'is_empty_initializable',
    'make_empty',
]
