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

from typing import Any

from pydantic import (
    BaseModel as PydanticBaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from erasenil.wrapper import EraseNilDecoding


class BaseModel(PydanticBaseModel):
    """Substitute for pydantic's BaseModel.
    This class defines a project BaseModel to be used instead of pydantic's, it omits erased `EraseNil[...]` fields when
    serializing and sets stricter global configurations. Other configurations can be set on a case by case basis.

    Models are not frozen, assigning a value to an `EraseNil[...]` field (`model.enabled = True`) is validated and
    makes the field explicit, so it is written even if it equals the erased value.

    Read: https://docs.pydantic.dev/latest/concepts/config/
    """
    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    @model_serializer(mode='wrap')
    def _omit_erased_fields(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        for name, field in type(self).model_fields.items():
            value = getattr(self, name, None)
            if not isinstance(value, EraseNilDecoding) or not value.is_erased():
                continue
            key = name
            if info.by_alias:
                key = field.serialization_alias or field.alias or name
            data.pop(key, None)
        return data

    def json_dumpb(self) -> bytes:
        """Utility method for converting a Model into bytes representation of a JSON."""
        return self.model_dump_json().encode('utf-8')
