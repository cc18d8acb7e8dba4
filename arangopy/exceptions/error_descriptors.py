# Copyright DataStax, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ArangoErrorDescriptor:
    """
    An object representing the structured error body returned by the server
    alongside a non-success HTTP status code, such as:
        {"error": true, "code": 404, "errorNum": 1203, "errorMessage": "..."}

    Attributes:
        code: the HTTP status code as reported in the body's "code" field.
        error_num: the server-specific error number ("errorNum").
        error_message: the text found in the "errorMessage" field.
        attributes: a dict with any further key-value pairs returned by the API.
    """

    code: int | None
    error_num: int | None
    error_message: str | None
    attributes: dict[str, Any]

    _known_dict_fields = {
        "error",
        "code",
        "errorNum",
        "errorMessage",
    }

    def __init__(self, error_dict: dict[str, Any] | str) -> None:
        if isinstance(error_dict, str):
            self.code = None
            self.error_num = None
            self.error_message = error_dict
            self.attributes = {}
        else:
            self.code = error_dict.get("code")
            self.error_num = error_dict.get("errorNum")
            self.error_message = error_dict.get("errorMessage")
            self.attributes = {
                k: v for k, v in error_dict.items() if k not in self._known_dict_fields
            }

    def __repr__(self) -> str:
        pieces = [
            f"code={self.code}" if self.code is not None else None,
            f"error_num={self.error_num}" if self.error_num is not None else None,
            f"error_message={self.error_message.__repr__()}"
            if self.error_message
            else None,
            f"attributes={self.attributes.__repr__()}" if self.attributes else None,
        ]
        return f"{self.__class__.__name__}({', '.join(pc for pc in pieces if pc)})"

    def __str__(self) -> str:
        return self.summary()

    def summary(self) -> str:
        """
        Determine a string succinct description of this descriptor.

        The precise format of this summary is determined by which fields are set.
        """
        if self.error_num is not None:
            if self.error_message:
                return f"{self.error_message} (errorNum {self.error_num})"
            else:
                return f"errorNum {self.error_num}"
        else:
            return self.error_message or ""
