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

from enum import Enum, EnumMeta
from typing import TypeVar

T = TypeVar("T", bound="StrEnum")


def _fold(value: str) -> str:
    # "search-alias", "SEARCH_ALIAS" and "searchAlias" all fold to "SEARCHALIAS"
    return value.replace("-", "").replace("_", "").upper()


class StrEnumMeta(EnumMeta):
    def _name_lookup(cls, value: str) -> str | None:
        """Return a proper key in the enum if some matching logic works, or None."""
        mmap = {k: v.value for k, v in cls._member_map_.items()}
        # try exact key match
        if value in mmap:
            return value
        # try exact *value* match (server-side spellings are case-sensitive)
        for k, v in mmap.items():
            if v == value:
                return k
        # try case- and separator-insensitive key match
        f_value = _fold(value)
        f_mmap = {_fold(k): k for k in mmap.keys()}
        if f_value in f_mmap:
            return f_mmap[f_value]
        # try case- and separator-insensitive *value* match
        v_mmap = {_fold(v): k for k, v in mmap.items()}
        if f_value in v_mmap:
            return v_mmap[f_value]
        return None

    def __contains__(cls, value: object) -> bool:
        """Return True if the provided string belongs to the enum."""
        if isinstance(value, str):
            return cls._name_lookup(value) is not None
        return isinstance(value, cls)


class StrEnum(Enum, metaclass=StrEnumMeta):
    @classmethod
    def coerce(cls: type[T], value: str | T) -> T:
        """
        Accepts either a string or an instance of the Enum itself.
        If a string is passed, it converts it to the corresponding
        Enum value (insensitive to case and to '-'/'_' separators), so that
        the original spelling is not kept: the member value is what gets encoded.
        If an Enum instance is passed, it returns it as-is.
        Raises ValueError if the string does not match any enum member.
        """

        if isinstance(value, cls):
            return value
        elif isinstance(value, str):
            norm_value = cls._name_lookup(value)
            if norm_value is not None:
                return cls[norm_value]
        raise ValueError(
            f"Invalid value '{value}' for {cls.__name__}. "
            f"Allowed values are: {cls.values()}"
        )

    @classmethod
    def values(cls) -> list[str]:
        """The list of the wire-level string values of this enum."""
        return [e.value for e in cls]
