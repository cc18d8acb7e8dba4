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

from typing import Any, TypeVar

T = TypeVar("T")


class UnsetType:
    """
    Marker for an optional setting that has not been provided at all.

    This is distinct from None, False, zero and the like: a field holding the
    `_UNSET` singleton is omitted altogether from a request payload, whereas
    any other value (falsy ones included) is sent as it is.
    """

    _instance: UnsetType | None = None

    def __new__(cls) -> UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "(unset)"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, UnsetType)

    def __hash__(self) -> int:
        return hash(UnsetType)


_UNSET = UnsetType()


def _unset_or(value: T | None) -> T | UnsetType:
    """Map a None (i.e. absent from a response) into `_UNSET`."""
    if value is None:
        return _UNSET
    return value
