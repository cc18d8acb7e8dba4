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

import logging
from typing import Any, Iterable

from arangopy.exceptions.arango_exceptions import MalformedPayloadException
from arangopy.settings.defaults import RESPONSE_ENVELOPE_KEYS

logger = logging.getLogger(__name__)


def _residual_keys(raw_dict: dict[str, Any], known_keys: Iterable[str]) -> set[str]:
    return set(raw_dict.keys()) - set(known_keys)


def _warn_residual_keys(
    klass: type, raw_dict: dict[str, Any], known_keys: Iterable[str]
) -> None:
    residual_keys = _residual_keys(raw_dict, known_keys)
    if residual_keys:
        logger.warning(
            "Unexpected key(s) encountered parsing a dictionary into "
            f"a `{klass.__name__}`: '{','.join(sorted(residual_keys))}'"
        )


def _extra_keys(raw_dict: dict[str, Any], known_keys: Iterable[str]) -> dict[str, Any]:
    """Collect the items of a dict not belonging to the known keys, in order."""
    _known = set(known_keys)
    return {k: v for k, v in raw_dict.items() if k not in _known}


def _strip_envelope(raw_response: dict[str, Any]) -> dict[str, Any]:
    """Remove the generic status keys ("error", "code", ...) from a response."""
    return {k: v for k, v in raw_response.items() if k not in RESPONSE_ENVELOPE_KEYS}


def _drop_unset_items(items: dict[str, Any]) -> dict[str, Any]:
    """Build a payload dict keeping only the values that are not None."""
    return {k: v for k, v in items.items() if v is not None}


def _ensure_dict(klass: type, raw_dict: Any) -> dict[str, Any]:
    """Refuse to decode into `klass` anything that is not a JSON object."""
    if not isinstance(raw_dict, dict):
        raise MalformedPayloadException(
            text=(
                f"Cannot parse {raw_dict!r} into a `{klass.__name__}`: "
                "a dictionary is required."
            ),
            raw_payload=None,
        )
    return raw_dict


def _decode_list(raw_value: Any) -> list[Any]:
    """
    Decode a JSON array into a new list. A string is rejected as well,
    rather than being split into its characters.
    """
    if not isinstance(raw_value, list):
        raise TypeError(f"A list is required, got {raw_value!r}.")
    return list(raw_value)
