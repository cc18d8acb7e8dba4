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

from dataclasses import dataclass, field
from typing import Any

from arangopy.constants import CollectionType
from arangopy.exceptions import MalformedPayloadException
from arangopy.utils.parsing import _extra_keys, _strip_envelope
from arangopy.utils.unset import _UNSET, UnsetType, _unset_or


@dataclass
class CollectionDescriptor:
    """
    A short description of a collection, as returned by a collection
    listing or by a "get collection" request.

    Attributes:
        id: the server-assigned identifier of the collection.
        name: the collection name.
        collection_type: an integer, see `CollectionType`.
        status: an integer, see `CollectionStatus`.
        is_system: whether this is a system collection.
        globally_unique_id: the globally unique identifier of the collection.
    """

    id: str | UnsetType
    name: str
    collection_type: int
    status: int | UnsetType = _UNSET
    is_system: bool | UnsetType = _UNSET
    globally_unique_id: str | UnsetType = _UNSET

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name.__repr__()}, "
            f"collection_type={self.collection_type})"
        )

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "id": None if isinstance(self.id, UnsetType) else self.id,
                "name": self.name,
                "type": self.collection_type,
                "status": None if isinstance(self.status, UnsetType) else self.status,
                "isSystem": None
                if isinstance(self.is_system, UnsetType)
                else self.is_system,
                "globallyUniqueId": None
                if isinstance(self.globally_unique_id, UnsetType)
                else self.globally_unique_id,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> CollectionDescriptor:
        """
        Create an instance of CollectionDescriptor from a dictionary
        such as one from the server.
        """

        if raw_dict.get("name") is None:
            raise MalformedPayloadException(
                text="A collection description lacks the 'name' field.",
                raw_payload=raw_dict,
            )
        return CollectionDescriptor(
            id=_unset_or(raw_dict.get("id")),
            name=raw_dict["name"],
            collection_type=raw_dict.get("type", CollectionType.DOCUMENT),
            status=_unset_or(raw_dict.get("status")),
            is_system=_unset_or(raw_dict.get("isSystem")),
            globally_unique_id=_unset_or(raw_dict.get("globallyUniqueId")),
        )


@dataclass
class KeyOptions:
    """
    The settings of the document key generator of a collection.

    Attributes:
        key_type: the generator type: "traditional", "autoincrement",
            "uuid" or "padded".
        allow_user_keys: whether documents may bring their own `_key`.
        increment: the increment of an "autoincrement" generator.
        offset: the initial value of an "autoincrement" generator.
    """

    key_type: str | UnsetType = _UNSET
    allow_user_keys: bool | UnsetType = _UNSET
    increment: int | UnsetType = _UNSET
    offset: int | UnsetType = _UNSET

    def as_dict(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in {
                "type": None if isinstance(self.key_type, UnsetType) else self.key_type,
                "allowUserKeys": None
                if isinstance(self.allow_user_keys, UnsetType)
                else self.allow_user_keys,
                "increment": None
                if isinstance(self.increment, UnsetType)
                else self.increment,
                "offset": None if isinstance(self.offset, UnsetType) else self.offset,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> KeyOptions:
        # "lastValue" and the like are server-side state and are not retained
        return KeyOptions(
            key_type=_unset_or(raw_dict.get("type")),
            allow_user_keys=_unset_or(raw_dict.get("allowUserKeys")),
            increment=_unset_or(raw_dict.get("increment")),
            offset=_unset_or(raw_dict.get("offset")),
        )


@dataclass
class CollectionProperties:
    """
    The settings of a collection, used both to create a collection and to
    read or alter its properties. Only the attributes that are set are sent.

    Note that some properties (e.g. the sharding settings, the key options)
    can only be set at creation time: the server ignores them afterwards.

    Attributes:
        wait_for_sync: whether writes are synced to disk before returning.
        schema: a JSON Schema document validation rule (a dictionary).
        cache_enabled: whether the in-memory hash cache for documents is on.
        number_of_shards: (cluster) the number of shards.
        replication_factor: (cluster) an int, or the string "satellite".
        write_concern: (cluster) the number of in-sync replicas for writes.
        shard_keys: (cluster) the document attributes determining the shard.
        key_options: a `KeyOptions` object.
        computed_values: a list of computed value definitions (dictionaries).
        extra: any further setting returned by the server.
        id: (read-only) the collection identifier.
        name: (read-only) the collection name.
        collection_type: (read-only) an integer, see `CollectionType`.
        is_system: (read-only) whether this is a system collection.
    """

    wait_for_sync: bool | UnsetType = _UNSET
    schema: dict[str, Any] | UnsetType = _UNSET
    cache_enabled: bool | UnsetType = _UNSET
    number_of_shards: int | UnsetType = _UNSET
    replication_factor: int | str | UnsetType = _UNSET
    write_concern: int | UnsetType = _UNSET
    shard_keys: list[str] | UnsetType = _UNSET
    key_options: KeyOptions | UnsetType = _UNSET
    computed_values: list[dict[str, Any]] | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)
    id: str | UnsetType = _UNSET
    name: str | UnsetType = _UNSET
    collection_type: int | UnsetType = _UNSET
    is_system: bool | UnsetType = _UNSET

    _known_wire_names = {
        "waitForSync",
        "schema",
        "cacheEnabled",
        "numberOfShards",
        "replicationFactor",
        "writeConcern",
        "shardKeys",
        "keyOptions",
        "computedValues",
        "id",
        "name",
        "type",
        "isSystem",
        # server-side state, not retained:
        "status",
        "statusString",
        "globallyUniqueId",
        "count",
    }

    def __repr__(self) -> str:
        not_null_pieces = [
            pc
            for pc in (
                None if isinstance(self.name, UnsetType) else f"name={self.name}",
                None
                if isinstance(self.wait_for_sync, UnsetType)
                else f"wait_for_sync={self.wait_for_sync}",
                None
                if isinstance(self.cache_enabled, UnsetType)
                else f"cache_enabled={self.cache_enabled}",
                None
                if isinstance(self.number_of_shards, UnsetType)
                else f"number_of_shards={self.number_of_shards}",
                None
                if isinstance(self.replication_factor, UnsetType)
                else f"replication_factor={self.replication_factor}",
                None
                if isinstance(self.key_options, UnsetType)
                else f"key_options={self.key_options}",
                None if isinstance(self.schema, UnsetType) else "schema=...",
            )
            if pc is not None
        ]
        inner_desc = ", ".join(not_null_pieces)
        return f"{self.__class__.__name__}({inner_desc})"

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary (read-only attributes excluded)."""

        return {
            **{
                k: v
                for k, v in {
                    "waitForSync": None
                    if isinstance(self.wait_for_sync, UnsetType)
                    else self.wait_for_sync,
                    "schema": None if isinstance(self.schema, UnsetType) else self.schema,
                    "cacheEnabled": None
                    if isinstance(self.cache_enabled, UnsetType)
                    else self.cache_enabled,
                    "numberOfShards": None
                    if isinstance(self.number_of_shards, UnsetType)
                    else self.number_of_shards,
                    "replicationFactor": None
                    if isinstance(self.replication_factor, UnsetType)
                    else self.replication_factor,
                    "writeConcern": None
                    if isinstance(self.write_concern, UnsetType)
                    else self.write_concern,
                    "shardKeys": None
                    if isinstance(self.shard_keys, UnsetType)
                    else self.shard_keys,
                    "keyOptions": None
                    if isinstance(self.key_options, UnsetType)
                    else self.key_options.as_dict(),
                    "computedValues": None
                    if isinstance(self.computed_values, UnsetType)
                    else self.computed_values,
                }.items()
                if v is not None
            },
            **self.extra,
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> CollectionProperties:
        """
        Create an instance of CollectionProperties from a dictionary
        such as the response to a "get properties" request.
        """

        _raw_dict = _strip_envelope(raw_dict)
        raw_key_options = _raw_dict.get("keyOptions")
        return CollectionProperties(
            wait_for_sync=_unset_or(_raw_dict.get("waitForSync")),
            schema=_unset_or(_raw_dict.get("schema")),
            cache_enabled=_unset_or(_raw_dict.get("cacheEnabled")),
            number_of_shards=_unset_or(_raw_dict.get("numberOfShards")),
            replication_factor=_unset_or(_raw_dict.get("replicationFactor")),
            write_concern=_unset_or(_raw_dict.get("writeConcern")),
            shard_keys=_unset_or(_raw_dict.get("shardKeys")),
            key_options=_UNSET
            if raw_key_options is None
            else KeyOptions._from_dict(raw_key_options),
            computed_values=_unset_or(_raw_dict.get("computedValues")),
            extra=_extra_keys(_raw_dict, cls._known_wire_names),
            id=_unset_or(_raw_dict.get("id")),
            name=_unset_or(_raw_dict.get("name")),
            collection_type=_unset_or(_raw_dict.get("type")),
            is_system=_unset_or(_raw_dict.get("isSystem")),
        )

    @classmethod
    def coerce(
        cls, raw_input: CollectionProperties | dict[str, Any]
    ) -> CollectionProperties:
        if isinstance(raw_input, CollectionProperties):
            return raw_input
        else:
            return cls._from_dict(raw_input)
