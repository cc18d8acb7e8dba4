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
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from arangopy.constants import (
    CompressionType,
    ConsolidationPolicyType,
    SearchAliasOperation,
    StoreValuesType,
    ViewType,
)
from arangopy.exceptions import MalformedPayloadException
from arangopy.utils.parsing import (
    _decode_list,
    _ensure_dict,
    _extra_keys,
    _strip_envelope,
    _warn_residual_keys,
)
from arangopy.utils.unset import _UNSET, UnsetType, _unset_or

logger = logging.getLogger(__name__)


def _repr_pieces(obj: Any, attr_names: list[str]) -> str:
    not_null_pieces = [
        f"{attr_name}={getattr(obj, attr_name).__repr__()}"
        for attr_name in attr_names
        if not isinstance(getattr(obj, attr_name), UnsetType)
    ]
    inner_desc = ", ".join(not_null_pieces)
    return f"{obj.__class__.__name__}({inner_desc})"


def _coerce_or_unset(enum_class: Any, value: Any) -> Any:
    if value is None:
        return _UNSET
    try:
        return enum_class.coerce(value)
    except ValueError as exc:
        raise MalformedPayloadException(
            text=f"Invalid value {value!r} for {enum_class.__name__}.",
            raw_payload=None,
        ) from exc


def _list_field(raw_dict: dict[str, Any], wire_name: str) -> list[Any] | None:
    raw_value = raw_dict.get(wire_name)
    if raw_value is None:
        return None
    try:
        return _decode_list(raw_value)
    except TypeError as exc:
        raise MalformedPayloadException(
            text=f"Invalid value for field '{wire_name}': {raw_value!r}.",
            raw_payload=raw_dict,
        ) from exc


@dataclass
class ViewDescriptor:
    """
    A short description of a view, as found in the result of a view listing.

    Attributes:
        id: the server-assigned view identifier.
        name: the view name.
        view_type: the kind of view (see `ViewType`).
        globally_unique_id: the globally unique identifier of the view.
    """

    id: str | UnsetType
    name: str
    view_type: ViewType
    globally_unique_id: str | UnsetType = _UNSET

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "id": None if isinstance(self.id, UnsetType) else self.id,
                "name": self.name,
                "type": self.view_type.value,
                "globallyUniqueId": None
                if isinstance(self.globally_unique_id, UnsetType)
                else self.globally_unique_id,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> ViewDescriptor:
        """
        Create an instance of ViewDescriptor from a dictionary
        such as one from the server.
        """

        _ensure_dict(cls, raw_dict)
        if raw_dict.get("name") is None or raw_dict.get("type") is None:
            raise MalformedPayloadException(
                text="A view description lacks the 'name' or 'type' field.",
                raw_payload=raw_dict,
            )
        _raw_dict = _strip_envelope(raw_dict)
        _warn_residual_keys(cls, _raw_dict, {"id", "name", "type", "globallyUniqueId"})
        return ViewDescriptor(
            id=_unset_or(_raw_dict.get("id")),
            name=_raw_dict["name"],
            view_type=_coerce_or_unset(ViewType, _raw_dict["type"]),
            globally_unique_id=_unset_or(_raw_dict.get("globallyUniqueId")),
        )


@dataclass
class TierConsolidationPolicy:
    """
    The "tier" consolidation policy: segments are grouped by size tiers
    and merged according to a score.

    Attributes:
        segments_min: minimum number of segments to consolidate at once.
        segments_max: maximum number of segments to consolidate at once.
        segments_bytes_max: maximum size of a consolidated segment, in bytes.
        segments_bytes_floor: segments smaller than this are treated as equal.
        min_score: filter out consolidation candidates with a lower score.
    """

    segments_min: int | UnsetType = _UNSET
    segments_max: int | UnsetType = _UNSET
    segments_bytes_max: int | UnsetType = _UNSET
    segments_bytes_floor: int | UnsetType = _UNSET
    min_score: int | UnsetType = _UNSET

    policy_type = ConsolidationPolicyType.TIER

    def __repr__(self) -> str:
        return _repr_pieces(
            self,
            [
                "segments_min",
                "segments_max",
                "segments_bytes_max",
                "segments_bytes_floor",
                "min_score",
            ],
        )

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "type": self.policy_type.value,
                "segmentsMin": None
                if isinstance(self.segments_min, UnsetType)
                else self.segments_min,
                "segmentsMax": None
                if isinstance(self.segments_max, UnsetType)
                else self.segments_max,
                "segmentsBytesMax": None
                if isinstance(self.segments_bytes_max, UnsetType)
                else self.segments_bytes_max,
                "segmentsBytesFloor": None
                if isinstance(self.segments_bytes_floor, UnsetType)
                else self.segments_bytes_floor,
                "minScore": None
                if isinstance(self.min_score, UnsetType)
                else self.min_score,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> TierConsolidationPolicy:
        _ensure_dict(cls, raw_dict)
        _warn_residual_keys(
            cls,
            raw_dict,
            {
                "type",
                "segmentsMin",
                "segmentsMax",
                "segmentsBytesMax",
                "segmentsBytesFloor",
                "minScore",
            },
        )
        return TierConsolidationPolicy(
            segments_min=_unset_or(raw_dict.get("segmentsMin")),
            segments_max=_unset_or(raw_dict.get("segmentsMax")),
            segments_bytes_max=_unset_or(raw_dict.get("segmentsBytesMax")),
            segments_bytes_floor=_unset_or(raw_dict.get("segmentsBytesFloor")),
            min_score=_unset_or(raw_dict.get("minScore")),
        )


@dataclass
class BytesAccumConsolidationPolicy:
    """
    The "bytes_accum" consolidation policy: segments are consolidated when
    the ratio of their total size to the size of all segments is below the
    threshold.

    Attributes:
        threshold: a float in the [0.0, 1.0] range.
    """

    threshold: float | UnsetType = _UNSET

    policy_type = ConsolidationPolicyType.BYTES_ACCUM

    def __repr__(self) -> str:
        return _repr_pieces(self, ["threshold"])

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "type": self.policy_type.value,
                "threshold": None
                if isinstance(self.threshold, UnsetType)
                else self.threshold,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> BytesAccumConsolidationPolicy:
        _ensure_dict(cls, raw_dict)
        _warn_residual_keys(cls, raw_dict, {"type", "threshold"})
        return BytesAccumConsolidationPolicy(
            threshold=_unset_or(raw_dict.get("threshold")),
        )


ConsolidationPolicy = Union[TierConsolidationPolicy, BytesAccumConsolidationPolicy]


def consolidation_policy_from_dict(raw_dict: dict[str, Any]) -> ConsolidationPolicy:
    """
    Decode a consolidation policy, choosing the class according to
    its "type" field.
    """

    if not isinstance(raw_dict, dict):
        raise MalformedPayloadException(
            text=f"A consolidation policy must be a dictionary, got {raw_dict!r}.",
            raw_payload=None,
        )
    policy_type = raw_dict.get("type")
    if policy_type is None:
        raise MalformedPayloadException(
            text="A consolidation policy lacks the 'type' field.",
            raw_payload=raw_dict,
        )
    if policy_type not in ConsolidationPolicyType:
        raise MalformedPayloadException(
            text=f"Unknown consolidation policy type '{policy_type}'.",
            raw_payload=raw_dict,
        )
    if ConsolidationPolicyType.coerce(policy_type) == ConsolidationPolicyType.TIER:
        return TierConsolidationPolicy._from_dict(raw_dict)
    return BytesAccumConsolidationPolicy._from_dict(raw_dict)


@dataclass
class PrimarySortField:
    """
    An entry of the primary sort order of an ArangoSearch view.

    Attributes:
        field: the attribute path to sort by.
        ascending: the sort direction ("asc" on the wire).
    """

    field: str
    ascending: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {"field": self.field, "asc": self.ascending}

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> PrimarySortField:
        _ensure_dict(cls, raw_dict)
        _warn_residual_keys(cls, raw_dict, {"field", "asc", "direction"})
        if raw_dict.get("field") is None:
            raise MalformedPayloadException(
                text="A primary sort entry lacks the 'field' field.",
                raw_payload=raw_dict,
            )
        ascending: bool
        if "asc" in raw_dict:
            ascending = bool(raw_dict["asc"])
        else:
            ascending = str(raw_dict.get("direction", "asc")).lower() != "desc"
        return PrimarySortField(field=raw_dict["field"], ascending=ascending)


@dataclass
class StoredValue:
    """
    A group of attribute paths whose values are stored in the view index,
    for retrieval without accessing the documents.

    Attributes:
        fields: the attribute paths.
        compression: the compression applied to the stored values.
    """

    fields: list[str]
    compression: CompressionType | UnsetType = _UNSET

    def as_dict(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in {
                "fields": self.fields,
                "compression": None
                if isinstance(self.compression, UnsetType)
                else self.compression.value,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> StoredValue:
        _ensure_dict(cls, raw_dict)
        _warn_residual_keys(cls, raw_dict, {"fields", "compression", "cache"})
        return StoredValue(
            fields=_list_field(raw_dict, "fields") or [],
            compression=_coerce_or_unset(CompressionType, raw_dict.get("compression")),
        )


@dataclass
class ArangoSearchLinkProperties:
    """
    The settings of a "link" between an ArangoSearch view and a collection,
    or of a single field within it (the structure is recursive through
    the `fields` attribute).

    Attributes:
        analyzers: names of the analyzers to apply to the values.
        fields: a map from attribute name to the link settings for that
            attribute (recursively).
        include_all_fields: whether to index all fields, not only those
            listed in `fields`.
        track_list_positions: whether to track the positions of array items.
        store_values: whether to store the document ids ("id") or not.
        in_background: whether to create the link in the background.
        cache: whether to keep the field normalization values in memory.
        extra: any further setting returned by the server.
    """

    analyzers: list[str] | UnsetType = _UNSET
    fields: dict[str, ArangoSearchLinkProperties] | UnsetType = _UNSET
    include_all_fields: bool | UnsetType = _UNSET
    track_list_positions: bool | UnsetType = _UNSET
    store_values: StoreValuesType | UnsetType = _UNSET
    in_background: bool | UnsetType = _UNSET
    cache: bool | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)

    _known_wire_names = {
        "analyzers",
        "fields",
        "includeAllFields",
        "trackListPositions",
        "storeValues",
        "inBackground",
        "cache",
    }

    def __repr__(self) -> str:
        return _repr_pieces(
            self,
            [
                "analyzers",
                "fields",
                "include_all_fields",
                "track_list_positions",
                "store_values",
                "in_background",
                "cache",
            ],
        )

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            **{
                k: v
                for k, v in {
                    "analyzers": None
                    if isinstance(self.analyzers, UnsetType)
                    else self.analyzers,
                    "fields": None
                    if isinstance(self.fields, UnsetType)
                    else {
                        fld_name: fld_props.as_dict()
                        for fld_name, fld_props in self.fields.items()
                    },
                    "includeAllFields": None
                    if isinstance(self.include_all_fields, UnsetType)
                    else self.include_all_fields,
                    "trackListPositions": None
                    if isinstance(self.track_list_positions, UnsetType)
                    else self.track_list_positions,
                    "storeValues": None
                    if isinstance(self.store_values, UnsetType)
                    else self.store_values.value,
                    "inBackground": None
                    if isinstance(self.in_background, UnsetType)
                    else self.in_background,
                    "cache": None if isinstance(self.cache, UnsetType) else self.cache,
                }.items()
                if v is not None
            },
            **self.extra,
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> ArangoSearchLinkProperties:
        """
        Create an instance of ArangoSearchLinkProperties from a dictionary
        such as one from the server.
        """

        _ensure_dict(cls, raw_dict)
        raw_fields = raw_dict.get("fields")
        return ArangoSearchLinkProperties(
            analyzers=_unset_or(_list_field(raw_dict, "analyzers")),
            fields=_UNSET
            if raw_fields is None
            else {
                fld_name: ArangoSearchLinkProperties._from_dict(fld_props or {})
                for fld_name, fld_props in _ensure_dict(cls, raw_fields).items()
            },
            include_all_fields=_unset_or(raw_dict.get("includeAllFields")),
            track_list_positions=_unset_or(raw_dict.get("trackListPositions")),
            store_values=_coerce_or_unset(StoreValuesType, raw_dict.get("storeValues")),
            in_background=_unset_or(raw_dict.get("inBackground")),
            cache=_unset_or(raw_dict.get("cache")),
            extra=_extra_keys(raw_dict, cls._known_wire_names),
        )

    @classmethod
    def coerce(
        cls, raw_input: ArangoSearchLinkProperties | dict[str, Any]
    ) -> ArangoSearchLinkProperties:
        if isinstance(raw_input, ArangoSearchLinkProperties):
            return raw_input
        else:
            return cls._from_dict(raw_input)


# a None link is sent as null, which removes the link in a partial update
LinksType = Dict[str, Union[ArangoSearchLinkProperties, None]]


@dataclass
class ArangoSearchViewProperties:
    """
    The properties of an ArangoSearch view.

    Only the attributes that are set are sent to the server; when reading the
    properties back, the identity of the view (id, name, type, globally
    unique id) is captured as well, but it is never sent.

    Attributes:
        cleanup_interval_step: wait this many commits between removing
            unused files in the data directory.
        commit_interval_msec: wait at least this many milliseconds between
            committing view data store changes.
        consolidation_interval_msec: wait at least this many milliseconds
            between applying the consolidation policy.
        consolidation_policy: a `TierConsolidationPolicy` or a
            `BytesAccumConsolidationPolicy`.
        writebuffer_idle: maximum number of writers cached in the pool.
        writebuffer_active: maximum number of concurrent active writers.
        writebuffer_size_max: maximum memory byte size per writer.
        links: a map from collection name to the link settings. A value of
            None drops the link (in partial updates).
        primary_sort: a list of `PrimarySortField`, the primary sort order.
        primary_sort_compression: the compression for the primary sort data.
        stored_values: a list of `StoredValue`.
        optimize_top_k: a list of SORT expressions to optimize.
        extra: any further setting returned by the server.
        id: (read-only) the view identifier.
        name: (read-only) the view name.
        view_type: (read-only) the view type.
        globally_unique_id: (read-only) the globally unique view identifier.
    """

    cleanup_interval_step: int | UnsetType = _UNSET
    commit_interval_msec: int | UnsetType = _UNSET
    consolidation_interval_msec: int | UnsetType = _UNSET
    consolidation_policy: ConsolidationPolicy | UnsetType = _UNSET
    writebuffer_idle: int | UnsetType = _UNSET
    writebuffer_active: int | UnsetType = _UNSET
    writebuffer_size_max: int | UnsetType = _UNSET
    links: LinksType | UnsetType = _UNSET
    primary_sort: list[PrimarySortField] | UnsetType = _UNSET
    primary_sort_compression: CompressionType | UnsetType = _UNSET
    stored_values: list[StoredValue] | UnsetType = _UNSET
    optimize_top_k: list[str] | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)
    id: str | UnsetType = _UNSET
    name: str | UnsetType = _UNSET
    view_type: ViewType | UnsetType = _UNSET
    globally_unique_id: str | UnsetType = _UNSET

    _identity_wire_names = {"id", "name", "type", "globallyUniqueId"}
    _known_wire_names = {
        "cleanupIntervalStep",
        "commitIntervalMsec",
        "consolidationIntervalMsec",
        "consolidationPolicy",
        "writebufferIdle",
        "writebufferActive",
        "writebufferSizeMax",
        "links",
        "primarySort",
        "primarySortCompression",
        "storedValues",
        "optimizeTopK",
    }

    def __repr__(self) -> str:
        return _repr_pieces(
            self,
            [
                "name",
                "cleanup_interval_step",
                "commit_interval_msec",
                "consolidation_interval_msec",
                "consolidation_policy",
                "writebuffer_idle",
                "writebuffer_active",
                "writebuffer_size_max",
                "links",
                "primary_sort",
                "primary_sort_compression",
                "stored_values",
                "optimize_top_k",
            ],
        )

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary (read-only attributes excluded)."""

        links_dict: dict[str, Any] | None
        if isinstance(self.links, UnsetType):
            links_dict = None
        else:
            links_dict = {
                coll_name: None if link is None else link.as_dict()
                for coll_name, link in self.links.items()
            }
        return {
            **{
                k: v
                for k, v in {
                    "cleanupIntervalStep": None
                    if isinstance(self.cleanup_interval_step, UnsetType)
                    else self.cleanup_interval_step,
                    "commitIntervalMsec": None
                    if isinstance(self.commit_interval_msec, UnsetType)
                    else self.commit_interval_msec,
                    "consolidationIntervalMsec": None
                    if isinstance(self.consolidation_interval_msec, UnsetType)
                    else self.consolidation_interval_msec,
                    "consolidationPolicy": None
                    if isinstance(self.consolidation_policy, UnsetType)
                    else self.consolidation_policy.as_dict(),
                    "writebufferIdle": None
                    if isinstance(self.writebuffer_idle, UnsetType)
                    else self.writebuffer_idle,
                    "writebufferActive": None
                    if isinstance(self.writebuffer_active, UnsetType)
                    else self.writebuffer_active,
                    "writebufferSizeMax": None
                    if isinstance(self.writebuffer_size_max, UnsetType)
                    else self.writebuffer_size_max,
                    "links": links_dict,
                    "primarySort": None
                    if isinstance(self.primary_sort, UnsetType)
                    else [pso.as_dict() for pso in self.primary_sort],
                    "primarySortCompression": None
                    if isinstance(self.primary_sort_compression, UnsetType)
                    else self.primary_sort_compression.value,
                    "storedValues": None
                    if isinstance(self.stored_values, UnsetType)
                    else [stv.as_dict() for stv in self.stored_values],
                    "optimizeTopK": None
                    if isinstance(self.optimize_top_k, UnsetType)
                    else self.optimize_top_k,
                }.items()
                if v is not None
            },
            **self.extra,
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> ArangoSearchViewProperties:
        """
        Create an instance of ArangoSearchViewProperties from a dictionary
        such as the response to a "get properties" request.
        """

        _raw_dict = _strip_envelope(_ensure_dict(cls, raw_dict))
        raw_links = _raw_dict.get("links")
        raw_policy = _raw_dict.get("consolidationPolicy")
        raw_primary_sort = _list_field(_raw_dict, "primarySort")
        raw_stored_values = _list_field(_raw_dict, "storedValues")
        return ArangoSearchViewProperties(
            cleanup_interval_step=_unset_or(_raw_dict.get("cleanupIntervalStep")),
            commit_interval_msec=_unset_or(_raw_dict.get("commitIntervalMsec")),
            consolidation_interval_msec=_unset_or(
                _raw_dict.get("consolidationIntervalMsec")
            ),
            consolidation_policy=_UNSET
            if raw_policy is None
            else consolidation_policy_from_dict(raw_policy),
            writebuffer_idle=_unset_or(_raw_dict.get("writebufferIdle")),
            writebuffer_active=_unset_or(_raw_dict.get("writebufferActive")),
            writebuffer_size_max=_unset_or(_raw_dict.get("writebufferSizeMax")),
            links=_UNSET
            if raw_links is None
            else {
                coll_name: None
                if raw_link is None
                else ArangoSearchLinkProperties._from_dict(raw_link)
                for coll_name, raw_link in _ensure_dict(
                    ArangoSearchLinkProperties, raw_links
                ).items()
            },
            primary_sort=_UNSET
            if raw_primary_sort is None
            else [PrimarySortField._from_dict(pso) for pso in raw_primary_sort],
            primary_sort_compression=_coerce_or_unset(
                CompressionType, _raw_dict.get("primarySortCompression")
            ),
            stored_values=_UNSET
            if raw_stored_values is None
            else [StoredValue._from_dict(stv) for stv in raw_stored_values],
            optimize_top_k=_unset_or(_list_field(_raw_dict, "optimizeTopK")),
            extra=_extra_keys(
                _raw_dict, cls._known_wire_names | cls._identity_wire_names
            ),
            id=_unset_or(_raw_dict.get("id")),
            name=_unset_or(_raw_dict.get("name")),
            view_type=_coerce_or_unset(ViewType, _raw_dict.get("type")),
            globally_unique_id=_unset_or(_raw_dict.get("globallyUniqueId")),
        )

    @classmethod
    def coerce(
        cls, raw_input: ArangoSearchViewProperties | dict[str, Any]
    ) -> ArangoSearchViewProperties:
        """
        Normalize the input, whether an object already or a plain dictionary
        of the right structure, into an ArangoSearchViewProperties.
        """

        if isinstance(raw_input, ArangoSearchViewProperties):
            return raw_input
        else:
            return cls._from_dict(raw_input)


@dataclass
class SearchAliasIndex:
    """
    A reference to an inverted index, as part of a search-alias view.

    Attributes:
        collection: the name of the collection holding the index.
        index: the name of the inverted index.
        operation: in partial updates, whether to add or remove the index.
    """

    collection: str
    index: str
    operation: SearchAliasOperation | UnsetType = _UNSET

    def as_dict(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in {
                "collection": self.collection,
                "index": self.index,
                "operation": None
                if isinstance(self.operation, UnsetType)
                else self.operation.value,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> SearchAliasIndex:
        _ensure_dict(cls, raw_dict)
        _warn_residual_keys(cls, raw_dict, {"collection", "index", "operation"})
        if raw_dict.get("collection") is None or raw_dict.get("index") is None:
            raise MalformedPayloadException(
                text="A search-alias index entry lacks 'collection' or 'index'.",
                raw_payload=raw_dict,
            )
        return SearchAliasIndex(
            collection=raw_dict["collection"],
            index=raw_dict["index"],
            operation=_coerce_or_unset(SearchAliasOperation, raw_dict.get("operation")),
        )


@dataclass
class SearchAliasViewProperties:
    """
    The properties of a search-alias view: the inverted indexes it covers.

    Attributes:
        indexes: a list of `SearchAliasIndex`.
        extra: any further setting returned by the server.
        id: (read-only) the view identifier.
        name: (read-only) the view name.
        view_type: (read-only) the view type.
        globally_unique_id: (read-only) the globally unique view identifier.
    """

    indexes: list[SearchAliasIndex] | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)
    id: str | UnsetType = _UNSET
    name: str | UnsetType = _UNSET
    view_type: ViewType | UnsetType = _UNSET
    globally_unique_id: str | UnsetType = _UNSET

    def __repr__(self) -> str:
        return _repr_pieces(self, ["name", "indexes"])

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary (read-only attributes excluded)."""

        if isinstance(self.indexes, UnsetType):
            return dict(self.extra)
        return {
            "indexes": [idx.as_dict() for idx in self.indexes],
            **self.extra,
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> SearchAliasViewProperties:
        _raw_dict = _strip_envelope(_ensure_dict(cls, raw_dict))
        raw_indexes = _list_field(_raw_dict, "indexes")
        return SearchAliasViewProperties(
            indexes=_UNSET
            if raw_indexes is None
            else [SearchAliasIndex._from_dict(idx) for idx in raw_indexes],
            extra=_extra_keys(
                _raw_dict, {"indexes", "id", "name", "type", "globallyUniqueId"}
            ),
            id=_unset_or(_raw_dict.get("id")),
            name=_unset_or(_raw_dict.get("name")),
            view_type=_coerce_or_unset(ViewType, _raw_dict.get("type")),
            globally_unique_id=_unset_or(_raw_dict.get("globallyUniqueId")),
        )

    @classmethod
    def coerce(
        cls, raw_input: SearchAliasViewProperties | dict[str, Any]
    ) -> SearchAliasViewProperties:
        if isinstance(raw_input, SearchAliasViewProperties):
            return raw_input
        else:
            return cls._from_dict(raw_input)
