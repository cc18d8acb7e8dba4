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
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Iterable, TypeVar

from arangopy.constants import (
    AnalyzerFeature,
    AnalyzerType,
    AQLReturnType,
    BreakType,
    CaseType,
    GeoJSONType,
    GeoS2Format,
    NGramStreamType,
)
from arangopy.exceptions import (
    MalformedPayloadException,
    UnknownAnalyzerTypeException,
)
from arangopy.settings.defaults import (
    DEFAULT_CLASSIFICATION_THRESHOLD,
    DEFAULT_CLASSIFICATION_TOP_K,
    DEFAULT_NEAREST_NEIGHBORS_TOP_K,
)
from arangopy.utils.parsing import (
    _decode_list,
    _ensure_dict,
    _extra_keys,
    _strip_envelope,
    _warn_residual_keys,
)
from arangopy.utils.str_enum import StrEnum
from arangopy.utils.unset import _UNSET, UnsetType

logger = logging.getLogger(__name__)

AP = TypeVar("AP", bound="AnalyzerProperties")


def _encode_value(value: Any) -> Any:
    if isinstance(value, StrEnum):
        return value.value
    if hasattr(value, "as_dict"):
        return value.as_dict()
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def _normalize_analyzer_type(analyzer_type: AnalyzerType | str) -> AnalyzerType | str:
    """Recast a known type into the enum, leaving any other string untouched."""
    if isinstance(analyzer_type, AnalyzerType):
        return analyzer_type
    if analyzer_type in AnalyzerType:
        return AnalyzerType.coerce(analyzer_type)
    return analyzer_type


def _analyzer_type_value(analyzer_type: AnalyzerType | str) -> str:
    if isinstance(analyzer_type, AnalyzerType):
        return analyzer_type.value
    return analyzer_type


def find_feature_dependency_issues(
    features: Iterable[AnalyzerFeature | str],
) -> list[str]:
    """
    Check a set of analyzer features against their mutual dependencies:
    "offset" requires "position", which in turn requires "frequency".

    Args:
        features: the features to check.

    Returns:
        a list of human-readable descriptions of the violations found.
        An empty list means the features are consistent.

    Example:
        >>> find_feature_dependency_issues(["frequency", "position"])
        []
        >>> find_feature_dependency_issues(["offset"])
        ["feature 'offset' requires feature 'position'"]
    """
    _features = {AnalyzerFeature.coerce(feature) for feature in features}
    issues: list[str] = []
    if (
        AnalyzerFeature.OFFSET in _features
        and AnalyzerFeature.POSITION not in _features
    ):
        issues.append("feature 'offset' requires feature 'position'")
    if (
        AnalyzerFeature.POSITION in _features
        and AnalyzerFeature.FREQUENCY not in _features
    ):
        issues.append("feature 'position' requires feature 'frequency'")
    return issues


@dataclass
class EdgeNGramOptions:
    """
    Edge n-gram settings for a "text" analyzer.

    Attributes:
        min: minimal n-gram length.
        max: maximal n-gram length.
        preserve_original: whether to include the original token even if
            its length is outside the min/max range.
    """

    min: int | UnsetType = _UNSET
    max: int | UnsetType = _UNSET
    preserve_original: bool | UnsetType = _UNSET

    def __repr__(self) -> str:
        not_null_pieces = [
            pc
            for pc in (
                None if isinstance(self.min, UnsetType) else f"min={self.min}",
                None if isinstance(self.max, UnsetType) else f"max={self.max}",
                None
                if isinstance(self.preserve_original, UnsetType)
                else f"preserve_original={self.preserve_original}",
            )
            if pc is not None
        ]
        inner_desc = ", ".join(not_null_pieces)
        return f"{self.__class__.__name__}({inner_desc})"

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "min": None if isinstance(self.min, UnsetType) else self.min,
                "max": None if isinstance(self.max, UnsetType) else self.max,
                "preserveOriginal": None
                if isinstance(self.preserve_original, UnsetType)
                else self.preserve_original,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> EdgeNGramOptions:
        _warn_residual_keys(cls, raw_dict, {"min", "max", "preserveOriginal"})
        return EdgeNGramOptions(
            min=raw_dict["min"] if raw_dict.get("min") is not None else _UNSET,
            max=raw_dict["max"] if raw_dict.get("max") is not None else _UNSET,
            preserve_original=raw_dict["preserveOriginal"]
            if raw_dict.get("preserveOriginal") is not None
            else _UNSET,
        )


@dataclass
class GeoOptions:
    """
    Options for the geo analyzers (geojson, geo_s2, geopoint), controlling
    how a shape is covered by S2 cells when indexing.

    Attributes:
        max_cells: maximum number of S2 cells (default on the server: 20).
        min_level: the least precise S2 level (default on the server: 4).
        max_level: the most precise S2 level (default on the server: 23).
    """

    max_cells: int | UnsetType = _UNSET
    min_level: int | UnsetType = _UNSET
    max_level: int | UnsetType = _UNSET

    def __repr__(self) -> str:
        not_null_pieces = [
            pc
            for pc in (
                None
                if isinstance(self.max_cells, UnsetType)
                else f"max_cells={self.max_cells}",
                None
                if isinstance(self.min_level, UnsetType)
                else f"min_level={self.min_level}",
                None
                if isinstance(self.max_level, UnsetType)
                else f"max_level={self.max_level}",
            )
            if pc is not None
        ]
        inner_desc = ", ".join(not_null_pieces)
        return f"{self.__class__.__name__}({inner_desc})"

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "maxCells": None
                if isinstance(self.max_cells, UnsetType)
                else self.max_cells,
                "minLevel": None
                if isinstance(self.min_level, UnsetType)
                else self.min_level,
                "maxLevel": None
                if isinstance(self.max_level, UnsetType)
                else self.max_level,
            }.items()
            if v is not None
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> GeoOptions:
        _warn_residual_keys(cls, raw_dict, {"maxCells", "minLevel", "maxLevel"})
        return GeoOptions(
            max_cells=raw_dict["maxCells"]
            if raw_dict.get("maxCells") is not None
            else _UNSET,
            min_level=raw_dict["minLevel"]
            if raw_dict.get("minLevel") is not None
            else _UNSET,
            max_level=raw_dict["maxLevel"]
            if raw_dict.get("maxLevel") is not None
            else _UNSET,
        )


class AnalyzerProperties:
    """
    Base class for the type-specific properties of an analyzer.

    Each subclass corresponds to one `AnalyzerType` and only carries the
    fields that make sense for that type. Fields left to `_UNSET` are omitted
    from the payload sent to the server. Any field returned by the server and
    not known to this client is kept in the `extra` dictionary of the object
    and emitted again, unchanged, by `as_dict`.

    Subclasses declare how their attributes map to the wire:
        `_wire_names`: attribute name -> field name in the JSON payload;
        `_decoders`: attribute name -> function parsing the raw JSON value;
        `_defaults`: attribute name -> value assumed when the field is absent
            from a payload being decoded;
        `_required`: the attributes that a payload must provide.
    """

    analyzer_type: ClassVar[AnalyzerType]
    _wire_names: ClassVar[dict[str, str]] = {}
    _decoders: ClassVar[dict[str, Callable[[Any], Any]]] = {}
    _defaults: ClassVar[dict[str, Any]] = {}
    _required: ClassVar[set[str]] = set()

    extra: dict[str, Any]

    def __repr__(self) -> str:
        not_null_pieces = [
            f"{fld.name}={getattr(self, fld.name).__repr__()}"
            for fld in fields(self)  # type: ignore[arg-type]
            if getattr(self, fld.name) is not _UNSET
            and not (fld.name == "extra" and not self.extra)
        ]
        inner_desc = ", ".join(not_null_pieces)
        return f"{self.__class__.__name__}({inner_desc})"

    def _get_analyzer_type(self) -> AnalyzerType | str:
        return self.analyzer_type

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary suitable for the API."""

        return {
            **{
                wire_name: _encode_value(getattr(self, attr_name))
                for attr_name, wire_name in self._wire_names.items()
                if not isinstance(getattr(self, attr_name), UnsetType)
            },
            **self.extra,
        }

    @classmethod
    def _from_dict(cls: type[AP], raw_dict: dict[str, Any]) -> AP:
        """
        Create an instance of this class from a dictionary such as the
        "properties" of an analyzer returned by the server.
        """

        missing_fields = sorted(
            cls._wire_names[attr_name]
            for attr_name in cls._required
            if raw_dict.get(cls._wire_names[attr_name]) is None
        )
        if missing_fields:
            raise MalformedPayloadException(
                text=(
                    f"Missing required field(s) for an analyzer of type "
                    f"'{cls.analyzer_type.value}': {', '.join(missing_fields)}."
                ),
                raw_payload=raw_dict,
            )
        kwargs: dict[str, Any] = {}
        for attr_name, wire_name in cls._wire_names.items():
            raw_value = raw_dict.get(wire_name)
            if raw_value is None:
                if attr_name in cls._defaults:
                    kwargs[attr_name] = cls._defaults[attr_name]
                continue
            decoder = cls._decoders.get(attr_name)
            if decoder is None:
                kwargs[attr_name] = raw_value
                continue
            try:
                kwargs[attr_name] = decoder(raw_value)
            except (ValueError, TypeError, AttributeError) as exc:
                raise MalformedPayloadException(
                    text=(
                        f"Invalid value for field '{wire_name}' of an analyzer "
                        f"of type '{cls.analyzer_type.value}': {raw_value!r}."
                    ),
                    raw_payload=raw_dict,
                ) from exc
        _warn_residual_keys(cls, raw_dict, cls._wire_names.values())
        return cls(
            **kwargs,
            extra=_extra_keys(raw_dict, cls._wire_names.values()),
        )

    @staticmethod
    def from_type_and_dict(
        analyzer_type: AnalyzerType | str,
        raw_dict: dict[str, Any] | None,
    ) -> AnalyzerProperties:
        """
        Decode the properties of an analyzer, selecting the right class
        according to the analyzer type (the discriminator).

        An analyzer type unknown to this client does not cause a failure:
        a warning is logged and an `UnknownAnalyzerProperties` is returned,
        holding the raw properties as they are.

        Args:
            analyzer_type: the type of the analyzer, as enum or string.
            raw_dict: the "properties" part of an analyzer definition.
                None is treated as an empty dictionary.

        Returns:
            an instance of the AnalyzerProperties subclass for the type.
        """

        _raw_dict = raw_dict or {}
        if not isinstance(_raw_dict, dict):
            raise MalformedPayloadException(
                text=f"Analyzer properties must be a dictionary, got {_raw_dict!r}.",
                raw_payload=None,
            )
        _analyzer_type = _normalize_analyzer_type(analyzer_type)
        if isinstance(_analyzer_type, AnalyzerType):
            return ANALYZER_PROPERTIES_CLASSES[_analyzer_type]._from_dict(_raw_dict)
        logger.warning(
            f"Unknown analyzer type '{_analyzer_type}': keeping its properties as-is."
        )
        return UnknownAnalyzerProperties(
            type_name=_analyzer_type,
            raw_properties=dict(_raw_dict),
        )


@dataclass
class PipelineStage:
    """
    An analyzer nested in a "pipeline" analyzer as one of its steps.

    Attributes:
        analyzer_type: the type of the nested analyzer.
        properties: the (type-specific) properties of the nested analyzer.
        extra: any other field found alongside type and properties.
    """

    analyzer_type: AnalyzerType | str
    properties: AnalyzerProperties
    extra: dict[str, Any]

    def __init__(
        self,
        properties: AnalyzerProperties,
        *,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.properties = properties
        self.analyzer_type = properties._get_analyzer_type()
        self.extra = extra or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.properties.__repr__()})"

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": _analyzer_type_value(self.analyzer_type),
            "properties": self.properties.as_dict(),
            **self.extra,
        }

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> PipelineStage:
        if not isinstance(raw_dict, dict) or raw_dict.get("type") is None:
            raise MalformedPayloadException(
                text="A nested analyzer definition lacks the 'type' field.",
                raw_payload=raw_dict if isinstance(raw_dict, dict) else None,
            )
        return PipelineStage(
            AnalyzerProperties.from_type_and_dict(
                raw_dict["type"],
                raw_dict.get("properties"),
            ),
            extra=_extra_keys(raw_dict, {"type", "properties"}),
        )

    @classmethod
    def coerce(
        cls, raw_input: PipelineStage | AnalyzerProperties | dict[str, Any]
    ) -> PipelineStage:
        if isinstance(raw_input, PipelineStage):
            return raw_input
        if isinstance(raw_input, AnalyzerProperties):
            return PipelineStage(raw_input)
        return cls._from_dict(raw_input)


@dataclass(repr=False)
class IdentityAnalyzerProperties(AnalyzerProperties):
    """The "identity" analyzer treats the value as an atom and has no options."""

    analyzer_type = AnalyzerType.IDENTITY

    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class DelimiterAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "delimiter" analyzer.

    Attributes:
        delimiter: the (possibly multi-character) string to split the input at.
    """

    analyzer_type = AnalyzerType.DELIMITER
    _wire_names = {"delimiter": "delimiter"}

    delimiter: str | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class StemAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "stem" analyzer.

    Attributes:
        locale: a locale in the format `language`, e.g. "de" or "en".
    """

    analyzer_type = AnalyzerType.STEM
    _wire_names = {"locale": "locale"}

    locale: str | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class NormAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "norm" analyzer.

    Attributes:
        locale: a locale in the format `language[_COUNTRY][.encoding][@variant]`.
        accent: whether to preserve accented characters (True) or convert
            them to their base characters (False).
        case: case conversion. Decoding a payload without it yields `NONE`.
    """

    analyzer_type = AnalyzerType.NORM
    _wire_names = {"locale": "locale", "accent": "accent", "case": "case"}
    _decoders = {"case": CaseType.coerce}
    _defaults = {"case": CaseType.NONE}

    locale: str | UnsetType = _UNSET
    accent: bool | UnsetType = _UNSET
    case: CaseType | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class NGramAnalyzerProperties(AnalyzerProperties):
    """
    Properties of an "ngram" analyzer.

    The relation `min <= max` is left to the server to validate.

    Attributes:
        min: minimum n-gram length.
        max: maximum n-gram length.
        preserve_original: whether to also emit the original value as a token.
        start_marker: a string prepended to n-grams at the start of the input.
        end_marker: a string appended to n-grams at the end of the input.
        stream_type: whether to operate on bytes or on UTF-8 characters.
    """

    analyzer_type = AnalyzerType.NGRAM
    _wire_names = {
        "min": "min",
        "max": "max",
        "preserve_original": "preserveOriginal",
        "start_marker": "startMarker",
        "end_marker": "endMarker",
        "stream_type": "streamType",
    }
    _decoders = {"stream_type": NGramStreamType.coerce}

    min: int | UnsetType = _UNSET
    max: int | UnsetType = _UNSET
    preserve_original: bool | UnsetType = _UNSET
    start_marker: str | UnsetType = _UNSET
    end_marker: str | UnsetType = _UNSET
    stream_type: NGramStreamType | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class TextAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "text" analyzer, tokenizing the input into words.

    Attributes:
        locale: a locale in the format `language[_COUNTRY][.encoding][@variant]`.
        accent: whether to preserve accented characters.
        case: case conversion.
        stemming: whether to apply stemming on the tokens.
        edge_ngram: an `EdgeNGramOptions` to also emit edge n-grams.
        stopwords: a list of words to omit from the result.
        stopwords_path: paths of directories holding stopword files.
    """

    analyzer_type = AnalyzerType.TEXT
    _wire_names = {
        "locale": "locale",
        "accent": "accent",
        "case": "case",
        "stemming": "stemming",
        "edge_ngram": "edgeNgram",
        "stopwords": "stopwords",
        "stopwords_path": "stopwordsPath",
    }
    _decoders = {
        "case": CaseType.coerce,
        "edge_ngram": EdgeNGramOptions._from_dict,
        "stopwords": _decode_list,
        "stopwords_path": _decode_list,
    }

    locale: str | UnsetType = _UNSET
    accent: bool | UnsetType = _UNSET
    case: CaseType | UnsetType = _UNSET
    stemming: bool | UnsetType = _UNSET
    edge_ngram: EdgeNGramOptions | UnsetType = _UNSET
    stopwords: list[str] | UnsetType = _UNSET
    stopwords_path: list[str] | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class AQLAnalyzerProperties(AnalyzerProperties):
    """
    Properties of an "aql" analyzer, running an AQL query on each input.

    Attributes:
        query_string: the AQL query to run. Required.
        collapse_positions: whether to set the position of all emitted
            tokens to the same value.
        keep_null: whether to treat null values as empty strings.
        batch_size: the number of results to fetch at once.
        memory_limit: memory limit for the query execution, in bytes.
        return_type: the data type of the returned tokens.
    """

    analyzer_type = AnalyzerType.AQL
    _wire_names = {
        "query_string": "queryString",
        "collapse_positions": "collapsePositions",
        "keep_null": "keepNull",
        "batch_size": "batchSize",
        "memory_limit": "memoryLimit",
        "return_type": "returnType",
    }
    _decoders = {"return_type": AQLReturnType.coerce}
    _required = {"query_string"}

    query_string: str
    collapse_positions: bool | UnsetType = _UNSET
    keep_null: bool | UnsetType = _UNSET
    batch_size: int | UnsetType = _UNSET
    memory_limit: int | UnsetType = _UNSET
    return_type: AQLReturnType | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class PipelineAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "pipeline" analyzer: an ordered chain of analyzers, each
    fed with the output of the previous one. The order is preserved exactly.

    Attributes:
        pipeline: the list of stages, each a `PipelineStage`.
    """

    analyzer_type = AnalyzerType.PIPELINE
    _wire_names = {"pipeline": "pipeline"}
    _decoders = {
        "pipeline": lambda stages: [
            PipelineStage._from_dict(stg) for stg in _decode_list(stages)
        ],
    }

    pipeline: list[PipelineStage] | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class StopwordsAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "stopwords" analyzer.

    Attributes:
        stopwords: the tokens to discard.
        hex: whether the stopwords are given as hex-encoded strings.
    """

    analyzer_type = AnalyzerType.STOPWORDS
    _wire_names = {"stopwords": "stopwords", "hex": "hex"}
    _decoders = {"stopwords": _decode_list}

    stopwords: list[str] | UnsetType = _UNSET
    hex: bool | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class GeoJSONAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "geojson" analyzer.

    Attributes:
        geo_type: which parts of the GeoJSON object to index.
            Decoding a payload without it yields `SHAPE`.
        options: a `GeoOptions` for the S2 cell covering.
    """

    analyzer_type = AnalyzerType.GEOJSON
    _wire_names = {"geo_type": "type", "options": "options"}
    _decoders = {"geo_type": GeoJSONType.coerce, "options": GeoOptions._from_dict}
    _defaults = {"geo_type": GeoJSONType.SHAPE}

    geo_type: GeoJSONType | UnsetType = _UNSET
    options: GeoOptions | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class GeoS2AnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "geo_s2" analyzer. Same as "geojson", plus a choice of
    binary format for the stored coordinates.

    Attributes:
        geo_type: which parts of the GeoJSON object to index (default `SHAPE`).
        options: a `GeoOptions` for the S2 cell covering.
        format: the storage format (default on decode: `LAT_LNG_DOUBLE`).
    """

    analyzer_type = AnalyzerType.GEO_S2
    _wire_names = {"geo_type": "type", "options": "options", "format": "format"}
    _decoders = {
        "geo_type": GeoJSONType.coerce,
        "options": GeoOptions._from_dict,
        "format": GeoS2Format.coerce,
    }
    _defaults = {
        "geo_type": GeoJSONType.SHAPE,
        "format": GeoS2Format.LAT_LNG_DOUBLE,
    }

    geo_type: GeoJSONType | UnsetType = _UNSET
    options: GeoOptions | UnsetType = _UNSET
    format: GeoS2Format | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class GeoPointAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "geopoint" analyzer.

    Attributes:
        latitude: attribute path to the latitude value, e.g. ["lat"].
        longitude: attribute path to the longitude value.
        options: a `GeoOptions` for the S2 cell covering.
    """

    analyzer_type = AnalyzerType.GEOPOINT
    _wire_names = {
        "latitude": "latitude",
        "longitude": "longitude",
        "options": "options",
    }
    _decoders = {
        "latitude": _decode_list,
        "longitude": _decode_list,
        "options": GeoOptions._from_dict,
    }

    latitude: list[str] | UnsetType = _UNSET
    longitude: list[str] | UnsetType = _UNSET
    options: GeoOptions | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class SegmentationAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "segmentation" analyzer.

    Attributes:
        case: case conversion. Decoding a payload without it yields `NONE`.
        break_type: which tokens to emit (the "break" field on the wire).
            Decoding a payload without it yields `ALPHA`.
    """

    analyzer_type = AnalyzerType.SEGMENTATION
    _wire_names = {"case": "case", "break_type": "break"}
    _decoders = {"case": CaseType.coerce, "break_type": BreakType.coerce}
    _defaults = {"case": CaseType.NONE, "break_type": BreakType.ALPHA}

    case: CaseType | UnsetType = _UNSET
    break_type: BreakType | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class CollationAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "collation" analyzer.

    Attributes:
        locale: a locale in the format `language[_COUNTRY][.encoding][@variant]`.
    """

    analyzer_type = AnalyzerType.COLLATION
    _wire_names = {"locale": "locale"}

    locale: str | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class ClassificationAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "classification" analyzer (Enterprise Edition).

    Attributes:
        model_location: the on-disk path to a fastText model. Required.
        top_k: number of class labels to produce (default on decode: 1).
        threshold: probability threshold in [0, 1] (default on decode: 0.99).
    """

    analyzer_type = AnalyzerType.CLASSIFICATION
    _wire_names = {
        "model_location": "model_location",
        "top_k": "top_k",
        "threshold": "threshold",
    }
    _decoders = {"threshold": float}
    _defaults = {
        "top_k": DEFAULT_CLASSIFICATION_TOP_K,
        "threshold": DEFAULT_CLASSIFICATION_THRESHOLD,
    }
    _required = {"model_location"}

    model_location: str
    top_k: int | UnsetType = _UNSET
    threshold: float | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class NearestNeighborsAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "nearest_neighbors" analyzer (Enterprise Edition).

    Attributes:
        model_location: the on-disk path to a fastText model. Required.
        top_k: number of neighbors to produce (default on decode: 1).
    """

    analyzer_type = AnalyzerType.NEAREST_NEIGHBORS
    _wire_names = {"model_location": "model_location", "top_k": "top_k"}
    _defaults = {"top_k": DEFAULT_NEAREST_NEIGHBORS_TOP_K}
    _required = {"model_location"}

    model_location: str
    top_k: int | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(repr=False)
class MinHashAnalyzerProperties(AnalyzerProperties):
    """
    Properties of a "minhash" analyzer (Enterprise Edition).

    Attributes:
        analyzer: the inner analyzer whose output is hashed, as a full
            `AnalyzerDefinition` (usually without a name). An
            `AnalyzerProperties` is accepted too and wrapped accordingly.
            Decoding a payload without it yields an "identity" analyzer.
        num_hashes: the size of the MinHash signature, at least 1.
    """

    analyzer_type = AnalyzerType.MINHASH
    _wire_names = {"analyzer": "analyzer", "num_hashes": "numHashes"}
    _decoders = {"analyzer": lambda raw: AnalyzerDefinition._from_dict(raw)}

    analyzer: AnalyzerDefinition | UnsetType = _UNSET
    num_hashes: int | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.analyzer, AnalyzerProperties):
            self.analyzer = AnalyzerDefinition(properties=self.analyzer)

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> MinHashAnalyzerProperties:
        properties = super()._from_dict(raw_dict)
        if isinstance(properties.analyzer, UnsetType):
            properties.analyzer = AnalyzerDefinition(
                properties=IdentityAnalyzerProperties()
            )
        return properties


@dataclass(repr=False)
class UnknownAnalyzerProperties(AnalyzerProperties):
    """
    The properties of an analyzer whose type is not known to this client
    (for instance a type introduced in a newer server version). The raw
    properties are kept verbatim. Such an analyzer can be read and listed,
    but not created through this client.

    Attributes:
        type_name: the analyzer type as returned by the server.
        raw_properties: the properties as a plain dictionary.
    """

    type_name: str = ""
    raw_properties: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def _get_analyzer_type(self) -> str:
        return self.type_name

    def as_dict(self) -> dict[str, Any]:
        return dict(self.raw_properties)


ANALYZER_PROPERTIES_CLASSES: dict[AnalyzerType, type[AnalyzerProperties]] = {
    properties_class.analyzer_type: properties_class
    for properties_class in (
        IdentityAnalyzerProperties,
        DelimiterAnalyzerProperties,
        StemAnalyzerProperties,
        NormAnalyzerProperties,
        NGramAnalyzerProperties,
        TextAnalyzerProperties,
        AQLAnalyzerProperties,
        PipelineAnalyzerProperties,
        StopwordsAnalyzerProperties,
        GeoJSONAnalyzerProperties,
        GeoS2AnalyzerProperties,
        GeoPointAnalyzerProperties,
        SegmentationAnalyzerProperties,
        CollationAnalyzerProperties,
        ClassificationAnalyzerProperties,
        NearestNeighborsAnalyzerProperties,
        MinHashAnalyzerProperties,
    )
}


@dataclass
class AnalyzerDefinition:
    """
    The full definition of an analyzer: name, type, type-specific properties
    and features. This is what `create_analyzer` accepts and what the
    `analyzer` / `list_analyzers` methods of a database return.

    Attributes:
        name: the analyzer name. The server returns it qualified with the
            database name, as in "mydb::my_analyzer".
        analyzer_type: the analyzer type. For analyzers returned by the server
            with a type unknown to this client, this is a plain string.
        properties: an instance of the `AnalyzerProperties` subclass matching
            the type.
        features: the list of features (see `AnalyzerFeature`).

    Example:
        >>> from arangopy.constants import CaseType
        >>> from arangopy.info import AnalyzerDefinition, NormAnalyzerProperties
        >>> definition = AnalyzerDefinition(
        ...     name="norm_en",
        ...     properties=NormAnalyzerProperties(locale="en", case=CaseType.LOWER),
        ...     features=["frequency", "norm"],
        ... )
        >>> definition.analyzer_type
        <AnalyzerType.NORM: 'norm'>
        >>> AnalyzerDefinition(
        ...     name="ngram_3",
        ...     analyzer_type="ngram",
        ...     properties={"min": 3, "max": 3, "preserveOriginal": False},
        ... ).properties
        NGramAnalyzerProperties(min=3, max=3, preserve_original=False)
    """

    name: str | UnsetType
    analyzer_type: AnalyzerType | str
    properties: AnalyzerProperties
    features: list[AnalyzerFeature]

    def __init__(
        self,
        *,
        name: str | UnsetType = _UNSET,
        analyzer_type: AnalyzerType | str | UnsetType = _UNSET,
        properties: AnalyzerProperties | dict[str, Any] | None = None,
        features: Iterable[AnalyzerFeature | str] | None = None,
    ) -> None:
        self.name = name
        if isinstance(properties, AnalyzerProperties):
            self.properties = properties
            self.analyzer_type = properties._get_analyzer_type()
            if not isinstance(analyzer_type, UnsetType):
                if _normalize_analyzer_type(analyzer_type) != self.analyzer_type:
                    raise ValueError(
                        f"Analyzer type '{_analyzer_type_value(analyzer_type)}' does "
                        f"not match the properties class {properties.__class__.__name__}."
                    )
        else:
            if isinstance(analyzer_type, UnsetType):
                raise ValueError(
                    "An analyzer_type is required unless the properties are "
                    "passed as an AnalyzerProperties object."
                )
            self.properties = AnalyzerProperties.from_type_and_dict(
                analyzer_type, properties
            )
            self.analyzer_type = self.properties._get_analyzer_type()
        self.features = [
            AnalyzerFeature.coerce(feature) for feature in (features or [])
        ]
        for issue in find_feature_dependency_issues(self.features):
            logger.warning(f"Analyzer '{self.name}': {issue}.")

    def __repr__(self) -> str:
        not_null_pieces = [
            pc
            for pc in (
                None if isinstance(self.name, UnsetType) else f"name={self.name}",
                f"analyzer_type={_analyzer_type_value(self.analyzer_type)}",
                f"properties={self.properties.__repr__()}",
                f"features={[ftr.value for ftr in self.features]}"
                if self.features
                else None,
            )
            if pc is not None
        ]
        inner_desc = ", ".join(not_null_pieces)
        return f"{self.__class__.__name__}({inner_desc})"

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "name": None if isinstance(self.name, UnsetType) else self.name,
                "type": _analyzer_type_value(self.analyzer_type),
                "properties": self.properties.as_dict(),
                "features": [ftr.value for ftr in self.features],
            }.items()
            if v is not None
        }

    def _as_creation_payload(self) -> dict[str, Any]:
        """
        Produce the payload for creating this analyzer, checking beforehand
        that the type is a known one and that the features are consistent.
        """

        if isinstance(self.properties, UnknownAnalyzerProperties):
            raise UnknownAnalyzerTypeException(
                text=(
                    f"Cannot create an analyzer of unknown type '{self.analyzer_type}'. "
                    f"Known types are: {', '.join(AnalyzerType.values())}."
                ),
                analyzer_type=_analyzer_type_value(self.analyzer_type),
            )
        if isinstance(self.name, UnsetType):
            raise ValueError("An analyzer name is required to create an analyzer.")
        feature_issues = find_feature_dependency_issues(self.features)
        if feature_issues:
            raise ValueError(
                f"Inconsistent features for analyzer '{self.name}': "
                f"{'; '.join(feature_issues)}."
            )
        return self.as_dict()

    @classmethod
    def _from_dict(cls, raw_dict: dict[str, Any]) -> AnalyzerDefinition:
        """
        Create an instance of AnalyzerDefinition from a dictionary
        such as one returned by the server.
        """

        _raw_dict = _strip_envelope(_ensure_dict(cls, raw_dict))
        if _raw_dict.get("type") is None:
            raise MalformedPayloadException(
                text="An analyzer definition lacks the 'type' field.",
                raw_payload=raw_dict,
            )
        _warn_residual_keys(cls, _raw_dict, {"name", "type", "properties", "features"})
        try:
            features = [
                AnalyzerFeature.coerce(feature)
                for feature in _decode_list(_raw_dict.get("features") or [])
            ]
        except (ValueError, TypeError) as exc:
            raise MalformedPayloadException(
                text=f"Invalid analyzer features: {_raw_dict.get('features')!r}.",
                raw_payload=raw_dict,
            ) from exc
        return AnalyzerDefinition(
            name=_raw_dict["name"] if _raw_dict.get("name") is not None else _UNSET,
            analyzer_type=_raw_dict["type"],
            properties=_raw_dict.get("properties"),
            features=features,
        )

    @classmethod
    def coerce(
        cls, raw_input: AnalyzerDefinition | dict[str, Any]
    ) -> AnalyzerDefinition:
        """
        Normalize the input, whether an object already or a plain dictionary
        of the right structure, into an AnalyzerDefinition.
        """

        if isinstance(raw_input, AnalyzerDefinition):
            return raw_input
        else:
            return cls._from_dict(raw_input)
