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

from typing import Optional, Tuple

from arangopy.utils.str_enum import StrEnum

CallerType = Tuple[Optional[str], Optional[str]]


class AnalyzerType(StrEnum):
    """
    The closed set of analyzer types known to this client.

    Each type selects a different shape for the analyzer properties.

    Like every `StrEnum`, a type read from the server matches a member
    regardless of case and of "-"/"_" separators: "GEO_S2", "geo-s2" and
    "geos2" all decode as `GEO_S2`, and are written back as "geo_s2".
    Only a type matching no member at all is kept with its exact spelling,
    as an `UnknownAnalyzerProperties`.
    """

    # treat value as atom (no transformation)
    IDENTITY = "identity"
    # split into tokens at a user-defined character
    DELIMITER = "delimiter"
    # apply stemming to the value as a whole
    STEM = "stem"
    # apply normalization to the value as a whole
    NORM = "norm"
    # create n-grams from the value with user-defined lengths
    NGRAM = "ngram"
    # tokenize into words, optionally with stemming, normalization, stop-words
    TEXT = "text"
    # run a restricted AQL query to manipulate / filter the input
    AQL = "aql"
    # chain multiple analyzers, feeding the output of each to the next
    PIPELINE = "pipeline"
    # remove the specified tokens from the input
    STOPWORDS = "stopwords"
    # break up a GeoJSON object into indexable tokens
    GEOJSON = "geojson"
    # like geojson, with a more compact storage format
    GEO_S2 = "geo_s2"
    # break up a JSON object describing a coordinate into indexable tokens
    GEOPOINT = "geopoint"
    # language-agnostic tokenization of text
    SEGMENTATION = "segmentation"
    # language-specific collation tokens
    COLLATION = "collation"
    # classify tokens with a fastText model (Enterprise Edition)
    CLASSIFICATION = "classification"
    # find nearest neighbors of tokens with a fastText model (Enterprise Edition)
    NEAREST_NEIGHBORS = "nearest_neighbors"
    # compute MinHash signatures (Enterprise Edition)
    MINHASH = "minhash"


class AnalyzerFeature(StrEnum):
    """
    The per-token metadata the server can record for an analyzer.

    `position` requires `frequency`, and `offset` requires `position`.
    """

    # how often a term is seen, required for PHRASE()
    FREQUENCY = "frequency"
    # the field normalization factor
    NORM = "norm"
    # sequentially increasing term position, required for PHRASE()
    POSITION = "position"
    # start/end offsets of the term, for highlighting
    OFFSET = "offset"


class CaseType(StrEnum):
    UPPER = "upper"
    LOWER = "lower"
    NONE = "none"


class BreakType(StrEnum):
    # all tokens
    ALL = "all"
    # tokens of alphanumeric characters only (default)
    ALPHA = "alpha"
    # tokens of non-whitespace characters only
    GRAPHIC = "graphic"


class NGramStreamType(StrEnum):
    BINARY = "binary"
    UTF8 = "utf8"


class AQLReturnType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"


class GeoJSONType(StrEnum):
    # index all GeoJSON geometry types (default)
    SHAPE = "shape"
    # only index the centroid of the input geometry
    CENTROID = "centroid"
    # only index GeoJSON objects of type Point
    POINT = "point"


class GeoS2Format(StrEnum):
    """
    Binary representation of the coordinates stored by a geo_s2 analyzer.

    Values:
        LAT_LNG_DOUBLE: 8-byte floats, 16 bytes per coordinate pair (default).
        LAT_LNG_INT: 4-byte integers, 8 bytes per pair. Most compact, with a
            precision limited to roughly 1 to 10 centimeters.
        S2_POINT: native Google S2 format, 24 bytes per pair.
    """

    LAT_LNG_DOUBLE = "latLngDouble"
    LAT_LNG_INT = "latLngInt"
    S2_POINT = "s2Point"


class ViewType(StrEnum):
    ARANGOSEARCH = "arangosearch"
    SEARCH_ALIAS = "search-alias"


class ConsolidationPolicyType(StrEnum):
    TIER = "tier"
    BYTES_ACCUM = "bytes_accum"


class StoreValuesType(StrEnum):
    NONE = "none"
    ID = "id"


class CompressionType(StrEnum):
    LZ4 = "lz4"
    NONE = "none"


class SearchAliasOperation(StrEnum):
    ADD = "add"
    DEL = "del"


class CollectionType:
    """
    Admitted values for the type of a collection, as integers on the wire.
    """

    def __init__(self) -> None:
        raise NotImplementedError

    DOCUMENT = 2
    EDGE = 3


class CollectionStatus:
    """
    Status codes of a collection, as integers on the wire.
    """

    def __init__(self) -> None:
        raise NotImplementedError

    NEW_BORN = 1
    UNLOADED = 2
    LOADED = 3
    UNLOADING = 4
    DELETED = 5
    LOADING = 6


class ServerMode(StrEnum):
    DEFAULT = "default"
    READONLY = "readonly"


class LogLevel(StrEnum):
    FATAL = "FATAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    TRACE = "TRACE"
    DEFAULT = "DEFAULT"
