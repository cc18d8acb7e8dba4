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

"""
Unit tests for the polymorphic analyzer definitions.
"""

from __future__ import annotations

import logging

import pytest

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
from arangopy.info import (
    AnalyzerDefinition,
    AQLAnalyzerProperties,
    ClassificationAnalyzerProperties,
    CollationAnalyzerProperties,
    DelimiterAnalyzerProperties,
    EdgeNGramOptions,
    GeoJSONAnalyzerProperties,
    GeoOptions,
    GeoPointAnalyzerProperties,
    GeoS2AnalyzerProperties,
    IdentityAnalyzerProperties,
    MinHashAnalyzerProperties,
    NearestNeighborsAnalyzerProperties,
    NGramAnalyzerProperties,
    NormAnalyzerProperties,
    PipelineAnalyzerProperties,
    PipelineStage,
    SegmentationAnalyzerProperties,
    StemAnalyzerProperties,
    StopwordsAnalyzerProperties,
    TextAnalyzerProperties,
    UnknownAnalyzerProperties,
    find_feature_dependency_issues,
)

# every field that gets a value on decode when absent is set explicitly here
SAMPLE_DEFINITIONS = [
    AnalyzerDefinition(name="a_identity", properties=IdentityAnalyzerProperties()),
    AnalyzerDefinition(
        name="a_delimiter",
        properties=DelimiterAnalyzerProperties(delimiter=","),
        features=["frequency"],
    ),
    AnalyzerDefinition(
        name="a_stem", properties=StemAnalyzerProperties(locale="en")
    ),
    AnalyzerDefinition(
        name="a_norm",
        properties=NormAnalyzerProperties(
            locale="de", accent=False, case=CaseType.LOWER
        ),
    ),
    AnalyzerDefinition(
        name="a_ngram",
        properties=NGramAnalyzerProperties(
            min=2,
            max=3,
            preserve_original=False,
            start_marker="^",
            end_marker="$",
            stream_type=NGramStreamType.UTF8,
        ),
        features=["frequency", "position", "norm"],
    ),
    AnalyzerDefinition(
        name="a_text",
        properties=TextAnalyzerProperties(
            locale="en",
            accent=False,
            case=CaseType.LOWER,
            stemming=True,
            edge_ngram=EdgeNGramOptions(min=2, max=5, preserve_original=True),
            stopwords=["the", "a"],
        ),
        features=["frequency", "position", "offset", "norm"],
    ),
    AnalyzerDefinition(
        name="a_aql",
        properties=AQLAnalyzerProperties(
            query_string="RETURN SOUNDEX(@param)",
            collapse_positions=True,
            keep_null=False,
            batch_size=10,
            memory_limit=1048576,
            return_type=AQLReturnType.STRING,
        ),
    ),
    AnalyzerDefinition(
        name="a_pipeline",
        properties=PipelineAnalyzerProperties(
            pipeline=[
                PipelineStage(
                    NormAnalyzerProperties(locale="en", case=CaseType.UPPER)
                ),
                PipelineStage(NGramAnalyzerProperties(min=3, max=3)),
            ]
        ),
    ),
    AnalyzerDefinition(
        name="a_stopwords",
        properties=StopwordsAnalyzerProperties(stopwords=["616e64"], hex=True),
    ),
    AnalyzerDefinition(
        name="a_geojson",
        properties=GeoJSONAnalyzerProperties(
            geo_type=GeoJSONType.CENTROID,
            options=GeoOptions(max_cells=20, min_level=4, max_level=23),
        ),
    ),
    AnalyzerDefinition(
        name="a_geo_s2",
        properties=GeoS2AnalyzerProperties(
            geo_type=GeoJSONType.SHAPE,
            format=GeoS2Format.LAT_LNG_INT,
        ),
    ),
    AnalyzerDefinition(
        name="a_geopoint",
        properties=GeoPointAnalyzerProperties(
            latitude=["location", "lat"],
            longitude=["location", "lng"],
        ),
    ),
    AnalyzerDefinition(
        name="a_segmentation",
        properties=SegmentationAnalyzerProperties(
            case=CaseType.NONE, break_type=BreakType.GRAPHIC
        ),
    ),
    AnalyzerDefinition(
        name="a_collation", properties=CollationAnalyzerProperties(locale="sv")
    ),
    AnalyzerDefinition(
        name="a_classification",
        properties=ClassificationAnalyzerProperties(
            model_location="/models/model.bin", top_k=2, threshold=0.5
        ),
    ),
    AnalyzerDefinition(
        name="a_nearest_neighbors",
        properties=NearestNeighborsAnalyzerProperties(
            model_location="/models/model.bin", top_k=3
        ),
    ),
    AnalyzerDefinition(
        name="a_minhash",
        properties=MinHashAnalyzerProperties(
            analyzer=AnalyzerDefinition(
                properties=DelimiterAnalyzerProperties(delimiter=" "),
                features=[AnalyzerFeature.FREQUENCY],
            ),
            num_hashes=10,
        ),
    ),
]


class TestAnalyzerDefinitions:
    @pytest.mark.describe("test of analyzer definitions through their wire form")
    def test_analyzer_definition_wire_roundtrip(self) -> None:
        covered_types = {definition.analyzer_type for definition in SAMPLE_DEFINITIONS}
        assert covered_types == set(AnalyzerType)
        for definition in SAMPLE_DEFINITIONS:
            assert AnalyzerDefinition._from_dict(definition.as_dict()) == definition

    @pytest.mark.describe("test of analyzer wire format field names")
    def test_analyzer_wire_format(self) -> None:
        text_def = AnalyzerDefinition(
            name="text_en",
            properties=TextAnalyzerProperties(
                locale="en",
                case=CaseType.LOWER,
                edge_ngram=EdgeNGramOptions(min=2, preserve_original=False),
                stopwords_path=["/stopwords"],
            ),
            features=[AnalyzerFeature.FREQUENCY, AnalyzerFeature.NORM],
        )
        assert text_def.as_dict() == {
            "name": "text_en",
            "type": "text",
            "properties": {
                "locale": "en",
                "case": "lower",
                "edgeNgram": {"min": 2, "preserveOriginal": False},
                "stopwordsPath": ["/stopwords"],
            },
            "features": ["frequency", "norm"],
        }

        s2_def = AnalyzerDefinition(
            name="geo",
            properties=GeoS2AnalyzerProperties(
                format=GeoS2Format.S2_POINT,
                options=GeoOptions(max_cells=8),
            ),
        )
        assert s2_def.as_dict() == {
            "name": "geo",
            "type": "geo_s2",
            "properties": {"options": {"maxCells": 8}, "format": "s2Point"},
            "features": [],
        }

    @pytest.mark.describe("test of analyzer discriminator fidelity")
    def test_analyzer_discriminator_fidelity(self) -> None:
        aql_def = AnalyzerDefinition(
            name="soundex",
            properties=AQLAnalyzerProperties(query_string="RETURN SOUNDEX(@param)"),
        )
        aql_props = aql_def.as_dict()["properties"]
        assert aql_props == {"queryString": "RETURN SOUNDEX(@param)"}
        for ngram_field in ("min", "max", "preserveOriginal", "streamType"):
            assert ngram_field not in aql_props

        ngram_def = AnalyzerDefinition(
            name="trigram",
            properties=NGramAnalyzerProperties(
                min=3, max=3, preserve_original=False
            ),
        )
        ngram_props = ngram_def.as_dict()["properties"]
        assert ngram_props == {"min": 3, "max": 3, "preserveOriginal": False}
        for aql_field in ("queryString", "batchSize", "returnType"):
            assert aql_field not in ngram_props

        parsed = AnalyzerDefinition._from_dict(
            {
                "name": "x",
                "type": "ngram",
                "properties": {"min": 1, "max": 2, "preserveOriginal": True},
            }
        )
        assert isinstance(parsed.properties, NGramAnalyzerProperties)
        assert parsed.analyzer_type == AnalyzerType.NGRAM

    @pytest.mark.describe("test of analyzer construction from type and dict")
    def test_analyzer_construction_from_dict(self) -> None:
        definition = AnalyzerDefinition(
            name="trigram",
            analyzer_type="ngram",
            properties={"min": 3, "max": 3, "preserveOriginal": False},
        )
        assert definition.properties == NGramAnalyzerProperties(
            min=3, max=3, preserve_original=False
        )

        with pytest.raises(ValueError):
            AnalyzerDefinition(
                name="mismatch",
                analyzer_type=AnalyzerType.TEXT,
                properties=NGramAnalyzerProperties(min=1, max=2),
            )
        with pytest.raises(ValueError):
            AnalyzerDefinition(name="untyped", properties={"min": 1})

        coerced = AnalyzerDefinition.coerce(
            {"name": "delim", "type": "delimiter", "properties": {"delimiter": "|"}}
        )
        assert coerced.properties == DelimiterAnalyzerProperties(delimiter="|")
        assert AnalyzerDefinition.coerce(coerced) is coerced

    @pytest.mark.describe("test of defaults applied when decoding analyzers")
    def test_analyzer_decode_defaults(self) -> None:
        geo_s2 = AnalyzerDefinition._from_dict(
            {"name": "g", "type": "geo_s2", "properties": {}}
        )
        assert isinstance(geo_s2.properties, GeoS2AnalyzerProperties)
        assert geo_s2.properties.format == GeoS2Format.LAT_LNG_DOUBLE
        assert geo_s2.properties.geo_type == GeoJSONType.SHAPE

        segmentation = AnalyzerDefinition._from_dict(
            {"name": "s", "type": "segmentation", "properties": {"case": "upper"}}
        )
        assert isinstance(segmentation.properties, SegmentationAnalyzerProperties)
        assert segmentation.properties.break_type == BreakType.ALPHA
        assert segmentation.properties.case == CaseType.UPPER

        norm = AnalyzerDefinition._from_dict(
            {"name": "n", "type": "norm", "properties": {"locale": "en"}}
        )
        assert isinstance(norm.properties, NormAnalyzerProperties)
        assert norm.properties.case == CaseType.NONE

        classification = AnalyzerDefinition._from_dict(
            {
                "name": "c",
                "type": "classification",
                "properties": {"model_location": "/m.bin"},
            }
        )
        assert isinstance(classification.properties, ClassificationAnalyzerProperties)
        assert classification.properties.top_k == 1
        assert classification.properties.threshold == 0.99

        minhash = AnalyzerDefinition._from_dict(
            {"name": "m", "type": "minhash", "properties": {"numHashes": 5}}
        )
        assert isinstance(minhash.properties, MinHashAnalyzerProperties)
        assert minhash.properties.analyzer == AnalyzerDefinition(
            properties=IdentityAnalyzerProperties()
        )

        # no defaults are invented when encoding
        assert GeoS2AnalyzerProperties().as_dict() == {}
        assert SegmentationAnalyzerProperties().as_dict() == {}

    @pytest.mark.describe("test of pipeline analyzer stage ordering")
    def test_analyzer_pipeline_order(self) -> None:
        raw_pipeline = [
            {"type": "norm", "properties": {"locale": "en", "case": "lower"}},
            {"type": "delimiter", "properties": {"delimiter": "-"}},
            {"type": "stem", "properties": {"locale": "en"}},
            {"type": "ngram", "properties": {"min": 2, "max": 2}},
        ]
        definition = AnalyzerDefinition._from_dict(
            {
                "name": "chain",
                "type": "pipeline",
                "properties": {"pipeline": raw_pipeline},
            }
        )
        assert isinstance(definition.properties, PipelineAnalyzerProperties)
        stages = definition.properties.pipeline
        assert isinstance(stages, list)
        assert [stage.analyzer_type for stage in stages] == [
            AnalyzerType.NORM,
            AnalyzerType.DELIMITER,
            AnalyzerType.STEM,
            AnalyzerType.NGRAM,
        ]
        assert definition.as_dict()["properties"]["pipeline"] == raw_pipeline

    @pytest.mark.describe("test of analyzer feature dependencies")
    def test_analyzer_feature_dependencies(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        assert find_feature_dependency_issues([]) == []
        assert find_feature_dependency_issues(["frequency", "position", "offset"]) == []
        assert len(find_feature_dependency_issues(["offset"])) == 1
        assert len(find_feature_dependency_issues(["position"])) == 1
        assert len(find_feature_dependency_issues(["offset", "position"])) == 1

        with caplog.at_level(logging.WARNING):
            flawed = AnalyzerDefinition(
                name="flawed",
                properties=IdentityAnalyzerProperties(),
                features=["position"],
            )
        assert any("frequency" in record.getMessage() for record in caplog.records)
        with pytest.raises(ValueError):
            flawed._as_creation_payload()

        sound = AnalyzerDefinition(
            name="sound",
            properties=IdentityAnalyzerProperties(),
            features=["frequency", "position"],
        )
        assert sound._as_creation_payload() == {
            "name": "sound",
            "type": "identity",
            "properties": {},
            "features": ["frequency", "position"],
        }

    @pytest.mark.describe("test of analyzers of a type unknown to the client")
    def test_analyzer_unknown_type(self, caplog: pytest.LogCaptureFixture) -> None:
        raw_definition = {
            "name": "db::wordpiece",
            "type": "wordpiece",
            "properties": {"vocabulary": "/v.txt", "maxLength": 7},
            "features": [],
        }
        with caplog.at_level(logging.WARNING):
            definition = AnalyzerDefinition._from_dict(raw_definition)
        assert any("wordpiece" in record.getMessage() for record in caplog.records)
        assert definition.analyzer_type == "wordpiece"
        assert isinstance(definition.properties, UnknownAnalyzerProperties)
        assert definition.as_dict() == raw_definition

        with pytest.raises(UnknownAnalyzerTypeException) as exc_info:
            definition._as_creation_payload()
        assert exc_info.value.analyzer_type == "wordpiece"

    @pytest.mark.describe("test of unknown analyzer fields being preserved")
    def test_analyzer_extra_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            definition = AnalyzerDefinition._from_dict(
                {
                    "name": "d",
                    "type": "delimiter",
                    "properties": {"delimiter": ",", "futureSetting": [1, 2]},
                }
            )
        assert "futureSetting" in caplog.text
        assert isinstance(definition.properties, DelimiterAnalyzerProperties)
        assert definition.properties.delimiter == ","
        assert definition.properties.extra == {"futureSetting": [1, 2]}
        assert definition.as_dict()["properties"] == {
            "delimiter": ",",
            "futureSetting": [1, 2],
        }

    @pytest.mark.describe("test of response envelope keys in analyzer payloads")
    def test_analyzer_envelope(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            definition = AnalyzerDefinition._from_dict(
                {
                    "error": False,
                    "code": 200,
                    "name": "products_db::ident",
                    "type": "identity",
                    "properties": {},
                    "features": ["norm"],
                }
            )
        assert caplog.records == []
        assert definition.name == "products_db::ident"
        assert definition.features == [AnalyzerFeature.NORM]

    @pytest.mark.describe("test of malformed analyzer payloads")
    def test_analyzer_malformed(self) -> None:
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict({"name": "untyped", "properties": {}})
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict(
                {"name": "q", "type": "aql", "properties": {"batchSize": 3}}
            )
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict(
                {"name": "f", "type": "identity", "features": ["sparkle"]}
            )
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict(
                {"name": "c", "type": "norm", "properties": {"case": "sideways"}}
            )
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict(
                {
                    "name": "p",
                    "type": "pipeline",
                    "properties": {"pipeline": [{"properties": {}}]},
                }
            )
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict("bogus")  # type: ignore[arg-type]
        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict(
                {"name": "f", "type": "identity", "features": "frequency"}
            )

    @pytest.mark.describe("test of list-valued analyzer fields refusing strings")
    def test_analyzer_list_fields_strict(self) -> None:
        for raw_definition in (
            {"name": "s", "type": "stopwords", "properties": {"stopwords": "and"}},
            {"name": "t", "type": "text", "properties": {"stopwords": "and"}},
            {"name": "t", "type": "text", "properties": {"stopwordsPath": "/sw"}},
            {"name": "g", "type": "geopoint", "properties": {"latitude": "lat"}},
            {"name": "g", "type": "geopoint", "properties": {"longitude": "lng"}},
            {"name": "p", "type": "pipeline", "properties": {"pipeline": "norm"}},
        ):
            with pytest.raises(MalformedPayloadException):
                AnalyzerDefinition._from_dict(raw_definition)

        stopwords = AnalyzerDefinition._from_dict(
            {"name": "s", "type": "stopwords", "properties": {"stopwords": ["and"]}}
        )
        assert isinstance(stopwords.properties, StopwordsAnalyzerProperties)
        assert stopwords.properties.stopwords == ["and"]

    @pytest.mark.describe("test of the minhash inner analyzer definition")
    def test_analyzer_minhash_inner_definition(self) -> None:
        minhash = AnalyzerDefinition._from_dict(
            {
                "name": "mh",
                "type": "minhash",
                "properties": {
                    "analyzer": {
                        "type": "segmentation",
                        "properties": {"break": "alpha", "case": "lower"},
                        "features": ["frequency", "position"],
                    },
                    "numHashes": 10,
                },
            }
        )
        assert isinstance(minhash.properties, MinHashAnalyzerProperties)
        inner = minhash.properties.analyzer
        assert isinstance(inner, AnalyzerDefinition)
        assert inner.analyzer_type == AnalyzerType.SEGMENTATION
        assert inner.features == [AnalyzerFeature.FREQUENCY, AnalyzerFeature.POSITION]

        wrapped = MinHashAnalyzerProperties(
            analyzer=StemAnalyzerProperties(locale="en"),  # type: ignore[arg-type]
            num_hashes=4,
        )
        assert wrapped.analyzer == AnalyzerDefinition(
            properties=StemAnalyzerProperties(locale="en")
        )
        assert wrapped.as_dict() == {
            "analyzer": {
                "type": "stem",
                "properties": {"locale": "en"},
                "features": [],
            },
            "numHashes": 4,
        }

        with pytest.raises(MalformedPayloadException):
            AnalyzerDefinition._from_dict(
                {
                    "name": "mh",
                    "type": "minhash",
                    "properties": {"analyzer": {"properties": {}}, "numHashes": 2},
                }
            )

    @pytest.mark.describe("test of analyzer type spellings on decode")
    def test_analyzer_type_spellings(self) -> None:
        for spelling in ("geo_s2", "GEO_S2", "geo-s2", "geos2"):
            definition = AnalyzerDefinition._from_dict(
                {"name": "g", "type": spelling, "properties": {}}
            )
            assert definition.analyzer_type == AnalyzerType.GEO_S2
            assert definition.as_dict()["type"] == "geo_s2"

        unknown = AnalyzerDefinition._from_dict(
            {"name": "w", "type": "Wildcard_V2", "properties": {"ngramSize": 3}}
        )
        assert unknown.analyzer_type == "Wildcard_V2"
        assert unknown.as_dict()["type"] == "Wildcard_V2"
