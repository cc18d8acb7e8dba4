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

from arangopy.data.info.admin_info import (
    ClusterHealth,
    LicenseInfo,
    ServerHealth,
    VersionInfo,
)
from arangopy.data.info.analyzer_descriptor import (
    AnalyzerDefinition,
    AnalyzerProperties,
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
from arangopy.data.info.collection_descriptor import (
    CollectionDescriptor,
    CollectionProperties,
    KeyOptions,
)
from arangopy.data.info.database_info import (
    CreateDatabaseOptions,
    DatabaseInfo,
    DatabaseUser,
)
from arangopy.data.info.view_descriptor import (
    ArangoSearchLinkProperties,
    ArangoSearchViewProperties,
    BytesAccumConsolidationPolicy,
    ConsolidationPolicy,
    PrimarySortField,
    SearchAliasIndex,
    SearchAliasViewProperties,
    StoredValue,
    TierConsolidationPolicy,
    ViewDescriptor,
    consolidation_policy_from_dict,
)

__all__ = [
    "AQLAnalyzerProperties",
    "AnalyzerDefinition",
    "AnalyzerProperties",
    "ArangoSearchLinkProperties",
    "ArangoSearchViewProperties",
    "BytesAccumConsolidationPolicy",
    "ClassificationAnalyzerProperties",
    "ClusterHealth",
    "CollationAnalyzerProperties",
    "CollectionDescriptor",
    "CollectionProperties",
    "ConsolidationPolicy",
    "CreateDatabaseOptions",
    "DatabaseInfo",
    "DatabaseUser",
    "DelimiterAnalyzerProperties",
    "EdgeNGramOptions",
    "GeoJSONAnalyzerProperties",
    "GeoOptions",
    "GeoPointAnalyzerProperties",
    "GeoS2AnalyzerProperties",
    "IdentityAnalyzerProperties",
    "KeyOptions",
    "LicenseInfo",
    "MinHashAnalyzerProperties",
    "NGramAnalyzerProperties",
    "NearestNeighborsAnalyzerProperties",
    "NormAnalyzerProperties",
    "PipelineAnalyzerProperties",
    "PipelineStage",
    "PrimarySortField",
    "SearchAliasIndex",
    "SearchAliasViewProperties",
    "SegmentationAnalyzerProperties",
    "ServerHealth",
    "StemAnalyzerProperties",
    "StopwordsAnalyzerProperties",
    "StoredValue",
    "TextAnalyzerProperties",
    "TierConsolidationPolicy",
    "UnknownAnalyzerProperties",
    "VersionInfo",
    "ViewDescriptor",
    "consolidation_policy_from_dict",
    "find_feature_dependency_issues",
]
