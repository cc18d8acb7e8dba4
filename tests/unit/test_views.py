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
Unit tests for the view property model and the view handles.
"""

from __future__ import annotations

from typing import Any

import pytest
from pytest_httpserver import HTTPServer

from arangopy import ArangoClient
from arangopy.constants import (
    CompressionType,
    SearchAliasOperation,
    StoreValuesType,
    ViewType,
)
from arangopy.exceptions import (
    ArangoHttpException,
    MalformedPayloadException,
    NoMoreItemsException,
)
from arangopy.info import (
    ArangoSearchLinkProperties,
    ArangoSearchViewProperties,
    BytesAccumConsolidationPolicy,
    PrimarySortField,
    SearchAliasIndex,
    SearchAliasViewProperties,
    StoredValue,
    TierConsolidationPolicy,
    ViewDescriptor,
    consolidation_policy_from_dict,
)
from arangopy.view import (
    ArangoSearchView,
    AsyncArangoSearchView,
    AsyncSearchAliasView,
    SearchAliasView,
)

from ..conftest import DB_PATH, TEST_DATABASE_NAME, TEST_JWT

VIEW_API_PATH = f"{DB_PATH}/_api/view"

ARANGOSEARCH_DESCRIPTION = {
    "id": "7431",
    "name": "products_view",
    "type": "arangosearch",
    "globallyUniqueId": "h2B0F1/7431",
}
SEARCH_ALIAS_DESCRIPTION = {
    "id": "7440",
    "name": "alias_view",
    "type": "search-alias",
    "globallyUniqueId": "h2B0F1/7440",
}
ARANGOSEARCH_PROPERTIES_RESPONSE: dict[str, Any] = {
    **ARANGOSEARCH_DESCRIPTION,
    "cleanupIntervalStep": 2,
    "commitIntervalMsec": 1000,
    "consolidationIntervalMsec": 1000,
    "consolidationPolicy": {
        "type": "tier",
        "segmentsMin": 1,
        "segmentsMax": 10,
        "segmentsBytesMax": 5368709120,
        "segmentsBytesFloor": 2097152,
        "minScore": 0,
    },
    "writebufferIdle": 64,
    "writebufferActive": 0,
    "writebufferSizeMax": 33554432,
    "primarySort": [{"field": "price", "asc": False}],
    "primarySortCompression": "lz4",
    "storedValues": [{"fields": ["name", "price"], "compression": "none"}],
    "optimizeTopK": [],
    "links": {
        "products": {
            "analyzers": ["identity"],
            "fields": {
                "description": {"analyzers": ["text_en"]},
                "specs": {
                    "fields": {"color": {}},
                    "includeAllFields": False,
                },
            },
            "includeAllFields": False,
            "storeValues": "none",
            "trackListPositions": False,
        },
    },
}


class TestViewProperties:
    @pytest.mark.describe("test of arangosearch view properties decoding")
    def test_arangosearch_properties_decode(self) -> None:
        props = ArangoSearchViewProperties._from_dict(ARANGOSEARCH_PROPERTIES_RESPONSE)
        assert props.name == "products_view"
        assert props.view_type == ViewType.ARANGOSEARCH
        assert props.commit_interval_msec == 1000
        assert props.consolidation_policy == TierConsolidationPolicy(
            segments_min=1,
            segments_max=10,
            segments_bytes_max=5368709120,
            segments_bytes_floor=2097152,
            min_score=0,
        )
        assert props.primary_sort == [PrimarySortField(field="price", ascending=False)]
        assert props.primary_sort_compression == CompressionType.LZ4
        assert props.stored_values == [
            StoredValue(fields=["name", "price"], compression=CompressionType.NONE)
        ]
        assert isinstance(props.links, dict)
        products_link = props.links["products"]
        assert products_link is not None
        assert products_link.store_values == StoreValuesType.NONE
        assert isinstance(products_link.fields, dict)
        specs_link = products_link.fields["specs"]
        assert isinstance(specs_link.fields, dict)
        assert specs_link.fields["color"] == ArangoSearchLinkProperties()

    @pytest.mark.describe("test of arangosearch view properties encoding")
    def test_arangosearch_properties_encode(self) -> None:
        props = ArangoSearchViewProperties._from_dict(
            {**ARANGOSEARCH_PROPERTIES_RESPONSE, "futureFlag": {"on": True}}
        )
        encoded = props.as_dict()
        for identity_key in ("id", "name", "type", "globallyUniqueId"):
            assert identity_key not in encoded
        expected = {
            k: v
            for k, v in ARANGOSEARCH_PROPERTIES_RESPONSE.items()
            if k not in ARANGOSEARCH_DESCRIPTION
        }
        assert encoded == {**expected, "futureFlag": {"on": True}}

        partial = ArangoSearchViewProperties(
            links={
                "products": None,
                "articles": ArangoSearchLinkProperties(
                    include_all_fields=True, in_background=True
                ),
            },
            consolidation_policy=BytesAccumConsolidationPolicy(threshold=0.1),
        )
        assert partial.as_dict() == {
            "links": {
                "products": None,
                "articles": {"includeAllFields": True, "inBackground": True},
            },
            "consolidationPolicy": {"type": "bytes_accum", "threshold": 0.1},
        }
        assert ArangoSearchViewProperties().as_dict() == {}

    @pytest.mark.describe("test of consolidation policy dispatch")
    def test_consolidation_policy_dispatch(self) -> None:
        assert consolidation_policy_from_dict(
            {"type": "bytes_accum", "threshold": 0.5}
        ) == BytesAccumConsolidationPolicy(threshold=0.5)
        assert consolidation_policy_from_dict(
            {"type": "tier", "segmentsMin": 2}
        ) == TierConsolidationPolicy(segments_min=2)
        with pytest.raises(MalformedPayloadException):
            consolidation_policy_from_dict({"type": "mystery"})
        with pytest.raises(MalformedPayloadException):
            consolidation_policy_from_dict({"threshold": 0.5})

    @pytest.mark.describe("test of primary sort direction spellings")
    def test_primary_sort_direction(self) -> None:
        assert PrimarySortField._from_dict({"field": "a", "direction": "desc"}) == (
            PrimarySortField(field="a", ascending=False)
        )
        assert PrimarySortField._from_dict({"field": "a"}).ascending
        assert PrimarySortField(field="b").as_dict() == {"field": "b", "asc": True}

    @pytest.mark.describe("test of search-alias view properties")
    def test_search_alias_properties(self) -> None:
        props = SearchAliasViewProperties._from_dict(
            {
                **SEARCH_ALIAS_DESCRIPTION,
                "indexes": [{"collection": "products", "index": "inv_idx"}],
            }
        )
        assert props.view_type == ViewType.SEARCH_ALIAS
        assert props.indexes == [SearchAliasIndex(collection="products", index="inv_idx")]
        assert props.as_dict() == {
            "indexes": [{"collection": "products", "index": "inv_idx"}]
        }

        update = SearchAliasViewProperties(
            indexes=[
                SearchAliasIndex(
                    collection="products",
                    index="inv_idx",
                    operation=SearchAliasOperation.DEL,
                ),
            ]
        )
        assert update.as_dict() == {
            "indexes": [
                {"collection": "products", "index": "inv_idx", "operation": "del"}
            ]
        }
        with pytest.raises(MalformedPayloadException):
            SearchAliasViewProperties._from_dict({"indexes": [{"collection": "c"}]})

    @pytest.mark.describe("test of view descriptors")
    def test_view_descriptor(self) -> None:
        desc = ViewDescriptor._from_dict(SEARCH_ALIAS_DESCRIPTION)
        assert desc.view_type == ViewType.SEARCH_ALIAS
        assert desc.as_dict() == SEARCH_ALIAS_DESCRIPTION
        with pytest.raises(MalformedPayloadException):
            ViewDescriptor._from_dict({"name": "untyped"})
        with pytest.raises(MalformedPayloadException):
            ViewDescriptor._from_dict({"name": "odd", "type": "mystery"})
        with pytest.raises(MalformedPayloadException):
            ViewDescriptor._from_dict("products_view")  # type: ignore[arg-type]

    @pytest.mark.describe("test of mistyped entries in view property payloads")
    def test_view_properties_mistyped(self) -> None:
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict({"primarySort": [{"asc": True}]})
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict({"primarySort": "price"})
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict({"primarySort": ["price"]})
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict({"storedValues": [{"fields": "a"}]})
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict({"links": ["products"]})
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict(
                {"links": {"products": {"analyzers": "identity"}}}
            )
        with pytest.raises(MalformedPayloadException):
            ArangoSearchViewProperties._from_dict({"consolidationPolicy": "tier"})
        with pytest.raises(MalformedPayloadException):
            SearchAliasViewProperties._from_dict({"indexes": ["inv_idx"]})
        with pytest.raises(MalformedPayloadException):
            SearchAliasViewProperties._from_dict({"indexes": "inv_idx"})


class TestViewHandles:
    @pytest.mark.describe("test of arangosearch view handle, sync")
    def test_arangosearch_view_sync(self, httpserver: HTTPServer) -> None:
        client = ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
        database = client.get_database(TEST_DATABASE_NAME)

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view", method="GET"
        ).respond_with_json(ARANGOSEARCH_DESCRIPTION)
        view = database.view("products_view")
        assert isinstance(view, ArangoSearchView)
        assert view.name == "products_view"
        assert view.database == database

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view/properties", method="GET"
        ).respond_with_json(ARANGOSEARCH_PROPERTIES_RESPONSE)
        props = view.properties()
        assert isinstance(props, ArangoSearchViewProperties)
        assert props.writebuffer_idle == 64

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view/properties",
            method="PATCH",
            json={"commitIntervalMsec": 500, "links": {"old_products": None}},
        ).respond_with_json(ARANGOSEARCH_DESCRIPTION)
        view.update_properties(
            ArangoSearchViewProperties(
                commit_interval_msec=500,
                links={"old_products": None},
            )
        )

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view/properties",
            method="PUT",
            json={"links": {"products": {"includeAllFields": True}}},
        ).respond_with_json(ARANGOSEARCH_DESCRIPTION)
        view.set_properties({"links": {"products": {"includeAllFields": True}}})

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view/rename",
            method="PUT",
            json={"name": "catalog_view"},
        ).respond_with_json({**ARANGOSEARCH_DESCRIPTION, "name": "catalog_view"})
        renamed = view.rename("catalog_view")
        assert isinstance(renamed, ArangoSearchView)
        assert renamed.name == "catalog_view"
        assert view.name == "products_view"

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/catalog_view", method="DELETE"
        ).respond_with_json({"error": False, "code": 200, "result": True})
        renamed.drop()

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/catalog_view/properties", method="GET"
        ).respond_with_json(
            {"error": True, "code": 202, "errorNum": 1, "errorMessage": "pending"},
            status=202,
        )
        with pytest.raises(ArangoHttpException) as exc_info:
            renamed.properties()
        assert exc_info.value.status_code == 202
        assert exc_info.value.error_num == 1
        assert exc_info.value.error_message == "pending"

    @pytest.mark.describe("test of view creation and listing, sync")
    def test_view_creation_listing_sync(self, httpserver: HTTPServer) -> None:
        client = ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
        database = client.get_database(TEST_DATABASE_NAME)

        httpserver.expect_oneshot_request(
            VIEW_API_PATH,
            method="POST",
            json={
                "name": "products_view",
                "type": "arangosearch",
                "links": {"products": {"analyzers": ["text_en"]}},
            },
        ).respond_with_json(ARANGOSEARCH_DESCRIPTION, status=201)
        as_view = database.create_arangosearch_view(
            "products_view",
            ArangoSearchViewProperties(
                links={"products": ArangoSearchLinkProperties(analyzers=["text_en"])}
            ),
        )
        assert isinstance(as_view, ArangoSearchView)

        httpserver.expect_oneshot_request(
            VIEW_API_PATH,
            method="POST",
            json={
                "name": "alias_view",
                "type": "search-alias",
                "indexes": [{"collection": "products", "index": "inv_idx"}],
            },
        ).respond_with_json(SEARCH_ALIAS_DESCRIPTION, status=201)
        sa_view = database.create_search_alias_view(
            "alias_view",
            {"indexes": [{"collection": "products", "index": "inv_idx"}]},
        )
        assert isinstance(sa_view, SearchAliasView)

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/alias_view/properties", method="GET"
        ).respond_with_json(
            {
                **SEARCH_ALIAS_DESCRIPTION,
                "indexes": [{"collection": "products", "index": "inv_idx"}],
            }
        )
        sa_props = sa_view.properties()
        assert isinstance(sa_props, SearchAliasViewProperties)
        assert sa_props.name == "alias_view"

        httpserver.expect_oneshot_request(VIEW_API_PATH, method="GET").respond_with_json(
            {
                "error": False,
                "code": 200,
                "result": [ARANGOSEARCH_DESCRIPTION, SEARCH_ALIAS_DESCRIPTION],
            }
        )
        views = database.list_views().to_list()
        assert [type(view) for view in views] == [ArangoSearchView, SearchAliasView]
        assert [view.name for view in views] == ["products_view", "alias_view"]

        for _ in range(2):
            httpserver.expect_oneshot_request(
                f"{VIEW_API_PATH}/alias_view", method="GET"
            ).respond_with_json(SEARCH_ALIAS_DESCRIPTION)
        alias_info = database.view("alias_view").info()
        assert alias_info == ViewDescriptor._from_dict(SEARCH_ALIAS_DESCRIPTION)

    @pytest.mark.describe("test of view listing read to exhaustion and restarted")
    def test_view_listing_reads(self, httpserver: HTTPServer) -> None:
        client = ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
        database = client.get_database(TEST_DATABASE_NAME)
        three_views = [
            {**ARANGOSEARCH_DESCRIPTION, "name": f"view_{idx}"} for idx in range(3)
        ]
        for _ in range(2):
            httpserver.expect_oneshot_request(
                VIEW_API_PATH, method="GET"
            ).respond_with_json({"error": False, "code": 200, "result": three_views})

        cursor = database.list_views()
        assert [cursor.read().name for _ in range(3)] == ["view_0", "view_1", "view_2"]
        with pytest.raises(NoMoreItemsException):
            cursor.read()

        fresh_cursor = database.list_views()
        assert fresh_cursor.read().name == "view_0"
        assert len(httpserver.log) == 2

    @pytest.mark.describe("test of view handles, async")
    async def test_view_handles_async(self, httpserver: HTTPServer) -> None:
        client = ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
        adatabase = client.get_async_database(TEST_DATABASE_NAME)

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/alias_view", method="GET"
        ).respond_with_json(SEARCH_ALIAS_DESCRIPTION)
        aview = await adatabase.view("alias_view")
        assert isinstance(aview, AsyncSearchAliasView)

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/alias_view/properties",
            method="PATCH",
            json={
                "indexes": [
                    {"collection": "products", "index": "inv_idx", "operation": "add"}
                ]
            },
        ).respond_with_json(SEARCH_ALIAS_DESCRIPTION)
        await aview.update_properties(
            SearchAliasViewProperties(
                indexes=[
                    SearchAliasIndex(
                        collection="products",
                        index="inv_idx",
                        operation=SearchAliasOperation.ADD,
                    )
                ]
            )
        )

        httpserver.expect_oneshot_request(
            VIEW_API_PATH, method="POST"
        ).respond_with_json(ARANGOSEARCH_DESCRIPTION, status=201)
        as_view = await adatabase.create_arangosearch_view("products_view")
        assert isinstance(as_view, AsyncArangoSearchView)

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view/properties", method="GET"
        ).respond_with_json(ARANGOSEARCH_PROPERTIES_RESPONSE)
        props = await as_view.properties()
        assert props.cleanup_interval_step == 2

        httpserver.expect_oneshot_request(VIEW_API_PATH, method="GET").respond_with_json(
            {"result": [SEARCH_ALIAS_DESCRIPTION]}
        )
        views = [view async for view in adatabase.list_views()]
        assert len(views) == 1
        assert isinstance(views[0], AsyncSearchAliasView)

        httpserver.expect_oneshot_request(
            f"{VIEW_API_PATH}/products_view", method="DELETE"
        ).respond_with_json({"error": False, "code": 200, "result": True})
        await as_view.drop()
