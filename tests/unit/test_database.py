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
Unit tests for the Database and AsyncDatabase classes, against a mock server.
"""

from __future__ import annotations

import pytest
from pytest_httpserver import HTTPServer

from arangopy import ArangoClient
from arangopy.collection import AsyncCollection, Collection
from arangopy.constants import AnalyzerType, CaseType, CollectionType
from arangopy.exceptions import (
    ArangoHttpException,
    ConflictException,
    MalformedPayloadException,
    NotFoundException,
    UnexpectedArangoResponseException,
)
from arangopy.info import (
    AnalyzerDefinition,
    CollectionProperties,
    KeyOptions,
    NormAnalyzerProperties,
)

from ..conftest import DB_PATH, TEST_DATABASE_NAME

NOT_FOUND_BODY = {
    "error": True,
    "code": 404,
    "errorNum": 1203,
    "errorMessage": "data source or view not found",
}
CONFLICT_BODY = {
    "error": True,
    "code": 409,
    "errorNum": 1207,
    "errorMessage": "duplicate name",
}
SERVER_ERROR_BODY = {
    "error": True,
    "code": 500,
    "errorNum": 4,
    "errorMessage": "internal error",
}
NORM_RESPONSE = {
    "name": f"{TEST_DATABASE_NAME}::norm_en",
    "type": "norm",
    "properties": {"locale": "en", "case": "lower", "accent": True},
    "features": ["frequency", "norm"],
}


class TestDatabase:
    @pytest.mark.describe("test of database info")
    def test_database_info(self, client: ArangoClient, httpserver: HTTPServer) -> None:
        database = client.get_database(TEST_DATABASE_NAME)
        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/database/current", method="GET"
        ).respond_with_json(
            {
                "error": False,
                "code": 200,
                "result": {
                    "name": TEST_DATABASE_NAME,
                    "id": "12345",
                    "path": "/var/lib/arangodb3/databases/database-12345",
                    "isSystem": False,
                },
            }
        )
        info = database.info()
        assert info.name == TEST_DATABASE_NAME
        assert info.id == "12345"
        assert info.is_system is False

    @pytest.mark.describe("test of existence checks")
    def test_existence_checks(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        database = client.get_database(TEST_DATABASE_NAME)
        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/view/ghost_view", method="GET"
        ).respond_with_json(NOT_FOUND_BODY, status=404)
        assert database.view_exists("ghost_view") is False

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/collection/products", method="GET"
        ).respond_with_json({"name": "products", "type": 2, "id": "99"})
        assert database.collection_exists("products") is True

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer/flaky", method="GET"
        ).respond_with_json(SERVER_ERROR_BODY, status=500)
        with pytest.raises(ArangoHttpException) as exc_info:
            database.analyzer_exists("flaky")
        assert exc_info.value.status_code == 500
        assert not exc_info.value.is_not_found()

    @pytest.mark.describe("test of duplicate view creation")
    def test_duplicate_view(self, client: ArangoClient, httpserver: HTTPServer) -> None:
        database = client.get_database(TEST_DATABASE_NAME)
        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/view", method="POST"
        ).respond_with_json(CONFLICT_BODY, status=409)
        with pytest.raises(ConflictException) as exc_info:
            database.create_arangosearch_view("products_view")
        assert exc_info.value.is_conflict()
        assert exc_info.value.error_num == 1207

    @pytest.mark.describe("test of collection management")
    def test_collection_management(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        database = client.get_database(TEST_DATABASE_NAME)
        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/collection",
            method="POST",
            json={
                "name": "follows",
                "type": 3,
                "waitForSync": True,
                "keyOptions": {"type": "traditional", "allowUserKeys": True},
            },
        ).respond_with_json({"name": "follows", "type": 3, "id": "100"})
        edges = database.create_collection(
            "follows",
            collection_type=CollectionType.EDGE,
            properties=CollectionProperties(
                wait_for_sync=True,
                key_options=KeyOptions(key_type="traditional", allow_user_keys=True),
            ),
        )
        assert isinstance(edges, Collection)
        assert edges.name == "follows"

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/collection",
            method="GET",
            query_string={"excludeSystem": "false"},
        ).respond_with_json(
            {
                "error": False,
                "code": 200,
                "result": [
                    {"name": "_graphs", "type": 2, "isSystem": True},
                    {"name": "follows", "type": 3, "isSystem": False},
                ],
            }
        )
        descriptors = database.list_collections(exclude_system=False).to_list()
        assert [desc.name for desc in descriptors] == ["_graphs", "follows"]
        assert descriptors[1].collection_type == CollectionType.EDGE

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/collection",
            method="GET",
            query_string={"excludeSystem": "true"},
        ).respond_with_json({"result": [{"name": "follows", "type": 3}]})
        assert database.list_collection_names() == ["follows"]

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/collection/_graphs",
            method="DELETE",
            query_string={"isSystem": "true"},
        ).respond_with_json({"error": False, "code": 200, "id": "7"})
        database.drop_collection("_graphs", is_system=True)

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/collection", method="GET"
        ).respond_with_json({"error": False, "code": 200, "result": {}})
        with pytest.raises(UnexpectedArangoResponseException):
            database.list_collections().to_list()

    @pytest.mark.describe("test of listing cursors being issued anew per call")
    def test_fresh_listing_cursors(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        database = client.get_database(TEST_DATABASE_NAME)
        for _ in range(2):
            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/analyzer", method="GET"
            ).respond_with_json({"result": [NORM_RESPONSE]})

        cursor_a = database.list_analyzers()
        cursor_b = database.list_analyzers()
        assert cursor_a is not cursor_b
        names_a = [defn.name for defn in cursor_a]
        assert not cursor_a.has_next()
        names_b = [defn.name for defn in cursor_b]
        assert names_a == names_b == [f"{TEST_DATABASE_NAME}::norm_en"]

    @pytest.mark.describe("test of analyzer management")
    def test_analyzer_management(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        database = client.get_database(TEST_DATABASE_NAME)
        definition = AnalyzerDefinition(
            name="norm_en",
            properties=NormAnalyzerProperties(locale="en", case=CaseType.LOWER),
            features=["frequency", "norm"],
        )
        expected_payload = {
            "name": "norm_en",
            "type": "norm",
            "properties": {"locale": "en", "case": "lower"},
            "features": ["frequency", "norm"],
        }

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer", method="POST", json=expected_payload
        ).respond_with_json(NORM_RESPONSE, status=201)
        created, existed = database.create_analyzer(definition)
        assert existed is False
        assert created.analyzer_type == AnalyzerType.NORM
        assert created.name == f"{TEST_DATABASE_NAME}::norm_en"

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer", method="POST", json=expected_payload
        ).respond_with_json(NORM_RESPONSE, status=200)
        _, existed_again = database.create_analyzer(expected_payload)
        assert existed_again is True

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer/norm_en", method="GET"
        ).respond_with_json(NORM_RESPONSE)
        fetched = database.analyzer("norm_en")
        assert isinstance(fetched.properties, NormAnalyzerProperties)
        assert fetched.properties.accent is True

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer/norm_en",
            method="DELETE",
            query_string={"force": "true"},
        ).respond_with_json({"error": False, "code": 200, "name": "norm_en"})
        database.drop_analyzer("norm_en", force=True)

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer/norm_en", method="DELETE"
        ).respond_with_json(NOT_FOUND_BODY, status=404)
        with pytest.raises(NotFoundException):
            database.drop_analyzer("norm_en")

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/analyzer", method="GET"
        ).respond_with_json({"result": [NORM_RESPONSE, "identity"]})
        with pytest.raises(MalformedPayloadException):
            database.list_analyzers().to_list()

    @pytest.mark.describe("test of database methods, async")
    async def test_database_async(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        async with client.get_async_database(TEST_DATABASE_NAME) as adatabase:
            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/collection/products", method="GET"
            ).respond_with_json(NOT_FOUND_BODY, status=404)
            assert await adatabase.collection_exists("products") is False

            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/collection",
                method="POST",
                json={"name": "products"},
            ).respond_with_json({"name": "products", "type": 2}, status=201)
            acollection = await adatabase.create_collection("products")
            assert isinstance(acollection, AsyncCollection)

            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/collection", method="GET"
            ).respond_with_json({"result": [{"name": "products", "type": 2}]})
            assert await adatabase.list_collection_names() == ["products"]

            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/analyzer", method="POST"
            ).respond_with_json(NORM_RESPONSE, status=200)
            _, existed = await adatabase.create_analyzer(
                {"name": "norm_en", "type": "norm", "properties": {"locale": "en"}}
            )
            assert existed is True

            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/view/products_view", method="DELETE"
            ).respond_with_json({"error": False, "code": 200, "result": True})
            await adatabase.drop_view("products_view")

            httpserver.expect_oneshot_request(
                f"{DB_PATH}/_api/collection/products", method="DELETE"
            ).respond_with_json({"error": False, "code": 200})
            await adatabase.drop_collection("products")
