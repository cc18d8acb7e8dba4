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
Unit tests for the Collection and AsyncCollection classes, against a mock server.
"""

from __future__ import annotations

from typing import Any

import pytest
from pytest_httpserver import HTTPServer

from arangopy import ArangoClient
from arangopy.collection import AsyncCollection
from arangopy.constants import CollectionStatus, CollectionType
from arangopy.exceptions import UnexpectedArangoResponseException
from arangopy.info import CollectionProperties, KeyOptions

from ..conftest import DB_PATH, TEST_DATABASE_NAME

COLLECTION_PATH = f"{DB_PATH}/_api/collection/products"

PROPERTIES_RESPONSE: dict[str, Any] = {
    "error": False,
    "code": 200,
    "id": "8901",
    "name": "products",
    "type": 2,
    "status": 3,
    "statusString": "loaded",
    "isSystem": False,
    "globallyUniqueId": "h2B0F1/8901",
    "waitForSync": False,
    "cacheEnabled": False,
    "schema": None,
    "keyOptions": {"type": "traditional", "allowUserKeys": True, "lastValue": 0},
    "computedValues": None,
    "syncByRevision": True,
    "usesRevisionsAsDocumentIds": True,
}


class TestCollection:
    @pytest.mark.describe("test of collection info and properties")
    def test_collection_info_properties(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        collection = client.get_database(TEST_DATABASE_NAME).get_collection("products")

        httpserver.expect_oneshot_request(COLLECTION_PATH, method="GET").respond_with_json(
            {
                "error": False,
                "code": 200,
                "id": "8901",
                "name": "products",
                "type": 2,
                "status": 3,
                "isSystem": False,
                "globallyUniqueId": "h2B0F1/8901",
            }
        )
        info = collection.info()
        assert info.name == "products"
        assert info.collection_type == CollectionType.DOCUMENT
        assert info.status == CollectionStatus.LOADED

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/properties", method="GET"
        ).respond_with_json(PROPERTIES_RESPONSE)
        props = collection.properties()
        assert props.name == "products"
        assert props.wait_for_sync is False
        assert props.key_options == KeyOptions(
            key_type="traditional", allow_user_keys=True
        )
        assert props.extra == {
            "syncByRevision": True,
            "usesRevisionsAsDocumentIds": True,
        }
        assert props.as_dict() == {
            "waitForSync": False,
            "cacheEnabled": False,
            "keyOptions": {"type": "traditional", "allowUserKeys": True},
            "syncByRevision": True,
            "usesRevisionsAsDocumentIds": True,
        }

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/properties",
            method="PUT",
            json={"waitForSync": True},
        ).respond_with_json({**PROPERTIES_RESPONSE, "waitForSync": True})
        new_props = collection.set_properties(CollectionProperties(wait_for_sync=True))
        assert new_props.wait_for_sync is True

    @pytest.mark.describe("test of collection count, truncate and drop")
    def test_collection_count_truncate_drop(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        collection = client.get_database(TEST_DATABASE_NAME)["products"]

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/count", method="GET"
        ).respond_with_json({**PROPERTIES_RESPONSE, "count": 1250})
        assert collection.count() == 1250

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/count", method="GET"
        ).respond_with_json({"error": False, "code": 200, "count": "many"})
        with pytest.raises(UnexpectedArangoResponseException):
            collection.count()

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/truncate", method="PUT"
        ).respond_with_json(PROPERTIES_RESPONSE)
        collection.truncate()

        httpserver.expect_oneshot_request(
            COLLECTION_PATH, method="DELETE"
        ).respond_with_json({"error": False, "code": 200, "id": "8901"})
        collection.drop()

    @pytest.mark.describe("test of collection methods, async")
    async def test_collection_async(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        async with client.get_async_database(TEST_DATABASE_NAME) as adatabase:
            acollection = adatabase.get_collection("products")
            await self._exercise_async_collection(acollection, httpserver)

    async def _exercise_async_collection(
        self, acollection: AsyncCollection, httpserver: HTTPServer
    ) -> None:

        httpserver.expect_oneshot_request(COLLECTION_PATH, method="GET").respond_with_json(
            {"name": "products", "type": 3}
        )
        ainfo = await acollection.info()
        assert ainfo.collection_type == CollectionType.EDGE

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/properties", method="GET"
        ).respond_with_json(PROPERTIES_RESPONSE)
        aprops = await acollection.properties()
        assert aprops.cache_enabled is False

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/properties",
            method="PUT",
            json={"cacheEnabled": True},
        ).respond_with_json({**PROPERTIES_RESPONSE, "cacheEnabled": True})
        await acollection.set_properties({"cacheEnabled": True})

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/count", method="GET"
        ).respond_with_json({"count": 0})
        assert await acollection.count() == 0

        httpserver.expect_oneshot_request(
            f"{COLLECTION_PATH}/truncate", method="PUT"
        ).respond_with_json(PROPERTIES_RESPONSE)
        await acollection.truncate()

        httpserver.expect_oneshot_request(
            COLLECTION_PATH, method="DELETE"
        ).respond_with_json({"error": False, "code": 200})
        await acollection.drop()
