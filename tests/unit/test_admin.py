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
Unit tests for ServerAdmin and AsyncServerAdmin, against a mock server.
"""

from __future__ import annotations

import pytest
from pytest_httpserver import HTTPServer

from arangopy import ArangoClient
from arangopy.constants import LogLevel, ServerMode
from arangopy.database import AsyncDatabase, Database
from arangopy.exceptions import (
    ConflictException,
    UnexpectedArangoResponseException,
)
from arangopy.info import CreateDatabaseOptions, DatabaseUser

from ..conftest import SYSTEM_PATH

DATABASE_LIST_RESPONSE = {
    "error": False,
    "code": 200,
    "result": ["_system", "products_db"],
}
LOG_LEVELS_RESPONSE = {
    "agency": "INFO",
    "queries": "INFO",
    "requests": "WARNING",
}


class TestServerAdmin:
    @pytest.mark.describe("test of database listing")
    def test_database_listing(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        admin = client.get_admin()
        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/database", method="GET"
        ).respond_with_json(DATABASE_LIST_RESPONSE)
        assert admin.list_databases() == ["_system", "products_db"]

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/database/user", method="GET"
        ).respond_with_json({"error": False, "code": 200, "result": ["products_db"]})
        assert admin.list_accessible_databases() == ["products_db"]

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/database", method="GET"
        ).respond_with_json({"error": False, "code": 200, "result": "_system"})
        with pytest.raises(UnexpectedArangoResponseException):
            admin.list_databases()

    @pytest.mark.describe("test of database creation, existence and deletion")
    def test_database_lifecycle(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        admin = client.get_admin()
        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/database",
            method="POST",
            json={
                "name": "catalog_db",
                "options": {"replicationFactor": 2, "writeConcern": 1},
                "users": [
                    {"username": "app_user", "passwd": "s3cr3t"},
                    {"username": "reader", "active": False},
                ],
            },
        ).respond_with_json({"error": False, "code": 201, "result": True}, status=201)
        new_database = admin.create_database(
            "catalog_db",
            options=CreateDatabaseOptions(replication_factor=2, write_concern=1),
            users=[
                DatabaseUser("app_user", password="s3cr3t"),
                {"username": "reader", "active": False},
            ],
        )
        assert isinstance(new_database, Database)
        assert new_database.name == "catalog_db"

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/database",
            method="POST",
            json={"name": "catalog_db"},
        ).respond_with_json(
            {
                "error": True,
                "code": 409,
                "errorNum": 1207,
                "errorMessage": "duplicate database name 'catalog_db'",
            },
            status=409,
        )
        with pytest.raises(ConflictException):
            admin.create_database("catalog_db")

        httpserver.expect_oneshot_request(
            "/_db/catalog_db/_api/database/current", method="GET"
        ).respond_with_json({"result": {"name": "catalog_db", "isSystem": False}})
        assert admin.database_exists("catalog_db") is True

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/database/catalog_db", method="DELETE"
        ).respond_with_json({"error": False, "code": 200, "result": True})
        admin.drop_database("catalog_db")

        httpserver.expect_oneshot_request(
            "/_db/catalog_db/_api/database/current", method="GET"
        ).respond_with_json(
            {
                "error": True,
                "code": 404,
                "errorNum": 1228,
                "errorMessage": "database not found",
            },
            status=404,
        )
        assert admin.database_exists("catalog_db") is False

    @pytest.mark.describe("test of server version and license")
    def test_version_license(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        admin = client.get_admin()
        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_api/version",
            method="GET",
            query_string={"details": "true"},
        ).respond_with_json(
            {
                "server": "arango",
                "version": "3.12.1",
                "license": "community",
                "details": {"mode": "server"},
            }
        )
        version = admin.version(details=True)
        assert version.version == "3.12.1"
        assert version.license == "community"
        assert version.details == {"mode": "server"}

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/license", method="GET"
        ).respond_with_json(
            {
                "error": False,
                "code": 200,
                "features": {"expires": 1712345678},
                "status": "good",
                "version": 1,
            }
        )
        license_info = admin.get_license()
        assert license_info.status == "good"
        assert license_info.features == {"expires": 1712345678}

    @pytest.mark.describe("test of log levels")
    def test_log_levels(self, client: ArangoClient, httpserver: HTTPServer) -> None:
        admin = client.get_admin()
        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/log/level", method="GET"
        ).respond_with_json({**LOG_LEVELS_RESPONSE, "error": False, "code": 200})
        assert admin.get_log_levels() == LOG_LEVELS_RESPONSE

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/log/level",
            method="PUT",
            json={"requests": "DEBUG", "queries": "ERROR"},
            query_string={"serverId": "PRMR-1234"},
        ).respond_with_json(
            {**LOG_LEVELS_RESPONSE, "requests": "DEBUG", "queries": "ERROR"}
        )
        new_levels = admin.set_log_levels(
            {"requests": LogLevel.DEBUG, "queries": "error"},
            server_id="PRMR-1234",
        )
        assert new_levels["requests"] == "DEBUG"
        assert new_levels["queries"] == "ERROR"

        with pytest.raises(ValueError):
            admin.set_log_levels({"requests": "LOUD"})

    @pytest.mark.describe("test of cluster health")
    def test_cluster_health(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        admin = client.get_admin()
        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/cluster/health", method="GET"
        ).respond_with_json(
            {
                "error": False,
                "code": 200,
                "ClusterId": "b1c2-d3e4",
                "Health": {
                    "PRMR-1234": {
                        "Endpoint": "tcp://[::1]:8629",
                        "Role": "DBServer",
                        "Status": "GOOD",
                        "ShortName": "DBServer0001",
                        "Version": "3.12.1",
                        "Engine": "rocksdb",
                        "CanBeDeleted": False,
                    },
                },
            }
        )
        health = admin.health()
        assert health.cluster_id == "b1c2-d3e4"
        server_health = health.health["PRMR-1234"]
        assert server_health.role == "DBServer"
        assert server_health.status == "GOOD"
        assert server_health.can_be_deleted is False

    @pytest.mark.describe("test of server mode")
    def test_server_mode(self, client: ArangoClient, httpserver: HTTPServer) -> None:
        admin = client.get_admin()
        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/server/mode", method="GET"
        ).respond_with_json({"mode": "default"})
        assert admin.server_mode() == ServerMode.DEFAULT

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/server/mode",
            method="PUT",
            json={"mode": "readonly"},
        ).respond_with_json({"mode": "readonly"})
        assert admin.set_server_mode("readonly") == ServerMode.READONLY

        httpserver.expect_oneshot_request(
            f"{SYSTEM_PATH}/_admin/server/mode", method="GET"
        ).respond_with_json({"mode": "maintenance"})
        with pytest.raises(UnexpectedArangoResponseException):
            admin.server_mode()

    @pytest.mark.describe("test of server admin, async")
    async def test_server_admin_async(
        self, client: ArangoClient, httpserver: HTTPServer
    ) -> None:
        async with client.get_async_admin() as aadmin:
            httpserver.expect_oneshot_request(
                f"{SYSTEM_PATH}/_api/database", method="GET"
            ).respond_with_json(DATABASE_LIST_RESPONSE)
            assert await aadmin.list_databases() == ["_system", "products_db"]

            httpserver.expect_oneshot_request(
                f"{SYSTEM_PATH}/_api/database",
                method="POST",
                json={"name": "catalog_db"},
            ).respond_with_json({"result": True}, status=201)
            adatabase = await aadmin.create_database("catalog_db")
            assert isinstance(adatabase, AsyncDatabase)

            httpserver.expect_oneshot_request(
                f"{SYSTEM_PATH}/_api/version", method="GET"
            ).respond_with_json({"server": "arango", "version": "3.12.1"})
            aversion = await aadmin.version()
            assert aversion.version == "3.12.1"

            httpserver.expect_oneshot_request(
                f"{SYSTEM_PATH}/_admin/server/mode", method="GET"
            ).respond_with_json({"mode": "readonly"})
            assert await aadmin.server_mode() == ServerMode.READONLY

            httpserver.expect_oneshot_request(
                f"{SYSTEM_PATH}/_api/database/catalog_db", method="DELETE"
            ).respond_with_json({"result": True})
            await aadmin.drop_database("catalog_db")
