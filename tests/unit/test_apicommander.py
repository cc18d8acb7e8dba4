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

import pytest
from pytest_httpserver import HTTPServer

from arangopy.exceptions import (
    ArangoHttpException,
    ConflictException,
    NotFoundException,
    UnexpectedArangoResponseException,
)
from arangopy.settings.defaults import FIXED_SECRET_PLACEHOLDER
from arangopy.utils.api_commander import APICommander
from arangopy.utils.request_tools import HttpMethod, compose_user_agent


def hv_matcher(hk: str, hv: str | None, ev: str) -> bool:
    if hk.lower() == "user-agent":
        return hv is not None and hv.startswith(ev)
    return hv == ev


class TestAPICommander:
    @pytest.mark.describe("test of APICommander equality and headers")
    def test_apicommander_equality(self) -> None:
        cmd1 = APICommander(
            api_endpoint="http://db.example:8529/",
            path="/_db/products_db/",
            headers={"Authorization": "bearer x", "X-Drop": None},
            callers=[("c", "v")],
            redacted_header_names=["X-Secret"],
        )
        cmd2 = APICommander(
            api_endpoint="http://db.example:8529",
            path="_db/products_db",
            headers={"Authorization": "bearer x", "X-Drop": None},
            callers=[("c", "v")],
            redacted_header_names=["X-Secret"],
        )
        assert cmd1 == cmd2
        assert cmd1 != APICommander(
            api_endpoint="http://db.example:8529", path="_db/other_db"
        )
        assert cmd1.full_path == "http://db.example:8529/_db/products_db"
        assert (
            cmd1._compose_request_url("/_api/view")
            == "http://db.example:8529/_db/products_db/_api/view"
        )

        assert "X-Drop" not in cmd1.full_headers
        assert cmd1.full_headers["Content-Type"] == "application/json"
        assert cmd1.full_headers["User-Agent"].startswith("c/v arangopy/")
        assert cmd1._loggable_headers["Authorization"] == FIXED_SECRET_PLACEHOLDER

    @pytest.mark.describe("test of user-agent composition")
    def test_user_agent_composition(self) -> None:
        assert compose_user_agent([]) is None
        assert compose_user_agent([(None, "1.0")]) is None
        assert compose_user_agent([("app", None), ("lib", "2.1")]) == "app lib/2.1"

    @pytest.mark.describe("test of APICommander request, sync")
    def test_apicommander_request_sync(self, httpserver: HTTPServer) -> None:
        base_path = "/_db/products_db"
        cmd = APICommander(
            api_endpoint=httpserver.url_for("/"),
            path=base_path,
            headers={"Authorization": "bearer tkn"},
            callers=[("cn0", "cv0"), ("cn1", "cv1")],
        )

        httpserver.expect_oneshot_request(
            f"{base_path}/_api/view/v1/properties",
            method=HttpMethod.PATCH,
            headers={
                "Authorization": "bearer tkn",
                "User-Agent": "cn0/cv0 cn1/cv1",
            },
            header_value_matcher=hv_matcher,
            json={"commitIntervalMsec": 500},
        ).respond_with_json({"name": "v1"})
        assert cmd.request(
            http_method=HttpMethod.PATCH,
            payload={"commitIntervalMsec": 500},
            additional_path="_api/view/v1/properties",
        ) == {"name": "v1"}

        httpserver.expect_oneshot_request(
            f"{base_path}/_api/collection",
            method=HttpMethod.GET,
            query_string={"excludeSystem": "true"},
        ).respond_with_json({"result": []})
        assert cmd.request(
            additional_path="_api/collection",
            request_params={"excludeSystem": True},
        ) == {"result": []}

        httpserver.expect_oneshot_request(
            f"{base_path}/_api/analyzer",
            method=HttpMethod.POST,
        ).respond_with_json({"name": "a"}, status=201)
        raw_response = cmd.raw_request(
            http_method=HttpMethod.POST,
            payload={"name": "a"},
            additional_path="_api/analyzer",
            success_codes=(200, 201),
        )
        assert raw_response.status_code == 201

    @pytest.mark.describe("test of APICommander request, async")
    async def test_apicommander_request_async(self, httpserver: HTTPServer) -> None:
        base_path = "/_db/products_db"
        cmd = APICommander(
            api_endpoint=httpserver.url_for("/"),
            path=base_path,
            headers={"Authorization": "bearer tkn"},
            callers=[("cn0", "cv0")],
        )

        httpserver.expect_oneshot_request(
            f"{base_path}/_api/view",
            method=HttpMethod.POST,
            headers={
                "Authorization": "bearer tkn",
                "User-Agent": "cn0/cv0",
            },
            header_value_matcher=hv_matcher,
            json={"name": "v2", "type": "search-alias"},
        ).respond_with_json({"name": "v2"}, status=201)
        resp = await cmd.async_request(
            http_method=HttpMethod.POST,
            payload={"name": "v2", "type": "search-alias"},
            additional_path="_api/view",
            success_codes=(201,),
        )
        assert resp == {"name": "v2"}

        httpserver.expect_oneshot_request(
            f"{base_path}/_api/view/v2",
            method=HttpMethod.DELETE,
        ).respond_with_json({"error": True, "errorNum": 1203}, status=404)
        with pytest.raises(NotFoundException):
            await cmd.async_request(
                http_method=HttpMethod.DELETE,
                additional_path="_api/view/v2",
            )
        await cmd.async_client.aclose()

    @pytest.mark.describe("test of APICommander status and body handling, sync")
    def test_apicommander_exceptions_sync(self, httpserver: HTTPServer) -> None:
        base_path = "/base"
        cmd = APICommander(api_endpoint=httpserver.url_for("/"), path=base_path)

        httpserver.expect_oneshot_request(base_path).respond_with_data("{unparseable")
        with pytest.raises(UnexpectedArangoResponseException):
            cmd.request()

        httpserver.expect_oneshot_request(base_path).respond_with_json([1, 2])
        with pytest.raises(UnexpectedArangoResponseException):
            cmd.request()

        httpserver.expect_oneshot_request(base_path).respond_with_json(
            {"error": True, "code": 202, "errorNum": 1, "errorMessage": "queued"},
            status=202,
        )
        with pytest.raises(ArangoHttpException) as s_exc_info:
            cmd.request(success_codes=(200,))
        assert s_exc_info.value.status_code == 202
        assert s_exc_info.value.error_num == 1
        assert s_exc_info.value.error_message == "queued"
        assert not s_exc_info.value.is_not_found()
        assert "202" in str(s_exc_info.value)

        httpserver.expect_oneshot_request(base_path).respond_with_data(
            "Accepted", status=202
        )
        with pytest.raises(UnexpectedArangoResponseException) as exc_info:
            cmd.request(success_codes=(200,))
        assert "202" in exc_info.value.text

        httpserver.expect_oneshot_request(base_path).respond_with_data("", status=204)
        assert cmd.request(success_codes=(204,)) == {}

        httpserver.expect_oneshot_request(base_path).respond_with_json(
            {"error": True, "code": 409, "errorNum": 1207, "errorMessage": "dup"},
            status=409,
        )
        with pytest.raises(ConflictException) as c_exc_info:
            cmd.request(http_method=HttpMethod.POST, payload={"name": "x"})
        assert c_exc_info.value.error_message == "dup"

        httpserver.expect_oneshot_request(base_path).respond_with_data(
            "Internal trouble", status=503
        )
        with pytest.raises(ArangoHttpException) as h_exc_info:
            cmd.request()
        assert h_exc_info.value.status_code == 503
        assert h_exc_info.value.error_num is None
