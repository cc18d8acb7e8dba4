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

import json

import httpx
import pytest
from pytest_httpserver import HTTPServer

from arangopy import ArangoClient
from arangopy.exceptions import (
    ArangoErrorDescriptor,
    ArangoException,
    ArangoHttpException,
    ArangoTimeoutException,
    ConflictException,
    NotFoundException,
    _select_singlereq_timeout_gm,
    _select_singlereq_timeout_va,
    _TimeoutContext,
    is_conflict,
    is_not_found,
    to_arango_timeout_exception,
)
from arangopy.utils.api_options import defaultAPIOptions

from ..conftest import DB_PATH, TEST_DATABASE_NAME, TEST_JWT

VIEW_NOT_FOUND_BODY = {
    "error": True,
    "code": 404,
    "errorNum": 1203,
    "errorMessage": "collection or view not found",
}
DUPLICATE_NAME_BODY = {
    "error": True,
    "code": 409,
    "errorNum": 1207,
    "errorMessage": "duplicate name",
}


def _status_error(status_code: int, text: str) -> httpx.HTTPStatusError:
    return httpx.HTTPStatusError(
        message="httpx_message",
        request="req",  # type: ignore[arg-type]
        response=httpx.Response(status_code=status_code, text=text),
    )


class TestExceptions:
    @pytest.mark.describe("test of error descriptor summaries")
    def test_error_descriptor(self) -> None:
        desc_full = ArangoErrorDescriptor(
            {**VIEW_NOT_FOUND_BODY, "hint": "check the name"}
        )
        assert desc_full.code == 404
        assert desc_full.error_num == 1203
        assert desc_full.error_message == "collection or view not found"
        assert desc_full.attributes == {"hint": "check the name"}
        assert desc_full.summary() == "collection or view not found (errorNum 1203)"

        assert ArangoErrorDescriptor({"errorNum": 1228}).summary() == "errorNum 1228"
        assert ArangoErrorDescriptor("plain text").summary() == "plain text"
        assert ArangoErrorDescriptor({}).summary() == ""

    @pytest.mark.describe("test of http exceptions from assorted httpx errors")
    def test_http_exception_from_httpx(self) -> None:
        """Parsing never fails, whatever the shape of the httpx error."""
        se0 = httpx.HTTPStatusError(
            message="httpx_message",
            request="req",  # type: ignore[arg-type]
            response=None,  # type: ignore[arg-type]
        )
        se1 = _status_error(500, "blah")
        se2 = _status_error(500, '["a", "list"]')
        se3 = _status_error(500, '{"unrelated": 1}')
        se4 = _status_error(500, json.dumps({"errorMessage": "boom", "errorNum": 4}))

        de0 = ArangoHttpException.from_httpx_error(se0)
        de1 = ArangoHttpException.from_httpx_error(se1)
        de2 = ArangoHttpException.from_httpx_error(se2)
        de3 = ArangoHttpException.from_httpx_error(se3)
        de4 = ArangoHttpException.from_httpx_error(se4)

        for exc in (de0, de1, de2, de3, de4):
            repr(exc)
            str(exc)
            assert isinstance(exc, ArangoException)
            assert isinstance(exc, httpx.HTTPStatusError)
            assert not exc.is_not_found()
            assert not exc.is_conflict()

        assert de0.status_code is None
        assert de1.status_code == 500
        assert de1.error_num is None
        assert str(de4) == "boom (errorNum 4). httpx_message"
        assert de4.error_message == "boom"
        assert de4.error_num == 4

    @pytest.mark.describe("test of http exception subclass selection")
    def test_http_exception_subclasses(self) -> None:
        nf_exc = ArangoHttpException.from_httpx_error(
            _status_error(404, json.dumps(VIEW_NOT_FOUND_BODY))
        )
        assert isinstance(nf_exc, NotFoundException)
        assert nf_exc.is_not_found()
        assert not nf_exc.is_conflict()
        assert is_not_found(nf_exc)
        assert nf_exc.error_num == 1203

        cf_exc = ArangoHttpException.from_httpx_error(
            _status_error(409, json.dumps(DUPLICATE_NAME_BODY))
        )
        assert isinstance(cf_exc, ConflictException)
        assert cf_exc.is_conflict()
        assert is_conflict(cf_exc)
        assert not is_not_found(cf_exc)

        # the error number alone qualifies the condition
        db_missing = ArangoHttpException.from_httpx_error(
            _status_error(400, json.dumps({"errorNum": 1228}))
        )
        assert type(db_missing) is ArangoHttpException
        assert db_missing.is_not_found()

        assert not is_not_found(ValueError("nope"))
        assert not is_conflict(KeyError("nope"))

    @pytest.mark.describe("test of http exceptions raised from a mock server, sync")
    def test_http_exception_raising_sync(self, httpserver: HTTPServer) -> None:
        client = ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
        database = client.get_database(TEST_DATABASE_NAME)
        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/view/missing_view",
            method="GET",
        ).respond_with_json(VIEW_NOT_FOUND_BODY, status=404)
        with pytest.raises(NotFoundException) as exc_info:
            database.view("missing_view")
        assert exc_info.value.status_code == 404
        assert exc_info.value.error_num == 1203
        assert "collection or view not found" in str(exc_info.value)
        assert exc_info.value.response.status_code == 404

        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/view",
            method="POST",
        ).respond_with_json({"error": True, "code": 500}, status=500)
        try:
            database.create_arangosearch_view("any_view")
        except httpx.HTTPStatusError as exc:
            assert isinstance(exc, ArangoHttpException)
            assert exc.status_code == 500
        else:
            raise AssertionError("No exception raised")

    @pytest.mark.describe("test of http exceptions raised from a mock server, async")
    async def test_http_exception_raising_async(self, httpserver: HTTPServer) -> None:
        client = ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
        adatabase = client.get_async_database(TEST_DATABASE_NAME)
        httpserver.expect_oneshot_request(
            f"{DB_PATH}/_api/view",
            method="POST",
        ).respond_with_json(DUPLICATE_NAME_BODY, status=409)
        with pytest.raises(ConflictException) as exc_info:
            await adatabase.create_search_alias_view("dup_view")
        assert exc_info.value.is_conflict()
        assert exc_info.value.error_num == 1207


class TestTimeouts:
    @pytest.mark.describe("test of timeout selection for single requests")
    def test_timeout_selection(self) -> None:
        timeout_options = defaultAPIOptions().timeout_options
        assert _select_singlereq_timeout_gm(
            timeout_options=timeout_options,
            general_method_timeout_ms=None,
        ) == (timeout_options.request_timeout_ms, "request_timeout_ms")
        assert _select_singlereq_timeout_va(
            timeout_options=timeout_options,
            view_admin_timeout_ms=None,
            timeout_ms=5,
        ) == (5, "timeout_ms")
        assert _select_singlereq_timeout_va(
            timeout_options=timeout_options,
            view_admin_timeout_ms=50,
            request_timeout_ms=20,
        ) == (20, "request_timeout_ms")
        assert _select_singlereq_timeout_va(
            timeout_options=timeout_options,
            view_admin_timeout_ms=0,
        ) == (0, "view_admin_timeout_ms")

    @pytest.mark.describe("test of conversion of httpx timeouts")
    def test_timeout_conversion(self) -> None:
        read_exc = to_arango_timeout_exception(
            httpx.ReadTimeout("read timed out"),
            timeout_context=_TimeoutContext(
                request_ms=1500, label="view_admin_timeout_ms"
            ),
        )
        assert isinstance(read_exc, ArangoTimeoutException)
        assert read_exc.timeout_type == "read"
        assert read_exc.endpoint is None
        assert "view_admin_timeout_ms = 1500 ms" in read_exc.text

        connect_exc = to_arango_timeout_exception(
            httpx.ConnectTimeout(""),
            timeout_context=_TimeoutContext(request_ms=None),
        )
        assert connect_exc.timeout_type == "connect"
        assert connect_exc.text == "timed out"

        request = httpx.Request("POST", "http://db.example/_api/view", content=b"{}")
        write_exc = to_arango_timeout_exception(
            httpx.WriteTimeout("slow", request=request),
            timeout_context=_TimeoutContext(request_ms=10),
        )
        assert write_exc.timeout_type == "write"
        assert write_exc.endpoint == "http://db.example/_api/view"
        assert write_exc.raw_payload == "{}"
        assert "(timeout honoured: 10 ms)" in write_exc.text
