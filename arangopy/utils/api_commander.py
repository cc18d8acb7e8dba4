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
import logging
from types import TracebackType
from typing import Any, Iterable, Sequence

import httpx

from arangopy.constants import CallerType
from arangopy.exceptions import (
    ArangoHttpException,
    UnexpectedArangoResponseException,
    _TimeoutContext,
    to_arango_timeout_exception,
)
from arangopy.settings.defaults import (
    DEFAULT_REDACTED_HEADER_NAMES,
    FIXED_SECRET_PLACEHOLDER,
    HTTP_NO_CONTENT,
)
from arangopy.utils.request_tools import (
    HttpMethod,
    compose_user_agent,
    log_httpx_request,
    log_httpx_response,
    package_caller,
    to_httpx_timeout,
)

logger = logging.getLogger(__name__)


class APICommander:
    """
    The object actually issuing HTTP requests against the server. It holds
    the base URL (endpoint plus a path such as "_db/mydb"), the headers
    (authentication, User-Agent and any additional header) and the httpx
    clients, and is shared by all handles spawned with the same settings.

    Each request states the HTTP status codes it accepts as success:
    non-success statuses are mapped to `ArangoHttpException` (or its
    not-found/conflict subclasses), timeouts to `ArangoTimeoutException`.
    Any other transport error from httpx propagates as it is.
    """

    client = httpx.Client()

    def __init__(
        self,
        *,
        api_endpoint: str,
        path: str,
        headers: dict[str, str | None] = {},
        callers: Sequence[CallerType] = [],
        redacted_header_names: Iterable[str] | None = None,
    ) -> None:
        self.async_client = httpx.AsyncClient()
        self.api_endpoint = api_endpoint.rstrip("/")
        self.path = path.strip("/")
        self.headers = headers
        self.callers = callers
        self.redacted_header_names = set(redacted_header_names or [])
        self.upper_full_redacted_header_names = {
            header_name.upper()
            for header_name in (
                self.redacted_header_names | DEFAULT_REDACTED_HEADER_NAMES
            )
        }

        full_user_agent_string = compose_user_agent(
            list(self.callers) + [package_caller()]
        )
        self.caller_header: dict[str, str] = (
            {"User-Agent": full_user_agent_string} if full_user_agent_string else {}
        )
        self.full_headers: dict[str, str] = {
            k: v
            for k, v in {
                **{
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                **self.caller_header,
                **self.headers,
            }.items()
            if v is not None
        }
        self._loggable_headers = {
            k: v
            if k.upper() not in self.upper_full_redacted_header_names
            else FIXED_SECRET_PLACEHOLDER
            for k, v in self.full_headers.items()
        }
        self.full_path = "/".join(
            pc for pc in (self.api_endpoint, self.path) if pc
        ).rstrip("/")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(api_endpoint={self.api_endpoint}, "
            f"path={self.path}, callers={self.callers})"
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, APICommander):
            return all(
                [
                    self.api_endpoint == other.api_endpoint,
                    self.path == other.path,
                    self.headers == other.headers,
                    self.callers == other.callers,
                    self.redacted_header_names == other.redacted_header_names,
                ]
            )
        else:
            return False

    async def __aenter__(self) -> APICommander:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        await self.async_client.aclose()

    def _compose_request_url(self, additional_path: str | None) -> str:
        if additional_path:
            return "/".join([self.full_path, additional_path.lstrip("/")])
        else:
            return self.full_path

    @staticmethod
    def _encode_payload(payload: Any | None) -> str | None:
        if payload is not None:
            return json.dumps(
                payload,
                allow_nan=False,
                separators=(",", ":"),
                ensure_ascii=False,
            )
        else:
            return None

    @staticmethod
    def _describe_call(http_method: str, additional_path: str | None) -> str:
        return f"{http_method} {additional_path or '/'}"

    def _check_status(
        self,
        raw_response: httpx.Response,
        success_codes: Iterable[int] | None,
        request_desc: str,
    ) -> None:
        try:
            raw_response.raise_for_status()
        except httpx.HTTPStatusError as http_exc:
            logger.debug(
                f"APICommander about to raise from status {raw_response.status_code}"
            )
            raise ArangoHttpException.from_httpx_error(http_exc)
        if success_codes is not None:
            _success_codes = set(success_codes)
            if raw_response.status_code not in _success_codes:
                status_message = (
                    f"Unexpected status code {raw_response.status_code} for "
                    f"'{request_desc}' (expected one of {sorted(_success_codes)})."
                )
                try:
                    error_body = json.loads(raw_response.text)
                except ValueError:
                    error_body = None
                if not isinstance(error_body, dict):
                    raise UnexpectedArangoResponseException(
                        text=status_message,
                        raw_response={"raw_response": raw_response.text},
                    )
                logger.debug(
                    f"APICommander about to raise from status {raw_response.status_code}"
                )
                raise ArangoHttpException.from_httpx_error(
                    httpx.HTTPStatusError(
                        status_message,
                        request=raw_response.request,
                        response=raw_response,
                    )
                )

    def _raw_response_to_json(
        self,
        raw_response: httpx.Response,
        request_desc: str,
    ) -> dict[str, Any]:
        if raw_response.status_code == HTTP_NO_CONTENT and not raw_response.text:
            return {}
        try:
            raw_response_json = json.loads(raw_response.text)
        except ValueError:
            # json parsing has failed (e.g., empty body)
            raise UnexpectedArangoResponseException(
                text=f"Unparseable response from '{request_desc}'.",
                raw_response={"raw_response": raw_response.text},
            )
        if not isinstance(raw_response_json, dict):
            raise UnexpectedArangoResponseException(
                text=f"Response from '{request_desc}' is not a JSON object.",
                raw_response={"raw_response": raw_response_json},
            )
        return raw_response_json

    def raw_request(
        self,
        *,
        http_method: str = HttpMethod.GET,
        payload: Any | None = None,
        additional_path: str | None = None,
        request_params: dict[str, Any] = {},
        success_codes: Iterable[int] | None = None,
        timeout_context: _TimeoutContext | None = None,
    ) -> httpx.Response:
        request_url = self._compose_request_url(additional_path)
        _timeout_context = timeout_context or _TimeoutContext(request_ms=None)
        encoded_payload = self._encode_payload(payload)
        log_httpx_request(
            http_method=http_method,
            full_url=request_url,
            request_params=request_params,
            redacted_request_headers=self._loggable_headers,
            encoded_payload=encoded_payload,
            timeout_context=_timeout_context,
        )
        httpx_timeout_s = to_httpx_timeout(_timeout_context)

        try:
            raw_response = self.client.request(
                method=http_method,
                url=request_url,
                content=encoded_payload.encode()
                if encoded_payload is not None
                else None,
                params=request_params,
                timeout=httpx_timeout_s,
                headers=self.full_headers,
            )
        except httpx.TimeoutException as timeout_exc:
            raise to_arango_timeout_exception(
                timeout_exc, timeout_context=_timeout_context
            )

        log_httpx_response(response=raw_response)
        self._check_status(
            raw_response,
            success_codes=success_codes,
            request_desc=self._describe_call(http_method, additional_path),
        )
        return raw_response

    async def async_raw_request(
        self,
        *,
        http_method: str = HttpMethod.GET,
        payload: Any | None = None,
        additional_path: str | None = None,
        request_params: dict[str, Any] = {},
        success_codes: Iterable[int] | None = None,
        timeout_context: _TimeoutContext | None = None,
    ) -> httpx.Response:
        request_url = self._compose_request_url(additional_path)
        _timeout_context = timeout_context or _TimeoutContext(request_ms=None)
        encoded_payload = self._encode_payload(payload)
        log_httpx_request(
            http_method=http_method,
            full_url=request_url,
            request_params=request_params,
            redacted_request_headers=self._loggable_headers,
            encoded_payload=encoded_payload,
            timeout_context=_timeout_context,
        )
        httpx_timeout_s = to_httpx_timeout(_timeout_context)

        try:
            raw_response = await self.async_client.request(
                method=http_method,
                url=request_url,
                content=encoded_payload.encode()
                if encoded_payload is not None
                else None,
                params=request_params,
                timeout=httpx_timeout_s,
                headers=self.full_headers,
            )
        except httpx.TimeoutException as timeout_exc:
            raise to_arango_timeout_exception(
                timeout_exc, timeout_context=_timeout_context
            )

        log_httpx_response(response=raw_response)
        self._check_status(
            raw_response,
            success_codes=success_codes,
            request_desc=self._describe_call(http_method, additional_path),
        )
        return raw_response

    def request(
        self,
        *,
        http_method: str = HttpMethod.GET,
        payload: Any | None = None,
        additional_path: str | None = None,
        request_params: dict[str, Any] = {},
        success_codes: Iterable[int] | None = None,
        timeout_context: _TimeoutContext | None = None,
    ) -> dict[str, Any]:
        raw_response = self.raw_request(
            http_method=http_method,
            payload=payload,
            additional_path=additional_path,
            request_params=request_params,
            success_codes=success_codes,
            timeout_context=timeout_context,
        )
        return self._raw_response_to_json(
            raw_response,
            request_desc=self._describe_call(http_method, additional_path),
        )

    async def async_request(
        self,
        *,
        http_method: str = HttpMethod.GET,
        payload: Any | None = None,
        additional_path: str | None = None,
        request_params: dict[str, Any] = {},
        success_codes: Iterable[int] | None = None,
        timeout_context: _TimeoutContext | None = None,
    ) -> dict[str, Any]:
        raw_response = await self.async_raw_request(
            http_method=http_method,
            payload=payload,
            additional_path=additional_path,
            request_params=request_params,
            success_codes=success_codes,
            timeout_context=timeout_context,
        )
        return self._raw_response_to_json(
            raw_response,
            request_desc=self._describe_call(http_method, additional_path),
        )
