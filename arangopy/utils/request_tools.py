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

import logging
from typing import Any, Sequence

import httpx

from arangopy import __version__
from arangopy.constants import CallerType
from arangopy.exceptions import _TimeoutContext

logger = logging.getLogger(__name__)


class HttpMethod:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def log_httpx_request(
    http_method: str,
    full_url: str,
    request_params: dict[str, Any] | None,
    redacted_request_headers: dict[str, str],
    encoded_payload: str | None,
    timeout_context: _TimeoutContext,
) -> None:
    """
    Log the details of an HTTP request for debugging purposes.

    Args:
        http_method: the HTTP verb of the request (e.g. "PUT").
        full_url: the URL of the request (e.g. "http://host:8529/_db/x/_api/view").
        request_params: query parameters of the request.
        redacted_request_headers: caution, as these will be logged as they are.
        encoded_payload: the JSON-encoded payload sent with the request, if any.
        timeout_context: the timeout information for this request.
    """
    logger.debug(f"Request URL: {http_method} {full_url}")
    if request_params:
        logger.debug(f"Request params: '{request_params}'")
    if redacted_request_headers:
        logger.debug(f"Request headers: '{redacted_request_headers}'")
    if encoded_payload is not None:
        logger.debug(f"Request payload: '{encoded_payload}'")
    if timeout_context:
        logger.debug(
            f"Timeout (ms): for request {timeout_context.request_ms or '(unset)'} ms"
            f", as set by {timeout_context.label or '(unlabeled)'}"
        )


def log_httpx_response(response: httpx.Response) -> None:
    logger.debug(f"Response status code: {response.status_code}")
    logger.debug(f"Response headers: '{response.headers}'")
    logger.debug(f"Response text: '{response.text}'")


def to_httpx_timeout(timeout_context: _TimeoutContext) -> httpx.Timeout | None:
    """A zero or missing request timeout means no timeout at all."""
    if not timeout_context.request_ms:
        return None
    return httpx.Timeout(timeout_context.request_ms / 1000)


def package_caller() -> CallerType:
    """The (name, version) identity of this client library for the User-Agent."""
    package_name = __name__.split(".")[0]
    return (package_name, __version__)


def compose_user_agent(callers: Sequence[CallerType]) -> str | None:
    """
    Build the User-Agent header value out of a list of caller identities,
    e.g. "my-app/1.2 arangopy/0.1.0". Callers without a name are skipped.
    """
    user_agent_strings = [
        f"{name}/{version}" if version else name
        for name, version in callers
        if name
    ]
    if user_agent_strings:
        return " ".join(user_agent_strings)
    return None
