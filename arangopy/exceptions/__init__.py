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

from dataclasses import dataclass

import httpx

from arangopy.exceptions.arango_exceptions import (
    ArangoDecodeException,
    ArangoException,
    ArangoHttpException,
    ArangoTimeoutException,
    ConflictException,
    CursorException,
    MalformedPayloadException,
    NoMoreItemsException,
    NotFoundException,
    UnexpectedArangoResponseException,
    UnknownAnalyzerTypeException,
    is_conflict,
    is_not_found,
)
from arangopy.exceptions.error_descriptors import ArangoErrorDescriptor
from arangopy.utils.api_options import FullTimeoutOptions


def _min_labeled_timeout(
    *timeouts: tuple[int | None, str | None],
) -> tuple[int, str | None]:
    _non_null: list[tuple[int, str | None]] = [
        to  # type: ignore[misc]
        for to in timeouts
        if to[0] is not None
    ]
    if _non_null:
        min_to, min_lb = min(_non_null, key=lambda p: p[0])
        return (min_to or 0, min_lb)
    else:
        return (0, None)


def _select_singlereq_timeout(
    *,
    timeout_options: FullTimeoutOptions,
    category_label: str,
    category_timeout_ms: int | None,
    request_timeout_ms: int | None,
    timeout_ms: int | None,
) -> tuple[int, str | None]:
    """
    Apply the logic for determining and labeling the timeout for a
    single-request method belonging to a given category (general method,
    collection admin, view admin, database admin).

    If no int args are passed, pick (and correctly label) the least between
    the request timeout and the category timeout from the options.
    If any of the int args are passed, pick (and correctly label) the least
    of them, disregarding the options altogether.
    """
    if all(
        iarg is None for iarg in (category_timeout_ms, request_timeout_ms, timeout_ms)
    ):
        ao_r = timeout_options.request_timeout_ms
        ao_cat: int = getattr(timeout_options, category_label)
        if ao_r < ao_cat:
            return (ao_r, "request_timeout_ms")
        else:
            return (ao_cat, category_label)
    else:
        return _min_labeled_timeout(
            (category_timeout_ms, category_label),
            (request_timeout_ms, "request_timeout_ms"),
            (timeout_ms, "timeout_ms"),
        )


def _select_singlereq_timeout_gm(
    *,
    timeout_options: FullTimeoutOptions,
    general_method_timeout_ms: int | None,
    request_timeout_ms: int | None = None,
    timeout_ms: int | None = None,
) -> tuple[int, str | None]:
    return _select_singlereq_timeout(
        timeout_options=timeout_options,
        category_label="general_method_timeout_ms",
        category_timeout_ms=general_method_timeout_ms,
        request_timeout_ms=request_timeout_ms,
        timeout_ms=timeout_ms,
    )


def _select_singlereq_timeout_ca(
    *,
    timeout_options: FullTimeoutOptions,
    collection_admin_timeout_ms: int | None,
    request_timeout_ms: int | None = None,
    timeout_ms: int | None = None,
) -> tuple[int, str | None]:
    return _select_singlereq_timeout(
        timeout_options=timeout_options,
        category_label="collection_admin_timeout_ms",
        category_timeout_ms=collection_admin_timeout_ms,
        request_timeout_ms=request_timeout_ms,
        timeout_ms=timeout_ms,
    )


def _select_singlereq_timeout_va(
    *,
    timeout_options: FullTimeoutOptions,
    view_admin_timeout_ms: int | None,
    request_timeout_ms: int | None = None,
    timeout_ms: int | None = None,
) -> tuple[int, str | None]:
    return _select_singlereq_timeout(
        timeout_options=timeout_options,
        category_label="view_admin_timeout_ms",
        category_timeout_ms=view_admin_timeout_ms,
        request_timeout_ms=request_timeout_ms,
        timeout_ms=timeout_ms,
    )


def _select_singlereq_timeout_da(
    *,
    timeout_options: FullTimeoutOptions,
    database_admin_timeout_ms: int | None,
    request_timeout_ms: int | None = None,
    timeout_ms: int | None = None,
) -> tuple[int, str | None]:
    return _select_singlereq_timeout(
        timeout_options=timeout_options,
        category_label="database_admin_timeout_ms",
        category_timeout_ms=database_admin_timeout_ms,
        request_timeout_ms=request_timeout_ms,
        timeout_ms=timeout_ms,
    )


@dataclass
class _TimeoutContext:
    """
    The timeout a single HTTP request must obey, enriched with the name of the
    setting it comes from, so that a timeout error can tell the user which
    setting to adjust.

    Args:
        nominal_ms: the timeout in milliseconds as set by the user.
        request_ms: the number of milliseconds the HTTP request is allowed to last.
        label: the name of the timeout setting as known by the user.
    """

    nominal_ms: int | None
    request_ms: int | None
    label: str | None

    def __init__(
        self,
        *,
        request_ms: int | None,
        nominal_ms: int | None = None,
        label: str | None = None,
    ) -> None:
        self.nominal_ms = nominal_ms
        self.request_ms = request_ms
        self.label = label

    def __bool__(self) -> bool:
        return self.nominal_ms is not None or self.request_ms is not None


def to_arango_timeout_exception(
    httpx_timeout: httpx.TimeoutException,
    timeout_context: _TimeoutContext,
) -> ArangoTimeoutException:
    text: str
    text_0 = str(httpx_timeout) or "timed out"
    timeout_ms = timeout_context.nominal_ms or timeout_context.request_ms
    timeout_label = timeout_context.label
    if timeout_ms:
        if timeout_label:
            text = f"{text_0} (timeout honoured: {timeout_label} = {timeout_ms} ms)"
        else:
            text = f"{text_0} (timeout honoured: {timeout_ms} ms)"
    else:
        text = text_0
    timeout_type: str
    if isinstance(httpx_timeout, httpx.ConnectTimeout):
        timeout_type = "connect"
    elif isinstance(httpx_timeout, httpx.ReadTimeout):
        timeout_type = "read"
    elif isinstance(httpx_timeout, httpx.WriteTimeout):
        timeout_type = "write"
    elif isinstance(httpx_timeout, httpx.PoolTimeout):
        timeout_type = "pool"
    else:
        timeout_type = "generic"
    endpoint: str | None = None
    raw_payload: str | None = None
    try:
        request = httpx_timeout.request
    except RuntimeError:
        # httpx raises this when no request is attached to the error
        request = None
    if request is not None:
        endpoint = str(request.url)
        if isinstance(request.content, bytes):
            raw_payload = request.content.decode()
    return ArangoTimeoutException(
        text=text,
        timeout_type=timeout_type,
        endpoint=endpoint,
        raw_payload=raw_payload,
    )


__all__ = [
    "ArangoErrorDescriptor",
    "ArangoException",
    "ArangoHttpException",
    "NotFoundException",
    "ConflictException",
    "ArangoTimeoutException",
    "ArangoDecodeException",
    "UnexpectedArangoResponseException",
    "MalformedPayloadException",
    "UnknownAnalyzerTypeException",
    "CursorException",
    "NoMoreItemsException",
    "is_not_found",
    "is_conflict",
]

__pdoc__ = {
    "to_arango_timeout_exception": False,
}
