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
from typing import Any

import httpx

from arangopy.exceptions.error_descriptors import ArangoErrorDescriptor
from arangopy.settings.defaults import (
    CONFLICT_ERROR_NUMS,
    HTTP_CONFLICT,
    HTTP_NOT_FOUND,
    NOT_FOUND_ERROR_NUMS,
)


class ArangoException(Exception):
    """
    Any exception occurred while issuing requests to the server and specific
    to its API, such as:
      - a view is found not to exist when getting its properties,
      - the server returns an error status code,
      - a response cannot be parsed into the expected shape,
    but not, for instance,
      - a network error while sending an HTTP request to the server.
    """

    pass


@dataclass
class ArangoHttpException(ArangoException, httpx.HTTPStatusError):
    """
    A request to the server resulted in a non-success HTTP status code.

    The structured error body returned by the server, if any, is parsed into
    an `ArangoErrorDescriptor`, while this exception is still (a subclass of)
    an `httpx.HTTPStatusError`.

    Callers should test the nature of the error through the capability
    checks `is_not_found()` and `is_conflict()` rather than by comparing
    raw status codes.

    Attributes:
        text: a text message about the exception.
        error_descriptor: the structured error body returned by the server.
    """

    text: str | None
    error_descriptor: ArangoErrorDescriptor

    def __init__(
        self,
        text: str | None,
        *,
        httpx_error: httpx.HTTPStatusError,
        error_descriptor: ArangoErrorDescriptor,
    ) -> None:
        ArangoException.__init__(self, text)
        httpx.HTTPStatusError.__init__(
            self,
            message=str(httpx_error),
            request=httpx_error._request,
            response=httpx_error.response,
        )
        self.text = text
        self.httpx_error = httpx_error
        self.error_descriptor = error_descriptor

    def __str__(self) -> str:
        return self.text or str(self.httpx_error)

    @property
    def status_code(self) -> int | None:
        """The HTTP status code of the response, falling back to the body's code."""
        _code = getattr(self.response, "status_code", None)
        if isinstance(_code, int):
            return _code
        return self.error_descriptor.code

    @property
    def error_num(self) -> int | None:
        return self.error_descriptor.error_num

    @property
    def error_message(self) -> str | None:
        return self.error_descriptor.error_message

    def is_not_found(self) -> bool:
        """Whether the error signals that the target resource does not exist."""
        return (
            self.status_code == HTTP_NOT_FOUND
            or self.error_num in NOT_FOUND_ERROR_NUMS
        )

    def is_conflict(self) -> bool:
        """Whether the error signals a conflict, e.g. a duplicate name."""
        return self.status_code == HTTP_CONFLICT or self.error_num in CONFLICT_ERROR_NUMS

    @classmethod
    def from_httpx_error(
        cls,
        httpx_error: httpx.HTTPStatusError,
        **kwargs: Any,
    ) -> ArangoHttpException:
        """
        Parse a httpx status error into this exception, choosing the most
        specific subclass (not-found, conflict) matching the status code.
        """

        raw_response: dict[str, Any]
        # the attempt to extract a response structure cannot afford failure.
        try:
            raw_response = httpx_error.response.json() or {}
            if not isinstance(raw_response, dict):
                raw_response = {}
        except Exception:
            raw_response = {}
        error_descriptor = ArangoErrorDescriptor(raw_response)
        summary = error_descriptor.summary()
        if summary:
            text = f"{summary}. {str(httpx_error)}"
        else:
            text = str(httpx_error)

        target_class: type[ArangoHttpException] = cls
        if cls is ArangoHttpException:
            status_code = getattr(httpx_error.response, "status_code", None)
            if status_code == HTTP_NOT_FOUND:
                target_class = NotFoundException
            elif status_code == HTTP_CONFLICT:
                target_class = ConflictException

        return target_class(
            text=text,
            httpx_error=httpx_error,
            error_descriptor=error_descriptor,
            **kwargs,
        )


class NotFoundException(ArangoHttpException):
    """
    The server reported (HTTP 404) that the target resource, such as a database,
    a collection, a view or an analyzer, does not exist.
    """

    pass


class ConflictException(ArangoHttpException):
    """
    The server reported (HTTP 409) a conflict, typically because a resource
    with the requested name already exists.
    """

    pass


@dataclass
class ArangoTimeoutException(ArangoException):
    """
    A request to the server timed out, i.e. the deadline set for it
    (through the timeout options or a per-call timeout) elapsed.

    Attributes:
        text: a textual description of the error
        timeout_type: this denotes the phase of the HTTP request when the event
            occurred ("connect", "read", "write", "pool") or "generic" if there is
            not a specific request associated to the exception.
        endpoint: if the timeout is tied to a specific request, this is the
            URL that the request was targeting.
        raw_payload:  if the timeout is tied to a specific request, this is the
            associated payload (as a string).
    """

    text: str
    timeout_type: str
    endpoint: str | None
    raw_payload: str | None

    def __init__(
        self,
        text: str,
        *,
        timeout_type: str,
        endpoint: str | None,
        raw_payload: str | None,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.timeout_type = timeout_type
        self.endpoint = endpoint
        self.raw_payload = raw_payload


class ArangoDecodeException(ArangoException):
    """
    A payload did not match the expected shape. This usually signals a
    client/server version mismatch rather than a domain outcome.
    """

    pass


@dataclass
class UnexpectedArangoResponseException(ArangoDecodeException):
    """
    The server response is malformed in that it cannot be parsed, or it does
    not have the expected field(s), or they are of the wrong type.

    Attributes:
        text: a text message about the exception.
        raw_response: the response returned by the API in the form of a dict.
    """

    text: str
    raw_response: dict[str, Any] | None

    def __init__(
        self,
        text: str,
        raw_response: dict[str, Any] | None,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.raw_response = raw_response


@dataclass
class MalformedPayloadException(ArangoDecodeException):
    """
    A tagged payload (such as an analyzer definition) could not be decoded:
    the discriminator is missing, or a field required by its type is absent.

    Attributes:
        text: a text message about the exception.
        raw_payload: the offending payload.
    """

    text: str
    raw_payload: dict[str, Any] | None

    def __init__(
        self,
        text: str,
        raw_payload: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.raw_payload = raw_payload


@dataclass
class UnknownAnalyzerTypeException(ArangoDecodeException):
    """
    An analyzer type outside the set known to this client was used where
    it cannot be passed through opaquely, i.e. when encoding a definition
    to send to the server.

    Attributes:
        text: a text message about the exception.
        analyzer_type: the unrecognized type string.
    """

    text: str
    analyzer_type: str

    def __init__(
        self,
        text: str,
        *,
        analyzer_type: str,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.analyzer_type = analyzer_type


@dataclass
class CursorException(ArangoException):
    """
    The cursor operation cannot be invoked in the current cursor state.

    Attributes:
        text: a text message about the exception.
        cursor_state: a string description of the current state
            of the cursor. See the documentation for ListingCursor.
    """

    text: str
    cursor_state: str

    def __init__(
        self,
        text: str,
        *,
        cursor_state: str,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.cursor_state = cursor_state


class NoMoreItemsException(ArangoException):
    """
    A listing cursor has been read past its last item.
    """

    pass


def is_not_found(exc: BaseException) -> bool:
    """Whether the exception is a server-reported 'not found' error."""
    return isinstance(exc, ArangoHttpException) and exc.is_not_found()


def is_conflict(exc: BaseException) -> bool:
    """Whether the exception is a server-reported 'conflict' error."""
    return isinstance(exc, ArangoHttpException) and exc.is_conflict()
