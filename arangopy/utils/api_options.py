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
from typing import Iterable, Sequence

from arangopy.authentication import (
    JWTTokenProvider,
    TokenProvider,
    coerce_possible_token_provider,
)
from arangopy.constants import CallerType
from arangopy.settings.defaults import (
    DATABASE_PATH_TEMPLATE,
    DEFAULT_COLLECTION_ADMIN_TIMEOUT_MS,
    DEFAULT_DATABASE_ADMIN_TIMEOUT_MS,
    DEFAULT_GENERAL_METHOD_TIMEOUT_MS,
    DEFAULT_REQUEST_TIMEOUT_MS,
    DEFAULT_VIEW_ADMIN_TIMEOUT_MS,
    FIXED_SECRET_PLACEHOLDER,
)
from arangopy.utils.unset import _UNSET, UnsetType


@dataclass
class TimeoutOptions:
    """
    The group of settings for the API Options concerning the configured timeouts
    for various kinds of API operations.

    All timeout values are integers expressed in milliseconds. A timeout of zero
    signifies that no timeout is imposed at all on that kind of operation.

    All methods that issue HTTP requests allow for a per-invocation override
    of the relevant timeouts involved (see the method docstring and signature
    for details).

    Values that are left unspecified will keep the values inherited from
    the parent "spawner" class.

    Attributes:
        request_timeout_ms: the timeout imposed on a single HTTP request.
            Defaults to 10 s.
        general_method_timeout_ms: a timeout for generic methods, such as
            counting the documents in a collection. Defaults to 30 s.
        collection_admin_timeout_ms: a timeout for collection schema operations:
            creating, dropping, listing and inspecting collections. Defaults to 60 s.
        view_admin_timeout_ms: a timeout for view and analyzer operations:
            creating, dropping, listing, reading and altering the properties of
            views and analyzers. Defaults to 60 s.
        database_admin_timeout_ms: a timeout for database- and server-level
            administration: creating/dropping/listing databases, log levels,
            license, health, server mode. Defaults to 2 m.
    """

    request_timeout_ms: int | UnsetType = _UNSET
    general_method_timeout_ms: int | UnsetType = _UNSET
    collection_admin_timeout_ms: int | UnsetType = _UNSET
    view_admin_timeout_ms: int | UnsetType = _UNSET
    database_admin_timeout_ms: int | UnsetType = _UNSET


@dataclass
class FullTimeoutOptions(TimeoutOptions):
    """
    The "full" version of `TimeoutOptions`, with the guarantee that all of its
    members have defined values. This is what the ArangoClient, Database,
    Collection and view objects carry in their `.api_options` attribute.

    See `TimeoutOptions` for a description of the attributes.
    """

    request_timeout_ms: int
    general_method_timeout_ms: int
    collection_admin_timeout_ms: int
    view_admin_timeout_ms: int
    database_admin_timeout_ms: int

    def __init__(
        self,
        *,
        request_timeout_ms: int,
        general_method_timeout_ms: int,
        collection_admin_timeout_ms: int,
        view_admin_timeout_ms: int,
        database_admin_timeout_ms: int,
    ) -> None:
        TimeoutOptions.__init__(
            self,
            request_timeout_ms=request_timeout_ms,
            general_method_timeout_ms=general_method_timeout_ms,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            view_admin_timeout_ms=view_admin_timeout_ms,
            database_admin_timeout_ms=database_admin_timeout_ms,
        )

    def with_override(self, other: TimeoutOptions) -> FullTimeoutOptions:
        """
        Given an "overriding" set of options, possibly not defined in all its
        attributes, apply the override logic and return a new full options object.

        Args:
            other: a not-necessarily-fully-specified options object. All its defined
                settings take precedence.
        """

        return FullTimeoutOptions(
            request_timeout_ms=(
                other.request_timeout_ms
                if not isinstance(other.request_timeout_ms, UnsetType)
                else self.request_timeout_ms
            ),
            general_method_timeout_ms=(
                other.general_method_timeout_ms
                if not isinstance(other.general_method_timeout_ms, UnsetType)
                else self.general_method_timeout_ms
            ),
            collection_admin_timeout_ms=(
                other.collection_admin_timeout_ms
                if not isinstance(other.collection_admin_timeout_ms, UnsetType)
                else self.collection_admin_timeout_ms
            ),
            view_admin_timeout_ms=(
                other.view_admin_timeout_ms
                if not isinstance(other.view_admin_timeout_ms, UnsetType)
                else self.view_admin_timeout_ms
            ),
            database_admin_timeout_ms=(
                other.database_admin_timeout_ms
                if not isinstance(other.database_admin_timeout_ms, UnsetType)
                else self.database_admin_timeout_ms
            ),
        )


@dataclass
class URLOptions:
    """
    The group of settings for the API Options determining the URL paths
    used to reach the server.

    Attributes:
        database_path_template: the path template to address a given database.
            It must contain a "{database}" placeholder. Defaults to "_db/{database}".
    """

    database_path_template: str | UnsetType = _UNSET


@dataclass
class FullURLOptions(URLOptions):
    """
    The "full" version of `URLOptions`, with all members defined.

    See `URLOptions` for a description of the attributes.
    """

    database_path_template: str

    def __init__(self, *, database_path_template: str) -> None:
        URLOptions.__init__(self, database_path_template=database_path_template)

    def with_override(self, other: URLOptions) -> FullURLOptions:
        """
        Given an "overriding" set of options, possibly not defined in all its
        attributes, apply the override logic and return a new full options object.
        """

        return FullURLOptions(
            database_path_template=(
                other.database_path_template
                if not isinstance(other.database_path_template, UnsetType)
                else self.database_path_template
            ),
        )


@dataclass
class APIOptions:
    """
    This class represents all settings that can be configured for how arangopy
    interacts with the server. Each object in the abstraction hierarchy
    (ArangoClient, ServerAdmin, Database, Collection, views) has a full set of
    these options that determine how it behaves when performing requests.

    To customize the behavior from its preset defaults, create an `APIOptions`
    object and pass it as the `api_options` argument to the ArangoClient
    constructor, to `with_options`, or as the `spawn_api_options` argument to
    the methods spawning new objects (such as `get_database`). Only the
    members that are defined override the inherited settings; the "additional
    headers" and "redacted header names" are merged with the inherited ones.

    Attributes:
        callers: an iterable of "caller identities" to be used in the User-Agent
            header. Each caller identity is a `(name, version)` 2-item tuple whose
            elements can be strings or None.
        database_additional_headers: free-form dictionary of additional headers
            for requests issued by Database, Collection and view objects.
            Passing a key with a value of None suppresses that header.
        admin_additional_headers: free-form dictionary of additional headers
            for requests issued by ServerAdmin objects.
        redacted_header_names: a set of (case-insensitive) header names whose
            values are masked when logging request details.
        token: an instance of TokenProvider providing the Authorization header.
            A string (or None) is converted into a `JWTTokenProvider`.
        timeout_options: an instance of `TimeoutOptions` (see).
        url_options: an instance of `URLOptions` (see).
    """

    callers: Sequence[CallerType] | UnsetType = _UNSET
    database_additional_headers: dict[str, str | None] | UnsetType = _UNSET
    admin_additional_headers: dict[str, str | None] | UnsetType = _UNSET
    redacted_header_names: set[str] | UnsetType = _UNSET
    token: TokenProvider | UnsetType = _UNSET

    timeout_options: TimeoutOptions | UnsetType = _UNSET
    url_options: URLOptions | UnsetType = _UNSET

    def __init__(
        self,
        *,
        callers: Sequence[CallerType] | UnsetType = _UNSET,
        database_additional_headers: dict[str, str | None] | UnsetType = _UNSET,
        admin_additional_headers: dict[str, str | None] | UnsetType = _UNSET,
        redacted_header_names: Iterable[str] | UnsetType = _UNSET,
        token: str | TokenProvider | None | UnsetType = _UNSET,
        timeout_options: TimeoutOptions | UnsetType = _UNSET,
        url_options: URLOptions | UnsetType = _UNSET,
    ) -> None:
        self.callers = callers
        self.database_additional_headers = database_additional_headers
        self.admin_additional_headers = admin_additional_headers
        self.redacted_header_names = (
            _UNSET
            if isinstance(redacted_header_names, UnsetType)
            else set(redacted_header_names)
        )
        self.token = coerce_possible_token_provider(token)
        self.timeout_options = timeout_options
        self.url_options = url_options

    def __repr__(self) -> str:
        _redacted_header_names = (
            set()
            if isinstance(self.redacted_header_names, UnsetType)
            else {hn.upper() for hn in self.redacted_header_names}
        )

        def _redact(
            headers: dict[str, str | None] | UnsetType,
        ) -> dict[str, str | None] | UnsetType:
            if isinstance(headers, UnsetType):
                return _UNSET
            return {
                k: v
                if k.upper() not in _redacted_header_names
                else FIXED_SECRET_PLACEHOLDER
                for k, v in headers.items()
            }

        _database_additional_headers = _redact(self.database_additional_headers)
        _admin_additional_headers = _redact(self.admin_additional_headers)
        non_unset_pieces = [
            pc
            for pc in (
                None
                if isinstance(self.callers, UnsetType)
                else f"callers={self.callers}",
                None
                if isinstance(_database_additional_headers, UnsetType)
                else f"database_additional_headers={_database_additional_headers}",
                None
                if isinstance(_admin_additional_headers, UnsetType)
                else f"admin_additional_headers={_admin_additional_headers}",
                None
                if isinstance(self.redacted_header_names, UnsetType)
                else f"redacted_header_names={self.redacted_header_names}",
                None
                if isinstance(self.token, UnsetType) or not self.token
                else f"token={self.token}",
                None
                if isinstance(self.timeout_options, UnsetType)
                else f"timeout_options={self.timeout_options}",
                None
                if isinstance(self.url_options, UnsetType)
                else f"url_options={self.url_options}",
            )
            if pc is not None
        ]
        inner_desc = ", ".join(non_unset_pieces)
        return f"{self.__class__.__name__}({inner_desc})"


@dataclass
class FullAPIOptions(APIOptions):
    """
    The "full" version of `APIOptions`, with the guarantee that all of its members
    have defined values. As such, this is what ArangoClient, Database,
    Collection and so on have as their `.api_options` attribute.

    See `APIOptions` for a description of the attributes.
    """

    callers: Sequence[CallerType]
    database_additional_headers: dict[str, str | None]
    admin_additional_headers: dict[str, str | None]
    redacted_header_names: set[str]
    token: TokenProvider

    timeout_options: FullTimeoutOptions
    url_options: FullURLOptions

    def __init__(
        self,
        *,
        callers: Sequence[CallerType],
        database_additional_headers: dict[str, str | None],
        admin_additional_headers: dict[str, str | None],
        redacted_header_names: set[str],
        token: str | TokenProvider | None,
        timeout_options: FullTimeoutOptions,
        url_options: FullURLOptions,
    ) -> None:
        APIOptions.__init__(
            self,
            callers=callers,
            database_additional_headers=database_additional_headers,
            admin_additional_headers=admin_additional_headers,
            redacted_header_names=redacted_header_names,
            token=token,
            timeout_options=timeout_options,
            url_options=url_options,
        )

    def __repr__(self) -> str:
        non_unset_pieces = [
            pc
            for pc in (
                f"token={self.token}" if self.token else None,
                f"callers={self.callers}" if self.callers else None,
                "...",
            )
            if pc is not None
        ]
        inner_desc = ", ".join(non_unset_pieces)
        return f"{self.__class__.__name__}({inner_desc})"

    def with_override(self, other: APIOptions | None | UnsetType) -> FullAPIOptions:
        """
        Given an "overriding" set of options, possibly not defined in all its
        attributes, apply the override logic and return a new full options object.

        Defined attributes completely replace the pre-existing ones, except for
        `database_additional_headers`, `admin_additional_headers` and
        `redacted_header_names`, in which cases merging takes place.

        Args:
            other: a not-necessarily-fully-specified options object. All its defined
                settings take precedence.
        """

        if isinstance(other, UnsetType) or other is None:
            return self

        database_additional_headers: dict[str, str | None]
        admin_additional_headers: dict[str, str | None]
        redacted_header_names: set[str]
        timeout_options: FullTimeoutOptions
        url_options: FullURLOptions

        if isinstance(other.database_additional_headers, UnsetType):
            database_additional_headers = self.database_additional_headers
        else:
            database_additional_headers = {
                **self.database_additional_headers,
                **other.database_additional_headers,
            }
        if isinstance(other.admin_additional_headers, UnsetType):
            admin_additional_headers = self.admin_additional_headers
        else:
            admin_additional_headers = {
                **self.admin_additional_headers,
                **other.admin_additional_headers,
            }
        if isinstance(other.redacted_header_names, UnsetType):
            redacted_header_names = self.redacted_header_names
        else:
            redacted_header_names = (
                self.redacted_header_names | other.redacted_header_names
            )

        if isinstance(other.timeout_options, TimeoutOptions):
            timeout_options = self.timeout_options.with_override(other.timeout_options)
        else:
            timeout_options = self.timeout_options
        if isinstance(other.url_options, URLOptions):
            url_options = self.url_options.with_override(other.url_options)
        else:
            url_options = self.url_options

        return FullAPIOptions(
            callers=(
                other.callers
                if not isinstance(other.callers, UnsetType)
                else self.callers
            ),
            database_additional_headers=database_additional_headers,
            admin_additional_headers=admin_additional_headers,
            redacted_header_names=redacted_header_names,
            token=other.token if not isinstance(other.token, UnsetType) else self.token,
            timeout_options=timeout_options,
            url_options=url_options,
        )


defaultTimeoutOptions = FullTimeoutOptions(
    request_timeout_ms=DEFAULT_REQUEST_TIMEOUT_MS,
    general_method_timeout_ms=DEFAULT_GENERAL_METHOD_TIMEOUT_MS,
    collection_admin_timeout_ms=DEFAULT_COLLECTION_ADMIN_TIMEOUT_MS,
    view_admin_timeout_ms=DEFAULT_VIEW_ADMIN_TIMEOUT_MS,
    database_admin_timeout_ms=DEFAULT_DATABASE_ADMIN_TIMEOUT_MS,
)
defaultURLOptions = FullURLOptions(
    database_path_template=DATABASE_PATH_TEMPLATE,
)


def defaultAPIOptions() -> FullAPIOptions:
    """
    Return the default APIOptions object, based on the 'grand defaults'
    hardcoded in arangopy.
    """

    return FullAPIOptions(
        callers=[],
        database_additional_headers={},
        admin_additional_headers={},
        redacted_header_names=set(),
        token=JWTTokenProvider(None),
        timeout_options=defaultTimeoutOptions,
        url_options=defaultURLOptions,
    )
