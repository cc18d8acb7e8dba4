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
from typing import TYPE_CHECKING, Any, Sequence

from arangopy.constants import CallerType
from arangopy.settings.defaults import DEFAULT_DATABASE_NAME, DEFAULT_ENDPOINT
from arangopy.utils.api_options import (
    APIOptions,
    defaultAPIOptions,
)
from arangopy.utils.unset import _UNSET, UnsetType

if TYPE_CHECKING:
    from arangopy.admin.admin import AsyncServerAdmin, ServerAdmin
    from arangopy.authentication import TokenProvider
    from arangopy.data.database import AsyncDatabase, Database


logger = logging.getLogger(__name__)


class ArangoClient:
    """
    A client for using the HTTP API of an ArangoDB server. This is the entry
    point, sitting at the top of the conceptual
    "client -> database -> collection/view" hierarchy and of the
    "client -> server admin" chain as well.

    A client is created first, optionally passing it suitable credentials.
    Starting from the client, then:
        - databases (Database and AsyncDatabase) are created for working
          with collections, views and analyzers
        - ServerAdmin objects can be created for server-level work

    No request is issued by the client itself.

    Args:
        token: the credentials for the server. This can be either a literal
            JWT string or a subclass of `arangopy.authentication.TokenProvider`,
            such as `UsernamePasswordTokenProvider` for basic authentication.
        api_endpoint: the server endpoint. Defaults to "http://localhost:8529".
        callers: a list of caller identities, i.e. applications, or frameworks,
            on behalf of which the API calls are performed.
            These end up in the request user-agent.
            Each caller identity is a ("caller_name", "caller_version") pair.
        api_options: a specification - complete or partial - of the API Options
            to override the system defaults. This allows for a deeper configuration
            than what the named parameters (token, callers) offer.
            If this is passed alongside these named parameters, those will take
            precedence.

    Example:
        >>> from arangopy import ArangoClient
        >>> from arangopy.authentication import UsernamePasswordTokenProvider
        >>> my_client = ArangoClient(
        ...     UsernamePasswordTokenProvider("root", "s3cr3t"),
        ...     api_endpoint="http://db.example.com:8529",
        ... )
        >>> my_db = my_client.get_database("products_db")
        >>> my_admin = my_client.get_admin()
        >>> my_admin.list_databases()
        ['_system', 'products_db']
    """

    def __init__(
        self,
        token: str | TokenProvider | UnsetType = _UNSET,
        *,
        api_endpoint: str = DEFAULT_ENDPOINT,
        callers: Sequence[CallerType] | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> None:
        arg_api_options = APIOptions(
            callers=callers,
            token=token,
        )
        self.api_endpoint = api_endpoint.strip("/")
        self.api_options = defaultAPIOptions().with_override(api_options).with_override(
            arg_api_options
        )

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(api_endpoint="{self.api_endpoint}", '
            f"{self.api_options})"
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ArangoClient):
            return all(
                [
                    self.api_endpoint == other.api_endpoint,
                    self.api_options.token == other.api_options.token,
                    self.api_options.callers == other.api_options.callers,
                ]
            )
        else:
            return False

    def __getitem__(self, name: str) -> Database:
        return self.get_database(name)

    def _copy(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> ArangoClient:
        arg_api_options = APIOptions(token=token)
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return ArangoClient(
            api_endpoint=self.api_endpoint,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> ArangoClient:
        """
        Create a clone of this ArangoClient with some changed attributes.

        Args:
            token: the credentials for the server, either a JWT string or
                a `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).
                In case the same setting is also provided as named parameter,
                the latter takes precedence.

        Returns:
            a new ArangoClient instance.

        Example:
            >>> other_auth_client = my_client.with_options(
            ...     token=UsernamePasswordTokenProvider("reader", "p4ss"),
            ... )
        """

        return self._copy(
            token=token,
            api_options=api_options,
        )

    def get_database(
        self,
        name: str = DEFAULT_DATABASE_NAME,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        spawn_api_options: APIOptions | UnsetType = _UNSET,
    ) -> Database:
        """
        Get a Database object from this client, for doing work within
        a specific database. No request is issued.

        Args:
            name: the database name. Defaults to the `_system` database.
            token: if supplied, is passed to the Database instead of the
                client token.
            spawn_api_options: a specification - complete or partial - of the
                API Options to override the defaults inherited from the client.
                If this is passed alongside named timeout parameters,
                the latter will take precedence.

        Returns:
            a Database object with which to work on collections, views
            and analyzers.

        Example:
            >>> my_db = my_client.get_database("products_db")
            >>> my_coll = my_db.create_collection("items")
        """

        # lazy importing here to avoid circular dependency
        from arangopy.data.database import Database

        resulting_api_options = self.api_options.with_override(
            spawn_api_options,
        ).with_override(
            APIOptions(
                token=token,
            ),
        )
        return Database(
            api_endpoint=self.api_endpoint,
            name=name,
            api_options=resulting_api_options,
        )

    def get_async_database(
        self,
        name: str = DEFAULT_DATABASE_NAME,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        spawn_api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncDatabase:
        """
        Get an AsyncDatabase object from this client, for doing work within
        a specific database with an asynchronous interface.

        This method has identical behavior and signature as the sync
        counterpart `get_database`: please see that one for more details.
        """

        return self.get_database(
            name,
            token=token,
            spawn_api_options=spawn_api_options,
        ).to_async()

    def get_admin(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        spawn_api_options: APIOptions | UnsetType = _UNSET,
    ) -> ServerAdmin:
        """
        Get a ServerAdmin instance corresponding to this client, for
        server-level work such as managing databases and log levels.

        Args:
            token: if supplied, is passed to the ServerAdmin instead of the
                client token. Server-level tasks generally require a user
                with access to the `_system` database.
            spawn_api_options: a specification - complete or partial - of the
                API Options to override the defaults inherited from the client.

        Returns:
            a ServerAdmin instance targeting the server of this client.

        Example:
            >>> my_admin = my_client.get_admin()
            >>> my_admin.version().version
            '3.12.1'
        """

        # lazy importing here to avoid circular dependency
        from arangopy.admin.admin import ServerAdmin

        resulting_api_options = self.api_options.with_override(
            spawn_api_options,
        ).with_override(
            APIOptions(
                token=token,
            ),
        )
        return ServerAdmin(
            api_endpoint=self.api_endpoint,
            api_options=resulting_api_options,
        )

    def get_async_admin(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        spawn_api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncServerAdmin:
        """
        Get an AsyncServerAdmin instance corresponding to this client.

        This method has identical behavior and signature as the sync
        counterpart `get_admin`: please see that one for more details.
        """

        from arangopy.admin.admin import AsyncServerAdmin

        resulting_api_options = self.api_options.with_override(
            spawn_api_options,
        ).with_override(
            APIOptions(
                token=token,
            ),
        )
        return AsyncServerAdmin(
            api_endpoint=self.api_endpoint,
            api_options=resulting_api_options,
        )
