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
from types import TracebackType
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping
from urllib.parse import quote

from arangopy.constants import LogLevel, ServerMode
from arangopy.data.info.admin_info import ClusterHealth, LicenseInfo, VersionInfo
from arangopy.data.info.database_info import CreateDatabaseOptions, DatabaseUser
from arangopy.exceptions import (
    ArangoHttpException,
    UnexpectedArangoResponseException,
    _select_singlereq_timeout_da,
    _TimeoutContext,
)
from arangopy.settings.defaults import (
    DEFAULT_AUTH_HEADER,
    HTTP_CREATED,
    HTTP_OK,
    SYSTEM_DATABASE_NAME,
)
from arangopy.utils.api_commander import APICommander
from arangopy.utils.api_options import APIOptions, FullAPIOptions
from arangopy.utils.parsing import _drop_unset_items, _strip_envelope
from arangopy.utils.request_tools import HttpMethod
from arangopy.utils.unset import _UNSET, UnsetType

if TYPE_CHECKING:
    from arangopy.authentication import TokenProvider
    from arangopy.data.database import AsyncDatabase, Database


logger = logging.getLogger(__name__)

LogLevels = Dict[str, str]


def _database_names(response: dict[str, Any], command_name: str) -> list[str]:
    result = response.get("result")
    if not isinstance(result, list):
        raise UnexpectedArangoResponseException(
            text=f"Faulty response from {command_name} API command.",
            raw_response=response,
        )
    return result


def _create_database_payload(
    name: str,
    options: CreateDatabaseOptions | dict[str, Any] | None,
    users: Iterable[DatabaseUser | dict[str, Any]] | None,
) -> dict[str, Any]:
    options_dict = (
        None if options is None else CreateDatabaseOptions.coerce(options).as_dict()
    )
    users_list = (
        None if users is None else [DatabaseUser.coerce(user).as_dict() for user in users]
    )
    return _drop_unset_items(
        {
            "name": name,
            "options": options_dict or None,
            "users": users_list,
        }
    )


def _log_levels_payload(levels: Mapping[str, LogLevel | str]) -> dict[str, str]:
    return {
        topic: LogLevel.coerce(level).value for topic, level in levels.items()
    }


def _server_mode(response: dict[str, Any]) -> ServerMode:
    mode = response.get("mode")
    if mode is None or mode not in ServerMode:
        raise UnexpectedArangoResponseException(
            text="Faulty response from server mode API command.",
            raw_response=response,
        )
    return ServerMode.coerce(mode)


class ServerAdmin:
    """
    An "admin" object to perform server-level tasks, such as creating, listing
    and dropping databases, reading the server version, license and health,
    and adjusting log levels and the server mode. This class has a
    synchronous interface.

    All requests are issued against the `_system` database, and carry the
    "admin additional headers" from the API options.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking the `get_admin` method of ArangoClient.

    Args:
        api_endpoint: the server endpoint, e.g. "http://localhost:8529".
        api_options: a complete specification of the API Options for this instance.

    Example:
        >>> from arangopy import ArangoClient
        >>> from arangopy.authentication import UsernamePasswordTokenProvider
        >>> my_client = ArangoClient(
        ...     token=UsernamePasswordTokenProvider("root", "s3cr3t"),
        ... )
        >>> my_admin = my_client.get_admin()
        >>> my_admin.list_databases()
        ['_system', 'products_db']

    Note:
        a user with access to the `_system` database is required for most
        of the operations of this class.
    """

    def __init__(
        self,
        *,
        api_endpoint: str,
        api_options: FullAPIOptions,
    ) -> None:
        self.api_options = api_options
        self.api_endpoint = api_endpoint.strip("/")
        self._commander_headers = {
            DEFAULT_AUTH_HEADER: self.api_options.token.get_auth_header(),
            **self.api_options.admin_additional_headers,
        }
        self._api_commander = self._get_api_commander()

    def __repr__(self) -> str:
        parts = [
            f'api_endpoint="{self.api_endpoint}"',
            f"api_options={self.api_options}",
        ]
        return f"{self.__class__.__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ServerAdmin):
            return all(
                [
                    self.api_endpoint == other.api_endpoint,
                    self.api_options == other.api_options,
                ]
            )
        else:
            return False

    def _get_api_commander(self) -> APICommander:
        base_path = self.api_options.url_options.database_path_template.format(
            database=SYSTEM_DATABASE_NAME
        )
        return APICommander(
            api_endpoint=self.api_endpoint,
            path=base_path,
            headers=self._commander_headers,
            callers=self.api_options.callers,
            redacted_header_names=self.api_options.redacted_header_names,
        )

    def _timeout_context(
        self,
        *,
        database_admin_timeout_ms: int | None,
        request_timeout_ms: int | None,
        timeout_ms: int | None,
    ) -> _TimeoutContext:
        _database_admin_timeout_ms, _da_label = _select_singlereq_timeout_da(
            timeout_options=self.api_options.timeout_options,
            database_admin_timeout_ms=database_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return _TimeoutContext(request_ms=_database_admin_timeout_ms, label=_da_label)

    def _copy(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> ServerAdmin:
        arg_api_options = APIOptions(
            token=token,
        )
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return ServerAdmin(
            api_endpoint=self.api_endpoint,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> ServerAdmin:
        """
        Create a clone of this ServerAdmin with some changed attributes.

        Args:
            token: an authentication token with enough permission to perform
                admin tasks, either a JWT string or a
                `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).
                In case the same setting is also provided as named parameter,
                the latter takes precedence.

        Returns:
            a new ServerAdmin instance.
        """

        return self._copy(
            token=token,
            api_options=api_options,
        )

    def get_database(
        self,
        name: str,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        spawn_api_options: APIOptions | UnsetType = _UNSET,
    ) -> Database:
        """
        Create a Database instance for a specific database. No request is issued.

        Args:
            name: the database name.
            token: if supplied, is passed to the Database instead of
                the one set for this object. Useful if one wants to work in
                a least-privilege manner, limiting the permissions for non-admin work.
            spawn_api_options: a specification - complete or partial - of the
                API Options to override the defaults inherited from this admin.

        Returns:
            A Database object.
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

    def list_databases(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> list[str]:
        """
        Get the names of all databases on the server.

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a list of database names, in no particular order.
        """

        logger.info("getting list of databases")
        ld_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_api/database",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting list of databases")
        return _database_names(ld_response, "listDatabases")

    def list_accessible_databases(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> list[str]:
        """
        Get the names of the databases the current user can access.

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a list of database names, in no particular order.
        """

        logger.info("getting list of accessible databases")
        ld_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_api/database/user",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting list of accessible databases")
        return _database_names(ld_response, "listAccessibleDatabases")

    def database_exists(
        self,
        name: str,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether a database exists, by reading its information.

        Args:
            name: the database name.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            True if the database exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            self.get_database(name).info(
                general_method_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    def create_database(
        self,
        name: str,
        *,
        options: CreateDatabaseOptions | dict[str, Any] | None = None,
        users: Iterable[DatabaseUser | dict[str, Any]] | None = None,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> Database:
        """
        Create a database.

        Args:
            name: the database name.
            options: the defaults for the collections of the new database,
                as a CreateDatabaseOptions object or an equivalent dictionary.
            users: the users to grant access to the new database, as
                DatabaseUser objects or equivalent dictionaries. If omitted,
                the server grants access to the current user.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a Database object for the new database.

        Raises:
            ConflictException: if a database with the same name exists already.

        Example:
            >>> new_db = my_admin.create_database(
            ...     "products_db",
            ...     options=CreateDatabaseOptions(replication_factor=2),
            ...     users=[DatabaseUser("app_user", password="s3cr3t")],
            ... )
        """

        cd_payload = _create_database_payload(name, options, users)
        logger.info(f"creating database '{name}'")
        self._api_commander.request(
            http_method=HttpMethod.POST,
            payload=cd_payload,
            additional_path="_api/database",
            success_codes=(HTTP_CREATED,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished creating database '{name}'")
        return self.get_database(name)

    def drop_database(
        self,
        name: str,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop a database, along with all its contents.

        Args:
            name: the database name.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Raises:
            NotFoundException: if the database does not exist.

        Note:
            Use with caution.
        """

        logger.info(f"dropping database '{name}'")
        self._api_commander.request(
            http_method=HttpMethod.DELETE,
            additional_path=f"_api/database/{quote(name, safe='')}",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished dropping database '{name}'")

    def version(
        self,
        *,
        details: bool = False,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> VersionInfo:
        """
        Get the server version.

        Args:
            details: whether to ask for additional details (platform, build, ...).
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a VersionInfo object.

        Example:
            >>> my_admin.version().version
            '3.12.1'
        """

        logger.info("getting server version")
        gv_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_api/version",
            request_params={"details": True} if details else {},
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting server version")
        return VersionInfo._from_dict(gv_response)

    def get_log_levels(
        self,
        *,
        server_id: str | None = None,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> LogLevels:
        """
        Get the log level of every log topic.

        Args:
            server_id: (cluster) the id of the server to query, when
                addressing a specific server through a coordinator.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a dictionary mapping each topic name to its level (e.g. "INFO").
        """

        logger.info("getting log levels")
        gl_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_admin/log/level",
            request_params={"serverId": server_id} if server_id else {},
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting log levels")
        return _strip_envelope(gl_response)

    def set_log_levels(
        self,
        levels: Mapping[str, LogLevel | str],
        *,
        server_id: str | None = None,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> LogLevels:
        """
        Set the log level of some log topics.

        Args:
            levels: a mapping from topic names to levels (LogLevel or strings).
            server_id: (cluster) the id of the server to adjust, when
                addressing a specific server through a coordinator.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            the resulting log levels of all topics.

        Example:
            >>> my_admin.set_log_levels({"requests": LogLevel.DEBUG})["requests"]
            'DEBUG'
        """

        sl_payload = _log_levels_payload(levels)
        logger.info("setting log levels")
        sl_response = self._api_commander.request(
            http_method=HttpMethod.PUT,
            payload=sl_payload,
            additional_path="_admin/log/level",
            request_params={"serverId": server_id} if server_id else {},
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished setting log levels")
        return _strip_envelope(sl_response)

    def get_license(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> LicenseInfo:
        """
        Get information on the license of the deployment.

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a LicenseInfo object.
        """

        logger.info("getting license")
        gl_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_admin/license",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting license")
        return LicenseInfo._from_dict(gl_response)

    def health(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ClusterHealth:
        """
        Get the health of the cluster (coordinators and active fail-over only).

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a ClusterHealth object.

        Example:
            >>> for server_id, server in my_admin.health().health.items():
            ...     print(server.short_name, server.status)
            ...
            Coordinator0001 GOOD
            DBServer0001 GOOD
        """

        logger.info("getting cluster health")
        gh_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_admin/cluster/health",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting cluster health")
        return ClusterHealth._from_dict(gh_response)

    def server_mode(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ServerMode:
        """
        Get the current server mode, "default" or "readonly".

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a ServerMode value.
        """

        logger.info("getting server mode")
        gm_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_admin/server/mode",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting server mode")
        return _server_mode(gm_response)

    def set_server_mode(
        self,
        mode: ServerMode | str,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ServerMode:
        """
        Set the server mode.

        Args:
            mode: the new mode, `ServerMode.DEFAULT` or `ServerMode.READONLY`.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            the resulting server mode.
        """

        _mode = ServerMode.coerce(mode)
        logger.info(f"setting server mode to '{_mode.value}'")
        sm_response = self._api_commander.request(
            http_method=HttpMethod.PUT,
            payload={"mode": _mode.value},
            additional_path="_admin/server/mode",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished setting server mode to '{_mode.value}'")
        return _server_mode(sm_response)


class AsyncServerAdmin:
    """
    An "admin" object to perform server-level tasks, such as creating, listing
    and dropping databases, reading the server version, license and health,
    and adjusting log levels and the server mode. This class has an
    asynchronous interface.

    All requests are issued against the `_system` database, and carry the
    "admin additional headers" from the API options.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking the `get_async_admin` method of ArangoClient.

    Args:
        api_endpoint: the server endpoint, e.g. "http://localhost:8529".
        api_options: a complete specification of the API Options for this instance.

    Example:
        >>> my_async_admin = my_client.get_async_admin()
        >>> asyncio.run(my_async_admin.list_databases())
        ['_system', 'products_db']
    """

    def __init__(
        self,
        *,
        api_endpoint: str,
        api_options: FullAPIOptions,
    ) -> None:
        self.api_options = api_options
        self.api_endpoint = api_endpoint.strip("/")
        self._commander_headers = {
            DEFAULT_AUTH_HEADER: self.api_options.token.get_auth_header(),
            **self.api_options.admin_additional_headers,
        }
        self._api_commander = self._get_api_commander()

    def __repr__(self) -> str:
        parts = [
            f'api_endpoint="{self.api_endpoint}"',
            f"api_options={self.api_options}",
        ]
        return f"{self.__class__.__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AsyncServerAdmin):
            return all(
                [
                    self.api_endpoint == other.api_endpoint,
                    self.api_options == other.api_options,
                ]
            )
        else:
            return False

    async def __aenter__(self) -> AsyncServerAdmin:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        await self._api_commander.__aexit__(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback=traceback,
        )

    def _get_api_commander(self) -> APICommander:
        base_path = self.api_options.url_options.database_path_template.format(
            database=SYSTEM_DATABASE_NAME
        )
        return APICommander(
            api_endpoint=self.api_endpoint,
            path=base_path,
            headers=self._commander_headers,
            callers=self.api_options.callers,
            redacted_header_names=self.api_options.redacted_header_names,
        )

    def _timeout_context(
        self,
        *,
        database_admin_timeout_ms: int | None,
        request_timeout_ms: int | None,
        timeout_ms: int | None,
    ) -> _TimeoutContext:
        _database_admin_timeout_ms, _da_label = _select_singlereq_timeout_da(
            timeout_options=self.api_options.timeout_options,
            database_admin_timeout_ms=database_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return _TimeoutContext(request_ms=_database_admin_timeout_ms, label=_da_label)

    def _copy(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncServerAdmin:
        arg_api_options = APIOptions(
            token=token,
        )
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return AsyncServerAdmin(
            api_endpoint=self.api_endpoint,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncServerAdmin:
        """
        Create a clone of this AsyncServerAdmin with some changed attributes.

        Args:
            token: an authentication token with enough permission to perform
                admin tasks, either a JWT string or a
                `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).
                In case the same setting is also provided as named parameter,
                the latter takes precedence.

        Returns:
            a new AsyncServerAdmin instance.
        """

        return self._copy(
            token=token,
            api_options=api_options,
        )

    def get_database(
        self,
        name: str,
        *,
        token: str | TokenProvider | UnsetType = _UNSET,
        spawn_api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncDatabase:
        """
        Create an AsyncDatabase instance for a specific database.
        No request is issued.

        Args:
            name: the database name.
            token: if supplied, is passed to the AsyncDatabase instead of
                the one set for this object.
            spawn_api_options: a specification - complete or partial - of the
                API Options to override the defaults inherited from this admin.

        Returns:
            An AsyncDatabase object.
        """

        # lazy importing here to avoid circular dependency
        from arangopy.data.database import AsyncDatabase

        resulting_api_options = self.api_options.with_override(
            spawn_api_options,
        ).with_override(
            APIOptions(
                token=token,
            ),
        )
        return AsyncDatabase(
            api_endpoint=self.api_endpoint,
            name=name,
            api_options=resulting_api_options,
        )

    async def list_databases(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> list[str]:
        """
        Get the names of all databases on the server.

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a list of database names, in no particular order.
        """

        logger.info("getting list of databases, async")
        ld_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_api/database",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting list of databases, async")
        return _database_names(ld_response, "listDatabases")

    async def list_accessible_databases(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> list[str]:
        """
        Get the names of the databases the current user can access.

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a list of database names, in no particular order.
        """

        logger.info("getting list of accessible databases, async")
        ld_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_api/database/user",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting list of accessible databases, async")
        return _database_names(ld_response, "listAccessibleDatabases")

    async def database_exists(
        self,
        name: str,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether a database exists, by reading its information.

        Args:
            name: the database name.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            True if the database exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        async with self.get_database(name) as checked_database:
            try:
                await checked_database.info(
                    general_method_timeout_ms=database_admin_timeout_ms,
                    request_timeout_ms=request_timeout_ms,
                    timeout_ms=timeout_ms,
                )
                return True
            except ArangoHttpException as exc:
                if exc.is_not_found():
                    return False
                raise

    async def create_database(
        self,
        name: str,
        *,
        options: CreateDatabaseOptions | dict[str, Any] | None = None,
        users: Iterable[DatabaseUser | dict[str, Any]] | None = None,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncDatabase:
        """
        Create a database.

        Args:
            name: the database name.
            options: the defaults for the collections of the new database,
                as a CreateDatabaseOptions object or an equivalent dictionary.
            users: the users to grant access to the new database, as
                DatabaseUser objects or equivalent dictionaries.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            an AsyncDatabase object for the new database.

        Raises:
            ConflictException: if a database with the same name exists already.
        """

        cd_payload = _create_database_payload(name, options, users)
        logger.info(f"creating database '{name}', async")
        await self._api_commander.async_request(
            http_method=HttpMethod.POST,
            payload=cd_payload,
            additional_path="_api/database",
            success_codes=(HTTP_CREATED,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished creating database '{name}', async")
        return self.get_database(name)

    async def drop_database(
        self,
        name: str,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop a database, along with all its contents.

        Args:
            name: the database name.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Raises:
            NotFoundException: if the database does not exist.
        """

        logger.info(f"dropping database '{name}', async")
        await self._api_commander.async_request(
            http_method=HttpMethod.DELETE,
            additional_path=f"_api/database/{quote(name, safe='')}",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished dropping database '{name}', async")

    async def version(
        self,
        *,
        details: bool = False,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> VersionInfo:
        """
        Get the server version.

        Args:
            details: whether to ask for additional details (platform, build, ...).
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a VersionInfo object.
        """

        logger.info("getting server version, async")
        gv_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_api/version",
            request_params={"details": True} if details else {},
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting server version, async")
        return VersionInfo._from_dict(gv_response)

    async def get_log_levels(
        self,
        *,
        server_id: str | None = None,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> LogLevels:
        """
        Get the log level of every log topic.

        Args:
            server_id: (cluster) the id of the server to query.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a dictionary mapping each topic name to its level (e.g. "INFO").
        """

        logger.info("getting log levels, async")
        gl_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_admin/log/level",
            request_params={"serverId": server_id} if server_id else {},
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting log levels, async")
        return _strip_envelope(gl_response)

    async def set_log_levels(
        self,
        levels: Mapping[str, LogLevel | str],
        *,
        server_id: str | None = None,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> LogLevels:
        """
        Set the log level of some log topics.

        Args:
            levels: a mapping from topic names to levels (LogLevel or strings).
            server_id: (cluster) the id of the server to adjust.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            the resulting log levels of all topics.
        """

        sl_payload = _log_levels_payload(levels)
        logger.info("setting log levels, async")
        sl_response = await self._api_commander.async_request(
            http_method=HttpMethod.PUT,
            payload=sl_payload,
            additional_path="_admin/log/level",
            request_params={"serverId": server_id} if server_id else {},
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished setting log levels, async")
        return _strip_envelope(sl_response)

    async def get_license(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> LicenseInfo:
        """
        Get information on the license of the deployment.

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a LicenseInfo object.
        """

        logger.info("getting license, async")
        gl_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_admin/license",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting license, async")
        return LicenseInfo._from_dict(gl_response)

    async def health(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ClusterHealth:
        """
        Get the health of the cluster (coordinators and active fail-over only).

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a ClusterHealth object.
        """

        logger.info("getting cluster health, async")
        gh_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_admin/cluster/health",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting cluster health, async")
        return ClusterHealth._from_dict(gh_response)

    async def server_mode(
        self,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ServerMode:
        """
        Get the current server mode, "default" or "readonly".

        Args:
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            a ServerMode value.
        """

        logger.info("getting server mode, async")
        gm_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_admin/server/mode",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info("finished getting server mode, async")
        return _server_mode(gm_response)

    async def set_server_mode(
        self,
        mode: ServerMode | str,
        *,
        database_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ServerMode:
        """
        Set the server mode.

        Args:
            mode: the new mode, `ServerMode.DEFAULT` or `ServerMode.READONLY`.
            database_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `database_admin_timeout_ms`.
            timeout_ms: an alias for `database_admin_timeout_ms`.

        Returns:
            the resulting server mode.
        """

        _mode = ServerMode.coerce(mode)
        logger.info(f"setting server mode to '{_mode.value}', async")
        sm_response = await self._api_commander.async_request(
            http_method=HttpMethod.PUT,
            payload={"mode": _mode.value},
            additional_path="_admin/server/mode",
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                database_admin_timeout_ms=database_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished setting server mode to '{_mode.value}', async")
        return _server_mode(sm_response)
