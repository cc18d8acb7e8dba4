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
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from arangopy.data.info.collection_descriptor import (
    CollectionDescriptor,
    CollectionProperties,
)
from arangopy.exceptions import (
    UnexpectedArangoResponseException,
    _select_singlereq_timeout_ca,
    _select_singlereq_timeout_gm,
    _TimeoutContext,
)
from arangopy.settings.defaults import HTTP_OK
from arangopy.utils.api_commander import APICommander
from arangopy.utils.api_options import APIOptions, FullAPIOptions
from arangopy.utils.request_tools import HttpMethod
from arangopy.utils.unset import _UNSET, UnsetType

if TYPE_CHECKING:
    from arangopy.data.database import AsyncDatabase, Database


logger = logging.getLogger(__name__)


def _parse_count(count_response: dict[str, Any]) -> int:
    count = count_response.get("count")
    if not isinstance(count, int):
        raise UnexpectedArangoResponseException(
            text="Faulty response from collection count API command.",
            raw_response=count_response,
        )
    return count


class Collection:
    """
    An ArangoDB collection, with a synchronous interface. This object exposes
    the management of the collection (its properties, count, truncation),
    not the documents it contains.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking methods such as `get_collection` of Database,
    wherefrom the Collection inherits its API options such as authentication
    token and API endpoint.

    Args:
        database: a Database object, instantiated earlier. This represents
            the database the collection belongs to.
        name: the collection name.
        api_options: a complete specification of the API Options for this instance.

    Example:
        >>> my_coll = my_db.get_collection("products")
        >>> my_coll.count()
        1250

    Note:
        creating an instance of Collection does not trigger actual creation
        of the collection on the database. The latter should have been created
        beforehand, e.g. through the `create_collection` method of a Database.
    """

    def __init__(
        self,
        *,
        database: Database,
        name: str,
        api_options: FullAPIOptions,
    ) -> None:
        self.api_options = api_options
        self._name = name
        self._database = database._copy(api_options=self.api_options)
        self._api_commander = self._get_api_commander()

    def __repr__(self) -> str:
        _db_desc = f'database.name="{self.database.name}"'
        return (
            f'{self.__class__.__name__}(name="{self.name}", '
            f"{_db_desc}, api_options={self.api_options})"
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Collection):
            return all(
                [
                    self._name == other._name,
                    self._database == other._database,
                    self.api_options == other.api_options,
                ]
            )
        else:
            return False

    def __call__(self, *pargs: Any, **kwargs: Any) -> None:
        raise TypeError(
            f"'{self.__class__.__name__}' object is not callable. If you "
            f"meant to call the '{self.name}' method on a "
            f"'{self.database.__class__.__name__}' object "
            "it is failing because no such method exists."
        )

    def _get_api_commander(self) -> APICommander:
        """Instantiate a new APICommander based on the properties of this class."""

        base_path = "/".join(
            [
                self._database._database_path,
                "_api/collection",
                quote(self._name, safe=""),
            ]
        )
        return APICommander(
            api_endpoint=self._database.api_endpoint,
            path=base_path,
            headers=self._database._commander_headers,
            callers=self.api_options.callers,
            redacted_header_names=self.api_options.redacted_header_names,
        )

    def _copy(
        self,
        *,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> Collection:
        final_api_options = self.api_options.with_override(api_options)
        return Collection(
            database=self.database,
            name=self.name,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> Collection:
        """
        Create a clone of this collection with some changed attributes.

        Args:
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).

        Returns:
            a new Collection instance.

        Example:
            >>> impatient_coll = my_coll.with_options(
            ...     api_options=APIOptions(
            ...         timeout_options=TimeoutOptions(request_timeout_ms=500),
            ...     ),
            ... )
        """

        return self._copy(api_options=api_options)

    @property
    def database(self) -> Database:
        """
        a Database object, the database this collection belongs to.

        Example:
            >>> my_coll.database.name
            'the_db'
        """

        return self._database

    @property
    def name(self) -> str:
        """
        The name of this collection.

        Example:
            >>> my_coll.name
            'my_v_collection'
        """

        return self._name

    def info(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> CollectionDescriptor:
        """
        Get the short description of this collection (id, type, status).

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a CollectionDescriptor.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getCollection('{self.name}')")
        gc_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished getCollection('{self.name}')")
        return CollectionDescriptor._from_dict(gc_response)

    def properties(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> CollectionProperties:
        """
        Read the properties of this collection.

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a CollectionProperties object.

        Example:
            >>> my_coll.properties().wait_for_sync
            False
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getCollectionProperties('{self.name}')")
        gp_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="properties",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished getCollectionProperties('{self.name}')")
        return CollectionProperties._from_dict(gp_response)

    def set_properties(
        self,
        properties: CollectionProperties | dict[str, Any],
        *,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> CollectionProperties:
        """
        Change the properties of this collection. Only the properties that
        can be altered after creation are taken into account by the server.

        Args:
            properties: a CollectionProperties object, or an equivalent dictionary.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            the resulting properties of the collection, as returned by the server.
        """

        _properties = CollectionProperties.coerce(properties)
        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"setCollectionProperties('{self.name}')")
        sp_response = self._api_commander.request(
            http_method=HttpMethod.PUT,
            payload=_properties.as_dict(),
            additional_path="properties",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished setCollectionProperties('{self.name}')")
        return CollectionProperties._from_dict(sp_response)

    def count(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> int:
        """
        Count the documents in the collection.

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            the number of documents in the collection.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"countDocuments('{self.name}')")
        cd_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="count",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished countDocuments('{self.name}')")
        return _parse_count(cd_response)

    def truncate(
        self,
        *,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Remove all documents from the collection, keeping the collection
        itself (and its indexes).

        Args:
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Note:
            Use with caution.
        """

        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"truncateCollection('{self.name}')")
        self._api_commander.request(
            http_method=HttpMethod.PUT,
            additional_path="truncate",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished truncateCollection('{self.name}')")

    def drop(
        self,
        *,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop the collection, i.e. delete it from the database along with
        all the documents it contains.

        Args:
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Note:
            Once the method succeeds, methods on this object can still be invoked:
            however, this hardly makes sense as the underlying actual collection
            is no more.
        """

        logger.info(f"dropping collection '{self.name}' (self)")
        self.database.drop_collection(
            self.name,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"finished dropping collection '{self.name}' (self)")


class AsyncCollection:
    """
    An ArangoDB collection, with an asynchronous interface. This object exposes
    the management of the collection (its properties, count, truncation),
    not the documents it contains.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking methods such as `get_collection` of AsyncDatabase.

    Args:
        database: an AsyncDatabase object, the database the collection belongs to.
        name: the collection name.
        api_options: a complete specification of the API Options for this instance.

    Example:
        >>> my_async_coll = my_async_db.get_collection("products")
        >>> asyncio.run(my_async_coll.count())
        1250
    """

    def __init__(
        self,
        *,
        database: AsyncDatabase,
        name: str,
        api_options: FullAPIOptions,
    ) -> None:
        self.api_options = api_options
        self._name = name
        self._database = database._copy(api_options=self.api_options)
        self._api_commander = self._get_api_commander()

    def __repr__(self) -> str:
        _db_desc = f'database.name="{self.database.name}"'
        return (
            f'{self.__class__.__name__}(name="{self.name}", '
            f"{_db_desc}, api_options={self.api_options})"
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AsyncCollection):
            return all(
                [
                    self._name == other._name,
                    self._database == other._database,
                    self.api_options == other.api_options,
                ]
            )
        else:
            return False

    def __call__(self, *pargs: Any, **kwargs: Any) -> None:
        raise TypeError(
            f"'{self.__class__.__name__}' object is not callable. If you "
            f"meant to call the '{self.name}' method on a "
            f"'{self.database.__class__.__name__}' object "
            "it is failing because no such method exists."
        )

    def _get_api_commander(self) -> APICommander:
        """Instantiate a new APICommander based on the properties of this class."""

        base_path = "/".join(
            [
                self._database._database_path,
                "_api/collection",
                quote(self._name, safe=""),
            ]
        )
        return APICommander(
            api_endpoint=self._database.api_endpoint,
            path=base_path,
            headers=self._database._commander_headers,
            callers=self.api_options.callers,
            redacted_header_names=self.api_options.redacted_header_names,
        )

    def _copy(
        self,
        *,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncCollection:
        final_api_options = self.api_options.with_override(api_options)
        return AsyncCollection(
            database=self.database,
            name=self.name,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncCollection:
        """
        Create a clone of this collection with some changed attributes.

        Args:
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).

        Returns:
            a new AsyncCollection instance.
        """

        return self._copy(api_options=api_options)

    @property
    def database(self) -> AsyncDatabase:
        """an AsyncDatabase object, the database this collection belongs to."""

        return self._database

    @property
    def name(self) -> str:
        """The name of this collection."""

        return self._name

    async def info(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> CollectionDescriptor:
        """
        Get the short description of this collection (id, type, status).

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a CollectionDescriptor.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getCollection('{self.name}'), async")
        gc_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished getCollection('{self.name}'), async")
        return CollectionDescriptor._from_dict(gc_response)

    async def properties(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> CollectionProperties:
        """
        Read the properties of this collection.

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a CollectionProperties object.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getCollectionProperties('{self.name}'), async")
        gp_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="properties",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished getCollectionProperties('{self.name}'), async")
        return CollectionProperties._from_dict(gp_response)

    async def set_properties(
        self,
        properties: CollectionProperties | dict[str, Any],
        *,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> CollectionProperties:
        """
        Change the properties of this collection. Only the properties that
        can be altered after creation are taken into account by the server.

        Args:
            properties: a CollectionProperties object, or an equivalent dictionary.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            the resulting properties of the collection, as returned by the server.
        """

        _properties = CollectionProperties.coerce(properties)
        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"setCollectionProperties('{self.name}'), async")
        sp_response = await self._api_commander.async_request(
            http_method=HttpMethod.PUT,
            payload=_properties.as_dict(),
            additional_path="properties",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished setCollectionProperties('{self.name}'), async")
        return CollectionProperties._from_dict(sp_response)

    async def count(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> int:
        """
        Count the documents in the collection.

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            the number of documents in the collection.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"countDocuments('{self.name}'), async")
        cd_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="count",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished countDocuments('{self.name}'), async")
        return _parse_count(cd_response)

    async def truncate(
        self,
        *,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Remove all documents from the collection, keeping the collection
        itself (and its indexes).

        Args:
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.
        """

        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"truncateCollection('{self.name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.PUT,
            additional_path="truncate",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished truncateCollection('{self.name}'), async")

    async def drop(
        self,
        *,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop the collection, i.e. delete it from the database along with
        all the documents it contains.

        Args:
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.
        """

        logger.info(f"dropping collection '{self.name}' (self), async")
        await self.database.drop_collection(
            self.name,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"finished dropping collection '{self.name}' (self), async")
