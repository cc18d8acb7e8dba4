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
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from arangopy.constants import ViewType
from arangopy.data.collection import AsyncCollection, Collection
from arangopy.data.cursors.listing_cursor import AsyncListingCursor, ListingCursor
from arangopy.data.info.analyzer_descriptor import AnalyzerDefinition
from arangopy.data.info.collection_descriptor import (
    CollectionDescriptor,
    CollectionProperties,
)
from arangopy.data.info.database_info import DatabaseInfo
from arangopy.data.info.view_descriptor import (
    ArangoSearchViewProperties,
    SearchAliasViewProperties,
    ViewDescriptor,
)
from arangopy.data.view import (
    ASYNC_VIEW_CLASSES,
    VIEW_CLASSES,
    AnyAsyncView,
    AnyView,
    AsyncArangoSearchView,
    AsyncSearchAliasView,
    ArangoSearchView,
    SearchAliasView,
)
from arangopy.exceptions import (
    ArangoHttpException,
    UnexpectedArangoResponseException,
    _select_singlereq_timeout_ca,
    _select_singlereq_timeout_gm,
    _select_singlereq_timeout_va,
    _TimeoutContext,
)
from arangopy.settings.defaults import (
    DEFAULT_AUTH_HEADER,
    HTTP_CREATED,
    HTTP_OK,
)
from arangopy.utils.api_commander import APICommander
from arangopy.utils.api_options import APIOptions, FullAPIOptions
from arangopy.utils.request_tools import HttpMethod
from arangopy.utils.unset import _UNSET, UnsetType

if TYPE_CHECKING:
    from arangopy.authentication import TokenProvider


logger = logging.getLogger(__name__)


def _result_list(response: dict[str, Any], command_name: str) -> list[Any]:
    result = response.get("result")
    if not isinstance(result, list):
        raise UnexpectedArangoResponseException(
            text=f"Faulty response from {command_name} API command.",
            raw_response=response,
        )
    return result


def _collection_creation_payload(
    name: str,
    properties: CollectionProperties | dict[str, Any] | None,
    collection_type: int | None,
) -> dict[str, Any]:
    _properties = (
        CollectionProperties()
        if properties is None
        else CollectionProperties.coerce(properties)
    )
    return {
        "name": name,
        **({} if collection_type is None else {"type": collection_type}),
        **_properties.as_dict(),
    }


def _view_creation_payload(
    name: str,
    view_type: ViewType,
    properties: ArangoSearchViewProperties | SearchAliasViewProperties,
) -> dict[str, Any]:
    return {
        "name": name,
        "type": view_type.value,
        **properties.as_dict(),
    }


def _analyzer_path(name: str | None = None) -> str:
    if name is None:
        return "_api/analyzer"
    return f"_api/analyzer/{quote(name, safe='')}"


def _view_path(name: str | None = None) -> str:
    if name is None:
        return "_api/view"
    return f"_api/view/{quote(name, safe='')}"


def _collection_path(name: str | None = None) -> str:
    if name is None:
        return "_api/collection"
    return f"_api/collection/{quote(name, safe='')}"


class Database:
    """
    An ArangoDB database. This is the object for managing the collections,
    the views and the analyzers of a database, and for obtaining Collection
    and view objects themselves. This class has a synchronous interface.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking methods such as `get_database`
    of ArangoClient.

    All requests of a Database (and of the view objects spawned from it)
    go through a single APICommander, whose base URL is the server endpoint
    followed by the database path, e.g. "http://localhost:8529/_db/mydb".

    Args:
        api_endpoint: the server endpoint, e.g. "http://localhost:8529".
        name: the database name.
        api_options: a complete specification of the API Options for this instance.

    Example:
        >>> from arangopy import ArangoClient
        >>> my_client = ArangoClient(token="eyJhbGciOi...")
        >>> my_db = my_client.get_database("products_db")

    Note:
        creating an instance of Database does not trigger actual creation
        of the database itself, which should exist beforehand. To create databases,
        see the ServerAdmin class.
    """

    def __init__(
        self,
        *,
        api_endpoint: str,
        name: str,
        api_options: FullAPIOptions,
    ) -> None:
        self.api_options = api_options
        self.api_endpoint = api_endpoint.strip("/")
        self._name = name
        self._database_path = self.api_options.url_options.database_path_template.format(
            database=quote(name, safe="")
        )
        self._commander_headers = {
            DEFAULT_AUTH_HEADER: self.api_options.token.get_auth_header(),
            **self.api_options.database_additional_headers,
        }
        self._api_commander = self._get_api_commander()

    def __getitem__(self, collection_name: str) -> Collection:
        return self.get_collection(name=collection_name)

    def __repr__(self) -> str:
        ep_desc = f'api_endpoint="{self.api_endpoint}"'
        name_desc = f'name="{self.name}"'
        api_options_desc = f"api_options={self.api_options}"
        return f"{self.__class__.__name__}({ep_desc}, {name_desc}, {api_options_desc})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Database):
            return all(
                [
                    self.api_endpoint == other.api_endpoint,
                    self.name == other.name,
                    self.api_options == other.api_options,
                ]
            )
        else:
            return False

    def _get_api_commander(self) -> APICommander:
        """Instantiate a new APICommander based on the properties of this class."""

        return APICommander(
            api_endpoint=self.api_endpoint,
            path=self._database_path,
            headers=self._commander_headers,
            callers=self.api_options.callers,
            redacted_header_names=self.api_options.redacted_header_names,
        )

    def _copy(
        self,
        *,
        name: str | None = None,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> Database:
        arg_api_options = APIOptions(
            token=token,
        )
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return Database(
            api_endpoint=self.api_endpoint,
            name=name or self.name,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        name: str | None = None,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> Database:
        """
        Create a clone of this database with some changed attributes.

        Args:
            name: the name of another database to target with the clone.
            token: an authentication token for the server, either a JWT string
                or a `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).
                In case the same setting is also provided as named parameter,
                the latter takes precedence.

        Returns:
            a new `Database` instance.

        Example:
            >>> my_db_2 = my_db.with_options(
            ...     name="the_other_db",
            ...     token=UsernamePasswordTokenProvider("root", "s3cr3t"),
            ... )
        """

        return self._copy(
            name=name,
            token=token,
            api_options=api_options,
        )

    def to_async(
        self,
        *,
        name: str | None = None,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncDatabase:
        """
        Create an AsyncDatabase from this one. Save for the arguments
        explicitly provided as overrides, everything else is kept identical
        to this database in the copy.

        Args:
            name: the name of another database to target with the result.
            token: an authentication token for the server, either a JWT string
                or a `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the result, in the form of
                an APIOptions instance (where one can set just the needed attributes).

        Returns:
            the new copy, an `AsyncDatabase` instance.

        Example:
            >>> my_async_db = my_db.to_async()
            >>> asyncio.run(my_async_db.list_collection_names())
        """

        arg_api_options = APIOptions(token=token)
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return AsyncDatabase(
            api_endpoint=self.api_endpoint,
            name=name or self.name,
            api_options=final_api_options,
        )

    @property
    def name(self) -> str:
        """
        The name of this database.

        Example:
            >>> my_db.name
            'products_db'
        """

        return self._name

    def info(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> DatabaseInfo:
        """
        Get the information on this database (id, path, cluster defaults).

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a DatabaseInfo object.

        Example:
            >>> my_db.info().is_system
            False
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info("getting database info")
        gd_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path="_api/database/current",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info("finished getting database info")
        return DatabaseInfo._from_dict(gd_response)

    # Collections

    def get_collection(
        self,
        name: str,
        *,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> Collection:
        """
        Spawn a `Collection` object instance representing a collection
        on this database. No request is issued.

        Args:
            name: the name of the collection.
            api_options: any additional options to set for the resulting collection,
                in the form of an APIOptions instance.

        Returns:
            a `Collection` instance, representing the desired collection
            (but without any form of validation).

        Example:
            >>> my_col = my_db.get_collection("my_collection")
            >>> my_col.count()
            0
        """

        return Collection(
            database=self,
            name=name,
            api_options=self.api_options.with_override(api_options),
        )

    def collection(
        self,
        name: str,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> Collection:
        """
        Return a `Collection` object for an existing collection, after
        checking that the collection exists.

        Args:
            name: the name of the collection.
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a `Collection` instance.

        Raises:
            NotFoundException: if the collection does not exist.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getCollection('{name}')")
        self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path=_collection_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished getCollection('{name}')")
        return self.get_collection(name)

    def collection_exists(
        self,
        name: str,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether a collection exists in this database.

        Args:
            name: the name of the collection.
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            True if the collection exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            self.collection(
                name,
                general_method_timeout_ms=general_method_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    def create_collection(
        self,
        name: str,
        *,
        properties: CollectionProperties | dict[str, Any] | None = None,
        collection_type: int | None = None,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> Collection:
        """
        Creates a collection on the database and return the Collection
        instance that represents it.

        Args:
            name: the name of the collection.
            properties: the settings of the collection, as a CollectionProperties
                object or an equivalent dictionary.
            collection_type: `CollectionType.DOCUMENT` (the default)
                or `CollectionType.EDGE`.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            a `Collection` instance, representing the newly-created collection.

        Raises:
            ConflictException: if a collection with the same name exists already.

        Example:
            >>> edges = my_db.create_collection(
            ...     "follows",
            ...     collection_type=CollectionType.EDGE,
            ...     properties=CollectionProperties(wait_for_sync=True),
            ... )
        """

        cc_payload = _collection_creation_payload(name, properties, collection_type)
        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"createCollection('{name}')")
        self._api_commander.request(
            http_method=HttpMethod.POST,
            payload=cc_payload,
            additional_path=_collection_path(),
            success_codes=(HTTP_OK, HTTP_CREATED),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished createCollection('{name}')")
        return self.get_collection(name)

    def drop_collection(
        self,
        name: str,
        *,
        is_system: bool = False,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop a collection from the database, along with all documents therein.

        Args:
            name: the name of the collection to drop.
            is_system: this must be True to drop a system collection.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Example:
            >>> my_db.list_collection_names()
            ['a_collection', 'my_v_col', 'another_col']
            >>> my_db.drop_collection("my_v_col")
            >>> my_db.list_collection_names()
            ['a_collection', 'another_col']
        """

        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"deleteCollection('{name}')")
        self._api_commander.request(
            http_method=HttpMethod.DELETE,
            additional_path=_collection_path(name),
            request_params={"isSystem": True} if is_system else {},
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished deleteCollection('{name}')")

    def list_collections(
        self,
        *,
        exclude_system: bool = True,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ListingCursor[CollectionDescriptor]:
        """
        List the collections of this database. The request is issued lazily,
        when the returned cursor is first read from.

        Args:
            exclude_system: whether to leave out the system collections.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            a ListingCursor yielding CollectionDescriptor objects.

        Example:
            >>> for coll_desc in my_db.list_collections():
            ...     print(coll_desc)
            ...
            CollectionDescriptor(name='products', collection_type=2)
        """

        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        timeout_context = _TimeoutContext(
            request_ms=_collection_admin_timeout_ms, label=_ca_label
        )

        def _fetch_page(page_state: str | None) -> tuple[list[Any], str | None]:
            logger.info("listCollections")
            lc_response = self._api_commander.request(
                http_method=HttpMethod.GET,
                additional_path=_collection_path(),
                request_params={"excludeSystem": exclude_system},
                success_codes=(HTTP_OK,),
                timeout_context=timeout_context,
            )
            logger.info("finished listCollections")
            return _result_list(lc_response, "listCollections"), None

        return ListingCursor(
            _fetch_page,
            mapper=CollectionDescriptor._from_dict,
            description=f"collections of '{self.name}'",
        )

    def list_collection_names(
        self,
        *,
        exclude_system: bool = True,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> list[str]:
        """
        List the names of the collections of this database.

        Args:
            exclude_system: whether to leave out the system collections.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            a list of the collection names as strings, in no particular order.
        """

        return [
            coll_desc.name
            for coll_desc in self.list_collections(
                exclude_system=exclude_system,
                collection_admin_timeout_ms=collection_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
        ]

    # Views

    def view(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AnyView:
        """
        Return the object for an existing view, of the class matching
        the view type (ArangoSearchView or SearchAliasView).

        Args:
            name: the name of the view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an ArangoSearchView or a SearchAliasView.

        Raises:
            NotFoundException: if the view does not exist.

        Example:
            >>> my_db.view("products_view")
            ArangoSearchView(name="products_view", database="products_db")
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getView('{name}')")
        gv_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path=_view_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished getView('{name}')")
        return self._view_from_descriptor(ViewDescriptor._from_dict(gv_response))

    def _view_from_descriptor(self, view_descriptor: ViewDescriptor) -> AnyView:
        view_class = VIEW_CLASSES[view_descriptor.view_type]
        return view_class(database=self, name=view_descriptor.name)  # type: ignore[return-value]

    def view_exists(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether a view exists in this database.

        Args:
            name: the name of the view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            True if the view exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            self.view(
                name,
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    def list_views(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ListingCursor[AnyView]:
        """
        List the views of this database. The request is issued lazily,
        when the returned cursor is first read from.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a ListingCursor yielding view objects (ArangoSearchView or
            SearchAliasView according to the type of each view).

        Example:
            >>> cursor = my_db.list_views()
            >>> cursor.read()
            ArangoSearchView(name="products_view", database="products_db")
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        timeout_context = _TimeoutContext(
            request_ms=_view_admin_timeout_ms, label=_va_label
        )

        def _fetch_page(page_state: str | None) -> tuple[list[Any], str | None]:
            logger.info("listViews")
            lv_response = self._api_commander.request(
                http_method=HttpMethod.GET,
                additional_path=_view_path(),
                success_codes=(HTTP_OK,),
                timeout_context=timeout_context,
            )
            logger.info("finished listViews")
            return _result_list(lv_response, "listViews"), None

        return ListingCursor(
            _fetch_page,
            mapper=lambda raw_view: self._view_from_descriptor(
                ViewDescriptor._from_dict(raw_view)
            ),
            description=f"views of '{self.name}'",
        )

    def create_arangosearch_view(
        self,
        name: str,
        properties: ArangoSearchViewProperties | dict[str, Any] | None = None,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ArangoSearchView:
        """
        Create an ArangoSearch view on this database.

        Args:
            name: the name of the view.
            properties: the view properties, as an ArangoSearchViewProperties
                object or an equivalent dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an ArangoSearchView object for the new view.

        Raises:
            ConflictException: if a view with the same name exists already.

        Example:
            >>> my_view = my_db.create_arangosearch_view(
            ...     "products_view",
            ...     ArangoSearchViewProperties(
            ...         links={
            ...             "products": ArangoSearchLinkProperties(
            ...                 analyzers=["text_en"],
            ...                 include_all_fields=True,
            ...             ),
            ...         },
            ...     ),
            ... )
        """

        _properties = (
            ArangoSearchViewProperties()
            if properties is None
            else ArangoSearchViewProperties.coerce(properties)
        )
        self._create_view(
            _view_creation_payload(name, ViewType.ARANGOSEARCH, _properties),
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return ArangoSearchView(database=self, name=name)

    def create_search_alias_view(
        self,
        name: str,
        properties: SearchAliasViewProperties | dict[str, Any] | None = None,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> SearchAliasView:
        """
        Create a search-alias view on this database.

        Args:
            name: the name of the view.
            properties: the view properties, as a SearchAliasViewProperties
                object or an equivalent dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a SearchAliasView object for the new view.

        Raises:
            ConflictException: if a view with the same name exists already.
        """

        _properties = (
            SearchAliasViewProperties()
            if properties is None
            else SearchAliasViewProperties.coerce(properties)
        )
        self._create_view(
            _view_creation_payload(name, ViewType.SEARCH_ALIAS, _properties),
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return SearchAliasView(database=self, name=name)

    def _create_view(
        self,
        cv_payload: dict[str, Any],
        *,
        view_admin_timeout_ms: int | None,
        request_timeout_ms: int | None,
        timeout_ms: int | None,
    ) -> None:
        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"createView('{cv_payload['name']}')")
        self._api_commander.request(
            http_method=HttpMethod.POST,
            payload=cv_payload,
            additional_path=_view_path(),
            success_codes=(HTTP_CREATED,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished createView('{cv_payload['name']}')")

    def drop_view(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop a view from the database. The indexed collections are unaffected.

        Args:
            name: the name of the view to drop.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Raises:
            NotFoundException: if the view does not exist.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"dropView('{name}')")
        self._api_commander.request(
            http_method=HttpMethod.DELETE,
            additional_path=_view_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished dropView('{name}')")

    # Analyzers

    def analyzer(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AnalyzerDefinition:
        """
        Get the definition of an analyzer.

        Args:
            name: the name of the analyzer, possibly qualified with the database
                name as in "mydb::my_analyzer".
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AnalyzerDefinition.

        Raises:
            NotFoundException: if the analyzer does not exist.

        Example:
            >>> my_db.analyzer("text_en").properties
            TextAnalyzerProperties(locale='en', case=<CaseType.LOWER: 'lower'>, ...)
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getAnalyzer('{name}')")
        ga_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path=_analyzer_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished getAnalyzer('{name}')")
        return AnalyzerDefinition._from_dict(ga_response)

    def analyzer_exists(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether an analyzer exists.

        Args:
            name: the name of the analyzer.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            True if the analyzer exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            self.analyzer(
                name,
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    def list_analyzers(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ListingCursor[AnalyzerDefinition]:
        """
        List the analyzers available to this database, i.e. its own analyzers
        and the built-in ones. The request is issued lazily, when the returned
        cursor is first read from.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a ListingCursor yielding AnalyzerDefinition objects.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        timeout_context = _TimeoutContext(
            request_ms=_view_admin_timeout_ms, label=_va_label
        )

        def _fetch_page(page_state: str | None) -> tuple[list[Any], str | None]:
            logger.info("listAnalyzers")
            la_response = self._api_commander.request(
                http_method=HttpMethod.GET,
                additional_path=_analyzer_path(),
                success_codes=(HTTP_OK,),
                timeout_context=timeout_context,
            )
            logger.info("finished listAnalyzers")
            return _result_list(la_response, "listAnalyzers"), None

        return ListingCursor(
            _fetch_page,
            mapper=AnalyzerDefinition._from_dict,
            description=f"analyzers of '{self.name}'",
        )

    def create_analyzer(
        self,
        definition: AnalyzerDefinition | dict[str, Any],
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> tuple[AnalyzerDefinition, bool]:
        """
        Create an analyzer. Creating an analyzer identical to an existing one
        succeeds, while a different definition under an existing name fails.

        Args:
            definition: an AnalyzerDefinition, or an equivalent dictionary
                such as `{"name": ..., "type": ..., "properties": {...}}`.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a (definition, existed) pair: the definition as stored by the server
            and whether an identical analyzer existed already.

        Raises:
            UnknownAnalyzerTypeException: if the analyzer type is not known.
            ValueError: if the definition lacks a name or has inconsistent features.
            ConflictException: if a different analyzer with the same name exists.

        Example:
            >>> definition, existed = my_db.create_analyzer(
            ...     AnalyzerDefinition(
            ...         name="geo_s2",
            ...         properties=GeoS2AnalyzerProperties(
            ...             format=GeoS2Format.LAT_LNG_INT,
            ...         ),
            ...     ),
            ... )
            >>> existed
            False
        """

        ca_payload = AnalyzerDefinition.coerce(definition)._as_creation_payload()
        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"createAnalyzer('{ca_payload['name']}')")
        ca_response = self._api_commander.raw_request(
            http_method=HttpMethod.POST,
            payload=ca_payload,
            additional_path=_analyzer_path(),
            success_codes=(HTTP_OK, HTTP_CREATED),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished createAnalyzer('{ca_payload['name']}')")
        ca_json = self._api_commander._raw_response_to_json(
            ca_response, request_desc="POST _api/analyzer"
        )
        return (
            AnalyzerDefinition._from_dict(ca_json),
            ca_response.status_code == HTTP_OK,
        )

    def drop_analyzer(
        self,
        name: str,
        *,
        force: bool = False,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop an analyzer.

        Args:
            name: the name of the analyzer.
            force: whether to drop the analyzer even if it is in use by some view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Raises:
            NotFoundException: if the analyzer does not exist.
            ConflictException: if the analyzer is in use and `force` is False.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"dropAnalyzer('{name}')")
        self._api_commander.request(
            http_method=HttpMethod.DELETE,
            additional_path=_analyzer_path(name),
            request_params={"force": True} if force else {},
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished dropAnalyzer('{name}')")


class AsyncDatabase:
    """
    An ArangoDB database. This is the object for managing the collections,
    the views and the analyzers of a database, and for obtaining AsyncCollection
    and view objects themselves. This class has an asynchronous interface.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking methods such as `get_async_database`
    of ArangoClient.

    Args:
        api_endpoint: the server endpoint, e.g. "http://localhost:8529".
        name: the database name.
        api_options: a complete specification of the API Options for this instance.

    Example:
        >>> from arangopy import ArangoClient
        >>> my_client = ArangoClient(token="eyJhbGciOi...")
        >>> my_async_db = my_client.get_async_database("products_db")

    Note:
        creating an instance of AsyncDatabase does not trigger actual creation
        of the database itself, which should exist beforehand. To create databases,
        see the AsyncServerAdmin class.
    """

    def __init__(
        self,
        *,
        api_endpoint: str,
        name: str,
        api_options: FullAPIOptions,
    ) -> None:
        self.api_options = api_options
        self.api_endpoint = api_endpoint.strip("/")
        self._name = name
        self._database_path = self.api_options.url_options.database_path_template.format(
            database=quote(name, safe="")
        )
        self._commander_headers = {
            DEFAULT_AUTH_HEADER: self.api_options.token.get_auth_header(),
            **self.api_options.database_additional_headers,
        }
        self._api_commander = self._get_api_commander()

    def __getitem__(self, collection_name: str) -> AsyncCollection:
        return self.get_collection(name=collection_name)

    def __repr__(self) -> str:
        ep_desc = f'api_endpoint="{self.api_endpoint}"'
        name_desc = f'name="{self.name}"'
        api_options_desc = f"api_options={self.api_options}"
        return f"{self.__class__.__name__}({ep_desc}, {name_desc}, {api_options_desc})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AsyncDatabase):
            return all(
                [
                    self.api_endpoint == other.api_endpoint,
                    self.name == other.name,
                    self.api_options == other.api_options,
                ]
            )
        else:
            return False

    def _get_api_commander(self) -> APICommander:
        """Instantiate a new APICommander based on the properties of this class."""

        return APICommander(
            api_endpoint=self.api_endpoint,
            path=self._database_path,
            headers=self._commander_headers,
            callers=self.api_options.callers,
            redacted_header_names=self.api_options.redacted_header_names,
        )

    async def __aenter__(self) -> AsyncDatabase:
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

    def _copy(
        self,
        *,
        name: str | None = None,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncDatabase:
        arg_api_options = APIOptions(
            token=token,
        )
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return AsyncDatabase(
            api_endpoint=self.api_endpoint,
            name=name or self.name,
            api_options=final_api_options,
        )

    def with_options(
        self,
        *,
        name: str | None = None,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncDatabase:
        """
        Create a clone of this database with some changed attributes.

        Args:
            name: the name of another database to target with the clone.
            token: an authentication token for the server, either a JWT string
                or a `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the clone, in the form of
                an APIOptions instance (where one can set just the needed attributes).
                In case the same setting is also provided as named parameter,
                the latter takes precedence.

        Returns:
            a new `AsyncDatabase` instance.
        """

        return self._copy(
            name=name,
            token=token,
            api_options=api_options,
        )

    def to_sync(
        self,
        *,
        name: str | None = None,
        token: str | TokenProvider | UnsetType = _UNSET,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> Database:
        """
        Create a (synchronous) Database from this one. Save for the arguments
        explicitly provided as overrides, everything else is kept identical
        to this database in the copy.

        Args:
            name: the name of another database to target with the result.
            token: an authentication token for the server, either a JWT string
                or a `arangopy.authentication.TokenProvider` instance.
            api_options: any additional options to set for the result, in the form of
                an APIOptions instance (where one can set just the needed attributes).

        Returns:
            the new copy, a `Database` instance.
        """

        arg_api_options = APIOptions(token=token)
        final_api_options = self.api_options.with_override(api_options).with_override(
            arg_api_options
        )
        return Database(
            api_endpoint=self.api_endpoint,
            name=name or self.name,
            api_options=final_api_options,
        )

    @property
    def name(self) -> str:
        """The name of this database."""

        return self._name

    async def info(
        self,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> DatabaseInfo:
        """
        Get the information on this database (id, path, cluster defaults).

        Args:
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            a DatabaseInfo object.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info("getting database info, async")
        gd_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path="_api/database/current",
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info("finished getting database info, async")
        return DatabaseInfo._from_dict(gd_response)

    # Collections

    def get_collection(
        self,
        name: str,
        *,
        api_options: APIOptions | UnsetType = _UNSET,
    ) -> AsyncCollection:
        """
        Spawn an `AsyncCollection` object instance representing a collection
        on this database. No request is issued.

        Args:
            name: the name of the collection.
            api_options: any additional options to set for the resulting collection,
                in the form of an APIOptions instance.

        Returns:
            an `AsyncCollection` instance, representing the desired collection
            (but without any form of validation).
        """

        return AsyncCollection(
            database=self,
            name=name,
            api_options=self.api_options.with_override(api_options),
        )

    async def collection(
        self,
        name: str,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncCollection:
        """
        Return an `AsyncCollection` object for an existing collection, after
        checking that the collection exists.

        Args:
            name: the name of the collection.
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            an `AsyncCollection` instance.

        Raises:
            NotFoundException: if the collection does not exist.
        """

        _general_method_timeout_ms, _gmt_label = _select_singlereq_timeout_gm(
            timeout_options=self.api_options.timeout_options,
            general_method_timeout_ms=general_method_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getCollection('{name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path=_collection_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_general_method_timeout_ms, label=_gmt_label
            ),
        )
        logger.info(f"finished getCollection('{name}'), async")
        return self.get_collection(name)

    async def collection_exists(
        self,
        name: str,
        *,
        general_method_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether a collection exists in this database.

        Args:
            name: the name of the collection.
            general_method_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `general_method_timeout_ms`.
            timeout_ms: an alias for `general_method_timeout_ms`.

        Returns:
            True if the collection exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            await self.collection(
                name,
                general_method_timeout_ms=general_method_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    async def create_collection(
        self,
        name: str,
        *,
        properties: CollectionProperties | dict[str, Any] | None = None,
        collection_type: int | None = None,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncCollection:
        """
        Creates a collection on the database and return the AsyncCollection
        instance that represents it.

        Args:
            name: the name of the collection.
            properties: the settings of the collection, as a CollectionProperties
                object or an equivalent dictionary.
            collection_type: `CollectionType.DOCUMENT` (the default)
                or `CollectionType.EDGE`.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            an `AsyncCollection` instance, representing the newly-created collection.

        Raises:
            ConflictException: if a collection with the same name exists already.
        """

        cc_payload = _collection_creation_payload(name, properties, collection_type)
        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"createCollection('{name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.POST,
            payload=cc_payload,
            additional_path=_collection_path(),
            success_codes=(HTTP_OK, HTTP_CREATED),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished createCollection('{name}'), async")
        return self.get_collection(name)

    async def drop_collection(
        self,
        name: str,
        *,
        is_system: bool = False,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop a collection from the database, along with all documents therein.

        Args:
            name: the name of the collection to drop.
            is_system: this must be True to drop a system collection.
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
        logger.info(f"deleteCollection('{name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.DELETE,
            additional_path=_collection_path(name),
            request_params={"isSystem": True} if is_system else {},
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_collection_admin_timeout_ms, label=_ca_label
            ),
        )
        logger.info(f"finished deleteCollection('{name}'), async")

    def list_collections(
        self,
        *,
        exclude_system: bool = True,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncListingCursor[CollectionDescriptor]:
        """
        List the collections of this database. The request is issued lazily,
        when the returned cursor is first read from.

        Args:
            exclude_system: whether to leave out the system collections.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            an AsyncListingCursor yielding CollectionDescriptor objects.

        Example:
            >>> async for coll_desc in my_async_db.list_collections():
            ...     print(coll_desc.name)
            ...
            products
        """

        _collection_admin_timeout_ms, _ca_label = _select_singlereq_timeout_ca(
            timeout_options=self.api_options.timeout_options,
            collection_admin_timeout_ms=collection_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        timeout_context = _TimeoutContext(
            request_ms=_collection_admin_timeout_ms, label=_ca_label
        )

        async def _fetch_page(page_state: str | None) -> tuple[list[Any], str | None]:
            logger.info("listCollections, async")
            lc_response = await self._api_commander.async_request(
                http_method=HttpMethod.GET,
                additional_path=_collection_path(),
                request_params={"excludeSystem": exclude_system},
                success_codes=(HTTP_OK,),
                timeout_context=timeout_context,
            )
            logger.info("finished listCollections, async")
            return _result_list(lc_response, "listCollections"), None

        return AsyncListingCursor(
            _fetch_page,
            mapper=CollectionDescriptor._from_dict,
            description=f"collections of '{self.name}'",
        )

    async def list_collection_names(
        self,
        *,
        exclude_system: bool = True,
        collection_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> list[str]:
        """
        List the names of the collections of this database.

        Args:
            exclude_system: whether to leave out the system collections.
            collection_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `collection_admin_timeout_ms`.
            timeout_ms: an alias for `collection_admin_timeout_ms`.

        Returns:
            a list of the collection names as strings, in no particular order.
        """

        return [
            coll_desc.name
            async for coll_desc in self.list_collections(
                exclude_system=exclude_system,
                collection_admin_timeout_ms=collection_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
        ]

    # Views

    async def view(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AnyAsyncView:
        """
        Return the object for an existing view, of the class matching
        the view type (AsyncArangoSearchView or AsyncSearchAliasView).

        Args:
            name: the name of the view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AsyncArangoSearchView or an AsyncSearchAliasView.

        Raises:
            NotFoundException: if the view does not exist.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getView('{name}'), async")
        gv_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path=_view_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished getView('{name}'), async")
        return self._view_from_descriptor(ViewDescriptor._from_dict(gv_response))

    def _view_from_descriptor(self, view_descriptor: ViewDescriptor) -> AnyAsyncView:
        view_class = ASYNC_VIEW_CLASSES[view_descriptor.view_type]
        return view_class(database=self, name=view_descriptor.name)  # type: ignore[return-value]

    async def view_exists(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether a view exists in this database.

        Args:
            name: the name of the view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            True if the view exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            await self.view(
                name,
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    def list_views(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncListingCursor[AnyAsyncView]:
        """
        List the views of this database. The request is issued lazily,
        when the returned cursor is first read from.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AsyncListingCursor yielding view objects.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        timeout_context = _TimeoutContext(
            request_ms=_view_admin_timeout_ms, label=_va_label
        )

        async def _fetch_page(page_state: str | None) -> tuple[list[Any], str | None]:
            logger.info("listViews, async")
            lv_response = await self._api_commander.async_request(
                http_method=HttpMethod.GET,
                additional_path=_view_path(),
                success_codes=(HTTP_OK,),
                timeout_context=timeout_context,
            )
            logger.info("finished listViews, async")
            return _result_list(lv_response, "listViews"), None

        return AsyncListingCursor(
            _fetch_page,
            mapper=lambda raw_view: self._view_from_descriptor(
                ViewDescriptor._from_dict(raw_view)
            ),
            description=f"views of '{self.name}'",
        )

    async def create_arangosearch_view(
        self,
        name: str,
        properties: ArangoSearchViewProperties | dict[str, Any] | None = None,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncArangoSearchView:
        """
        Create an ArangoSearch view on this database.

        Args:
            name: the name of the view.
            properties: the view properties, as an ArangoSearchViewProperties
                object or an equivalent dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AsyncArangoSearchView object for the new view.

        Raises:
            ConflictException: if a view with the same name exists already.
        """

        _properties = (
            ArangoSearchViewProperties()
            if properties is None
            else ArangoSearchViewProperties.coerce(properties)
        )
        await self._create_view(
            _view_creation_payload(name, ViewType.ARANGOSEARCH, _properties),
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return AsyncArangoSearchView(database=self, name=name)

    async def create_search_alias_view(
        self,
        name: str,
        properties: SearchAliasViewProperties | dict[str, Any] | None = None,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncSearchAliasView:
        """
        Create a search-alias view on this database.

        Args:
            name: the name of the view.
            properties: the view properties, as a SearchAliasViewProperties
                object or an equivalent dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AsyncSearchAliasView object for the new view.

        Raises:
            ConflictException: if a view with the same name exists already.
        """

        _properties = (
            SearchAliasViewProperties()
            if properties is None
            else SearchAliasViewProperties.coerce(properties)
        )
        await self._create_view(
            _view_creation_payload(name, ViewType.SEARCH_ALIAS, _properties),
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return AsyncSearchAliasView(database=self, name=name)

    async def _create_view(
        self,
        cv_payload: dict[str, Any],
        *,
        view_admin_timeout_ms: int | None,
        request_timeout_ms: int | None,
        timeout_ms: int | None,
    ) -> None:
        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"createView('{cv_payload['name']}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.POST,
            payload=cv_payload,
            additional_path=_view_path(),
            success_codes=(HTTP_CREATED,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished createView('{cv_payload['name']}'), async")

    async def drop_view(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop a view from the database. The indexed collections are unaffected.

        Args:
            name: the name of the view to drop.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Raises:
            NotFoundException: if the view does not exist.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"dropView('{name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.DELETE,
            additional_path=_view_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished dropView('{name}'), async")

    # Analyzers

    async def analyzer(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AnalyzerDefinition:
        """
        Get the definition of an analyzer.

        Args:
            name: the name of the analyzer, possibly qualified with the database
                name as in "mydb::my_analyzer".
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AnalyzerDefinition.

        Raises:
            NotFoundException: if the analyzer does not exist.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"getAnalyzer('{name}'), async")
        ga_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path=_analyzer_path(name),
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished getAnalyzer('{name}'), async")
        return AnalyzerDefinition._from_dict(ga_response)

    async def analyzer_exists(
        self,
        name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> bool:
        """
        Check whether an analyzer exists.

        Args:
            name: the name of the analyzer.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            True if the analyzer exists, False if the server reports it as not
            found. Any other error is raised as it is.
        """

        try:
            await self.analyzer(
                name,
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            )
            return True
        except ArangoHttpException as exc:
            if exc.is_not_found():
                return False
            raise

    def list_analyzers(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncListingCursor[AnalyzerDefinition]:
        """
        List the analyzers available to this database, i.e. its own analyzers
        and the built-in ones. The request is issued lazily, when the returned
        cursor is first read from.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            an AsyncListingCursor yielding AnalyzerDefinition objects.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        timeout_context = _TimeoutContext(
            request_ms=_view_admin_timeout_ms, label=_va_label
        )

        async def _fetch_page(page_state: str | None) -> tuple[list[Any], str | None]:
            logger.info("listAnalyzers, async")
            la_response = await self._api_commander.async_request(
                http_method=HttpMethod.GET,
                additional_path=_analyzer_path(),
                success_codes=(HTTP_OK,),
                timeout_context=timeout_context,
            )
            logger.info("finished listAnalyzers, async")
            return _result_list(la_response, "listAnalyzers"), None

        return AsyncListingCursor(
            _fetch_page,
            mapper=AnalyzerDefinition._from_dict,
            description=f"analyzers of '{self.name}'",
        )

    async def create_analyzer(
        self,
        definition: AnalyzerDefinition | dict[str, Any],
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> tuple[AnalyzerDefinition, bool]:
        """
        Create an analyzer. Creating an analyzer identical to an existing one
        succeeds, while a different definition under an existing name fails.

        Args:
            definition: an AnalyzerDefinition, or an equivalent dictionary
                such as `{"name": ..., "type": ..., "properties": {...}}`.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a (definition, existed) pair: the definition as stored by the server
            and whether an identical analyzer existed already.

        Raises:
            UnknownAnalyzerTypeException: if the analyzer type is not known.
            ValueError: if the definition lacks a name or has inconsistent features.
            ConflictException: if a different analyzer with the same name exists.
        """

        ca_payload = AnalyzerDefinition.coerce(definition)._as_creation_payload()
        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"createAnalyzer('{ca_payload['name']}'), async")
        ca_response = await self._api_commander.async_raw_request(
            http_method=HttpMethod.POST,
            payload=ca_payload,
            additional_path=_analyzer_path(),
            success_codes=(HTTP_OK, HTTP_CREATED),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished createAnalyzer('{ca_payload['name']}'), async")
        ca_json = self._api_commander._raw_response_to_json(
            ca_response, request_desc="POST _api/analyzer"
        )
        return (
            AnalyzerDefinition._from_dict(ca_json),
            ca_response.status_code == HTTP_OK,
        )

    async def drop_analyzer(
        self,
        name: str,
        *,
        force: bool = False,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop an analyzer.

        Args:
            name: the name of the analyzer.
            force: whether to drop the analyzer even if it is in use by some view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Raises:
            NotFoundException: if the analyzer does not exist.
            ConflictException: if the analyzer is in use and `force` is False.
        """

        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        logger.info(f"dropAnalyzer('{name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.DELETE,
            additional_path=_analyzer_path(name),
            request_params={"force": True} if force else {},
            success_codes=(HTTP_OK,),
            timeout_context=_TimeoutContext(
                request_ms=_view_admin_timeout_ms, label=_va_label
            ),
        )
        logger.info(f"finished dropAnalyzer('{name}'), async")
