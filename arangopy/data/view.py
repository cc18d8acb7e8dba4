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
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union
from urllib.parse import quote

from arangopy.constants import ViewType
from arangopy.data.info.view_descriptor import (
    ArangoSearchViewProperties,
    SearchAliasViewProperties,
    ViewDescriptor,
)
from arangopy.exceptions import (
    _select_singlereq_timeout_va,
    _TimeoutContext,
)
from arangopy.settings.defaults import HTTP_OK
from arangopy.utils.request_tools import HttpMethod

if TYPE_CHECKING:
    from arangopy.data.database import AsyncDatabase, Database


logger = logging.getLogger(__name__)

VP = TypeVar("VP", ArangoSearchViewProperties, SearchAliasViewProperties)


def _view_path(name: str, sub_path: str | None = None) -> str:
    base_path = f"_api/view/{quote(name, safe='')}"
    if sub_path:
        return f"{base_path}/{sub_path}"
    return base_path


class View(Generic[VP]):
    """
    A view on a database, with a synchronous interface. This is the base of
    the `ArangoSearchView` and `SearchAliasView` classes, which differ in the
    type of the properties they read and write.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking methods such as `view` or
    `create_arangosearch_view` of Database.

    A view holds a reference to the Database it belongs to, and issues its
    requests through the same connection settings as that Database.

    Args:
        database: a Database object, the owner of this view.
        name: the view name.
    """

    view_type: ViewType
    _properties_class: type[VP]

    def __init__(
        self,
        *,
        database: Database,
        name: str,
    ) -> None:
        self._database = database
        self._name = name
        self.api_options = database.api_options
        self._api_commander = database._api_commander

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(name="{self.name}", '
            f'database="{self.database.name}")'
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, View):
            return all(
                [
                    self.__class__ == other.__class__,
                    self.name == other.name,
                    self.database == other.database,
                ]
            )
        else:
            return False

    @property
    def name(self) -> str:
        """The name of this view."""

        return self._name

    @property
    def database(self) -> Database:
        """The Database this view belongs to."""

        return self._database

    def _timeout_context(
        self,
        *,
        view_admin_timeout_ms: int | None,
        request_timeout_ms: int | None,
        timeout_ms: int | None,
    ) -> _TimeoutContext:
        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return _TimeoutContext(request_ms=_view_admin_timeout_ms, label=_va_label)

    def info(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ViewDescriptor:
        """
        Get the short description of this view (id, name, type).

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a ViewDescriptor.
        """

        logger.info(f"getView('{self.name}')")
        gv_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path=_view_path(self.name),
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished getView('{self.name}')")
        return ViewDescriptor._from_dict(gv_response)

    def properties(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> VP:
        """
        Read the properties of this view.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            the properties, of the type matching the kind of view.

        Example:
            >>> my_view = my_db.view("products_view")
            >>> my_view.properties().links
            {'products': ArangoSearchLinkProperties(include_all_fields=True)}
        """

        logger.info(f"getViewProperties('{self.name}')")
        gp_response = self._api_commander.request(
            http_method=HttpMethod.GET,
            additional_path=_view_path(self.name, "properties"),
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished getViewProperties('{self.name}')")
        return self._properties_class._from_dict(gp_response)

    def set_properties(
        self,
        properties: VP | dict[str, Any],
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Replace the properties of this view. The settings not provided are
        reset to their defaults by the server.

        Args:
            properties: the new properties, as an object or a dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.
        """

        self._write_properties(
            http_method=HttpMethod.PUT,
            properties=properties,
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )

    def update_properties(
        self,
        properties: VP | dict[str, Any],
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Partially update the properties of this view: only the settings
        provided are changed.

        Args:
            properties: the properties to change, as an object or a dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.
        """

        self._write_properties(
            http_method=HttpMethod.PATCH,
            properties=properties,
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )

    def _write_properties(
        self,
        *,
        http_method: str,
        properties: VP | dict[str, Any],
        timeout_context: _TimeoutContext,
    ) -> None:
        _properties = self._properties_class.coerce(properties)
        logger.info(f"{http_method} viewProperties('{self.name}')")
        self._api_commander.request(
            http_method=http_method,
            payload=_properties.as_dict(),
            additional_path=_view_path(self.name, "properties"),
            success_codes=(HTTP_OK,),
            timeout_context=timeout_context,
        )
        logger.info(f"finished {http_method} viewProperties('{self.name}')")

    def rename(
        self,
        new_name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> View[VP]:
        """
        Rename this view (single-server deployments only).

        Args:
            new_name: the new name for the view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a new view object, of the same class as this one, with the new name.
            This object keeps pointing to the old name.
        """

        logger.info(f"renameView('{self.name}', '{new_name}')")
        self._api_commander.request(
            http_method=HttpMethod.PUT,
            payload={"name": new_name},
            additional_path=_view_path(self.name, "rename"),
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished renameView('{self.name}', '{new_name}')")
        return self.__class__(database=self.database, name=new_name)

    def drop(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop this view. This is equivalent to `database.drop_view(view.name)`.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.
        """

        self.database.drop_view(
            self.name,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )


class ArangoSearchView(View[ArangoSearchViewProperties]):
    """
    An ArangoSearch view, i.e. a view indexing the contents of one or more
    collections through "links". Its properties are ArangoSearchViewProperties.
    """

    view_type = ViewType.ARANGOSEARCH
    _properties_class = ArangoSearchViewProperties


class SearchAliasView(View[SearchAliasViewProperties]):
    """
    A search-alias view, i.e. a view over existing inverted indexes.
    Its properties are SearchAliasViewProperties.
    """

    view_type = ViewType.SEARCH_ALIAS
    _properties_class = SearchAliasViewProperties


class AsyncView(Generic[VP]):
    """
    A view on a database, with an asynchronous interface. This is the base of
    the `AsyncArangoSearchView` and `AsyncSearchAliasView` classes.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking methods such as `view` or
    `create_arangosearch_view` of AsyncDatabase.

    Args:
        database: an AsyncDatabase object, the owner of this view.
        name: the view name.
    """

    view_type: ViewType
    _properties_class: type[VP]

    def __init__(
        self,
        *,
        database: AsyncDatabase,
        name: str,
    ) -> None:
        self._database = database
        self._name = name
        self.api_options = database.api_options
        self._api_commander = database._api_commander

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(name="{self.name}", '
            f'database="{self.database.name}")'
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AsyncView):
            return all(
                [
                    self.__class__ == other.__class__,
                    self.name == other.name,
                    self.database == other.database,
                ]
            )
        else:
            return False

    @property
    def name(self) -> str:
        """The name of this view."""

        return self._name

    @property
    def database(self) -> AsyncDatabase:
        """The AsyncDatabase this view belongs to."""

        return self._database

    def _timeout_context(
        self,
        *,
        view_admin_timeout_ms: int | None,
        request_timeout_ms: int | None,
        timeout_ms: int | None,
    ) -> _TimeoutContext:
        _view_admin_timeout_ms, _va_label = _select_singlereq_timeout_va(
            timeout_options=self.api_options.timeout_options,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )
        return _TimeoutContext(request_ms=_view_admin_timeout_ms, label=_va_label)

    async def info(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ViewDescriptor:
        """
        Get the short description of this view (id, name, type).

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a ViewDescriptor.
        """

        logger.info(f"getView('{self.name}'), async")
        gv_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path=_view_path(self.name),
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished getView('{self.name}'), async")
        return ViewDescriptor._from_dict(gv_response)

    async def properties(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> VP:
        """
        Read the properties of this view.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            the properties, of the type matching the kind of view.
        """

        logger.info(f"getViewProperties('{self.name}'), async")
        gp_response = await self._api_commander.async_request(
            http_method=HttpMethod.GET,
            additional_path=_view_path(self.name, "properties"),
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished getViewProperties('{self.name}'), async")
        return self._properties_class._from_dict(gp_response)

    async def set_properties(
        self,
        properties: VP | dict[str, Any],
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Replace the properties of this view. The settings not provided are
        reset to their defaults by the server.

        Args:
            properties: the new properties, as an object or a dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.
        """

        await self._write_properties(
            http_method=HttpMethod.PUT,
            properties=properties,
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )

    async def update_properties(
        self,
        properties: VP | dict[str, Any],
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Partially update the properties of this view: only the settings
        provided are changed.

        Args:
            properties: the properties to change, as an object or a dictionary.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.
        """

        await self._write_properties(
            http_method=HttpMethod.PATCH,
            properties=properties,
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )

    async def _write_properties(
        self,
        *,
        http_method: str,
        properties: VP | dict[str, Any],
        timeout_context: _TimeoutContext,
    ) -> None:
        _properties = self._properties_class.coerce(properties)
        logger.info(f"{http_method} viewProperties('{self.name}'), async")
        await self._api_commander.async_request(
            http_method=http_method,
            payload=_properties.as_dict(),
            additional_path=_view_path(self.name, "properties"),
            success_codes=(HTTP_OK,),
            timeout_context=timeout_context,
        )
        logger.info(f"finished {http_method} viewProperties('{self.name}'), async")

    async def rename(
        self,
        new_name: str,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> AsyncView[VP]:
        """
        Rename this view (single-server deployments only).

        Args:
            new_name: the new name for the view.
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.

        Returns:
            a new view object, of the same class as this one, with the new name.
        """

        logger.info(f"renameView('{self.name}', '{new_name}'), async")
        await self._api_commander.async_request(
            http_method=HttpMethod.PUT,
            payload={"name": new_name},
            additional_path=_view_path(self.name, "rename"),
            success_codes=(HTTP_OK,),
            timeout_context=self._timeout_context(
                view_admin_timeout_ms=view_admin_timeout_ms,
                request_timeout_ms=request_timeout_ms,
                timeout_ms=timeout_ms,
            ),
        )
        logger.info(f"finished renameView('{self.name}', '{new_name}'), async")
        return self.__class__(database=self.database, name=new_name)

    async def drop(
        self,
        *,
        view_admin_timeout_ms: int | None = None,
        request_timeout_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Drop this view. This is equivalent to `database.drop_view(view.name)`.

        Args:
            view_admin_timeout_ms: a timeout, in milliseconds, to impose on the
                underlying API request. If not provided, this object's defaults apply.
            request_timeout_ms: an alias for `view_admin_timeout_ms`.
            timeout_ms: an alias for `view_admin_timeout_ms`.
        """

        await self.database.drop_view(
            self.name,
            view_admin_timeout_ms=view_admin_timeout_ms,
            request_timeout_ms=request_timeout_ms,
            timeout_ms=timeout_ms,
        )


class AsyncArangoSearchView(AsyncView[ArangoSearchViewProperties]):
    """
    An ArangoSearch view with an asynchronous interface.
    Its properties are ArangoSearchViewProperties.
    """

    view_type = ViewType.ARANGOSEARCH
    _properties_class = ArangoSearchViewProperties


class AsyncSearchAliasView(AsyncView[SearchAliasViewProperties]):
    """
    A search-alias view with an asynchronous interface.
    Its properties are SearchAliasViewProperties.
    """

    view_type = ViewType.SEARCH_ALIAS
    _properties_class = SearchAliasViewProperties


AnyView = Union[ArangoSearchView, SearchAliasView]
AnyAsyncView = Union[AsyncArangoSearchView, AsyncSearchAliasView]

VIEW_CLASSES: dict[ViewType, type[View[Any]]] = {
    ViewType.ARANGOSEARCH: ArangoSearchView,
    ViewType.SEARCH_ALIAS: SearchAliasView,
}
ASYNC_VIEW_CLASSES: dict[ViewType, type[AsyncView[Any]]] = {
    ViewType.ARANGOSEARCH: AsyncArangoSearchView,
    ViewType.SEARCH_ALIAS: AsyncSearchAliasView,
}
