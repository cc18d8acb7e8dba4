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

from dataclasses import dataclass, field
from typing import Any

from arangopy.exceptions import UnexpectedArangoResponseException
from arangopy.utils.parsing import _warn_residual_keys
from arangopy.utils.unset import _UNSET, UnsetType, _unset_or


@dataclass
class DatabaseInfo:
    """
    Information about a database, as returned by the server for the
    database a handle points to.

    Attributes:
        name: the database name.
        id: the server-assigned database identifier.
        path: the filesystem path of the database.
        is_system: whether this is the `_system` database.
        sharding: (cluster) the default sharding method ("", "flexible", "single").
        replication_factor: (cluster) the default replication factor.
        write_concern: (cluster) the default write concern.
        raw_info: the full response payload, as a dictionary.
    """

    name: str
    id: str | UnsetType
    path: str | UnsetType
    is_system: bool | UnsetType
    sharding: str | UnsetType
    replication_factor: int | str | UnsetType
    write_concern: int | UnsetType
    raw_info: dict[str, Any] | None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name.__repr__()}, id={self.id})"

    @staticmethod
    def _from_dict(raw_dict: dict[str, Any]) -> DatabaseInfo:
        """
        Create a DatabaseInfo from the response to a "current database" request,
        i.e. a dictionary with the actual information under "result".
        """

        result = raw_dict.get("result")
        if not isinstance(result, dict) or "name" not in result:
            raise UnexpectedArangoResponseException(
                text="Faulty response from current database API command.",
                raw_response=raw_dict,
            )
        _warn_residual_keys(
            DatabaseInfo,
            result,
            {
                "name",
                "id",
                "path",
                "isSystem",
                "sharding",
                "replicationFactor",
                "writeConcern",
            },
        )
        return DatabaseInfo(
            name=result["name"],
            id=_unset_or(result.get("id")),
            path=_unset_or(result.get("path")),
            is_system=_unset_or(result.get("isSystem")),
            sharding=_unset_or(result.get("sharding")),
            replication_factor=_unset_or(result.get("replicationFactor")),
            write_concern=_unset_or(result.get("writeConcern")),
            raw_info=result,
        )


@dataclass
class CreateDatabaseOptions:
    """
    The default settings for the collections of a new database
    (these only matter in a cluster).

    Attributes:
        sharding: the sharding method, "flexible" or "single".
        replication_factor: an integer, or the string "satellite".
        write_concern: the number of in-sync replicas required for writes.
    """

    sharding: str | UnsetType = _UNSET
    replication_factor: int | str | UnsetType = _UNSET
    write_concern: int | UnsetType = _UNSET

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "sharding": None
                if isinstance(self.sharding, UnsetType)
                else self.sharding,
                "replicationFactor": None
                if isinstance(self.replication_factor, UnsetType)
                else self.replication_factor,
                "writeConcern": None
                if isinstance(self.write_concern, UnsetType)
                else self.write_concern,
            }.items()
            if v is not None
        }

    @classmethod
    def coerce(
        cls, raw_input: CreateDatabaseOptions | dict[str, Any]
    ) -> CreateDatabaseOptions:
        if isinstance(raw_input, CreateDatabaseOptions):
            return raw_input
        _warn_residual_keys(
            cls, raw_input, {"sharding", "replicationFactor", "writeConcern"}
        )
        return CreateDatabaseOptions(
            sharding=_unset_or(raw_input.get("sharding")),
            replication_factor=_unset_or(raw_input.get("replicationFactor")),
            write_concern=_unset_or(raw_input.get("writeConcern")),
        )


@dataclass
class DatabaseUser:
    """
    A user to be granted access to a newly-created database.

    Attributes:
        username: the user name.
        password: the password (if the user is created along with the database).
        active: whether the user account is active.
        extra: arbitrary additional user data.
    """

    username: str
    password: str | UnsetType = _UNSET
    active: bool | UnsetType = _UNSET
    extra: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(username={self.username.__repr__()})"

    def as_dict(self) -> dict[str, Any]:
        """Recast this object into a dictionary."""

        return {
            k: v
            for k, v in {
                "username": self.username,
                "passwd": None
                if isinstance(self.password, UnsetType)
                else self.password,
                "active": None if isinstance(self.active, UnsetType) else self.active,
                "extra": self.extra or None,
            }.items()
            if v is not None
        }

    @classmethod
    def coerce(cls, raw_input: DatabaseUser | dict[str, Any]) -> DatabaseUser:
        if isinstance(raw_input, DatabaseUser):
            return raw_input
        _warn_residual_keys(cls, raw_input, {"username", "passwd", "active", "extra"})
        return DatabaseUser(
            username=raw_input["username"],
            password=_unset_or(raw_input.get("passwd")),
            active=_unset_or(raw_input.get("active")),
            extra=raw_input.get("extra") or {},
        )
