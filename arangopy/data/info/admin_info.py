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

from arangopy.exceptions import UnexpectedArangoResponseException
from arangopy.utils.parsing import _extra_keys, _strip_envelope
from arangopy.utils.unset import UnsetType, _unset_or


@dataclass
class VersionInfo:
    """
    The server version, as returned by the version endpoint.

    Attributes:
        server: the server name, "arango".
        version: the server version string, e.g. "3.12.1".
        license: the license type, "community" or "enterprise".
        details: a dictionary of additional details (only if requested).
    """

    server: str
    version: str
    license: str | UnsetType
    details: dict[str, Any] | UnsetType

    @staticmethod
    def _from_dict(raw_dict: dict[str, Any]) -> VersionInfo:
        if "version" not in raw_dict:
            raise UnexpectedArangoResponseException(
                text="Faulty response from version API command.",
                raw_response=raw_dict,
            )
        return VersionInfo(
            server=raw_dict.get("server", ""),
            version=raw_dict["version"],
            license=_unset_or(raw_dict.get("license")),
            details=_unset_or(raw_dict.get("details")),
        )


@dataclass
class LicenseInfo:
    """
    The license of an ArangoDB deployment.

    Attributes:
        features: the licensed features, e.g. {"expires": 1712345678}.
        license: the encrypted license key.
        version: the license version.
        status: one of "good", "expiring", "expired", "read-only".
        hash: the license hash.
    """

    features: dict[str, Any] | UnsetType
    license: str | UnsetType
    version: int | UnsetType
    status: str | UnsetType
    hash: str | UnsetType

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status={self.status}, version={self.version})"

    @staticmethod
    def _from_dict(raw_dict: dict[str, Any]) -> LicenseInfo:
        _raw_dict = _strip_envelope(raw_dict)
        return LicenseInfo(
            features=_unset_or(_raw_dict.get("features")),
            license=_unset_or(_raw_dict.get("license")),
            version=_unset_or(_raw_dict.get("version")),
            status=_unset_or(_raw_dict.get("status")),
            hash=_unset_or(_raw_dict.get("hash")),
        )


@dataclass
class ServerHealth:
    """
    The health of a single server of a cluster.

    Attributes:
        endpoint: the server endpoint.
        role: the server role, e.g. "Coordinator", "DBServer", "Agent".
        status: the health status, e.g. "GOOD", "BAD", "FAILED".
        short_name: the human-friendly server name, e.g. "DBServer0001".
        version: the server version.
        engine: the storage engine.
        can_be_deleted: whether the server can be removed from the cluster.
        extra: any further information returned by the server.
    """

    endpoint: str | UnsetType
    role: str | UnsetType
    status: str | UnsetType
    short_name: str | UnsetType
    version: str | UnsetType
    engine: str | UnsetType
    can_be_deleted: bool | UnsetType
    extra: dict[str, Any]

    @staticmethod
    def _from_dict(raw_dict: dict[str, Any]) -> ServerHealth:
        return ServerHealth(
            endpoint=_unset_or(raw_dict.get("Endpoint")),
            role=_unset_or(raw_dict.get("Role")),
            status=_unset_or(raw_dict.get("Status")),
            short_name=_unset_or(raw_dict.get("ShortName")),
            version=_unset_or(raw_dict.get("Version")),
            engine=_unset_or(raw_dict.get("Engine")),
            can_be_deleted=_unset_or(raw_dict.get("CanBeDeleted")),
            extra=_extra_keys(
                raw_dict,
                {
                    "Endpoint",
                    "Role",
                    "Status",
                    "ShortName",
                    "Version",
                    "Engine",
                    "CanBeDeleted",
                },
            ),
        )


@dataclass
class ClusterHealth:
    """
    The health of a cluster (or of an active fail-over deployment).

    Attributes:
        cluster_id: the cluster identifier.
        health: a map from server id to the corresponding `ServerHealth`.
    """

    cluster_id: str | UnsetType
    health: dict[str, ServerHealth]

    @staticmethod
    def _from_dict(raw_dict: dict[str, Any]) -> ClusterHealth:
        raw_health = raw_dict.get("Health")
        if not isinstance(raw_health, dict):
            raise UnexpectedArangoResponseException(
                text="Faulty response from cluster health API command.",
                raw_response=raw_dict,
            )
        return ClusterHealth(
            cluster_id=_unset_or(raw_dict.get("ClusterId")),
            health={
                server_id: ServerHealth._from_dict(server_health)
                for server_id, server_health in raw_health.items()
            },
        )
