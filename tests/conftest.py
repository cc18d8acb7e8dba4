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

"""
Main conftest for shared fixtures.
"""

from __future__ import annotations

import pytest
from pytest_httpserver import HTTPServer

from arangopy import ArangoClient

TEST_JWT = "test-jwt-0123456789"
TEST_DATABASE_NAME = "products_db"
DB_PATH = f"/_db/{TEST_DATABASE_NAME}"
SYSTEM_PATH = "/_db/_system"


@pytest.fixture
def client(httpserver: HTTPServer) -> ArangoClient:
    return ArangoClient(TEST_JWT, api_endpoint=httpserver.url_for("/"))
