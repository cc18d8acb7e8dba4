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

# Defaults/settings for reaching the server
DEFAULT_ENDPOINT = "http://localhost:8529"
DEFAULT_DATABASE_NAME = "_system"
SYSTEM_DATABASE_NAME = "_system"
DATABASE_PATH_TEMPLATE = "_db/{database}"

# Defaults/settings for requests
DEFAULT_REQUEST_TIMEOUT_MS = 10000
DEFAULT_GENERAL_METHOD_TIMEOUT_MS = 30000
DEFAULT_COLLECTION_ADMIN_TIMEOUT_MS = 60000
DEFAULT_VIEW_ADMIN_TIMEOUT_MS = 60000
DEFAULT_DATABASE_ADMIN_TIMEOUT_MS = 120000
DEFAULT_AUTH_HEADER = "Authorization"
DEFAULT_JWT_AUTH_PREFIX = "bearer "
DEFAULT_BASIC_AUTH_PREFIX = "Basic "

# HTTP status codes with a meaning for the error taxonomy
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_ACCEPTED = 202
HTTP_NO_CONTENT = 204
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409

# Server error numbers for the not-found/conflict conditions
ERROR_ARANGO_DOCUMENT_NOT_FOUND = 1202
ERROR_ARANGO_DATA_SOURCE_NOT_FOUND = 1203
ERROR_ARANGO_DUPLICATE_NAME = 1207
ERROR_ARANGO_DATABASE_NOT_FOUND = 1228
ERROR_ARANGO_CONFLICT = 1200
NOT_FOUND_ERROR_NUMS = {
    ERROR_ARANGO_DOCUMENT_NOT_FOUND,
    ERROR_ARANGO_DATA_SOURCE_NOT_FOUND,
    ERROR_ARANGO_DATABASE_NOT_FOUND,
}
CONFLICT_ERROR_NUMS = {
    ERROR_ARANGO_CONFLICT,
    ERROR_ARANGO_DUPLICATE_NAME,
}

# Keys of the generic status wrapper found in every response
RESPONSE_ENVELOPE_KEYS = {"error", "code", "errorNum", "errorMessage"}

# Defaults applied when decoding analyzer properties
DEFAULT_CLASSIFICATION_TOP_K = 1
DEFAULT_CLASSIFICATION_THRESHOLD = 0.99
DEFAULT_NEAREST_NEIGHBORS_TOP_K = 1

# Settings for redacting secrets in string representations and logging
SECRETS_REDACT_ENDING = "..."
SECRETS_REDACT_CHAR = "*"
SECRETS_REDACT_ENDING_LENGTH = 3
FIXED_SECRET_PLACEHOLDER = "***"
DEFAULT_REDACTED_HEADER_NAMES = {
    DEFAULT_AUTH_HEADER,
}
