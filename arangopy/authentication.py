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

import base64
from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import override

from arangopy.settings.defaults import (
    DEFAULT_BASIC_AUTH_PREFIX,
    DEFAULT_JWT_AUTH_PREFIX,
    FIXED_SECRET_PLACEHOLDER,
    SECRETS_REDACT_CHAR,
    SECRETS_REDACT_ENDING,
    SECRETS_REDACT_ENDING_LENGTH,
)
from arangopy.utils.unset import _UNSET, UnsetType


def coerce_token_provider(
    token: str | TokenProvider | None,
) -> TokenProvider:
    if isinstance(token, TokenProvider):
        return token
    else:
        return JWTTokenProvider(token)


def coerce_possible_token_provider(
    token: str | TokenProvider | None | UnsetType,
) -> TokenProvider | UnsetType:
    if isinstance(token, UnsetType):
        return _UNSET
    else:
        return coerce_token_provider(token)


def _redact_secret(secret: str, max_length: int, hide_if_short: bool = True) -> str:
    """
    Return a shortened-if-necessary version of a 'secret' string (with ellipsis).

    Args:
        secret: a secret string to redact
        max_length: if the secret and the fixed ending exceed this size,
            shortening takes place.
        hide_if_short: this controls what to do when the input secret is
            shorter, i.e. when no shortening takes place.
            if False, the secret is returned as-is;
            If True, a masked string is returned of the same length as secret.

    Returns:
        a 'redacted' form of the secret string as per the rules outlined above.
    """
    secret_len = len(secret)
    if secret_len + SECRETS_REDACT_ENDING_LENGTH > max_length:
        return (
            secret[: max_length - SECRETS_REDACT_ENDING_LENGTH] + SECRETS_REDACT_ENDING
        )
    else:
        if hide_if_short:
            return SECRETS_REDACT_CHAR * len(secret)
        else:
            return secret


class TokenProvider(ABC):
    """
    Abstract base class for a provider of the "Authorization" header value.

    The __str__ / __repr__ methods are NOT to be used as source of credentials:
    use get_auth_header instead.

    Equality (__eq__) checks whether the generated header values match.
    """

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, TokenProvider):
            return self.get_auth_header() == other.get_auth_header()
        else:
            return False

    @abstractmethod
    def __repr__(self) -> str: ...

    def __or__(self, other: TokenProvider) -> TokenProvider:
        """
        Implement the logic as for "token_a or token_b" for the TokenProvider,
        with the None header being the 'falsey' case.
        """
        if self.get_auth_header() is not None:
            return self
        else:
            return other

    def __bool__(self) -> bool:
        return self.get_auth_header() is not None

    @abstractmethod
    def get_auth_header(self) -> str | None:
        """
        Produce the full value of the Authorization header for subsequent
        requests, or None for unauthenticated requests.
        """
        ...


class JWTTokenProvider(TokenProvider):
    """
    A "pass-through" provider wrapping a JWT token obtained elsewhere
    (for instance from the server's `/_open/auth` endpoint).

    Args:
        token: the JWT token, or None for no authentication.

    Example:
        >>> from arangopy import ArangoClient
        >>> from arangopy.authentication import JWTTokenProvider
        >>> client = ArangoClient(
        ...     "http://localhost:8529",
        ...     token=JWTTokenProvider("eyJhbGciOi..."),
        ... )
    """

    def __init__(self, token: str | None) -> None:
        self.token = token

    @override
    def __repr__(self) -> str:
        if self.token is None:
            return "(none)"
        else:
            return f"{self.__class__.__name__}({_redact_secret(self.token, 15)})"

    @override
    def get_auth_header(self) -> str | None:
        if self.token is None:
            return None
        return f"{DEFAULT_JWT_AUTH_PREFIX}{self.token}"


class UsernamePasswordTokenProvider(TokenProvider):
    """
    A token provider encoding HTTP Basic authentication, i.e. the
    base64-encoded "username:password" string.

    Args:
        username: the username for accessing the server.
        password: the corresponding password.

    Example:
        >>> from arangopy import ArangoClient
        >>> from arangopy.authentication import UsernamePasswordTokenProvider
        >>> client = ArangoClient(
        ...     UsernamePasswordTokenProvider("root", "openSesame"),
        ...     api_endpoint="http://localhost:8529",
        ... )
    """

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password
        self.token = base64.b64encode(
            f"{self.username}:{self.password}".encode()
        ).decode()

    @override
    def __repr__(self) -> str:
        _r_username = _redact_secret(self.username, 6)
        _r_password = FIXED_SECRET_PLACEHOLDER
        return f'{self.__class__.__name__}("username={_r_username}, password={_r_password}")'

    @override
    def get_auth_header(self) -> str:
        return f"{DEFAULT_BASIC_AUTH_PREFIX}{self.token}"
