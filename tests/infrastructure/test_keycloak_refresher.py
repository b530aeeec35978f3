"""
Tests for KeycloakTokenRefresher.
"""

import time

import pytest
from unittest.mock import MagicMock, patch
from keycloak.exceptions import (
    KeycloakAuthenticationError,
    KeycloakConnectionError,
    KeycloakPostError,
)

from auth_tokens.config import AuthConfig
from auth_tokens.domain.errors import (
    NetworkError,
    NotAuthorizedError,
    TokenRefreshFault,
)
from auth_tokens.infrastructure.adapters.keycloak import KeycloakTokenRefresher


@pytest.fixture
def mock_keycloak():
    return MagicMock()


@pytest.fixture
def refresher(mock_keycloak):
    return KeycloakTokenRefresher(mock_keycloak)


@pytest.mark.asyncio
async def test_refresh_success(refresher, mock_keycloak, auth_config, make_pair, make_token):
    access, id_token = make_token(sub="u2"), make_token(sub="u2")
    mock_keycloak.refresh_token.return_value = {
        "access_token": access,
        "id_token": id_token,
        "refresh_token": "refresh-2",
    }

    new = await refresher.refresh(make_pair(), auth_config)

    mock_keycloak.refresh_token.assert_called_once_with("refresh-1")
    assert new.access_token.raw == access
    assert new.id_token.raw == id_token
    assert new.refresh_token == "refresh-2"
    assert new.clock_drift is None


@pytest.mark.asyncio
async def test_refresh_keeps_refresh_token_when_not_rotated(
    refresher, mock_keycloak, auth_config, make_pair, make_token
):
    mock_keycloak.refresh_token.return_value = {"access_token": make_token()}

    new = await refresher.refresh(make_pair(refresh_token="keep-me"), auth_config)

    assert new.refresh_token == "keep-me"
    assert new.id_token is None


@pytest.mark.asyncio
async def test_refresh_without_refresh_token(refresher, mock_keycloak, auth_config, make_pair):
    with pytest.raises(TokenRefreshFault) as exc:
        await refresher.refresh(make_pair(refresh_token=None), auth_config)

    assert exc.value.code == "NO_REFRESH_TOKEN"
    mock_keycloak.refresh_token.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_without_provider_config(refresher, make_pair):
    with pytest.raises(TokenRefreshFault) as exc:
        await refresher.refresh(make_pair(), AuthConfig())

    assert exc.value.code == "TOKEN_PROVIDER_NOT_CONFIGURED"


@pytest.mark.asyncio
async def test_connection_error_is_network_error(
    refresher, mock_keycloak, auth_config, make_pair
):
    mock_keycloak.refresh_token.side_effect = KeycloakConnectionError("Can't connect")

    with pytest.raises(NetworkError):
        await refresher.refresh(make_pair(), auth_config)


@pytest.mark.asyncio
async def test_builtin_timeout_is_network_error(
    refresher, mock_keycloak, auth_config, make_pair
):
    mock_keycloak.refresh_token.side_effect = TimeoutError("timed out")

    with pytest.raises(NetworkError):
        await refresher.refresh(make_pair(), auth_config)


@pytest.mark.asyncio
async def test_rejected_refresh_token_on_401_is_not_authorized(
    refresher, mock_keycloak, auth_config, make_pair
):
    body = b'{"error":"invalid_grant","error_description":"Session not active"}'
    mock_keycloak.refresh_token.side_effect = KeycloakAuthenticationError(
        error_message=body, response_code=401, response_body=body
    )

    with pytest.raises(NotAuthorizedError):
        await refresher.refresh(make_pair(), auth_config)


@pytest.mark.asyncio
async def test_bad_client_credentials_are_refresh_fault(
    refresher, mock_keycloak, auth_config, make_pair
):
    body = b'{"error":"invalid_client","error_description":"Invalid client credentials"}'
    mock_keycloak.refresh_token.side_effect = KeycloakAuthenticationError(
        error_message=body, response_code=401, response_body=body
    )

    with pytest.raises(TokenRefreshFault) as exc:
        await refresher.refresh(make_pair(), auth_config)

    assert exc.value.details["response_code"] == 401


@pytest.mark.asyncio
async def test_invalid_grant_is_not_authorized(
    refresher, mock_keycloak, auth_config, make_pair
):
    body = b'{"error":"invalid_grant","error_description":"Token is not active"}'
    mock_keycloak.refresh_token.side_effect = KeycloakPostError(
        error_message=body, response_code=400, response_body=body
    )

    with pytest.raises(NotAuthorizedError):
        await refresher.refresh(make_pair(), auth_config)


@pytest.mark.asyncio
async def test_server_error_is_refresh_fault(
    refresher, mock_keycloak, auth_config, make_pair
):
    mock_keycloak.refresh_token.side_effect = KeycloakPostError(
        error_message=b"boom", response_code=500, response_body=b"boom"
    )

    with pytest.raises(TokenRefreshFault) as exc:
        await refresher.refresh(make_pair(), auth_config)

    assert exc.value.details["response_code"] == 500


@pytest.mark.asyncio
async def test_malformed_response_is_refresh_fault(
    refresher, mock_keycloak, auth_config, make_pair
):
    mock_keycloak.refresh_token.return_value = {"access_token": "not-a-jwt"}

    with pytest.raises(TokenRefreshFault) as exc:
        await refresher.refresh(make_pair(), auth_config)

    assert exc.value.code == "INVALID_TOKEN_RESPONSE"


@pytest.mark.asyncio
async def test_compute_clock_drift_from_iat(mock_keycloak, auth_config, make_pair, make_token):
    refresher = KeycloakTokenRefresher(mock_keycloak, compute_clock_drift=True)
    # Issuer clock 60s ahead of ours
    issued_at = int(time.time()) + 60
    mock_keycloak.refresh_token.return_value = {
        "access_token": make_token(iat=issued_at),
    }

    new = await refresher.refresh(make_pair(), auth_config)

    assert -62_000 < new.clock_drift < -58_000


def test_client_built_from_config(provider_config):
    with patch(
        "auth_tokens.infrastructure.adapters.keycloak.KeycloakOpenID"
    ) as keycloak_cls:
        refresher = KeycloakTokenRefresher()
        first = refresher._get_client(provider_config)
        second = refresher._get_client(provider_config)

    assert first is second
    keycloak_cls.assert_called_once_with(
        server_url="http://keycloak",
        realm_name="test-realm",
        client_id="test-client",
        client_secret_key=None,
        verify=True,
    )
