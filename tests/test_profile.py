"""Tests for Secrets Manager profile resolution."""

import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from mongodb_atlas_util.config import HandlerConfig
from mongodb_atlas_util.profile import (
    ProfileError,
    client_from_profile,
    load_profile,
    resolve_profile_name,
    secret_name,
)

CONFIG = HandlerConfig(type_name="MongoDB::Atlas::ProjectInvitation")


def _session(secret_string):
    session = MagicMock()
    session.client.return_value.get_secret_value.return_value = {"SecretString": secret_string}
    return session


def test_secret_name() -> None:
    assert secret_name("default") == "cfn/atlas/profile/default"


@pytest.mark.parametrize("profile_name,expected", [
    (None, "default"),
    ("", "default"),
    ("  ", "default"),
    ("dev", "dev"),
])
def test_resolve_profile_name(profile_name, expected) -> None:
    assert resolve_profile_name(profile_name, CONFIG) == expected


def test_load_profile() -> None:
    session = _session(json.dumps({"PublicKey": "pub", "PrivateKey": "priv", "BaseUrl": "https://example.com/"}))

    profile = load_profile(session, "dev")

    session.client.assert_called_once_with("secretsmanager")
    session.client.return_value.get_secret_value.assert_called_once_with(SecretId="cfn/atlas/profile/dev")
    assert profile.public_key == "pub"
    assert profile.private_key == "priv"
    assert profile.base_url == "https://example.com/"


def test_load_profile_missing_secret() -> None:
    session = MagicMock()
    session.client.return_value.get_secret_value.side_effect = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "not found"}}, "GetSecretValue"
    )
    with pytest.raises(ProfileError, match="cfn/atlas/profile/default"):
        load_profile(session, "default")


@pytest.mark.parametrize("secret_string", [
    "not json",
    json.dumps({"PublicKey": "pub"}),
])
def test_load_profile_invalid_secret(secret_string) -> None:
    with pytest.raises(ProfileError):
        load_profile(_session(secret_string), "default")


def test_load_profile_without_session() -> None:
    with pytest.raises(ProfileError):
        load_profile(None, "default")


def test_client_from_profile_uses_profile_base_url() -> None:
    session = _session(json.dumps({"PublicKey": "pub", "PrivateKey": "priv", "BaseUrl": "https://example.com"}))

    client = client_from_profile(session, "default", CONFIG)

    assert client.base_url == "https://example.com/"
