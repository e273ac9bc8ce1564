"""Tests for the Client facade and .env credential loading."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from Cordlink.client import Client
from Cordlink.core.exceptions import ConfigError, SecondFactorRequired
from Cordlink.core.intents import Intents

from .conftest import FakeResponse

_CLEAN_ENV = {"CORDLINK_ENV_FILE": os.devnull}


def test_from_token(http_client) -> None:
    client = Client.from_token("agent/1.0", "bot abc", http_factory=lambda: http_client)

    assert client.is_bot is True
    assert client.session.token == "Bot abc"
    assert client.identify_payload()["intents"] == int(Intents.ALL_WITHOUT_PRIVILEGED)


def test_from_password_with_code_uses_second_factor(http_client) -> None:
    http_client.queue(
        FakeResponse(200, {"mfa": True, "ticket": "t-1"}),
        FakeResponse(200, {"token": "final"}),
    )

    client = Client.from_password("agent/1.0", "user", "pass", code="123456", http_factory=lambda: http_client)

    assert client.session.token == "final"
    assert client.session.second_factor is True


def test_from_password_without_code(http_client) -> None:
    http_client.queue(FakeResponse(200, {"mfa": True, "ticket": "t-1"}))

    with pytest.raises(SecondFactorRequired):
        Client.from_password("agent/1.0", "user", "pass", http_factory=lambda: http_client)


def test_from_env_prefers_token(tmp_path: Path, http_client) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CORDLINK_TOKEN=Bot from-env\nCORDLINK_USERNAME=user\nCORDLINK_PASSWORD=pass\n")

    with patch.dict(os.environ, _CLEAN_ENV, clear=True):
        client = Client.from_env(env_path=str(env_file), http_factory=lambda: http_client)

    assert client.session.token == "Bot from-env"
    assert http_client.calls == []


def test_from_env_uses_password(tmp_path: Path, http_client) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CORDLINK_USERNAME=user\nCORDLINK_PASSWORD=pass\nCORDLINK_USER_AGENT=env-agent\n")
    http_client.queue(FakeResponse(200, {"token": "abc"}))

    with patch.dict(os.environ, _CLEAN_ENV, clear=True):
        client = Client.from_env(env_path=str(env_file), http_factory=lambda: http_client)

    assert client.session.token == "abc"
    assert client.session.user_agent == "env-agent"
    assert http_client.calls[0]["json"] == {"email": "user", "password": "pass"}


def test_from_env_without_credentials(tmp_path: Path, http_client) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CORDLINK_USERNAME=user\n")

    with patch.dict(os.environ, _CLEAN_ENV, clear=True):
        with pytest.raises(ConfigError):
            Client.from_env(env_path=str(env_file), http_factory=lambda: http_client)
