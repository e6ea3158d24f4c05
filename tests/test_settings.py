"""Tests for specrefresh.settings."""

from __future__ import annotations

import pytest

from specrefresh.errors import MissingCredential
from specrefresh.settings import LIBRARY, RefreshSettings, require_env


def test_repository_url_uses_lower_cased_library() -> None:
    settings = RefreshSettings()

    assert settings.repository_url == f"https://github.com/soenneker/{LIBRARY.lower()}"


def test_project_file_name_uses_descriptor_extension() -> None:
    settings = RefreshSettings(library="Acme.Client")

    assert settings.project_file_name == "Acme.Client.csproj"


def test_defaults_match_refresh_target() -> None:
    settings = RefreshSettings()

    assert settings.navigation_timeout_ms == 60_000
    assert settings.download_selector == "a[download='swagger.json']"
    assert settings.token_env_var == "GH__TOKEN"
    assert settings.commit_message == "Automated Update"


def test_require_env_returns_value() -> None:
    assert require_env("GH__TOKEN", {"GH__TOKEN": " secret \n"}) == "secret"


@pytest.mark.parametrize("environ", [{}, {"GH__TOKEN": ""}, {"GH__TOKEN": "   "}])
def test_require_env_raises_when_missing(environ) -> None:
    with pytest.raises(MissingCredential) as excinfo:
        require_env("GH__TOKEN", environ)

    assert excinfo.value.name == "GH__TOKEN"


def test_require_env_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("GH__TOKEN", "from-env")

    assert require_env("GH__TOKEN") == "from-env"
