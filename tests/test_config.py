from __future__ import annotations

import pytest
from dotenv import dotenv_values

from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import MissingCredentialsError


def test_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("VERCEL_API_KEY", "vk_env")
    monkeypatch.setenv("GITHUB_TOKEN", "gh_env")

    settings = AppSettings(_env_file=None)

    assert settings.require_credentials() == ("vk_env", "gh_env")


def test_legacy_vercel_variable_name(monkeypatch):
    monkeypatch.setenv("VERCELL_API_KEY", "vk_legacy")

    assert AppSettings(_env_file=None).vercel_api_key == "vk_legacy"


def test_prefixed_settings(monkeypatch):
    monkeypatch.setenv("VERCEL_REPO_PUSH_HTTP_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("VERCEL_REPO_PUSH_DEFAULT_PRIVATE", "false")

    settings = AppSettings(_env_file=None)

    assert settings.http_timeout_seconds == 12.5
    assert settings.default_private is False


def test_missing_and_blank_credentials(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "   ")
    settings = AppSettings(_env_file=None)

    assert settings.missing_credentials() == ["VERCEL_API_KEY", "GITHUB_TOKEN"]
    with pytest.raises(MissingCredentialsError):
        settings.require_credentials()


def test_credentials_from_dotenv(tmp_path):
    (tmp_path / ".env").write_text("VERCEL_API_KEY=vk_file\nGITHUB_TOKEN=gh_file\n")

    settings = AppSettings(_env_file=tmp_path / ".env")

    assert settings.require_credentials() == ("vk_file", "gh_file")


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nGITHUB_TOKEN='gh_old'\nOTHER=1\n")

    write_user_env_vars({"GITHUB_TOKEN": "gh_new", "VERCEL_API_KEY": "vk"}, env_path=env_path)

    assert env_path.read_text().splitlines()[0] == "# old"
    assert dotenv_values(env_path) == {
        "GITHUB_TOKEN": "gh_new",
        "OTHER": "1",
        "VERCEL_API_KEY": "vk",
    }


def test_write_user_env_vars_creates_file(tmp_path):
    env_path = tmp_path / "fresh" / ".env"

    write_user_env_vars({"GITHUB_TOKEN": "gh"}, env_path=env_path)

    assert dotenv_values(env_path) == {"GITHUB_TOKEN": "gh"}


def test_user_env_file_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_user_env_file() == tmp_path / "vercel-repo-push" / ".env"


def test_user_env_file_is_resolved_when_settings_load(monkeypatch, tmp_path):
    write_user_env_vars(
        {"VERCEL_API_KEY": "vk_user", "GITHUB_TOKEN": "gh_user"},
        env_path=tmp_path / "elsewhere" / "vercel-repo-push" / ".env",
    )

    assert AppSettings().missing_credentials() == ["VERCEL_API_KEY", "GITHUB_TOKEN"]

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "elsewhere"))

    assert AppSettings().require_credentials() == ("vk_user", "gh_user")
    assert AppSettings(_env_file=None).missing_credentials() == [
        "VERCEL_API_KEY",
        "GITHUB_TOKEN",
    ]


def test_project_env_wins_over_user_env(monkeypatch, tmp_path):
    write_user_env_vars(
        {"VERCEL_API_KEY": "vk_user", "GITHUB_TOKEN": "gh_user"},
        env_path=tmp_path / "config" / "vercel-repo-push" / ".env",
    )
    (tmp_path / ".env").write_text("GITHUB_TOKEN=gh_project\n")

    assert AppSettings().require_credentials() == ("vk_user", "gh_project")
