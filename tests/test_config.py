"""
Tests for settings.
"""

import pytest

from offline_gateway.config import DEFAULT_STATIC_RESOURCES, Settings, _split_list


def test_cache_names_carry_version():
    config = Settings(cache_version="v7")

    assert config.static_cache_name == "language-of-wearing-static-v7"
    assert config.dynamic_cache_name == "language-of-wearing-dynamic-v7"


def test_custom_prefix():
    config = Settings(cache_prefix="lw-", cache_version="2024")

    assert config.static_cache_name == "lw-static-2024"


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_version": ""},
        {"cache_prefix": ""},
        {"storage_backend": "sqlite"},
        {"fetch_timeout": 0},
        {"origin_url": "ftp://files.test"},
    ],
)
def test_invalid_settings(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_split_list():
    assert _split_list(None, ("/",)) == ("/",)
    assert _split_list("", ("/",)) == ("/",)
    assert _split_list(" /, /app.css ,,", ()) == ("/", "/app.css")


def test_static_resources_from_environment(monkeypatch):
    monkeypatch.setenv("GATEWAY_STATIC_RESOURCES", "/,/index.html")

    assert Settings().static_resources == ("/", "/index.html")


def test_default_static_resources(monkeypatch):
    monkeypatch.delenv("GATEWAY_STATIC_RESOURCES", raising=False)

    resources = Settings().static_resources

    assert resources == DEFAULT_STATIC_RESOURCES
    assert "/manifest.json" in resources
