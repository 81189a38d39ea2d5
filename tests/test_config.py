import logging

import pytest

from storefront_sitemap.core.config import (
    GRAPHQL_MAX_ENTRIES,
    MAX_URLS,
    SITEMAPS_LIMIT,
    Settings,
    SitemapConfigurationError,
    resolve_cache_settings,
    resolve_chunk_size,
    resolve_fetch_page_size,
    resolve_sitemap_config,
)


def test_chunk_size_defaults_to_max_urls() -> None:
    assert resolve_chunk_size(None) == MAX_URLS
    assert resolve_chunk_size("") == MAX_URLS


def test_chunk_size_override_is_used() -> None:
    assert resolve_chunk_size("1000") == 1000
    assert resolve_chunk_size(" 25 ") == 25
    assert resolve_chunk_size(7) == 7


def test_invalid_chunk_size_override_falls_back(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert resolve_chunk_size("lots") == MAX_URLS
        assert resolve_chunk_size("12.5") == MAX_URLS
        assert resolve_chunk_size("0") == MAX_URLS
        assert resolve_chunk_size("-5") == MAX_URLS
    assert "SITEMAP_URL_CHUNK_SIZE" in caplog.text


def test_chunk_size_override_is_clamped_to_max_urls() -> None:
    assert resolve_chunk_size(str(MAX_URLS + 1)) == MAX_URLS


def test_non_positive_default_is_a_configuration_error() -> None:
    with pytest.raises(SitemapConfigurationError):
        resolve_chunk_size(None, default=0)
    with pytest.raises(SitemapConfigurationError):
        resolve_chunk_size("10", default=-1)


def test_fetch_page_size_is_bounded_by_graphql_limit() -> None:
    assert resolve_fetch_page_size() == GRAPHQL_MAX_ENTRIES


def test_cache_settings_default_and_override() -> None:
    default = resolve_cache_settings(None)
    assert default.as_cache_control() == "public, max-age=1, stale-while-revalidate=300"

    custom = resolve_cache_settings('{"mode": "private", "maxAge": 60, "staleWhileRevalidate": 10}')
    assert custom.mode == "private"
    assert custom.max_age == 60
    assert custom.stale_while_revalidate == 10


def test_invalid_cache_settings_fall_back(caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert resolve_cache_settings("{not json") == resolve_cache_settings(None)
        assert resolve_cache_settings('["public"]') == resolve_cache_settings(None)
        assert resolve_cache_settings('{"maxAge": -3}') == resolve_cache_settings(None)
    assert "SITEMAP_GRAPHQL_CACHE_SETTINGS_JSON" in caplog.text


def test_resolve_sitemap_config_from_settings() -> None:
    app_settings = Settings(
        SITEMAP_URL_CHUNK_SIZE="500",
        SITEMAP_FILES_LIMIT=4,
        STOREFRONT_LANGUAGE="FR",
    )
    config = resolve_sitemap_config(app_settings)

    assert config.chunk_size == 500
    assert config.fetch_page_size == GRAPHQL_MAX_ENTRIES
    assert config.files_limit == 4
    assert config.entry_limit == 2000
    assert config.language == "FR"


def test_non_positive_files_limit_uses_default() -> None:
    config = resolve_sitemap_config(Settings(SITEMAP_FILES_LIMIT=0))
    assert config.files_limit == SITEMAPS_LIMIT
    assert config.entry_limit == SITEMAPS_LIMIT * MAX_URLS
