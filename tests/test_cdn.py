import logging

import pytest
from starlette.responses import Response

from app.cdn.cache_control import build_cache_control, cache_control_factory
from app.cdn.surrogate_key import SurrogateKey, set_default_fastly_surrogate_key, set_fastly_surrogate_key


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        ({"max_age": 60}, "public, max-age=60"),
        ({"max_age": 60, "public": False}, "max-age=60"),
        ({"max_age": 0}, "private, no-store"),
        ({"max_age": 0, "max_age_zero": True}, "private, no-store, max-age=0"),
        (
            {"max_age": 60 * 60},
            "public, max-age=3600, stale-while-revalidate=3600, stale-if-error=86400",
        ),
        (
            {"max_age": 365 * 24 * 60 * 60, "immutable": True},
            "public, max-age=31536000, immutable, stale-while-revalidate=3600, stale-if-error=86400",
        ),
    ],
)
def test_build_cache_control(kwargs, expected):
    assert build_cache_control(**kwargs) == expected


def test_cache_control_factory_sets_header():
    response = Response()

    cache_control_factory(60)(response)

    assert response.headers["cache-control"] == "public, max-age=60"


def test_cache_control_factory_custom_key():
    response = Response()

    cache_control_factory(300, key="surrogate-control")(response)

    assert response.headers["surrogate-control"] == "public, max-age=300"
    assert "cache-control" not in response.headers


def test_cache_control_warns_about_cookies_outside_production(caplog):
    response = Response(headers={"set-cookie": "_csrf=abc"})

    with caplog.at_level(logging.WARNING, logger="app.cdn.cache_control"):
        cache_control_factory(60)(response)

    assert "also sets a cookie" in caplog.text


@pytest.mark.parametrize("is_production,warned", [(True, False), (False, True)])
def test_cache_control_cookie_warning_follows_given_environment(caplog, is_production, warned):
    response = Response(headers={"set-cookie": "_csrf=abc"})

    with caplog.at_level(logging.WARNING, logger="app.cdn.cache_control"):
        cache_control_factory(60, is_production=is_production)(response)

    assert ("also sets a cookie" in caplog.text) is warned
    assert response.headers["cache-control"] == "public, max-age=60"


def test_set_fastly_surrogate_key():
    response = Response()

    set_fastly_surrogate_key(response, SurrogateKey.MANUAL)
    assert response.headers["surrogate-key"] == "manual-purge"

    set_fastly_surrogate_key(response, SurrogateKey.DEFAULT)
    assert response.headers["surrogate-key"] == "every-deployment"


def test_default_surrogate_key_does_not_override_explicit_one():
    response = Response()
    set_fastly_surrogate_key(response, SurrogateKey.MANUAL)

    set_default_fastly_surrogate_key(response)

    assert response.headers["surrogate-key"] == "manual-purge"


def test_default_surrogate_key_is_added_when_missing():
    response = Response()

    set_default_fastly_surrogate_key(response)

    assert response.headers["surrogate-key"] == "every-deployment"
