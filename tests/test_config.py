from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from realtalk_backend.config import Config, parse_duration


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("2w", timedelta(weeks=2)),
        ("3600", timedelta(hours=1)),
        (" 1D ", timedelta(days=1)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "seven days", "7y", "-1d", "0", "1.5h"])
def test_parse_duration_rejects(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_config_derived_properties():
    cfg = replace(Config(), AUTH_TOKEN_EXPIRES_IN="2h", APP_ENV="Development", CORS_ALLOW_ORIGINS="a.io, b.io,")
    assert cfg.token_ttl == timedelta(hours=2)
    assert cfg.is_development
    assert cfg.cors_origins == ["a.io", "b.io"]
    assert not replace(cfg, APP_ENV="production").is_development


def test_config_is_immutable():
    cfg = Config()
    with pytest.raises(Exception):
        cfg.AUTH_JWT_SECRET = "changed"  # type: ignore[misc]
