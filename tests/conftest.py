"""Pytest configuration and shared fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate configuration-related environment variables for each test.

    Keeps a developer's own config files and PROPSEARCH_* overrides from
    leaking into tests.
    """
    for name in list(os.environ):
        if name.startswith("PROPSEARCH_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    yield


@pytest.fixture
def listings() -> list[dict]:
    """Property listings shaped like the records served by the listings API."""
    return [
        {
            "id": 1,
            "name": "東京マンション",
            "building": {"name": "渋谷タワー", "address": "東京都渋谷区道玄坂"},
            "rent": 120000,
            "tags": ["駅近", "ペット可"],
        },
        {
            "id": 2,
            "name": "大阪ビル",
            "building": {"name": "梅田ハイツ", "address": "大阪府大阪市北区"},
            "rent": 80000,
            "tags": ["駅近"],
        },
        {
            "id": 3,
            "name": "Shinjuku Garden",
            "building": {"name": "新宿レジデンス", "address": "東京都新宿区西新宿"},
            "rent": 150000,
            "tags": [],
        },
    ]


@pytest.fixture
def listing_fields() -> list[str]:
    """Fields indexed for property listings."""
    return ["name", "building.name", "building.address"]
