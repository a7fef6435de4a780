"""E2E test fixtures: real GitHub and skills.sh APIs."""

import os

import pytest


def pytest_collection_modifyitems(config, items):
    if os.environ.get("SKILL_FETCH_E2E") == "1":
        return
    skip = pytest.mark.skip(reason="set SKILL_FETCH_E2E=1 to hit the real APIs")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)
