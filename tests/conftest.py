import os

import pytest


PACKAGE_MANAGER_ENV_VARS = (
    "npm_execpath",
    "npm_config_user_agent",
    "npm_node_execpath",
    "NODE",
    "COREPACK_ENABLE_STRICT",
    "PKGTAG_DEBUG",
)


@pytest.fixture(autouse=True)
def isolate_package_manager_env(monkeypatch):
    """Remove package manager variables inherited from the test runner.

    Running the suite through ``npm test`` or similar would otherwise set
    ``npm_execpath`` and make every detection test resolve to that
    launcher.
    """
    for name in PACKAGE_MANAGER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def clean_environ():
    """A copy of the current environment without package manager variables."""
    return {k: v for k, v in os.environ.items() if k not in PACKAGE_MANAGER_ENV_VARS}
