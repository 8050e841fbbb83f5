import os

import pytest

from wpcontent.client_factory import build_client
from wpcontent.profiles import load_profile


def _require_env(name: str) -> str:
    val = os.environ.get(name)
    if not val:
        raise RuntimeError(f"missing required env var: {name}")
    return val


def pytest_collection_modifyitems(config, items):
    if os.environ.get("RUN_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="integration tests require RUN_INTEGRATION=1")
    for item in items:
        if item.nodeid.startswith("tests/integration/"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def it_env() -> dict[str, str]:
    # Require explicit opt-in.
    if os.environ.get("RUN_INTEGRATION") != "1":
        pytest.skip("set RUN_INTEGRATION=1 to run integration tests")

    # The caller provides the target site and an application password.
    _require_env("WP_USERNAME")
    _require_env("WP_APP_PASSWORD")
    return os.environ.copy()


@pytest.fixture
def live_client(it_env):
    profile = load_profile(it_env.get("WP_PROFILE", "example-blog"))
    return build_client(profile, env=it_env)
