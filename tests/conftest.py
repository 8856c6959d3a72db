"""
Shared pytest fixtures for all tests.
"""

import os
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Automatic test markers based on path
# ---------------------------------------------------------------------------
# We want to avoid sprinkling `@pytest.mark.unit` / `integration` / `manual`
# decorators throughout the codebase.  Instead, assign the marker implicitly
# from the directory the test file lives in.


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Dynamically add pytest markers depending on filepath.

    Any test located in ``tests/unit`` gets the ``unit`` marker,
    tests in ``tests/integration`` get ``integration``, and tests in
    ``tests/manual`` get ``manual``.
    """

    root_path = Path(config.rootdir)

    for item in items:
        rel_path = Path(item.fspath).resolve().relative_to(root_path).as_posix()

        if rel_path.startswith("tests/unit/"):
            item.add_marker("unit")
        elif rel_path.startswith("tests/integration/"):
            item.add_marker("integration")
        elif rel_path.startswith("tests/manual/"):
            item.add_marker("manual")


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------
# ``Settings()`` reads ``DOCSPLIT_*`` variables.  A developer shell exporting
# e.g. ``DOCSPLIT_CHUNK_SIZE`` must not change what the default-built
# splitters do under test, so every test starts from a clean slate.


@pytest.fixture(autouse=True)
def _isolate_docsplit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Strip ``DOCSPLIT_*`` variables and run from a directory without ``.env``."""
    for name in list(os.environ):
        if name.startswith("DOCSPLIT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
