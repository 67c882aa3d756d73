"""Pytest wiring for the runnable examples.

Every example directory holds an ``app.py`` next to its test. The
``example_app`` fixture runs that script (without its ``main()``) and exposes
the names it defines as attributes, fresh for every test.
"""

import runpy
from types import SimpleNamespace

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Namespace of the names defined by the sibling app.py."""
    app_path = request.path.with_name("app.py")
    names = runpy.run_path(str(app_path), run_name=f"example_{app_path.parent.name}")
    return SimpleNamespace(**names)
