"""Pytest configuration and fixtures for Whisker tests."""

import pytest

from whisker import DictLoader, Environment, TemplateCache


@pytest.fixture
def env():
    """Create a basic Whisker Environment."""
    return Environment()


@pytest.fixture
def cache():
    """Create an empty TemplateCache."""
    return TemplateCache()


@pytest.fixture
def env_with_loader():
    """Create a Whisker Environment with DictLoader and test partials."""
    loader = DictLoader(
        {
            "user": "<b>{{name}}</b>",
            "list": "{{#items}}\n- {{.}}\n{{/items}}\n",
            "lines": "one\ntwo\n",
            "node": "{{name}}{{#children}}({{>node}}){{/children}}",
            "loop": "{{>loop}}",
        }
    )
    return Environment(loader=loader)


def assert_renders(env: Environment, source: str, data, expected: str) -> None:
    """Assert a template renders to exactly ``expected``.

    Args:
        env: Environment to render with.
        source: Template source.
        data: Data to render against.
        expected: The expected output.
    """
    actual = env.render(source, data)
    assert actual == expected, (
        f"Template output mismatch:\n"
        f"  Source: {source!r}\n"
        f"  Actual: {actual!r}\n"
        f"  Expected: {expected!r}"
    )
