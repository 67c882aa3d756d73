from __future__ import annotations

import json
import os
import platform
import sys
from pathlib import Path

import pytest

from whisker import DictLoader, Environment

try:
    import importlib.metadata as importlib_metadata
except ModuleNotFoundError:  # pragma: no cover
    import importlib_metadata  # type: ignore


BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)

TEMPLATES = {
    "minimal": "Hello, {{name}}!",
    "small": """\
<h1>{{title}}</h1>
<ul>
{{#items}}
  <li>{{.}}</li>
{{/items}}
</ul>
""",
    "row": "<tr><td>{{id}}</td><td>{{name}}</td><td>{{#active}}yes{{/active}}{{^active}}no{{/active}}</td></tr>\n",
    "large": """\
<table>
{{#rows}}
  {{>row}}
{{/rows}}
</table>
""",
    "escaping": "{{#rows}}{{name}}{{/rows}}",
}


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "whisker": _version("whisker"),
    }


@pytest.fixture(scope="session")
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def templates() -> dict[str, str]:
    return TEMPLATES


@pytest.fixture(scope="session")
def whisker_env() -> Environment:
    return Environment(loader=DictLoader(TEMPLATES))


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return {"title": "Small", "items": [f"item {i}" for i in range(5)]}


@pytest.fixture(scope="session")
def large_context() -> dict[str, object]:
    return {
        "rows": [
            {"id": i, "name": f"<user {i}> & co", "active": i % 2 == 0}
            for i in range(1000)
        ]
    }
