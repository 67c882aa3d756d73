"""Whisker — logic-less Mustache templates for Python.

Compiles template text into an immutable node tree once, then renders that
tree against nested data: mappings, objects, lists and callables.

Quickstart:
    >>> import whisker
    >>> whisker.render("Hello, {{name}}!", {"name": "World"})
    'Hello, World!'

With partials:
    >>> from whisker import Environment
    >>> env = Environment(loader={"item": "<li>{{.}}</li>\\n"})
    >>> env.render("<ul>\\n{{#items}}\\n  {{>item}}\\n{{/items}}\\n</ul>", {"items": [1, 2]})
    '<ul>\\n  <li>1</li>\\n  <li>2</li>\\n</ul>'

Architecture:
Template Source → Lexer (one tag at a time) → Parser → Node tree → Renderer

Tags:
    {{name}}                 escaped variable
    {{{name}}} / {{&name}}   unescaped variable
    {{#name}}...{{/name}}    section (list, truthy value, record or lambda)
    {{^name}}...{{/name}}    inverted section
    {{!comment}}             comment
    {{>name}}                partial
    {{=<% %>=}}              set delimiters

Caching:
Parsed node trees are memoized per distinct template text in a
``TemplateCache`` owned by each ``Environment``. The module-level
``render()`` uses a process-wide default Environment whose cache is never
evicted; long-running processes that render unbounded numbers of distinct
templates should use their own Environment.

"""

from collections.abc import Mapping
from typing import Any

from whisker._types import DEFAULT_DELIMITERS, Delimiters, TagType
from whisker.environment import (
    ChoiceLoader,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    FunctionLoader,
    MalformedSectionError,
    MalformedTagError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    build_source_snippet,
)
from whisker.template import ContextStack, Lambda, Template, TemplateCache
from whisker.utils.html import html_escape

__version__ = "0.1.0"

# One per process, created at import time.
_default_env = Environment()


def get_default_environment() -> Environment:
    """The shared Environment behind the module-level ``render()``."""
    return _default_env


def render(
    template: str,
    data: Any = None,
    partials: Mapping[str, str] | None = None,
) -> str:
    """Render ``template`` against ``data``, with optional named partials.

    Example:
        >>> render("{{#items}}{{.}}{{/items}}", {"items": [1, 2, 3]})
        '123'
    """
    return get_default_environment().render(template, data, partials)


__all__ = [
    "DEFAULT_DELIMITERS",
    "ChoiceLoader",
    "ContextStack",
    "Delimiters",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "Lambda",
    "MalformedSectionError",
    "MalformedTagError",
    "SourceSnippet",
    "TagType",
    "Template",
    "TemplateCache",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "__version__",
    "build_source_snippet",
    "get_default_environment",
    "html_escape",
    "render",
]
