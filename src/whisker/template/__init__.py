"""Whisker template package: parsed templates, rendering and the template cache."""

from whisker.template.cache import TemplateCache
from whisker.template.context import (
    ABSENT,
    ContextStack,
    ContextValue,
    Lambda,
    ValueKind,
)
from whisker.template.core import Template
from whisker.template.renderer import Renderer

__all__ = [
    "ABSENT",
    "ContextStack",
    "ContextValue",
    "Lambda",
    "Renderer",
    "Template",
    "TemplateCache",
    "ValueKind",
]
