"""Renderer registry.

Maps a format name (txt/html/pdf/markdown) to a renderer factory. Lookups of
unknown formats return None so callers can report a configuration error
before any rendering starts.
"""

from __future__ import annotations

from collections.abc import Callable

from ..services.calculation import CalculationProvider
from .base import Renderer
from .html import HtmlRenderer, PdfRenderer, RendererUnavailableError
from .markdown import MarkdownRenderer
from .text import TextRenderer

__all__ = [
    "HtmlRenderer",
    "MarkdownRenderer",
    "PdfRenderer",
    "Renderer",
    "RendererUnavailableError",
    "TextRenderer",
    "available_formats",
    "get_renderer",
    "register_renderer",
]

RendererFactory = Callable[[CalculationProvider], Renderer]

_REGISTRY: dict[str, RendererFactory] = {}


def register_renderer(name: str, factory: RendererFactory) -> None:
    """Register (or replace) the factory for format ``name``."""
    _REGISTRY[name.lower()] = factory


def available_formats() -> list[str]:
    return sorted(_REGISTRY)


def get_renderer(name: str, calculation_provider: CalculationProvider | None = None) -> Renderer | None:
    """Return a renderer for ``name`` or None if no such format is registered.

    ``md`` is accepted as an alias of ``markdown``.
    """
    key = name.lower()
    if key == "md":
        key = "markdown"
    factory = _REGISTRY.get(key)
    if factory is None:
        return None
    return factory(calculation_provider or CalculationProvider())


for _cls in (TextRenderer, HtmlRenderer, PdfRenderer, MarkdownRenderer):
    register_renderer(_cls.name, _cls)
