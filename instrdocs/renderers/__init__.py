"""Renderers turning entities into documentation fragments."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

from .disable_list import DisableListRenderer
from .supported_libraries import SupportedLibrariesRenderer
from ..models import InstrumentationEntity

RenderFn = Callable[[Iterable[InstrumentationEntity]], str]


def build_renderers(version: str) -> Dict[str, RenderFn]:
    """Return the named page renderers available to publish targets."""
    libraries = SupportedLibrariesRenderer(version)
    disable_list = DisableListRenderer(version)
    return {
        "supported-libraries": libraries.render,
        "app-servers": libraries.render_app_servers,
        "disable-list": disable_list.render,
    }


__all__ = ["DisableListRenderer", "SupportedLibrariesRenderer", "build_renderers"]
