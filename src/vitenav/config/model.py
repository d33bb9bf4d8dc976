"""Configuration model for the generated VitePress site config."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from vitenav.errors import ConfigError

SEARCH_PROVIDERS = ("local", "algolia")


@dataclass(frozen=True)
class NavItem:
    """A single entry in the navigation tree.

    Leaves carry a ``link``; containers carry non-empty ``items``.
    """

    text: str
    link: str | None = None
    items: tuple[NavItem, ...] = ()
    collapsed: bool | None = None

    @property
    def is_leaf(self) -> bool:
        return self.link is not None

    def to_dict(self) -> dict[str, Any]:
        """Render the node in the shape VitePress expects."""
        if self.link is not None:
            return {"text": self.text, "link": self.link}
        data: dict[str, Any] = {
            "text": self.text,
            "items": [item.to_dict() for item in self.items],
        }
        if self.collapsed is not None:
            data["collapsed"] = self.collapsed
        return data

    def walk(self) -> Iterator[NavItem]:
        """Yield this node and all descendants depth-first, in order."""
        yield self
        for item in self.items:
            yield from item.walk()

    def links(self) -> Iterator[str]:
        for node in self.walk():
            if node.link is not None:
                yield node.link


@dataclass(frozen=True)
class HeadTag:
    """A tag injected into the page ``<head>``, e.g. a favicon link."""

    tag: str
    attrs: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    def to_list(self) -> list[Any]:
        return [self.tag, dict(self.attrs)]


@dataclass(frozen=True)
class SearchConfig:
    """Search provider selection."""

    provider: str = "local"
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.provider not in SEARCH_PROVIDERS:
            known = ", ".join(SEARCH_PROVIDERS)
            raise ConfigError(
                f"Unknown search provider '{self.provider}' (expected one of: {known})"
            )
        # Detached from the caller's mapping
        object.__setattr__(
            self, "options", MappingProxyType(copy.deepcopy(dict(self.options)))
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"provider": self.provider}
        if self.options:
            data["options"] = copy.deepcopy(dict(self.options))
        return data


@dataclass(frozen=True)
class ThemeConfig:
    """Theme section: top navigation, sidebar and search."""

    nav: tuple[NavItem, ...] = ()
    sidebar: tuple[NavItem, ...] = ()
    search: SearchConfig = field(default_factory=SearchConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nav": [item.to_dict() for item in self.nav],
            "sidebar": [item.to_dict() for item in self.sidebar],
            "search": self.search.to_dict(),
        }


@dataclass(frozen=True)
class SiteConfig:
    """Resolved site configuration handed to VitePress."""

    title: str
    description: str = ""
    lang: str = "en-US"
    base: str = "/"
    head: tuple[HeadTag, ...] = ()
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    math: bool = False
    mermaid: bool = False

    def __post_init__(self) -> None:
        # VitePress resolves assets against base, so it must be a directory path
        if not (self.base.startswith("/") and self.base.endswith("/")):
            raise ConfigError(
                f"'base' must start and end with '/', got '{self.base}'"
            )

    def to_dict(self) -> dict[str, Any]:
        """Render the VitePress ``UserConfig`` object."""
        data: dict[str, Any] = {
            "lang": self.lang,
            "base": self.base,
            "title": self.title,
            "description": self.description,
            "head": [tag.to_list() for tag in self.head],
            "themeConfig": self.theme.to_dict(),
        }
        if self.math:
            data["markdown"] = {"math": True}
        if self.mermaid:
            data["mermaid"] = {}
        return data

    def all_links(self) -> list[str]:
        """Return every distinct sidebar and nav link, first occurrence order."""
        seen: dict[str, None] = {}
        for item in (*self.theme.sidebar, *self.theme.nav):
            for link in item.links():
                seen.setdefault(link, None)
        return list(seen)
