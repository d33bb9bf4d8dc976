"""Configuration loading from vitenav.yml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from vitenav.config.derive import build_nav_tree, nav_view, sidebar_view
from vitenav.config.model import (
    HeadTag,
    SearchConfig,
    SiteConfig,
    ThemeConfig,
)
from vitenav.errors import ConfigError

DEFAULT_TITLE = "Documentation"
DEFAULT_LANG = "en-US"
DEFAULT_BASE = "/"

SITE_KEYS = frozenset(
    {
        "lang",
        "base",
        "title",
        "description",
        "head",
        "search",
        "math",
        "mermaid",
        "sidebar_collapsed",
        "nav_depth",
        "nav",
    }
)


class _PermissiveLoader(yaml.SafeLoader):
    """SafeLoader that ignores unknown Python tags.

    Configs copied from other generators sometimes carry Python-specific YAML
    tags like !python/object/apply which SafeLoader rejects. This loader
    treats them as raw strings to allow parsing the rest of the config.
    """


def _ignore_unknown(loader: yaml.Loader, tag_suffix: str, node: yaml.Node) -> str:
    """Return the raw tag as a placeholder string."""
    return f"<{node.tag}>"


# Register handler for all Python tags (both full and shorthand forms)
_PermissiveLoader.add_multi_constructor("tag:yaml.org,2002:python/", _ignore_unknown)
_PermissiveLoader.add_multi_constructor("!python/", _ignore_unknown)


def load_config(config_path: Path) -> SiteConfig:
    """Load and resolve configuration from vitenav.yml.

    Args:
        config_path: Path to vitenav.yml file.

    Returns:
        Resolved SiteConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the config is not a mapping or a field is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.load(f, Loader=_PermissiveLoader)

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must be a mapping: {config_path}")

    return site_from_mapping(raw)


def site_from_mapping(raw: dict[str, Any]) -> SiteConfig:
    """Build a SiteConfig from a parsed vitenav.yml mapping."""
    unknown = sorted(str(key) for key in raw if key not in SITE_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    title = _string(raw, "title", DEFAULT_TITLE)
    description = _string(raw, "description", "")
    lang = _string(raw, "lang", DEFAULT_LANG)
    base = _string(raw, "base", DEFAULT_BASE)
    math = _flag(raw, "math", False)
    mermaid = _flag(raw, "mermaid", False)

    sidebar_collapsed = raw.get("sidebar_collapsed")
    if sidebar_collapsed is not None and not isinstance(sidebar_collapsed, bool):
        raise ConfigError("'sidebar_collapsed' must be true or false")

    nav_depth = raw.get("nav_depth", 2)
    if isinstance(nav_depth, bool) or not isinstance(nav_depth, int) or nav_depth < 1:
        raise ConfigError("'nav_depth' must be a positive integer")

    nav = raw.get("nav")
    if nav is None:
        nav = []
    tree = build_nav_tree(nav)

    theme = ThemeConfig(
        nav=tuple(nav_view(tree, max_depth=nav_depth)),
        sidebar=tuple(sidebar_view(tree, collapsed=sidebar_collapsed)),
        search=_search(raw.get("search")),
    )

    return SiteConfig(
        title=title,
        description=description,
        lang=lang,
        base=base,
        head=tuple(_head(raw.get("head"))),
        theme=theme,
        math=math,
        mermaid=mermaid,
    )


def _string(raw: dict[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _flag(raw: dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value


def _search(value: Any) -> SearchConfig:
    """Resolve the search section.

    Accepts a bare provider name or a mapping:

        search: local

        search:
          provider: algolia
          options:
            appId: ...
    """
    if value is None:
        return SearchConfig()
    if isinstance(value, str):
        return SearchConfig(provider=value)
    if not isinstance(value, dict):
        raise ConfigError(
            f"'search' must be a provider name or mapping, got {type(value).__name__}"
        )

    provider = value.get("provider", "local")
    if not isinstance(provider, str):
        raise ConfigError("'search.provider' must be a string")
    options = value.get("options")
    if options is None:
        options = {}
    if not isinstance(options, dict):
        raise ConfigError("'search.options' must be a mapping")
    return SearchConfig(provider=provider, options=options)


def _head(value: Any) -> list[HeadTag]:
    """Resolve head tags from pair form or mapping form.

    Pair form follows VitePress:

        head:
          - [link, {rel: icon, href: /favicon.ico}]

    Mapping form:

        head:
          - tag: link
            attrs: {rel: icon, href: /favicon.ico}
    """
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"'head' must be a list, got {type(value).__name__}")

    tags: list[HeadTag] = []
    for index, entry in enumerate(value):
        location = f"head[{index}]"
        if isinstance(entry, list):
            if len(entry) not in (1, 2):
                raise ConfigError(f"{location} must be [tag, attrs]")
            tag = entry[0]
            attrs = entry[1] if len(entry) == 2 else {}
        elif isinstance(entry, dict):
            tag = entry.get("tag")
            attrs = entry.get("attrs") or {}
        else:
            raise ConfigError(
                f"{location} must be a list or mapping, got {type(entry).__name__}"
            )

        if not isinstance(tag, str) or not tag:
            raise ConfigError(f"{location} is missing a tag name")
        if not isinstance(attrs, dict):
            raise ConfigError(f"{location} attributes must be a mapping")
        tags.append(HeadTag(tag=tag, attrs=_head_attrs(attrs, location)))
    return tags


def _head_attrs(attrs: dict[Any, Any], location: str) -> dict[str, str]:
    """Normalise attribute values to the strings VitePress writes into HTML.

    ``true`` becomes a bare boolean attribute (``async: ""``); numbers are
    written as-is. ``false``, null and nested values have no HTML form.
    """
    result: dict[str, str] = {}
    for key, value in attrs.items():
        if not isinstance(key, str) or not key:
            raise ConfigError(f"{location} attribute names must be strings")
        if value is True:
            result[key] = ""
        elif isinstance(value, str):
            result[key] = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            result[key] = str(value)
        else:
            raise ConfigError(
                f"{location} attribute '{key}' must be a string, number or true, "
                f"got {value!r}"
            )
    return result
