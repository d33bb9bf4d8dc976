"""Helpers for deriving the nav and sidebar trees from one entry list."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from vitenav.config.model import NavItem
from vitenav.errors import ConfigError
from vitenav.frontmatter import filename_title, first_heading, read_front_matter

ENTRY_KEYS = frozenset({"text", "link", "children", "collapsed"})
SKIP_DIRS = frozenset({"node_modules", "public"})


def build_nav_tree(entries: Sequence[Any], location: str = "nav") -> list[NavItem]:
    """Convert an ordered entry list into NavItems.

    Args:
        entries: Mappings with ``text`` and either ``link`` or ``children``,
            optionally ``collapsed``.
        location: Path of ``entries`` in the source, used in error messages.

    Returns:
        NavItems in the same order as ``entries``.

    Raises:
        ConfigError: If an entry is unlabeled, has both a link and children,
            has neither, or carries values of the wrong type.
    """
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        raise ConfigError(
            f"{location} must be a list of entries, got {type(entries).__name__}"
        )
    return [
        _build_item(entry, f"{location}[{index}]")
        for index, entry in enumerate(entries)
    ]


def _build_item(entry: Any, location: str) -> NavItem:
    if not isinstance(entry, dict):
        raise ConfigError(
            f"{location} must be a mapping, got {type(entry).__name__}"
        )

    unknown = sorted(str(key) for key in entry if key not in ENTRY_KEYS)
    if unknown:
        raise ConfigError(f"{location} has unknown keys: {', '.join(unknown)}")

    text = entry.get("text")
    if not isinstance(text, str) or not text.strip():
        raise ConfigError(f"{location} is missing a 'text' label")
    label = f"{location} ('{text}')"

    link = entry.get("link")
    if link is not None and (not isinstance(link, str) or not link):
        raise ConfigError(f"{label} 'link' must be a non-empty string")

    collapsed = entry.get("collapsed")
    if collapsed is not None and not isinstance(collapsed, bool):
        raise ConfigError(f"{label} 'collapsed' must be true or false")

    children = entry.get("children")
    if children is None:
        children = []
    if not isinstance(children, list):
        raise ConfigError(
            f"{label} 'children' must be a list, got {type(children).__name__}"
        )

    if link is not None and children:
        raise ConfigError(f"{label} has both a 'link' and 'children'")
    if link is None and not children:
        raise ConfigError(f"{label} needs a 'link' or non-empty 'children'")

    if link is not None:
        if collapsed is not None:
            raise ConfigError(f"{label} 'collapsed' only applies to entries with children")
        return NavItem(text=text, link=link)
    items = build_nav_tree(children, f"{location}.children")
    return NavItem(text=text, items=tuple(items), collapsed=collapsed)


def nav_view(tree: Sequence[NavItem], max_depth: int = 2) -> list[NavItem]:
    """Shape a tree for the top navigation bar.

    Containers nested deeper than ``max_depth`` are replaced by their leaf
    descendants. Collapse state is dropped.
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")
    return _nav_level(tree, depth=1, max_depth=max_depth)


def _nav_level(items: Sequence[NavItem], depth: int, max_depth: int) -> list[NavItem]:
    result: list[NavItem] = []
    for item in items:
        if item.is_leaf:
            result.append(NavItem(text=item.text, link=item.link))
        elif depth < max_depth:
            children = _nav_level(item.items, depth + 1, max_depth)
            result.append(NavItem(text=item.text, items=tuple(children)))
        else:
            result.extend(
                NavItem(text=node.text, link=node.link)
                for node in item.walk()
                if node.is_leaf
            )
    return result


def sidebar_view(
    tree: Sequence[NavItem], collapsed: bool | None = None
) -> list[NavItem]:
    """Shape a tree for the sidebar, applying a default collapse state."""
    result: list[NavItem] = []
    for item in tree:
        if item.is_leaf:
            result.append(item)
            continue
        state = item.collapsed if item.collapsed is not None else collapsed
        children = sidebar_view(item.items, collapsed)
        result.append(NavItem(text=item.text, items=tuple(children), collapsed=state))
    return result


def entries_from_content(content_dir: Path) -> list[dict[str, Any]]:
    """Derive nav entries from a directory of Markdown pages.

    Titles come from front-matter ``title``, then the first heading, then the
    filename. Siblings are ordered by ``sidebar_position``, then name.

    Raises:
        FileNotFoundError: If ``content_dir`` doesn't exist.
        ConfigError: If a page has malformed front-matter.
    """
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")
    return _scan_dir(content_dir, content_dir, top_level=True)


def _scan_dir(root: Path, directory: Path, top_level: bool) -> list[dict[str, Any]]:
    ranked: list[tuple[float, int, str, dict[str, Any]]] = []

    for path in sorted(directory.iterdir()):
        if path.name.startswith((".", "_")) or path.name in SKIP_DIRS:
            continue

        if path.is_dir():
            children = _scan_dir(root, path, top_level=False)
            if not children:
                continue
            index = path / "index.md"
            position, text = _dir_meta(path, index)
            entry = {"text": text, "children": children}
            ranked.append((position, 1, path.name, entry))
        elif path.suffix == ".md":
            position, text = _page_meta(path)
            if path.name == "index.md":
                # Index pages lead their siblings and link to the directory
                position = float("-inf")
                parent = path.parent.relative_to(root).as_posix()
                link = "/" if top_level else f"/{parent}/"
            else:
                link = "/" + path.relative_to(root).with_suffix("").as_posix()
            ranked.append((position, 0, path.stem, {"text": text, "link": link}))

    ranked.sort(key=lambda row: (row[0], row[2], row[1]))
    return [entry for _, _, _, entry in ranked]


def _page_meta(path: Path) -> tuple[float, str]:
    meta = read_front_matter(path)
    title = meta.get("title")
    if not isinstance(title, str) or not title.strip():
        title = first_heading(path) or filename_title(path)
    return _position(meta, path), title


def _dir_meta(directory: Path, index: Path) -> tuple[float, str]:
    if not index.is_file():
        return float("inf"), filename_title(directory)
    meta = read_front_matter(index)
    return _position(meta, index), filename_title(directory)


def _position(meta: dict[str, Any], path: Path) -> float:
    value = meta.get("sidebar_position")
    if value is None:
        return float("inf")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{path}: 'sidebar_position' must be a number")
    return float(value)
