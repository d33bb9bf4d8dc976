"""Resolve nav links against the Markdown content tree."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from vitenav.config.model import NavItem
from vitenav.errors import ConfigError

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def is_external(link: str) -> bool:
    return bool(_SCHEME_RE.match(link)) or link.startswith("//")


def resolve_link(content_dir: Path, link: str) -> Path | None:
    """Map a site link to the Markdown file VitePress would render for it.

    Args:
        content_dir: Root of the Markdown content tree.
        link: Site-absolute or relative link, e.g. ``/guide/intro``.

    Returns:
        The matching file path, ``None`` for external links. The returned path
        may not exist.

    Raises:
        ConfigError: If the link climbs out of the content directory.
    """
    if is_external(link):
        return None

    path = link.split("#", 1)[0].split("?", 1)[0]
    parts: list[str] = []
    for part in PurePosixPath(path).parts:
        if part in ("/", "."):
            continue
        if part == "..":
            if not parts:
                raise ConfigError(f"Link escapes the content directory: {link}")
            parts.pop()
            continue
        parts.append(part)

    if not parts or path.endswith("/"):
        return content_dir.joinpath(*parts, "index.md")

    name = parts[-1]
    for suffix in (".html", ".md"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    page = content_dir.joinpath(*parts[:-1], f"{name}.md")
    if page.is_file():
        return page
    index = content_dir.joinpath(*parts[:-1], name, "index.md")
    if index.is_file():
        return index
    return page


@dataclass
class DanglingLink:
    """A nav leaf whose link points at no content file."""

    text: str
    link: str
    expected: Path


def find_dangling_links(
    tree: Iterable[NavItem], content_dir: Path
) -> list[DanglingLink]:
    """List every leaf link that resolves to no Markdown file, in tree order."""
    dangling: list[DanglingLink] = []
    for root in tree:
        for node in root.walk():
            if node.link is None:
                continue
            target = resolve_link(content_dir, node.link)
            if target is not None and not target.is_file():
                dangling.append(
                    DanglingLink(text=node.text, link=node.link, expected=target)
                )
    return dangling
