"""Front-matter and title extraction for Markdown pages."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from vitenav.errors import ConfigError

_HEADING_RE = re.compile(r"^#\s+(.+?)(?:\s+#+)?\s*$")


def read_front_matter(path: Path) -> dict[str, Any]:
    """Parse the leading ``---`` YAML block of a Markdown file.

    Args:
        path: Markdown file to read.

    Returns:
        The front-matter mapping, or an empty dict if the page has none.

    Raises:
        ConfigError: If the block is unterminated, not valid YAML, or not a
            mapping.
    """
    lines = path.read_text(encoding="utf-8").splitlines()
    if not lines or lines[0].strip() != "---":
        return {}

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            break
    else:
        raise ConfigError(f"{path}: unterminated front-matter block")

    try:
        meta = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid front-matter: {exc}") from None

    if meta is None:
        return {}
    if not isinstance(meta, dict):
        raise ConfigError(f"{path}: front-matter must be a mapping")
    return meta


def first_heading(path: Path) -> str | None:
    """Return the text of the first level-one heading outside front-matter."""
    in_front_matter = False
    in_fence = False
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines()):
        stripped = line.strip()
        if number == 0 and stripped == "---":
            in_front_matter = True
            continue
        if in_front_matter:
            if stripped == "---":
                in_front_matter = False
            continue
        if stripped.startswith(("```", "~~~")):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        match = _HEADING_RE.match(stripped)
        if match:
            return match.group(1)
    return None


def filename_title(path: Path) -> str:
    """Derive a title from a file or directory name."""
    name = path.stem if path.suffix == ".md" else path.name
    return name.replace("-", " ").replace("_", " ").title()
