"""Render a SiteConfig as a VitePress config module."""

from __future__ import annotations

import json

from vitenav import __version__
from vitenav.config.model import SiteConfig

BANNER = (
    f"// Generated by vitenav {__version__}. Edit vitenav.yml and rebuild "
    "instead of changing this file."
)


def render_config_json(site: SiteConfig) -> str:
    return json.dumps(site.to_dict(), indent=2, ensure_ascii=False) + "\n"


def render_config_module(site: SiteConfig) -> str:
    """Render the text of ``.vitepress/config.mts``.

    The object literal is emitted as JSON, which TypeScript accepts as-is.
    With diagrams enabled the config is wrapped in ``withMermaid`` from
    ``vitepress-plugin-mermaid``.
    """
    body = json.dumps(site.to_dict(), indent=2, ensure_ascii=False)

    lines = [BANNER, "import { defineConfig } from 'vitepress'"]
    if site.mermaid:
        lines.append("import { withMermaid } from 'vitepress-plugin-mermaid'")
        lines.append("")
        lines.append(f"export default withMermaid(defineConfig({body}))")
    else:
        lines.append("")
        lines.append(f"export default defineConfig({body})")
    return "\n".join(lines) + "\n"
