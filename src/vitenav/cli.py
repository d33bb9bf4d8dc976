"""Command-line interface."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from ruamel.yaml import YAML

from vitenav import __version__
from vitenav.config import ConfigError, NavItem, SiteConfig, load_config
from vitenav.config.derive import entries_from_content
from vitenav.content import find_dangling_links
from vitenav.emit import render_config_json, render_config_module


class OutputFormat(str, Enum):
    mts = "mts"
    json = "json"


def _make_logger(
    quiet: bool, verbose: bool = False
) -> tuple[Callable[..., None], Callable[..., None]]:
    """Create log and log_verbose functions for CLI output.

    Args:
        quiet: If True, suppress all output.
        verbose: If True, enable verbose logging (quiet overrides this).

    Returns:
        Tuple of (log, log_verbose) functions.
    """
    effective_verbose = verbose and not quiet

    def log(msg: str, color: str = "green", err: bool = False) -> None:
        if not quiet:
            typer.secho(msg, fg=color, err=err)

    def log_verbose(msg: str, color: str = "green", err: bool = False) -> None:
        if effective_verbose:
            typer.secho(msg, fg=color, err=err)

    return log, log_verbose


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is set."""
    if value:
        typer.echo(f"vitenav {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="Generate VitePress site config from a single nav source.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Generate VitePress site config from a single nav source."""


def _load_or_exit(config: Path, log: Callable[..., None]) -> SiteConfig:
    try:
        return load_config(config)
    except FileNotFoundError:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: File not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None
    except RecursionError:
        log(f"Config invalid: {config}", color="red", err=True)
        log("  Error: nav is too deeply nested", color="red", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None


def _print_tree(
    items: Sequence[NavItem], log: Callable[..., None], indent: int = 2
) -> None:
    prefix = " " * indent
    for item in items:
        if item.link is not None:
            log(f"{prefix}- {item.text} -> {item.link}")
        else:
            state = "" if item.collapsed is None else f" (collapsed={item.collapsed})"
            log(f"{prefix}+ {item.text}{state}")
            _print_tree(item.items, log, indent + 2)


@app.command()
def build(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to vitenav.yml config file"),
    ] = Path("vitenav.yml"),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file (defaults to .vitepress/config.mts or config.json)",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.mts,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Preview what would be generated without writing files",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Write the VitePress config module from vitenav.yml."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        log(
            "Hint: Run 'vitenav init' to create one from your content directory.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    site = _load_or_exit(config, log)

    if output_format is OutputFormat.json:
        content = render_config_json(site)
        out_path = output or Path(".vitepress/config.json")
    else:
        content = render_config_module(site)
        out_path = output or Path(".vitepress/config.mts")

    log_verbose(f"Site: {site.title}")
    log_verbose(f"Nav entries: {len(site.theme.nav)}")
    log_verbose(f"Sidebar entries: {len(site.theme.sidebar)}")

    if dry_run:
        log_verbose("Dry run - no files will be written")
        log(f"Would generate {out_path} ({len(content):,} bytes)", color="yellow")
        return

    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        log(f"Error writing output file: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    log(f"Generated {out_path} ({len(content):,} bytes)")


@app.command()
def validate(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to vitenav.yml config file"),
    ] = Path("vitenav.yml"),
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show the resolved nav tree"),
    ] = False,
) -> None:
    """Check config file validity."""
    log, log_verbose = _make_logger(quiet, verbose)
    site = _load_or_exit(config, log)

    log(f"Config valid: {config}")
    log(f"  Site: {site.title}")
    log(f"  Nav entries: {len(site.theme.nav)}")
    log(f"  Sidebar entries: {len(site.theme.sidebar)}")
    log(f"  Links: {len(site.all_links())}")
    log(f"  Search: {site.theme.search.provider}")

    log_verbose("  Sidebar:")
    _print_tree(site.theme.sidebar, log_verbose, indent=4)


@app.command()
def check(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to vitenav.yml config file"),
    ] = Path("vitenav.yml"),
    content_dir: Annotated[
        Path,
        typer.Option("--content-dir", "-d", help="Markdown content directory"),
    ] = Path("docs"),
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
) -> None:
    """Report nav links that point at no Markdown page."""
    log, _ = _make_logger(quiet)
    site = _load_or_exit(config, log)

    if not content_dir.is_dir():
        log(
            f"Error: Content directory not found: {content_dir}",
            color="red",
            err=True,
        )
        raise typer.Exit(1)

    try:
        dangling = find_dangling_links(
            (*site.theme.sidebar, *site.theme.nav), content_dir
        )
    except ConfigError as exc:
        log(f"Error: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    # nav and sidebar share leaves, report each link once
    reported: dict[str, None] = {}
    for entry in dangling:
        if entry.link in reported:
            continue
        reported[entry.link] = None
        log(
            f"- {entry.text}: {entry.link} (expected {entry.expected})",
            color="red",
            err=True,
        )

    if reported:
        log(f"Found {len(reported)} dangling links", color="red", err=True)
        raise typer.Exit(1)

    log(f"All {len(site.all_links())} links resolve under {content_dir}")


@app.command()
def init(
    content_dir: Annotated[
        Path,
        typer.Option("--content-dir", "-d", help="Markdown content directory"),
    ] = Path("docs"),
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to vitenav.yml config file"),
    ] = Path("vitenav.yml"),
    title: Annotated[
        str,
        typer.Option("--title", "-t", help="Site title"),
    ] = "Documentation",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Create vitenav.yml from the pages in a content directory."""
    log, log_verbose = _make_logger(quiet, verbose)

    if config.exists() and not force:
        log(f"Error: {config} already exists.", color="red", err=True)
        log(
            "Use --force to overwrite existing configuration.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    try:
        entries = entries_from_content(content_dir)
    except FileNotFoundError:
        log(
            f"Error: Content directory not found: {content_dir}",
            color="red",
            err=True,
        )
        raise typer.Exit(1) from None
    except (ConfigError, OSError, UnicodeDecodeError) as exc:
        log(f"Error reading content: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    if not entries:
        log(f"Error: No Markdown pages found in {content_dir}", color="red", err=True)
        raise typer.Exit(1)

    data = {
        "title": title,
        "description": "",
        "lang": "en-US",
        "base": "/",
        "search": "local",
        "math": False,
        "mermaid": False,
        "sidebar_collapsed": False,
        "nav": entries,
    }

    yaml_writer = YAML()
    yaml_writer.default_flow_style = False
    yaml_writer.indent(mapping=2, sequence=4, offset=2)
    # Read back by PyYAML, which resolves yes/no/on/off as booleans (YAML 1.1)
    yaml_writer.version = (1, 1)

    try:
        with open(config, "w", encoding="utf-8") as f:
            yaml_writer.dump(data, f)
        # Commented examples go after the dump since ruamel's comment API
        # needs a CommentedMap built by hand
        with open(config, "a", encoding="utf-8") as f:
            f.write(
                "\n".join(
                    [
                        "# head:",
                        "#   - [link, {rel: icon, href: /favicon.ico}]",
                        "# nav_depth: 2",
                        "",
                    ]
                )
            )
    except OSError as exc:
        log(f"Error writing config: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    log(f"Created {config} with {len(entries)} top-level entries")
    for entry in entries:
        log_verbose(f"  {entry['text']}")


if __name__ == "__main__":
    app()
