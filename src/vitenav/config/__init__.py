"""Configuration loading and resolution."""

from vitenav.config.derive import build_nav_tree
from vitenav.config.load import load_config
from vitenav.config.model import NavItem, SiteConfig
from vitenav.errors import ConfigError

__all__ = ["ConfigError", "NavItem", "SiteConfig", "build_nav_tree", "load_config"]
