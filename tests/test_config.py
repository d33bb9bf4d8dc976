"""Tests for configuration loading."""

from pathlib import Path

import pytest

from vitenav.config import ConfigError, load_config
from vitenav.config.load import site_from_mapping
from vitenav.config.model import HeadTag, NavItem, SearchConfig, SiteConfig

FIXTURES = Path(__file__).parent / "fixtures"


def test_load_config_full():
    config = load_config(FIXTURES / "vitenav.yml")

    assert config.title == "CosmWasm Docs"
    assert config.description == "Guides for CosmWasm smart contracts"
    assert config.lang == "en-US"
    assert config.base == "/docs/"
    assert config.head == (
        HeadTag(tag="link", attrs={"rel": "icon", "href": "/docs/favicon.ico"}),
    )
    assert config.theme.search.provider == "local"
    assert config.math is True
    assert config.mermaid is True


def test_load_config_nav_and_sidebar_views():
    config = load_config(FIXTURES / "vitenav.yml")

    assert [item.text for item in config.theme.nav] == ["Welcome", "CosmWasm Core"]
    core_nav = config.theme.nav[1]
    # Entrypoints is too deep for a dropdown and gets flattened
    assert "Entrypoints" not in [item.text for item in core_nav.items]
    assert "Instantiate" in [item.text for item in core_nav.items]

    core_sidebar = config.theme.sidebar[1]
    assert core_sidebar.collapsed is True
    entrypoints = core_sidebar.items[2]
    assert entrypoints.text == "Entrypoints"
    assert entrypoints.collapsed is False


def test_load_config_defaults():
    config = load_config(FIXTURES / "vitenav_minimal.yml")

    assert config.title == "Minimal"
    assert config.description == ""
    assert config.lang == "en-US"
    assert config.base == "/"
    assert config.head == ()
    assert config.theme.search == SearchConfig(provider="local")
    assert config.math is False
    assert config.mermaid is False
    assert config.theme.sidebar == (NavItem(text="Home", link="/"),)


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config(Path("/nonexistent/vitenav.yml"))


def test_load_config_requires_mapping(tmp_path: Path):
    config_path = tmp_path / "vitenav.yml"
    config_path.write_text("", encoding="utf-8")

    with pytest.raises(ConfigError, match="Config file must be a mapping"):
        load_config(config_path)


def test_load_config_ambiguous_entry():
    with pytest.raises(ConfigError, match="'Core'"):
        load_config(FIXTURES / "vitenav_ambiguous.yml")


def test_load_config_with_python_yaml_tags():
    """Python YAML tags are kept as placeholder strings, never constructed."""
    config = load_config(FIXTURES / "vitenav_python_tags.yml")

    assert config.title == "Site with Python Tags"
    assert config.theme.search.provider == "algolia"
    transform = config.theme.search.options["transformItems"]
    assert isinstance(transform, str)
    assert "python/object/apply" in transform


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_empty_nav_is_allowed():
    config = site_from_mapping({"title": "Empty", "nav": None})
    assert config.theme.nav == ()
    assert config.theme.sidebar == ()


def test_search_as_provider_name():
    config = site_from_mapping({"search": "algolia"})
    assert config.theme.search.provider == "algolia"


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ({"sidebar": []}, "Unknown config keys: sidebar"),
        ({"title": 3}, "'title' must be a string"),
        ({"base": "docs"}, "'base' must start and end with '/'"),
        ({"base": "/docs"}, "'base' must start and end with '/'"),
        ({"math": "yes"}, "'math' must be true or false"),
        ({"mermaid": 1}, "'mermaid' must be true or false"),
        ({"sidebar_collapsed": "no"}, "'sidebar_collapsed' must be"),
        ({"nav_depth": 0}, "'nav_depth' must be a positive integer"),
        ({"nav_depth": True}, "'nav_depth' must be a positive integer"),
        ({"search": "google"}, "Unknown search provider 'google'"),
        ({"search": ["local"]}, "'search' must be a provider name or mapping"),
        ({"search": {"provider": "local", "options": []}}, "'search.options'"),
        ({"head": {"link": {}}}, "'head' must be a list"),
        ({"head": [["link", {}, "extra"]]}, r"head\[0\] must be \[tag, attrs\]"),
        ({"head": [[None, {}]]}, r"head\[0\] is missing a tag name"),
        ({"head": [["link", "rel=icon"]]}, r"head\[0\] attributes must be"),
        ({"head": ["link"]}, r"head\[0\] must be a list or mapping"),
        ({"nav": {"text": "Home"}}, "nav must be a list"),
    ],
)
def test_invalid_fields_rejected(raw, message):
    with pytest.raises(ConfigError, match=message):
        site_from_mapping(raw)


def test_head_mapping_form():
    config = site_from_mapping(
        {
            "head": [
                {"tag": "meta", "attrs": {"name": "theme-color", "content": "#fff"}},
                {"tag": "script"},
            ]
        }
    )
    assert config.head == (
        HeadTag(tag="meta", attrs={"name": "theme-color", "content": "#fff"}),
        HeadTag(tag="script"),
    )


def test_site_config_all_links_deduplicates():
    config = load_config(FIXTURES / "vitenav.yml")
    links = config.all_links()

    assert len(links) == len(set(links))
    assert links[0] == "/guide/welcome"
    assert "/guide/core/entrypoints/execute" in links


def test_site_config_is_immutable():
    config = SiteConfig(title="Docs")
    with pytest.raises(AttributeError):
        config.title = "Other"  # type: ignore[misc]


def test_head_attribute_values_normalised():
    config = site_from_mapping(
        {"head": [["script", {"src": "/a.js", "async": True, "data-size": 32}]]}
    )
    assert config.to_dict()["head"] == [
        ["script", {"src": "/a.js", "async": "", "data-size": "32"}]
    ]


@pytest.mark.parametrize("value", [None, False, ["a"], {"b": 1}])
def test_head_attribute_values_without_html_form_rejected(value):
    with pytest.raises(ConfigError, match=r"head\[0\] attribute 'defer'"):
        site_from_mapping({"head": [["script", {"src": "/a.js", "defer": value}]]})


def test_head_attrs_are_read_only_and_detached():
    attrs = {"rel": "icon", "href": "/favicon.ico"}
    tag = HeadTag(tag="link", attrs=attrs)
    attrs["href"] = "/other.ico"

    assert tag.attrs["href"] == "/favicon.ico"
    with pytest.raises(TypeError):
        tag.attrs["href"] = "/x.ico"  # type: ignore[index]


def test_search_options_are_read_only_and_detached():
    raw = {"search": {"provider": "algolia", "options": {"appId": "X", "facets": {"lang": "en"}}}}
    config = site_from_mapping(raw)
    raw["search"]["options"]["appId"] = "Y"
    raw["search"]["options"]["facets"]["lang"] = "de"

    options = config.theme.search.options
    assert options["appId"] == "X"
    assert options["facets"] == {"lang": "en"}
    with pytest.raises(TypeError):
        options["appId"] = "Z"  # type: ignore[index]

    rendered = config.to_dict()["themeConfig"]["search"]["options"]
    rendered["facets"]["lang"] = "fr"
    assert options["facets"] == {"lang": "en"}
