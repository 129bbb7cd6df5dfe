from __future__ import annotations
import copy, re

from errors import SiteConfigError

KNOWN_KEYS = ("title", "description", "sidebar", "theme", "notes", "customProperties", "panel", "tags")

def _check_regex(pattern, where: str):
    if not isinstance(pattern, str):
        raise SiteConfigError(f"{where}: pattern must be a string, got {pattern!r}")
    try:
        re.compile(pattern)
    except re.error as e:
        raise SiteConfigError(f"{where}: invalid pattern {pattern!r}: {e}") from e

def create_notes_query(pattern: str, tree: dict | None = None) -> dict:
    """Navigation query for the site builder. Only validated here, never evaluated."""
    _check_regex(pattern, "notes query")
    query = {"pattern": pattern}
    if tree is not None:
        for src in (tree.get("replace") or {}):
            _check_regex(src, "notes query tree.replace")
        query["tree"] = copy.deepcopy(tree)
    return query

def define_config(**options) -> dict:
    unknown = sorted(set(options) - set(KNOWN_KEYS))
    if unknown:
        raise SiteConfigError(f"unknown site config keys: {', '.join(unknown)}")
    title = options.get("title")
    if not isinstance(title, str) or not title.strip():
        raise SiteConfigError("site config needs a non-empty title")
    return copy.deepcopy(options)

_FULL_DATE = {"date": {"locale": "en-US", "format": {"dateStyle": "full"}}}

SITE = define_config(
    title="MikeFez.com",
    description="My spot to catalog my ideas and projects. I'm a software engineer, and I love to automate things.",
    sidebar={
        "links": [
            {"url": "https://github.com/MikeFez", "label": "GitHub", "icon": "github"},  # https://lucide.dev/icons/
            {"url": "https://buymeacoffee.com/mikefez", "label": "Buy me a coffee", "icon": "coffee"},
        ],
        "sections": [
            {
                "label": "Home Automation",
                "groups": [{"query": create_notes_query(pattern="^/home-automation/")}],
            },
            {
                "label": "Projects",
                "groups": [{"query": create_notes_query(pattern="^/projects/")}],
            },
            {
                "label": "Guides",
                "groups": [
                    {
                        "label": "dev",
                        "query": create_notes_query(pattern="^/dev/", tree={"replace": {r"^/\w+": ""}}),
                    },
                ],
            },
        ],
    },
    theme={"color": "sky"},
    notes={"pathPrefix": "/"},  # no prefix
    customProperties={
        "properties": [
            {"name": "publishedOn", "options": copy.deepcopy(_FULL_DATE)},
            {"name": "updatedOn", "options": copy.deepcopy(_FULL_DATE)},
            {"path": "props", "options": {"date": {"locale": "en-US"}}},
        ],
    },
    panel={"incomingLinks": False, "outgoingLinks": False},
    tags={"map": {"dynamic-content": "dynamic content"}},
)

def sidebar_labels(config: dict) -> list[str]:
    return [s.get("label", "") for s in config.get("sidebar", {}).get("sections", [])]
