"""
Documentation catalog.

This module defines the set of documentation topics the connector can
serve. Each entry binds together:

- a public topic key
- a human-readable title
- a markdown source file under content/docs/

Sources are Jinja2 templates so that examples quote the configured API
base URL (``{{ api_base_url }}``). They are rendered exactly once, when
the catalog is built at startup; requests only ever read the rendered
text.
"""

from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pydantic import BaseModel, ConfigDict

from solafon_mcp.registry.catalog import Catalog


DOCS_ROOT = Path(__file__).resolve().parent.parent / "content" / "docs"


class Document(BaseModel):
    """A rendered documentation page."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    content: str


class DocumentEntry(BaseModel):
    """Declarative description of a documentation topic."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    source: str


def _entry(key: str, title: str) -> DocumentEntry:
    return DocumentEntry(key=key, title=title, source=f"{key}.md")


DOCUMENT_REGISTRY: Dict[str, DocumentEntry] = {
    entry.key: entry
    for entry in (
        _entry("introduction", "Introduction to Solafon"),
        _entry("quick-start", "Quick Start Guide"),
        _entry("authentication", "Authentication"),
        _entry("bot-api", "Bot API Reference"),
        _entry("app-management", "App Management API"),
        _entry("dev-studio", "Dev Studio Guide"),
        _entry("webhooks-guide", "Webhooks Integration Guide"),
        _entry("message-types", "Message Types"),
        _entry("mana-points", "Mana Points System"),
        _entry("api-overview", "API Overview"),
        _entry("code-examples", "Code Examples"),
        _entry("project-architecture", "Project Architecture"),
        _entry("secret-login", "Secret Login"),
        _entry("mcp-setup", "MCP Server Setup"),
    )
}


def load_documents(api_base_url: str, docs_root: Path = DOCS_ROOT) -> Catalog[Document]:
    """
    Render every registered topic and return the immutable catalog.

    Raises jinja2.TemplateNotFound if a registered source is missing and
    jinja2.UndefinedError if a source references an unknown variable;
    both are startup failures.
    """
    env = Environment(
        loader=FileSystemLoader(str(docs_root), encoding="utf-8"),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=False,
    )

    documents: Dict[str, Document] = {}
    for key, entry in DOCUMENT_REGISTRY.items():
        template = env.get_template(entry.source)
        documents[key] = Document(
            key=key,
            title=entry.title,
            content=template.render(api_base_url=api_base_url),
        )

    return Catalog(
        documents,
        item_label="Topic",
        available_label="Available topics",
    )
