"""
Bot scaffold template catalog.

Templates are complete starter programs stored under content/templates/.
Unlike documentation they are returned byte-for-byte; no rendering
happens, since the sources are full of the target languages' own
interpolation syntax.
"""

from pathlib import Path
from typing import Dict

from pydantic import BaseModel, ConfigDict

from solafon_mcp.registry.catalog import Catalog


TEMPLATES_ROOT = Path(__file__).resolve().parent.parent / "content" / "templates"


class Template(BaseModel):
    """A bot scaffold ready to be handed to the caller."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    description: str
    language: str
    code: str


class TemplateEntry(BaseModel):
    """Declarative description of a bot scaffold."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    description: str
    language: str
    source: str


TEMPLATE_REGISTRY: Dict[str, TemplateEntry] = {
    "node-polling": TemplateEntry(
        key="node-polling",
        title="Node.js Polling Bot",
        description="Simple polling bot using Node.js with message handling",
        language="javascript",
        source="node-polling.js",
    ),
    "node-webhook": TemplateEntry(
        key="node-webhook",
        title="Node.js Webhook Bot",
        description="Express.js webhook bot with command handling",
        language="javascript",
        source="node-webhook.js",
    ),
    "python-polling": TemplateEntry(
        key="python-polling",
        title="Python Polling Bot",
        description="Simple Python polling bot with requests",
        language="python",
        source="python-polling.py",
    ),
    "python-webhook": TemplateEntry(
        key="python-webhook",
        title="Python Webhook Bot",
        description="Flask webhook bot with command handling",
        language="python",
        source="python-webhook.py",
    ),
    "go-webhook": TemplateEntry(
        key="go-webhook",
        title="Go Webhook Bot",
        description="Go webhook bot using net/http",
        language="go",
        source="go-webhook.go",
    ),
    "node-ai-bot": TemplateEntry(
        key="node-ai-bot",
        title="AI Bot with OpenAI (Node.js)",
        description="AI-powered bot using OpenAI GPT with conversation memory",
        language="javascript",
        source="node-ai-bot.js",
    ),
}


def load_templates(templates_root: Path = TEMPLATES_ROOT) -> Catalog[Template]:
    """
    Read every registered scaffold from disk and return the catalog.

    A missing source file raises FileNotFoundError at startup.
    """
    templates: Dict[str, Template] = {}
    for key, entry in TEMPLATE_REGISTRY.items():
        code = (templates_root / entry.source).read_text(encoding="utf-8")
        templates[key] = Template(
            key=key,
            title=entry.title,
            description=entry.description,
            language=entry.language,
            code=code,
        )

    return Catalog(
        templates,
        item_label="Template",
        available_label="Available",
    )
