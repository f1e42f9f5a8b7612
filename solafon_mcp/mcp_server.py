"""
MCP connector for the Solafon platform.

Exposes Solafon documentation, bot scaffolds and the Solafon REST API to
an AI assistant over async stdio JSON-RPC.

Documentation tools (local, no network):
    solafon_read_docs       : read one documentation topic
    solafon_search_docs     : keyword search across all topics
    solafon_list_docs       : enumerate topics
    solafon_scaffold_bot    : return a bot code template
    solafon_list_templates  : enumerate templates

Proxy tools (exactly one HTTP call each, response forwarded verbatim):
    solafon_api_request     : any method/path against the API
    solafon_get_bot_info, solafon_send_message, solafon_get_updates,
    solafon_set_webhook, solafon_delete_webhook, solafon_get_webhook_info,
    solafon_set_commands, solafon_get_commands
    solafon_health_check    : service liveness probe

Resources: solafon://docs/{key}, solafon://docs/full,
solafon://templates/{key}.

Prompts: create-solafon-bot, debug-solafon-bot, solafon-api-explorer.

Transport: FastMCP stdio (async). All HTTP happens inside tool handlers,
through one shared httpx.AsyncClient owned by the SolafonApiClient.
"""

import json
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Annotated, Any, AsyncIterator, Dict, List, Literal, Optional

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import TextResource
from mcp.types import ToolAnnotations
from pydantic import AnyHttpUrl, BaseModel, Field

from solafon_mcp.api_client import HealthStatus, HttpMethod, SolafonApiClient
from solafon_mcp.config import ConnectorSettings, get_settings
from solafon_mcp.prompts import (
    BotArchitecture,
    BotLanguage,
    api_explorer_prompt,
    create_bot_prompt,
    debug_bot_prompt,
)
from solafon_mcp.registry import (
    Catalog,
    Document,
    Template,
    UnknownCatalogKeyError,
    load_documents,
    load_templates,
)
from solafon_mcp.search import DocumentSearchIndex, format_search_results

logger = logging.getLogger("solafon_mcp")

SERVER_NAME = "solafon"

SERVER_INSTRUCTIONS = (
    "Tools for building bots and mini-apps on the Solafon platform. "
    "Use solafon_list_docs / solafon_search_docs / solafon_read_docs to learn "
    "the API, solafon_scaffold_bot for starter code, and the Bot API tools "
    "or solafon_api_request to call the live service."
)

READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=False,
)


# ---------------------------------------------------------------------------
# Tool input models
# ---------------------------------------------------------------------------


class BotCommand(BaseModel):
    command: str = Field(description="Command name without / prefix (e.g. 'help')")
    description: str = Field(description="Short description of the command")
    response: Optional[str] = Field(
        default=None,
        description=(
            "Auto-reply text. If set, Solafon responds automatically without "
            "webhook/polling."
        ),
    )


# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_topic_list(documents: Catalog[Document]) -> str:
    listing = "\n".join(f"- **{doc.key}**: {doc.title}" for doc in documents.values())
    return (
        f"# Available Documentation Topics\n\n{listing}\n\n"
        "Use `solafon_read_docs` with a topic key to read the full documentation."
    )


def render_template_list(templates: Catalog[Template]) -> str:
    listing = "\n".join(
        f"- **{t.key}** ({t.language}): {t.title} — {t.description}"
        for t in templates.values()
    )
    return (
        f"# Available Bot Templates\n\n{listing}\n\n"
        "Use `solafon_scaffold_bot` with a template key to generate the code."
    )


def render_scaffold(template: Template) -> str:
    return (
        f"# {template.title}\n\n{template.description}\n\n"
        f"```{template.language}\n{template.code}```"
    )


def render_health(status: HealthStatus) -> str:
    if status.error is not None:
        return f"API Status: Offline\nError: {status.error}"
    label = "Online" if status.online else "Error"
    return f"API Status: {label}\n{format_json(status.body)}"


# ---------------------------------------------------------------------------
# Server construction
# ---------------------------------------------------------------------------


def create_server(
    settings: ConnectorSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastMCP:
    """
    Build the connector with every tool, resource and prompt registered.

    Catalogs and the search index are built here, once. The settings
    object is the only configuration source; pass an http_client to
    redirect outbound traffic (tests use httpx.MockTransport).
    """
    documents = load_documents(settings.api_url)
    templates = load_templates()
    index = DocumentSearchIndex(
        documents.mapping,
        context_before=settings.search_context_before,
        context_after=settings.search_context_after,
        max_windows=settings.search_max_windows,
    )
    api = SolafonApiClient(settings, http_client)

    logger.info(
        "config: api_url=%s default_token=%s docs=%d templates=%d",
        settings.api_url,
        "set" if settings.default_token else "unset",
        len(documents),
        len(templates),
    )

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await api.aclose()

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, lifespan=lifespan)

    topic_help = ", ".join(f"{doc.key} ({doc.title})" for doc in documents.values())
    template_help = ", ".join(f"{t.key} ({t.title})" for t in templates.values())

    async def proxy(
        method: HttpMethod,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> str:
        return format_json(await api.request(method, path, body, token))

    # -----------------------------------------------------------------------
    # Tools: documentation
    # -----------------------------------------------------------------------

    @mcp.tool(
        name="solafon_read_docs",
        description=(
            "Read Solafon platform documentation by topic. Returns detailed "
            "documentation about a specific topic."
        ),
        annotations=READ_ONLY,
    )
    async def read_docs(
        topic: Annotated[
            str, Field(description=f"Documentation topic. Available: {topic_help}")
        ],
    ) -> str:
        logger.info("tool: solafon_read_docs topic=%s", topic)
        try:
            return documents.get(topic).content
        except UnknownCatalogKeyError as exc:
            logger.warning("solafon_read_docs: %s", exc)
            return str(exc)

    @mcp.tool(
        name="solafon_search_docs",
        description=(
            "Search across all Solafon documentation for a keyword or phrase. "
            "Returns matching sections."
        ),
        annotations=READ_ONLY,
    )
    async def search_docs(
        query: Annotated[str, Field(description="Search query (keyword or phrase)")],
    ) -> str:
        logger.info("tool: solafon_search_docs query=%r", query)
        hits = index.search(query)
        logger.info("solafon_search_docs: %d matching doc(s)", len(hits))
        return format_search_results(query, hits, documents.keys())

    @mcp.tool(
        name="solafon_list_docs",
        description="List all available Solafon documentation topics.",
        annotations=READ_ONLY,
    )
    async def list_docs() -> str:
        logger.info("tool: solafon_list_docs")
        return render_topic_list(documents)

    @mcp.tool(
        name="solafon_scaffold_bot",
        description=(
            "Generate a bot code template for the Solafon platform. Choose "
            "language and architecture."
        ),
        annotations=READ_ONLY,
    )
    async def scaffold_bot(
        template: Annotated[
            str, Field(description=f"Template name. Available: {template_help}")
        ],
    ) -> str:
        logger.info("tool: solafon_scaffold_bot template=%s", template)
        try:
            return render_scaffold(templates.get(template))
        except UnknownCatalogKeyError as exc:
            logger.warning("solafon_scaffold_bot: %s", exc)
            return str(exc)

    @mcp.tool(
        name="solafon_list_templates",
        description="List all available bot code templates for scaffolding.",
        annotations=READ_ONLY,
    )
    async def list_templates() -> str:
        logger.info("tool: solafon_list_templates")
        return render_template_list(templates)

    # -----------------------------------------------------------------------
    # Tools: Bot API
    # -----------------------------------------------------------------------

    @mcp.tool(
        name="solafon_get_bot_info",
        description=(
            "Get information about your Solafon bot (id, title, username, "
            "webhook status). Requires SOLAFON_BOT_TOKEN."
        ),
        annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
    )
    async def get_bot_info() -> str:
        logger.info("tool: solafon_get_bot_info")
        return await proxy(HttpMethod.GET, "/bot/getMe")

    @mcp.tool(
        name="solafon_send_message",
        description=(
            "Send a message from your bot to a user on Solafon. Supports text, "
            "image, and button message types."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=True,
        ),
    )
    async def send_message(
        chat_id: Annotated[int, Field(description="User ID to send the message to")],
        text: Annotated[str, Field(description="Message text content")],
        message_type: Annotated[
            Optional[Literal["text", "image", "button"]],
            Field(description="Message type: text (default), image, or button"),
        ] = None,
        # Plain str: the JSON text is forwarded as-is, never decoded.
        metadata: Annotated[
            str,
            Field(
                description=(
                    'JSON string with extra data. For images: {"image_url": "..."}, '
                    'for buttons: {"buttons": [{"text": "...", "action": "..."}]}'
                )
            ),
        ] = "",
    ) -> str:
        logger.info("tool: solafon_send_message chat_id=%s", chat_id)
        body: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if message_type:
            body["message_type"] = message_type
        if metadata:
            body["metadata"] = metadata
        return await proxy(HttpMethod.POST, "/bot/sendMessage", body)

    @mcp.tool(
        name="solafon_get_updates",
        description=(
            "Get pending (unread) messages from users via long-polling. "
            "Messages are marked as read after retrieval."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=True,
        ),
    )
    async def get_updates() -> str:
        logger.info("tool: solafon_get_updates")
        return await proxy(HttpMethod.GET, "/bot/getUpdates")

    @mcp.tool(
        name="solafon_set_webhook",
        description=(
            "Set a webhook URL to receive messages in real-time. URL must be HTTPS."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    )
    async def set_webhook(
        url: Annotated[
            AnyHttpUrl, Field(description="HTTPS webhook URL to receive message updates")
        ],
    ) -> str:
        logger.info("tool: solafon_set_webhook url=%s", url)
        return await proxy(HttpMethod.POST, "/bot/setWebhook", {"url": str(url)})

    @mcp.tool(
        name="solafon_delete_webhook",
        description=(
            "Remove the currently configured webhook. Switch back to polling mode."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=True,
            idempotentHint=True,
            openWorldHint=True,
        ),
    )
    async def delete_webhook() -> str:
        logger.info("tool: solafon_delete_webhook")
        return await proxy(HttpMethod.POST, "/bot/deleteWebhook")

    @mcp.tool(
        name="solafon_get_webhook_info",
        description=(
            "Get current webhook configuration including URL and pending update count."
        ),
        annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
    )
    async def get_webhook_info() -> str:
        logger.info("tool: solafon_get_webhook_info")
        return await proxy(HttpMethod.GET, "/bot/getWebhookInfo")

    @mcp.tool(
        name="solafon_set_commands",
        description=(
            "Define bot commands. Commands with a 'response' field will auto-reply "
            "without hitting your server."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=True,
            idempotentHint=True,
            openWorldHint=True,
        ),
    )
    async def set_commands(
        commands: Annotated[List[BotCommand], Field(description="Array of command objects")],
    ) -> str:
        logger.info("tool: solafon_set_commands count=%d", len(commands))
        body = {"commands": [c.model_dump(exclude_none=True) for c in commands]}
        return await proxy(HttpMethod.POST, "/bot/setMyCommands", body)

    @mcp.tool(
        name="solafon_get_commands",
        description="Get all defined bot commands.",
        annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
    )
    async def get_commands() -> str:
        logger.info("tool: solafon_get_commands")
        return await proxy(HttpMethod.GET, "/bot/getMyCommands")

    # -----------------------------------------------------------------------
    # Tools: development helpers
    # -----------------------------------------------------------------------

    @mcp.tool(
        name="solafon_api_request",
        description=(
            "Make a custom API request to any Solafon endpoint. Use for endpoints "
            "not covered by specific tools."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=True,
            idempotentHint=False,
            openWorldHint=True,
        ),
    )
    async def api_request(
        method: Annotated[HttpMethod, Field(description="HTTP method")],
        path: Annotated[
            str,
            Field(description="API path starting with / (e.g. /apps, /bot/getMe)"),
        ],
        body: Annotated[
            Optional[Dict[str, Any]],
            Field(description="Request body as JSON object (for POST/PUT/PATCH)"),
        ] = None,
        token: Annotated[
            Optional[str],
            Field(description="Override token. Defaults to SOLAFON_BOT_TOKEN env var."),
        ] = None,
    ) -> str:
        logger.info("tool: solafon_api_request %s %s", method.value, path)
        return await proxy(method, path, body, token)

    @mcp.tool(
        name="solafon_health_check",
        description="Check if the Solafon API is online and responding.",
        annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
    )
    async def health_check() -> str:
        logger.info("tool: solafon_health_check")
        return render_health(await api.health_check())

    # -----------------------------------------------------------------------
    # Resources
    # -----------------------------------------------------------------------

    for doc in documents.values():
        mcp.add_resource(
            TextResource(
                uri=f"solafon://docs/{doc.key}",
                name=f"docs-{doc.key}",
                description=doc.title,
                mime_type="text/markdown",
                text=doc.content,
            )
        )

    mcp.add_resource(
        TextResource(
            uri="solafon://docs/full",
            name="docs-full",
            description="Complete Solafon documentation",
            mime_type="text/markdown",
            text="\n\n---\n\n".join(doc.content for doc in documents.values()),
        )
    )

    for scaffold in templates.values():
        mcp.add_resource(
            TextResource(
                uri=f"solafon://templates/{scaffold.key}",
                name=f"template-{scaffold.key}",
                description=scaffold.title,
                mime_type="text/plain",
                text=scaffold.code,
            )
        )

    # -----------------------------------------------------------------------
    # Prompts
    # -----------------------------------------------------------------------

    @mcp.prompt(
        name="create-solafon-bot",
        description="Step-by-step guide to create a new bot on the Solafon platform",
    )
    def create_bot(
        language: Optional[BotLanguage] = None,
        architecture: Optional[BotArchitecture] = None,
    ) -> str:
        return create_bot_prompt(language, architecture)

    @mcp.prompt(
        name="debug-solafon-bot",
        description="Debug issues with your Solafon bot",
    )
    def debug_bot(issue: Optional[str] = None) -> str:
        return debug_bot_prompt(issue)

    @mcp.prompt(
        name="solafon-api-explorer",
        description="Explore the Solafon API interactively",
    )
    def api_explorer() -> str:
        return api_explorer_prompt()

    return mcp


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """
    Bind logging to stderr only.

    stdout is reserved exclusively for FastMCP JSON-RPC framing; nothing
    may write to it.
    """
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main() -> None:
    start = time.perf_counter()
    configure_logging()

    try:
        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level)
        server = create_server(settings)
    except Exception:
        logger.exception("fatal: connector failed to start")
        sys.exit(1)

    logger.info("startup complete in %.6fs", time.perf_counter() - start)

    try:
        server.run()
    except Exception:
        logger.exception("fatal: connector transport failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
