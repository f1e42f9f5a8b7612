"""
Guided-workflow prompt texts.

Each function returns the user message a client inserts when the
operator picks the prompt. The tool names quoted here must stay in sync
with the tools registered in mcp_server.
"""

from typing import Literal, Optional

BotLanguage = Literal["javascript", "python", "go"]
BotArchitecture = Literal["polling", "webhook"]


def create_bot_prompt(
    language: Optional[BotLanguage] = None,
    architecture: Optional[BotArchitecture] = None,
) -> str:
    if architecture == "webhook":
        delivery_step = "a webhook using solafon_set_webhook"
    else:
        delivery_step = "polling to receive messages"

    return (
        f"Help me create a new Solafon bot using {language or 'any language'} "
        f"with {architecture or 'your recommended'} architecture.\n"
        "\n"
        "Here's what I need:\n"
        '1. First, use solafon_read_docs with topic "quick-start" to understand '
        "the setup process\n"
        "2. Use solafon_scaffold_bot to generate a starter template\n"
        "3. Set up bot commands using solafon_set_commands\n"
        f"4. Configure {delivery_step}\n"
        "5. Test the bot by sending a test message\n"
        "\n"
        "Guide me through each step with explanations."
    )


def debug_bot_prompt(issue: Optional[str] = None) -> str:
    issue_line = f"Issue: {issue}" if issue else ""
    return (
        f"Help me debug my Solafon bot. {issue_line}\n"
        "\n"
        "Please:\n"
        "1. Check if the API is online using solafon_health_check\n"
        "2. Verify my bot token with solafon_get_bot_info\n"
        "3. Check webhook configuration with solafon_get_webhook_info\n"
        "4. Check for pending messages with solafon_get_updates\n"
        "5. Review my bot commands with solafon_get_commands\n"
        "\n"
        "Based on the results, diagnose the issue and suggest fixes."
    )


def api_explorer_prompt() -> str:
    return (
        "I want to explore the Solafon API. Please:\n"
        "1. Show me the available documentation topics using solafon_list_docs\n"
        "2. Let me know what tools are available for interacting with the API\n"
        "3. Show me available bot templates using solafon_list_templates\n"
        "\n"
        "Then ask me what I'd like to do — create a bot, explore endpoints, "
        "or learn about a specific feature."
    )
