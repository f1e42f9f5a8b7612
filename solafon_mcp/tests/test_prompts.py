from solafon_mcp.prompts import api_explorer_prompt, create_bot_prompt, debug_bot_prompt


def test_create_bot_defaults():
    text = create_bot_prompt()

    assert text.startswith(
        "Help me create a new Solafon bot using any language with your "
        "recommended architecture."
    )
    assert "4. Configure polling to receive messages" in text


def test_create_bot_webhook_step():
    text = create_bot_prompt("go", "webhook")

    assert "using go with webhook architecture" in text
    assert "4. Configure a webhook using solafon_set_webhook" in text


def test_debug_bot_includes_issue():
    text = debug_bot_prompt("bot does not reply")

    assert text.startswith("Help me debug my Solafon bot. Issue: bot does not reply\n")
    for tool in (
        "solafon_health_check",
        "solafon_get_bot_info",
        "solafon_get_webhook_info",
        "solafon_get_updates",
        "solafon_get_commands",
    ):
        assert tool in text


def test_debug_bot_without_issue():
    assert "Issue:" not in debug_bot_prompt()


def test_api_explorer_mentions_listing_tools():
    text = api_explorer_prompt()

    assert "solafon_list_docs" in text
    assert "solafon_list_templates" in text
