import pytest

from solafon_mcp.registry import (
    DOCUMENT_REGISTRY,
    TEMPLATE_REGISTRY,
    Catalog,
    UnknownCatalogKeyError,
    load_documents,
    load_templates,
)


@pytest.fixture(scope="module")
def documents():
    return load_documents("https://api.example.test/api/v1")


@pytest.fixture(scope="module")
def templates():
    return load_templates()


def test_every_registered_topic_is_loaded(documents):
    assert documents.keys() == list(DOCUMENT_REGISTRY)
    for key, entry in DOCUMENT_REGISTRY.items():
        doc = documents.get(key)
        assert doc.key == key
        assert doc.title == entry.title
        assert doc.content.strip()


def test_quick_start_contains_first_step(documents):
    assert "Step 1: Create Your App" in documents.get("quick-start").content


def test_mana_points_title(documents):
    assert documents.get("mana-points").title == "Mana Points System"


def test_base_url_is_rendered_into_docs(documents):
    quick_start = documents.get("quick-start").content

    assert "curl -X POST https://api.example.test/api/v1/apps" in quick_start
    for doc in documents.values():
        assert "{{" not in doc.content


def test_docs_keep_foreign_interpolation_syntax(documents):
    # JavaScript template literals inside code samples survive rendering.
    assert "`${API}/bot/getUpdates`" in documents.get("code-examples").content


def test_unknown_topic_lists_every_valid_key(documents):
    with pytest.raises(UnknownCatalogKeyError) as excinfo:
        documents.get("no-such-topic")

    message = str(excinfo.value)
    assert message.startswith('Topic "no-such-topic" not found. Available topics: ')
    for key in DOCUMENT_REGISTRY:
        assert key in message
    assert excinfo.value.valid_keys == list(DOCUMENT_REGISTRY)


def test_unknown_template_lists_every_valid_key(templates):
    with pytest.raises(UnknownCatalogKeyError) as excinfo:
        templates.get("nonexistent-key")

    message = str(excinfo.value)
    assert "node-polling" in message
    assert message == (
        'Template "nonexistent-key" not found. Available: '
        + ", ".join(TEMPLATE_REGISTRY)
    )


def test_templates_are_returned_verbatim(templates):
    node = templates.get("node-polling")

    assert node.title == "Node.js Polling Bot"
    assert node.language == "javascript"
    assert node.code.startswith("// Solafon Polling Bot")
    assert "fetch(`${API}/bot/getUpdates`" in node.code
    assert node.code.endswith("poll();\n")


def test_go_template_keeps_tabs(templates):
    assert "\tbotToken = os.Getenv" in templates.get("go-webhook").code


def test_template_languages(templates):
    languages = {t.key: t.language for t in templates.values()}

    assert languages == {
        "node-polling": "javascript",
        "node-webhook": "javascript",
        "python-polling": "python",
        "python-webhook": "python",
        "go-webhook": "go",
        "node-ai-bot": "javascript",
    }


def test_catalog_mapping_is_read_only(documents):
    with pytest.raises(TypeError):
        documents.mapping["introduction"] = None


def test_catalog_is_detached_from_source_dict():
    source = {"a": 1}
    catalog = Catalog(source, item_label="Item", available_label="Available")
    source["b"] = 2

    assert "b" not in catalog
    assert len(catalog) == 1
    assert list(catalog) == ["a"]
