from .catalog import Catalog, UnknownCatalogKeyError
from .documents import DOCUMENT_REGISTRY, Document, load_documents
from .templates import TEMPLATE_REGISTRY, Template, load_templates

__all__ = [
    "Catalog",
    "UnknownCatalogKeyError",
    "DOCUMENT_REGISTRY",
    "Document",
    "load_documents",
    "TEMPLATE_REGISTRY",
    "Template",
    "load_templates",
]
