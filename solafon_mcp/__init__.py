"""MCP connector exposing Solafon documentation, bot scaffolds and the Solafon REST API."""

__version__ = "0.1.0"
