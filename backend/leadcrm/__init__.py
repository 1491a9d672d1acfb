"""Lead CRM backend - lead enrichment engine."""

__version__ = "1.0.0"
