"""Export file writers (local filesystem)."""

from dealer_inventory.infrastructure.export.json_export_writer import JsonExportWriter

__all__ = ["JsonExportWriter"]
