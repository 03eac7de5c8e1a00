"""Infrastructure exceptions for export and external operations.

Export errors extend DealerInventoryException so presentation can map them
to HTTP responses consistently.
"""

from dealer_inventory.domain.exceptions import DealerInventoryException


class ExportException(DealerInventoryException):
    """Base exception for export file operations."""


class ExportPathError(ExportException):
    """Export file name resolves outside the export directory."""

    def __init__(self, file_name: str) -> None:
        super().__init__(
            f"Export path not allowed: {file_name}",
            "EXPORT_PATH_ERROR",
            {"file_name": file_name},
        )


class ExportWriteError(ExportException):
    """Writing the export file failed."""

    def __init__(self, file_name: str, reason: str) -> None:
        super().__init__(
            f"Failed to write export file: {file_name}",
            "EXPORT_WRITE_ERROR",
            {"file_name": file_name, "reason": reason},
        )
