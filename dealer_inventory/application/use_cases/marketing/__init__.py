"""Marketing sync use cases."""

from dealer_inventory.application.use_cases.marketing.marketing_sync import (
    DEFAULT_SYNC_MESSAGE,
    MarketingSyncProcessor,
    export_file_name,
)

__all__ = ["DEFAULT_SYNC_MESSAGE", "MarketingSyncProcessor", "export_file_name"]
