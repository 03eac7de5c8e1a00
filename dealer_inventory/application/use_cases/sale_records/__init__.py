"""Sale record use cases."""

from dealer_inventory.application.use_cases.sale_records.sale_record_operations import (
    SALE_RECORD_QUERY_CONFIG,
    SaleRecordService,
)

__all__ = ["SALE_RECORD_QUERY_CONFIG", "SaleRecordService"]
