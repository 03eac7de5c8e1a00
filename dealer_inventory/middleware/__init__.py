"""HTTP middleware: request ID.

Applied in main app; order matters (first added = outermost).
Import and use from dealer_inventory.main.
"""

from dealer_inventory.middleware.request_id import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
]
