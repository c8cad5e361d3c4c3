"""
Wishlist reconciliation.

Plans the create/update/delete changes between Steam and Notion,
applies them, and announces price drops.
"""

from steam_price_notifier.reconciliation.error_reporter import ErrorReporter
from steam_price_notifier.reconciliation.planner import (
    WishlistChanges,
    build_new_row,
    build_updated_row,
    index_rows,
    next_lowest_price,
    parse_app_id,
    plan_changes,
)
from steam_price_notifier.reconciliation.reconciler import (
    ReconciliationResult,
    WishlistReconciler,
)

__all__ = [
    "ErrorReporter",
    "ReconciliationResult",
    "WishlistChanges",
    "WishlistReconciler",
    "build_new_row",
    "build_updated_row",
    "index_rows",
    "next_lowest_price",
    "parse_app_id",
    "plan_changes",
]
