# evaltrack/models/common.py
from typing import Literal

# status grueso (numérico)
PENDING, ONGOING, COMPLETED, CANCELED = 0, 1, 2, 3
STATUS_LABELS = {
    PENDING: "Pending",
    ONGOING: "Ongoing",
    COMPLETED: "Completed",
    CANCELED: "Canceled",
}
RequestStatus = Literal[0, 1, 2, 3]

DEFAULT_DETAILED_STATUS = "pending"

# Conjunto cerrado de disposiciones. Lo usan tanto el validador como GET /api/statuses.
DETAILED_STATUSES = (
    "pending",
    "ongoing-evaluation",
    "ongoing-system-sizing",
    "ongoing-costing",
    "ongoing-site-survey",
    "for-clarification",
    "for-supplier-quotation",
    "for-approval",
    "on-hold",
    "done-system-sizing",
    "done-costing",
    "done-site-survey",
    "done-technical-evaluation",
    "done-product-recommendation",
    "done-quotation-submitted",
    "done-bid-documents",
    "cancelled-double-entry",
    "cancelled-client-request",
    "cancelled-incomplete-details",
    "cancelled-no-budget",
    "cancelled-out-of-scope",
    "cancelled-supplier-unavailable",
    "cancelled-awarded-to-others",
    "cancelled-deadline-lapsed",
    "cancelled-others",
)
DETAILED_STATUS_SET = frozenset(DETAILED_STATUSES)

PI_STATUSES = ("open", "for-payment", "paid", "cancelled")
