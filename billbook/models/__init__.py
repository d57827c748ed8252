"""
Data Models Package

This package contains all Pydantic models used in Bill Book.
All data stored in the ledger must conform to these schemas.
"""

from billbook.models.bill import (
    CATEGORIES,
    USERS,
    Bill,
    Category,
    User,
    find_category,
    find_user,
    new_bill_id,
    plain_amount,
)
from billbook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CATEGORIES",
    "USERS",
    "Bill",
    "Category",
    "User",
    "find_category",
    "find_user",
    "new_bill_id",
    "plain_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
