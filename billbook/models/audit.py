"""
Audit Models for Bill Book

Every user action on the ledger is logged for audit purposes.
This provides:
1. Traceability of who recorded or removed what
2. Debugging information when persisted data goes bad
3. A history that can be reconstructed per session

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Session
    USER_SELECTED = "user_selected"
    USER_LOGGED_OUT = "user_logged_out"

    # Ledger changes
    BILL_SAVED = "bill_saved"
    BILL_DELETED = "bill_deleted"
    VALIDATION_FAILED = "validation_failed"

    # Delete confirmation
    DELETE_REQUESTED = "delete_requested"
    DELETE_CANCELLED = "delete_cancelled"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'bill', 'user', 'ledger')"
    )
    entity_id: Optional[str] = None

    # Correlation - all events of one session share this
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.bill_saved(bill_id, user_id, amount, category)
        event = AuditEventBuilder.delete_requested(bill_id, user_id, correlation_id)
    """

    @staticmethod
    def user_selected(
        user_id: int,
        user_name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SELECTED,
            entity_type="user",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description=f"Logged in as {user_name}",
            is_user_action=True,
        )

    @staticmethod
    def user_logged_out(
        user_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_OUT,
            entity_type="user",
            entity_id=str(user_id),
            correlation_id=correlation_id,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def bill_saved(
        bill_id: str,
        user_id: int,
        amount: str,
        category: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_SAVED,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description=f"Bill saved: {category} - {amount}",
            details={
                "user_id": user_id,
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def bill_deleted(
        bill_id: str,
        user_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_DELETED,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description="Bill deleted",
            details={"user_id": user_id},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        kind: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Validation failed: {kind}",
            error_message=message,
            details={"kind": kind},
            is_user_action=True,
        )

    @staticmethod
    def delete_requested(
        bill_id: str,
        user_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_REQUESTED,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description="Delete awaiting confirmation",
            details={"user_id": user_id},
            is_user_action=True,
        )

    @staticmethod
    def delete_cancelled(
        bill_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_CANCELLED,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description="Delete cancelled",
            is_user_action=True,
        )

    @staticmethod
    def ledger_loaded(
        storage_key: str,
        bill_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            entity_id=storage_key,
            description=f"Ledger loaded with {bill_count} bills",
            details={"bill_count": bill_count},
        )

    @staticmethod
    def ledger_load_failed(
        storage_key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            entity_id=storage_key,
            description="Persisted ledger is malformed",
            error_message=error_message,
        )
