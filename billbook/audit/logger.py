"""
Audit Logger

DESIGN DECISION: Every user action on the ledger is logged.
This provides:
1. Traceability of who recorded and removed which bill
2. Debugging capability when persisted data goes bad
3. Per-session history via correlation ids

The audit logger:
- Is synchronous, like everything else in the ledger
- Gracefully handles failures (a broken audit sink never breaks a save)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from billbook.config import LedgerSettings, get_settings
from billbook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from billbook.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(settings: Optional[LedgerSettings] = None) -> None:
    """
    Route billbook logs to stderr at the level the settings ask for.

    debug_mode turns on DEBUG output (ledger loads, storage writes).
    """
    settings = settings or get_settings()
    logging.basicConfig(format="%(message)s")
    logging.getLogger("billbook").setLevel(
        logging.DEBUG if settings.debug_mode else logging.INFO
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, if one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("billbook.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_user_selected(
        self,
        user_id: int,
        user_name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.user_selected(
            user_id=user_id,
            user_name=user_name,
            correlation_id=correlation_id,
        ))

    def log_user_logged_out(
        self,
        user_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.user_logged_out(
            user_id=user_id,
            correlation_id=correlation_id,
        ))

    def log_bill_saved(
        self,
        bill_id: str,
        user_id: int,
        amount: str,
        category: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log bill save."""
        self.log(AuditEventBuilder.bill_saved(
            bill_id=bill_id,
            user_id=user_id,
            amount=amount,
            category=category,
            correlation_id=correlation_id,
        ))

    def log_bill_deleted(
        self,
        bill_id: str,
        user_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log bill deletion."""
        self.log(AuditEventBuilder.bill_deleted(
            bill_id=bill_id,
            user_id=user_id,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        kind: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a rejected add or delete."""
        self.log(AuditEventBuilder.validation_failed(
            kind=kind,
            message=message,
            correlation_id=correlation_id,
        ))

    def log_delete_requested(
        self,
        bill_id: str,
        user_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.delete_requested(
            bill_id=bill_id,
            user_id=user_id,
            correlation_id=correlation_id,
        ))

    def log_delete_cancelled(
        self,
        bill_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.delete_cancelled(
            bill_id=bill_id,
            correlation_id=correlation_id,
        ))

    def log_ledger_loaded(self, storage_key: str, bill_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(
            storage_key=storage_key,
            bill_count=bill_count,
        ))

    def log_ledger_load_failed(self, storage_key: str, error_message: str) -> None:
        """Log a malformed persisted ledger."""
        self.log(AuditEventBuilder.ledger_load_failed(
            storage_key=storage_key,
            error_message=error_message,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a session and pass it through
    every ledger operation the session performs.
    """
    return uuid4()
