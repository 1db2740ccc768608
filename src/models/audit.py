"""
Audit Models for Ledger Facade

Every request outcome is recorded as an audit event:
1. Traceability of what was fetched from and sent to the ledger
2. Debugging information when upstream data breaks its contract
3. Client mistakes kept apart from upstream failures

DESIGN DECISION: Audit events are written to the structured log only.
The facade keeps no store of its own.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Startup
    LEDGER_CONNECTED = "ledger_connected"
    STARTUP_FAILED = "startup_failed"

    # Reads
    ACCOUNTS_FETCHED = "accounts_fetched"
    BUDGET_MONTH_FETCHED = "budget_month_fetched"
    CATEGORY_BUDGET_RESOLVED = "category_budget_resolved"
    CATEGORY_NOT_FOUND = "category_not_found"

    # Validation
    SHAPE_VALIDATION_FAILED = "shape_validation_failed"
    REQUEST_VALIDATION_FAILED = "request_validation_failed"

    # Writes
    TRANSACTION_CREATED = "transaction_created"

    # System events
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


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
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events of one HTTP request share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events raised while serving one request"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.accounts_fetched(3, correlation_id)
        event = AuditEventBuilder.category_not_found("Rent", False, correlation_id)
    """

    @staticmethod
    def ledger_connected(sync_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_CONNECTED,
            description="Connected to ledger budget",
            details={"sync_id": sync_id},
        )

    @staticmethod
    def startup_failed(error_message: str, details: Optional[dict] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STARTUP_FAILED,
            severity=AuditSeverity.CRITICAL,
            description="Error during server initialization",
            error_message=error_message,
            details=details or {},
        )

    @staticmethod
    def accounts_fetched(count: int, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNTS_FETCHED,
            correlation_id=correlation_id,
            description=f"Fetched {count} accounts",
            details={"account_count": count},
        )

    @staticmethod
    def budget_month_fetched(
        month: str,
        category_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_MONTH_FETCHED,
            correlation_id=correlation_id,
            description=f"Fetched budget month {month}",
            details={"month": month, "category_count": category_count},
        )

    @staticmethod
    def category_budget_resolved(
        category_id: str,
        category_name: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_BUDGET_RESOLVED,
            correlation_id=correlation_id,
            description=f"Resolved budget for category {category_name}",
            details={"category_id": category_id},
        )

    @staticmethod
    def category_not_found(
        category_name: str,
        matched_income: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Budget data not found for category {category_name}",
            details={
                "category_name": category_name,
                "matched_income_category": matched_income,
            },
        )

    @staticmethod
    def shape_validation_failed(
        source: str,
        issues: list[dict],
        raw_data: Any,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHAPE_VALIDATION_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"{source.capitalize()} validation failed with {len(issues)} issues",
            details={
                "source": source,
                "issues": issues,
                "raw_data": raw_data,
            },
        )

    @staticmethod
    def request_validation_failed(
        issues: list[dict],
        request_body: Any,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REQUEST_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Transaction validation failed with {len(issues)} issues",
            details={
                "issues": issues,
                "request_body": request_body,
            },
        )

    @staticmethod
    def transaction_created(
        account_id: str,
        amount: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATED,
            correlation_id=correlation_id,
            description=f"Transaction created on account {account_id}",
            details={
                "account_id": account_id,
                "amount": amount,
            },
        )

    @staticmethod
    def external_service_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID],
        details: Optional[dict] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Ledger call failed: {operation}",
            error_message=error_message,
            details={"operation": operation, **(details or {})},
        )
