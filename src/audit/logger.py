"""
Audit Logger

DESIGN DECISION: Every request outcome is logged as a structured event.
This provides:
1. Traceability of every ledger read and write
2. The raw upstream payload whenever it fails validation
3. Correlation IDs to tie together events of one request

Events go to the local structured log only; nothing is persisted.
"""

import logging
import sys
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from src.models.common import FieldIssue


def configure_logging(level: str = "INFO") -> None:
    """
    Configure stdlib logging and structlog for JSON output on stdout.

    Called once at startup, before the first logger is used.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
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
            structlog.processors.JSONRenderer(default=str)
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _issue_dicts(issues: Optional[list[FieldIssue]]) -> list[dict]:
    return [issue.model_dump() for issue in issues or []]


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger_name: str = "ledger_facade.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_connected(self, sync_id: str) -> None:
        self.log(AuditEventBuilder.ledger_connected(sync_id))

    def log_startup_failed(
        self,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.startup_failed(error_message, details))

    def log_accounts_fetched(self, count: int, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.accounts_fetched(count, correlation_id))

    def log_budget_month_fetched(
        self,
        month: str,
        category_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.budget_month_fetched(
            month=month,
            category_count=category_count,
            correlation_id=correlation_id,
        ))

    def log_category_budget_resolved(
        self,
        category_id: str,
        category_name: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.category_budget_resolved(
            category_id=category_id,
            category_name=category_name,
            correlation_id=correlation_id,
        ))

    def log_category_not_found(
        self,
        category_name: str,
        matched_income: bool,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.category_not_found(
            category_name=category_name,
            matched_income=matched_income,
            correlation_id=correlation_id,
        ))

    def log_shape_validation_failed(
        self,
        source: str,
        issues: Optional[list[FieldIssue]],
        raw_data: Any,
        correlation_id: UUID,
    ) -> None:
        """Log upstream data that failed validation, raw payload included."""
        self.log(AuditEventBuilder.shape_validation_failed(
            source=source,
            issues=_issue_dicts(issues),
            raw_data=raw_data,
            correlation_id=correlation_id,
        ))

    def log_request_validation_failed(
        self,
        issues: Optional[list[FieldIssue]],
        request_body: Any,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.request_validation_failed(
            issues=_issue_dicts(issues),
            request_body=request_body,
            correlation_id=correlation_id,
        ))

    def log_transaction_created(
        self,
        account_id: str,
        amount: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.transaction_created(
            account_id=account_id,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_external_service_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID],
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.external_service_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
            details=details,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One per incoming HTTP request.
    """
    return uuid4()
