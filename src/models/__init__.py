"""
Data Models Package

This package contains all Pydantic models used by the Ledger Facade.
Everything read from the ledger or a client must conform to these schemas.
"""

from src.models.account import Account, AccountsResponse
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from src.models.budget import BudgetMonth, CategoryBudget
from src.models.category import (
    CategoriesResponse,
    Category,
    CategoryGroup,
    CategoryInfo,
    ExpenseCategory,
    ExpenseCategoryInfo,
    IncomeCategory,
    IncomeCategoryInfo,
)
from src.models.common import Amount, ErrorResponse, FieldIssue
from src.models.transaction import (
    CreateTransactionRequest,
    NewTransaction,
    TransactionResponse,
)

__all__ = [
    # Ledger models
    "Account",
    "AccountsResponse",
    "BudgetMonth",
    "CategoriesResponse",
    "Category",
    "CategoryBudget",
    "CategoryGroup",
    "CategoryInfo",
    "CreateTransactionRequest",
    "ExpenseCategory",
    "ExpenseCategoryInfo",
    "IncomeCategory",
    "IncomeCategoryInfo",
    "NewTransaction",
    "TransactionResponse",
    # Shared
    "Amount",
    "ErrorResponse",
    "FieldIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
