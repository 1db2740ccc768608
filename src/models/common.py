"""
Shared building blocks for the ledger models.

Money crosses the API in two forms:
- Upstream (Actual Budget) uses integers in minor units (cents).
- Clients see decimal amounts in major units.

`Amount` is the client-facing form. It is held as a Decimal internally and
rendered as a JSON number, never as a string.
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

# Upstream payloads and client bodies are camelCase on the wire, and only
# camelCase: a snake_case key counts as missing.
CAMEL_CASE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=False,
    frozen=True,
)

# Outgoing payloads are built in code by field name and rendered in camelCase.
CAMEL_CASE_RESPONSE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class FieldIssue(BaseModel):
    """A single field-level problem found while validating a payload."""

    field: str = Field(
        ...,
        description="Dotted path to the offending field"
    )
    issue_type: str = Field(
        ...,
        description="Machine-readable issue code (e.g. 'missing', 'string_pattern_mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ErrorResponse(BaseModel):
    """
    Error payload returned by every failing route.

    `issues` is only filled in for client-correctable failures.
    """

    error: str
    issues: Optional[list[FieldIssue]] = None
