"""
Error Taxonomy

Every expected failure carries the HTTP status it maps to, so the web
layer can render it without knowing where it was raised:

- 400: the client sent something wrong (fixable by the client)
- 404: the client asked for something that is not there
- 500: the upstream ledger misbehaved (not the client's fault)
"""

from typing import Optional

from src.models.common import FieldIssue


class FacadeError(Exception):
    """Base exception for all expected failures while serving a request."""

    status_code: int = 500

    def __init__(self, message: str, issues: Optional[list[FieldIssue]] = None):
        self.message = message
        self.issues = issues
        super().__init__(message)


class BadRequestError(FacadeError):
    """Malformed query parameter or request body."""

    status_code = 400


class CollaboratorError(FacadeError):
    """The upstream ledger call itself failed (network, auth or internal)."""

    status_code = 500
