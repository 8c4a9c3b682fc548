"""
Error types

Every error knows its HTTP status and its response body. The bodies keep
the shapes clients already rely on: {"message": ...} for a missing
document and {"error": ...} for anything the store rejected.
"""

from contextlib import contextmanager

from pydantic import ValidationError
from pymongo.errors import PyMongoError


class BoutiqueError(Exception):
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class ResourceNotFoundError(BoutiqueError):
    """No document carries the requested business id."""
    http_status = 404

    def __init__(self, message: str, resource_id=None):
        super().__init__(message)
        self.resource_id = resource_id

    def to_response(self) -> dict:
        return {"message": self.message}


class StoreError(BoutiqueError):
    """The store refused a query or a write.

    The original error text is passed through unchanged, unique index
    violations included.
    """
    http_status = 500


@contextmanager
def store_errors():
    """Re-raise store, schema, id-cast and BSON int-range failures as StoreError."""
    try:
        yield
    except (PyMongoError, ValidationError, ValueError, OverflowError) as exc:
        raise StoreError(_describe(exc)) from exc


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        # One line per failing field, e.g. "quantity: Input should be a valid integer"
        return "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
            for e in exc.errors()
        ) or str(exc)
    return str(exc)
