"""
chainlaunch/errors.py

Error taxonomy for the publishing workflow.

Query failures carry a structured ErrorCode so callers can branch on
"resource absent" without inspecting message text.
"""

from enum import Enum, auto
from typing import Optional


# ============================================================================
# ERROR CODES
# ============================================================================

class ErrorCode(Enum):
    """
    Classification of a failed remote query.

    NOT_FOUND: The requested resource does not exist
    INVALID_REQUEST: The chain rejected the request (also used by the
        coordinator registry to report an unknown address)
    INTERNAL: The query service failed internally
    UNAVAILABLE: The query service could not be reached
    UNKNOWN: Anything else

    gRPC INVALID_ARGUMENT (status 3) maps to INVALID_REQUEST on purpose.
    The coordinator registry answers an unknown address that way, so
    INVALID_REQUEST is one of the ABSENT_CODES. The code itself stays
    distinct from NOT_FOUND. Callers that must not treat a rejected
    request as absence (the campaign lookup, for one) propagate every
    error instead of classifying it.
    """
    NOT_FOUND = auto()
    INVALID_REQUEST = auto()
    INTERNAL = auto()
    UNAVAILABLE = auto()
    UNKNOWN = auto()

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorCode":
        """Map a gRPC status number to an ErrorCode."""
        mapping = {
            3: cls.INVALID_REQUEST,   # INVALID_ARGUMENT
            5: cls.NOT_FOUND,
            13: cls.INTERNAL,
            14: cls.UNAVAILABLE,
        }
        return mapping.get(status_code, cls.UNKNOWN)

    def __str__(self) -> str:
        return self.name.lower().replace('_', '-')


# Codes that mean "the resource does not exist yet"
ABSENT_CODES = frozenset({ErrorCode.NOT_FOUND, ErrorCode.INVALID_REQUEST})


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ChainLaunchError(Exception):
    """Base class for all chainlaunch errors."""
    pass


class QueryError(ChainLaunchError):
    """A read of on-chain state failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        resource: str = "",
    ):
        super().__init__(message)
        self.code = code
        self.resource = resource

    @classmethod
    def from_status(
        cls,
        status_code: int,
        message: str,
        resource: str = "",
    ) -> "QueryError":
        """Build a QueryError from a gRPC status number and message."""
        return cls(message, code=ErrorCode.from_status(status_code), resource=resource)

    def __str__(self) -> str:
        base = super().__str__()
        if self.resource:
            return f"{base} ({self.code}: {self.resource})"
        return f"{base} ({self.code})"


class BroadcastError(ChainLaunchError):
    """Submitting or confirming a transaction failed."""

    def __init__(self, message: str, tx_hash: str = "", code: int = 0):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.code = code


class DecodeError(ChainLaunchError):
    """A transaction response did not match the expected message kind."""
    pass


class GenesisFetchError(ChainLaunchError):
    """A genesis file could not be fetched or parsed."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class CancellationError(ChainLaunchError):
    """A remote call was abandoned before it completed."""
    pass


class RequestTimeoutError(CancellationError):
    """A remote call exceeded its configured deadline."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class InvalidSharesError(ChainLaunchError, ValueError):
    """Share amounts or denominations are malformed."""
    pass


# ============================================================================
# CLASSIFICATION
# ============================================================================

def unwrap_code(err: Optional[BaseException]) -> Optional[ErrorCode]:
    """
    Find the ErrorCode carried by an error or anything it wraps.

    Follows explicit causes (``raise ... from err``) only, stopping at the
    first QueryError found. Implicit context is ignored, so an error raised
    while handling a missing resource is not classified as one.

    Args:
        err: Exception to inspect

    Returns:
        The ErrorCode, or None if no QueryError is in the chain
    """
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        if isinstance(err, QueryError):
            return err.code
        err = err.__cause__
    return None


def is_resource_absent(err: Optional[BaseException]) -> bool:
    """Check whether an error reports that the queried resource does not exist."""
    return unwrap_code(err) in ABSENT_CODES
