"""
Trace Errors

Every error is terminal for the lookup that raised it. Each carries a
consumer-facing message so the caller can switch the page to its error
state without inspecting the cause.
"""
from typing import Optional


class TraceError(Exception):
    """Base class for all trace lookup failures."""

    user_message = "This product could not be traced right now."

    def __init__(self, message: Optional[str] = None, user_message: Optional[str] = None):
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


class MissingIdentifier(TraceError):
    """No asset identifier could be resolved from the lookup input."""

    user_message = "Input Required: Please provide a valid Serial ID or scan a QR code."


class TransportFailure(TraceError):
    """The history query did not complete or returned a non-2xx status."""

    user_message = "ID not found on the blockchain registry."

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message, user_message)
        self.status_code = status_code


class NonStructuredResponse(TraceError):
    """The history query body is not the expected JSON structure."""

    user_message = "The blockchain registry returned an unreadable response."


class LedgerLookupEmpty(TraceError):
    """The query succeeded but returned no history entries."""

    user_message = "Asset ID could not be resolved in the current ledger state."


class LedgerLookupRejected(LedgerLookupEmpty):
    """The query answered with success = false."""


class MalformedRecordEncoding(TraceError):
    """A record payload was text that does not decode to a JSON object."""

    user_message = "A ledger record for this asset could not be read."


class MalformedTimestamp(MalformedRecordEncoding):
    """A history entry has no usable timestamp."""


class EmptyHistory(TraceError):
    """A snapshot was requested from an empty event list."""

    user_message = "Asset ID could not be resolved in the current ledger state."
