from __future__ import annotations

from typing import Any


class APIError(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class WikiBulkError(Exception):
    """Base class for failures that abort a whole bulk command."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(WikiBulkError):
    pass


class BackendContractError(WikiBulkError):
    """The backend reply is missing a field the query contract promises."""


class TransportError(WikiBulkError):
    """A single request failed at the network or HTTP layer."""


class BatchRequestError(WikiBulkError):
    def __init__(self, message: str, *, failed: int, total: int):
        super().__init__(message)
        self.failed = failed
        self.total = total


class AllRequestsFailed(BatchRequestError):
    may_be_inconsistent = False


class PartialRequestFailure(BatchRequestError):
    # some mutations in the batch probably took effect server-side
    may_be_inconsistent = True
