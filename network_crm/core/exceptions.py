"""Error types shared by the storage layer, the API and the client."""


class StorageError(Exception):
    """A database operation failed (constraint violation, connectivity, ...).

    Distinct from "not found" (services return None/False) and from
    validation failures (pydantic rejects the payload before storage).
    """


class ApiError(Exception):
    """Non-success HTTP response returned by the CRM API."""

    def __init__(self, status: int, message: str, errors: list = None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.errors = errors or []

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_validation_error(self) -> bool:
        return self.status == 400
