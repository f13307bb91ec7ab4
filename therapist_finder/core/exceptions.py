"""Application error taxonomy.

Every error that reaches the HTTP layer is rendered into the
`{success: false, error: {message}}` envelope with the status code
declared here.
"""


class TherapistFinderError(Exception):
    """Base error for the directory service."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class InvalidIdentifierError(TherapistFinderError):
    """Malformed therapist identifier."""

    status_code = 400
    public_message = "Invalid therapist ID"


class TherapistNotFoundError(TherapistFinderError):
    """No therapist matches the requested identifier."""

    status_code = 404
    public_message = "Therapist not found"

    def __init__(self, therapist_id: str) -> None:
        super().__init__()
        self.therapist_id = therapist_id


class StorageError(TherapistFinderError):
    """A storage read failed.

    The public message never carries driver or SQL detail.
    """

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, operation: str) -> None:
        super().__init__()
        self.operation = operation
