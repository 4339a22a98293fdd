# bulkbridge/client/errors.py
from typing import Optional


class BulkBridgeClientError(Exception):
    """Basisfout voor de upload-client."""


class UploadInProgressError(BulkBridgeClientError):
    pass


class ApiError(BulkBridgeClientError):
    """Backend antwoordde niet met 2xx of was onbereikbaar."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InitiateUploadError(ApiError):
    pass


class PresignRequestError(ApiError):
    pass


class CompleteUploadError(ApiError):
    pass


class PresignCountMismatchError(BulkBridgeClientError):
    def __init__(self, expected: int, received: int):
        super().__init__(
            f"Presigned URLs count does not match file chunks: expected {expected}, got {received}"
        )
        self.expected = expected
        self.received = received


class PartUploadError(BulkBridgeClientError):
    def __init__(self, part_number: int, status_code: Optional[int] = None, message: Optional[str] = None):
        if message is None:
            if status_code is None:
                message = f"Network error during part {part_number}"
            else:
                message = f"Upload part {part_number} failed: {status_code}"
        super().__init__(message)
        self.part_number = part_number
        self.status_code = status_code


class MissingETagError(PartUploadError):
    def __init__(self, part_number: int, status_code: Optional[int] = None):
        super().__init__(part_number, status_code, f"Missing ETag for part {part_number}")


class InvalidPartTransition(BulkBridgeClientError):
    def __init__(self, part_number: int, current: str):
        super().__init__(f"part {part_number} cannot leave state {current!r}")
        self.part_number = part_number
        self.current = current


class PresignPartNumbersError(BulkBridgeClientError):
    def __init__(self, expected: int, received: list):
        super().__init__(
            f"Presigned URLs do not cover parts 1..{expected}: got part numbers {received}"
        )
        self.expected = expected
        self.received = received
