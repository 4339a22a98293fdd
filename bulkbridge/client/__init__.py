# Upload client: splitst een bestand en uploadt de parts rechtstreeks naar de store

from .coordinator import UploadCoordinator, UploadResult
from .errors import (
    BulkBridgeClientError,
    MissingETagError,
    PartUploadError,
    PresignCountMismatchError,
    PresignPartNumbersError,
)
from .splitter import MAX_PART_SIZE, PartRange, split_parts
from .state import PartStatus, UploadStatus

__all__ = [
    "UploadCoordinator",
    "UploadResult",
    "BulkBridgeClientError",
    "MissingETagError",
    "PartUploadError",
    "PresignCountMismatchError",
    "PresignPartNumbersError",
    "MAX_PART_SIZE",
    "PartRange",
    "split_parts",
    "PartStatus",
    "UploadStatus",
]
