from .models import (
    SCHEMA,
    DeletionOutcome,
    ManifestItem,
    ReplaceResult,
    WrappedManifest,
    decode_entry,
    normalize_manifest,
)
from .service import (
    ManifestService,
    ManifestValidationError,
    removed_sources,
    serialize_items,
    validate_items,
)

__all__ = [
    "SCHEMA",
    "DeletionOutcome",
    "ManifestItem",
    "ReplaceResult",
    "WrappedManifest",
    "decode_entry",
    "normalize_manifest",
    "ManifestService",
    "ManifestValidationError",
    "removed_sources",
    "serialize_items",
    "validate_items",
]
