"""Domain rules that do not depend on FastAPI or storage."""

from .records import ADOPTERS, KINDS, PETS, RecordKind, extract_fields, missing_required

__all__ = ["ADOPTERS", "KINDS", "PETS", "RecordKind", "extract_fields", "missing_required"]
