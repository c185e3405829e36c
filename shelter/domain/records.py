"""Record kinds managed by the shelter (field catalogue and required-field rules)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class RecordKind:
    name: str
    singular: str
    text_fields: tuple[str, ...]
    list_fields: tuple[str, ...]
    required: tuple[str, ...]
    required_message: str

    @property
    def all_fields(self) -> tuple[str, ...]:
        return self.text_fields + self.list_fields

    def display_name(self, record: Mapping[str, Any]) -> str:
        """Human label used by list/detail views."""
        if self.name == "adopters":
            parts = [str(record.get("firstName") or ""), str(record.get("lastName") or "")]
            return " ".join(p for p in parts if p) or str(record.get("id", ""))
        return str(record.get("name") or record.get("id", ""))


PETS = RecordKind(
    name="pets",
    singular="pet",
    text_fields=("name", "type", "breed", "age", "gender", "weight", "photo", "about"),
    list_fields=("health", "specialNeeds"),
    required=("name", "type"),
    required_message="Name and type are required.",
)

ADOPTERS = RecordKind(
    name="adopters",
    singular="adopter",
    text_fields=("firstName", "lastName", "email", "phone", "address", "city", "state", "zip", "about"),
    list_fields=("preferences",),
    required=("firstName", "lastName", "email"),
    required_message="First name, last name and email are required.",
)

KINDS = {kind.name: kind for kind in (PETS, ADOPTERS)}


def _getlist(form: Any, key: str) -> list:
    if hasattr(form, "getlist"):
        return list(form.getlist(key))
    value = form.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def extract_fields(kind: RecordKind, form: Any) -> dict:
    """
    Pull the known fields of ``kind`` out of a submitted form.

    Text values are stripped; fields that were not submitted are left out.
    List fields accept repeated keys or one comma-separated value; blank
    entries are dropped.
    """
    fields: dict[str, Any] = {}
    for key in kind.text_fields:
        value = form.get(key)
        if value is None:
            continue
        fields[key] = str(value).strip()
    for key in kind.list_fields:
        raw = [str(v) for v in _getlist(form, key)]
        if len(raw) == 1 and "," in raw[0]:
            raw = raw[0].split(",")
        items = [item.strip() for item in raw if item and item.strip()]
        if items or key in form:
            fields[key] = items
    return fields


def missing_required(kind: RecordKind, fields: Mapping[str, Any]) -> list[str]:
    """Names of required fields that are absent or blank."""
    missing = []
    for key in kind.required:
        value = fields.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing
