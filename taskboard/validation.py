"""
Form validation for task create/edit payloads, plus the attachment upload gate.

Validation is side-effect free: validate() never raises and never touches
the board, so the UI may call it on every keystroke. The store calls it
again before any mutation.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from .errors import ValidationError
from .schema import Category, Status

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "title required"
TITLE_TYPE = "title must be text"
DUE_DATE_REQUIRED = "due date required"
DUE_DATE_FORMAT = "due date must be YYYY-MM-DD"

# Wire name → accepted aliases
FIELD_ALIASES = {
    "title": ("title",),
    "description": ("description",),
    "category": ("category",),
    "dueDate": ("dueDate", "due_date", "date"),
    "status": ("status",),
    "attachments": ("attachments",),
}
# Present on serialized tasks but never editable through a form
READ_ONLY_FIELDS = frozenset({"id", "isChecked", "is_checked"})


def canonical_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename field aliases to their wire names; other keys pass through."""
    renames = {alias: name for name, aliases in FIELD_ALIASES.items() for alias in aliases}
    return {renames.get(key, key): value for key, value in payload.items()}


def normalize_due_date(value: Any, today: Optional[date] = None) -> str:
    """
    Coerce a due date to ISO YYYY-MM-DD.

    "Today" (any case) resolves to the current date, and datetime strings
    keep only their date part.
    """
    text = str(value).strip()
    if text.lower() == "today":
        return (today or date.today()).isoformat()
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        raise ValueError(DUE_DATE_FORMAT) from None


@dataclass
class ValidationResult:
    """Outcome of validating one payload."""

    payload: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> Dict[str, Any]:
        """Return the normalized payload, or raise ValidationError."""
        if self.errors:
            raise ValidationError(self.errors)
        return self.payload

    def to_dict(self) -> Dict[str, Any]:
        payload = dict(self.payload)
        if "category" in payload:
            payload["category"] = payload["category"].value
        if "status" in payload:
            payload["status"] = payload["status"].value
        if "attachments" in payload:
            payload["attachments"] = list(payload["attachments"])
        return {"ok": self.ok, "errors": self.errors, "payload": payload}


class FormValidator:
    """
    Validates and normalizes a task form payload.

    Rules:
        - title: required string, non-blank after trimming
        - dueDate: required, ISO date (or "Today")
        - description: optional, defaults to ""
        - category: optional, case-insensitive, defaults to default_category
        - status: optional; only meaningful for edits
        - attachments: optional list of filenames
        - unknown fields are rejected; read-only fields are ignored
    """

    def __init__(self, default_category: Category = Category.WORK, today=None):
        self.default_category = default_category
        self._today = today  # callable returning a date; tests pin it

    def validate(self, payload: Mapping[str, Any]) -> ValidationResult:
        result = ValidationResult()
        values = self._collect(payload, result)

        # ── title ──
        title = values.get("title")
        if title is not None and not isinstance(title, str):
            result.errors["title"] = TITLE_TYPE
        elif title is None or not title.strip():
            result.errors["title"] = TITLE_REQUIRED
        else:
            result.payload["title"] = title.strip()

        # ── dueDate ──
        due = values.get("dueDate")
        if due is None or str(due).strip() == "":
            result.errors["dueDate"] = DUE_DATE_REQUIRED
        else:
            try:
                today = self._today() if self._today else None
                result.payload["dueDate"] = normalize_due_date(due, today)
            except ValueError as e:
                result.errors["dueDate"] = str(e)

        result.payload["description"] = str(values.get("description") or "")

        # ── category ──
        raw_category = values.get("category")
        if raw_category in (None, ""):
            result.payload["category"] = self.default_category
        else:
            try:
                result.payload["category"] = Category.from_str(raw_category)
            except ValueError:
                result.errors["category"] = f"invalid category: {raw_category}"

        # ── status ──
        raw_status = values.get("status")
        if raw_status not in (None, ""):
            try:
                result.payload["status"] = Status.from_str(raw_status)
            except ValueError:
                result.errors["status"] = f"invalid status: {raw_status}"

        # ── attachments ──
        attachments = values.get("attachments")
        if attachments is None:
            result.payload["attachments"] = ()
        elif isinstance(attachments, (list, tuple)) and all(
            isinstance(a, str) for a in attachments
        ):
            result.payload["attachments"] = tuple(attachments)
        else:
            result.errors["attachments"] = "attachments must be a list of filenames"

        return result

    def _collect(self, payload: Mapping[str, Any], result: ValidationResult) -> Dict[str, Any]:
        """Map aliases onto wire names and flag unknown fields."""
        values: Dict[str, Any] = {}
        known = set(READ_ONLY_FIELDS)
        for name, aliases in FIELD_ALIASES.items():
            known.update(aliases)
            for alias in aliases:
                if alias in payload:
                    values[name] = payload[alias]
                    break
        unknown = set(payload.keys()) - known
        if unknown:
            result.errors["fields"] = f"unknown fields: {', '.join(sorted(unknown))}"
        return values


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Upload gate
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@dataclass(frozen=True)
class AttachmentCandidate:
    """A file the user selected or dropped onto the form."""

    name: str
    media_type: str
    size: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttachmentCandidate":
        return cls(
            name=str(data.get("name", "")),
            media_type=str(data.get("type") or data.get("media_type") or ""),
            size=int(data.get("size", 0)),
        )


@dataclass(frozen=True)
class UploadLimits:
    max_bytes: int = 5 * 1024 * 1024
    media_types: FrozenSet[str] = frozenset({"image/jpeg", "image/png", "application/pdf"})

    @classmethod
    def from_config(cls, config) -> "UploadLimits":
        return cls(
            max_bytes=config.max_attachment_bytes,
            media_types=frozenset(config.allowed_media_types),
        )


def accept_attachments(
    candidates: Iterable[AttachmentCandidate],
    limits: UploadLimits = UploadLimits(),
) -> List[str]:
    """
    Return the filenames of acceptable candidates, in order.

    Rejected files are dropped without an error; the caller only sees the
    shorter list.
    """
    accepted = []
    for candidate in candidates:
        if candidate.media_type not in limits.media_types:
            logger.debug(f"Dropped attachment {candidate.name}: type {candidate.media_type}")
            continue
        if candidate.size > limits.max_bytes:
            logger.debug(f"Dropped attachment {candidate.name}: {candidate.size} bytes")
            continue
        accepted.append(candidate.name)
    return accepted
