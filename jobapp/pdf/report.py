"""Per-document outcome records for the fill and merge steps."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

FieldErrorReason = Literal[
    "not_found",
    "conflict",
    "wrong_kind",
    "invalid_option",
    "write_failed",
]


@dataclass(frozen=True)
class FieldError:
    """Why one logical attribute did not land in the form."""

    attribute: str
    reason: FieldErrorReason
    candidates: tuple[str, ...] = ()
    detail: str = ""


@dataclass(frozen=True)
class FilledField:
    attribute: str
    field_name: str
    value: str | bool


@dataclass
class FillReport:
    """Everything the filler wrote into one document, plus what it could not."""

    document: str
    filled: list[FilledField] = field(default_factory=list)
    errors: list[FieldError] = field(default_factory=list)
    dropped_entries: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def record(self, outcome: FilledField | FieldError | None) -> None:
        if isinstance(outcome, FilledField):
            self.filled.append(outcome)
        elif isinstance(outcome, FieldError):
            self.errors.append(outcome)

    def field_for(self, attribute: str) -> str | None:
        """PDF field name the attribute was written to, if any."""
        for item in self.filled:
            if item.attribute == attribute:
                return item.field_name
        return None

    def error_for(self, attribute: str) -> FieldError | None:
        for item in self.errors:
            if item.attribute == attribute:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document,
            "filled": [asdict(item) for item in self.filled],
            "errors": [asdict(item) for item in self.errors],
            "dropped_entries": dict(self.dropped_entries),
        }


MergeStatus = Literal["appended", "skipped"]


@dataclass(frozen=True)
class MergeOutcome:
    """Result of appending one uploaded document."""

    name: str
    mime_type: str
    status: MergeStatus
    pages_added: int = 0
    reason: str = ""


@dataclass
class GenerationReport:
    """Reports collected across one generation request."""

    application: FillReport
    i9: FillReport | None = None
    merged: list[MergeOutcome] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "application": self.application.to_dict(),
            "i9": self.i9.to_dict() if self.i9 is not None else None,
            "merged": [asdict(item) for item in self.merged],
        }
