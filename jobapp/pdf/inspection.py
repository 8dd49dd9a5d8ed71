"""Template introspection: field listings, mapping coverage and read-back."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Literal

import fitz  # PyMuPDF

from jobapp.pdf.fields import is_checked
from jobapp.pdf.mappings import ApplicationFieldMappings, I9FieldMappings

Resolution = Literal["primary", "fallback", "missing"]


@dataclass(frozen=True)
class TemplateField:
    name: str
    kind: str
    page: int
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class CoverageEntry:
    """How one mapped attribute resolves against a template."""

    attribute: str
    resolution: Resolution
    field_name: str = ""


def _normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def list_form_fields(doc: fitz.Document) -> list[TemplateField]:
    """One entry per field name, in page order (first widget wins)."""
    seen: set[str] = set()
    fields: list[TemplateField] = []
    for page in doc:
        for widget in page.widgets() or []:
            name = _normalize_text(widget.field_name)
            if not name or name in seen:
                continue
            seen.add(name)
            options = tuple(
                _normalize_text(choice[0] if isinstance(choice, (list, tuple)) else choice)
                for choice in (getattr(widget, "choice_values", None) or [])
            )
            fields.append(
                TemplateField(
                    name=name,
                    kind=_normalize_text(widget.field_type_string),
                    page=page.number + 1,
                    options=options,
                )
            )
    return fields


def mapping_coverage(
    table: ApplicationFieldMappings | I9FieldMappings,
    field_names: Iterable[str],
) -> list[CoverageEntry]:
    """Report, per attribute, whether the primary, a fallback or nothing matches."""
    available = set(field_names)
    entries: list[CoverageEntry] = []
    for prefix, namespace in table.namespaces():
        for key, mapping in namespace.items():
            attribute = f"{prefix}.{key}"
            if mapping.primary in available:
                entries.append(CoverageEntry(attribute, "primary", mapping.primary))
                continue
            fallback = next((name for name in mapping.fallbacks if name in available), "")
            if fallback:
                entries.append(CoverageEntry(attribute, "fallback", fallback))
            else:
                entries.append(CoverageEntry(attribute, "missing"))
    return entries


def coverage_summary(entries: Iterable[CoverageEntry]) -> dict[str, Any]:
    items = list(entries)
    counts = {"primary": 0, "fallback": 0, "missing": 0}
    for item in items:
        counts[item.resolution] += 1
    return {
        "counts": counts,
        "missing": [item.attribute for item in items if item.resolution == "missing"],
        "entries": [asdict(item) for item in items],
    }


def read_field_values(pdf_bytes: bytes) -> dict[str, str | bool]:
    """Read back every field of a filled PDF; checkboxes come back as ``bool``."""
    values: dict[str, str | bool] = {}
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            for widget in page.widgets() or []:
                name = _normalize_text(widget.field_name)
                if not name or name in values:
                    continue
                if widget.field_type in (
                    fitz.PDF_WIDGET_TYPE_CHECKBOX,
                    fitz.PDF_WIDGET_TYPE_RADIOBUTTON,
                ):
                    values[name] = is_checked(widget.field_value)
                else:
                    values[name] = _normalize_text(widget.field_value)
    return values
