"""Typed access to the fillable fields of an opened PDF form."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dc_field
from typing import Any

import fitz  # PyMuPDF

LOGGER = logging.getLogger(__name__)

_OFF_VALUES = {"off", "0", "false", "no", "none", ""}


@dataclass(frozen=True)
class TextField:
    name: str
    widgets: tuple[fitz.Widget, ...]
    # Widgets are only writable while their page is alive.
    pages: tuple[fitz.Page, ...] = dc_field(default=(), repr=False, compare=False)


@dataclass(frozen=True)
class CheckboxField:
    name: str
    widgets: tuple[fitz.Widget, ...]
    pages: tuple[fitz.Page, ...] = dc_field(default=(), repr=False, compare=False)


@dataclass(frozen=True)
class DropdownField:
    name: str
    widgets: tuple[fitz.Widget, ...]
    options: tuple[str, ...]
    pages: tuple[fitz.Page, ...] = dc_field(default=(), repr=False, compare=False)


@dataclass(frozen=True)
class UnsupportedField:
    """Signature, push button or other widget the filler never writes."""

    name: str
    kind: str


@dataclass(frozen=True)
class NotFound:
    name: str


FormField = TextField | CheckboxField | DropdownField | UnsupportedField | NotFound


def _choice_options(widget: fitz.Widget) -> tuple[str, ...]:
    options: list[str] = []
    for choice in getattr(widget, "choice_values", None) or []:
        # Choices are either plain strings or (export value, display value) pairs.
        if isinstance(choice, (list, tuple)) and choice:
            options.append(str(choice[0]))
        else:
            options.append(str(choice))
    return tuple(options)


class FormHandle:
    """Index of an opened document's widgets by field name."""

    def __init__(self, doc: fitz.Document) -> None:
        # A widget is bound to its page; dropping the page unbinds the widget.
        self._pages: list[fitz.Page] = list(doc)
        self._widgets: dict[str, list[fitz.Widget]] = {}
        self._field_pages: dict[str, list[fitz.Page]] = {}
        for page in self._pages:
            for widget in page.widgets() or []:
                name = str(widget.field_name or "").strip()
                if name:
                    self._widgets.setdefault(name, []).append(widget)
                    pages = self._field_pages.setdefault(name, [])
                    if not any(item is page for item in pages):
                        pages.append(page)

    def field_names(self) -> list[str]:
        return list(self._widgets)

    def lookup(self, name: str) -> FormField:
        """Return the typed field for ``name`` or ``NotFound``."""
        widgets = self._widgets.get(name)
        if not widgets:
            return NotFound(name=name)
        field_type = widgets[0].field_type
        pages = tuple(self._field_pages.get(name, ()))
        if field_type == fitz.PDF_WIDGET_TYPE_TEXT:
            return TextField(name=name, widgets=tuple(widgets), pages=pages)
        if field_type in (fitz.PDF_WIDGET_TYPE_CHECKBOX, fitz.PDF_WIDGET_TYPE_RADIOBUTTON):
            return CheckboxField(name=name, widgets=tuple(widgets), pages=pages)
        if field_type in (fitz.PDF_WIDGET_TYPE_COMBOBOX, fitz.PDF_WIDGET_TYPE_LISTBOX):
            return DropdownField(
                name=name,
                widgets=tuple(widgets),
                options=_choice_options(widgets[0]),
                pages=pages,
            )
        return UnsupportedField(
            name=name,
            kind=str(getattr(widgets[0], "field_type_string", "") or field_type),
        )


def apply_text(field: TextField, value: str) -> str:
    """Write ``value`` to every widget of the field; returns what was written."""
    written = value
    for widget in field.widgets:
        max_len = int(getattr(widget, "text_maxlen", 0) or 0)
        if max_len and len(written) > max_len:
            LOGGER.info(
                "Truncating value to field max length %d",
                max_len,
                extra={"field_name": field.name},
            )
            written = written[:max_len]
        widget.field_value = written
        widget.update()
    return written


def _on_state(widget: fitz.Widget) -> str:
    try:
        state = widget.on_state()
    except (AttributeError, RuntimeError):
        return "Yes"
    if isinstance(state, str) and state:
        return state
    return "Yes"


def apply_checkbox(field: CheckboxField, checked: bool) -> None:
    """Set the check state; explicit export values first, bool as a fallback."""
    for widget in field.widgets:
        target_value = _on_state(widget) if checked else "Off"
        try:
            widget.field_value = target_value
            widget.update()
        except Exception:
            widget.field_value = bool(checked)
            widget.update()


def apply_choice(field: DropdownField, value: str) -> str | None:
    """Select the option matching ``value`` (case-insensitive); ``None`` if absent."""
    selected = next((option for option in field.options if option == value), None)
    if selected is None:
        wanted = value.strip().lower()
        selected = next(
            (option for option in field.options if option.strip().lower() == wanted),
            None,
        )
    if selected is None:
        return None
    for widget in field.widgets:
        widget.field_value = selected
        widget.update()
    return selected


def is_checked(value: Any) -> bool:
    """Interpret a checkbox ``field_value`` as read back from a PDF."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() not in _OFF_VALUES
