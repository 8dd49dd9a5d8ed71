"""Template loading: bytes cached per process, a fresh document per request."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

import fitz  # PyMuPDF

from jobapp.pdf.errors import TemplateError

LOGGER = logging.getLogger(__name__)


class TemplateStore:
    """Reads fillable templates from one directory.

    Template bytes are immutable and shared between requests; every call to
    ``open_form`` returns a new ``fitz.Document`` the caller owns and closes.
    """

    def __init__(self, templates_dir: str | Path) -> None:
        self._templates_dir = Path(templates_dir)
        self._cache: dict[str, bytes] = {}
        self._lock = Lock()

    def path_for(self, name: str) -> Path:
        return self._templates_dir / name

    def load_bytes(self, name: str) -> bytes:
        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached
            path = self.path_for(name)
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise TemplateError(name, f"cannot read {path}: {exc}") from exc
            if not data:
                raise TemplateError(name, f"{path} is empty")
            self._cache[name] = data
            LOGGER.info("Loaded PDF template", extra={"path": str(path)})
            return data

    def open_form(self, name: str) -> fitz.Document:
        """Open a private copy of the template; raises ``TemplateError`` if unusable."""
        data = self.load_bytes(name)
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise TemplateError(name, f"not a readable PDF: {exc}") from exc
        if not doc.is_form_pdf:
            doc.close()
            raise TemplateError(name, "PDF has no fillable form fields")
        return doc

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
