"""Append uploaded PDFs and images to the generated application document."""

from __future__ import annotations

import binascii
import logging
from typing import Iterable

import fitz  # PyMuPDF

from jobapp.applicants.models import UploadedDocument
from jobapp.pdf.report import MergeOutcome

LOGGER = logging.getLogger(__name__)

PDF_MIME_TYPES = frozenset({"application/pdf"})
IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})

IMAGE_BOX_RATIO = 0.8
CAPTION_FONT_SIZE = 12
CAPTION_GAP = 8


def image_rect(page_rect: fitz.Rect, image_width: float, image_height: float) -> fitz.Rect:
    """Largest rect with the image's aspect ratio inside the centred 80% box."""
    box_width = page_rect.width * IMAGE_BOX_RATIO
    box_height = page_rect.height * IMAGE_BOX_RATIO
    scale = min(box_width / image_width, box_height / image_height)
    width = image_width * scale
    height = image_height * scale
    x0 = page_rect.x0 + (page_rect.width - width) / 2
    y0 = page_rect.y0 + (page_rect.height - height) / 2
    return fitz.Rect(x0, y0, x0 + width, y0 + height)


class DocumentMerger:
    """Appends uploads in submission order; bad uploads are skipped, never fatal."""

    def __init__(self, page_size: str = "letter") -> None:
        self._page_rect = fitz.paper_rect(page_size)

    def merge(
        self,
        target: fitz.Document,
        documents: Iterable[UploadedDocument],
        *,
        submission_id: str = "",
    ) -> list[MergeOutcome]:
        outcomes: list[MergeOutcome] = []
        for document in documents:
            outcome = self._merge_one(target, document)
            if outcome.status == "skipped":
                LOGGER.warning(
                    "Skipped uploaded document: %s",
                    outcome.reason,
                    extra={"document_name": document.name, "submission_id": submission_id},
                )
            outcomes.append(outcome)
        return outcomes

    def _merge_one(self, target: fitz.Document, document: UploadedDocument) -> MergeOutcome:
        mime_type = document.mime_type.strip().lower()
        if mime_type not in PDF_MIME_TYPES and mime_type not in IMAGE_MIME_TYPES:
            return MergeOutcome(
                name=document.name,
                mime_type=mime_type,
                status="skipped",
                reason=f"unsupported mime type '{mime_type}'",
            )
        try:
            data = document.decoded()
        except (binascii.Error, ValueError) as exc:
            return MergeOutcome(
                name=document.name,
                mime_type=mime_type,
                status="skipped",
                reason=f"invalid base64 data: {exc}",
            )
        try:
            if mime_type in PDF_MIME_TYPES:
                pages_added = self._append_pdf(target, data)
            else:
                pages_added = self._append_image(target, data, document.name)
        except Exception as exc:
            # Corrupt uploads surface as assorted MuPDF errors.
            return MergeOutcome(
                name=document.name,
                mime_type=mime_type,
                status="skipped",
                reason=f"unreadable document: {exc}",
            )
        return MergeOutcome(
            name=document.name,
            mime_type=mime_type,
            status="appended",
            pages_added=pages_added,
        )

    @staticmethod
    def _append_pdf(target: fitz.Document, data: bytes) -> int:
        with fitz.open(stream=data, filetype="pdf") as source:
            if source.page_count == 0:
                raise ValueError("document has no pages")
            target.insert_pdf(source)
            return source.page_count

    def _append_image(self, target: fitz.Document, data: bytes, name: str) -> int:
        pixmap = fitz.Pixmap(data)
        if pixmap.width <= 0 or pixmap.height <= 0:
            raise ValueError("image has no pixels")
        page_rect = self._page_rect
        rect = image_rect(page_rect, pixmap.width, pixmap.height)
        page = target.new_page(width=page_rect.width, height=page_rect.height)
        try:
            page.insert_image(rect, stream=data, keep_proportion=True)
        except Exception:
            target.delete_page(page.number)
            raise
        box_x0 = page_rect.width * (1 - IMAGE_BOX_RATIO) / 2
        box_y0 = page_rect.height * (1 - IMAGE_BOX_RATIO) / 2
        page.insert_text(
            fitz.Point(box_x0, box_y0 - CAPTION_GAP),
            f"Document: {name}",
            fontsize=CAPTION_FONT_SIZE,
            fontname="helv",
        )
        return 1
