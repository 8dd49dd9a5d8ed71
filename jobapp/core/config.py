"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


@dataclass(frozen=True)
class PdfConfig:
    """Template locations and PDF generation switches."""

    enabled: bool
    templates_dir: str
    application_template: str
    i9_template: str
    i9_policy: str
    flatten_widgets: bool


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging configuration."""

    level: str


@dataclass(frozen=True)
class LimitsConfig:
    """Request and upload size ceilings."""

    request_max_bytes: int
    upload_max_file_bytes: int
    upload_max_total_bytes: int


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    pdf: PdfConfig
    logging: LoggingConfig
    limits: LimitsConfig

    @staticmethod
    def from_env() -> "AppConfig":
        """Build app config from process environment."""
        # On unless switched off; deployments opt out rather than opt in.
        enabled = _env_flag("ENABLE_PDF_GENERATION", "1")
        templates_dir = os.getenv("PDF_TEMPLATES_DIR", "Templates").strip() or "Templates"
        application_template = (
            os.getenv("PDF_APPLICATION_TEMPLATE", "Wareworks Application.pdf").strip()
            or "Wareworks Application.pdf"
        )
        i9_template = os.getenv("PDF_I9_TEMPLATE", "i-9.pdf").strip() or "i-9.pdf"
        i9_policy = (
            os.getenv("I9_POLICY", "non_citizens_only").strip().lower()
            or "non_citizens_only"
        )
        flatten_widgets = _env_flag("PDF_FLATTEN_WIDGETS", "0")
        log_level = os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"
        upload_max_file_bytes = int(
            os.getenv("UPLOAD_MAX_FILE_BYTES", str(10 * 1024 * 1024))
        )
        upload_max_total_bytes = int(
            os.getenv("UPLOAD_MAX_TOTAL_BYTES", str(50 * 1024 * 1024))
        )
        # Base64 inflates uploads by a third; leave headroom over the total ceiling.
        request_max_bytes = int(
            os.getenv("REQUEST_MAX_BYTES", str(72 * 1024 * 1024))
        )

        return AppConfig(
            pdf=PdfConfig(
                enabled=enabled,
                templates_dir=templates_dir,
                application_template=application_template,
                i9_template=i9_template,
                i9_policy=i9_policy,
                flatten_widgets=flatten_widgets,
            ),
            logging=LoggingConfig(level=log_level),
            limits=LimitsConfig(
                request_max_bytes=request_max_bytes,
                upload_max_file_bytes=upload_max_file_bytes,
                upload_max_total_bytes=upload_max_total_bytes,
            ),
        )
