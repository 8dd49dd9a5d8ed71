from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from jobapp.api.http_setup import register_exception_handlers, register_http_middleware
from jobapp.api.routes import ApplicationRouteDeps, register_application_routes
from jobapp.core.config import AppConfig
from jobapp.core.logging import setup_logging
from jobapp.pdf.service import ApplicationPdfService

load_dotenv()
APP_CONFIG = AppConfig.from_env()
setup_logging(APP_CONFIG.logging.level)
LOGGER = logging.getLogger(__name__)

APP_ROOT = Path(__file__).resolve().parent


def create_app(config: AppConfig = APP_CONFIG) -> FastAPI:
    app = FastAPI(title="Job Application PDF API", version="1.0.0")
    register_http_middleware(app, config=config, logger=LOGGER)
    register_exception_handlers(app, logger=LOGGER)

    # Relative template directories are resolved against the project root.
    templates_dir = APP_ROOT / config.pdf.templates_dir
    pdf_service = ApplicationPdfService.from_config(config, templates_dir=templates_dir)
    LOGGER.info(
        "PDF generation %s; templates at %s, I-9 policy %s",
        "enabled" if config.pdf.enabled else "disabled",
        templates_dir,
        pdf_service.i9_policy.value,
    )

    register_application_routes(
        app,
        deps=ApplicationRouteDeps(config=config, pdf_service=pdf_service),
    )

    return app


app = create_app()
