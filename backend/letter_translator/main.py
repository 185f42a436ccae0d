"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from letter_translator import __version__
from letter_translator.config import settings
from letter_translator.core.errors import (
    ConfigurationError,
    ExportError,
    ExtractionError,
    InputError,
    InvocationError,
    MappingError,
    ProcessingError,
    TranslatorError,
)
from letter_translator.api.v1.routes import export, languages, translation

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Most specific class wins; unknown subclasses fall back through the MRO
ERROR_STATUS_CODES = {
    InputError: 400,
    ProcessingError: 400,
    ExportError: 422,
    ConfigurationError: 500,
    InvocationError: 502,
    ExtractionError: 502,
    MappingError: 502,
    TranslatorError: 500,
}


def status_code_for(error: TranslatorError) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; translation requests will fail")
    logger.info(
        f"Starting {settings.app_name}: model={settings.llm_provider}/{settings.llm_model}, "
        f"max_pages={settings.max_pages}"
    )
    yield


app = FastAPI(
    title=settings.app_name,
    description="Handwritten letter translation with a vision-language model",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(TranslatorError)
async def translator_error_handler(request: Request, exc: TranslatorError):
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.error_type}: {exc.message}")
    else:
        logger.info(f"{request.url.path} rejected: {exc.error_type}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Include routers
app.include_router(translation.router, prefix="/api/v1", tags=["translation"])
app.include_router(export.router, prefix="/api/v1", tags=["export"])
app.include_router(languages.router, prefix="/api/v1", tags=["languages"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Handwritten Letter Translator API", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
