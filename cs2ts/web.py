# File: cs2ts/web.py
"""
cs2ts - Web adapter
===================
A thin FastAPI application around ``cs2ts.generator.generate``.

Endpoints::

    GET  /health         → {"status": "ok", "version": "..."}
    POST /api/generate   JSON {source, enums, type_map} → {output, warnings}
    POST /raw            form Source / Enums / TypeMap → text/plain,
                         warnings in the X-Generator-Warnings header

Run with ``cs2ts --serve`` or ``uvicorn cs2ts.web:app``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from cs2ts.errors import ConfigurationError, SourceParseError
from cs2ts.generator import GenerationResult, Generator
from cs2ts.models import GeneratorConfig

logger: logging.Logger = logging.getLogger("cs2ts.web")

WARNINGS_HEADER: str = "X-Generator-Warnings"


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: str = Field(default="", description="C# source text.")
    enums: str = Field(default="", description="Known enums: Name[:mode],...")
    type_map: str = Field(default="", description="Import overrides: Name=path,...")


class GenerateResponse(BaseModel):
    output: str
    warnings: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_warnings_header(warnings: List[str]) -> str:
    """
    ``"w1","w2"``: each warning wrapped in double quotes, joined by commas.

    Embedded quotes are kept as-is.  Line breaks become spaces and
    characters outside latin-1 become ``?`` so the value stays a legal
    header.
    """
    cleaned: List[str] = []
    for warning in warnings:
        text: str = warning.replace("\r", " ").replace("\n", " ")
        text = text.encode("latin-1", errors="replace").decode("latin-1")
        cleaned.append(f'"{text}"')
    return ",".join(cleaned)


def _run(base_config: GeneratorConfig, source: str, type_map: str, enums: str) -> GenerationResult:
    try:
        config: GeneratorConfig = base_config.merged(
            GeneratorConfig.from_strings(type_map=type_map, enums=enums)
        )
        return Generator(config).generate(source)
    except ConfigurationError as exc:
        logger.info("Rejected configuration: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SourceParseError as exc:
        logger.info("Rejected source: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(base_config: Optional[GeneratorConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        base_config: Configuration every request starts from; request
            strings are merged on top.
    """
    from cs2ts import __version__

    defaults: GeneratorConfig = base_config or GeneratorConfig()
    app = FastAPI(
        title="cs2ts",
        description="Translate C# declarations into TypeScript types.",
        version=__version__,
    )

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.post("/api/generate", response_model=GenerateResponse)
    def generate_json(request: GenerateRequest) -> GenerateResponse:
        result: GenerationResult = _run(defaults, request.source, request.type_map, request.enums)
        return GenerateResponse(output=result.output, warnings=result.warnings)

    @app.post("/raw", response_class=PlainTextResponse)
    def generate_raw(
        source: str = Form("", alias="Source"),
        enums: str = Form("", alias="Enums"),
        type_map: str = Form("", alias="TypeMap"),
    ) -> PlainTextResponse:
        result: GenerationResult = _run(defaults, source, type_map, enums)
        return PlainTextResponse(
            content=result.output,
            headers={WARNINGS_HEADER: format_warnings_header(result.warnings)},
        )

    logger.debug("FastAPI application created.")
    return app


app: FastAPI = create_app()


__all__: List[str] = [
    "GenerateRequest",
    "GenerateResponse",
    "WARNINGS_HEADER",
    "app",
    "create_app",
    "format_warnings_header",
]
