from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from jif.errors import ConsistencyError, ParseError, PatternError, PatternLookupError
from jif.loader import load_with_defaults
from jif.logging_config import configure_logging
from jif.manipulation import apply_manipulators
from jif.notation import prechac_to_pattern, siteswap_to_pattern
from jif.preset_loader import load_preset
from jif.presets import PRESETS, find_preset_by_slug
from jif.run_pipeline import analyze_pattern
from jif.runtime_config import pipeline_config_from_env, validate_runtime_environment
from jif.schema_validator import validate_pattern
from jif.types import Pattern


@asynccontextmanager
async def app_lifespan(_: FastAPI) -> AsyncIterator[None]:
    validate_runtime_environment("api")
    configure_logging(pipeline_config_from_env().log_level)
    yield


app = FastAPI(title="Juggling Pattern API", lifespan=app_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

LOGGER = logging.getLogger("jif.api")


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid4())
    request.state.request_id = request_id

    started_at = perf_counter()
    response = await call_next(request)
    duration_ms = (perf_counter() - started_at) * 1000

    response.headers["x-request-id"] = request_id
    LOGGER.info(
        "request.complete",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        },
    )
    return response


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prechac: Optional[list[str]] = None
    siteswap: Optional[str] = None
    pattern: Optional[dict[str, Any]] = None
    jugglers: Optional[int] = None
    manipulators: list[str] = Field(default_factory=list)
    include_orbits: bool = Field(default=True, alias="includeOrbits")


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _http_error(exc: PatternError) -> HTTPException:
    if isinstance(exc, ParseError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, (PatternLookupError, ConsistencyError)):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _preset_summary(preset: dict) -> dict:
    return {
        "id": preset["id"],
        "name": preset["name"],
        "category": preset.get("category"),
        "instructions": preset["instructions"],
        "manipulators": preset.get("manipulators", []),
        "warningNote": preset.get("warningNote"),
    }


def _base_pattern(payload: AnalyzeRequest) -> Pattern:
    sources = [
        name
        for name, value in (
            ("prechac", payload.prechac),
            ("siteswap", payload.siteswap),
            ("pattern", payload.pattern),
        )
        if value is not None
    ]
    if len(sources) != 1:
        raise HTTPException(
            status_code=400,
            detail="Exactly one of 'prechac', 'siteswap' or 'pattern' is required.",
        )

    if payload.prechac is not None:
        return load_with_defaults(prechac_to_pattern(payload.prechac))
    if payload.siteswap is not None:
        jugglers = payload.jugglers or pipeline_config_from_env().siteswap_jugglers
        return load_with_defaults(siteswap_to_pattern(payload.siteswap, jugglers))
    validate_pattern(payload.pattern)
    return load_with_defaults(payload.pattern)


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "time": _iso_now()}


@app.get("/presets")
def list_presets() -> dict:
    return {"presets": [_preset_summary(preset) for preset in PRESETS]}


@app.get("/presets/{slug}")
def get_preset(slug: str, request: Request) -> dict:
    preset = find_preset_by_slug(slug)
    if not preset:
        raise HTTPException(status_code=404, detail="Preset not found.")
    try:
        pattern = load_preset(preset, jugglers=pipeline_config_from_env().siteswap_jugglers)
        analysis = analyze_pattern(pattern)
    except PatternError as exc:
        LOGGER.warning(
            "preset.analysis_failed",
            extra={"request_id": request.state.request_id, "pattern": preset["id"]},
        )
        raise _http_error(exc) from exc
    return {"preset": _preset_summary(preset), **analysis}


@app.post("/patterns/analyze")
def analyze(payload: AnalyzeRequest) -> dict:
    try:
        pattern = apply_manipulators(_base_pattern(payload), payload.manipulators)
        return analyze_pattern(pattern, include_orbits=payload.include_orbits)
    except PatternError as exc:
        raise _http_error(exc) from exc
