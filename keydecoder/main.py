import logging
from typing import List, Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from pydantic import TypeAdapter, ValidationError

from .config import settings
from .models import (
    DecodeReport,
    DecodeResponse,
    FieldSpec,
    HealthResponse,
    KeyStrategy,
    NormalizeKeyRequest,
    NormalizeKeyResponse,
)
from .normalize import normalize_key
from .payload import PayloadError, read_record
from .resolve import MissingKey, resolve_fields_with_report
from .rules import ACCEPTED_SUFFIX

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_field_specs = TypeAdapter(List[FieldSpec])

app = FastAPI(
    title="keydecoder",
    description="snake_case to camelCase key resolution for structured-data decoding",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/normalize-key", response_model=NormalizeKeyResponse)
def normalize(body: NormalizeKeyRequest):
    return {"key": body.key, "normalized": normalize_key(body.key)}

@app.post("/decode", response_model=DecodeResponse)
async def decode(
    file: UploadFile = File(...),
    fields: str = Form(...),
    strategy: Optional[KeyStrategy] = Form(None),
):
    if not (file.filename or "").lower().endswith(ACCEPTED_SUFFIX):
        raise HTTPException(status_code=422, detail="Only JSON files are supported")

    try:
        specs = _field_specs.validate_json(fields)
    except ValidationError as e:
        logger.warning("rejected field specs for %s: %d errors", file.filename, e.error_count())
        raise HTTPException(status_code=422, detail=f"Invalid field specs: {e}") from e

    strategy = strategy or settings.default_strategy
    raw = await file.read(settings.max_payload_bytes + 1)

    try:
        record, encoding = read_record(raw)
    except PayloadError as e:
        logger.warning("rejected payload %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        values, resolved = resolve_fields_with_report(record, specs, strategy)
    except MissingKey as e:
        logger.warning("decode of %s failed: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=e.to_dict()) from e

    logger.info("decoded %d fields from %s (%s)", len(values), file.filename, strategy)
    return DecodeResponse(
        fields=values,
        report=DecodeReport(encoding=encoding, strategy=strategy, resolved=resolved),
    )
