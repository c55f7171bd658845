# auditor.py
import logging
import os
import time

import orjson
from pydantic import ValidationError
from dotenv import load_dotenv

from errors import (
    AuditError, ConfigurationInvalidError, ConfigurationMissingError,
    EmptyResponseError, ParseFailureError, PermissionDeniedError,
    QuotaExceededError, TransportError,
)
from gemini_client import GeminiClient
from models import AuditInputData, AuditReport, PdfInput
from prompts import AUDIT_RESPONSE_SCHEMA, PDF_MIME_TYPE, SYSTEM_PROMPT, TEXT_PLAN_TEMPLATE
from utils_pdf import strip_data_uri

load_dotenv()

logger = logging.getLogger(__name__)

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

MIN_API_KEY_LENGTH = 10
PLACEHOLDER_MARKERS = ("PLACEHOLDER", "TU_CLAVE")


# ---------- Credential checks ----------
def validate_api_key(api_key: str | None) -> str:
    """Reject missing, placeholder or too-short keys before touching the network."""
    if not api_key:
        logger.error("API key is not configured")
        raise ConfigurationMissingError()
    upper = api_key.upper()
    if any(marker in upper for marker in PLACEHOLDER_MARKERS) or len(api_key) < MIN_API_KEY_LENGTH:
        logger.error("API key is a placeholder or too short")
        raise ConfigurationInvalidError()
    logger.info("API key detected (length: %d)", len(api_key))
    return api_key


# ---------- Request construction ----------
def build_parts(data: AuditInputData) -> list[dict]:
    if isinstance(data, PdfInput):
        return [
            {"text": SYSTEM_PROMPT},
            {"inlineData": {"mimeType": PDF_MIME_TYPE, "data": strip_data_uri(data.content)}},
        ]
    return [
        {"text": SYSTEM_PROMPT},
        {"text": TEXT_PLAN_TEMPLATE.format(content=data.content)},
    ]


# ---------- Failure mapping ----------
def map_transport_error(exc: Exception) -> AuditError:
    """
    Translate a transport failure into an AuditError.
    Uses the HTTP status when the error carries one; otherwise falls back
    to looking for the status in the message text.
    """
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)

    message = getattr(exc, "message", None) or str(exc) or TransportError.default_message
    if status is None:
        if "403" in message:
            status = 403
        elif "429" in message:
            status = 429

    if status == 403:
        return PermissionDeniedError()
    if status == 429:
        return QuotaExceededError()
    return TransportError(message)


# ---------- Response parsing ----------
def parse_report(raw: str) -> AuditReport:
    """Parse the model's JSON text into an AuditReport. No repair, no fallback."""
    if not raw or not raw.strip():
        raise EmptyResponseError()
    try:
        return AuditReport.model_validate(orjson.loads(raw))
    except orjson.JSONDecodeError as e:
        raise ParseFailureError(f"La respuesta de la IA no es JSON válido: {e}") from e
    except ValidationError as e:
        raise ParseFailureError(
            f"La respuesta de la IA no cumple el esquema del informe: {e.error_count()} errores"
        ) from e


# ---------- Public entrypoint ----------
def analyze_security_plan(
    data: AuditInputData,
    api_key: str | None = None,
    client: GeminiClient | None = None,
) -> AuditReport:
    """
    Audit one security plan with a single Gemini call.
    Credential problems fail before any request is made; transport
    failures are mapped to user-facing errors; nothing is retried.
    """
    logger.info("Starting audit (input type: %s)", data.type)
    key = validate_api_key(api_key if api_key is not None else os.getenv("API_KEY"))
    client = client or GeminiClient(api_key=key, model=GEMINI_MODEL)

    try:
        start = time.time()
        raw = client.generate_json(build_parts(data), AUDIT_RESPONSE_SCHEMA)
        logger.info(
            "Gemini responded (model=%s, latency_ms=%d)",
            client.model, int((time.time() - start) * 1000),
        )
    except Exception as e:
        mapped = map_transport_error(e)
        logger.error("Audit request failed: %s", mapped.message)
        raise mapped from e

    report = parse_report(raw)
    logger.info("Audit complete (overall score %s, risk %s)", report.overall_score, report.risk_level.value)
    return report
