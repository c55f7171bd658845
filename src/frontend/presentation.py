"""
UI rules for the Streamlit frontend, kept free of Streamlit calls so they can
be unit-tested: input selection, submission gating, the audit state machine
and the colour/badge rules of the report view.
"""

import base64

MIN_TEXT_LENGTH = 20
PDF_MIME_TYPE = "application/pdf"
PDF_ONLY_MESSAGE = "Por favor sube solo archivos PDF."

EXAMPLE_PLAN = """PLAN DE SEGURIDAD INFORMÁTICA - EMPRESA X
1. Control de Acceso: Todos los empleados deben tener usuario y contraseña. Las contraseñas se cambian anualmente.
2. Antivirus: Se instalará antivirus gratuito en los servidores.
3. Copias de Seguridad: Se harán copias manuales los viernes en un disco duro externo que guarda el gerente.
4. Red Wi-Fi: La contraseña es "12345678" para facilitar el acceso a invitados."""


class UnsupportedFileError(ValueError):
    pass


# ---------- Input selection ----------
def empty_selection() -> dict:
    return {"text": "", "file": None}


def set_text(selection: dict, text: str) -> dict:
    return {"text": text, "file": None}


def attach_file(selection: dict, name: str, mime_type: str, data: bytes) -> dict:
    """Attach exactly one PDF; the text is cleared. Non-PDF types leave the selection untouched."""
    if mime_type != PDF_MIME_TYPE:
        raise UnsupportedFileError(PDF_ONLY_MESSAGE)
    return {"text": "", "file": {"name": name, "size": len(data), "data": data}}


def remove_file(selection: dict) -> dict:
    return {"text": selection.get("text", ""), "file": None}


def load_example(selection: dict) -> dict:
    return set_text(selection, EXAMPLE_PLAN)


def can_submit(text: str, has_file: bool, analyzing: bool = False) -> bool:
    if analyzing:
        return False
    return has_file or len((text or "").strip()) >= MIN_TEXT_LENGTH


def build_payload(selection: dict) -> dict:
    """Tagged payload for POST /analyze. PDF content is plain base64, no data-URI prefix."""
    file = selection.get("file")
    if file:
        return {"type": "pdf", "content": base64.b64encode(file["data"]).decode("ascii")}
    return {"type": "text", "content": selection.get("text", "")}


# ---------- Audit state machine ----------
IDLE = "idle"
ANALYZING = "analyzing"
COMPLETE = "complete"
ERROR = "error"


def initial_state() -> dict:
    return {"status": IDLE, "report": None, "error": None, "error_code": None, "remediation": []}


def begin(state: dict) -> dict:
    if state["status"] != IDLE:
        raise RuntimeError(f"Cannot start an audit while {state['status']}")
    return {**initial_state(), "status": ANALYZING}


def succeed(state: dict, report: dict) -> dict:
    return {**initial_state(), "status": COMPLETE, "report": report}


def fail(state: dict, message: str, code: str | None = None, remediation: list | None = None) -> dict:
    return {
        **initial_state(),
        "status": ERROR,
        "error": message,
        "error_code": code,
        "remediation": list(remediation or []),
    }


def reset(state: dict) -> dict:
    return initial_state()


INTERRUPTED_MESSAGE = "La auditoría se interrumpió antes de recibir respuesta. Vuelve a intentarlo."


def interrupt(state: dict) -> dict:
    """Turn an audit left in ``analyzing`` into an error; other states pass through."""
    if state["status"] != ANALYZING:
        return state
    return fail(state, INTERRUPTED_MESSAGE, "interrupted")


REMEDIATION_CODES = {"configuration_missing", "configuration_invalid", "permission_denied"}


def needs_remediation(error_code: str | None) -> bool:
    return error_code in REMEDIATION_CODES


def error_from_response(status_code: int, body) -> tuple[str, str | None, list]:
    """Pull (message, code, remediation) out of a backend error response."""
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, dict):
        return detail.get("message", ""), detail.get("code"), detail.get("remediation", [])
    if isinstance(detail, str):
        return detail, None, []
    return f"Error: {status_code}", None, []


# ---------- Report view ----------
SCORE_COLORS = {"high": "#10b981", "medium": "#facc15", "low": "#f43f5e"}

RISK_COLORS = {
    "CRITICO": "#f43f5e",
    "ALTO": "#fb923c",
    "MEDIO": "#facc15",
    "BAJO": "#60a5fa",
    "SEGURO": "#10b981",
}

STATUS_COLORS = {
    "Optimizado": "#10b981",
    "Aceptable": "#facc15",
    "Deficiente": "#fb923c",
    "Crítico": "#f43f5e",
}

SEVERITY_COLORS = {"Alta": "#f43f5e", "Media": "#fb923c", "Baja": "#60a5fa"}


def score_tier(score: float) -> str:
    if score >= 80:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


def score_color(score: float) -> str:
    return SCORE_COLORS[score_tier(score)]


def format_score(score: float) -> str:
    return f"{score:g}"


def risk_badge_label(level: str) -> str:
    return f"RIESGO {level}"


def risk_color(level: str) -> str:
    return RISK_COLORS.get(level, RISK_COLORS["MEDIO"])


def pillar_icon(category: str) -> str:
    lower = category.lower()
    if "riesgo" in lower:
        return "📈"
    if "impacto" in lower:
        return "⚡"
    if "contingencia" in lower:
        return "🛟"
    if "política" in lower or "politica" in lower:
        return "🔒"
    return "🎯"
