"""
Shared fixtures for unit and integration tests.
"""

import os
import sys
import copy
import pytest
from unittest.mock import MagicMock
from io import BytesIO

import orjson

# ── Ensure backend and frontend modules are importable ──
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(ROOT, "frontend"))
sys.path.insert(0, os.path.join(ROOT, "backend", "auditor"))

VALID_API_KEY = "AIzaSyTest-0123456789abcdef"

# ── Fake .env values used by every test ──
ENV_DEFAULTS = {
    "API_KEY": VALID_API_KEY,
    "GEMINI_MODEL": "gemini-2.5-flash",
    "GEMINI_BASE_URL": "https://generativelanguage.googleapis.com/v1beta",
    "GEMINI_TEMPERATURE": "0.2",
    "CORS_ORIGINS": "*",
    "LOG_LEVEL": "INFO",
    "API_BASE": "http://127.0.0.1:8000",
    "ANALYZE_TIMEOUT": "300",
}

MINIMAL_PLAN = "Backup semanal y antivirus en equipos."  # 38 chars


@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Inject all required env vars so modules never blow up on import."""
    for k, v in ENV_DEFAULTS.items():
        monkeypatch.setenv(k, v)
    monkeypatch.delenv("GEMINI_TIMEOUT", raising=False)


@pytest.fixture
def sample_pdf_bytes():
    """
    Build a minimal valid PDF in memory with reportlab (if available)
    or fall back to a hand-crafted tiny PDF.
    """
    try:
        from reportlab.lib.pagesizes import letter
        from reportlab.pdfgen import canvas

        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=letter)
        c.drawString(100, 700, "PLAN DE SEGURIDAD INFORMATICA")
        c.drawString(100, 680, "1. Analisis de riesgos: inventario de activos anual.")
        c.drawString(100, 660, "2. BIA: RTO de 4 horas para facturacion.")
        c.drawString(100, 640, "3. Contingencia: copias diarias fuera de sitio.")
        c.drawString(100, 620, "4. Politicas: contrasenas de 12 caracteres minimo.")
        c.save()
        return buf.getvalue()
    except ImportError:
        return (
            b"%PDF-1.4\n1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
            b"2 0 obj<</Type/Pages/Kids[3 0 R]/Count 1>>endobj\n"
            b"3 0 obj<</Type/Page/MediaBox[0 0 612 792]/Parent 2 0 R"
            b"/Contents 4 0 R>>endobj\n"
            b"4 0 obj<</Length 44>>stream\nBT /F1 12 Tf 100 700 Td "
            b"(Security Plan) Tj ET\nendstream\nendobj\n"
            b"xref\n0 5\n0000000000 65535 f \n0000000009 00000 n \n"
            b"0000000058 00000 n \n0000000115 00000 n \n0000000214 00000 n \n"
            b"trailer<</Size 5/Root 1 0 R>>\nstartxref\n309\n%%EOF"
        )


_REPORT = {
    "overallScore": 42,
    "riskLevel": "ALTO",
    "executiveSummary": "El plan cubre copias de seguridad básicas pero carece de análisis formal.",
    "complianceAlignment": "Alineación parcial con ISO 27001 (A.12.3).",
    "detailedAnalysis": [
        {
            "category": "Análisis de Riesgos",
            "score": 30,
            "status": "Deficiente",
            "observation": "No se identifican activos ni amenazas.",
        },
        {
            "category": "Análisis de Impacto (BIA)",
            "score": 10,
            "status": "Crítico",
            "observation": "No se definen RTO ni RPO.",
        },
        {
            "category": "Plan de Contingencia",
            "score": 65,
            "status": "Aceptable",
            "observation": "Existen copias semanales, sin pruebas de restauración.",
        },
        {
            "category": "Políticas de Seguridad",
            "score": 55,
            "status": "Aceptable",
            "observation": "Antivirus obligatorio; faltan políticas de contraseñas.",
        },
    ],
    "strengths": ["Copias de seguridad periódicas", "Antivirus instalado"],
    "weaknesses": [
        {
            "title": "Sin análisis de riesgos",
            "description": "No existe inventario de activos ni evaluación de amenazas.",
            "severity": "Alta",
        },
        {
            "title": "Copias sin cifrar",
            "description": "Las copias no se cifran ni se guardan fuera de sitio.",
            "severity": "Media",
        },
    ],
    "recommendations": [
        "Realizar un inventario de activos",
        "Definir RTO y RPO para procesos críticos",
        "Probar la restauración trimestralmente",
    ],
}


@pytest.fixture
def sample_report_dict():
    """A schema-conformant report, as Gemini would return it."""
    return copy.deepcopy(_REPORT)


@pytest.fixture
def sample_report_json(sample_report_dict):
    return orjson.dumps(sample_report_dict).decode("utf-8")


@pytest.fixture
def mock_gemini_client():
    """Return a MagicMock that behaves like GeminiClient."""
    client = MagicMock()
    client.model = "gemini-2.5-flash"
    client.api_key = VALID_API_KEY
    return client


@pytest.fixture
def minimal_plan():
    return MINIMAL_PLAN
