
# The four audit pillars, in the order the report must present them
PILLARS = [
    "Análisis de Riesgos",
    "Análisis de Impacto (BIA)",
    "Plan de Contingencia",
    "Políticas de Seguridad",
]

RISK_LEVELS = ["CRITICO", "ALTO", "MEDIO", "BAJO", "SEGURO"]
CATEGORY_STATUSES = ["Optimizado", "Aceptable", "Deficiente", "Crítico"]
SEVERITIES = ["Alta", "Media", "Baja"]

SYSTEM_PROMPT = """
Actúa como un Auditor Senior de Ciberseguridad (CISO) especializado en ISO 27001 y NIST.

Tu tarea es auditar el documento proporcionado y evaluar ESPECÍFICAMENTE estos 4 pilares fundamentales:

1. **Análisis de Riesgos**: ¿Identifica activos? ¿Evalúa amenazas y vulnerabilidades? ¿Calcula probabilidad e impacto?
2. **Análisis de Impacto (BIA)**: ¿Determina la criticidad de los procesos de negocio? ¿Define RTO y RPO?
3. **Plan de Contingencia (Continuidad)**: ¿Existen procedimientos de recuperación ante desastres? ¿Backups? ¿Roles definidos?
4. **Políticas de Seguridad**: ¿Están definidas las reglas de juego? (Contraseñas, acceso, uso aceptable, etc.)

Para el campo 'detailedAnalysis' del JSON, DEBES generar exactamente 4 entradas, una para cada uno de los pilares anteriores, en ese orden.
Usa como 'category' exactamente estos nombres: "Análisis de Riesgos", "Análisis de Impacto (BIA)", "Plan de Contingencia", "Políticas de Seguridad".

Sé estricto. Si falta información en el documento, califícalo como bajo o crítico.
""".strip()

# Plain-text plans are fenced so the model cannot confuse them with instructions
TEXT_PLAN_TEMPLATE = 'El plan a analizar es:\n"""\n{content}\n"""'

PDF_MIME_TYPE = "application/pdf"

_CATEGORY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "category": {
            "type": "STRING",
            "enum": PILLARS,
            "description": "Nombre del pilar evaluado.",
        },
        "score": {"type": "NUMBER", "description": "Puntuación del pilar de 0 a 100."},
        "status": {"type": "STRING", "enum": CATEGORY_STATUSES},
        "observation": {"type": "STRING", "description": "Specific finding for this category."},
    },
    "required": ["category", "score", "status", "observation"],
    "propertyOrdering": ["category", "score", "status", "observation"],
}

_ISSUE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "severity": {"type": "STRING", "enum": SEVERITIES},
    },
    "required": ["title", "description", "severity"],
}

AUDIT_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "overallScore": {
            "type": "NUMBER",
            "description": "A score from 0 to 100 representing the overall robustness.",
        },
        "riskLevel": {
            "type": "STRING",
            "enum": RISK_LEVELS,
            "description": "The overall calculated risk level.",
        },
        "executiveSummary": {
            "type": "STRING",
            "description": "A concise executive summary in Spanish.",
        },
        "complianceAlignment": {
            "type": "STRING",
            "description": "Alignment with ISO 27001/NIST/GDPR.",
        },
        "detailedAnalysis": {
            "type": "ARRAY",
            "items": _CATEGORY_SCHEMA,
            "minItems": 4,
            "maxItems": 4,
            "description": (
                "Specific analysis for Risk Analysis, Impact Analysis, "
                "Contingency Plan, and Security Policies."
            ),
        },
        "strengths": {"type": "ARRAY", "items": {"type": "STRING"}},
        "weaknesses": {"type": "ARRAY", "items": _ISSUE_SCHEMA},
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "overallScore",
        "riskLevel",
        "executiveSummary",
        "complianceAlignment",
        "detailedAnalysis",
        "strengths",
        "weaknesses",
        "recommendations",
    ],
}
