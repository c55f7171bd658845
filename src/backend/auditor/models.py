from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator
from pydantic.alias_generators import to_camel


class Pillar(str, Enum):
    RISK = "Análisis de Riesgos"
    IMPACT = "Análisis de Impacto (BIA)"
    CONTINGENCY = "Plan de Contingencia"
    POLICIES = "Políticas de Seguridad"


class RiskLevel(str, Enum):
    CRITICAL = "CRITICO"
    HIGH = "ALTO"
    MEDIUM = "MEDIO"
    LOW = "BAJO"
    SAFE = "SEGURO"


class CategoryStatus(str, Enum):
    OPTIMIZED = "Optimizado"
    ACCEPTABLE = "Aceptable"
    DEFICIENT = "Deficiente"
    CRITICAL = "Crítico"


class Severity(str, Enum):
    HIGH = "Alta"
    MEDIUM = "Media"
    LOW = "Baja"


# ---------- Input ----------
class TextInput(BaseModel):
    type: Literal["text"] = "text"
    content: str


class PdfInput(BaseModel):
    type: Literal["pdf"] = "pdf"
    content: str = Field(description="Base64 PDF bytes, without a data: URI prefix")


AuditInputData = Annotated[Union[TextInput, PdfInput], Field(discriminator="type")]


class AuditInput(RootModel[AuditInputData]):
    """Request body for the JSON audit endpoint."""


# ---------- Report ----------
class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CategoryAnalysis(_ReportModel):
    category: Pillar
    score: float = Field(ge=0, le=100)
    status: CategoryStatus
    observation: str


class AuditIssue(_ReportModel):
    title: str
    description: str
    severity: Severity


class AuditReport(_ReportModel):
    overall_score: float = Field(ge=0, le=100)
    risk_level: RiskLevel
    executive_summary: str
    compliance_alignment: str
    detailed_analysis: list[CategoryAnalysis] = Field(min_length=4, max_length=4)
    strengths: list[str]
    weaknesses: list[AuditIssue]
    recommendations: list[str]

    @model_validator(mode="after")
    def _pillars_in_order(self):
        found = [c.category for c in self.detailed_analysis]
        if found != list(Pillar):
            names = ", ".join(p.value for p in found)
            raise ValueError(f"detailedAnalysis must list the four pillars in order, got: {names}")
        return self


# ---------- API errors ----------
class ErrorDetail(BaseModel):
    code: str
    message: str
    remediation: list[str] = []


class HealthResponse(BaseModel):
    status: str
    gemini_model: str
