"""Audit failure taxonomy.

Every error carries a Spanish, user-facing message. Configuration problems also
carry the steps needed to fix the local ``.env`` file.
"""

ENV_REMEDIATION = [
    "Crea un archivo llamado .env en la carpeta raíz del proyecto.",
    "Abre el archivo y pega tu clave así: API_KEY=tu_clave_que_empieza_por_AIzaSy",
    "Reinicia el backend para que lea la nueva clave.",
]


class AuditError(Exception):
    code = "audit_error"
    http_status = 502
    default_message = "Error desconocido en el servicio de auditoría"
    remediation: list[str] = []

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message, "remediation": list(self.remediation)}


class ConfigurationMissingError(AuditError):
    code = "configuration_missing"
    http_status = 500
    default_message = (
        "Falta la API Key. Crea un archivo .env en la raíz con API_KEY=tu_clave "
        "y reinicia la terminal."
    )
    remediation = ENV_REMEDIATION


class ConfigurationInvalidError(AuditError):
    code = "configuration_invalid"
    http_status = 500
    default_message = "La API Key configurada no es válida. Revisa tu archivo .env"
    remediation = ENV_REMEDIATION


class PermissionDeniedError(AuditError):
    code = "permission_denied"
    default_message = (
        "Error de permisos (403): Tu API Key podría ser incorrecta o no tener acceso."
    )
    remediation = ENV_REMEDIATION


class QuotaExceededError(AuditError):
    code = "quota_exceeded"
    http_status = 429
    default_message = "Límite de cuota excedido (429): Has hecho demasiadas peticiones."


class EmptyResponseError(AuditError):
    code = "empty_response"
    default_message = "La IA no generó respuesta (texto vacío)."


class ParseFailureError(AuditError):
    code = "parse_failure"
    default_message = "La respuesta de la IA no cumple el esquema del informe."


class TransportError(AuditError):
    code = "transport_error"
