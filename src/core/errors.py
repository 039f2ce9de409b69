"""Taxonomía de errores del directorio de cuentas.

Por qué una jerarquía propia:
- Los adaptadores (HTTP/JSON) traducen sus excepciones a estos tipos, así el
  consumidor nunca ve `httpx` ni `json` en su `except`.
- Cada error lleva `details` estructurados para logging/diagnóstico.

Todos los errores son terminales para la llamada que los produjo: no hay
reintentos ni resultados parciales.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

TIMEOUT_PHASES = ("connect", "read", "write", "pool")


def describe_key(key: object) -> str:
    """Texto legible para la clave consultada (nombre, UUID o lote de nombres)."""

    if isinstance(key, UUID):
        return f"UUID {key}"
    if isinstance(key, (list, tuple)):
        return f"usernames [{', '.join(str(name) for name in key)}]"
    return f"username {key}"


class DirectoryError(Exception):
    """Base exception for every failure raised by this library."""

    kind = "directory"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DirectoryError):
    """Datos de dominio mal formados o fuera de rango (entrada o respuesta remota)."""

    kind = "validation"


class FormatError(ValidationError):
    """El identificador compacto no tiene 32 dígitos hexadecimales."""

    kind = "format"

    def __init__(self, value: object, reason: str) -> None:
        message = f"Invalid compact identifier ({reason}): {value!r}"
        super().__init__(message, {"value": value, "reason": reason})


class BatchLimitError(ValidationError):
    """Raised when a batch lookup asks for more names than the service allows."""

    kind = "batch_limit"

    def __init__(self, requested: int, limit: int) -> None:
        message = f"You cannot request {requested} usernames (maximum {limit})."
        details = {
            "requested": requested,
            "limit": limit,
            "suggested_action": f"Split the request into chunks of at most {limit} names",
        }
        super().__init__(message, details)


class TransportError(DirectoryError):
    """Timeout de conexión/lectura u otro fallo del transporte."""

    kind = "transport"

    def __init__(
        self,
        phase: str,
        *,
        connect_timeout_ms: int,
        read_timeout_ms: int,
        original_error: Exception | None = None,
    ) -> None:
        bounds = f"connect timeout {connect_timeout_ms} ms, read timeout {read_timeout_ms} ms"
        if phase in TIMEOUT_PHASES:
            message = f"Timed out during {phase} phase ({bounds})"
        else:
            message = f"Transport failure: {original_error} ({bounds})"
        details = {
            "phase": phase,
            "connect_timeout_ms": connect_timeout_ms,
            "read_timeout_ms": read_timeout_ms,
            "original_error": str(original_error) if original_error else None,
            "error_type": type(original_error).__name__ if original_error else None,
        }
        super().__init__(message, details)
        self.phase = phase
        self.connect_timeout_ms = connect_timeout_ms
        self.read_timeout_ms = read_timeout_ms


class NotFoundError(DirectoryError):
    """Raised when the service has no content for the queried key."""

    kind = "not_found"

    def __init__(self, key: object, *, status_code: int = 204) -> None:
        message = f"No content returned for {describe_key(key)}."
        super().__init__(message, {"key": key, "status_code": status_code})
        self.key = key
        self.status_code = status_code


class RequestError(DirectoryError):
    """El servicio rechazó la petición (HTTP 400)."""

    kind = "request"

    def __init__(self, message: str, *, key: object = None) -> None:
        super().__init__(message, {"key": key, "status_code": 400})
        self.key = key
        self.status_code = 400


class ParseError(DirectoryError):
    """El cuerpo de la respuesta no tiene la forma JSON esperada."""

    kind = "parse"


class ResponseStatusError(DirectoryError):
    """Raised for any status code the lookup operations do not interpret."""

    kind = "status"

    def __init__(self, status_code: int, *, key: object = None) -> None:
        message = f"Unexpected HTTP {status_code} returned for {describe_key(key)}."
        super().__init__(message, {"key": key, "status_code": status_code})
        self.key = key
        self.status_code = status_code
