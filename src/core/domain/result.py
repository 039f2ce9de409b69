"""LookupResult: resultado discriminado para consumidores sin excepciones.

Por qué:
- Las operaciones del cliente señalizan fallos con excepciones tipadas
  (`core.errors`); algunos consumidores (jobs batch, APIs) prefieren un valor
  que obligue a mirar `ok` antes de usar el dato.
- `capture` es el único puente: convierte `DirectoryError` en un resultado
  fallido y deja pasar cualquier otra excepción (bugs, no fallos de lookup).
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import Account, AccountHistory
from core.errors import DirectoryError


class LookupFailure(BaseModel):
    """Structured error payload within a LookupResult."""

    model_config = ConfigDict(frozen=True)

    kind: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, error: DirectoryError) -> LookupFailure:
        return cls(kind=error.kind, message=error.message, details=error.details)


class LookupResult(BaseModel):
    """Resultado de una operación del directorio.

    Attributes:
        ok: Whether the lookup succeeded.
        op: Name of the operation (e.g. ``"lookup_name"``).
        value: Account, list of accounts or history on success.
        error: Structured failure if ``ok`` is False.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    value: Account | list[Account] | AccountHistory | None = None
    error: LookupFailure | None = None


def capture(op: str, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> LookupResult:
    """Ejecuta `fn(*args, **kwargs)` y empaqueta el resultado o el `DirectoryError`."""

    try:
        value = fn(*args, **kwargs)
    except DirectoryError as exc:
        return LookupResult(ok=False, op=op, error=LookupFailure.from_error(exc))
    return LookupResult(ok=True, op=op, value=value)
