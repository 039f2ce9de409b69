"""Canonicalización de identificadores.

El directorio devuelve UUIDs en forma compacta (32 hex sin guiones); el resto
del dominio trabaja con `uuid.UUID`, cuya forma textual es 8-4-4-4-12.

Funciones puras, sin estado: seguras desde cualquier hilo.
"""

from __future__ import annotations

import re
import uuid

from core.errors import FormatError

COMPACT_ID_LENGTH = 32

# `uuid.UUID` tolera llaves, prefijos urn y `_` (vía int()); aquí no.
_COMPACT_ID_RE = re.compile(r"[0-9a-fA-F]{32}")
_HYPHENATED_ID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

_GROUPS = ((0, 8), (8, 12), (12, 16), (16, 20), (20, 32))


def canonicalize_identifier(compact: str) -> uuid.UUID:
    """Convierte `compact` (32 hex) en un `uuid.UUID`.

    Lanza `FormatError` si la longitud no es 32 o si hay caracteres no
    hexadecimales.
    """

    if not isinstance(compact, str):
        raise FormatError(compact, "not a string")
    if len(compact) != COMPACT_ID_LENGTH:
        raise FormatError(compact, f"length {len(compact)}, expected {COMPACT_ID_LENGTH}")
    if not _COMPACT_ID_RE.fullmatch(compact):
        raise FormatError(compact, "not hexadecimal")

    hyphenated = "-".join(compact[start:end] for start, end in _GROUPS)
    return uuid.UUID(hyphenated)


def compact_identifier(uid: uuid.UUID) -> str:
    """Inverse of `canonicalize_identifier` (always lowercase)."""

    return uid.hex


def coerce_identifier(value: uuid.UUID | str) -> uuid.UUID:
    """Acepta un `UUID`, su forma compacta o la forma con guiones."""

    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, str) and _HYPHENATED_ID_RE.fullmatch(value):
        return canonicalize_identifier(value.replace("-", ""))
    return canonicalize_identifier(value)
