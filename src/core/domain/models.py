"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- `frozen=True` garantiza inmutabilidad: las instancias se pueden compartir
  entre hilos sin locks.

Nota:
- Estos modelos describen *qué* es una cuenta, no *cómo* se obtiene.
- `from_payload` es el camino desde JSON crudo: traduce cada violación a
  `core.errors.ValidationError` con el mismo mensaje que verá el consumidor.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator, Mapping, Sequence
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.identifiers import COMPACT_ID_LENGTH, canonicalize_identifier, compact_identifier
from core.errors import ValidationError

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 16


def _checked_name(name: object, uid: UUID) -> str:
    if not isinstance(name, str):
        raise ValidationError(
            f"Missing name from API JSON data for UUID {uid}",
            {"uuid": str(uid)},
        )
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name data is not a valid length ({len(name)} - {name}) for UUID {uid}",
            {"uuid": str(uid), "name": name, "length": len(name)},
        )
    return name


class Account(BaseModel):
    """Cuenta resuelta: UUID estable + nombre con mayúsculas corregidas.

    Por qué existe:
    - Es la respuesta normalizada de las búsquedas por nombre y por UUID.
    - `legacy`/`demo` vienen del servicio solo cuando son verdaderos.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: UUID = Field(
        ...,
        description="UUID de la cuenta (forma 8-4-4-4-12 al serializar).",
    )
    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        description="Nombre visible actual, tal como lo devuelve el directorio.",
    )
    legacy: bool = Field(
        default=False,
        description="Cuenta no migrada a cuenta Mojang.",
    )
    demo: bool = Field(
        default=False,
        description="Cuenta demo (sin compra del juego).",
    )

    @property
    def compact_id(self) -> str:
        return compact_identifier(self.id)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> Account:
        """Construye una `Account` a partir de un registro JSON del directorio.

        Espera `{"id": <32 hex>, "name": <1..16 chars>}`; cualquier otra
        forma lanza `ValidationError` (un `FormatError` si el id no es hex).
        """

        if not isinstance(data, Mapping):
            raise ValidationError("Account data is not a JSON object.", {"payload": data})

        raw_id = data.get("id")
        if not isinstance(raw_id, str):
            raise ValidationError("Missing UUID from API JSON data.", {"payload": dict(data)})
        if len(raw_id) != COMPACT_ID_LENGTH:
            raise ValidationError(
                f"UUID data is not {COMPACT_ID_LENGTH} characters long: {raw_id}",
                {"id": raw_id, "length": len(raw_id)},
            )
        uid = canonicalize_identifier(raw_id)
        name = _checked_name(data.get("name"), uid)

        return cls(
            id=uid,
            name=name,
            legacy=data.get("legacy") is True,
            demo=data.get("demo") is True,
        )


class NameChange(BaseModel):
    """Una entrada del historial: desde `changed_to_at` la cuenta se llama `name`."""

    model_config = ConfigDict(frozen=True)

    changed_to_at: int = Field(
        default=0,
        ge=0,
        description="Instante del cambio (ms desde epoch); 0 = nombre original.",
    )
    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
    )


class AccountHistory(BaseModel):
    """Historial completo de nombres de una cuenta.

    Por qué un timeline ordenado:
    - Las consultas "qué nombre tenía en T" son una función escalón sobre el
      tiempo; con las entradas ordenadas basta una búsqueda binaria.
    - Se construye de una vez: o entra el historial completo o falla entero.

    Iterar sobre el historial produce pares `(timestamp, name)` del más
    antiguo al más reciente.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        ...,
        description="UUID de la cuenta a la que pertenece el historial.",
    )
    timeline: tuple[NameChange, ...] = Field(
        ...,
        min_length=1,
        description="Cambios de nombre ordenados por `changed_to_at` ascendente.",
    )

    @field_validator("timeline")
    @classmethod
    def _order_timeline(cls, value: tuple[NameChange, ...]) -> tuple[NameChange, ...]:
        seen: set[int] = set()
        for entry in value:
            if entry.changed_to_at in seen:
                raise ValueError(f"duplicate change time {entry.changed_to_at}")
            seen.add(entry.changed_to_at)
        return tuple(sorted(value, key=lambda entry: entry.changed_to_at))

    @property
    def original_name(self) -> str:
        return self.timeline[0].name

    @property
    def current_name(self) -> str:
        return self.timeline[-1].name

    def name_at(self, timestamp: int) -> str:
        """Nombre vigente en `timestamp`.

        - `timestamp <= 0` devuelve el nombre original.
        - Si no hay cambio registrado en o antes de `timestamp`, también el
          original (el instante es anterior al primer cambio conocido).
        """

        if timestamp <= 0:
            return self.original_name
        times = [entry.changed_to_at for entry in self.timeline]
        index = bisect_right(times, timestamp)
        if index == 0:
            return self.original_name
        return self.timeline[index - 1].name

    def __iter__(self) -> Iterator[tuple[int, str]]:  # type: ignore[override]
        return ((entry.changed_to_at, entry.name) for entry in self.timeline)

    def __len__(self) -> int:
        return len(self.timeline)

    @classmethod
    def from_payload(cls, uid: UUID, data: Sequence[Any]) -> AccountHistory:
        """Construye el historial desde el array JSON `[{name, changedToAt?}, ...]`.

        Falla con `ValidationError` ante: array vacío, elementos que no son
        objetos, nombres ausentes o fuera de longitud, `changedToAt` negativo
        o no entero, y timestamps duplicados.
        """

        if not data:
            raise ValidationError(
                f"No data returned from the Mojang API for UUID {uid}",
                {"uuid": str(uid)},
            )

        entries: dict[int, NameChange] = {}
        for item in data:
            if not isinstance(item, Mapping):
                raise ValidationError(
                    f"Invalid entry returned from the Mojang API for UUID {uid}",
                    {"uuid": str(uid), "entry": item},
                )
            name = _checked_name(item.get("name"), uid)

            changed_to_at = item.get("changedToAt", 0)
            # bool es subclase de int; un `true` no es un instante.
            if not isinstance(changed_to_at, int) or isinstance(changed_to_at, bool):
                raise ValidationError(
                    f"Invalid name change time given ({changed_to_at!r}) for UUID {uid}",
                    {"uuid": str(uid), "changedToAt": changed_to_at},
                )
            if changed_to_at < 0:
                raise ValidationError(
                    f"Invalid name change time given ({changed_to_at}) for UUID {uid}",
                    {"uuid": str(uid), "changedToAt": changed_to_at},
                )
            if changed_to_at in entries:
                raise ValidationError(
                    f"Duplicate change time and name ({changed_to_at} - {name}) for UUID {uid}",
                    {"uuid": str(uid), "changedToAt": changed_to_at, "name": name},
                )
            entries[changed_to_at] = NameChange(changed_to_at=changed_to_at, name=name)

        return cls(id=uid, timeline=tuple(entries.values()))
