"""Contrato del directorio de cuentas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el cliente HTTP real y dobles de test sean intercambiables sin
  acoplar a los consumidores a `httpx`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable
from uuid import UUID

from core.config import LookupOptions
from core.domain.models import Account, AccountHistory


@runtime_checkable
class PlayerDirectory(Protocol):
    """Contrato mínimo para resolver identidades de jugador.

    Reglas de diseño:
    - Cada operación es un único round trip bloqueante, sin reintentos.
    - Los fallos se señalizan con subclases de `core.errors.DirectoryError`.
    """

    def lookup_name(self, name: str, options: LookupOptions | None = None) -> Account:
        """Resuelve un nombre visible a su `Account`."""

        ...

    def lookup_names(self, names: Sequence[str], options: LookupOptions | None = None) -> list[Account]:
        """Resuelve hasta 10 nombres en una sola petición."""

        ...

    def lookup_id(self, uid: UUID | str, options: LookupOptions | None = None) -> Account:
        """Resuelve un UUID a la `Account` actual."""

        ...

    def lookup_history(self, uid: UUID | str, options: LookupOptions | None = None) -> AccountHistory:
        """Devuelve el historial completo de nombres de un UUID."""

        ...
