"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2):
  cuentas, historiales de nombres e identificadores.
- El dominio no conoce HTTP ni JSON crudo más allá de `from_payload`.
"""
