"""Cliente del directorio de cuentas (api.mojang.com).

Responsabilidad:
- Construir cada petición (URL/payload) y ejecutarla con un único intento.
- Interpretar status codes y forma del cuerpo JSON.
- Delegar la validación de datos en `core.domain.models`.

Estos métodos están en adapters porque son I/O puro (HTTP); toda la política
de validación vive en el Core.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote
from uuid import UUID

import httpx

from adapters.http_client import JSON_MEDIA_TYPE, build_client
from core.config import AppSettings, LookupOptions
from core.domain.identifiers import coerce_identifier
from core.domain.models import Account, AccountHistory
from core.errors import (
    BatchLimitError,
    NotFoundError,
    ParseError,
    RequestError,
    ResponseStatusError,
    TransportError,
    ValidationError,
    describe_key,
)
from core.interfaces.directory import PlayerDirectory

logger = logging.getLogger(__name__)

BATCH_LIMIT = 10

NAME_TO_ACCOUNT = "users/profiles/minecraft/{name}"
NAMES_TO_ACCOUNTS = "profiles/minecraft"
ID_TO_ACCOUNT = "user/profile/{uuid}"
ID_TO_HISTORY = "user/profiles/{uuid}/names"

GENERIC_REQUEST_ERROR = "An invalid parameter was given."


class DirectoryClient(PlayerDirectory):
    """Resuelve nombres y UUIDs contra el directorio remoto.

    No guarda estado mutable: cada operación abre su propio `httpx.Client`,
    así que una misma instancia se puede usar desde varios hilos.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def lookup_name(self, name: str, options: LookupOptions | None = None) -> Account:
        if not isinstance(name, str) or not name:
            raise ValidationError("You cannot request an empty username.", {"name": name})
        if not name.strip("."):
            # "." y ".." se normalizan como segmentos de ruta y cambiarían el endpoint.
            raise ValidationError(f"Invalid username: {name!r}", {"name": name})
        options = options or LookupOptions()

        # El servicio espera segundos y lo ignora (WEB-3367); se envía igual.
        if options.timestamp is not None:
            params = {"at": options.timestamp // 1000}
        else:
            params = {"at": int(time.time())}

        response = self._send(
            "GET",
            NAME_TO_ACCOUNT.format(name=quote(name, safe="")),
            key=name,
            options=options,
            params=params,
        )
        return Account.from_payload(_json_object(response, key=name))

    def lookup_names(self, names: Sequence[str], options: LookupOptions | None = None) -> list[Account]:
        """Resuelve hasta `BATCH_LIMIT` nombres con un único POST.

        El servicio puede deduplicar o reordenar; se devuelve lo recibido, en
        el orden recibido. Nombres desconocidos simplemente no aparecen.
        """

        if isinstance(names, str):
            raise ValidationError("Expected a list of usernames, got a single string.", {"names": names})
        if len(names) > BATCH_LIMIT:
            raise BatchLimitError(len(names), BATCH_LIMIT)
        for position, name in enumerate(names):
            if name is None:
                raise ValidationError("You cannot request a null username.", {"position": position})
            if not isinstance(name, str) or not name:
                raise ValidationError(
                    f"Invalid username at position {position}: {name!r}",
                    {"position": position, "name": name},
                )
        if not names:
            return []

        key = tuple(names)
        response = self._send(
            "POST",
            NAMES_TO_ACCOUNTS,
            key=key,
            options=options or LookupOptions(),
            content=json.dumps(list(names)).encode("utf-8"),
            headers={
                "Content-Type": f"{JSON_MEDIA_TYPE}; charset=utf-8",
                "Accept": JSON_MEDIA_TYPE,
            },
        )
        data = _json_array(response, key=key)

        accounts: list[Account] = []
        for position, item in enumerate(data):
            if not isinstance(item, dict):
                raise ParseError(
                    f"Invalid account data returned at position {position}.",
                    {"position": position, "item": item},
                )
            accounts.append(Account.from_payload(item))
        return accounts

    def lookup_id(self, uid: UUID | str, options: LookupOptions | None = None) -> Account:
        uid = coerce_identifier(uid)
        response = self._send(
            "GET",
            ID_TO_ACCOUNT.format(uuid=uid),
            key=uid,
            options=options or LookupOptions(),
        )
        return Account.from_payload(_json_object(response, key=uid))

    def lookup_history(self, uid: UUID | str, options: LookupOptions | None = None) -> AccountHistory:
        uid = coerce_identifier(uid)
        response = self._send(
            "GET",
            ID_TO_HISTORY.format(uuid=uid),
            key=uid,
            options=options or LookupOptions(),
        )
        return AccountHistory.from_payload(uid, _json_array(response, key=uid))

    def _send(
        self,
        method: str,
        path: str,
        *,
        key: object,
        options: LookupOptions,
        **kwargs: Any,
    ) -> httpx.Response:
        connect_ms, read_ms = options.timeouts(self._settings)
        logger.debug("%s %s (%s)", method, path, describe_key(key))

        try:
            with build_client(
                self._settings,
                connect_timeout_ms=connect_ms,
                read_timeout_ms=read_ms,
                transport=self._transport,
            ) as client:
                response = client.request(method, path, **kwargs)
        except httpx.ConnectTimeout as exc:
            raise _transport_error("connect", exc, connect_ms, read_ms) from exc
        except httpx.ReadTimeout as exc:
            raise _transport_error("read", exc, connect_ms, read_ms) from exc
        except httpx.WriteTimeout as exc:
            raise _transport_error("write", exc, connect_ms, read_ms) from exc
        except httpx.PoolTimeout as exc:
            raise _transport_error("pool", exc, connect_ms, read_ms) from exc
        except httpx.RequestError as exc:
            # Incluye TooManyRedirects y DecodingError, que no son TransportError.
            raise _transport_error("transport", exc, connect_ms, read_ms) from exc

        logger.debug("%s %s -> HTTP %s", method, path, response.status_code)
        _check_status(response, key=key)
        return response


def _transport_error(phase: str, exc: httpx.RequestError, connect_ms: int, read_ms: int) -> TransportError:
    logger.warning("Directory request failed during %s phase: %s", phase, exc)
    return TransportError(
        phase,
        connect_timeout_ms=connect_ms,
        read_timeout_ms=read_ms,
        original_error=exc,
    )


def _check_status(response: httpx.Response, *, key: object) -> None:
    status = response.status_code
    if status == 200:
        return
    if status in (204, 404):
        raise NotFoundError(key, status_code=status)
    if status == 400:
        raise RequestError(_service_error_message(response) or GENERIC_REQUEST_ERROR, key=key)
    raise ResponseStatusError(status, key=key)


def _service_error_message(response: httpx.Response) -> str | None:
    """`errorMessage` del cuerpo de un 400, si el cuerpo es un objeto JSON."""

    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("errorMessage")
    return message if isinstance(message, str) else None


def _decode(response: httpx.Response, *, key: object) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ParseError(
            f"Unable to parse data from the Mojang API for {describe_key(key)}.",
            {"key": key, "body": response.text[:200]},
        ) from exc


def _json_object(response: httpx.Response, *, key: object) -> dict[str, Any]:
    data = _decode(response, key=key)
    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object from the Mojang API for {describe_key(key)}.",
            {"key": key, "type": type(data).__name__},
        )
    return data


def _json_array(response: httpx.Response, *, key: object) -> list[Any]:
    data = _decode(response, key=key)
    if not isinstance(data, list):
        raise ParseError(
            f"Expected a JSON array from the Mojang API for {describe_key(key)}.",
            {"key": key, "type": type(data).__name__},
        )
    return data
