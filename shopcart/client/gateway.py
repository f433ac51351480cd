"""
Sync Gateway: única puerta de salida del cliente hacia la API.

- Adjunta `Authorization: Bearer <token>` si hay sesión.
- Cuerpo y respuesta siempre JSON.
- Cualquier fallo (HTTP no exitoso, timeout, conexión) se convierte en
  RequestFailed o una subclase, con el `message` del servidor si vino.
- Sin reintentos: cada llamada es independiente.
"""

import os
from typing import Any, Dict, Optional
import logging

import httpx

from shopcart.client.errors import RequestFailed, Unauthorized, error_for_status

log = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:5000"


class SyncGateway:

    def __init__(
        self,
        session_store,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session_store = session_store
        self.base_url = (base_url or os.getenv("SHOPCART_API_BASE", DEFAULT_API_BASE)).rstrip("/")
        if timeout is None:
            timeout = float(os.getenv("SHOPCART_TIMEOUT", "30"))
        self.timeout = httpx.Timeout(timeout)
        self.transport = transport

    def _headers(self, require_auth: bool) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self.session_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        elif require_auth:
            raise Unauthorized("Unauthorized", status_code=401)
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        require_auth: bool = False,
    ) -> Any:
        headers = self._headers(require_auth)
        url = f"{self.base_url}{path}"
        log.info(f"[REQUEST] {method.upper()} {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method=method.upper(),
                    url=url,
                    params=params,
                    json=body,
                    headers=headers,
                )
        except httpx.HTTPError as err:
            log.error(f"Fallo de transporte en {method.upper()} {path}: {err!r}")
            raise RequestFailed() from err

        log.debug(f"{method.upper()} {url} -> {response.status_code}")

        if not response.is_success:
            message = _server_message(response)
            log.warning(f"HTTP {response.status_code} en {path}: {message}")
            raise error_for_status(response.status_code, message)

        try:
            return response.json()
        except ValueError as err:
            log.error(f"Respuesta no JSON en {path}: {response.text[:200]}")
            raise RequestFailed("Invalid JSON response", status_code=response.status_code) from err


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return None
