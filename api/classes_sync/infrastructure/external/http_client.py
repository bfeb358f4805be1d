"""
Cliente HTTP JSON comun para Airtable y Webflow (sin SDKs externos).

Un solo lugar para:
- requests.Session reutilizable
- header Authorization: Bearer <token>
- traduccion de respuestas no-2xx y errores de transporte a la excepcion
  del lado correspondiente (con status y body)

No hay reintentos ni backoff: una corrida fallida se repite entera.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import requests

ErrorFactory = Callable[..., Exception]


class JsonApiClient:
    """
    Base para clientes REST que hablan JSON con token bearer.

    Las subclases definen `service_name` y `error_factory`
    (callable(message, status=..., body=...) -> Exception).
    """

    service_name = "api"
    error_factory: ErrorFactory = RuntimeError

    def __init__(
        self,
        token: str,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._extra_headers = dict(extra_headers or {})
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(self._extra_headers)
        return headers

    def _error(self, message: str, status: Optional[int] = None, body: Any = None) -> Exception:
        return type(self).error_factory(message, status=status, body=body)

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Request HTTP que retorna el JSON de la respuesta ({} si no hay body).

        Raises:
            error_factory(...): en respuestas no-2xx o fallas de transporte
        """
        try:
            resp = self._session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            raise self._error(f"{self.service_name} no respondio ({method} {url}): {e}") from e

        if 200 <= resp.status_code < 300:
            if resp.status_code == 204 or not resp.content:
                return {}
            try:
                return resp.json()
            except ValueError as e:
                raise self._error(
                    f"{self.service_name} devolvio un body que no es JSON",
                    status=resp.status_code,
                    body=resp.text,
                ) from e

        raise self._error(
            f"{self.service_name} request fallo {resp.status_code} ({method} {url})",
            status=resp.status_code,
            body=resp.text,
        )
