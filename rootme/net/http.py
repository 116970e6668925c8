# peticiones HTTP one-shot (fetch / submit) con reenvío de cookies

from __future__ import annotations
import sys
import requests

from rootme.errors import TransportError
from rootme.session import CookieSession


class HttpClient:
    """
    Envoltorio fino sobre requests. Sin Session de requests: las cookies
    las lleva CookieSession y se reenvían tal cual.
    - requester: cualquier objeto con .request(method, url, **kw) (por defecto el módulo requests)
    - timeout: None = bloquea indefinidamente
    """

    def __init__(self, user_agent: str = "Mozilla/5.0 (RootMeSolver)",
                 timeout: float | None = None, requester=requests):
        self.user_agent = user_agent
        self.timeout = timeout
        self.requester = requester

    def _headers(self) -> dict:
        return {
            "User-Agent": self.user_agent,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    def request(self, method: str, url: str, session: CookieSession, data: dict | None = None) -> bytes:
        """
        Lanza la petición con las cookies de la sesión y captura las nuevas.
        Devuelve el cuerpo crudo. Cualquier fallo → TransportError.
        """
        req = session.attach({"headers": self._headers()})
        try:
            resp = self.requester.request(
                method, url,
                headers=req["headers"],
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} falló: {e!r}") from e

        session.capture(resp)
        if resp.status_code >= 400:
            print(f"[HTTP {resp.status_code}] {method} {url}", file=sys.stderr)
            raise TransportError(f"{method} {url} respondió HTTP {resp.status_code}")
        return resp.content

    def get(self, url: str, session: CookieSession) -> bytes:
        return self.request("GET", url, session)

    def post_form(self, url: str, form: dict, session: CookieSession) -> bytes:
        # requests codifica data=dict como application/x-www-form-urlencoded
        return self.request("POST", url, session, data=form)
