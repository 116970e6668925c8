# estado de sesión (cookies o conexión abierta)

from __future__ import annotations
import socket
from dataclasses import dataclass, field
from typing import List, Tuple


class ReplayableSession:
    """
    Estado de continuidad que el servidor asigna a un intento.
    El pipeline solo usa attach()/capture()/close(); la representación
    concreta (cookies o socket) queda oculta.
    """

    def attach(self, request: dict) -> dict:
        return request

    def capture(self, response) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


@dataclass
class CookieSession(ReplayableSession):
    """
    Cookies (name, value) en orden de llegada; se reenvían tal cual
    en la cabecera Cookie de cada petición posterior.
    """
    cookies: List[Tuple[str, str]] = field(default_factory=list)

    def cookie_header(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self.cookies)

    def attach(self, request: dict) -> dict:
        if not self.cookies:
            return request
        headers = dict(request.get("headers") or {})
        headers["Cookie"] = self.cookie_header()
        return {**request, "headers": headers}

    def capture(self, response) -> None:
        for c in getattr(response, "cookies", None) or []:
            self.cookies.append((c.name, c.value))


@dataclass
class StreamSession(ReplayableSession):
    """Conexión TCP abierta que persiste entre rondas."""
    conn: socket.socket
    buffer_size: int = 1024

    def close(self) -> None:
        try:
            self.conn.close()
        except OSError:
            pass
