from __future__ import annotations
from typing import Any

from rootme.session import ReplayableSession


class Puzzle:
    """
    Un tipo de reto: cómo abrir la sesión, traer el estado, parsearlo,
    resolverlo y enviar la respuesta. El Pipeline solo habla con esta interfaz.
    """
    kind = "puzzle"

    def open_session(self) -> ReplayableSession:
        raise NotImplementedError

    def fetch(self, session: ReplayableSession) -> bytes:
        raise NotImplementedError

    def parse(self, raw: bytes) -> Any:
        raise NotImplementedError

    def solve(self, challenge: Any) -> Any:
        raise NotImplementedError

    def submit(self, session: ReplayableSession, solution: Any) -> bytes | None:
        raise NotImplementedError

    def finish(self, session: ReplayableSession, last_response: bytes | None) -> bytes | None:
        """Lectura final tras la última ronda; por defecto la última respuesta."""
        return last_response
