# conexión TCP persistente, protocolo de texto por líneas

from __future__ import annotations
import socket
import sys

from rootme.errors import TransportError
from rootme.session import StreamSession


def connect(host: str, port: int, timeout: float | None = None) -> StreamSession:
    """Abre la conexión; timeout=None bloquea indefinidamente."""
    try:
        conn = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        raise TransportError(f"no se pudo conectar a {host}:{port}: {e!r}") from e
    print(f"[CONN] Conectado a {host}:{port}", file=sys.stderr)
    return StreamSession(conn=conn)


def read_chunk(session: StreamSession) -> bytes:
    """
    Una única lectura (hasta buffer_size bytes). El servidor manda cada
    reto en un solo envío.
    """
    try:
        data = session.conn.recv(session.buffer_size)
    except OSError as e:
        raise TransportError(f"fallo leyendo del servidor: {e!r}") from e
    if not data:
        raise TransportError("el servidor cerró la conexión")
    return data


def send_line(session: StreamSession, line: str) -> None:
    try:
        session.conn.sendall((line + "\n").encode("utf-8"))
    except OSError as e:
        raise TransportError(f"fallo escribiendo al servidor: {e!r}") from e
