"""Errores tipados del pipeline fetch → solve → submit."""

from __future__ import annotations


class PuzzleError(Exception):
    """
    Base de todos los errores de un intento.
    - stage: etapa en la que falló (fetch, parse, solve, submit, finish)
    - field: token/campo implicado (p.ej. "A", "sign", "image payload")
    """

    def __init__(self, message: str, stage: str | None = None, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.field = field

    def __str__(self) -> str:
        s = self.message
        if self.stage:
            s = f"[{self.stage}] {s}"
        if self.field:
            s = f"{s} (field={self.field})"
        return s


class TransportError(PuzzleError):
    """Fallo de conexión o de petición (HTTP/TCP)."""


class FormatError(PuzzleError):
    """Marcador o token esperado ausente o mal formado."""


class DecodeError(PuzzleError):
    """No se pudo decodificar la imagen o el código QR."""


class ProtocolError(PuzzleError):
    """Signo o forma de respuesta inesperados."""


__all__ = ["PuzzleError", "TransportError", "FormatError", "DecodeError", "ProtocolError"]
