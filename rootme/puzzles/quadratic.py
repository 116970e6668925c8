# ecuación de segundo grado por TCP, N rondas sobre la misma conexión

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Tuple

from rootme.common.text import read_lines, parse_int
from rootme.errors import FormatError, ProtocolError
from rootme.net import stream
from rootme.puzzles.base import Puzzle
from rootme.session import StreamSession

_RE_NUMBER = re.compile(r"[+-]?\s?\d+", re.ASCII)


@dataclass(frozen=True)
class QuadraticChallenge:
    a: int
    b: int
    c: int


@dataclass(frozen=True)
class QuadraticSolution:
    roots: Tuple[float, ...]


def _equation_tokens(line: str) -> list[str] | None:
    _, sep, equation = line.partition(": ")
    if not sep:
        return None
    tokens = _RE_NUMBER.findall(equation)
    return tokens[:4] if len(tokens) >= 4 else None


def parse_challenge(raw: bytes | str) -> QuadraticChallenge:
    """
    El reto termina con una línea "<label>: Ax² + Bx + C = D"
    (a veces seguida de un prompt). Se toma la última línea que la cumpla
    y se pasa D al lado izquierdo: C' = C - D.
    """
    lines = read_lines(raw)
    if len(lines) < 2:
        raise FormatError(f"número de líneas no válido: {len(lines)}", field="lines")

    tokens = None
    for line in reversed(lines):
        tokens = _equation_tokens(line)
        if tokens:
            break
    if not tokens:
        raise FormatError("no se encontró la ecuación", field="equation")

    a, b, c, d = (parse_int(t, name) for t, name in zip(tokens, ("A", "B", "C", "D")))
    if a == 0:
        raise FormatError("A = 0: no es de segundo grado", field="A")
    return QuadraticChallenge(a=a, b=b, c=c - d)


def solve(ch: QuadraticChallenge) -> QuadraticSolution:
    # discriminante entero exacto; raíces en doble precisión
    discriminant = ch.b * ch.b - 4 * ch.a * ch.c
    if discriminant > 0:
        sqrt_d = math.sqrt(discriminant)
        return QuadraticSolution(roots=(
            (-ch.b + sqrt_d) / (2 * ch.a),
            (-ch.b - sqrt_d) / (2 * ch.a),
        ))
    if discriminant == 0:
        return QuadraticSolution(roots=(-ch.b / (2 * ch.a),))
    return QuadraticSolution(roots=())


def format_root(x: float) -> str:
    """3 decimales sin ceros ni punto finales: 2.000 → '2', 1.250 → '1.25'."""
    s = f"{x:.3f}"
    return s.rstrip("0").rstrip(".")


def encode_solution(solution: QuadraticSolution) -> str:
    roots = solution.roots
    if len(roots) == 0:
        return "Not possible"
    if len(roots) == 1:
        return f"x: {format_root(roots[0])}"
    if len(roots) == 2:
        return f"x1: {format_root(roots[0])} ; x2: {format_root(roots[1])}"
    raise ProtocolError(f"número de raíces no válido: {len(roots)}", field="roots")


class QuadraticPuzzle(Puzzle):
    kind = "quadratic"

    def __init__(self, host: str, port: int, timeout: float | None = None):
        self.host = host
        self.port = port
        self.timeout = timeout

    def open_session(self) -> StreamSession:
        return stream.connect(self.host, self.port, self.timeout)

    def fetch(self, session: StreamSession) -> bytes:
        return stream.read_chunk(session)

    def parse(self, raw: bytes) -> QuadraticChallenge:
        return parse_challenge(raw)

    def solve(self, challenge: QuadraticChallenge) -> QuadraticSolution:
        return solve(challenge)

    def submit(self, session: StreamSession, solution: QuadraticSolution) -> None:
        # la réplica del servidor llega con el siguiente reto
        stream.send_line(session, encode_solution(solution))
        return None

    def finish(self, session: StreamSession, last_response: bytes | None) -> bytes:
        return stream.read_chunk(session)
