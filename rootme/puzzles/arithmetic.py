# progresión aritmética: U[n+1] = [ A + U[n] ] sign [ n * B ]

from __future__ import annotations
import re
from dataclasses import dataclass

from rootme.common.text import read_lines, parse_int, find_token
from rootme.errors import FormatError, ProtocolError
from rootme.net.http import HttpClient
from rootme.puzzles.base import Puzzle
from rootme.session import CookieSession

_RE_A = re.compile(r"\[\s+-?\d+\s+\+")
_RE_B = re.compile(r"\*\s+-?\d+\s+\]")
_RE_SIGN = re.compile(r"\]\s+[+-]\s+\[")
_RE_ZERO = re.compile(r"=\s+-?\d+")
_RE_N = re.compile(r">-?\d+<")


@dataclass(frozen=True)
class RecurrenceChallenge:
    zero_element: int
    a: int
    b: int
    sign: str
    n: int


@dataclass(frozen=True)
class RecurrenceSolution:
    term: int


def parse_challenge(raw: bytes | str) -> RecurrenceChallenge:
    """
    La página trae 3 líneas:
      1) U<sub>n+1</sub> = [ A + U<sub>n</sub> ] sign [ n * B ]
      2) U<sub>0</sub> = U0
      3) ... U<sub>N</sub>
    """
    lines = read_lines(raw)
    if len(lines) != 3:
        raise FormatError(f"número de líneas no válido: {len(lines)}", field="lines")

    a = find_token(_RE_A, lines[0], "A")
    b = find_token(_RE_B, lines[0], "B")
    s = find_token(_RE_SIGN, lines[0], "sign")
    z = find_token(_RE_ZERO, lines[1], "zero element")
    n = find_token(_RE_N, lines[2], "N")

    n_value = parse_int(n[1:-1], "N")
    if n_value < 0:
        raise FormatError(f"N negativo: {n_value}", field="N")

    return RecurrenceChallenge(
        zero_element=parse_int(z[1:], "zero element"),
        a=parse_int(a[1:-1], "A"),
        b=parse_int(b[1:-1], "B"),
        sign=s[1:-1].strip()[0],
        n=n_value,
    )


def solve(ch: RecurrenceChallenge) -> RecurrenceSolution:
    if ch.sign not in ("+", "-"):
        raise ProtocolError(f"signo no válido: {ch.sign!r}", field="sign")

    u = ch.zero_element
    for n in range(ch.n):
        if ch.sign == "+":
            u = (ch.a + u) + (n * ch.b)
        else:
            u = (ch.a + u) - (n * ch.b)
    return RecurrenceSolution(term=u)


class ArithmeticPuzzle(Puzzle):
    kind = "arithmetic"

    def __init__(self, http: HttpClient, challenge_url: str, submit_url: str):
        self.http = http
        self.challenge_url = challenge_url
        self.submit_url = submit_url

    def open_session(self) -> CookieSession:
        return CookieSession()

    def fetch(self, session: CookieSession) -> bytes:
        return self.http.get(self.challenge_url, session)

    def parse(self, raw: bytes) -> RecurrenceChallenge:
        return parse_challenge(raw)

    def solve(self, challenge: RecurrenceChallenge) -> RecurrenceSolution:
        return solve(challenge)

    def submit(self, session: CookieSession, solution: RecurrenceSolution) -> bytes:
        # la respuesta va como query string: ...?result=<U[N]>
        return self.http.get(f"{self.submit_url}{solution.term}", session)
