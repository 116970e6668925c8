from __future__ import annotations
import re
from typing import List

from rootme.errors import FormatError

def read_lines(raw: bytes | str) -> List[str]:
    """Bytes/str → líneas sin separador (sin línea vacía final)."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return raw.splitlines()

def parse_int(token: str, field: str) -> int:
    """'- 12' / '+3' / ' 7' → int. Espacios internos ignorados."""
    try:
        return int(token.replace(" ", "").strip())
    except ValueError as e:
        raise FormatError(f"entero no válido: {token!r}", field=field) from e

def find_token(pattern: re.Pattern, text: str, field: str) -> str:
    """Primera coincidencia de pattern en text o FormatError nombrando el campo."""
    m = pattern.search(text)
    if not m:
        raise FormatError(f"no se encontró {field}", field=field)
    return m.group(0)
