# QR con los finder patterns borrados: reparar → leer → extraer clave

from __future__ import annotations
import base64
import binascii
import re
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from rootme.common.runtime import save_image_atomic
from rootme.errors import DecodeError, FormatError
from rootme.net.http import HttpClient
from rootme.puzzles.base import Puzzle
from rootme.session import CookieSession
from rootme.vision.decoder import BarcodeDecoder, decode_qr
from rootme.vision.finder import decode_image, repair_finder_patterns

_RE_BASE64_IMAGE = re.compile(r'base64,([^"]+)')


@dataclass(frozen=True)
class QRChallenge:
    image: np.ndarray

    def __repr__(self) -> str:
        h, w = self.image.shape[:2]
        return f"QRChallenge(image={w}x{h})"


@dataclass(frozen=True)
class QRSolution:
    key: str


def parse_challenge(raw: bytes | str) -> QRChallenge:
    """<img src="data:image/png;base64,...."> → imagen BGR."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    m = _RE_BASE64_IMAGE.search(raw)
    if not m:
        raise FormatError("no se encontró la imagen en base64", field="image payload")
    try:
        # el payload puede venir partido en líneas
        payload = "".join(m.group(1).split())
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"base64 no válido: {e}", field="image payload") from e
    return QRChallenge(image=decode_image(data))


def extract_key(text: str) -> str:
    """Todo lo que sigue a la última '/'; sin '/' el texto completo."""
    return text.rsplit("/", 1)[-1]


class QRCodePuzzle(Puzzle):
    kind = "qrcode"

    def __init__(self, http: HttpClient, url: str, field: str = "metu",
                 decoder: BarcodeDecoder = decode_qr, failed_image_path: Path | None = None):
        self.http = http
        self.url = url
        self.field = field
        self.decoder = decoder
        self.failed_image_path = failed_image_path

    def open_session(self) -> CookieSession:
        return CookieSession()

    def fetch(self, session: CookieSession) -> bytes:
        return self.http.get(self.url, session)

    def parse(self, raw: bytes) -> QRChallenge:
        return parse_challenge(raw)

    def solve(self, challenge: QRChallenge) -> QRSolution:
        fixed = repair_finder_patterns(challenge.image)
        try:
            text = self.decoder(fixed)
        except DecodeError:
            if self.failed_image_path is not None and save_image_atomic(fixed, self.failed_image_path):
                print(f"[QR] Imagen reparada guardada en {self.failed_image_path}", file=sys.stderr)
            raise
        print(f"[QR] Contenido: {text}", file=sys.stderr)
        return QRSolution(key=extract_key(text))

    def submit(self, session: CookieSession, solution: QRSolution) -> bytes:
        return self.http.post_form(self.url, {self.field: solution.key}, session)
