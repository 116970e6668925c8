# lectura de QR (OpenCV)

from __future__ import annotations
from typing import Callable
import cv2
import numpy as np

from rootme.errors import DecodeError

# decode(image) -> text; lanza DecodeError si no hay símbolo legible
BarcodeDecoder = Callable[[np.ndarray], str]

def to_gray(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)

def decode_qr(img: np.ndarray) -> str:
    """Decodifica un QR con cv2.QRCodeDetector sobre la imagen en gris."""
    detector = cv2.QRCodeDetector()
    try:
        text, points, _ = detector.detectAndDecode(to_gray(img))
    except cv2.error as e:
        raise DecodeError(f"QRCodeDetector falló: {e}", field="qr") from e
    if points is None:
        raise DecodeError("no se localizaron los finder patterns", field="qr")
    if not text:
        raise DecodeError("QR localizado pero no decodificable", field="qr")
    return text
