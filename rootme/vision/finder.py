from __future__ import annotations
from typing import Iterable, Tuple
import cv2
import numpy as np

from rootme.errors import DecodeError

# Cada módulo del QR del reto se dibuja como 9x9 px
MODULE_PX = 9

# Esquina superior izquierda (x, y) de los 3 finder patterns:
# arriba-izquierda, abajo-izquierda, arriba-derecha
FINDER_ANCHORS: Tuple[Tuple[int, int], ...] = (
    (18, 18),
    (18, 216),
    (216, 18),
)

DARK = (0, 0, 0)
LIGHT = (255, 255, 255)

def decode_image(data: bytes) -> np.ndarray:
    """Bytes PNG/JPEG → ndarray BGR. DecodeError si no es una imagen."""
    if not data:
        raise DecodeError("imagen vacía", field="image payload")
    arr = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if img is None:
        raise DecodeError("imdecode devolvió None", field="image payload")
    return img

def _fill(img: np.ndarray, x: int, y: int, side: int, color) -> None:
    # cv2.rectangle incluye pt2 → restar 1 para no pisar fuera del cuadrado
    cv2.rectangle(img, (x, y), (x + side - 1, y + side - 1), color, thickness=-1)

def draw_finder_pattern(img: np.ndarray, x: int, y: int, module: int = MODULE_PX) -> None:
    """
    Dibuja in-place un finder pattern canónico con origen (x, y):
    7x7 módulos oscuro → 5x5 claro (inset 1) → 3x3 oscuro (inset 2).
    """
    _fill(img, x, y, 7 * module, DARK)
    _fill(img, x + module, y + module, 5 * module, LIGHT)
    _fill(img, x + 2 * module, y + 2 * module, 3 * module, DARK)

def repair_finder_patterns(img: np.ndarray,
                           anchors: Iterable[Tuple[int, int]] = FINDER_ANCHORS,
                           module: int = MODULE_PX) -> np.ndarray:
    """
    Devuelve una copia con los 3 finder patterns redibujados.
    El resto de píxeles no se toca; aplicar dos veces = aplicar una.
    No detecta escala ni posición: si el servidor cambia el tamaño de
    render la imagen resultante no será legible.
    """
    fixed = img.copy()
    for x, y in anchors:
        draw_finder_pattern(fixed, x, y, module)
    return fixed
