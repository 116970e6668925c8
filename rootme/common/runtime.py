from __future__ import annotations
import os
import sys
from pathlib import Path
import cv2

def runtime_dir(raw: str = "./runtime") -> Path:
    p = Path(raw).expanduser().resolve()
    p.mkdir(parents=True, exist_ok=True)
    return p

def save_image_atomic(image, dst: Path) -> bool:
    """
    Guardado ATÓMICO: imencode → .tmp → os.replace()
    El formato sale de la extensión de dst.
    """
    tmp = dst.with_suffix(dst.suffix + ".tmp")

    if image is None or image.size == 0:
        return False

    try:
        ok, buf = cv2.imencode(dst.suffix or ".png", image)
        if not ok:
            print(f"[RUNTIME] imencode falló para {dst}", file=sys.stderr)
            return False
        with open(tmp, "wb") as f:
            f.write(buf.tobytes())
        os.replace(tmp, dst)
        return True
    except (OSError, cv2.error) as e:
        print(f"[RUNTIME][ERR] {e!r}", file=sys.stderr)
        tmp.unlink(missing_ok=True)
        return False
