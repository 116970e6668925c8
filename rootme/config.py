from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

def _getenv_bool(name: str, default: bool) -> bool:
    v = os.getenv(name, str(default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")

def _getenv_timeout(name: str) -> float | None:
    """
    Segundos de timeout; vacío o "0" = sin timeout (bloquea indefinidamente).
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    value = float(raw)
    return value if value > 0 else None

def parse_addr(addr: str, default_port: int = 52018) -> tuple[str, int]:
    """'host:port' → (host, port). Sin puerto usa default_port."""
    addr = (addr or "").strip()
    if ":" not in addr:
        return addr, default_port
    host, _, port = addr.rpartition(":")
    return host, int(port)

@dataclass(frozen=True)
class Settings:
    # arithmetic (ch1)
    ARITHMETIC_URL: str
    ARITHMETIC_SUBMIT_URL: str

    # qrcode (ch7)
    QRCODE_URL: str
    QRCODE_FIELD: str

    # quadratic (tcp)
    QUADRATIC_ADDR: str
    QUADRATIC_TOTAL: int

    # red
    HTTP_USER_AGENT: str
    HTTP_TIMEOUT: float | None
    STREAM_TIMEOUT: float | None

    # depuración
    SAVE_FAILED_QR: bool
    RUNTIME_DIR: str

def load_settings() -> Settings:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()

    ARITHMETIC_URL = os.getenv(
        "ARITHMETIC_URL", "http://challenge01.root-me.org/programmation/ch1/").strip()
    ARITHMETIC_SUBMIT_URL = os.getenv(
        "ARITHMETIC_SUBMIT_URL",
        "http://challenge01.root-me.org/programmation/ch1/ep1_v.php?result=").strip()

    QRCODE_URL = os.getenv(
        "QRCODE_URL", "http://challenge01.root-me.org/programmation/ch7/").strip()
    QRCODE_FIELD = os.getenv("QRCODE_FIELD", "metu").strip()

    QUADRATIC_ADDR = os.getenv("QUADRATIC_ADDR", "challenge01.root-me.org:52018").strip()
    QUADRATIC_TOTAL = int(os.getenv("QUADRATIC_TOTAL", "25"))

    HTTP_USER_AGENT = os.getenv("HTTP_USER_AGENT", "Mozilla/5.0 (RootMeSolver)").strip()
    HTTP_TIMEOUT = _getenv_timeout("HTTP_TIMEOUT")
    STREAM_TIMEOUT = _getenv_timeout("STREAM_TIMEOUT")

    SAVE_FAILED_QR = _getenv_bool("SAVE_FAILED_QR", True)
    RUNTIME_DIR = os.getenv("RUNTIME_DIR", "./runtime").strip()

    return Settings(
        ARITHMETIC_URL=ARITHMETIC_URL,
        ARITHMETIC_SUBMIT_URL=ARITHMETIC_SUBMIT_URL,
        QRCODE_URL=QRCODE_URL,
        QRCODE_FIELD=QRCODE_FIELD,
        QUADRATIC_ADDR=QUADRATIC_ADDR,
        QUADRATIC_TOTAL=QUADRATIC_TOTAL,
        HTTP_USER_AGENT=HTTP_USER_AGENT,
        HTTP_TIMEOUT=HTTP_TIMEOUT,
        STREAM_TIMEOUT=STREAM_TIMEOUT,
        SAVE_FAILED_QR=SAVE_FAILED_QR,
        RUNTIME_DIR=RUNTIME_DIR,
    )
