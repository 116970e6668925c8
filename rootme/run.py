from __future__ import annotations
import argparse
import sys

from rootme.common.runtime import runtime_dir
from rootme.config import Settings, load_settings, parse_addr
from rootme.errors import PuzzleError
from rootme.net.http import HttpClient
from rootme.pipeline import Pipeline, PipelineResult
from rootme.puzzles.arithmetic import ArithmeticPuzzle
from rootme.puzzles.base import Puzzle
from rootme.puzzles.qrcode import QRCodePuzzle
from rootme.puzzles.quadratic import QuadraticPuzzle

KINDS = ("arithmetic", "qrcode", "quadratic")


def build_puzzle(kind: str, settings: Settings, addr: str | None = None) -> Puzzle:
    http = HttpClient(user_agent=settings.HTTP_USER_AGENT, timeout=settings.HTTP_TIMEOUT)

    if kind == "arithmetic":
        return ArithmeticPuzzle(http, settings.ARITHMETIC_URL, settings.ARITHMETIC_SUBMIT_URL)

    if kind == "qrcode":
        failed_path = None
        if settings.SAVE_FAILED_QR:
            failed_path = runtime_dir(settings.RUNTIME_DIR) / "qr_failed.png"
        return QRCodePuzzle(http, settings.QRCODE_URL, settings.QRCODE_FIELD,
                            failed_image_path=failed_path)

    if kind == "quadratic":
        host, port = parse_addr(addr or settings.QUADRATIC_ADDR)
        return QuadraticPuzzle(host, port, timeout=settings.STREAM_TIMEOUT)

    raise ValueError(f"tipo de reto desconocido: {kind!r}")


def run_puzzle(kind: str, settings: Settings, rounds: int | None = None,
               addr: str | None = None) -> PipelineResult:
    puzzle = build_puzzle(kind, settings, addr=addr)
    if rounds is None:
        rounds = settings.QUADRATIC_TOTAL if kind == "quadratic" else 1

    print(f"▶ Resolviendo '{kind}' ({rounds} ronda/s)", file=sys.stderr)
    result = Pipeline(puzzle, rounds=rounds).run()
    print(f"[OK] {result.rounds} ronda/s completada/s", file=sys.stderr)
    return result


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch → solve → submit de retos de programación.")
    parser.add_argument("kind", choices=KINDS, help="tipo de reto")
    parser.add_argument("--rounds", type=int, default=None,
                        help="número de rondas (por defecto QUADRATIC_TOTAL para quadratic, 1 para el resto)")
    parser.add_argument("--addr", default=None, help="host:port del servidor TCP (quadratic)")
    args = parser.parse_args(argv)
    if args.rounds is not None and args.rounds < 1:
        parser.error(f"--rounds debe ser >= 1 (recibido {args.rounds})")
    return args


def main(argv=None) -> int:
    args = _parse_args(argv)
    settings = load_settings()

    try:
        result = run_puzzle(args.kind, settings, rounds=args.rounds, addr=args.addr)
    except PuzzleError as e:
        print(f"[FAIL] {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if result.response is not None:
        print(result.response.decode("utf-8", errors="replace"))
    return 0
