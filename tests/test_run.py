import pytest

from rootme import run as run_module
from rootme.config import load_settings, parse_addr
from rootme.errors import FormatError
from rootme.pipeline import PipelineResult
from rootme.puzzles.arithmetic import ArithmeticPuzzle
from rootme.puzzles.qrcode import QRCodePuzzle
from rootme.puzzles.quadratic import QuadraticPuzzle

_KEYS = (
    "ARITHMETIC_URL", "ARITHMETIC_SUBMIT_URL", "QRCODE_URL", "QRCODE_FIELD",
    "QUADRATIC_ADDR", "QUADRATIC_TOTAL", "HTTP_USER_AGENT", "HTTP_TIMEOUT",
    "STREAM_TIMEOUT", "SAVE_FAILED_QR", "RUNTIME_DIR",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("RUNTIME_DIR", str(tmp_path / "runtime"))
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()
    assert s.QUADRATIC_ADDR == "challenge01.root-me.org:52018"
    assert s.QUADRATIC_TOTAL == 25
    assert s.QRCODE_FIELD == "metu"
    assert s.HTTP_TIMEOUT is None and s.STREAM_TIMEOUT is None
    assert s.SAVE_FAILED_QR is True
    assert s.ARITHMETIC_SUBMIT_URL.endswith("ep1_v.php?result=")


def test_env_overrides(clean_env):
    clean_env.setenv("QUADRATIC_TOTAL", "3")
    clean_env.setenv("HTTP_TIMEOUT", "2.5")
    clean_env.setenv("STREAM_TIMEOUT", "0")
    clean_env.setenv("SAVE_FAILED_QR", "no")
    s = load_settings()
    assert s.QUADRATIC_TOTAL == 3
    assert s.HTTP_TIMEOUT == 2.5
    assert s.STREAM_TIMEOUT is None
    assert s.SAVE_FAILED_QR is False


@pytest.mark.parametrize("addr, expected", [
    ("challenge01.root-me.org:52018", ("challenge01.root-me.org", 52018)),
    ("localhost", ("localhost", 52018)),
    ("127.0.0.1:9000", ("127.0.0.1", 9000)),
])
def test_parse_addr(addr, expected):
    assert parse_addr(addr) == expected


def test_build_puzzle_per_kind(clean_env, tmp_path):
    s = load_settings()
    assert isinstance(run_module.build_puzzle("arithmetic", s), ArithmeticPuzzle)

    qr = run_module.build_puzzle("qrcode", s)
    assert isinstance(qr, QRCodePuzzle)
    assert qr.failed_image_path == (tmp_path / "runtime").resolve() / "qr_failed.png"

    quad = run_module.build_puzzle("quadratic", s, addr="127.0.0.1:4000")
    assert isinstance(quad, QuadraticPuzzle)
    assert (quad.host, quad.port) == ("127.0.0.1", 4000)

    with pytest.raises(ValueError):
        run_module.build_puzzle("sudoku", s)


def test_quadratic_defaults_to_configured_rounds(clean_env, monkeypatch):
    clean_env.setenv("QUADRATIC_TOTAL", "7")
    seen = {}

    class _FakePipeline:
        def __init__(self, puzzle, rounds=1):
            seen["rounds"] = rounds

        def run(self):
            return PipelineResult(rounds=seen["rounds"], response=b"bye")

    monkeypatch.setattr(run_module, "Pipeline", _FakePipeline)
    result = run_module.run_puzzle("quadratic", load_settings())
    assert seen["rounds"] == 7
    assert result.response == b"bye"


def test_main_reports_failure(clean_env, monkeypatch, capsys):
    def failing(*args, **kwargs):
        raise FormatError("no se encontró A", stage="parse", field="A")

    monkeypatch.setattr(run_module, "run_puzzle", failing)
    assert run_module.main(["arithmetic"]) == 1
    err = capsys.readouterr().err
    assert "[FAIL] FormatError: [parse] no se encontró A (field=A)" in err


def test_main_prints_server_response(clean_env, monkeypatch, capsys):
    monkeypatch.setattr(run_module, "run_puzzle",
                        lambda *a, **kw: PipelineResult(rounds=1, response=b"Congratz"))
    assert run_module.main(["qrcode"]) == 0
    assert capsys.readouterr().out.strip() == "Congratz"


@pytest.mark.parametrize("rounds", ["0", "-2"])
def test_main_rejects_non_positive_rounds(clean_env, capsys, rounds):
    with pytest.raises(SystemExit) as exc:
        run_module.main(["quadratic", "--rounds", rounds])
    assert exc.value.code == 2
    assert "--rounds debe ser >= 1" in capsys.readouterr().err
