# orquestación fetch → parse → solve → submit (una o N rondas)

from __future__ import annotations
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from rootme.errors import PuzzleError
from rootme.puzzles.base import Puzzle


class PipelineState(str, Enum):
    FETCHING = "fetching"
    PARSING = "parsing"
    SOLVING = "solving"
    SUBMITTING = "submitting"
    FINISHING = "finishing"
    DONE = "done"
    FAILED = "failed"


# estado → nombre de la etapa que se reporta al operador
_STAGES = {
    PipelineState.FETCHING: "fetch",
    PipelineState.PARSING: "parse",
    PipelineState.SOLVING: "solve",
    PipelineState.SUBMITTING: "submit",
    PipelineState.FINISHING: "finish",
}


@dataclass(frozen=True)
class RoundRecord:
    index: int
    challenge: Any
    solution: Any


@dataclass
class PipelineResult:
    rounds: int
    response: bytes | None
    history: List[RoundRecord] = field(default_factory=list)


class Pipeline:
    """
    Ejecuta `rounds` ciclos sobre la MISMA sesión y luego la lectura final.
    Sin reintentos: el primer error pasa a FAILED y se relanza con la etapa.
    """

    def __init__(self, puzzle: Puzzle, rounds: int = 1):
        if rounds < 1:
            raise ValueError(f"rounds debe ser >= 1 (recibido {rounds})")
        self.puzzle = puzzle
        self.rounds = rounds
        self.state = PipelineState.FETCHING

    def _enter(self, state: PipelineState) -> None:
        self.state = state

    def run(self) -> PipelineResult:
        self._enter(PipelineState.FETCHING)
        history: List[RoundRecord] = []
        try:
            with self.puzzle.open_session() as session:
                response = None
                for i in range(self.rounds):
                    self._enter(PipelineState.FETCHING)
                    raw = self.puzzle.fetch(session)

                    self._enter(PipelineState.PARSING)
                    challenge = self.puzzle.parse(raw)

                    self._enter(PipelineState.SOLVING)
                    solution = self.puzzle.solve(challenge)
                    if self.rounds > 1:
                        print(f"[ROUND {i + 1}/{self.rounds}] challenge={challenge} solution={solution}",
                              file=sys.stderr)
                    else:
                        print(f"[SOLVE] {challenge} → {solution}", file=sys.stderr)

                    self._enter(PipelineState.SUBMITTING)
                    response = self.puzzle.submit(session, solution)
                    history.append(RoundRecord(index=i, challenge=challenge, solution=solution))

                self._enter(PipelineState.FINISHING)
                response = self.puzzle.finish(session, response)
        except PuzzleError as e:
            if e.stage is None:
                e.stage = _STAGES.get(self.state)
            self._enter(PipelineState.FAILED)
            raise
        except Exception:
            self._enter(PipelineState.FAILED)
            raise

        self._enter(PipelineState.DONE)
        return PipelineResult(rounds=len(history), response=response, history=history)
