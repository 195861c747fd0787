# steamgrid/core/stage_result.py

"""Tagged results returned by every pipeline stage.

The orchestrator looks at the status and severity of a result to decide
whether to continue with the next game or to abort the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from steamgrid.core.game import Game

__all__ = ["Severity", "StageResult", "StageStatus"]


class StageStatus(Enum):
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    FAILED = "failed"


class Severity(Enum):
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


@dataclass(frozen=True)
class StageResult:
    """Outcome of a single stage for a single game.

    Attributes:
        status: What the stage did.
        game: The game after the stage; the input game unless status is UPDATED.
        reason: Human-readable failure description.
        severity: Only meaningful for FAILED results.
    """

    status: StageStatus
    game: Game
    reason: str = ""
    severity: Severity = Severity.RECOVERABLE

    @classmethod
    def unchanged(cls, game: Game) -> StageResult:
        return cls(StageStatus.UNCHANGED, game)

    @classmethod
    def updated(cls, game: Game) -> StageResult:
        return cls(StageStatus.UPDATED, game)

    @classmethod
    def failed(cls, game: Game, reason: str, severity: Severity = Severity.RECOVERABLE) -> StageResult:
        return cls(StageStatus.FAILED, game, reason, severity)

    @property
    def ok(self) -> bool:
        return self.status is not StageStatus.FAILED

    @property
    def is_fatal(self) -> bool:
        return self.status is StageStatus.FAILED and self.severity is Severity.FATAL
