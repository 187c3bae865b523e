from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import TimeValidationResult


class ClockDecisionStrategy(ABC):
    """Strategy Pattern: encapsulate how a clock event is classified.

    ``minutes`` is the signed distance from the scheduled time, positive in the
    violation direction (after start for clock-in, before end for clock-out).
    """

    @abstractmethod
    def decide(self, *, minutes: int) -> TimeValidationResult:
        raise NotImplementedError
