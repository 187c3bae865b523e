from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PenaltyPolicy, Violation


class PenaltyStrategy(ABC):
    """Calculator interface (Strategy Pattern for penalty amounts).

    Returns the raw amount: caps and rounding are applied by the caller.
    """

    @abstractmethod
    def raw_amount(self, policy: PenaltyPolicy, violation: Violation, occurrence: int) -> float:
        raise NotImplementedError
