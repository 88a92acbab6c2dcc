from __future__ import annotations

from dataclasses import dataclass

from vantage.models.enums import ThresholdStatus


@dataclass(slots=True, frozen=True)
class ThresholdResult:
    passed: bool
    delta: float
    status: ThresholdStatus
    message: str | None = None

    @classmethod
    def ok(cls, delta: float, message: str | None = None) -> ThresholdResult:
        return cls(passed=True, delta=delta, status=ThresholdStatus.PASS, message=message)
