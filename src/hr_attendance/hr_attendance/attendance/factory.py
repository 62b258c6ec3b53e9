from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .strategies.absence_strategy import ExplicitAbsenceStrategy, NoActivityStrategy
from .strategies.base import ResolutionStrategy
from .strategies.exemption_strategy import ExemptionStrategy
from .strategies.holiday_strategy import HolidayStrategy
from .strategies.tap_strategy import TapStrategy


@dataclass
class ResolutionStrategyFactory:
    """Factory Pattern: assemble the resolution strategies in precedence order."""

    def build_chain(self) -> List[ResolutionStrategy]:
        return [
            HolidayStrategy(),
            ExemptionStrategy(),
            ExplicitAbsenceStrategy(),
            NoActivityStrategy(),
            TapStrategy(),
        ]

    def build_override_chain(self) -> List[ResolutionStrategy]:
        """Only the steps that override a stored status (holiday, exemption)."""

        return [HolidayStrategy(), ExemptionStrategy()]
