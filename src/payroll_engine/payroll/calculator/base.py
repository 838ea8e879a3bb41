from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import DayCalculation, EmployeeRates


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def day_pay(self, *, date: Optional[str], hours: float, rates: EmployeeRates) -> DayCalculation:
        """Price one day given its already-rounded total hours."""
        raise NotImplementedError
