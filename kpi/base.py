"""
kpi/base.py

Abstract base class for campaign KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseKPIFormula(ABC):
    """
    Contract for KPI formulas.

    A formula receives the raw figures of one campaign (or one aggregate) as
    a plain dictionary and returns the derived ratios. Formulas must never
    raise on a zero denominator; they report the metric as zero instead.
    """

    @abstractmethod
    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        """
        Compute metrics from *inputs*.

        Parameters
        ----------
        inputs:
            Raw figures keyed by canonical field name.

        Returns
        -------
        dict[str, Any]
            Derived metrics keyed by metric name.
        """
