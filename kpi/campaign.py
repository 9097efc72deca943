"""
kpi/campaign.py

Marketing campaign KPI formula implementation.

Expected inputs
---------------
spend : Decimal | float
    Total amount invested in the campaign.
leads_generated : int
    Number of leads the campaign produced.
conversions : int
    Number of leads that converted.
revenue : Decimal | float
    Revenue attributed to the campaign.

Formulas
--------
CPL             = spend / leads_generated
ROI             = (revenue - spend) / spend * 100
Conversion Rate = conversions / leads_generated * 100

Division-by-zero cases return 0.0 for the affected metric. Aggregates are
ratios of sums, never averages of per-campaign ratios.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from kpi.base import BaseKPIFormula

_ZERO = 0.0  # value reported when a denominator is zero


class CampaignFigures(Protocol):
    """Anything carrying the four raw campaign figures."""

    spend: Any
    leads_generated: int
    conversions: int
    revenue: Any


class NamedCampaignFigures(CampaignFigures, Protocol):
    name: str


@dataclass(frozen=True)
class CampaignMetrics:
    cpl: float
    roi: float
    conversion_rate: float


@dataclass(frozen=True)
class CampaignSummary:
    """
    Totals across a set of campaigns plus ratios of those totals.
    """

    campaign_count: int
    total_spend: float
    total_leads: int
    total_conversions: int
    total_revenue: float
    average_cpl: float
    total_roi: float
    average_conversion_rate: float


@dataclass(frozen=True)
class CampaignInsights:
    """
    Dashboard highlights for a set of campaigns.

    ``best_campaign_name`` is the lowest-CPL campaign among those with leads.
    ``spend_trend`` compares the second half of the list to the first half,
    in percent.
    """

    best_campaign_name: str | None
    best_campaign_cpl: float | None
    high_cpl_count: int
    cpl_alert: float
    spend_trend: float


class CampaignKPIFormula(BaseKPIFormula):
    """
    Deterministic campaign KPI calculations with zero-safe division.

    All arithmetic is self-contained.  No I/O, no logging, no side effects.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float]:
        """
        Compute CPL, ROI, and conversion rate from *inputs*.

        Returns
        -------
        dict
            Keys: ``cpl``, ``roi``, ``conversion_rate``.
        """
        spend = _as_float(inputs["spend"])
        leads_generated = int(inputs["leads_generated"])
        conversions = int(inputs["conversions"])
        revenue = _as_float(inputs["revenue"])

        return {
            "cpl": _cost_per_lead(spend, leads_generated),
            "roi": _return_on_investment(revenue, spend),
            "conversion_rate": _conversion_rate(conversions, leads_generated),
        }


_FORMULA = CampaignKPIFormula()


def derive_metrics(record: CampaignFigures) -> CampaignMetrics:
    """
    Map one stored or validated campaign to its derived ratios.
    """

    result = _FORMULA.calculate(
        {
            "spend": record.spend,
            "leads_generated": record.leads_generated,
            "conversions": record.conversions,
            "revenue": record.revenue,
        }
    )
    return CampaignMetrics(**result)


def summarize(records: Sequence[CampaignFigures]) -> CampaignSummary:
    """
    Sum the raw figures, then derive ratios from the sums.
    """

    total_spend = sum((_as_float(record.spend) for record in records), 0.0)
    total_leads = sum(int(record.leads_generated) for record in records)
    total_conversions = sum(int(record.conversions) for record in records)
    total_revenue = sum((_as_float(record.revenue) for record in records), 0.0)

    return CampaignSummary(
        campaign_count=len(records),
        total_spend=total_spend,
        total_leads=total_leads,
        total_conversions=total_conversions,
        total_revenue=total_revenue,
        average_cpl=_cost_per_lead(total_spend, total_leads),
        total_roi=_return_on_investment(total_revenue, total_spend),
        average_conversion_rate=_conversion_rate(total_conversions, total_leads),
    )


def build_insights(
    records: Sequence[NamedCampaignFigures],
    *,
    cpl_alert: float,
) -> CampaignInsights:
    """
    Pick the best campaign, count CPL alerts, and measure the spend trend.

    *records* must already be in display order; the trend splits that order
    in half.
    """

    with_leads = [record for record in records if int(record.leads_generated) > 0]
    cpls = [(record, derive_metrics(record).cpl) for record in with_leads]

    best_name: str | None = None
    best_cpl: float | None = None
    if cpls:
        best_record, best_cpl = min(cpls, key=lambda item: item[1])
        best_name = best_record.name

    high_cpl_count = sum(1 for _, cpl in cpls if cpl > cpl_alert)

    half = len(records) // 2
    first_half_spend = sum((_as_float(record.spend) for record in records[:half]), 0.0)
    second_half_spend = sum((_as_float(record.spend) for record in records[half:]), 0.0)

    return CampaignInsights(
        best_campaign_name=best_name,
        best_campaign_cpl=best_cpl,
        high_cpl_count=high_cpl_count,
        cpl_alert=cpl_alert,
        spend_trend=_growth_percent(second_half_spend, first_half_spend),
    )


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def _as_float(value: Any) -> float:
    return float(value or 0)


def _cost_per_lead(spend: float, leads_generated: int) -> float:
    """
    CPL = spend / leads_generated.

    Returns 0.0 when leads_generated is zero.
    """
    if leads_generated == 0:
        return _ZERO
    return spend / leads_generated


def _return_on_investment(revenue: float, spend: float) -> float:
    """
    ROI = (revenue - spend) / spend * 100.

    Returns 0.0 when spend is zero.
    """
    if spend == 0:
        return _ZERO
    return (revenue - spend) / spend * 100


def _conversion_rate(conversions: int, leads_generated: int) -> float:
    """
    Conversion Rate = conversions / leads_generated * 100.

    Returns 0.0 when leads_generated is zero.
    """
    if leads_generated == 0:
        return _ZERO
    return conversions / leads_generated * 100


def _growth_percent(current: float, previous: float) -> float:
    """Growth = (current - previous) / previous * 100; 0.0 when previous is zero."""
    if previous <= 0:
        return _ZERO
    return (current - previous) / previous * 100
