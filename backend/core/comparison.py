from __future__ import annotations

from backend.core.schema import AggregateTotals, Comparison, HistoryEntry


def compare(current: AggregateTotals, previous: AggregateTotals | HistoryEntry | None) -> Comparison | None:
    """Deltas between two totals plus a coarse trend label.

    The trend is assigned in two sequential steps: any currency rising makes it
    ``"up"``; a strict USD drop with UZS not rising then makes it ``"down"``.
    Downstream consumers rely on this exact asymmetry.
    """

    if previous is None:
        return None

    usd_change = current.total_usd - previous.total_usd
    uzs_change = current.total_uzs - previous.total_uzs
    debtor_change = current.total_debtors - previous.total_debtors

    trend = "stable"
    if usd_change > 0 or uzs_change > 0:
        trend = "up"
    if usd_change < 0 and uzs_change <= 0:
        trend = "down"

    return Comparison(
        usd_change=usd_change,
        uzs_change=uzs_change,
        debtor_change=debtor_change,
        trend=trend,
        previous_date=getattr(previous, "date", None),
    )
