"""Drop-off (refusal) attribution per funnel stage.

When only an aggregate refusal count is known, the whole count is attributed to
the first-meeting stage instead of being spread across stages.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from salespipe.analytics.presets import REFUSAL_STAGE_IDS, stage_label
from salespipe.schemas.funnel import RefusalBreakdown, RefusalSummary, SideFlow, WarmingSummary
from salespipe.shared.money import percent, to_percent

FALLBACK_REFUSAL_STAGE = "meeting1"


def calculate_side_flow(
    values: Mapping[str, int],
    refusals: Optional[int] = None,
    refusal_by_stage: Optional[Mapping[str, int]] = None,
    warming: Optional[int] = None,
) -> SideFlow:
    explicit = refusal_by_stage or {}
    aggregate = refusals or 0

    breakdown: List[RefusalBreakdown] = []
    for stage_id in REFUSAL_STAGE_IDS:
        if stage_id in explicit and explicit[stage_id] is not None:
            count = explicit[stage_id]
        elif stage_id == FALLBACK_REFUSAL_STAGE:
            count = aggregate
        else:
            count = 0
        breakdown.append(
            RefusalBreakdown(
                stage_id=stage_id,
                label=stage_label(stage_id),
                count=count,
                rate=to_percent(percent(count, values.get(stage_id, 0))),
            )
        )

    total = sum(item.count for item in breakdown) or aggregate
    entry_base = max(values.get("meeting1", 0), values.get("booked", 0))

    return SideFlow(
        refusals=RefusalSummary(
            total=total,
            rate_from_first_meeting=to_percent(percent(total, entry_base)),
            by_stage=breakdown,
        ),
        warming=WarmingSummary(count=warming or 0),
    )
