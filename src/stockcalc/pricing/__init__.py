"""Price arithmetic: range reduction and the percent calculator."""

from stockcalc.pricing.calculator import (
    PriceProjection,
    new_price,
    percent_change,
    percent_for_target,
    project,
)
from stockcalc.pricing.range import (
    epoch_or_none,
    from_epoch,
    pair_closes,
    summarize,
    summarize_closes,
)

__all__ = [
    "PriceProjection",
    "new_price",
    "percent_change",
    "percent_for_target",
    "project",
    "epoch_or_none",
    "from_epoch",
    "pair_closes",
    "summarize",
    "summarize_closes",
]
