"""Event shape classification."""

from __future__ import annotations

from polymath.models import SHAPE_MARKET_PER_OPTION, SHAPE_MULTI_OUTCOME, Market, ShapeTag


def classify_shape(markets: list[Market]) -> ShapeTag:
    """Single market with >2 outcomes and one token per outcome -> multi-outcome.

    Everything else is read as one binary yes/no option per market. A named
    two-outcome market is indistinguishable from a yes/no market here and
    lands in market-per-option.
    """
    if len(markets) == 1:
        m = markets[0]
        n = len(m.outcomes)
        if n > 2 and len(m.clob_token_ids) == n:
            return SHAPE_MULTI_OUTCOME
    return SHAPE_MARKET_PER_OPTION
