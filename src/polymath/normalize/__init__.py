"""Shape classification and outcome building."""

from polymath.normalize.builder import build_outcomes, mid_price, summarize
from polymath.normalize.shape import classify_shape

__all__ = ["build_outcomes", "classify_shape", "mid_price", "summarize"]
