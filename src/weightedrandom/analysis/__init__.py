"""Statistics and weight adjustment over a weight table."""

from .distribution import DEFAULT_ADJUST_FLOOR, DistributionAnalytics, as_number

__all__ = ["DEFAULT_ADJUST_FLOOR", "DistributionAnalytics", "as_number"]
