"""Value estimation for marketplace items."""

from .estimator import EstimateResult, ValueEstimator, parse_estimate

__all__ = ["EstimateResult", "ValueEstimator", "parse_estimate"]
