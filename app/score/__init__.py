"""Fairness scoring engine for proposed trades."""

from .fairness import FairnessEvaluator, FairnessTier, percent_difference

__all__ = ["FairnessEvaluator", "FairnessTier", "percent_difference"]
