"""Evaluator — оценка входящих офферов (accept / decline)."""

from .messages import DECLINE_MESSAGES, decision_message
from .pipeline import OfferEvaluator
from .types import (
    Action,
    CheckResult,
    EvaluationContext,
    EvaluatorConfig,
    OfferDecision,
    ReasonCode,
)

__all__ = [
    "OfferEvaluator",
    "OfferDecision",
    "EvaluatorConfig",
    "EvaluationContext",
    "CheckResult",
    "Action",
    "ReasonCode",
    "DECLINE_MESSAGES",
    "decision_message",
]
