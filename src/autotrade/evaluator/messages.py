"""Сообщения партнёру по кодам отклонения."""

from typing import Final

from autotrade.evaluator.types import Action, OfferDecision, ReasonCode


DECLINE_MESSAGES: Final[dict[ReasonCode, str]] = {
    ReasonCode.INVALID_ITEMS: "Your offer contains items that I am not trading",
    ReasonCode.GIFT: "Your offer looks like a gift, send it with the message \"gift\" if you want to donate",
    ReasonCode.ONLY_METAL: "I am not trading metal for metal",
    ReasonCode.NOT_TRADING_KEYS: "I am not trading keys",
    ReasonCode.OVERSTOCKED: "You are offering or taking too many items",
    ReasonCode.INVALID_VALUE: "You are not offering enough",
    ReasonCode.ESCROW: "The offer would be held by escrow",
    ReasonCode.BANNED: "You are banned in one or more communities",
}


def decision_message(decision: OfferDecision) -> str | None:
    """
    Сообщение партнёру об отклонённом оффере.

    Returns:
        None для принятых и неопределённых решений
    """
    if decision.action is not Action.DECLINE:
        return None
    reason = DECLINE_MESSAGES.get(decision.reason, "Unknown reason")
    return f"Ohh nooooes! Your offer has been declined. Reason: {reason}."
