"""
Tests for transport: классификация ошибок отправки, жизненный цикл оффера,
OfferDispatcher

Покрытие:
- Таблица SEND_ERROR_RULES (подстроки, eresult, проброс)
- find_active_offer
- offer_changed: сообщения партнёру и администраторам, листинги
- OfferDispatcher: escrow, баны, отправка
"""

import asyncio

import pytest

from autotrade.builder import BuilderConfig, OfferDispatcher
from autotrade.transport import (
    OfferState,
    PartnerCheckError,
    TransportError,
    classify_send_error,
    eresult_name,
    find_active_offer,
    offer_changed,
)
from autotrade.transport.errors import ITEM_SERVER_DOWN, RECENT_BIG_OFFER
from tests.fakes import PARTNER_ID, FakeChecks, FakeOffer, FakeSender


# =============================================================================
# SEND ERROR CLASSIFICATION
# =============================================================================


class TestClassifySendError:
    def test_item_server_substring(self):
        error = TransportError("There was an error. We were unable to contact the game's item server.", eresult=2)
        assert classify_send_error(error) == ITEM_SERVER_DOWN

    def test_full_inventory_substring(self):
        error = TransportError(
            "You have reached the maximum number of items allowed in your Team Fortress 2 inventory"
        )
        assert classify_send_error(error) == "I don't have space for more items in my inventory"

    def test_friends_only_reraised(self):
        error = TransportError("This trade offer can only be sent to friends", eresult=15)
        with pytest.raises(TransportError) as exc_info:
            classify_send_error(error)
        assert exc_info.value is error

    @pytest.mark.parametrize(
        "eresult,message",
        [
            (10, RECENT_BIG_OFFER),
            (15, "I don't, or you don't, have space for more items"),
            (16, RECENT_BIG_OFFER),
            (20, ITEM_SERVER_DOWN),
        ],
    )
    def test_eresult_rules(self, eresult, message):
        assert classify_send_error(TransportError("failed", eresult=eresult)) == message

    def test_unmapped_eresult_uses_name(self):
        error = TransportError("failed", eresult=84)
        assert classify_send_error(error) == "An error occurred while sending the offer (RateLimitExceeded)"

    def test_unmapped_error_reraised(self):
        error = TransportError("socket hang up")
        with pytest.raises(TransportError, match="socket hang up"):
            classify_send_error(error)

    def test_eresult_name_fallback(self):
        assert eresult_name(999) == "999"


# =============================================================================
# LIFECYCLE
# =============================================================================


def test_find_active_offer():
    poll_data = {
        "sent": {"1": OfferState.ACCEPTED, "2": OfferState.ACTIVE, "3": OfferState.ACTIVE},
        "offerData": {
            "1": {"partner": PARTNER_ID},
            "2": {"partner": "someone-else"},
            "3": {"partner": PARTNER_ID},
        },
    }
    assert find_active_offer(poll_data, PARTNER_ID) == "3"
    assert find_active_offer({"sent": {"3": 2}}, PARTNER_ID) is None


class TestOfferChanged:
    def _offer(self, state, ours=True, handled=True):
        offer = FakeOffer(id="42", state=state, is_our_offer=ours)
        if handled:
            offer.data("handledByUs", True)
        offer.data("diff", {"378;6": -1, "5002;6": 2})
        return offer

    def test_accepted(self):
        offer = self._offer(OfferState.ACCEPTED)
        reaction = offer_changed(offer, OfferState.ACTIVE)

        assert reaction.listing_skus == ("378;6", "5002;6")
        assert reaction.admin_message.startswith(f"Trade #42 with {PARTNER_ID} is accepted. Summary:\n")
        assert reaction.partner_messages == ("Success! The offer went through successfully.",)
        assert offer.logs[0][0] == "trade"

    def test_declined(self):
        reaction = offer_changed(self._offer(OfferState.DECLINED), OfferState.ACTIVE)
        assert reaction.partner_messages == (
            "Ohh nooooes! The offer is no longer available. Reason: The offer has been declined.",
        )
        assert reaction.admin_message is None

    def test_canceled_after_confirmation(self):
        reaction = offer_changed(self._offer(OfferState.CANCELED), OfferState.CREATED_NEEDS_CONFIRMATION)
        assert reaction.partner_messages[0].endswith("Failed to accept mobile confirmation.")

    def test_canceled_after_timeout(self):
        reaction = offer_changed(self._offer(OfferState.CANCELED), OfferState.ACTIVE)
        assert reaction.partner_messages[0].endswith("The offer has been active for a while.")

    def test_invalid_items(self):
        reaction = offer_changed(self._offer(OfferState.INVALID_ITEMS, ours=False), OfferState.ACTIVE)
        assert reaction.partner_messages == (
            "Ohh nooooes! Your offer is no longer available. "
            "Reason: Items not available (traded away in a different trade).",
        )

    def test_not_handled_by_us(self):
        reaction = offer_changed(self._offer(OfferState.ACCEPTED, handled=False), OfferState.ACTIVE)
        assert reaction.partner_messages == ()
        assert reaction.listing_skus == ("378;6", "5002;6")


# =============================================================================
# DISPATCHER
# =============================================================================


def dispatch(checks, sender, config=None, check_partner=True):
    offer = FakeOffer(is_our_offer=True)
    dispatcher = OfferDispatcher(sender, checks, config)
    return asyncio.run(dispatcher.dispatch(offer, check_partner=check_partner)), offer


class TestDispatcher:
    def test_sent(self):
        sender = FakeSender()
        checks = FakeChecks()
        message, offer = dispatch(checks, sender)

        assert message is None
        assert sender.sent == [offer]
        assert checks.calls == ["escrow", "banned"]

    def test_escrow(self):
        sender = FakeSender()
        message, _ = dispatch(FakeChecks(escrow=True), sender)

        assert message == "The offer would be held by escrow"
        assert sender.sent == []

    def test_escrow_skipped_when_accepted(self):
        checks = FakeChecks(escrow=True)
        message, _ = dispatch(checks, FakeSender(), BuilderConfig(accept_escrow=True))

        assert message is None
        assert checks.calls == ["banned"]

    def test_banned(self):
        message, _ = dispatch(FakeChecks(banned=True), FakeSender())
        assert message == "You are banned in one or more communities"

    def test_partner_checks_skipped(self):
        checks = FakeChecks(escrow=True, banned=True)
        message, _ = dispatch(checks, FakeSender(), check_partner=False)

        assert message is None
        assert checks.calls == []

    def test_send_error_classified(self):
        message, _ = dispatch(FakeChecks(), FakeSender(TransportError("busy", eresult=16)))
        assert message == RECENT_BIG_OFFER

    def test_partner_check_failure_propagates(self):
        with pytest.raises(PartnerCheckError):
            dispatch(FakeChecks(ban_error=True), FakeSender())
