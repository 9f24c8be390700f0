"""OfferBuilder — сборка оффера по прямому запросу купить/продать

Итоговое количество = минимум из четырёх независимых ограничений:
    (a) запрошенное количество
    (b) количество экземпляров у продавца
    (c) ёмкость бота по sku в направлении сделки
    (d) платёжеспособность покупателя (проверяется CurrencySolver)
Каждое сработавшее ограничение формирует сообщение об изменении оффера.

Далее:
1. price = цена за единицу × количество (курс ключа направления)
2. CurrencySolver по валюте покупателя:
   change > 0 → ConstructionError (защитная проверка, не ожидается после (d))
   change < 0 → продавец добавляет точную сдачу металлом
3. Аллокация instance id в порядке следования
4. Метаданные: partner, dict, diff, value, prices, handleTimestamp
"""

import logging
from dataclasses import dataclass

from autotrade.builder.common import (
    CONSTRUCTION_FAILED_MESSAGE,
    BuilderConfig,
    BuildResult,
    ConstructionError,
    allocate,
    attach_metadata,
    now_ms,
)
from autotrade.cart.wording import pluralize
from autotrade.core.domain.cart import Side
from autotrade.core.domain.currency import KEY_SKU, Money, to_refined
from autotrade.core.domain.exchange import ItemPrices, OfferMetadata, ValueRecord
from autotrade.core.domain.pricing import Intent
from autotrade.core.math.currency_solver import (
    METAL_UNITS,
    count_holdings,
    currency_units,
    make_exact_change,
    max_affordable,
    solve,
)
from autotrade.core.math.valuation import PriceSnapshot, ValueAccumulator
from autotrade.transport.protocols import InventoryProvider, OfferFactory, PriceProvider


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfferRequest:
    """Прямой запрос партнёра."""

    partner: str
    sku: str
    amount: int
    buying: bool  # True: бот покупает у партнёра

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError(f"Requested amount must be positive: {self.amount}")


class OfferBuilder:
    """Сборка исходящего оффера по прямому запросу."""

    def __init__(
        self,
        bot_id: str,
        inventory: InventoryProvider,
        pricing: PriceProvider,
        offers: OfferFactory,
        config: BuilderConfig | None = None,
    ):
        """
        Args:
            bot_id: Идентификатор аккаунта бота
            inventory: Инвентари (свой и партнёров)
            pricing: Прайс-лист
            offers: Фабрика офферов транспорта
            config: Конфигурация (опционально, используется default)
        """
        self.bot_id = bot_id
        self.inventory = inventory
        self.pricing = pricing
        self.offers = offers
        self.config = config or BuilderConfig()

    async def build(self, request: OfferRequest) -> BuildResult:
        """
        Сборка оффера.

        Args:
            request: Запрос партнёра

        Returns:
            BuildResult с оффером или сообщением об отказе

        Raises:
            InventoryError: Если не удалось загрузить инвентарь
        """
        try:
            return await self._build(request)
        except ConstructionError as e:
            logger.warning("Failed to create offer for %s: %s", request.partner, e)
            return BuildResult(message=CONSTRUCTION_FAILED_MESSAGE)

    async def _build(self, request: OfferRequest) -> BuildResult:
        start = now_ms()
        buying = request.buying
        snapshot = PriceSnapshot.capture(self.pricing, [request.sku])
        entry = snapshot.get(request.sku)

        if entry is None:
            return BuildResult(message="The item is no longer in the pricelist")

        if not entry.allows(buying):
            only = "selling" if entry.intent == Intent.SELL else "buying"
            return BuildResult(message=f"I am only {only} {pluralize(entry.name)}")

        name = entry.name
        verb = "buy" if buying else "sell"
        capacity = self.inventory.amount_can_trade(request.sku, buying)

        if capacity <= 0:
            return BuildResult(message=f"I can't {verb} any {pluralize(name)}")

        buyer = self.bot_id if buying else request.partner
        seller = request.partner if buying else self.bot_id
        seller_word, buyer_word = ("You", "I") if buying else ("I", "You")

        # (b) количество у продавца
        seller_dict = await self.inventory.get_dictionary(seller, self.config.use_cache)
        seller_items = list(seller_dict.get(request.sku, []))

        amount = request.amount
        altered = None

        if not seller_items:
            return BuildResult(message=f"{seller_word} don't have any {pluralize(name, 2)}")
        if len(seller_items) < amount:
            amount = len(seller_items)
            altered = f"{seller_word} only have {pluralize(name, amount, True)}"

        # (c) ёмкость бота
        if capacity < amount:
            amount = capacity
            altered = f"I can only {verb} {pluralize(name, amount, True)}"

        # (d) платёжеспособность покупателя
        is_key = request.sku == KEY_SKU
        key_rate = snapshot.key_rate(buying)
        units = currency_units(None if is_key else key_rate)
        unit_price = entry.price(buying).to_value(None if is_key else key_rate)

        buyer_dict = await self.inventory.get_dictionary(buyer, self.config.use_cache)
        buyer_holdings = {unit.sku: list(buyer_dict.get(unit.sku, [])) for unit in units}
        available = count_holdings(buyer_holdings)

        can_afford = max_affordable(unit_price, amount, available, units)
        if can_afford == 0:
            return BuildResult(message=f"{buyer_word} don't have enough pure to buy any {pluralize(name, 2)}")
        if can_afford < amount:
            amount = can_afford
            altered = f"{buyer_word} can only afford {pluralize(name, amount, True)}"

        notices = []
        if altered:
            notices.append(f"Your offer has been altered! Reason: {altered}.")

        total = unit_price * amount
        required = solve(total, available, units)

        if required.is_insufficient:
            raise ConstructionError(f"change is positive ({required.change}) for total {total}")

        offer = self.offers.create_offer(request.partner)
        accumulator = ValueAccumulator(snapshot)
        seller_side = Side.THEIR if buying else Side.OUR
        buyer_side = seller_side.other
        items = {Side.OUR.value: {}, Side.THEIR.value: {}}

        # Предметы продавца
        added = allocate(offer, mine=not buying, instances=seller_items, count=amount)
        if added != amount:
            raise ConstructionError(f"seller items: added {added} of {amount}")
        items[seller_side.value][request.sku] = amount
        accumulator.add(seller_side, request.sku, amount, buying=buying)

        # Сдача от продавца (только металл)
        change = required.owed_change
        if change:
            seller_metal = {unit.sku: list(seller_dict.get(unit.sku, [])) for unit in METAL_UNITS}
            picked_change, missing = make_exact_change(change, count_holdings(seller_metal))
            if missing:
                subject = "You are" if buying else "I am"
                return BuildResult(message=f"{subject} missing {to_refined(missing)} ref as change")

            for sku, count in picked_change.items():
                if allocate(offer, mine=not buying, instances=seller_metal[sku], count=count) != count:
                    raise ConstructionError(f"seller change {sku}")
                items[seller_side.value][sku] = items[seller_side.value].get(sku, 0) + count
            accumulator.add_currencies(seller_side, picked_change, buying=buying)

        # Валюта покупателя
        for sku, count in required.picked.items():
            if allocate(offer, mine=buying, instances=buyer_holdings[sku], count=count) != count:
                raise ConstructionError(f"missing buyer pure {sku}")
            items[buyer_side.value][sku] = count
        accumulator.add_currencies(buyer_side, required.picked, buying=buying)

        metadata = OfferMetadata(
            partner=request.partner,
            items=items,
            diff=OfferMetadata.diff_from_items(items),
            value=ValueRecord.from_exchange(accumulator.exchange, snapshot.key_prices),
            prices={request.sku: ItemPrices.from_entry(entry)},
            handle_timestamp=start,
        )
        attach_metadata(offer, metadata)

        buyer_pays = Money(
            keys=required.picked.get(KEY_SKU, 0),
            scrap=sum(unit.value * required.picked.get(unit.sku, 0) for unit in METAL_UNITS),
        )
        buyer_str = str(buyer_pays)
        seller_str = pluralize(name, amount, True)
        if change:
            seller_str += f" and {to_refined(change)} ref"

        offered, wanted = (buyer_str, seller_str) if buying else (seller_str, buyer_str)
        notices.append(f"Please wait while I process your offer! You will be offered {offered} for your {wanted}")

        offer.log("info", f"built {verb} offer for {pluralize(name, amount, True)}")
        return BuildResult(offer=offer, notices=tuple(notices), metadata=metadata)
