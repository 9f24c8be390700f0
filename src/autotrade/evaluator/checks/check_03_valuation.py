"""CHECK 3: Оценка стоимости сторон

Не принимает решений: заполняет context.accumulator.
- Металл: фиксированные веса
- Предметы с ценой: buy-цена на стороне THEIR, sell-цена на стороне OUR
- Ключи: цена записи ключа, иначе курс ключа
Флаги items/metal/keys выставляются для каждой стороны.
"""

from autotrade.core.domain.cart import Side
from autotrade.evaluator.types import CheckResult, EvaluationContext


class Check03Valuation:
    """CHECK 3: стоимость сторон по снапшоту цен."""

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        for side in (Side.OUR, Side.THEIR):
            for sku, instances in context.items[side].items():
                context.accumulator.add(side, sku, len(instances))

        our = context.accumulator.value(Side.OUR)
        their = context.accumulator.value(Side.THEIR)
        return CheckResult.passed(f"value our={our} their={their} (scrap)")
