"""
JSON Schema контракты метаданных оффера

Метаданные (diff, dict, value, prices, partner, handleTimestamp) пишутся
в оффер и читаются обработчиком смены состояния, поэтому каждая запись
проверяется по offer_metadata.json до того, как попадёт в оффер.

Схемы поставляются вместе с пакетом (ресурс schema/), валидаторы
Draft 2020-12 строятся лениво и кэшируются по имени схемы.
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from autotrade.core.domain.exchange import OfferMetadata


OFFER_METADATA = "offer_metadata"


class ContractRegistry:
    """Схемы и построенные по ним валидаторы."""

    def __init__(self, root: Path | None = None):
        self._root = root if root is not None else resources.files(__package__).joinpath("schema")
        self._validators: Dict[str, Draft202012Validator] = {}

    def schema(self, name: str) -> Dict[str, Any]:
        return self.validator(name).schema

    def validator(self, name: str) -> Draft202012Validator:
        """
        Валидатор схемы name (без расширения .json).

        Raises:
            FileNotFoundError: Если файла схемы нет
            ValueError: Если схема не проходит meta-validation
        """
        cached = self._validators.get(name)
        if cached is not None:
            return cached

        source = self._root.joinpath(f"{name}.json")
        if not source.is_file():
            raise FileNotFoundError(f"Schema not found: {name}.json")
        schema = json.loads(source.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {name}.json: {e.message}") from e

        validator = Draft202012Validator(schema)
        self._validators[name] = validator
        return validator


CONTRACTS = ContractRegistry()


def _offer_data(data: Dict[str, Any] | OfferMetadata) -> Dict[str, Any]:
    return data.to_offer_data() if isinstance(data, OfferMetadata) else data


def validate_offer_metadata(data: Dict[str, Any] | OfferMetadata) -> None:
    """
    Проверка метаданных оффера (dict в wire-формате или модель).

    Raises:
        ValidationError: Первое найденное нарушение схемы
    """
    CONTRACTS.validator(OFFER_METADATA).validate(_offer_data(data))


def offer_metadata_errors(data: Dict[str, Any] | OfferMetadata) -> Iterator[ValidationError]:
    """Все нарушения схемы, в порядке обхода данных."""
    return CONTRACTS.validator(OFFER_METADATA).iter_errors(_offer_data(data))
