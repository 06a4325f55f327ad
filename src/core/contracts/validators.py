"""
JSON Schema Contract Validators

Сырые JSON конфигурации (RPC, indexer, файлы) проверяются по формальным
JSON Schema контрактам и только затем превращаются в Pydantic модели.

Контракты (package data, src/core/contracts/schema/):
- reserve_config.json → ReserveConfig
- interest_rate_config.json → InterestRateConfig
- health_factor_thresholds.json → HealthFactorThresholds
- emode_category.json → EModeCategory

Контракт проверяет форму данных (типы, диапазоны, обязательные поля);
межполевые инварианты (liquidation_threshold >= loan_to_value,
упорядоченность ставок и порогов) проверяют модели.
"""

import json
from importlib import resources
from typing import Any, ClassVar, Dict, Final, Iterator, List, Type

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import BaseModel

from src.core.domain.emode import EModeCategory
from src.core.domain.reserve import InterestRateConfig, ReserveConfig
from src.core.domain.thresholds import HealthFactorThresholds

SCHEMA_PACKAGE: Final[str] = "src.core.contracts"
SCHEMA_DIRECTORY: Final[str] = "schema"
SCHEMA_SUFFIX: Final[str] = ".json"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик схем контрактов из ресурсов пакета.

    Схемы читаются через importlib.resources, поэтому доступны как из
    checkout, так и из установленного дистрибутива. Каждая схема
    проходит meta-validation при первой загрузке и кэшируется.
    """

    def __init__(self, package: str = SCHEMA_PACKAGE):
        self._root = resources.files(package).joinpath(SCHEMA_DIRECTORY)
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def available_schemas(self) -> List[str]:
        """Имена всех поставляемых схем (без расширения)."""
        return sorted(
            entry.name[: -len(SCHEMA_SUFFIX)]
            for entry in self._root.iterdir()
            if entry.name.endswith(SCHEMA_SUFFIX)
        )

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: Имя схемы без расширения (например, 'reserve_config')

        Raises:
            FileNotFoundError: Схемы нет среди ресурсов пакета
            ValueError: Файл не является валидной JSON Schema draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        resource = self._root.joinpath(schema_name + SCHEMA_SUFFIX)
        if not resource.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_name}{SCHEMA_SUFFIX}")

        schema = json.loads(resource.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}{SCHEMA_SUFFIX}: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Контракт сырого payload и модель, в которую он загружается.

    Подкласс задаёт schema_name и model; load() = проверка контракта +
    model_validate.
    """

    schema_name: ClassVar[str]
    model: ClassVar[Type[BaseModel]]

    def __init__(self, loader: SchemaLoader = _SCHEMA_LOADER):
        self.schema = loader.load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def load(self, data: Dict[str, Any]) -> BaseModel:
        """
        Raises:
            jsonschema.ValidationError: Нарушение контракта
            pydantic.ValidationError: Нарушение межполевых инвариантов модели
        """
        self.validate(data)
        return self.model.model_validate(data)


class ReserveConfigValidator(ContractValidator):
    schema_name = "reserve_config"
    model = ReserveConfig


class InterestRateConfigValidator(ContractValidator):
    schema_name = "interest_rate_config"
    model = InterestRateConfig


class HealthFactorThresholdsValidator(ContractValidator):
    schema_name = "health_factor_thresholds"
    model = HealthFactorThresholds


class EModeCategoryValidator(ContractValidator):
    schema_name = "emode_category"
    model = EModeCategory


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_reserve_config(data: Dict[str, Any]) -> None:
    ReserveConfigValidator().validate(data)


def validate_interest_rate_config(data: Dict[str, Any]) -> None:
    InterestRateConfigValidator().validate(data)


def validate_health_factor_thresholds(data: Dict[str, Any]) -> None:
    HealthFactorThresholdsValidator().validate(data)


def validate_emode_category(data: Dict[str, Any]) -> None:
    EModeCategoryValidator().validate(data)


def load_reserve_config(data: Dict[str, Any]) -> ReserveConfig:
    """Сырые данные резерва → ReserveConfig."""
    return ReserveConfigValidator().load(data)


def load_interest_rate_config(data: Dict[str, Any]) -> InterestRateConfig:
    """Сырые параметры кривой → InterestRateConfig (min <= optimal <= max)."""
    return InterestRateConfigValidator().load(data)


def load_health_factor_thresholds(data: Dict[str, Any]) -> HealthFactorThresholds:
    """Сырые пороги → HealthFactorThresholds (отсутствующие поля — по умолчанию)."""
    return HealthFactorThresholdsValidator().load(data)


def load_emode_category(data: Dict[str, Any]) -> EModeCategory:
    """Сырая E-Mode категория → EModeCategory (eligible_assets → frozenset)."""
    return EModeCategoryValidator().load(data)
