"""
JSON Schema Contract Validators

Проверка JSON-представления BigInteger по контракту big_integer
(JSON Schema draft 2020-12, библиотека jsonschema).

Контракт:
    {"digits": "<число со знаком>", "radix": 2 | 8 | 10 | 16}

Схема проверяет только синтаксис записи и допустимое основание.
Принадлежность цифр основанию (например, "9" при radix 8) проверяется
при разборе в BigIntegerValidator.parse.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator

from arbint.core.domain.big_integer import BigInteger

logger = logging.getLogger(__name__)

# Имя схемы контракта (файл schema/big_integer.json)
BIG_INTEGER_SCHEMA = "big_integer"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик схем, поставляемых вместе с пакетом (каталог schema/).

    Каждая схема читается с диска один раз и проходит meta-validation.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        if schema_dir is None:
            schema_dir = Path(__file__).parent / "schema"
        if not schema_dir.is_dir():
            raise RuntimeError(f"Bundled schema directory is missing: {schema_dir}")
        self._schema_dir = schema_dir
        self._cache: Dict[str, Dict[str, Any]] = {}

    def available(self) -> List[str]:
        """Имена всех схем каталога (без расширения)."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени.

        Args:
            schema_name: Имя файла схемы без расширения, например 'big_integer'

        Returns:
            Схема как dict (из кэша при повторном вызове)

        Raises:
            FileNotFoundError: Если схемы с таким именем нет
            ValueError: Если файл не проходит meta-validation
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"No bundled schema named {schema_name!r} ({path})")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"{schema_name}.json is not a valid draft 2020-12 schema: {e.message}")

        self._cache[schema_name] = schema
        return schema


# Общий загрузчик пакета
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Проверка данных по одной именованной схеме.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первое найденное нарушение схемы
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)

    def describe_errors(self, data: Dict[str, Any]) -> List[str]:
        """
        Все нарушения в виде строк '<путь>: <сообщение>'.

        Examples:
            >>> BigIntegerValidator().describe_errors({"digits": "1", "radix": 3})
            ['radix: 3 is not one of [2, 8, 10, 16]']
        """
        messages = []
        for error in sorted(self.iter_errors(data), key=lambda e: list(e.path)):
            location = "/".join(str(part) for part in error.path) or "<root>"
            messages.append(f"{location}: {error.message}")
        return messages


class BigIntegerValidator(ContractValidator):
    """Контракт big_integer: проверка схемы и разбор в BigInteger."""

    def __init__(self):
        super().__init__(BIG_INTEGER_SCHEMA)

    def parse(self, data: Dict[str, Any]) -> BigInteger:
        """
        Проверка по схеме и разбор цифр в системе radix.

        Raises:
            ValidationError: Если данные не соответствуют схеме
            ValueError: Если цифры не принадлежат системе счисления radix
        """
        self.validate(data)

        digits, radix = data["digits"], data["radix"]
        value = BigInteger.from_string(digits, radix)
        if value is None:
            logger.debug("Contract digits %r do not fit radix %d", digits, radix)
            raise ValueError(f"digits {digits!r} are not valid in radix {radix}")
        return value


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_big_integer(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют контракту big_integer
    """
    BigIntegerValidator().validate(data)


def to_contract(value: BigInteger, radix: int = 10) -> Dict[str, Any]:
    """
    BigInteger → {"digits": ..., "radix": ...}.

    Raises:
        UnsupportedBaseError: Если основание не из набора 2, 8, 10, 16
    """
    return {"digits": value.to_string(radix), "radix": radix}


def from_contract(data: Dict[str, Any]) -> BigInteger:
    """
    {"digits": ..., "radix": ...} → BigInteger.

    Сначала проверяется схема, затем цифры разбираются в системе radix.

    Raises:
        ValidationError: Если данные не соответствуют схеме
        ValueError: Если цифры не принадлежат системе счисления radix
    """
    return BigIntegerValidator().parse(data)
