"""
Matrix Contract — валидация сериализованных матриц

Формат: contracts/schema/matrix.json (JSON Schema Draft 2020-12)
    {"schema_version": "1", "rows": R, "cols": C, "values": [[...], ...]}

Проверка в два шага:
1. Структура и типы — скомпилированный jsonschema-валидатор (один на модуль)
2. Согласованность values с rows / cols — values_shape_errors

values_shape_errors — единственное место, где описано правило формы values;
MatrixSnapshot использует ту же функцию.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

# Путь к схеме (package data)
MATRIX_SCHEMA_PATH: Final[Path] = Path(__file__).parent / "schema" / "matrix.json"


# =============================================================================
# ЗАГРУЗКА СХЕМЫ
# =============================================================================


def load_schema(schema_path: Path) -> Dict[str, Any]:
    """
    Загрузка и meta-валидация JSON Schema файла.

    Raises:
        FileNotFoundError: Если файл схемы не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        ValueError: Если файл не является валидной JSON Schema
    """
    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

    return schema


MATRIX_SCHEMA: Final[Dict[str, Any]] = load_schema(MATRIX_SCHEMA_PATH)

_MATRIX_VALIDATOR = Draft202012Validator(MATRIX_SCHEMA)


# =============================================================================
# ПРАВИЛО ФОРМЫ VALUES
# =============================================================================


def values_shape_errors(rows: int, cols: int, values: list) -> list[str]:
    """
    Расхождения values с заявленными размерностями.

    Returns:
        Пустой список, если values содержит ровно rows строк по cols элементов

    Examples:
        >>> values_shape_errors(2, 1, [[1.0]])
        ['values has 1 rows, expected 2']
    """
    errors = []
    if len(values) != rows:
        errors.append(f"values has {len(values)} rows, expected {rows}")
    for i, row in enumerate(values):
        if len(row) != cols:
            errors.append(f"values row {i} has {len(row)} items, expected {cols}")
    return errors


# =============================================================================
# ВАЛИДАЦИЯ ПАКЕТА
# =============================================================================


def iter_matrix_errors(data: Any) -> Iterator[ValidationError]:
    """
    Все ошибки контракта matrix.

    Форма values проверяется только для структурно валидных данных.
    """
    schema_errors = list(_MATRIX_VALIDATOR.iter_errors(data))
    if schema_errors:
        yield from schema_errors
        return

    for message in values_shape_errors(data["rows"], data["cols"], data["values"]):
        yield ValidationError(
            message, validator="shape", path=("values",), instance=data["values"]
        )


def is_valid_matrix_payload(data: Any) -> bool:
    """Проверка валидности без exception."""
    return next(iter_matrix_errors(data), None) is None


def validate_matrix_payload(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованной матрицы.

    Raises:
        jsonschema.ValidationError: Наиболее релевантная ошибка контракта
    """
    error = best_match(iter_matrix_errors(data))
    if error is not None:
        raise error
