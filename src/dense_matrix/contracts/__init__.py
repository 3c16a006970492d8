"""
Contract Validation Module

Модуль для валидации JSON контракта сериализованных матриц.
"""

from .validators import (
    MATRIX_SCHEMA,
    MATRIX_SCHEMA_PATH,
    is_valid_matrix_payload,
    iter_matrix_errors,
    load_schema,
    validate_matrix_payload,
    values_shape_errors,
)

__all__ = [
    # Schema
    "MATRIX_SCHEMA",
    "MATRIX_SCHEMA_PATH",
    "load_schema",
    # Functions
    "values_shape_errors",
    "iter_matrix_errors",
    "is_valid_matrix_payload",
    "validate_matrix_payload",
]
