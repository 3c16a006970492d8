"""
Core math modules для dense_matrix

Epsilon-примитивы и валидаторы аргументов, общие для всех операций над матрицами.
"""

from dense_matrix.math.numerical_safeguards import (
    # Constants
    DEFAULT_SIZE,
    EPS_ACCURACY,
    # Epsilon comparisons
    cofactor_sign,
    is_close_abs,
    is_zero,
    # Validation
    is_natural,
    validate_dimension,
    validate_dimensions,
    validate_index,
    validate_real,
)

__all__ = [
    # Constants
    "DEFAULT_SIZE",
    "EPS_ACCURACY",
    # Epsilon comparisons
    "cofactor_sign",
    "is_close_abs",
    "is_zero",
    # Validation
    "is_natural",
    "validate_dimension",
    "validate_dimensions",
    "validate_index",
    "validate_real",
]
