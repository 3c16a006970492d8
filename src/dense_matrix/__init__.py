"""
dense_matrix — плотная матрица вещественных чисел без внешних linalg-зависимостей.

Contains the Matrix type, its error taxonomy, numerical safeguards,
serialization models and JSON contracts.
"""

from dense_matrix.errors import (
    MatrixError,
    MatrixInvalidArgumentError,
    MatrixLogicError,
    MatrixOutOfRangeError,
)
from dense_matrix.math.numerical_safeguards import DEFAULT_SIZE, EPS_ACCURACY
from dense_matrix.domain.snapshot import MatrixShape, MatrixSnapshot
from dense_matrix.matrix import Matrix

__all__ = [
    # Core type
    "Matrix",
    # Constants
    "DEFAULT_SIZE",
    "EPS_ACCURACY",
    # Exceptions
    "MatrixError",
    "MatrixInvalidArgumentError",
    "MatrixLogicError",
    "MatrixOutOfRangeError",
    # Serialization models
    "MatrixShape",
    "MatrixSnapshot",
]
