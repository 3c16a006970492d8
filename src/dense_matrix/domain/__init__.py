"""
Domain models and value objects.

Contains immutable descriptions of matrices used for serialization.
"""

from dense_matrix.domain.snapshot import (
    SNAPSHOT_SCHEMA_VERSION,
    MatrixShape,
    MatrixSnapshot,
)

__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "MatrixShape",
    "MatrixSnapshot",
]
