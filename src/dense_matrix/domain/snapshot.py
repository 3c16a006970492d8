"""
MatrixSnapshot — неизменяемое представление матрицы для сериализации

Immutable Pydantic модели:
- MatrixShape: пара положительных размерностей (rows, cols)
- MatrixSnapshot: размерности + значения построчно, формат JSON-контракта
  contracts/schema/matrix.json

Snapshot никогда не разделяет хранилище с Matrix: значения копируются
в обе стороны.
"""

from typing import Final, Literal

from pydantic import BaseModel, Field, model_validator

from dense_matrix.contracts.validators import values_shape_errors

# Версия формата сериализации
SNAPSHOT_SCHEMA_VERSION: Final[str] = "1"


# =============================================================================
# SHAPE MODEL
# =============================================================================


class MatrixShape(BaseModel):
    """
    Размерность матрицы.

    Immutable модель (frozen=True). bool и float не принимаются (strict).
    """

    rows: int = Field(..., gt=0, strict=True, description="Количество строк")
    cols: int = Field(..., gt=0, strict=True, description="Количество столбцов")

    model_config = {"frozen": True}

    @property
    def size(self) -> int:
        """Количество элементов rows * cols."""
        return self.rows * self.cols


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class MatrixSnapshot(BaseModel):
    """
    Снимок матрицы: размерности и значения построчно.

    Immutable модель (frozen=True). Валидатор гарантирует, что values
    содержит ровно rows строк по cols элементов.
    """

    schema_version: Literal["1"] = Field(
        default=SNAPSHOT_SCHEMA_VERSION, description="Версия формата"
    )
    rows: int = Field(..., gt=0, strict=True, description="Количество строк")
    cols: int = Field(..., gt=0, strict=True, description="Количество столбцов")
    values: list[list[float]] = Field(..., description="Элементы матрицы построчно")

    # inf / nan пишутся как Infinity / NaN, иначе JSON не читается обратно
    model_config = {"frozen": True, "ser_json_inf_nan": "constants"}

    @model_validator(mode="after")
    def validate_values_shape(self) -> "MatrixSnapshot":
        """Проверка соответствия values заявленным размерностям."""
        errors = values_shape_errors(self.rows, self.cols, self.values)
        if errors:
            raise ValueError("; ".join(errors))
        return self

    @property
    def shape(self) -> MatrixShape:
        return MatrixShape(rows=self.rows, cols=self.cols)

    def flat_values(self) -> list[float]:
        """Элементы в row-major порядке (новый список)."""
        return [value for row in self.values for value in row]
