"""
Matrix — плотная матрица вещественных чисел

Владеющий, изменяемый по размеру 2D-контейнер float с операциями линейной
алгебры:
- Поэлементная арифметика (+, -, умножение на число)
- Матричное умножение (тройной цикл i / j / k)
- Равенство с абсолютной толерантностью EPS_ACCURACY
- Транспонирование, минор, определитель (рекурсивное разложение по строке 0)
- Матрица алгебраических дополнений и обратная матрица через присоединённую

Хранилище: один непрерывный row-major список длины rows * cols,
элемент (i, j) лежит по смещению i * cols + j.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. У живой матрицы rows >= 1 и cols >= 1, len(storage) == rows * cols
2. Хранилище никогда не разделяется между двумя экземплярами Matrix
3. Валидация всегда выполняется ДО мутации
4. После take / move_from / release источник освобождён: 0x0, storage = None

ФОРМУЛЫ:
    det(A) = Σ_j a[0][j] * det(M(0, j)) * (-1)^j,  |a[0][j]| > EPS_ACCURACY
    C[i][j] = det(M(i, j)) * (-1)^(i+j)
    A^-1 = C^T * (1 / det(A)),  |det(A)| >= EPS_ACCURACY
"""

import json
import logging
from numbers import Real
from typing import Any, Dict, Optional, Sequence

from dense_matrix.contracts import validate_matrix_payload
from dense_matrix.domain.snapshot import MatrixSnapshot
from dense_matrix.errors import (
    MatrixInvalidArgumentError,
    MatrixLogicError,
    MatrixOutOfRangeError,
)
from dense_matrix.math.numerical_safeguards import (
    DEFAULT_SIZE,
    EPS_ACCURACY,
    cofactor_sign,
    is_close_abs,
    is_zero,
    validate_dimensions,
    validate_index,
    validate_real,
)

logger = logging.getLogger(__name__)


class Matrix:
    """
    Плотная матрица float произвольного размера.

    Matrix() создаёт 3x3, Matrix(n) — n x n, Matrix(rows, cols) — rows x cols.
    Все элементы инициализируются 0.0.

    Доступ к элементам: m[i, j] и m[i, j] = value (без отрицательной индексации).
    """

    def __init__(self, rows: Optional[int] = None, cols: Optional[int] = None) -> None:
        if rows is None and cols is None:
            rows = cols = DEFAULT_SIZE
        elif cols is None:
            cols = rows

        rows, cols = validate_dimensions(rows, cols)

        self._rows: int = rows
        self._cols: int = cols
        self._data: Optional[list[float]] = [0.0] * (rows * cols)

    @classmethod
    def _from_storage(
        cls, rows: int, cols: int, data: Optional[list[float]]
    ) -> "Matrix":
        # Хранилище передаётся во владение без копирования
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._cols = cols
        matrix._data = data
        return matrix

    # =========================================================================
    # АЛЬТЕРНАТИВНЫЕ КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def from_rows(cls, rows_data: Sequence[Sequence[float]]) -> "Matrix":
        """
        Создание матрицы из прямоугольной последовательности строк.

        Args:
            rows_data: Непустая последовательность непустых строк одинаковой длины

        Raises:
            MatrixInvalidArgumentError: Если данных нет или строки разной длины
            TypeError: Если элемент не является вещественным числом

        Examples:
            >>> Matrix.from_rows([[1, 2], [3, 4]]).determinant()
            -2.0
        """
        materialized = [list(row) for row in rows_data]
        if not materialized or not materialized[0]:
            raise MatrixInvalidArgumentError(
                "rows_data must contain at least one non-empty row"
            )

        cols = len(materialized[0])
        for i, row in enumerate(materialized):
            if len(row) != cols:
                raise MatrixInvalidArgumentError(
                    f"row {i} has {len(row)} items, expected {cols}"
                )

        values = [
            validate_real(value, f"element ({i}, {j})")
            for i, row in enumerate(materialized)
            for j, value in enumerate(row)
        ]
        return cls._from_storage(len(materialized), cols, values)

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """Единичная матрица size x size."""
        result = cls(size, size)
        for i in range(size):
            result._data[i * size + i] = 1.0
        return result

    @classmethod
    def from_matrix(cls, other: "Matrix") -> "Matrix":
        """Глубокая копия other (эквивалент copy-конструктора)."""
        return other.copy()

    # =========================================================================
    # LIFECYCLE: COPY / MOVE / RELEASE
    # =========================================================================

    def copy(self) -> "Matrix":
        """Независимая копия: размерности и все элементы, без общего хранилища."""
        data = None if self._data is None else list(self._data)
        return self._from_storage(self._rows, self._cols, data)

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Matrix":
        return self.copy()

    def assign(self, other: "Matrix") -> "Matrix":
        """
        Copy-assignment: заменить размерности и элементы копией other.

        Присваивание самому себе ничего не делает.
        """
        if other is self:
            return self

        self._data = None if other._data is None else list(other._data)
        self._rows = other._rows
        self._cols = other._cols
        return self

    @classmethod
    def take(cls, other: "Matrix") -> "Matrix":
        """
        Move-конструктор: новая матрица забирает хранилище other.

        other остаётся освобождённым (0x0, storage = None). Никогда не бросает.
        """
        result = cls._from_storage(other._rows, other._cols, other._data)
        other._invalidate()
        logger.debug("Moved %dx%d storage into new matrix", result._rows, result._cols)
        return result

    def move_from(self, other: "Matrix") -> "Matrix":
        """
        Move-assignment: забрать хранилище other, собственное хранилище отбросить.

        other остаётся освобождённым. Перемещение в самого себя ничего не делает.
        """
        if other is self:
            return self

        self._rows, self._cols, self._data = other._rows, other._cols, other._data
        other._invalidate()
        logger.debug("Moved %dx%d storage into existing matrix", self._rows, self._cols)
        return self

    def release(self) -> None:
        """Освободить хранилище; повторный вызов — no-op."""
        if self._data is None:
            return

        logger.debug("Releasing %dx%d matrix storage", self._rows, self._cols)
        self._invalidate()

    def _invalidate(self) -> None:
        self._rows = 0
        self._cols = 0
        self._data = None

    def __enter__(self) -> "Matrix":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    # =========================================================================
    # РАЗМЕРНОСТИ
    # =========================================================================

    def get_rows(self) -> int:
        return self._rows

    def get_cols(self) -> int:
        return self._cols

    def set_rows(self, new_rows: int) -> None:
        self.set_dimension(new_rows, self._cols)

    def set_cols(self, new_cols: int) -> None:
        self.set_dimension(self._rows, new_cols)

    rows = property(get_rows, set_rows)
    cols = property(get_cols, set_cols)

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def is_square(self) -> bool:
        return self._rows == self._cols

    @property
    def is_scalar(self) -> bool:
        """True для матрицы 1x1."""
        return self._rows == 1 and self._cols == 1

    @property
    def released(self) -> bool:
        return self._data is None

    def set_dimension(self, new_rows: int, new_cols: int) -> None:
        """
        Изменение размера с сохранением перекрывающегося прямоугольника.

        Элементы min(rows, new_rows) x min(cols, new_cols) копируются,
        остальные равны 0.0 (рост дополняет нулями, сжатие обрезает).
        Новое хранилище и размерности подменяются одновременно.

        Raises:
            MatrixInvalidArgumentError: Если new_rows или new_cols < 1
        """
        new_rows, new_cols = validate_dimensions(new_rows, new_cols)
        if new_rows == self._rows and new_cols == self._cols:
            return

        data = [0.0] * (new_rows * new_cols)
        overlap_cols = min(self._cols, new_cols)
        for i in range(min(self._rows, new_rows)):
            src = i * self._cols
            dst = i * new_cols
            data[dst:dst + overlap_cols] = self._data[src:src + overlap_cols]

        logger.debug(
            "Resizing matrix %dx%d -> %dx%d", self._rows, self._cols, new_rows, new_cols
        )
        self._data, self._rows, self._cols = data, new_rows, new_cols

    # =========================================================================
    # ДОСТУП К ЭЛЕМЕНТАМ
    # =========================================================================

    def _offset(self, index: Any) -> int:
        if not isinstance(index, tuple) or len(index) != 2:
            raise MatrixOutOfRangeError(f"index must be a (row, col) pair, got {index!r}")

        i, j = index
        validate_index(i, self._rows, "row")
        validate_index(j, self._cols, "col")
        return i * self._cols + j

    def __getitem__(self, index: tuple[int, int]) -> float:
        return self._data[self._offset(index)]

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        offset = self._offset(index)
        self._data[offset] = validate_real(value, "value")

    def to_rows(self) -> list[list[float]]:
        """Элементы построчно (новые списки)."""
        if self._data is None:
            return []
        cols = self._cols
        return [self._data[i * cols:(i + 1) * cols] for i in range(self._rows)]

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols}, values={self.to_rows()!r})"

    # =========================================================================
    # ПРЕДУСЛОВИЯ
    # =========================================================================

    def _require_live(self) -> None:
        if self._data is None:
            raise MatrixLogicError("matrix storage has been released")

    def _same_dimension(self, other: "Matrix") -> bool:
        return self._rows == other._rows and self._cols == other._cols

    def _require_same_dimension(self, other: "Matrix") -> None:
        self._require_live()
        other._require_live()
        if not self._same_dimension(other):
            raise MatrixLogicError(
                f"different dimensions of matrices: "
                f"{self._rows}x{self._cols} vs {other._rows}x{other._cols}"
            )

    def _require_square(self) -> None:
        self._require_live()
        if not self.is_square:
            raise MatrixLogicError(f"matrix is not square: {self._rows}x{self._cols}")

    # =========================================================================
    # РАВЕНСТВО
    # =========================================================================

    def eq_matrix(self, other: "Matrix") -> bool:
        """
        Равенство с абсолютной толерантностью EPS_ACCURACY.

        Разные размерности дают False, исключение не бросается.
        """
        if other is self:
            return True
        if not self._same_dimension(other):
            return False

        return all(
            is_close_abs(a, b) for a, b in zip(self._data or (), other._data or ())
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.eq_matrix(other)

    # =========================================================================
    # АРИФМЕТИКА IN-PLACE
    # =========================================================================

    def sum_matrix(self, other: "Matrix") -> None:
        """Поэлементное сложение in-place; размерности должны совпадать."""
        self._require_same_dimension(other)
        data = self._data
        for k, value in enumerate(other._data):
            data[k] += value

    def sub_matrix(self, other: "Matrix") -> None:
        """Поэлементное вычитание in-place; размерности должны совпадать."""
        self._require_same_dimension(other)
        data = self._data
        for k, value in enumerate(other._data):
            data[k] -= value

    def mul_number(self, num: float) -> None:
        """Умножение всех элементов на число; всегда успешно для вещественного num."""
        factor = validate_real(num, "num")
        if self._data is None:
            return
        self._data[:] = [value * factor for value in self._data]

    def mul_matrix(self, other: "Matrix") -> None:
        """
        Матричное умножение in-place: self = self x other.

        Результат считается в отдельном буфере и подменяет хранилище целиком,
        поэтому при ошибке self не изменяется.

        Raises:
            MatrixLogicError: Если self.cols != other.rows
        """
        self._require_live()
        other._require_live()
        if self._cols != other._rows:
            raise MatrixLogicError(
                f"incompatible dimensions for multiplication: "
                f"{self._rows}x{self._cols} * {other._rows}x{other._cols}"
            )

        rows, inner, cols = self._rows, self._cols, other._cols
        left, right = self._data, other._data
        result = [0.0] * (rows * cols)
        for i in range(rows):
            for j in range(cols):
                acc = 0.0
                for k in range(inner):
                    acc += left[i * inner + k] * right[k * cols + j]
                result[i * cols + j] = acc

        self._data, self._cols = result, cols

    # =========================================================================
    # ОПЕРАТОРЫ
    # =========================================================================

    def __add__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.sum_matrix(other)
        return result

    def __sub__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.sub_matrix(other)
        return result

    def __mul__(self, other: object) -> "Matrix":
        if isinstance(other, Matrix):
            result = self.copy()
            result.mul_matrix(other)
            return result
        if isinstance(other, Real):
            result = self.copy()
            result.mul_number(other)
            return result
        return NotImplemented

    def __rmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Real):
            return NotImplemented
        result = self.copy()
        result.mul_number(other)
        return result

    def __matmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.mul_matrix(other)
        return result

    def __iadd__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self.sum_matrix(other)
        return self

    def __isub__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self.sub_matrix(other)
        return self

    def __imul__(self, other: object) -> "Matrix":
        if isinstance(other, Matrix):
            self.mul_matrix(other)
            return self
        if isinstance(other, Real):
            self.mul_number(other)
            return self
        return NotImplemented

    def __imatmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self.mul_matrix(other)
        return self

    # =========================================================================
    # ТРАНСПОНИРОВАНИЕ, МИНОР, ОПРЕДЕЛИТЕЛЬ
    # =========================================================================

    def transpose(self) -> "Matrix":
        """Новая матрица cols x rows, result[j, i] == self[i, j]."""
        self._require_live()
        rows, cols = self._rows, self._cols
        result = Matrix(cols, rows)
        for i in range(rows):
            for j in range(cols):
                result._data[j * rows + i] = self._data[i * cols + j]
        return result

    def minor(self, deleted_row: int, deleted_col: int) -> "Matrix":
        """
        Подматрица без строки deleted_row и столбца deleted_col.

        Порядок оставшихся элементов сохраняется.

        Raises:
            MatrixLogicError: Если в матрице меньше двух строк или столбцов
            MatrixOutOfRangeError: Если индекс вне диапазона
        """
        self._require_live()
        if self._rows < 2 or self._cols < 2:
            raise MatrixLogicError(
                f"minor requires at least 2x2 matrix, got {self._rows}x{self._cols}"
            )
        validate_index(deleted_row, self._rows, "deleted_row")
        validate_index(deleted_col, self._cols, "deleted_col")

        rows, cols = self._rows, self._cols
        values = [
            self._data[i * cols + j]
            for i in range(rows)
            if i != deleted_row
            for j in range(cols)
            if j != deleted_col
        ]
        return self._from_storage(rows - 1, cols - 1, values)

    def determinant(self) -> float:
        """
        Определитель разложением по строке 0 (рекурсивно).

        Слагаемые с |a[0][j]| <= EPS_ACCURACY пропускаются: их вклад
        пренебрежимо мал. Сложность O(n!).

        Raises:
            MatrixLogicError: Если матрица не квадратная
        """
        self._require_square()
        if self.is_scalar:
            return self._data[0]

        result = 0.0
        for j in range(self._cols):
            value = self._data[j]
            if not is_zero(value):
                result += value * self.minor(0, j).determinant() * cofactor_sign(j)
        return result

    def calc_complements(self) -> "Matrix":
        """
        Матрица алгебраических дополнений.

        Для 1x1 возвращает [[1.0]].

        Raises:
            MatrixLogicError: Если матрица не квадратная
        """
        self._require_square()
        if self.is_scalar:
            return self._from_storage(1, 1, [1.0])

        size = self._rows
        values = [
            self.minor(i, j).determinant() * cofactor_sign(i + j)
            for i in range(size)
            for j in range(size)
        ]
        return self._from_storage(size, size, values)

    def inverse_matrix(self) -> "Matrix":
        """
        Обратная матрица через присоединённую: C^T * (1 / det).

        Raises:
            MatrixLogicError: Если матрица не квадратная или |det| < EPS_ACCURACY
        """
        determinant = self.determinant()
        if abs(determinant) < EPS_ACCURACY:
            raise MatrixLogicError(f"determinant is zero: {determinant!r}")

        logger.debug(
            "Inverting %dx%d matrix, determinant=%g", self._rows, self._cols, determinant
        )
        return self.calc_complements().transpose() * (1.0 / determinant)

    # =========================================================================
    # СЕРИАЛИЗАЦИЯ
    # =========================================================================

    def to_snapshot(self) -> MatrixSnapshot:
        """Неизменяемый снимок матрицы (значения копируются)."""
        self._require_live()
        return MatrixSnapshot(rows=self._rows, cols=self._cols, values=self.to_rows())

    @classmethod
    def from_snapshot(cls, snapshot: MatrixSnapshot) -> "Matrix":
        return cls._from_storage(snapshot.rows, snapshot.cols, snapshot.flat_values())

    def to_dict(self) -> Dict[str, Any]:
        return self.to_snapshot().model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Matrix":
        """
        Восстановление матрицы из dict.

        Raises:
            jsonschema.ValidationError: Если data не соответствует контракту matrix
            pydantic.ValidationError: Если values не согласованы с rows / cols
        """
        validate_matrix_payload(data)
        return cls.from_snapshot(MatrixSnapshot.model_validate(data))

    def to_json(self) -> str:
        return self.to_snapshot().model_dump_json()

    @classmethod
    def from_json(cls, text: str) -> "Matrix":
        return cls.from_dict(json.loads(text))
