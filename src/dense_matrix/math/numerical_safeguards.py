"""
Numerical Safeguards — epsilon-примитивы и валидаторы аргументов

Модуль обеспечивает численную устойчивость операций над матрицами:
- Epsilon-сравнения float с фиксированной абсолютной толерантностью
- Валидация размерностей (только положительные целые)
- Валидация индексов элементов (без отрицательной индексации)
- Валидация значений элементов (только вещественные числа, без неявного float(str))
- Знак алгебраического дополнения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Толерантность EPS_ACCURACY фиксирована и не настраивается
2. bool не считается допустимой размерностью или индексом
3. Все валидаторы выполняются ДО любой мутации состояния
"""

from numbers import Real
from typing import Final

from dense_matrix.errors import MatrixInvalidArgumentError, MatrixOutOfRangeError

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность для сравнения элементов матриц
# Используется в равенстве, в разложении определителя и при обращении
EPS_ACCURACY: Final[float] = 1e-7

# Размер матрицы по умолчанию (Matrix() == Matrix(3, 3))
DEFAULT_SIZE: Final[int] = 3


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_zero(value: float, tol: float = EPS_ACCURACY) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.

    Args:
        value: Проверяемое значение
        tol: Абсолютная толерантность (default: EPS_ACCURACY)

    Returns:
        True если abs(value) <= tol

    Examples:
        >>> is_zero(1e-8)
        True
        >>> is_zero(1e-6)
        False
    """
    return abs(value) <= tol


def is_close_abs(a: float, b: float, tol: float = EPS_ACCURACY) -> bool:
    """
    Сравнение двух float по абсолютной разности.

    В отличие от math.isclose здесь нет относительной составляющей:
    два элемента равны, если abs(a - b) <= tol.

    Examples:
        >>> is_close_abs(1.0, 1.0 + 1e-8)
        True
        >>> is_close_abs(1.0, 1.0 + 1e-6)
        False
    """
    return abs(a - b) <= tol


def cofactor_sign(index_sum: int) -> float:
    """
    Знак алгебраического дополнения: +1 для чётной суммы индексов, -1 для нечётной.

    Examples:
        >>> cofactor_sign(0)
        1.0
        >>> cofactor_sign(3)
        -1.0
    """
    return 1.0 if index_sum % 2 == 0 else -1.0


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def is_natural(value: object) -> bool:
    """True если value — целое (не bool) и value > 0."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_dimension(value: object, name: str) -> int:
    """
    Валидация размерности матрицы.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        MatrixInvalidArgumentError: Если value не целое или value <= 0
    """
    if not is_natural(value):
        raise MatrixInvalidArgumentError(
            f"{name} must be a positive integer, got {value!r}"
        )
    return value  # type: ignore[return-value]


def validate_dimensions(rows: object, cols: object) -> tuple[int, int]:
    """Валидация пары (rows, cols); обе размерности проверяются до любой аллокации."""
    return validate_dimension(rows, "rows"), validate_dimension(cols, "cols")


def validate_index(value: object, bound: int, name: str) -> int:
    """
    Валидация индекса элемента.

    Отрицательные индексы НЕ интерпретируются как отсчёт с конца.

    Args:
        value: Индекс
        bound: Верхняя граница (исключительно)
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        MatrixOutOfRangeError: Если value не целое или вне [0, bound)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise MatrixOutOfRangeError(f"{name} must be an integer, got {value!r}")

    if value < 0 or value >= bound:
        raise MatrixOutOfRangeError(
            f"{name} {value} is out of range [0, {bound})"
        )
    return value


def validate_real(value: object, name: str) -> float:
    """
    Валидация значения элемента или множителя.

    Строки и прочие типы, которые float() умеет разобрать, не принимаются.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        float(value)

    Raises:
        TypeError: Если value не является вещественным числом (numbers.Real)
    """
    if not isinstance(value, Real):
        raise TypeError(f"{name} must be a real number, got {value!r}")
    return float(value)
