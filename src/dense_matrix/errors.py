"""
Matrix Errors — иерархия исключений dense_matrix

Три вида ошибок, все наследуются от MatrixError:
- MatrixInvalidArgumentError: размерность не является положительным целым
- MatrixOutOfRangeError: индекс элемента вне [0, rows) / [0, cols)
- MatrixLogicError: алгебраическое предусловие нарушено
  (разные размерности, несовместимое умножение, неквадратная матрица,
  нулевой определитель, операция над освобождённой матрицей)

Каждый вид дополнительно наследует встроенное исключение Python
(ValueError / IndexError / ArithmeticError), чтобы вызывающий код
мог ловить их привычным способом.
"""


class MatrixError(Exception):
    """Базовое исключение для всех ошибок dense_matrix."""

    pass


class MatrixInvalidArgumentError(MatrixError, ValueError):
    """
    Недопустимая размерность матрицы.

    Возникает при создании или изменении размера матрицы, если rows или cols
    не является положительным целым числом.
    """

    pass


class MatrixOutOfRangeError(MatrixError, IndexError):
    """Индекс элемента вне допустимого диапазона."""

    pass


class MatrixLogicError(MatrixError, ArithmeticError):
    """
    Нарушено алгебраическое предусловие операции.

    Сообщение всегда содержит фактические размерности или значение
    определителя.
    """

    pass
