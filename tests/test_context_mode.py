"""Tests for context-rounded arithmetic.

Each result is checked against the same formula evaluated step by step with
the context's own methods. Operands carry more digits than decimal32 keeps,
so rounding a raw cell before it is combined shows up as a different result.
"""

import decimal
from decimal import Decimal

import pytest

from algebra_lab.algorithms.square_root import sqrt
from algebra_lab.data.decimal_formats import get_context
from algebra_lab.linear.matrix import Matrix
from algebra_lab.linear.vector import Vector
from algebra_lab.scalars.complex_numbers import DecimalComplex
from algebra_lab.scalars.domains import DECIMAL, DECIMAL_COMPLEX

D = Decimal

A = [["1.0000005", "2.2222222"], ["3.3333333", "4.4444444"]]
B = [["0.0000001", "1.1111111"], ["1.0000005", "0.5555555"]]


@pytest.fixture
def ctx() -> decimal.Context:
    """decimal32: seven digits, half-even."""
    return get_context("decimal32")


def _cells(rows: list[list[str]]) -> list[list[Decimal]]:
    return [[D(e) for e in row] for row in rows]


class TestMatrixArithmetic:
    """Matrix operations under a rounding context."""

    def test_add_subtract(self, ctx: decimal.Context) -> None:
        """Cellwise ctx.add and ctx.subtract."""
        a, b = _cells(A), _cells(B)
        m, n = Matrix.of(A, DECIMAL), Matrix.of(B, DECIMAL)
        added = [[ctx.add(a[i][j], b[i][j]) for j in range(2)] for i in range(2)]
        subtracted = [[ctx.subtract(a[i][j], b[i][j]) for j in range(2)] for i in range(2)]
        assert m.add(n, context=ctx) == Matrix(added, DECIMAL)
        assert m.subtract(n, context=ctx) == Matrix(subtracted, DECIMAL)

    def test_multiply(self, ctx: decimal.Context) -> None:
        """Each cell is a rounded product sum."""
        a, b = _cells(A), _cells(B)
        expected = [
            [
                ctx.add(ctx.multiply(a[i][0], b[0][j]), ctx.multiply(a[i][1], b[1][j]))
                for j in range(2)
            ]
            for i in range(2)
        ]
        result = Matrix.of(A, DECIMAL).multiply(Matrix.of(B, DECIMAL), context=ctx)
        assert result == Matrix(expected, DECIMAL)

    def test_multiply_vector(self, ctx: decimal.Context) -> None:
        """Rows times the vector, rounded per step."""
        a = _cells(A)
        v = [D("1.0000005"), D("0.3333333")]
        expected = [ctx.add(ctx.multiply(row[0], v[0]), ctx.multiply(row[1], v[1])) for row in a]
        result = Matrix.of(A, DECIMAL).multiply_vector(Vector(v, DECIMAL), context=ctx)
        assert result == Vector(expected, DECIMAL)

    def test_scalar_multiply(self, ctx: decimal.Context) -> None:
        """Every cell is one rounded product."""
        scalar = D("3.0000001")
        expected = [[ctx.multiply(scalar, e) for e in row] for row in _cells(A)]
        assert Matrix.of(A, DECIMAL).scalar_multiply(scalar, context=ctx) == Matrix(
            expected, DECIMAL
        )

    def test_trace_rounds_only_the_sum(self, ctx: decimal.Context) -> None:
        """The first diagonal cell enters the sum unrounded."""
        m = Matrix.of([["1.0000005", "1"], ["2", "0.0000001"]], DECIMAL)
        assert m.trace(context=ctx) == ctx.add(D("1.0000005"), D("0.0000001"))
        assert m.trace(context=ctx) == D("1.000001")


class TestDeterminants:
    """Determinant algorithms under a rounding context."""

    def test_triangular_rounds_only_the_product(self, ctx: decimal.Context) -> None:
        """The diagonal product does not round a lone cell first."""
        m = Matrix.of([["1.0000005", "0"], ["0", "3"]], DECIMAL)
        assert m.determinant(context=ctx) == ctx.multiply(D("1.0000005"), D("3"))
        assert m.determinant(context=ctx) == D("3.000002")

    def test_triangular_three_by_three(self, ctx: decimal.Context) -> None:
        """Products are folded left to right."""
        m = Matrix.of([["1.0000005", "9", "9"], ["0", "3", "9"], ["0", "0", "0.3333333"]], DECIMAL)
        expected = ctx.multiply(ctx.multiply(D("1.0000005"), D("3")), D("0.3333333"))
        assert m.determinant(context=ctx) == expected

    def test_two_by_two(self, ctx: decimal.Context) -> None:
        """a11·a22 - a12·a21, every step rounded."""
        a = _cells(A)
        expected = ctx.subtract(ctx.multiply(a[0][0], a[1][1]), ctx.multiply(a[0][1], a[1][0]))
        assert Matrix.of(A, DECIMAL).determinant(context=ctx) == expected

    def test_sarrus_is_chained_left_to_right(self, ctx: decimal.Context) -> None:
        """Terms are added and subtracted one at a time, not grouped by sign."""
        rows = [["1", "0", "0.4"], ["0", "1", "0.4"], ["1", "1", "1234567"]]
        m = Matrix.of(rows, DECIMAL)
        assert m.rule_of_sarrus(context=ctx) == D("1234567")
        assert m.determinant(context=ctx) == D("1234567")

    def test_sarrus_matches_step_by_step(self, ctx: decimal.Context) -> None:
        """Every product and partial sum is rounded in formula order."""
        rows = [["1.0000005", "2.2222222", "3.3333333"],
                ["4.4444444", "0.5555555", "6.6666666"],
                ["7.7777777", "8.8888888", "0.9999999"]]
        (a11, a12, a13), (a21, a22, a23), (a31, a32, a33) = _cells(rows)
        mul = ctx.multiply
        expected = ctx.add(mul(mul(a11, a22), a33), mul(mul(a12, a23), a31))
        expected = ctx.add(expected, mul(mul(a13, a21), a32))
        expected = ctx.subtract(expected, mul(mul(a31, a22), a13))
        expected = ctx.subtract(expected, mul(mul(a32, a23), a11))
        expected = ctx.subtract(expected, mul(mul(a33, a21), a12))
        assert Matrix.of(rows, DECIMAL).rule_of_sarrus(context=ctx) == expected

    def test_leibniz_two_by_two(self, ctx: decimal.Context) -> None:
        """For n = 2 Leibniz reduces to the closed form."""
        a = _cells(A)
        expected = ctx.subtract(ctx.multiply(a[0][0], a[1][1]), ctx.multiply(a[1][0], a[0][1]))
        assert Matrix.of(A, DECIMAL).leibniz_formula(context=ctx) == expected


class TestNorms:
    """Vector and matrix norms under a rounding context."""

    def test_matrix_norms(self, ctx: decimal.Context) -> None:
        """Column, row, Frobenius and max norms from rounded steps."""
        a = _cells([["-1.0000005", "2.2222222"], ["3.3333333", "-4.4444444"]])
        m = Matrix(a, DECIMAL)
        absolute = [[ctx.abs(e) for e in row] for row in a]
        squares = [ctx.multiply(e, e) for row in a for e in row]
        frobenius_pow2 = squares[0]
        for square in squares[1:]:
            frobenius_pow2 = ctx.add(frobenius_pow2, square)

        assert m.max_abs_column_sum_norm(context=ctx) == max(
            ctx.add(absolute[0][j], absolute[1][j]) for j in range(2)
        )
        assert m.max_abs_row_sum_norm(context=ctx) == max(
            ctx.add(row[0], row[1]) for row in absolute
        )
        assert m.frobenius_norm_pow2(context=ctx) == frobenius_pow2
        assert m.frobenius_norm(context=ctx) == sqrt(frobenius_pow2)
        assert m.max_norm(context=ctx) == max(e for row in absolute for e in row)

    def test_vector_norms_and_distances(self, ctx: decimal.Context) -> None:
        """Distances are the rounded norms of the rounded difference."""
        x = [D("1.0000005"), D("-2.2222222"), D("3.3333333")]
        y = [D("0.0000001"), D("1.1111111"), D("-0.5555555")]
        a, b = Vector(x, DECIMAL), Vector(y, DECIMAL)
        difference = [ctx.subtract(p, q) for p, q in zip(x, y)]
        taxicab = ctx.add(ctx.add(ctx.abs(difference[0]), ctx.abs(difference[1])),
                          ctx.abs(difference[2]))
        squares = [ctx.multiply(e, e) for e in difference]
        pow2 = ctx.add(ctx.add(squares[0], squares[1]), squares[2])

        assert a.subtract(b, context=ctx) == Vector(difference, DECIMAL)
        assert a.taxicab_distance(b, context=ctx) == taxicab
        assert a.euclidean_distance_pow2(b, context=ctx) == pow2
        assert a.euclidean_distance(b, context=ctx) == sqrt(pow2)
        assert a.max_distance(b, context=ctx) == max(ctx.abs(e) for e in difference)
        assert a.euclidean_norm_pow2(context=ctx) == ctx.add(
            ctx.add(ctx.multiply(x[0], x[0]), ctx.multiply(x[1], x[1])),
            ctx.multiply(x[2], x[2]),
        )


class TestDecimalComplex:
    """Complex-decimal vectors and matrices under a rounding context."""

    def test_vector_add_and_dot_product(self, ctx: decimal.Context) -> None:
        """Parts are rounded per elementary step."""
        p = DecimalComplex.of("1.0000005", "2.2222222")
        q = DecimalComplex.of("0.3333333", "-1.0000005")
        a = Vector([p, q], DECIMAL_COMPLEX)
        b = Vector([q, p], DECIMAL_COMPLEX)
        assert a.add(b, context=ctx) == Vector(
            [p.add(q, ctx), q.add(p, ctx)], DECIMAL_COMPLEX
        )
        assert a.dot_product(b, context=ctx) == p.multiply(q, ctx).add(q.multiply(p, ctx), ctx)

    def test_matrix_determinant(self, ctx: decimal.Context) -> None:
        """The 2 x 2 formula with complex multiplications rounded."""
        p = DecimalComplex.of("1.0000005", "2.2222222")
        q = DecimalComplex.of("0.3333333", "-1.0000005")
        r = DecimalComplex.of("4.4444444", "0")
        s = DecimalComplex.of("0", "0.5555555")
        m = Matrix([[p, q], [r, s]], DECIMAL_COMPLEX)
        expected = p.multiply(s, ctx).subtract(q.multiply(r, ctx), ctx)
        assert m.determinant(context=ctx) == expected

    def test_trace(self, ctx: decimal.Context) -> None:
        """Only the sum of the diagonal is rounded."""
        p = DecimalComplex.of("1.0000005", "0.0000001")
        q = DecimalComplex.of("0.0000001", "1.0000005")
        m = Matrix([[p, DecimalComplex.ZERO], [DecimalComplex.ONE, q]], DECIMAL_COMPLEX)
        assert m.trace(context=ctx) == p.add(q, ctx)
        assert m.trace(context=ctx) == DecimalComplex.of("1.000001", "1.000001")


class TestModesAgree:
    """With enough digits a context reproduces exact results."""

    WIDE = decimal.Context(prec=100)

    @pytest.mark.parametrize(
        "rows",
        [
            A,
            [["1.5", "0"], ["0", "0.25"]],
            [["1.0000005", "2", "3"], ["4", "5.5", "6"], ["7", "8", "9.25"]],
            [
                ["1", "0", "2", "-1"],
                ["3", "0.5", "0", "5"],
                ["2", "1", "4", "-3"],
                ["1", "0", "5", "0"],
            ],
        ],
    )
    def test_matrix_operations(self, rows: list[list[str]]) -> None:
        """Exact and wide-context results coincide numerically."""
        m = Matrix.of(rows, DECIMAL)
        assert m.determinant(context=self.WIDE) == m.determinant()
        assert m.leibniz_formula(context=self.WIDE) == m.leibniz_formula()
        assert m.trace(context=self.WIDE) == m.trace()
        assert m.multiply(m, context=self.WIDE).equal_by_comparing_to(m.multiply(m))
        assert m.frobenius_norm_pow2(context=self.WIDE) == m.frobenius_norm_pow2()
        assert m.max_abs_row_sum_norm(context=self.WIDE) == m.max_abs_row_sum_norm()
