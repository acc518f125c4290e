"""Tests for Vector."""

from decimal import Decimal

import numpy as np
import pytest

from algebra_lab.data.decimal_formats import get_context
from algebra_lab.errors import (
    DomainMismatchError,
    IllegalArgumentError,
    IndexOutOfRangeError,
    NullArgumentError,
    SizeMismatchError,
)
from algebra_lab.linear.matrix import Matrix
from algebra_lab.linear.vector import Vector
from algebra_lab.scalars.complex_numbers import DecimalComplex, IntegerComplex
from algebra_lab.scalars.domains import DECIMAL, DECIMAL_COMPLEX, INTEGER, INTEGER_COMPLEX


class TestConstruction:
    """Tests for Vector construction."""

    def test_of_coerces(self) -> None:
        """of() coerces plain values into the domain."""
        v = Vector.of(["1.5", 2], "decimal")
        assert v.domain is DECIMAL
        assert v.elements() == (Decimal("1.5"), Decimal(2))

    def test_domain_by_name(self) -> None:
        """The constructor accepts a domain name as well as a domain."""
        v = Vector([1, 2], "integer")
        assert v.domain is INTEGER
        assert v == Vector([1, 2], INTEGER)

    def test_unknown_domain_name_raises(self) -> None:
        """Unknown names are rejected before any element is checked."""
        with pytest.raises(ValueError, match="rational"):
            Vector([1], "rational")

    def test_empty_raises(self) -> None:
        """Vectors have at least one element."""
        with pytest.raises(IllegalArgumentError, match="size > 0"):
            Vector([], INTEGER)

    def test_foreign_element_raises(self) -> None:
        """The constructor does not coerce."""
        with pytest.raises(DomainMismatchError):
            Vector([1, Decimal(2)], INTEGER)

    def test_none_element_raises(self) -> None:
        """None elements are rejected."""
        with pytest.raises(NullArgumentError):
            Vector([1, None], INTEGER)

    def test_immutable(self) -> None:
        """Vector should be immutable."""
        v = Vector.of([1, 2], INTEGER)
        with pytest.raises(AttributeError):
            v._elements = (3, 4)  # type: ignore[misc]

    def test_slots(self) -> None:
        """Vector should use slots (no __dict__)."""
        assert not hasattr(Vector.of([1], INTEGER), "__dict__")


class TestAccessors:
    """Tests for element access."""

    def test_one_based_index(self) -> None:
        """element(1) is the first element."""
        v = Vector.of([3, 4], INTEGER)
        assert v.element(1) == 3
        assert v.element(2) == 4

    @pytest.mark.parametrize("index", [0, 3, -1])
    def test_out_of_range_raises(self, index: int) -> None:
        """Indexes outside [1, size] raise, never wrap."""
        with pytest.raises(IndexOutOfRangeError) as excinfo:
            Vector.of([3, 4], INTEGER).element(index)
        assert excinfo.value.index == index
        assert excinfo.value.size == 2

    def test_entries(self) -> None:
        """entries maps 1-based indexes to elements."""
        assert Vector.of([3, 4], INTEGER).entries() == {1: 3, 2: 4}

    def test_len_and_iter(self) -> None:
        """len() and iteration follow the elements."""
        v = Vector.of([3, 4, 5], INTEGER)
        assert len(v) == v.size == 3
        assert list(v) == [3, 4, 5]

    def test_to_array(self) -> None:
        """to_array keeps the exact Python values."""
        array = Vector.of(["0.1", "0.2"], DECIMAL).to_array()
        assert array.dtype == np.dtype(object)
        assert array[0] == Decimal("0.1")


class TestArithmetic:
    """Tests for vector space operations."""

    def test_add_subtract(self) -> None:
        """Elementwise addition and subtraction."""
        a = Vector.of([1, 2], INTEGER)
        b = Vector.of([3, 5], INTEGER)
        assert a.add(b) == Vector.of([4, 7], INTEGER)
        assert b.subtract(a) == Vector.of([2, 3], INTEGER)

    def test_scalar_multiply_and_negate(self) -> None:
        """Scaling and negation."""
        v = Vector.of([3, -4], INTEGER)
        assert v.scalar_multiply(2) == Vector.of([6, -8], INTEGER)
        assert v.negate() == Vector.of([-3, 4], INTEGER)
        assert v.negate() == v.scalar_multiply(-1)

    def test_scalar_of_other_domain_raises(self) -> None:
        """Scalars must belong to the vector's domain."""
        with pytest.raises(DomainMismatchError):
            Vector.of([1], INTEGER).scalar_multiply(Decimal(2))  # type: ignore[arg-type]

    def test_dot_product(self) -> None:
        """[1, 2, 3] · [4, 5, 6] = 32."""
        assert Vector.of([1, 2, 3], INTEGER).dot_product(Vector.of([4, 5, 6], INTEGER)) == 32

    def test_dyadic_product(self) -> None:
        """Outer product [1, 2] ⊗ [3, 4]."""
        m = Vector.of([1, 2], INTEGER).dyadic_product(Vector.of([3, 4], INTEGER))
        assert isinstance(m, Matrix)
        assert m == Matrix.of([[3, 4], [6, 8]], INTEGER)

    def test_orthogonal(self) -> None:
        """Orthogonality is a zero dot product."""
        assert Vector.of([1, 0], INTEGER).orthogonal_to(Vector.of([0, 1], INTEGER))
        assert not Vector.of([1, 1], INTEGER).orthogonal_to(Vector.of([1, 0], INTEGER))
        assert Vector.of(["1.0", "-1"], DECIMAL).orthogonal_to(Vector.of(["2", "2.00"], DECIMAL))

    def test_size_mismatch_raises(self) -> None:
        """Operands must have equal sizes."""
        with pytest.raises(SizeMismatchError) as excinfo:
            Vector.of([1, 2], INTEGER).add(Vector.of([1, 2, 3], INTEGER))
        assert excinfo.value.expected == 2
        assert excinfo.value.actual == 3

    def test_domain_mismatch_raises(self) -> None:
        """Operands must share the domain."""
        with pytest.raises(DomainMismatchError):
            Vector.of([1], INTEGER).add(Vector.of([1], DECIMAL))  # type: ignore[arg-type]

    def test_null_checked_before_everything(self) -> None:
        """None operands raise NullArgumentError."""
        with pytest.raises(NullArgumentError):
            Vector.of([1], INTEGER).dot_product(None)  # type: ignore[arg-type]
        with pytest.raises(NullArgumentError):
            Vector.of([1], INTEGER).orthogonal_to(None)  # type: ignore[arg-type]

    def test_operators(self) -> None:
        """Python operators delegate to the named operations."""
        a = Vector.of([1, 2], INTEGER)
        b = Vector.of([3, 4], INTEGER)
        assert a + b == a.add(b)
        assert a - b == a.subtract(b)
        assert -a == a.negate()
        assert 2 * a == a * 2 == a.scalar_multiply(2)
        assert a @ b == 11


class TestNorms:
    """Tests for norms and distances."""

    def test_three_four(self) -> None:
        """[3, 4]: taxicab 7, squared Euclidean 25, Euclidean 5, max 4."""
        v = Vector.of([3, 4], INTEGER)
        assert v.taxicab_norm() == 7
        assert v.euclidean_norm_pow2() == 25
        assert v.euclidean_norm() == Decimal(5)
        assert v.max_norm() == 4

    def test_negative_elements(self) -> None:
        """Norms use absolute values."""
        v = Vector.of([-3, -4], INTEGER)
        assert v.taxicab_norm() == 7
        assert v.max_norm() == 4

    def test_euclidean_norm_approximation(self) -> None:
        """|[1, 1]| ≈ sqrt(2)."""
        norm = Vector.of([1, 1], INTEGER).euclidean_norm()
        assert abs(norm * norm - 2) <= Decimal("1E-10")

    def test_norm_pow2_equals_self_dot_product(self) -> None:
        """For real domains Σ|e|² = v · v."""
        v = Vector.of(["1.5", "-2", "0.25"], DECIMAL)
        assert v.euclidean_norm_pow2() == v.dot_product(v)

    def test_zero_vector_norms(self) -> None:
        """All norms vanish exactly on the zero vector."""
        zero = Vector.of([0, 0, 0], INTEGER)
        assert zero.taxicab_norm() == 0
        assert zero.euclidean_norm() == 0
        assert zero.max_norm() == 0
        non_zero = Vector.of([0, 1, 0], INTEGER)
        assert non_zero.taxicab_norm() > 0
        assert non_zero.euclidean_norm() > 0
        assert non_zero.max_norm() > 0

    def test_gaussian_integer_norms(self) -> None:
        """Complex elements use their modulus."""
        v = Vector.of([(3, 4), (0, -2)], INTEGER_COMPLEX)
        assert v.euclidean_norm_pow2() == 29
        assert v.taxicab_norm() == Decimal(7)
        assert v.max_norm() == Decimal(5)

    def test_decimal_complex_norm(self) -> None:
        """|[3 + 4i]| = 5."""
        v = Vector.of([DecimalComplex.of(3, 4)], DECIMAL_COMPLEX)
        assert v.euclidean_norm_pow2() == Decimal(25)
        assert abs(v.euclidean_norm() - 5) <= Decimal("1E-10")

    @pytest.mark.parametrize(
        "values_a,values_b",
        [([1, 2, 3], [4, -6, 0]), ([0, 0], [5, 12]), ([-7], [7])],
    )
    def test_distances_are_norms_of_differences(
        self, values_a: list[int], values_b: list[int]
    ) -> None:
        """Every distance equals the norm of the difference."""
        a = Vector.of(values_a, INTEGER)
        b = Vector.of(values_b, INTEGER)
        difference = a.subtract(b)
        assert a.taxicab_distance(b) == difference.taxicab_norm()
        assert a.euclidean_distance_pow2(b) == difference.euclidean_norm_pow2()
        assert a.euclidean_distance(b) == difference.euclidean_norm()
        assert a.max_distance(b) == difference.max_norm()

    def test_distance_size_mismatch(self) -> None:
        """Distances check sizes like subtract."""
        with pytest.raises(SizeMismatchError):
            Vector.of([1], INTEGER).taxicab_distance(Vector.of([1, 2], INTEGER))


class TestContextMode:
    """Tests for context-rounded vector operations."""

    def test_add_rounds(self) -> None:
        """decimal32 rounds sums to 7 digits."""
        a = Vector.of(["1234567"], DECIMAL)
        b = Vector.of(["0.4"], DECIMAL)
        assert a.add(b, context=get_context("decimal32")) == Vector.of(["1234567"], DECIMAL)
        assert a.add(b) == Vector.of(["1234567.4"], DECIMAL)

    def test_dot_product_rounds(self) -> None:
        """Products are rounded before summing."""
        v = Vector.of(["1.234567"], DECIMAL)
        assert v.dot_product(v, context=get_context("decimal32")) == Decimal("1.524156")
        assert v.dot_product(v) == Decimal("1.524155677489")

    def test_context_on_integer_vector_raises(self) -> None:
        """Integer vectors never round."""
        v = Vector.of([1], INTEGER)
        with pytest.raises(IllegalArgumentError):
            v.add(v, context=get_context("decimal64"))


class TestEquality:
    """Tests for equality and numeric comparison."""

    def test_equal_and_hash(self) -> None:
        """Equal vectors hash equally."""
        assert Vector.of([1, 2], INTEGER) == Vector.of([1, 2], INTEGER)
        assert hash(Vector.of([1, 2], INTEGER)) == hash(Vector.of([1, 2], INTEGER))
        assert Vector.of([1, 2], INTEGER) != Vector.of([2, 1], INTEGER)

    def test_different_domains_differ(self) -> None:
        """Same numbers in different domains are different vectors."""
        assert Vector.of([1], INTEGER) != Vector.of([1], DECIMAL)

    def test_compare_ignores_scale(self) -> None:
        """equal_by_comparing_to ignores trailing zeros of complex parts."""
        a = Vector.of([("1.0", "0")], DECIMAL_COMPLEX)
        b = Vector.of([("1.00", "0.0")], DECIMAL_COMPLEX)
        assert a != b
        assert a.equal_by_comparing_to(b)

    def test_decimal_scale_counts(self) -> None:
        """Real decimals follow the same scale-sensitive equality as complex ones."""
        a = Vector.of(["1.0", "2"], DECIMAL)
        b = Vector.of(["1.00", "2"], DECIMAL)
        assert a != b
        assert a.equal_by_comparing_to(b)
        assert a == Vector.of(["1.0", "2"], DECIMAL)
        assert hash(a) == hash(Vector.of(["1.0", "2"], DECIMAL))
        assert len({a, b}) == 2

    def test_compare_different_sizes(self) -> None:
        """Different sizes never compare equal."""
        assert not Vector.of([1], INTEGER).equal_by_comparing_to(Vector.of([1, 1], INTEGER))

    def test_repr(self) -> None:
        """repr names the domain and the elements."""
        assert repr(Vector.of([1, 2], INTEGER)) == "Vector[integer]([1, 2])"

    def test_integer_complex_vector_equality(self) -> None:
        """Gaussian-integer vectors compare part by part."""
        expected = Vector([IntegerComplex(1, 2)], INTEGER_COMPLEX)
        assert Vector.of([(1, 2)], INTEGER_COMPLEX) == expected
