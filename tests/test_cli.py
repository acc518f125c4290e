"""Tests for the algebra-lab command line."""

import pytest
from typer.testing import CliRunner

from algebra_lab import __version__
from algebra_lab.cli import app, parse_matrix
from algebra_lab.scalars.complex_numbers import IntegerComplex
from algebra_lab.scalars.domains import DECIMAL, INTEGER, INTEGER_COMPLEX

runner = CliRunner()


class TestGlobalOptions:
    """Tests for the app callback."""

    def test_version(self) -> None:
        """--version prints the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestInfoAndCompare:
    """Tests for the format listing commands."""

    def test_info_lists_formats(self) -> None:
        """Every decimal format appears."""
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        for name in ("DECIMAL32", "DECIMAL64", "DECIMAL128", "UNLIMITED"):
            assert name in result.output

    def test_compare_default_formats(self) -> None:
        """compare shows the three IEEE decimal formats."""
        result = runner.invoke(app, ["compare"])
        assert result.exit_code == 0
        assert "DECIMAL32" in result.output
        assert "DECIMAL128" in result.output

    def test_compare_square_roots(self) -> None:
        """Each column holds the root in that format."""
        result = runner.invoke(app, ["compare", "decimal32", "decimal64", "--value", "2"])
        assert result.exit_code == 0
        assert "1.41421" in result.output

    def test_compare_unknown_format(self) -> None:
        """Unknown formats exit with an error."""
        result = runner.invoke(app, ["compare", "decimal7"])
        assert result.exit_code == 1
        assert "Unknown decimal format" in result.output


class TestSqrt:
    """Tests for the sqrt command."""

    def test_perfect_square(self) -> None:
        """sqrt 16 is exactly 4."""
        result = runner.invoke(app, ["sqrt", "16"])
        assert result.exit_code == 0
        assert result.output.strip() == "4"

    def test_decimal32(self) -> None:
        """Steps rounded to seven digits."""
        result = runner.invoke(app, ["sqrt", "2", "--format", "decimal32"])
        assert result.exit_code == 0
        assert result.output.strip().startswith("1.41421")

    @pytest.mark.parametrize("value", ["-1", "abc"])
    def test_invalid_radicand(self, value: str) -> None:
        """Negative or non-numeric radicands fail."""
        result = runner.invoke(app, ["sqrt", "--", value])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unlimited_format_rejected(self) -> None:
        """Heron steps need a bounded precision."""
        result = runner.invoke(app, ["sqrt", "2", "--format", "unlimited"])
        assert result.exit_code == 1


class TestInspect:
    """Tests for the inspect command."""

    def test_integer_matrix(self) -> None:
        """Determinant and trace of [[1, 2], [3, 4]]."""
        result = runner.invoke(app, ["inspect", "1,2;3,4"])
        assert result.exit_code == 0
        assert "determinant" in result.output
        assert "-2" in result.output

    def test_rounded_decimal_matrix(self) -> None:
        """--format rounds every step."""
        result = runner.invoke(
            app,
            ["inspect", "1.234567,2;3,4.000001", "--domain", "decimal", "--format", "decimal32"],
        )
        assert result.exit_code == 0
        assert "-1.061731" in result.output

    def test_gaussian_matrix(self) -> None:
        """Complex cells are written re:im."""
        result = runner.invoke(app, ["inspect", "1:1,2;0:1,1", "--domain", "integer-complex"])
        assert result.exit_code == 0
        assert "1-1i" in result.output

    def test_ragged_matrix(self) -> None:
        """Ragged input exits with an error."""
        result = runner.invoke(app, ["inspect", "1,2;3"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_domain(self) -> None:
        """Unknown domains exit with an error."""
        result = runner.invoke(app, ["inspect", "1", "--domain", "quaternion"])
        assert result.exit_code == 1
        assert "Unknown domain" in result.output


class TestRandom:
    """Tests for the random command."""

    @pytest.mark.parametrize("domain", ["integer", "decimal", "integer-complex"])
    def test_domains(self, domain: str) -> None:
        """Every generated domain is summarized."""
        result = runner.invoke(app, ["random", "--size", "3", "--domain", domain, "--seed", "1"])
        assert result.exit_code == 0
        assert "Summary" in result.output

    def test_unsupported_domain(self) -> None:
        """There is no decimal-complex generator."""
        result = runner.invoke(app, ["random", "--domain", "decimal-complex"])
        assert result.exit_code == 1


class TestParseMatrix:
    """Tests for parse_matrix."""

    def test_integer(self) -> None:
        """Rows split on ';', cells on ','."""
        assert parse_matrix("1, 2; 3, 4", INTEGER).rows() == {1: {1: 1, 2: 2}, 2: {1: 3, 2: 4}}

    def test_decimal(self) -> None:
        """Decimal cells keep their digits."""
        m = parse_matrix("0.10,2", DECIMAL)
        assert str(m.element(1, 1)) == "0.10"

    def test_complex(self) -> None:
        """re:im cells become complex numbers."""
        m = parse_matrix("1:-2", INTEGER_COMPLEX)
        assert m.element(1, 1) == IntegerComplex(1, -2)
