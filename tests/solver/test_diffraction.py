"""Tests for the diffraction limit solver."""

import pytest

from difflim.schemas import DiffractionParameters
from difflim.solver import diffraction
from difflim.solver.diffraction import (
    MAX_CURVE_POINTS,
    MAX_ITERATIONS,
    InvalidArgumentError,
    calculate,
    invert_mtf,
    sample_curve,
    solve,
)
from difflim.solver.models.optical import mtf


class TestValidation:
    """Out-of-domain inputs fail before any computation."""

    @pytest.mark.parametrize("f_number", [0, -1])
    def test_f_number_must_be_positive(self, f_number):
        with pytest.raises(InvalidArgumentError, match="f-number must be positive"):
            solve(f_number, 50)

    @pytest.mark.parametrize("contrast", [-1, 101])
    def test_contrast_range(self, contrast):
        with pytest.raises(InvalidArgumentError, match="Contrast percentage must be between 0 and 100"):
            solve(8, contrast)

    @pytest.mark.parametrize("wavelength", [0, -5])
    def test_wavelength_must_be_positive(self, wavelength):
        with pytest.raises(InvalidArgumentError, match="Wavelength must be positive"):
            solve(8, 50, wavelength)

    def test_f_number_checked_first(self):
        with pytest.raises(InvalidArgumentError, match="f-number"):
            solve(0, 150, -1)

    def test_contrast_checked_before_wavelength(self):
        with pytest.raises(InvalidArgumentError, match="Contrast"):
            solve(8, 150, -1)

    def test_nan_rejected(self):
        with pytest.raises(InvalidArgumentError):
            solve(float("nan"), 50)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            solve(-2, 50)


class TestBoundaries:
    """0% and 100% contrast are answered without bisection."""

    @pytest.mark.parametrize("f_number,wavelength", [(2.8, 450), (8, 520), (22, 650)])
    def test_full_contrast_at_zero_frequency(self, f_number, wavelength):
        result = solve(f_number, 100, wavelength)
        assert result.spatial_frequency == 0

    @pytest.mark.parametrize("f_number,wavelength", [(2.8, 450), (8, 520), (22, 650)])
    def test_zero_contrast_at_cutoff(self, f_number, wavelength):
        result = solve(f_number, 0, wavelength)
        assert result.spatial_frequency == result.cutoff_frequency

    def test_boundary_omits_bisection_fields(self):
        for contrast in (0, 100):
            result = solve(8, contrast)
            assert result.normalized_frequency is None
            assert result.iterations is None
            assert not result.solved
            assert set(result.to_dict()) == {"spatial_frequency", "cutoff_frequency"}

    def test_interior_has_bisection_fields(self):
        result = solve(8, 50)
        assert result.solved
        assert set(result.to_dict()) == {
            "spatial_frequency",
            "cutoff_frequency",
            "normalized_frequency",
            "iterations",
        }


class TestSolve:
    """Bisection results."""

    def test_f8_10pct_golden(self):
        result = solve(8, 10, 520)
        assert result.cutoff_frequency == 240.4
        assert result.spatial_frequency == 193.6
        assert abs(result.normalized_frequency - 0.805384) < 1e-5

    def test_f56_30pct_550nm_golden(self):
        result = solve(5.6, 30, 550)
        assert result.cutoff_frequency == 324.7
        assert result.spatial_frequency == 190.0
        assert abs(result.normalized_frequency - 0.585137) < 1e-5

    def test_f16_50pct_golden(self):
        result = solve(16, 50, 520)
        assert result.cutoff_frequency == 120.2
        assert result.spatial_frequency == 48.6
        assert abs(result.normalized_frequency - 0.403973) < 1e-5

    def test_default_wavelength(self):
        assert solve(8, 10) == solve(8, 10, 520)

    @pytest.mark.parametrize("f_number,wavelength", [(1.4, 400), (5.6, 550), (8, 520), (32, 700)])
    def test_cutoff_formula(self, f_number, wavelength):
        for contrast in (0, 25, 100):
            result = solve(f_number, contrast, wavelength)
            assert result.cutoff_frequency == round(1 / (wavelength * 1e-6 * f_number), 1)

    def test_monotonic_in_contrast(self):
        """Asking for more contrast never yields a higher frequency."""
        freqs = [solve(8, c, 520).spatial_frequency for c in range(0, 101, 5)]
        for i in range(len(freqs) - 1):
            assert freqs[i] >= freqs[i + 1]

    @pytest.mark.parametrize("contrast", [0.5, 1, 10, 33.3, 50, 75, 99, 99.9])
    def test_convergence(self, contrast):
        result = solve(8, contrast, 520)
        assert abs(mtf(result.normalized_frequency) - contrast / 100) < 1e-3
        assert 0 <= result.iterations <= MAX_ITERATIONS

    def test_rounding(self):
        result = solve(5.6, 30, 550)
        assert result.spatial_frequency == round(result.spatial_frequency, 1)
        assert result.normalized_frequency == round(result.normalized_frequency, 6)

    def test_calculate_matches_solve(self):
        params = DiffractionParameters(f_number=11, contrast_percent=20)
        assert calculate(params) == solve(11, 20, 520)


class TestInvertMTF:
    """Bisection internals."""

    def test_bracket_bounds_iterations(self):
        """A [0, 1] bracket halves below 1e-6 after 20 steps."""
        _, iterations = invert_mtf(0.1)
        assert iterations <= 20

    def test_early_exit_at_first_midpoint(self):
        """A target equal to MTF(0.5) is hit on the first midpoint."""
        u, iterations = invert_mtf(mtf(0.5))
        assert u == 0.5
        assert iterations == 0

    def test_root(self):
        u, _ = invert_mtf(0.25)
        assert abs(mtf(u) - 0.25) < 1e-5

    def test_iteration_cap_returns_last_midpoint(self, monkeypatch):
        """Running out of iterations is not an error."""
        monkeypatch.setattr(diffraction, "MAX_ITERATIONS", 3)
        assert invert_mtf(0.1) == (0.875, 3)

    def test_seed_kept_when_loop_does_not_run(self, monkeypatch):
        monkeypatch.setattr(diffraction, "TOLERANCE", 2.0)
        assert invert_mtf(0.3) == (0.5, 0)


class TestSampleCurve:
    """MTF curve sampling for one aperture."""

    def test_curve_spans_cutoff(self):
        curve = sample_curve(8, 520, points=11)
        assert curve.cutoff_frequency == 240.4
        assert curve.spatial_frequency[0] == 0.0
        assert curve.spatial_frequency[-1] == 240.4
        assert curve.mtf[0] == 1.0
        assert curve.mtf[-1] == 0.0
        assert len(curve.rows()) == 11

    def test_curve_validates_inputs(self):
        with pytest.raises(InvalidArgumentError, match="f-number"):
            sample_curve(0)
        with pytest.raises(InvalidArgumentError, match="Wavelength"):
            sample_curve(8, -1)

    def test_curve_point_count(self):
        with pytest.raises(ValueError):
            sample_curve(8, points=1)

    def test_curve_point_limit(self):
        assert len(sample_curve(8, points=MAX_CURVE_POINTS).mtf) == MAX_CURVE_POINTS
        with pytest.raises(ValueError, match="between 2 and 1001"):
            sample_curve(8, points=MAX_CURVE_POINTS + 1)
