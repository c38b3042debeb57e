"""
Tests for the cumulative integrator and the inverse sampler.
"""

import numpy as np
import pytest

from galaxy import InverseSampler, cumulative, kroupa
from galaxy.sampling import inverse_lerp, lerp, sigmoid


class TestCumulative:

    def test_constant_density_counts_samples(self):
        """f(x) = 1: entry i equals i + 1 (the sum is not scaled by step)."""
        cdf = cumulative(lambda x: 1.0, 0.0, 5.0, 1.0, False)
        assert cdf == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_step_controls_density_not_scale(self):
        cdf = cumulative(lambda x: 1.0, 0.0, 10.0, 2.0, False)
        assert cdf == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_upper_bound_excluded(self):
        samples = []
        cumulative(lambda x: samples.append(x) or 1.0, 0.0, 3.0, 1.0, False)
        assert samples == [0.0, 1.0, 2.0]

    def test_normalized_is_monotonic_and_ends_at_one(self):
        cdf = cumulative(lambda m: kroupa(m, 15.0), 10.0, 20.0, 0.5, True)
        assert np.all(np.diff(cdf) >= 0), "CDF should be non-decreasing"
        assert cdf[-1] == pytest.approx(1.0)
        assert cdf[0] > 0

    def test_empty_domain_gives_empty_table(self):
        assert cumulative(lambda x: 1.0, 5.0, 5.0, 1.0, True) == []
        assert cumulative(lambda x: 1.0, 6.0, 5.0, 1.0, False) == []

    @pytest.mark.parametrize("step", [0.0, -1.0])
    def test_non_positive_step_raises(self, step):
        with pytest.raises(ValueError, match="step"):
            cumulative(lambda x: 1.0, 0.0, 1.0, step, True)


class TestInverseSampler:

    @pytest.fixture
    def sampler(self):
        return InverseSampler([0.25, 0.5, 0.75, 1.0])

    def test_exact_match_uses_matching_index(self, sampler):
        assert sampler.sample(0.5) == 0.25
        assert sampler.sample(0.25) == 0.0

    def test_no_match_uses_insertion_point(self, sampler):
        assert sampler.sample(0.3) == 0.25
        assert sampler.sample(0.8) == 0.75
        assert sampler.sample(0.0) == 0.0

    def test_output_is_index_fraction(self, sampler):
        assert sampler.sample(1.0) == 0.75
        assert len(sampler) == 4

    def test_array_input(self, sampler):
        result = sampler.sample(np.array([0.1, 0.5, 0.9]))
        np.testing.assert_array_equal(result, [0.0, 0.25, 0.75])

    def test_empty_table_raises(self):
        with pytest.raises(ValueError):
            InverseSampler([])

    def test_histogram_converges_to_cdf(self):
        """Uniform draws land in each table bucket in proportion to its CDF increment."""
        cdf = cumulative(lambda m: kroupa(m, 2_000.0), 1_000.0, 5_000.0, 10.0, True)
        sampler = InverseSampler(cdf)
        n_table = len(sampler)

        draws = 200_000
        t = (np.arange(draws) + 0.5) / draws
        indices = np.rint(sampler.sample(t) * n_table).astype(np.int64)

        buckets = 10
        edges = np.linspace(0, n_table, buckets + 1).astype(int)
        table = np.concatenate([[0.0], sampler.cdf])
        for lo, hi in zip(edges[:-1], edges[1:]):
            observed = np.mean((indices >= lo) & (indices < hi))
            expected = table[hi] - table[lo]
            assert observed == pytest.approx(expected, abs=1e-3), f"bucket [{lo}, {hi})"


class TestHelpers:

    def test_lerp(self):
        assert lerp(10.0, 20.0, 0.25) == 12.5

    def test_inverse_lerp_clamps(self):
        assert inverse_lerp(10.0, 20.0, 15.0) == 0.5
        assert inverse_lerp(10.0, 20.0, 25.0) == 1.0
        assert inverse_lerp(10.0, 20.0, 5.0) == 0.0
        assert inverse_lerp(3.0, 3.0, 3.0) == 0.0

    def test_sigmoid(self):
        assert sigmoid(0.0) == 0.5
        assert sigmoid(50.0) == pytest.approx(1.0)
