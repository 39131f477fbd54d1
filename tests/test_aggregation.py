import math

import pytest

from sea_scale.domain.measurements import ManualMeasurement, QualitySnapshot, SessionKind, SessionResult
from sea_scale.domain.samples import SessionData
from sea_scale.measurement.continuous import ResultAggregator, motion_corrected
from sea_scale.measurement.manual import SessionCalculator, confidence_from_count
from sea_scale.measurement.ratio import RatioAggregator
from sea_scale.measurement.robust import central_estimate
from sea_scale.session.continuous import ContinuousSession
from sea_scale.session.manual import ManualSession

from conftest import G, make_processed, make_session_samples


def manual_measurements(values, bias=0.0, unc95=0.0, kind=SessionKind.BASE, quality=None):
    session = ManualSession(kind, clock=lambda: 0.0)
    session.start_session(bias, unc95)
    for v in values:
        session.add_measurement(v + bias, quality)
    return session.stop_session()


class TestCentralEstimate:
    def test_trimmed_mean_with_enough_values(self):
        est = central_estimate([94, 95, 95, 96, 96, 97, 97, 98, 99, 999])
        assert est.n_trim == 8
        assert est.fixed_value == pytest.approx(773 / 8)
        assert est.used_median_fallback is False

    def test_median_for_small_sets(self):
        est = central_estimate([10.0, 30.0])
        assert est.fixed_value == 20.0

    def test_median_fallback_when_outlier_survives_trim(self):
        est = central_estimate([95, 96, 94, 97, 999])
        assert est.used_median_fallback is True
        assert est.fixed_value == 96


class TestResultAggregator:
    def test_empty_session(self, config):
        result = ResultAggregator(config).compute(SessionData())
        assert result.fixed_measurement == 0.0
        assert result.is_reliable is False
        assert result.notes

    def test_static_session_is_reliable(self, config):
        session = SessionData(samples=make_session_samples([100.0] * 10), percent_good=100.0)
        result = ResultAggregator(config).compute(session)
        assert result.fixed_measurement == pytest.approx(100.0)
        assert result.error_band == 0.0
        assert result.confidence == pytest.approx(0.9)
        assert result.is_reliable is True
        assert result.diagnostics.n_good == 10

    def test_scale_noise_uses_sample_std(self, config):
        session = SessionData(samples=make_session_samples([99.0, 100.0, 101.0]))
        result = ResultAggregator(config).compute(session, motion_correction=False)
        assert result.fixed_measurement == pytest.approx(100.0)
        assert result.diagnostics.sigma_scale == pytest.approx(1.0)
        assert result.error_band == pytest.approx(2.0)
        assert result.relative_error == pytest.approx(2.0)

    def test_motion_correction_and_motion_uncertainty(self, config):
        session = SessionData(samples=make_session_samples([100.0] * 3, a_z=0.5), rms_az=0.5)
        result = ResultAggregator(config).compute(session)
        expected = 100.0 * G / (G + 0.5)
        assert result.fixed_measurement == pytest.approx(expected)
        assert result.diagnostics.sigma_motion == pytest.approx(expected * 2.0 * 0.5 / G)
        assert result.error_band == pytest.approx(2 * result.diagnostics.sigma_total)

    def test_correction_skipped_when_denominator_is_zero(self):
        assert motion_corrected(100.0, -G, G) == 100.0
        assert motion_corrected(100.0, 0.0, G) == 100.0

    def test_bias_and_plausibility_filter(self, config):
        session = SessionData(samples=make_session_samples([0.0, 100001.0, 110.0, 110.0, 110.0]))
        result = ResultAggregator(config).compute(session, bias=10.0)
        assert result.diagnostics.n_total == 3
        assert result.fixed_measurement == pytest.approx(100.0)

    def test_falls_back_to_all_samples_with_few_good(self, config):
        good = [True, True, False, False, False]
        session = SessionData(samples=make_session_samples([100.0, 100.0, 120.0, 120.0, 120.0], good=good))
        result = ResultAggregator(config).compute(session, motion_correction=False)
        assert result.diagnostics.n_good == 2
        assert result.fixed_measurement == pytest.approx(112.0)
        assert result.is_reliable is False
        assert any("good samples" in n for n in result.notes)

    def test_unreliable_result_is_still_returned(self, config):
        session = SessionData(samples=make_session_samples([100.0, 100.0, 100.0]), rms_az=1.0)
        result = ResultAggregator(config).compute(session, motion_correction=False)
        assert result.fixed_measurement == pytest.approx(100.0)
        assert result.is_reliable is False

    def test_stopped_session_aggregates_deterministically(self, config, clock):
        readings = iter([100.0, 101.5, 99.2, 100.7, 100.1, 99.8])
        session = ContinuousSession(read_scale=lambda: next(readings), config=config, clock=clock)
        session.start()
        for i, a_z in enumerate([0.1, -0.2, 0.05, 0.3, -0.1, 0.0]):
            session.add_sample(make_processed(i * 200.0, a_z=a_z, roll=1.0, pitch=-0.5))
        clock.advance(1200.0)
        data = session.stop()
        assert len(data.samples) == 6

        aggregator = ResultAggregator(config)
        first = aggregator.compute(data, bias=1.0)
        second = aggregator.compute(data, bias=1.0)
        assert first == second
        assert first.fixed_measurement > 0

    def test_negative_net_readings_kept_without_motion_correction(self, config):
        session = SessionData(samples=make_session_samples([5.0, 5.0, 5.0]))
        result = ResultAggregator(config).compute(session, bias=10.0, motion_correction=False)
        assert result.fixed_measurement == pytest.approx(-5.0)
        assert result.diagnostics.n_total == 3
        assert result.is_reliable is False

    def test_non_positive_corrected_readings_dropped(self, config):
        session = SessionData(samples=make_session_samples([5.0, 5.0, 5.0]))
        result = ResultAggregator(config).compute(session, bias=10.0)
        assert result.fixed_measurement == 0.0
        assert result.notes == ["No valid scale readings"]


class TestSessionCalculator:
    def test_outlier_trimmed_in_larger_session(self):
        values = [94, 95, 95, 96, 96, 97, 97, 98, 99, 999]
        result = SessionCalculator().compute(manual_measurements(values, bias=5.0, unc95=2.0))
        assert result.n_total == 10
        assert result.n_trim == 8
        assert result.fixed_value == pytest.approx(773 / 8)
        assert result.mean == pytest.approx(773 / 8)
        assert result.bias == 5.0
        assert result.tare_sigma == 1.0
        assert result.k95 == pytest.approx(2.365)
        expected_se = result.std_dev / math.sqrt(8)
        assert result.std_error == pytest.approx(expected_se)
        assert result.total_uncertainty_1sigma == pytest.approx(math.sqrt(expected_se ** 2 + 1.0))
        assert result.error_band95 == pytest.approx(2.365 * result.total_uncertainty_1sigma)
        assert result.confidence == 0.85

    def test_small_session_with_outlier_uses_median(self):
        result = SessionCalculator().compute(manual_measurements([95, 96, 94, 97, 999]))
        assert result.fixed_value == 96
        assert "No tare uncertainty specified" in result.notes

    def test_single_measurement(self):
        result = SessionCalculator().compute(manual_measurements([50.0], unc95=1.0))
        assert result.fixed_value == 50.0
        assert result.std_dev == 0.0
        assert result.k95 == 2.0
        assert result.confidence == 0.3
        assert result.error_band95 == pytest.approx(2.0 * 0.5)
        assert any("Single measurement" in n for n in result.notes)

    def test_empty(self):
        result = SessionCalculator().compute([], SessionKind.FINAL)
        assert result.kind is SessionKind.FINAL
        assert result.fixed_value == 0.0
        assert result.notes == ["No measurements available"]

    @pytest.mark.parametrize("n, expected", [(0, 0.3), (1, 0.3), (2, 0.5), (3, 0.7), (6, 0.85), (10, 0.95), (40, 0.95)])
    def test_confidence_steps(self, n, expected):
        assert confidence_from_count(n) == expected

    def test_quality_scales_confidence(self):
        quality = QualitySnapshot(quality_score=0.5)
        result = SessionCalculator().compute(manual_measurements([10.0, 10.1, 9.9], quality=quality))
        assert result.confidence == pytest.approx(0.7 * 0.75)


def session_result(fixed, sigma, n_trim, unc95=0.0, kind=SessionKind.BASE):
    return SessionResult(kind=kind, fixed_value=fixed, total_uncertainty_1sigma=sigma,
                         n_trim=n_trim, tare_uncertainty95=unc95)


class TestRatioAggregator:
    def test_zero_base_is_guarded(self):
        result = RatioAggregator().compute(session_result(0.0, 1.0, 5), session_result(10.0, 1.0, 5))
        assert result.ratio == 0.0
        assert result.percent == 0.0
        assert math.isfinite(result.sigma_ratio_1sigma)
        assert any("W_base" in n for n in result.notes)

    def test_percent_change_and_propagation(self):
        base = session_result(100.0, 1.0, 5, unc95=1.0)
        final = session_result(90.0, 1.0, 8, unc95=1.0, kind=SessionKind.FINAL)
        result = RatioAggregator().compute(base, final)
        assert result.ratio == pytest.approx(0.1)
        assert result.percent == pytest.approx(10.0)
        assert result.sigma_ratio_1sigma == pytest.approx(math.sqrt(0.009 ** 2 + 0.01 ** 2))
        assert result.n_eff == 5
        assert result.k95 == pytest.approx(2.776)
        assert result.error_band95_percent == pytest.approx(100 * 2.776 * result.sigma_ratio_1sigma)
        assert result.notes == []

    def test_advisory_notes(self):
        result = RatioAggregator().compute(session_result(100.0, 1.0, 2), session_result(95.0, 1.0, 1))
        assert "Low base sample count (2)" in result.notes
        assert "Low final sample count (1)" in result.notes
        assert "Low effective sample count (1) for k-factor" in result.notes
        assert "No tare uncertainty specified for either session" in result.notes
