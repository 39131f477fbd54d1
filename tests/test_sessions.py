import math

import pytest

from sea_scale.domain.measurements import QualitySnapshot, SessionKind, TareMethod
from sea_scale.domain.samples import LiveMetrics, SessionData
from sea_scale.errors import InvalidInputError
from sea_scale.session.continuous import ContinuousSession
from sea_scale.session.manual import ManualSession, quality_from_metrics
from sea_scale.session.tare import TareEstimator

from conftest import make_processed


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return 100.0 + self.calls


class TestContinuousSession:
    def test_stop_while_idle_returns_empty_snapshot(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        assert session.stop() == SessionData()

    def test_samples_ignored_while_idle(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        session.add_sample(make_processed(0.0))
        assert session.samples == []

    def test_scale_polled_at_cadence_with_hold(self, config, clock):
        reader = Counter()
        session = ContinuousSession(reader, config, clock)
        session.start()
        for t in (0.0, 100.0, 200.0, 300.0, 400.0):
            session.add_sample(make_processed(t))
        readings = [s.scale_reading for s in session.samples]
        assert readings == [101.0, 101.0, 102.0, 102.0, 103.0]
        assert reader.calls == 3

    def test_good_flag_uses_instantaneous_thresholds(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        session.start()
        session.add_sample(make_processed(0.0, a_z=0.5))   # above RMS gate, below instant gate
        session.add_sample(make_processed(10.0, a_z=0.9))
        session.add_sample(make_processed(20.0, roll=-7.0))
        assert [s.is_good for s in session.samples] == [True, False, False]

    def test_stop_summarises_session(self, config, clock):
        session = ContinuousSession(lambda: 50.0, config, clock)
        session.start()
        session.add_sample(make_processed(0.0, a_z=0.3))
        session.add_sample(make_processed(10.0, a_z=-0.4))
        session.add_sample(make_processed(20.0, a_z=1.0))
        session.add_sample(make_processed(30.0, a_z=0.0))
        clock.advance(2500.0)
        data = session.stop()
        assert session.active is False
        assert len(data.samples) == 4
        assert data.duration == pytest.approx(2.5)
        assert data.rms_az == pytest.approx(math.sqrt((0.09 + 0.16 + 1.0) / 4))
        assert data.percent_good == pytest.approx(75.0)
        assert data.good_count == 3

    def test_start_while_active_is_ignored(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        session.start()
        session.add_sample(make_processed(0.0))
        session.start()
        assert len(session.samples) == 1

    def test_config_frozen_for_running_session(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        session.start()
        session.update_config(t_az_instant=0.1)
        session.add_sample(make_processed(0.0, a_z=0.5))
        first = session.stop()
        assert first.samples[0].is_good is True

        session.start()
        session.add_sample(make_processed(0.0, a_z=0.5))
        assert session.stop().samples[0].is_good is False

    def test_progress(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        assert session.progress().sample_count == 0
        session.start()
        session.add_sample(make_processed(0.0))
        session.add_sample(make_processed(10.0, a_z=2.0))
        clock.advance(1500.0)
        progress = session.progress()
        assert progress.elapsed_s == pytest.approx(1.5)
        assert progress.sample_count == 2
        assert progress.good_count == 1

    def test_reset_keeps_session_active(self, config, clock):
        session = ContinuousSession(lambda: 1.0, config, clock)
        session.start()
        session.add_sample(make_processed(0.0))
        session.reset()
        assert session.active is True
        assert session.samples == []


class TestTareEstimator:
    def test_half_range_estimate(self, clock):
        tare = TareEstimator(clock)
        for value in (10.0, 12.0, 14.0):
            tare.add_tare_sample(value)
        estimate = tare.estimate()
        assert estimate.count == 3
        assert estimate.bias_median == 12.0
        assert estimate.tare_uncertainty95 == 2.0
        assert estimate.tare_sigma == 1.0
        assert estimate.method is TareMethod.HALF_RANGE

    def test_single_reading_has_zero_uncertainty(self, clock):
        tare = TareEstimator(clock)
        tare.add_tare_sample(10.0)
        estimate = tare.estimate()
        assert estimate.bias_median == 10.0
        assert estimate.tare_uncertainty95 == 0.0
        assert estimate.tare_sigma == 0.0

    def test_no_readings(self, clock):
        estimate = TareEstimator(clock).estimate()
        assert (estimate.count, estimate.bias_median, estimate.tare_uncertainty95) == (0, 0.0, 0.0)

    @pytest.mark.parametrize("bad", [-0.1, float("nan"), "abc", None])
    def test_rejects_invalid_readings(self, clock, bad):
        tare = TareEstimator(clock)
        with pytest.raises(InvalidInputError):
            tare.add_tare_sample(bad)
        assert tare.count == 0

    def test_zero_is_a_valid_tare_reading(self, clock):
        tare = TareEstimator(clock)
        tare.add_tare_sample(0.0)
        assert tare.count == 1

    def test_remove_and_clear(self, clock):
        tare = TareEstimator(clock)
        tare.add_tare_sample(1.0)
        tare.add_tare_sample(2.0)
        tare.remove_tare_sample(5)
        assert tare.count == 2
        tare.remove_tare_sample(0)
        assert [s.tare_reading for s in tare.samples] == [2.0]
        tare.clear()
        assert tare.count == 0

    def test_manual_estimate(self):
        estimate = TareEstimator.manual_estimate(3.0, 0.8)
        assert estimate.method is TareMethod.USER_ENTERED
        assert estimate.count == 0
        assert estimate.tare_sigma == pytest.approx(0.4)


class TestManualSession:
    def test_corrected_value_uses_locked_bias(self, clock):
        tare = TareEstimator(clock)
        tare.add_tare_sample(5.0)
        estimate = tare.estimate()

        session = ManualSession(SessionKind.BASE, clock)
        session.start_session(estimate.bias_median, 2.0)
        first = session.add_measurement(100.0)

        tare.add_tare_sample(9.0)
        second = session.add_measurement(100.0)

        assert first.corrected_value == 95.0
        assert first.bias == 5.0
        assert second.bias == 5.0
        assert second.tare_uncertainty95 == 2.0
        assert session.measurements[0].kind is SessionKind.BASE

    def test_add_requires_active_session(self, clock):
        session = ManualSession(SessionKind.FINAL, clock)
        with pytest.raises(InvalidInputError, match="final"):
            session.add_measurement(10.0)

    @pytest.mark.parametrize("bad", [0.0, -5.0, float("nan"), "x"])
    def test_rejects_invalid_readings(self, clock, bad):
        session = ManualSession(SessionKind.BASE, clock)
        session.start_session(0.0, 0.0)
        with pytest.raises(InvalidInputError):
            session.add_measurement(bad)
        assert session.count == 0

    def test_remove_out_of_bounds_is_noop(self, clock):
        session = ManualSession(SessionKind.BASE, clock)
        session.start_session(0.0, 0.0)
        session.add_measurement(10.0)
        session.remove_measurement(3)
        session.remove_measurement(-1)
        assert session.count == 1

    def test_stop_returns_measurements_and_goes_idle(self, clock):
        session = ManualSession(SessionKind.BASE, clock)
        session.start_session(1.0, 0.5)
        session.add_measurement(10.0)
        assert session.can_calculate()
        measurements = session.stop_session()
        assert len(measurements) == 1
        assert session.active is False
        with pytest.raises(InvalidInputError):
            session.add_measurement(10.0)

    def test_restart_clears_previous_measurements(self, clock):
        session = ManualSession(SessionKind.BASE, clock)
        session.start_session(1.0, 0.5)
        session.add_measurement(10.0)
        session.start_session(2.0, 0.5)
        assert session.count == 0
        assert session.bias == 2.0

    def test_quality_snapshot_from_metrics(self, clock):
        metrics = LiveMetrics(0.0, 0.0, 0.0, 0.1, 0.5, 0.6, 100.0, True, 0.8)
        snapshot = quality_from_metrics(metrics)
        assert snapshot == QualitySnapshot(quality_score=0.8, az_rms=0.1, roll_rms=0.5, pitch_rms=0.6)
