import pytest

from startlights.calib.latency import LatencyCalibrator, asyncio_sampler, lower_median

OUTLIER_RUN = [1, 2, 1, 3, 50, 1, 2, 1, 2, 1]


def fixed(samples):
    return lambda n: list(samples)


def test_outlier_does_not_skew_median():
    # sorted: 1 1 1 1 1 2 2 2 3 50 -> lower of the two central values
    assert lower_median(OUTLIER_RUN) == 1.0
    cal = LatencyCalibrator(buffer_ms=0, sampler=fixed(OUTLIER_RUN))
    assert cal.calibrate() == 1.0


def test_odd_count_takes_the_middle():
    assert lower_median([5, 1, 3]) == 3.0


def test_buffer_is_added_on_top():
    cal = LatencyCalibrator(buffer_ms=8.0, sampler=fixed([4.0] * 10))
    assert cal.calibrate() == 12.0


def test_sampler_gets_the_trial_count():
    asked = []

    def sampler(n):
        asked.append(n)
        return [0.5] * n

    LatencyCalibrator(trials=12, buffer_ms=0, sampler=sampler).calibrate()
    assert asked == [12]


@pytest.mark.parametrize("error", [RuntimeError("no loop"), OSError("denied"), TimeoutError()])
def test_failed_sampling_falls_back_to_zero(error):
    def broken(n):
        raise error

    assert LatencyCalibrator(sampler=broken).calibrate() == 0.0


def test_empty_samples_fall_back_to_zero():
    assert LatencyCalibrator(sampler=fixed([])).calibrate() == 0.0


def test_rejects_too_few_trials_and_negative_buffer():
    with pytest.raises(ValueError):
        LatencyCalibrator(trials=9)
    with pytest.raises(ValueError):
        LatencyCalibrator(buffer_ms=-1)


def test_asyncio_sampler_measures_real_yields():
    samples = asyncio_sampler(10)
    assert len(samples) == 10
    assert all(s >= 0 for s in samples)
    assert LatencyCalibrator(sampler=asyncio_sampler).calibrate() >= 8.0
