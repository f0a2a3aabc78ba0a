"""Throughput estimation from a bounded window of timing samples."""

from collections import deque

DEFAULT_ALPHA = 0.1


class SampleWindow:
    """Fixed-capacity history of (dt, dn) samples, oldest evicted first.

    Usage:
        window = SampleWindow(50)
        window.append(0.04, 1000)
        rate = ema_rate(window)
    """

    def __init__(self, capacity=50):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._samples = deque(maxlen=capacity)

    @property
    def capacity(self):
        return self._samples.maxlen

    def append(self, dt, dn):
        self._samples.append((float(dt), int(dn)))

    def resize(self, capacity):
        """Change capacity, keeping the newest samples."""
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if capacity != self._samples.maxlen:
            self._samples = deque(self._samples, maxlen=capacity)

    def clear(self):
        self._samples.clear()

    @property
    def times(self):
        return [dt for dt, _ in self._samples]

    @property
    def counts(self):
        return [dn for _, dn in self._samples]

    def __iter__(self):
        return iter(self._samples)

    def __len__(self):
        return len(self._samples)


def ema_rate(window, alpha=DEFAULT_ALPHA):
    """Exponential moving average of per-sample rates, in items/second.

    Seeded with the oldest sample's rate and folded forward so newer samples
    weigh more. Samples with dt <= 0 have no defined rate and are skipped.
    Returns 0.0 when no sample is usable.
    """
    rate = None
    for dt, dn in window:
        if dt <= 0:
            continue
        r = dn / dt
        rate = r if rate is None else alpha * r + (1.0 - alpha) * rate
    return 0.0 if rate is None else rate


def sma_rate(window):
    """Total items over total time across the window, in items/second."""
    dt_sum = sum(window.times)
    if dt_sum <= 0:
        return 0.0
    return sum(window.counts) / dt_sum


def estimate(window, method='ema', alpha=DEFAULT_ALPHA):
    if method == 'ema':
        return ema_rate(window, alpha)
    if method == 'sma':
        return sma_rate(window)
    raise ValueError(f"Unknown rate estimator '{method}' (expected 'ema' or 'sma')")
