"""Monotonic identifier generation within one process."""

import threading

from ulidkit.core.errors import RandomnessExhaustedError
from ulidkit.fields import timestamp as _timestamp
from ulidkit.identifier import Identifier
from ulidkit.internal.logging import get_logger
from ulidkit.utils.timestamp import now_millis

_MAX_STEP = (1 << 64) - 1


class MonotonicGenerator:
    """Identifiers that never sort before the previous one from this generator.

    A later millisecond draws fresh randomness. The same millisecond bumps
    the previous randomness by ``step`` instead. An earlier clock reading
    (skew) keeps the previous timestamp; an explicit earlier ``when`` is
    honoured and starts from fresh randomness.
    """

    def __init__(self, random_source=None, step=1, clock=now_millis):
        if isinstance(step, bool) or not isinstance(step, int):
            raise TypeError(f"step must be int, got {type(step).__name__}")
        if not 1 <= step <= _MAX_STEP:
            raise ValueError(f"step {step} outside 1..{_MAX_STEP}")
        self._random_source = random_source
        self._step = step
        self._clock = clock
        self._lock = threading.Lock()
        self._last = None
        self._log = get_logger()
        self.issued = 0
        self.incremented = 0
        self.exhausted = 0

    def generate(self, when=None, is_utc=False):
        explicit = when is not None
        millis = _timestamp.to_millis(when, is_utc) if explicit else self._clock()
        with self._lock:
            last = self._last
            last_millis = last.to_timestamp() if last is not None else None
            if last is None or millis > last_millis or (explicit and millis != last_millis):
                ident = Identifier.create(millis, self._random_source)
            else:
                ident = last.copy()
                if not ident.increment(self._step):
                    self.exhausted += 1
                    raise RandomnessExhaustedError(
                        "randomness exhausted within one millisecond",
                        context={"timestamp": last.to_timestamp(), "step": self._step},
                    )
                self.incremented += 1
                self._log.debug("Monotonic increment", timestamp=last.to_timestamp(), requested=millis)
            self._last = ident
            self.issued += 1
            return ident.copy()

    def generate_str(self, when=None, is_utc=False):
        return self.generate(when, is_utc).encode()

    def reset(self):
        with self._lock:
            self._last = None

    @property
    def last(self):
        return self._last.copy() if self._last is not None else None

    def stats(self):
        return {
            "issued": self.issued,
            "incremented": self.incremented,
            "exhausted": self.exhausted,
        }
