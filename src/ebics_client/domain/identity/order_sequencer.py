"""Per-partner order identifier sequence."""

from ebics_client.domain.shared.exceptions import ConfigurationError


class OrderSequencer:
    """
    Monotonic order-id counter owned by a Partner.

    The counter only moves forward: next() hands out the current value and
    increments, skip() jumps ahead. There is no way to decrement or reset
    it while the owning partner exists.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            msg = f"Order counter cannot be negative: {start}"
            raise ConfigurationError(msg)
        self._counter = start

    @property
    def current(self) -> int:
        return self._counter

    def peek(self) -> int:
        """Value the next call to next() will return."""
        return self._counter

    def next(self) -> int:
        value = self._counter
        self._counter += 1
        return value

    def skip(self, count: int) -> None:
        """Advance the counter by ``count`` without any protocol exchange.

        Used to resynchronize with a bank-side counter that advanced
        through another client instance.
        """
        if count < 0:
            msg = f"Cannot skip a negative number of order ids: {count}"
            raise ConfigurationError(msg, details={"count": count})
        self._counter += count

    def __repr__(self) -> str:
        return f"OrderSequencer(current={self._counter})"
