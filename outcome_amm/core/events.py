"""Outbound pool notifications and the queue the host drains."""

from collections import deque
from dataclasses import dataclass, fields
from typing import Iterator, Union

from outcome_amm.core.amount import Amount


def _encode(value):
    if isinstance(value, Amount):
        return str(value)
    if isinstance(value, tuple):
        return [_encode(item) for item in value]
    return value


class _Notification:
    """Serialisation shared by all notifications."""

    def to_dict(self) -> dict:
        payload = {f.name: _encode(getattr(self, f.name)) for f in fields(self)}
        payload["type"] = type(self).__name__
        return payload


@dataclass(frozen=True)
class PoolCreated(_Notification):
    market: str
    liquidity: Amount


@dataclass(frozen=True)
class SwapExecuted(_Notification):
    market: str
    from_option: int
    to_option: int
    amount_in: Amount
    amount_out: Amount


@dataclass(frozen=True)
class LiquidityAdded(_Notification):
    market: str
    provider: str
    amount: Amount
    shares: Amount


@dataclass(frozen=True)
class LiquidityRemoved(_Notification):
    market: str
    provider: str
    shares: Amount
    amounts: tuple[Amount, ...]


Notification = Union[PoolCreated, SwapExecuted, LiquidityAdded, LiquidityRemoved]


class Outbox:
    """FIFO of notifications awaiting delivery to the market context.

    The engine only appends after a successful commit; delivery, retries and
    ordering across pools belong to the host.
    """

    def __init__(self) -> None:
        self._pending: deque[Notification] = deque()

    def emit(self, notification: Notification) -> None:
        self._pending.append(notification)

    def drain(self) -> list[Notification]:
        """Remove and return every pending notification, oldest first."""
        drained = list(self._pending)
        self._pending.clear()
        return drained

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[Notification]:
        return iter(self._pending)
