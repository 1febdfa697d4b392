"""Trigger order status and trigger criteria."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1


class CancelReason(str, enum.Enum):
    """Why a trigger order was cancelled."""

    USER_REQUESTED = "user_requested"
    LINKED_SIGNER_CHANGED = "linked_signer_changed"
    EXPIRED = "expired"
    ACCOUNT_HEALTH = "account_health"


class TriggerOrderStatusKind(enum.Enum):
    """Stages a trigger order goes through."""

    PENDING = "pending"
    TRIGGERING = "triggering"
    TRIGGERED = "triggered"
    CANCELLED = "cancelled"
    INTERNAL_ERROR = "internal_error"


_STATUS_BYTES = {kind: index for index, kind in enumerate(TriggerOrderStatusKind)}
_UNIT_STATUSES = frozenset(
    {TriggerOrderStatusKind.PENDING, TriggerOrderStatusKind.TRIGGERING}
)


@dataclass(frozen=True)
class TriggerOrderStatus:
    """Status of a trigger order, with the detail its kind carries.

    ``detail`` is the execute response for a triggered order, a
    :class:`CancelReason` for a cancelled one, an error message for an
    internal error, and ``None`` otherwise.
    """

    kind: TriggerOrderStatusKind
    detail: Any = None

    def __post_init__(self) -> None:
        kind = self.kind
        if kind in _UNIT_STATUSES:
            if self.detail is not None:
                raise ValueError(f"{kind.value} status carries no detail")
        elif kind is TriggerOrderStatusKind.CANCELLED:
            object.__setattr__(self, "detail", CancelReason(self.detail))
        elif kind is TriggerOrderStatusKind.INTERNAL_ERROR:
            if not isinstance(self.detail, str):
                raise ValueError("internal error status needs a message")
        elif self.detail is None:
            raise ValueError("triggered status needs an execute response")

    def pending(self) -> bool:
        """Return whether the order is still waiting to trigger."""
        return self.kind is TriggerOrderStatusKind.PENDING

    def byte(self) -> int:
        """Return the numeric code of this status."""
        return _STATUS_BYTES[self.kind]

    @classmethod
    def byte_from_str(cls, s: str) -> int:
        """Return the numeric code of the status named ``s``."""
        try:
            return _STATUS_BYTES[TriggerOrderStatusKind(s)]
        except ValueError:
            raise ValueError("Invalid status string") from None

    def data(self) -> bytes:
        """Return the status encoded as compact JSON."""
        if self.kind in _UNIT_STATUSES:
            value: Any = self.kind.value
        elif self.kind is TriggerOrderStatusKind.CANCELLED:
            value = {self.kind.value: self.detail.value}
        else:
            value = {self.kind.value: self.detail}
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode()

    @classmethod
    def from_status_data(cls, data: bytes) -> TriggerOrderStatus:
        """Decode a status produced by :meth:`data`."""
        value = json.loads(data)
        if isinstance(value, str):
            kind = TriggerOrderStatusKind(value)
            if kind not in _UNIT_STATUSES:
                raise ValueError(f"{value} status needs a detail")
            return cls(kind)
        if isinstance(value, dict) and len(value) == 1:
            ((name, detail),) = value.items()
            kind = TriggerOrderStatusKind(name)
            if kind in _UNIT_STATUSES:
                raise ValueError(f"{name} status carries no detail")
            return cls(kind, detail)
        raise ValueError("malformed trigger order status")


class TriggerCriteriaKind(enum.Enum):
    """Conditions on which a trigger order fires."""

    PRICE_ABOVE = "price_above"
    PRICE_BELOW = "price_below"
    LAST_PRICE_ABOVE = "last_price_above"
    LAST_PRICE_BELOW = "last_price_below"


_CRITERIA_BYTES = {kind: index for index, kind in enumerate(TriggerCriteriaKind)}


@dataclass(frozen=True)
class TriggerCriteria:
    """A trigger condition and its x18 price threshold."""

    kind: TriggerCriteriaKind
    value: int

    def __post_init__(self) -> None:
        if not _I128_MIN <= self.value <= _I128_MAX:
            raise ValueError(f"price out of i128 range: {self.value}")

    def byte(self) -> int:
        """Return the numeric code of the criterion."""
        return _CRITERIA_BYTES[self.kind]

    def price(self) -> str:
        """Return the threshold left-padded with zeros to 40 characters."""
        return f"{self.value:0>40}"