"""Data models for receipt item extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


def _to_pixels(value: Any) -> float:
    """Coerce a bounding-box coordinate, treating anything unusable as 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return number


@dataclass(frozen=True)
class Bounding:
    """Pixel bounding box of an OCR fragment."""

    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @classmethod
    def from_dict(cls, data: Any) -> Bounding:
        if not isinstance(data, dict):
            return cls()
        return cls(
            top=_to_pixels(data.get("top")),
            left=_to_pixels(data.get("left")),
            width=_to_pixels(data.get("width")),
            height=_to_pixels(data.get("height")),
        )


@dataclass(frozen=True)
class OcrFragment:
    """One recognized text span plus its bounding box."""

    text: str
    bounding: Bounding = field(default_factory=Bounding)

    @classmethod
    def from_dict(cls, data: Any) -> OcrFragment:
        """Build a fragment from the OCR collaborator's JSON shape.

        Never raises: a missing text becomes "" and a missing or malformed
        bounding box becomes all zeros.
        """
        if not isinstance(data, dict):
            return cls(text="")
        text = data.get("text")
        return cls(
            text=text if isinstance(text, str) else "",
            bounding=Bounding.from_dict(data.get("bounding")),
        )


@dataclass(frozen=True)
class ExtractedFields:
    """Name/quantity/price derived from one candidate group.

    A price of 0 means the price could not be resolved.
    """

    name: str
    qty: Decimal = Decimal("1")
    price: Decimal = Decimal("0")


@dataclass(frozen=True)
class ParsedItem:
    """A purchasable line item produced by the heuristic pipeline."""

    id: int
    name: str
    qty: Decimal
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price * self.qty

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "qty": float(self.qty),
            "price": float(self.price),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedItem:
        """Rebuild an item sent back by a selection collaborator.

        Raises:
            ValueError: if id, qty or price are missing or not numeric, or
                qty/price are not finite positive amounts.
        """
        try:
            item = cls(
                id=int(data["id"]),
                name=str(data.get("name", "")),
                qty=Decimal(str(data.get("qty", 1))),
                price=Decimal(str(data["price"])),
            )
        except (KeyError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Invalid item payload: {data!r}") from e

        for label, amount in (("qty", item.qty), ("price", item.price)):
            if not amount.is_finite() or amount <= 0:
                raise ValueError(f"Item {item.id} {label} must be a positive amount, got {amount}")
        return item


@dataclass
class StructuredItem:
    """One item as reported by the remote structured parser."""

    name: str
    quantity: Decimal | None = None
    price: Decimal | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": float(self.quantity) if self.quantity is not None else None,
            "price": float(self.price) if self.price is not None else None,
        }


@dataclass
class StructuredReceipt:
    """Schema-shaped receipt returned by the remote structured parser."""

    store: str = ""
    date: str = ""  # YYYY-MM-DD as returned by the model, not validated
    items: list[StructuredItem] = field(default_factory=list)
    total: Decimal | None = None
    currency: str = ""

    @property
    def status(self) -> RemoteParseStatus:
        return RemoteParseStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        return {
            "store": self.store,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
            "total": float(self.total) if self.total is not None else None,
            "currency": self.currency,
        }


class RemoteParseStatus(str, Enum):
    """Lifecycle of one remote structured-parse attempt."""

    NOT_SENT = "not_sent"
    AWAITING_RESPONSE = "awaiting_response"
    SUCCESS = "success"
    API_ERROR = "api_error"
    FORMAT_ERROR = "format_error"
    NETWORK_ERROR = "network_error"


@dataclass
class RemoteParseError:
    """Tagged failure of the remote structured parser. Never raised."""

    status: RemoteParseStatus
    error: str
    message: str | None = None
    raw_text: str | None = None  # model reply, verbatim
    raw_response: str | None = None  # transport envelope / error body

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status.value, "error": self.error}
        if self.message is not None:
            data["message"] = self.message
        if self.raw_text is not None:
            data["rawText"] = self.raw_text
        if self.raw_response is not None:
            data["rawResponse"] = self.raw_response
        return data


RemoteParseResult = StructuredReceipt | RemoteParseError
