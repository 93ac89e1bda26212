"""Receipt value objects. Wire shape is camelCase JSON; amounts stay as text."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Item:
    """A single line item on a receipt."""

    short_description: str
    price: str

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        return cls(
            short_description=data["shortDescription"],
            price=data["price"],
        )

    def to_dict(self) -> dict:
        return {"shortDescription": self.short_description, "price": self.price}


@dataclass(frozen=True)
class Receipt:
    """
    Submitted purchase receipt. Immutable once built.
    `total` and item prices are decimal amounts kept as text; the scoring
    engine parses them.
    """

    retailer: str
    purchase_date: str
    purchase_time: str
    total: str
    items: tuple[Item, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "Receipt":
        """Build a Receipt from a decoded (and already validated) JSON payload."""
        return cls(
            retailer=data["retailer"],
            purchase_date=data["purchaseDate"],
            purchase_time=data["purchaseTime"],
            total=data["total"],
            items=tuple(Item.from_dict(i) for i in data.get("items", [])),
        )

    def to_dict(self) -> dict:
        return {
            "retailer": self.retailer,
            "purchaseDate": self.purchase_date,
            "purchaseTime": self.purchase_time,
            "total": self.total,
            "items": [i.to_dict() for i in self.items],
        }
