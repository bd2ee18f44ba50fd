from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict


@dataclass(frozen=True)
class ProductData:
    """Normalized product record returned to callers of the product resolver."""

    id: str
    name: str
    description: str
    image_url: str
    price: Decimal
    currency: str
    sku: str

    def to_dict(self) -> Dict[str, Any]:
        """Formats product for response."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "imageUrl": self.image_url,
            "price": float(self.price),
            "currency": self.currency,
            "sku": self.sku,
        }
