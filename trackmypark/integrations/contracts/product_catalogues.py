from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .interfaces import Product
from .payments import currency_symbol

"""
Product catalogue contract — the prepaid parking products offered at checkout.

The catalogue is built once at startup from config/payments_config.yml and is
read-only afterwards, so it can be shared by every request.
"""


class ProductCatalog:
    def __init__(self, products: Mapping[str, Product], currency: str = "INR") -> None:
        self._products = MappingProxyType(dict(products))
        self.currency = currency

    @classmethod
    def from_config(cls, products: Mapping[str, Any], currency: str = "INR") -> "ProductCatalog":
        """Build from the ``products`` section of the payments config."""
        return cls(
            {
                str(product_id): Product(
                    product_id=str(product_id),
                    name=cfg.name,
                    price=cfg.price,
                    hours=cfg.hours,
                )
                for product_id, cfg in products.items()
            },
            currency=currency,
        )

    @property
    def products(self) -> Mapping[str, Product]:
        return self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def get(self, product_id: Any) -> Optional[Product]:
        if product_id is None:
            return None
        return self._products.get(str(product_id))

    def format_price(self, product: Product) -> str:
        return f"{currency_symbol(self.currency)}{product.price / 100:.2f}"

    def to_dict(self, product: Product) -> Dict[str, Any]:
        return {
            "id": product.product_id,
            **product_info(product),
            "priceFormatted": self.format_price(product),
        }

    def list_products(self) -> List[Dict[str, Any]]:
        return [self.to_dict(p) for p in self]


def product_info(product: Product) -> Dict[str, Any]:
    return {"name": product.name, "price": product.price, "hours": product.hours}
