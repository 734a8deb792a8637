"""Product record — an item for sale, embedded by value wherever it is used."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A catalog product.

    ``price`` is the current selling price in whole currency units (sum).
    ``sale_percentage`` is the advertised discount that produced this price;
    ``original_price`` reconstructs the crossed-out pre-sale price from it.
    """

    model_config = ConfigDict(frozen=True)

    id: str | int
    title: str = Field(min_length=1)
    description: str = ""
    colors: tuple[str, ...] = ()
    rating: float = Field(default=0.0, ge=0, le=5)
    price: int = Field(ge=0)
    is_black_friday: bool = False
    sale_percentage: int = Field(default=0, ge=0, le=100)
    media: tuple[str, ...] = ()
    type: str
    diagonals: tuple[str, ...] = ()  # screen sizes, TVs only

    @property
    def original_price(self) -> int:
        if not 0 < self.sale_percentage < 100:
            return self.price
        original = Decimal(self.price) / (1 - Decimal(self.sale_percentage) / 100)
        return int(original.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def on_sale(self) -> bool:
        return self.sale_percentage > 0
