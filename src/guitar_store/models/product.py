"""Product model shared by the API and the storefront client."""

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A catalog product as stored in the ``products`` table."""

    model_config = ConfigDict(frozen=True)

    product_id: int = Field(..., gt=0, description="Product identifier")
    category: str = Field(..., description="Category tag, e.g. 'electric'")
    name: str = Field(..., description="Model name")
    color: str = Field(..., description="Finish color")
    price: float = Field(..., ge=0, description="Unit price in dollars")
    img: str = Field(..., description="Image path or URL")
    description: str = Field("", description="Newline-separated feature list")

    @property
    def display_name(self) -> str:
        """Name shown to shoppers: color followed by model name."""
        return f"{self.color} {self.name}"
