"""Product value object."""

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    Client software identification sent with every request.

    The bank uses it to attribute traffic to a product and version.
    """

    name: str = Field(..., min_length=1, description="Product name")
    language: str = Field(
        default="de",
        min_length=2,
        max_length=2,
        description="ISO 639-1 language code",
    )
    instance_id: str | None = Field(
        default=None,
        description="Optional installation identifier",
    )

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.language})"
