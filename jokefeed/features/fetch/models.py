"""Wire models decoded from the remote API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """A single joke as served by the API.

    Wire keys are snake_case; the joke text travels under ``value``.
    Unknown keys are ignored so that additive API changes do not break
    decoding.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(description="Opaque item identifier")
    url: str = Field(description="Canonical URL of the item")
    text: str = Field(alias="value", description="Joke text")
    icon_url: str | None = Field(default=None, description="Icon shown with the item")
    categories: tuple[str, ...] = Field(
        default=(), description="Categories the item belongs to"
    )
    created_at: str | None = Field(default=None, description="Creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")

    def to_wire(self) -> dict[str, Any]:
        """Encode the item using the API's key names.

        Returns:
            Dictionary that decodes back into an equal Item.
        """
        return self.model_dump(by_alias=True, mode="json")
