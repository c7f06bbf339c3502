"""Immutable base model for state records."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Frozen model that rejects unknown fields.

    State records never change in place; a transition builds a new
    instance with ``evolve``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def evolve(self, **changes: Any) -> Self:
        """Return a copy with some fields replaced.

        Args:
            **changes: New values keyed by field name.

        Returns:
            New instance; ``self`` is left untouched.

        Raises:
            ValueError: If a field name is not declared on the model.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            msg = f"Unknown fields for {type(self).__name__}: {sorted(unknown)}"
            raise ValueError(msg)
        return self.model_copy(update=changes)
