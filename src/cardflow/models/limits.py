"""Slice limits for per-column result lists."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Bounded(BaseModel):
    """At most ``n`` cards."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bounded"] = "bounded"
    n: int = Field(..., ge=0)

    def apply(self, items: list) -> list:
        return items[: self.n]

    def caps(self, total: int) -> bool:
        """Whether a list of ``total`` items would be cut short."""
        return total > self.n


class Unbounded(BaseModel):
    """No limit."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unbounded"] = "unbounded"

    def apply(self, items: list) -> list:
        return list(items)

    def caps(self, total: int) -> bool:  # noqa: ARG002
        return False


SliceLimit = Annotated[Bounded | Unbounded, Field(discriminator="kind")]

UNBOUNDED = Unbounded()
