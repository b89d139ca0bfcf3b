"""Configuration models for cardflow.yml."""

from typing import ClassVar

from pydantic import BaseModel, Field, model_validator

from .card import STATUSES, CardStatus

# Hard ceiling on generated board size
MAX_CARD_COUNT = 50000
DEFAULT_CARD_COUNT = 5000


class BoardConfig(BaseModel):
    """Board sizing and windowing configuration."""

    DEFAULT_TITLES: ClassVar[dict[CardStatus, str]] = {
        CardStatus.TODO: "To Do",
        CardStatus.IN_PROGRESS: "In Progress",
        CardStatus.DONE: "Done",
    }

    default_card_count: int = Field(default=DEFAULT_CARD_COUNT, ge=1, le=MAX_CARD_COUNT)
    max_card_count: int = Field(default=MAX_CARD_COUNT, ge=1, le=MAX_CARD_COUNT)

    # Disclosure limits
    initial_load: int = Field(default=50, ge=1)
    load_more_chunk: int = Field(default=30, ge=1)
    search_cap: int = Field(default=100, ge=1)
    load_more_threshold: int = Field(
        default=5, ge=0, description="Rows from the bottom that trigger loading more"
    )

    # Render window
    card_height: int = Field(default=5, ge=1, description="Estimated rows per card")
    card_gap: int = Field(default=1, ge=0)
    render_buffer: int = Field(default=5, ge=0, description="Extra cards above and below")

    titles: dict[CardStatus, str] = Field(default_factory=lambda: dict(BoardConfig.DEFAULT_TITLES))

    @model_validator(mode="after")
    def validate_counts(self) -> "BoardConfig":
        """Default count must fit under the maximum."""
        if self.default_card_count > self.max_card_count:
            raise ValueError(
                f"default_card_count ({self.default_card_count}) exceeds "
                f"max_card_count ({self.max_card_count})"
            )
        return self

    def title_for(self, status: CardStatus) -> str:
        """Column title, falling back to the built-in one."""
        return self.titles.get(status) or self.DEFAULT_TITLES[status]

    @property
    def columns(self) -> list[tuple[CardStatus, str]]:
        """(status, title) pairs in display order."""
        return [(status, self.title_for(status)) for status in STATUSES]


class CardflowConfig(BaseModel):
    """Root configuration model for cardflow.yml."""

    version: int = 1
    board: BoardConfig = Field(default_factory=BoardConfig)

    @classmethod
    def default(cls) -> "CardflowConfig":
        """Return default configuration."""
        return cls()
