"""Card domain model."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CardStatus(str, Enum):
    """Column a card belongs to."""

    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"


# Display order of the board columns
STATUSES: tuple[CardStatus, ...] = (CardStatus.TODO, CardStatus.IN_PROGRESS, CardStatus.DONE)


class LabelColor(str, Enum):
    """Colors a label can take."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"


class Label(BaseModel):
    """A label attached to a card (copied by value from the catalog)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    color: LabelColor


class Member(BaseModel):
    """A collaborator badge shown on a card."""

    model_config = ConfigDict(frozen=True)

    id: str
    initials: str = Field(..., min_length=1, max_length=3)
    color: str = "#64748b"


LABEL_OPTIONS: tuple[Label, ...] = (
    Label(id="lbl-email", name="Email Campaign", color=LabelColor.PURPLE),
    Label(id="lbl-blog", name="Blog", color=LabelColor.GREEN),
    Label(id="lbl-website", name="Website", color=LabelColor.ORANGE),
    Label(id="lbl-social", name="Social Media", color=LabelColor.YELLOW),
    Label(id="lbl-seo", name="SEO", color=LabelColor.BLUE),
)


def get_label(label_id: str) -> Label | None:
    """Look up a catalog label by id."""
    for label in LABEL_OPTIONS:
        if label.id == label_id:
            return label
    return None


def _unique_labels(labels: tuple[Label, ...]) -> tuple[Label, ...]:
    """Reject duplicate label ids while keeping order."""
    seen: set[str] = set()
    for label in labels:
        if label.id in seen:
            raise ValueError(f"Duplicate label id: {label.id}")
        seen.add(label.id)
    return labels


class CardDraft(BaseModel):
    """Card fields supplied by an editor before the store assigns an id."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    status: CardStatus = CardStatus.TODO
    labels: tuple[Label, ...] = ()
    due_date: datetime | None = None
    comments: int = Field(default=0, ge=0)
    attachments: int = Field(default=0, ge=0)
    checklist_done: int = Field(default=0, ge=0)
    checklist_total: int = Field(default=0, ge=0)
    members: tuple[Member, ...] = ()

    @field_validator("labels")
    @classmethod
    def validate_labels(cls, v: tuple[Label, ...]) -> tuple[Label, ...]:
        """Labels are unique by id."""
        return _unique_labels(v)

    @model_validator(mode="after")
    def validate_checklist(self):
        """Completed checklist items cannot exceed the total."""
        if self.checklist_done > self.checklist_total:
            raise ValueError(
                f"checklist_done ({self.checklist_done}) exceeds "
                f"checklist_total ({self.checklist_total})"
            )
        return self


class Card(CardDraft):
    """A single card on the board.

    Cards are immutable: every edit produces a new instance, so the worker
    and the foreground mirror can hold the same card objects without
    either side observing the other's changes.
    """

    id: str = Field(..., min_length=1)

    @classmethod
    def from_draft(cls, card_id: str, draft: CardDraft) -> "Card":
        """Create a card from a draft and a freshly assigned id."""
        return cls(id=card_id, **draft.model_dump())

    def merged(self, changes: "CardUpdate") -> "Card":
        """Return a validated copy with the explicitly set fields replaced."""
        data = self.model_dump()
        for key, value in changes.model_dump(exclude_unset=True).items():
            # None only clears optional fields
            if value is not None or key == "due_date":
                data[key] = value
        data["id"] = self.id
        return Card.model_validate(data)

    def with_status(self, status: CardStatus) -> "Card":
        """Return a copy living in another column."""
        return self.model_copy(update={"status": status})

    @property
    def checklist_text(self) -> str:
        """Checklist progress like "2/3", empty when there is no checklist."""
        if not self.checklist_total:
            return ""
        return f"{self.checklist_done}/{self.checklist_total}"

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on title or description.

        Args:
            needle: Already lowercased search text
        """
        return needle in self.title.lower() or needle in self.description.lower()


class CardUpdate(BaseModel):
    """Partial card fields for an update. Unset fields are left alone."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    description: str | None = None
    status: CardStatus | None = None
    labels: tuple[Label, ...] | None = None
    due_date: datetime | None = None
    comments: int | None = Field(default=None, ge=0)
    attachments: int | None = Field(default=None, ge=0)
    checklist_done: int | None = Field(default=None, ge=0)
    checklist_total: int | None = Field(default=None, ge=0)
    members: tuple[Member, ...] | None = None

    @field_validator("labels")
    @classmethod
    def validate_labels(cls, v: tuple[Label, ...] | None) -> tuple[Label, ...] | None:
        """Labels are unique by id."""
        if v is None:
            return v
        return _unique_labels(v)
