"""Tests for card, limit, message and config models."""

from datetime import UTC, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from cardflow.models import (
    LABEL_OPTIONS,
    UNBOUNDED,
    BoardConfig,
    Bounded,
    Card,
    CardDraft,
    CardflowConfig,
    CardStatus,
    CardUpdate,
    SliceLimit,
    get_label,
)
from cardflow.models.messages import (
    Command,
    Filter,
    Filtered,
    Generate,
    MoveCard,
    Reply,
    Updated,
)


@pytest.fixture
def card() -> Card:
    """A card with a checklist and one label."""
    return Card(
        id="card-1",
        title="Write Blog Post",
        description="Draft the launch announcement",
        status=CardStatus.TODO,
        labels=(LABEL_OPTIONS[1],),
        checklist_done=1,
        checklist_total=3,
    )


class TestCardStatus:
    """Tests for the CardStatus enum."""

    def test_wire_values(self):
        """Statuses serialize to the column ids."""
        assert CardStatus.TODO.value == "todo"
        assert CardStatus.IN_PROGRESS.value == "inprogress"
        assert CardStatus.DONE.value == "done"

    def test_parse_from_string(self):
        assert CardStatus("inprogress") is CardStatus.IN_PROGRESS


class TestCard:
    """Tests for the Card model."""

    def test_defaults(self):
        """A card only needs an id."""
        c = Card(id="x")
        assert c.status == CardStatus.TODO
        assert c.labels == ()
        assert c.due_date is None
        assert c.checklist_text == ""

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Card(id="")

    def test_frozen(self, card: Card):
        """Cards cannot be changed in place."""
        with pytest.raises(ValidationError):
            card.title = "Other"

    def test_checklist_done_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            Card(id="x", checklist_done=4, checklist_total=3)

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            Card(id="x", comments=-1)

    def test_duplicate_labels_rejected(self):
        """Labels are unique by id."""
        label = LABEL_OPTIONS[0]
        with pytest.raises(ValidationError):
            Card(id="x", labels=(label, label))

    def test_from_draft_keeps_fields(self):
        draft = CardDraft(title="New", status=CardStatus.DONE)
        c = Card.from_draft("card-abc", draft)
        assert c.id == "card-abc"
        assert c.title == "New"
        assert c.status == CardStatus.DONE

    def test_checklist_text(self, card: Card):
        assert card.checklist_text == "1/3"

    def test_matches_title_and_description(self, card: Card):
        """Matching is a substring test on lowercased fields."""
        assert card.matches("blog")
        assert card.matches("launch")
        assert not card.matches("seo")

    def test_with_status_returns_copy(self, card: Card):
        moved = card.with_status(CardStatus.DONE)
        assert moved.status == CardStatus.DONE
        assert card.status == CardStatus.TODO
        assert moved.id == card.id


class TestCardMerge:
    """Tests for merging a CardUpdate into a card."""

    def test_only_set_fields_change(self, card: Card):
        merged = card.merged(CardUpdate(title="Renamed"))
        assert merged.title == "Renamed"
        assert merged.description == card.description
        assert merged.labels == card.labels

    def test_none_does_not_clear_title(self, card: Card):
        """Explicit None is ignored for required-value fields."""
        merged = card.merged(CardUpdate(title=None))
        assert merged.title == card.title

    def test_due_date_can_be_cleared(self):
        c = Card(id="x", due_date=datetime(2024, 1, 1, tzinfo=UTC))
        merged = c.merged(CardUpdate(due_date=None))
        assert merged.due_date is None

    def test_id_is_preserved(self, card: Card):
        assert card.merged(CardUpdate(status=CardStatus.DONE)).id == card.id

    def test_merge_revalidates(self, card: Card):
        """A merge that breaks the checklist rule is rejected."""
        with pytest.raises(ValidationError):
            card.merged(CardUpdate(checklist_done=5))


class TestLabels:
    """Tests for the label catalog."""

    def test_catalog_ids_unique(self):
        ids = [label.id for label in LABEL_OPTIONS]
        assert len(ids) == len(set(ids))

    def test_get_label(self):
        assert get_label("lbl-seo").name == "SEO"
        assert get_label("missing") is None


class TestSliceLimit:
    """Tests for Bounded/Unbounded slice limits."""

    def test_bounded_apply(self):
        assert Bounded(n=2).apply([1, 2, 3]) == [1, 2]

    def test_bounded_caps(self):
        assert Bounded(n=2).caps(3)
        assert not Bounded(n=2).caps(2)

    def test_unbounded_never_caps(self):
        assert UNBOUNDED.apply([1, 2, 3]) == [1, 2, 3]
        assert not UNBOUNDED.caps(10**6)

    def test_negative_bound_rejected(self):
        with pytest.raises(ValidationError):
            Bounded(n=-1)

    def test_discriminated_parse(self):
        adapter = TypeAdapter(SliceLimit)
        assert adapter.validate_python({"kind": "bounded", "n": 3}) == Bounded(n=3)
        assert adapter.validate_python({"kind": "unbounded"}) == UNBOUNDED


class TestMessages:
    """Tests for the command and reply messages."""

    def test_command_parses_by_type(self):
        adapter = TypeAdapter(Command)
        command = adapter.validate_python(
            {"type": "move_card", "request_id": 4, "id": "card-1", "status": "done"}
        )
        assert isinstance(command, MoveCard)
        assert command.status == CardStatus.DONE
        assert command.anchor_id is None

    def test_unknown_command_type_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Command).validate_python({"type": "explode"})

    def test_generate_requires_positive_count(self):
        with pytest.raises(ValidationError):
            Generate(count=0)

    def test_filter_defaults(self):
        f = Filter()
        assert f.query == ""
        assert f.limits == {}
        assert f.search_cap == UNBOUNDED

    def test_reply_parses_by_type(self):
        reply = TypeAdapter(Reply).validate_python(
            {"type": "updated", "in_reply_to": 2, "cards": [{"id": "a"}]}
        )
        assert isinstance(reply, Updated)
        assert reply.cards[0].id == "a"

    def test_filtered_defaults_cover_every_column(self):
        reply = Filtered()
        assert set(reply.columns) == set(CardStatus)
        assert all(total == 0 for total in reply.totals.values())


class TestBoardConfig:
    """Tests for BoardConfig."""

    def test_defaults(self):
        config = BoardConfig()
        assert config.default_card_count == 5000
        assert config.max_card_count == 50000
        assert config.initial_load == 50
        assert config.load_more_chunk == 30
        assert config.search_cap == 100

    def test_default_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            BoardConfig(default_card_count=200, max_card_count=100)

    def test_max_card_count_ceiling(self):
        with pytest.raises(ValidationError):
            BoardConfig(max_card_count=50001)

    def test_columns_in_display_order(self):
        config = BoardConfig(titles={CardStatus.DONE: "Shipped"})
        assert config.columns == [
            (CardStatus.TODO, "To Do"),
            (CardStatus.IN_PROGRESS, "In Progress"),
            (CardStatus.DONE, "Shipped"),
        ]

    def test_cardflow_config_default(self):
        config = CardflowConfig.default()
        assert config.version == 1
        assert config.board == BoardConfig()
