"""
Whiteboard Construction Tests
=============================

Tests for building a board from an unordered item set.

INVARIANTS TESTED:
1. Any valid input order yields the same bottom-to-top order
2. Duplicate ids, dangling references and cycles are rejected
3. Only None marks a bottom item
4. Deep chains do not depend on recursion depth
"""

import random

import pytest

from whiteboard.contracts.base import BoardItem, ErrorCode
from whiteboard.contracts.errors import (
    ChainValidationError, DuplicateIdError, DanglingReferenceError, CycleError,
    MultipleChainsError, BranchingError
)
from whiteboard.core import Whiteboard, WhiteboardConfig

from .fixtures import item, ids, shuffled_four, two_chains, four_cycle, linked_chain


class TestConstructionSuccess:

    def test_items_can_be_ordered(self):
        """Out-of-order input builds without error."""
        Whiteboard(shuffled_four())

    def test_no_items(self):
        board = Whiteboard([])
        assert board.items() == []
        assert len(board) == 0

    def test_default_argument_is_empty(self):
        assert Whiteboard().top() is None

    def test_order_is_bottom_to_top(self):
        board = Whiteboard(shuffled_four())
        assert ids(board.items()) == ["dog", "rabbit", "cat", "hamster"]

    def test_order_independent_of_input_order(self):
        """Every permutation of a single chain linearizes identically."""
        chain = linked_chain(8)
        expected = ids(chain)
        rng = random.Random(7)

        for _ in range(20):
            shuffled = list(chain)
            rng.shuffle(shuffled)
            assert ids(Whiteboard(shuffled).items()) == expected

    def test_items_are_the_supplied_objects(self):
        """The engine stores items; it does not clone them."""
        source = shuffled_four()
        board = Whiteboard(source)
        by_id = {i.id: i for i in source}

        for stored in board.items():
            assert stored is by_id[stored.id]

    def test_input_list_is_not_modified(self):
        source = shuffled_four()
        snapshot = list(source)
        Whiteboard(source)
        assert source == snapshot

    def test_accepts_any_iterable(self):
        board = Whiteboard(i for i in shuffled_four())
        assert board.top().id == "hamster"

    def test_from_dicts_uses_persistence_shape(self):
        rows = [
            {"id": "rabbit", "lowerId": "dog", "data": "b"},
            {"id": "dog", "lowerId": None, "data": "a"},
        ]
        board = Whiteboard.from_dicts(rows)
        assert ids(board.items()) == ["dog", "rabbit"]
        assert board.top().data == "b"

    def test_deep_chain_without_recursion_limit(self):
        """Linearization and cycle checks use explicit stacks."""
        chain = linked_chain(20000)
        board = Whiteboard(list(reversed(chain)))
        assert len(board) == 20000
        assert board.bottom().id == "n0"
        assert board.top().id == "n19999"


class TestConstructionFailures:

    def test_no_bottom_item_dangling(self):
        """First item points at a missing id."""
        items = [
            item("dog", "zzz"),
            item("hamster", "cat"),
            item("cat", "rabbit"),
            item("rabbit", "dog"),
        ]
        with pytest.raises(DanglingReferenceError) as exc_info:
            Whiteboard(items)
        assert exc_info.value.item_id == "dog"

    def test_items_cannot_be_ordered(self):
        """A later item points at a missing id."""
        items = [
            item("dog"),
            item("hamster", "cat"),
            item("cat", "rabbit"),
            item("rabbit", "zzz"),
        ]
        with pytest.raises(DanglingReferenceError) as exc_info:
            Whiteboard(items)
        assert exc_info.value.item_id == "rabbit"

    def test_four_cycle(self):
        with pytest.raises(CycleError):
            Whiteboard(four_cycle())

    def test_self_reference_is_a_cycle(self):
        with pytest.raises(CycleError):
            Whiteboard([item("loop", "loop")])

    def test_cycle_beside_valid_chain(self):
        items = shuffled_four() + [item("x", "y"), item("y", "x")]
        with pytest.raises(CycleError):
            Whiteboard(items)

    def test_duplicate_ids(self):
        items = [item("dog"), item("rabbit", "dog"), item("dog", "rabbit")]
        with pytest.raises(DuplicateIdError) as exc_info:
            Whiteboard(items)
        assert exc_info.value.item_id == "dog"

    def test_duplicate_checked_before_references(self):
        items = [item("dog", "missing"), item("dog")]
        with pytest.raises(DuplicateIdError):
            Whiteboard(items)

    def test_empty_string_lower_id_is_not_bottom(self):
        """"" is an id reference, not an absent one."""
        with pytest.raises(DanglingReferenceError):
            Whiteboard([item("dog", "")])

    def test_rejects_non_item_input(self):
        with pytest.raises(TypeError):
            Whiteboard([{"id": "dog", "lowerId": None, "data": "x"}])

    def test_errors_carry_error_record(self):
        with pytest.raises(ChainValidationError) as exc_info:
            Whiteboard(four_cycle())

        error = exc_info.value.error
        assert error.code == ErrorCode.CYCLE_DETECTED
        assert exc_info.value.code == ErrorCode.CYCLE_DETECTED
        assert ("item_id", exc_info.value.item_id) in error.context

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Whiteboard([item("dog", "zzz")])


class TestMultipleChains:

    def test_disjoint_chains_are_accepted(self):
        board = Whiteboard(two_chains())
        assert len(board) == 5

    def test_each_chain_keeps_its_order(self):
        order = ids(Whiteboard(two_chains()).items())
        assert order.index("a") < order.index("b")
        assert order.index("x") < order.index("y") < order.index("z")

    def test_single_chain_mode_rejects_disjoint_chains(self):
        config = WhiteboardConfig(allow_multiple_chains=False)
        with pytest.raises(MultipleChainsError):
            Whiteboard(two_chains(), config=config)

    def test_single_chain_mode_accepts_one_chain(self):
        config = WhiteboardConfig(allow_multiple_chains=False)
        assert Whiteboard(shuffled_four(), config=config).top().id == "hamster"


class TestBranching:

    def branching(self):
        return [item("a"), item("b", "a"), item("c", "a")]

    def test_branching_accepted_by_default(self):
        board = Whiteboard(self.branching())
        assert ids(board.items()) == ["a", "b", "c"]

    def test_branching_rejected_when_configured(self, strict_config):
        with pytest.raises(BranchingError) as exc_info:
            Whiteboard(self.branching(), config=strict_config)
        assert exc_info.value.item_id == "c"


class TestBoardItem:

    def test_requires_id(self):
        with pytest.raises(ValueError):
            BoardItem(id="")

    def test_rejects_non_string_lower_id(self):
        with pytest.raises(ValueError):
            BoardItem(id="dog", lower_id=0)

    def test_is_frozen(self):
        frozen = item("dog")
        with pytest.raises(AttributeError):
            frozen.lower_id = "cat"

    def test_from_dict_accepts_snake_case(self):
        parsed = BoardItem.from_dict({"id": "cat", "lower_id": "dog", "data": 1})
        assert parsed == BoardItem(id="cat", lower_id="dog", data=1)

    def test_is_bottom_only_for_none(self):
        assert item("dog").is_bottom is True
        assert item("cat", "dog").is_bottom is False
        assert item("cat", "").is_bottom is False
