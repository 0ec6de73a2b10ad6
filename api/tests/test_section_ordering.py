import random

import pytest

from app.core.errors import ValidationError
from app.schemas.sections import Section
from app.services.sections import (
    add_section,
    commit_sections,
    delete_section,
    reorder_section,
    sorted_view,
    update_section,
)


def _sections(*ids: str) -> list[Section]:
    return [Section(id=section_id, company_id="c1", type="about", title=section_id, order=index) for index, section_id in enumerate(ids)]


def _ids(sections: list[Section]) -> list[str]:
    return [section.id for section in sections]


def _orders(sections: list[Section]) -> list[int]:
    return [section.order for section in sections]


def test_add_section_appends_with_default_title_and_next_order() -> None:
    sections = add_section(_sections("a", "b"), "benefits", company_id="c1")

    added = sections[-1]
    assert len(sections) == 3
    assert added.type == "benefits"
    assert added.title == "Benefits"
    assert added.content == ""
    assert added.order == 2
    assert added.company_id == "c1"
    assert _orders(sections[:2]) == [0, 1]


def test_add_section_generates_unique_ids() -> None:
    sections: list[Section] = []
    for section_type in ("about", "life", "values", "benefits", "about"):
        sections = add_section(sections, section_type)
    assert len(set(_ids(sections))) == 5


def test_add_section_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError) as excinfo:
        add_section([], "careers")
    assert excinfo.value.field == "type"


def test_update_section_changes_only_matching_entry() -> None:
    original = _sections("a", "b")
    updated = update_section(original, "b", title="Why us", content="Good coffee")

    assert updated[1].title == "Why us"
    assert updated[1].content == "Good coffee"
    assert updated[1].order == 1
    assert updated[0] == original[0]
    assert original[1].title == "b"


def test_update_section_with_unknown_id_is_noop() -> None:
    original = _sections("a", "b")
    assert update_section(original, "missing", title="x") == original


def test_delete_section_preserves_survivor_order() -> None:
    remaining = delete_section(_sections("A", "B", "C"), "B")
    assert _ids(remaining) == ["A", "C"]
    assert _orders(remaining) == [0, 1]


def test_reorder_moves_source_into_target_slot() -> None:
    reordered = reorder_section(_sections("A", "B", "C"), "A", "C")
    assert _ids(reordered) == ["B", "C", "A"]
    assert _orders(reordered) == [0, 1, 2]


def test_reorder_moving_up_shifts_intervening_entries() -> None:
    reordered = reorder_section(_sections("A", "B", "C", "D"), "D", "B")
    assert _ids(reordered) == ["A", "D", "B", "C"]
    assert _orders(reordered) == [0, 1, 2, 3]


def test_reorder_back_is_not_a_swap() -> None:
    once = reorder_section(_sections("A", "B", "C"), "A", "C")
    twice = reorder_section(once, "C", "A")
    assert _ids(twice) == ["B", "A", "C"]


@pytest.mark.parametrize(("source", "target"), [("A", "A"), ("A", "missing"), ("missing", "B")])
def test_reorder_noop_cases(source: str, target: str) -> None:
    original = _sections("A", "B", "C")
    assert reorder_section(original, source, target) == original


def test_sorted_view_is_stable_for_equal_orders() -> None:
    sections = [
        Section(id="x", type="about", order=1),
        Section(id="y", type="life", order=0),
        Section(id="z", type="values", order=1),
    ]
    assert _ids(sorted_view(sections)) == ["y", "x", "z"]


def test_orders_stay_dense_after_random_operations() -> None:
    rng = random.Random(7)
    sections: list[Section] = []
    for _ in range(200):
        op = rng.choice(["add", "add", "delete", "reorder"])
        if op == "add" or not sections:
            sections = add_section(sections, rng.choice(["about", "life", "values", "benefits"]))
        elif op == "delete":
            sections = delete_section(sections, rng.choice(sections).id)
        else:
            sections = reorder_section(sections, rng.choice(sections).id, rng.choice(sections).id)
        assert sorted(_orders(sorted_view(sections))) == list(range(len(sections)))


def test_commit_sections_sorts_renormalizes_and_stamps_company() -> None:
    draft = [
        Section(id="b", company_id="", type="life", order=5),
        Section(id="a", company_id="other", type="about", order=2),
    ]
    committed = commit_sections(draft, company_id="c1")

    assert _ids(committed) == ["a", "b"]
    assert _orders(committed) == [0, 1]
    assert {section.company_id for section in committed} == {"c1"}


def test_commit_sections_rejects_duplicate_ids() -> None:
    draft = [Section(id="a", type="about", order=0), Section(id="a", type="life", order=1)]
    with pytest.raises(ValidationError):
        commit_sections(draft, company_id="c1")
