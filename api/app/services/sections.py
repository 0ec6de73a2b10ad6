"""In-memory ordering of a company's careers page sections.

Every operation takes a list of sections and returns a new list; inputs are never
mutated. After any structural change the ``order`` of each section equals its
zero-based list position.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from app.core.errors import ValidationError
from app.schemas.sections import SECTION_TYPES, Section


def new_section_id() -> str:
    return f"section-{uuid4().hex}"


def section_title_for(section_type: str) -> str:
    return section_type[:1].upper() + section_type[1:]


def add_section(sections: Sequence[Section], section_type: str, *, company_id: str = "") -> list[Section]:
    if section_type not in SECTION_TYPES:
        raise ValidationError(
            f"unknown section type {section_type!r}; expected one of {', '.join(SECTION_TYPES)}",
            field="type",
        )

    existing_ids = {section.id for section in sections}
    section_id = new_section_id()
    while section_id in existing_ids:
        section_id = new_section_id()

    added = Section(
        id=section_id,
        company_id=company_id,
        type=section_type,
        title=section_title_for(section_type),
        content="",
        order=len(sections),
    )
    return [*sections, added]


def update_section(
    sections: Sequence[Section],
    section_id: str,
    *,
    title: str | None = None,
    content: str | None = None,
) -> list[Section]:
    patch: dict[str, str] = {}
    if title is not None:
        patch["title"] = title
    if content is not None:
        patch["content"] = content

    return [section.model_copy(update=patch) if section.id == section_id else section for section in sections]


def delete_section(sections: Sequence[Section], section_id: str) -> list[Section]:
    remaining = [section for section in sections if section.id != section_id]
    return renormalize(remaining)


def reorder_section(sections: Sequence[Section], source_id: str, target_id: str) -> list[Section]:
    """Move the source section into the slot held by the target, shifting the ones between."""
    if source_id == target_id:
        return list(sections)

    source_index = _index_of(sections, source_id)
    target_index = _index_of(sections, target_id)
    if source_index is None or target_index is None:
        return list(sections)

    moved = list(sections)
    moved.insert(target_index, moved.pop(source_index))
    return renormalize(moved)


def renormalize(sections: Sequence[Section]) -> list[Section]:
    return [
        section if section.order == position else section.model_copy(update={"order": position})
        for position, section in enumerate(sections)
    ]


def sorted_view(sections: Sequence[Section]) -> list[Section]:
    # sorted() is stable, so equal orders keep their original relative position.
    return sorted(sections, key=lambda section: section.order)


def commit_sections(sections: Sequence[Section], *, company_id: str) -> list[Section]:
    """Prepare an edited list for a whole-document save."""
    seen: set[str] = set()
    for section in sections:
        if section.id in seen:
            raise ValidationError(f"duplicate section id {section.id!r}", field="sections")
        seen.add(section.id)

    committed = renormalize(sorted_view(sections))
    return [
        section if section.company_id == company_id else section.model_copy(update={"company_id": company_id})
        for section in committed
    ]


def _index_of(sections: Sequence[Section], section_id: str) -> int | None:
    for index, section in enumerate(sections):
        if section.id == section_id:
            return index
    return None
