from typing import Any

from app.core.config import Settings
from app.core.errors import ValidationError
from app.core.urls import RESERVED_SLUGS, SLUG_MAX_LENGTH, is_valid_slug
from app.schemas.companies import CompanyCreateRequest, CompanyUpdateRequest
from app.services.sections import commit_sections


def new_company_document(payload: CompanyCreateRequest, *, owner_id: str, settings: Settings) -> dict[str, Any]:
    name = payload.name.strip()
    if not name:
        raise ValidationError("name is required", field="name")

    slug = payload.slug.strip()
    if not is_valid_slug(slug):
        raise ValidationError(
            f"slug may only contain lowercase letters, numbers and hyphens (max {SLUG_MAX_LENGTH} characters)",
            field="slug",
        )
    if slug in RESERVED_SLUGS:
        raise ValidationError(f"slug {slug!r} is reserved", field="slug")

    return {
        "slug": slug,
        "name": name,
        "logo_url": "",
        "banner_url": "",
        "primary_color": settings.default_primary_color,
        "secondary_color": settings.default_secondary_color,
        "video_url": "",
        "owner_id": owner_id,
        "sections": [],
    }


def company_update_fields(payload: CompanyUpdateRequest, *, company_id: str) -> dict[str, Any]:
    """Turn an editor save into the fields merged over the stored document."""
    fields = payload.model_dump(exclude_unset=True, exclude={"sections"})
    if "name" in fields:
        if fields["name"] is None or not fields["name"].strip():
            raise ValidationError("name cannot be blank", field="name")
        fields["name"] = fields["name"].strip()
    for key in ("primary_color", "secondary_color"):
        if key in fields and fields[key] is None:
            raise ValidationError(f"{key} cannot be empty", field=key)
    # An explicit null clears a URL field; stored documents never hold null.
    for key in ("logo_url", "banner_url", "video_url"):
        if key in fields and fields[key] is None:
            fields[key] = ""

    if payload.sections is not None:
        committed = commit_sections(payload.sections, company_id=company_id)
        fields["sections"] = [section.model_dump() for section in committed]
    return fields
