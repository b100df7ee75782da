"""
Document domain models and schemas.

Upload/update payload structures validated at the API boundary, and
response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import json
import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from docqa.core.document_processing.models import IngestionState
from docqa.core.exceptions import ValidationError

TITLE_MAX_LENGTH = 255


def parse_label_list(raw: str | None, field: str) -> list[str] | None:
    """
    Decode an allowed_* form field.

    The field carries a JSON array of strings. Missing, blank or empty arrays
    mean "unrestricted" and decode to None.

    Raises:
        ValidationError: Not a JSON array of strings
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"{field} must be a JSON array of strings", field=field) from e

    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{field} must be a JSON array of strings", field=field)
    return value or None


def validate_title(title: str | None) -> str:
    """Strip and check a document title."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("title must not be empty", field="title")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"title must be at most {TITLE_MAX_LENGTH} characters",
            field="title",
        )
    return cleaned


class DocumentFields(BaseModel):
    """
    Validated document metadata for creation.

    allowed_* default to None (unrestricted).
    """

    title: str
    allowed_locations: list[str] | None = None
    allowed_positions: list[str] | None = None
    allowed_websites: list[str] | None = None

    @classmethod
    def from_form(
        cls,
        title: str | None,
        allowed_locations: str | None = None,
        allowed_positions: str | None = None,
        allowed_websites: str | None = None,
    ) -> "DocumentFields":
        return cls(
            title=validate_title(title),
            allowed_locations=parse_label_list(allowed_locations, "allowed_locations"),
            allowed_positions=parse_label_list(allowed_positions, "allowed_positions"),
            allowed_websites=parse_label_list(allowed_websites, "allowed_websites"),
        )


class DocumentUpdate(BaseModel):
    """
    Partial document metadata update.

    Only fields explicitly set are applied (model_fields_set); setting an
    allowed_* field to None lifts that restriction.
    """

    title: str | None = None
    allowed_locations: list[str] | None = None
    allowed_positions: list[str] | None = None
    allowed_websites: list[str] | None = None

    @classmethod
    def from_form(
        cls,
        title: str | None = None,
        allowed_locations: str | None = None,
        allowed_positions: str | None = None,
        allowed_websites: str | None = None,
    ) -> "DocumentUpdate":
        values = {}
        if title is not None:
            values["title"] = validate_title(title)
        for field, raw in (
            ("allowed_locations", allowed_locations),
            ("allowed_positions", allowed_positions),
            ("allowed_websites", allowed_websites),
        ):
            if raw is not None:
                values[field] = parse_label_list(raw, field)
        return cls(**values)


class IngestionResponse(BaseModel):
    """Response schema for create and update."""

    document_id: uuid.UUID
    title: str
    file_path: str
    chunk_count: int = Field(description="Chunks currently stored for the document")
    enqueued_count: int = Field(description="Embedding tasks dispatched by this request")
    ingestion_state: IngestionState


class DocumentResponse(BaseModel):
    """Response schema for document reads."""

    id: uuid.UUID
    title: str
    file_path: str
    allowed_locations: list[str] | None = None
    allowed_positions: list[str] | None = None
    allowed_websites: list[str] | None = None
    chunk_count: int
    embedded_count: int
    ingestion_state: IngestionState
    created_at: datetime
    updated_at: datetime
