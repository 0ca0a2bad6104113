"""Pydantic models for the ``/candidate`` resource.

The backend speaks camelCase JSON; attributes are snake_case with camelCase
aliases.  ``id`` and ``isFavorite`` are server-assigned and therefore absent
from the create payload.
"""

from pydantic import BaseModel, ConfigDict, Field


class CandidateDraft(BaseModel):
    """Payload for creating a candidate."""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone: str | None = None
    linkedin_url: str | None = Field(default=None, alias="linkedinURL")
    note: str | None = None


class Candidate(BaseModel):
    """Full candidate record returned by the backend."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str = Field(min_length=1)
    phone: str | None = None
    linkedin_url: str | None = Field(default=None, alias="linkedinURL")
    note: str | None = None
    is_favorite: bool = Field(default=False, alias="isFavorite")
