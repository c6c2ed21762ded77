"""
Pydantic models for UniProt request/response validation.

These models check mapping submissions before anything is sent and give
each page of the TrEMBL accession listing a typed shape.
"""

from typing import List, Optional, Dict
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .config import SOURCE_DATABASE


class MappingRequest(BaseModel):
    """
    Submission to the UniProt ID mapping service.

    An empty list of identifiers is rejected before anything is sent.
    """
    model_config = ConfigDict(extra='forbid')

    ids: List[str] = Field(..., description="UniProt accession ids to map")
    target_database: str = Field(..., description="Database to map the ids into")
    source_database: str = Field(
        default=SOURCE_DATABASE,
        description="Namespace of the submitted ids"
    )

    @field_validator('ids')
    @classmethod
    def validate_ids(cls, v):
        """Ensure at least one identifier is submitted."""
        if not v:
            raise ValueError("At least one identifier is required for mapping")
        return v

    @field_validator('target_database')
    @classmethod
    def validate_target_database(cls, v):
        if not v.strip():
            raise ValueError("Target database must not be blank")
        return v.strip()

    @property
    def form_fields(self) -> Dict[str, str]:
        """Multipart form fields expected by the idmapping/run endpoint."""
        return {
            "ids": ",".join(self.ids),
            "from": self.source_database,
            "to": self.target_database,
        }


class IdentifierPage(BaseModel):
    """
    One page of the TrEMBL accession listing.
    """
    ids: List[str] = Field(default_factory=list, description="Accessions in this page")
    next_url: Optional[str] = Field(
        default=None,
        description="URL of the following page, if any"
    )

    @property
    def has_next(self) -> bool:
        """Check if another page follows this one."""
        return bool(self.next_url)

    def summary(self) -> str:
        return f"{len(self.ids)} ids in batch; next query url is {self.next_url}"
