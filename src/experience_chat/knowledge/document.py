"""
Document model for the knowledge base.

One entry of professional experience. The knowledge-base JSON is validated
against this model on load; optional fields default so a sparse record never
fails the load.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """
    A single knowledge-base entry.

    Immutable after load. Documents carry no id: identity is the position
    in the corpus, which ScoredResult.index records.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Headline of the experience entry")
    area: str = Field(default="", description="Topic area, e.g. 'Pricing'")
    tags: tuple[str, ...] = Field(default=(), description="Free-form keywords")
    summary: str = Field(default="", description="One-sentence summary shown in answers")
    details: str = Field(default="", description="Longer description, searched but not shown")
    company: str = Field(default="", description="Employer or client, if any")

    @field_validator("area", "summary", "details", "company", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    def text(self) -> str:
        """Searchable text: title, area, tags, summary and details."""
        return " ".join([self.title, self.area, " ".join(self.tags), self.summary, self.details])
