"""Near-format résumé document: the LLM output shape consumed by post-processing and rendering."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResumeModel(BaseModel):
    """Base for résumé records: camelCase keys on the wire, snake_case attributes in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Header(ResumeModel):
    """Anonymized candidate header."""

    first_name: str = Field(default="", description="Candidate first name only")
    tagline: str = Field(default="", description="Role title, e.g. 'Senior Sales Development Leader'")
    location: str = Field(default="", description="Free-text location; collapses to country only")
    city: Optional[str] = Field(default=None, description="Explicit city, if the model returned one")
    country: Optional[str] = Field(default=None, description="Explicit country, if the model returned one")


class SkillGroup(ResumeModel):
    """A labelled group of skills; canonical categories are 'Skills' and 'Languages'."""

    category: str = Field(default="", description="Group label")
    items: List[str] = Field(default_factory=list, description="Unique items in original order")


class Bullet(ResumeModel):
    """One achievement line within a role."""

    text: str = Field(default="", description="Achievement statement ending in a period")
    metrics: List[str] = Field(default_factory=list, description="Short quantified facts shown next to the bullet")

    @property
    def has_metrics(self) -> bool:
        return bool(self.metrics)


class Experience(ResumeModel):
    """One role."""

    company: str = Field(default="", description="Employer name")
    location: str = Field(default="", description="State/province and country at most")
    title: str = Field(default="", description="Job title")
    start_date: str = Field(default="", description="e.g. 'Jan 2023'")
    end_date: str = Field(default="", description="e.g. 'Present'")
    bullets: List[Bullet] = Field(default_factory=list, description="Achievement bullets")


class Education(ResumeModel):
    """One education entry."""

    institution: str = Field(default="", description="School name")
    degree: str = Field(default="", description="Degree string, e.g. \"Bachelor's Degree in Architecture\"")
    location: str = Field(default="", description="State/province and country at most")
    year: str = Field(default="", description="Graduation year or range")
    additional_info: Optional[str] = Field(default=None, description="GPA, honours, major")


class Resume(ResumeModel):
    """Full résumé document as produced by the rewriter and normalized by the post-processor."""

    header: Header = Field(default_factory=Header)
    summary: str = Field(default="", description="One or two sentence professional summary")
    skills: List[SkillGroup] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    additional_experience: Optional[str] = Field(default=None, description="Free-text additional experience block")
    # Rendering hints: carried through post-processing untouched
    detailed_format: Optional[bool] = Field(default=None, description="Render the detailed layout")
    include_additional_exp: Optional[bool] = Field(default=None, description="Render the additional experience block")

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict with the original camelCase keys (unset optionals omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
