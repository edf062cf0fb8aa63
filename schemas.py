"""
Request schemas for the Portfolio API

Each Pydantic model describes the writable columns of one table (see
database.py). POST and PUT share the same model: PUT is a full replace, so
optional fields left out of the body are stored as NULL. Contact messages are
the exception: admins only toggle their read/replied flags.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

class FormModel(BaseModel):
    """Body posted by an admin or contact form.

    Strings are stripped, and a blank optional input (forms send "" for an
    untouched date or number field) falls back to the field default.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_default(cls, value, info: ValidationInfo):
        if isinstance(value, str) and not value.strip():
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value

# Auth
class LoginRequest(BaseModel):
    username: str
    password: str

class AdminUser(BaseModel):
    username: str
    email: Optional[str] = None
    password_hash: str

# Career
class Education(FormModel):
    institution_name: str = Field(..., min_length=1)
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    gpa: Optional[float] = None
    description: Optional[str] = None
    institution_logo_url: Optional[str] = None
    location: Optional[str] = None

class Experience(FormModel):
    company_name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    employment_type: Optional[str] = None  # full-time, internship, ...
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    tech_stack: List[str] = []
    company_logo_url: Optional[str] = None
    location: Optional[str] = None

class Project(FormModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    tech_stack: List[str] = []
    github_link: Optional[str] = None
    demo_link: Optional[str] = None
    live_link: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None
    highlight: bool = Field(False, description="Shown in the featured list")

class Skill(FormModel):
    skill_name: str = Field(..., min_length=1)
    category: Optional[str] = None
    proficiency_level: Optional[int] = Field(None, ge=0, le=100)
    icon_url: Optional[str] = None
    years_experience: Optional[float] = Field(None, ge=0)

# Recognition
class Certification(FormModel):
    certification_name: str = Field(..., min_length=1)
    issuer: Optional[str] = None
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    certificate_image_url: Optional[str] = None
    category: Optional[str] = None

class Achievement(FormModel):
    achievement_title: str = Field(..., min_length=1)
    description: Optional[str] = None
    achievement_date: Optional[date] = None
    badge_icon_url: Optional[str] = None
    category: Optional[str] = None
    organization: Optional[str] = None

class Hackathon(FormModel):
    event_name: str = Field(..., min_length=1)
    event_date: Optional[date] = None
    location: Optional[str] = None
    description: Optional[str] = None
    role_or_achievement: Optional[str] = None
    team_size: Optional[int] = Field(None, ge=1)
    outcome_or_result: Optional[str] = None
    image_url: Optional[str] = None
    project_link: Optional[str] = None
    event_link: Optional[str] = None
    category: Optional[str] = None

class Research(FormModel):
    research_title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    research_type: Optional[str] = None
    outcomes: Optional[str] = None
    publication_link: Optional[str] = None
    image_url: Optional[str] = None

class Extracurricular(FormModel):
    activity_title: str = Field(..., min_length=1)
    position: Optional[str] = None
    organization_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    contributions: List[str] = []
    image_url: Optional[str] = None

class Testimonial(FormModel):
    name: str = Field(..., min_length=1)
    title: Optional[str] = None
    company_or_organization: Optional[str] = None
    message: str = Field(..., min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    image_url: Optional[str] = None
    relation: Optional[str] = None  # colleague, mentor, client, ...

# Contact
DEFAULT_CONTACT_SUBJECT = "New message from portfolio"

class ContactMessageCreate(FormModel):
    sender_name: str = Field(..., min_length=1)
    sender_email: str = Field(..., min_length=3)
    sender_phone: Optional[str] = None
    subject: Optional[str] = None
    message: str = Field(..., min_length=1)

class ContactFlags(BaseModel):
    read: bool
    replied: bool

# Site sections (single row each)
class PortfolioOwner(FormModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    resume_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None

class HeroSection(FormModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    cta_text: Optional[str] = None
    background_image_url: Optional[str] = None

class AboutSection(FormModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    highlights: List[str] = []
