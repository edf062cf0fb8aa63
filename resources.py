"""
Generic CRUD resources.

Every content type is described once by a `ResourceDefinition` (URL name,
table, request schema, list ordering, derived read-only fields) and turned
into the same five routes by `build_resource_router`:

    GET    /api/<name>        all rows, in the resource ordering
    GET    /api/<name>/{id}   one row, or {} when it does not exist
    POST   /api/<name>        admin; 201 {"message", "data"}
    PUT    /api/<name>/{id}   admin; full replace, {"message", "data"}
    DELETE /api/<name>/{id}   admin; {"message"} whether or not the row existed
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import Table

import database as tables
from auth import get_current_admin
from database import Database, get_db
from schemas import (
    Achievement,
    Certification,
    Education,
    Experience,
    Extracurricular,
    Hackathon,
    Project,
    Research,
    Skill,
    Testimonial,
)

Row = Dict[str, Any]
Deriver = Callable[[Row], Row]

FEATURED_PROJECTS_LIMIT = 6


@dataclass
class ResourceDefinition:
    name: str
    table: Table
    schema: Type[BaseModel]
    label: str
    order_by: List[Tuple[str, bool]] = field(default_factory=list)
    derive: Optional[Deriver] = None
    private_reads: bool = False
    # PUT body when it differs from the POST body
    update_schema: Optional[Type[BaseModel]] = None

    @property
    def prefix(self) -> str:
        return f"/api/{self.name}"

    def present(self, row: Optional[Row]) -> Optional[Row]:
        """Attach derived read-only fields to a stored row."""
        if row is None or self.derive is None:
            return row
        return {**row, **self.derive(row)}

    def present_all(self, rows: List[Row]) -> List[Row]:
        return [self.present(row) for row in rows]


# ==============
# Derived fields
# ==============

def _as_date(value) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def format_date(value) -> Optional[str]:
    """DD-MM-YYYY, the format the public sections display."""
    value = _as_date(value)
    return value.strftime("%d-%m-%Y") if value else None


def year_of(value) -> Optional[int]:
    value = _as_date(value)
    return value.year if value else None


def experience_fields(row: Row) -> Row:
    start = format_date(row.get("start_date"))
    if row.get("is_current"):
        date_range = f"{start} - Present"
    elif row.get("end_date"):
        date_range = f"{start} - {format_date(row['end_date'])}"
    else:
        date_range = start
    return {"year": year_of(row.get("start_date")), "formatted_date_range": date_range}


def achievement_fields(row: Row) -> Row:
    return {"formatted_date": format_date(row.get("achievement_date"))}


def hackathon_fields(row: Row) -> Row:
    return {"year": year_of(row.get("event_date")), "formatted_date": format_date(row.get("event_date"))}


def period_fields(row: Row) -> Row:
    return {
        "formatted_start_date": format_date(row.get("start_date")),
        "formatted_end_date": format_date(row.get("end_date")),
    }


def extracurricular_fields(row: Row) -> Row:
    return {"year": year_of(row.get("start_date")), **period_fields(row)}


# ======
# Router
# ======

def build_resource_router(
    resource: ResourceDefinition,
    router: Optional[APIRouter] = None,
    include_create: bool = True,
) -> APIRouter:
    """Add the five CRUD routes for `resource` to `router` (or a new one).

    Routes already on a passed-in router take precedence over `/{id}`, which is
    how resources add extra reads such as `/featured`.
    """
    router = router or APIRouter(prefix=resource.prefix, tags=[resource.name])
    schema = resource.schema
    update_schema = resource.update_schema or schema
    read_guard = [Depends(get_current_admin)] if resource.private_reads else []

    @router.get("", dependencies=read_guard)
    def list_rows(db: Database = Depends(get_db)):
        return resource.present_all(db.get_rows(resource.table, resource.order_by))

    @router.get("/{id}", dependencies=read_guard)
    def get_row(id: int, db: Database = Depends(get_db)):
        return resource.present(db.get_row(resource.table, id)) or {}

    if include_create:
        @router.post("", status_code=201)
        def create_row(payload: schema, db: Database = Depends(get_db), _: dict = Depends(get_current_admin)):
            row = db.create_row(resource.table, payload.model_dump())
            return {"message": f"{resource.label} created", "data": resource.present(row)}

    @router.put("/{id}")
    def update_row(id: int, payload: update_schema, db: Database = Depends(get_db), _: dict = Depends(get_current_admin)):
        row = db.update_row(resource.table, id, payload.model_dump())
        return {"message": f"{resource.label} updated", "data": resource.present(row)}

    @router.delete("/{id}")
    def delete_row(id: int, db: Database = Depends(get_db), _: dict = Depends(get_current_admin)):
        db.delete_row(resource.table, id)
        return {"message": f"{resource.label} deleted"}

    return router


# =========
# Resources
# =========
EDUCATION = ResourceDefinition("education", tables.education, Education, "Education", [("start_date", True)])
EXPERIENCE = ResourceDefinition(
    "experience", tables.experience, Experience, "Experience", [("start_date", True)], derive=experience_fields
)
PROJECTS = ResourceDefinition("projects", tables.projects, Project, "Project", [("start_date", True)])
SKILLS = ResourceDefinition("skills", tables.skills, Skill, "Skill", [("category", False), ("skill_name", False)])
CERTIFICATIONS = ResourceDefinition(
    "certifications", tables.certifications, Certification, "Certification", [("issue_date", True)]
)
ACHIEVEMENTS = ResourceDefinition(
    "achievements", tables.achievements, Achievement, "Achievement", [("achievement_date", True)],
    derive=achievement_fields,
)
HACKATHONS = ResourceDefinition(
    "hackathons", tables.hackathons, Hackathon, "Hackathon", [("event_date", True)], derive=hackathon_fields
)
RESEARCH = ResourceDefinition(
    "research", tables.research, Research, "Research", [("start_date", True)], derive=period_fields
)
EXTRACURRICULAR = ResourceDefinition(
    "extracurricular", tables.extracurricular, Extracurricular, "Extracurricular", [("start_date", True)],
    derive=extracurricular_fields,
)
TESTIMONIALS = ResourceDefinition(
    "testimonials", tables.testimonials, Testimonial, "Testimonial", [("created_at", True)]
)

RESOURCES = [
    EDUCATION,
    EXPERIENCE,
    PROJECTS,
    SKILLS,
    CERTIFICATIONS,
    ACHIEVEMENTS,
    HACKATHONS,
    RESEARCH,
    EXTRACURRICULAR,
    TESTIMONIALS,
]


def projects_router() -> APIRouter:
    router = APIRouter(prefix=PROJECTS.prefix, tags=[PROJECTS.name])

    @router.get("/featured")
    def featured_projects(db: Database = Depends(get_db)):
        rows = db.get_rows(
            PROJECTS.table,
            PROJECTS.order_by,
            where=PROJECTS.table.c.highlight.is_(True),
            limit=FEATURED_PROJECTS_LIMIT,
        )
        return PROJECTS.present_all(rows)

    return build_resource_router(PROJECTS, router)


def skills_router() -> APIRouter:
    router = APIRouter(prefix=SKILLS.prefix, tags=[SKILLS.name])

    @router.get("/category/{category}")
    def skills_by_category(category: str, db: Database = Depends(get_db)):
        rows = db.get_rows(SKILLS.table, [("skill_name", False)], where=SKILLS.table.c.category == category)
        return SKILLS.present_all(rows)

    return build_resource_router(SKILLS, router)


def build_routers() -> List[APIRouter]:
    """One router per content resource, extras included."""
    custom = {PROJECTS.name: projects_router, SKILLS.name: skills_router}
    return [custom[r.name]() if r.name in custom else build_resource_router(r) for r in RESOURCES]
