"""
Relational store for the portfolio API.

One SQLAlchemy table per content type. The `Database` object is the single
query executor every router goes through; it is built once at startup and
handed to the app (see `main.create_app`), never imported as a global.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from fastapi import Request
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from logger import get_logger

logger = get_logger(__name__)

metadata = MetaData()


def _timestamps() -> List[Column]:
    return [
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("updated_at", DateTime(timezone=True), nullable=False),
    ]


def _table(name: str, *columns: Column) -> Table:
    return Table(name, metadata, Column("id", Integer, primary_key=True), *columns, *_timestamps())


# =======
# Content
# =======
education = _table(
    "education",
    Column("institution_name", String(255), nullable=False),
    Column("degree", String(255)),
    Column("field_of_study", String(255)),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("gpa", Float),
    Column("description", Text),
    Column("institution_logo_url", Text),
    Column("location", String(255)),
)

experience = _table(
    "experience",
    Column("company_name", String(255), nullable=False),
    Column("role", String(255), nullable=False),
    Column("employment_type", String(100)),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("is_current", Boolean, default=False),
    Column("description", Text),
    Column("tech_stack", JSON),
    Column("company_logo_url", Text),
    Column("location", String(255)),
)

projects = _table(
    "projects",
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("short_description", Text),
    Column("image_url", Text),
    Column("tech_stack", JSON),
    Column("github_link", Text),
    Column("demo_link", Text),
    Column("live_link", Text),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("category", String(100)),
    Column("highlight", Boolean, default=False),
)

skills = _table(
    "skills",
    Column("skill_name", String(255), nullable=False),
    Column("category", String(100)),
    Column("proficiency_level", Integer),
    Column("icon_url", Text),
    Column("years_experience", Float),
)

certifications = _table(
    "certifications",
    Column("certification_name", String(255), nullable=False),
    Column("issuer", String(255)),
    Column("issue_date", Date),
    Column("expiration_date", Date),
    Column("credential_id", String(255)),
    Column("credential_url", Text),
    Column("certificate_image_url", Text),
    Column("category", String(100)),
)

achievements = _table(
    "achievements",
    Column("achievement_title", String(255), nullable=False),
    Column("description", Text),
    Column("achievement_date", Date),
    Column("badge_icon_url", Text),
    Column("category", String(100)),
    Column("organization", String(255)),
)

hackathons = _table(
    "hackathons",
    Column("event_name", String(255), nullable=False),
    Column("event_date", Date),
    Column("location", String(255)),
    Column("description", Text),
    Column("role_or_achievement", String(255)),
    Column("team_size", Integer),
    Column("outcome_or_result", Text),
    Column("image_url", Text),
    Column("project_link", Text),
    Column("event_link", Text),
    Column("category", String(100)),
)

research = _table(
    "research",
    Column("research_title", String(255), nullable=False),
    Column("description", Text),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("research_type", String(100)),
    Column("outcomes", Text),
    Column("publication_link", Text),
    Column("image_url", Text),
)

extracurricular = _table(
    "extracurricular",
    Column("activity_title", String(255), nullable=False),
    Column("position", String(255)),
    Column("organization_name", String(255)),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("description", Text),
    Column("contributions", JSON),
    Column("image_url", Text),
)

testimonials = _table(
    "testimonials",
    Column("name", String(255), nullable=False),
    Column("title", String(255)),
    Column("company_or_organization", String(255)),
    Column("message", Text, nullable=False),
    Column("rating", Integer),
    Column("image_url", Text),
    Column("relation", String(255)),
)

contact_messages = _table(
    "contact_messages",
    Column("sender_name", String(255), nullable=False),
    Column("sender_email", String(255), nullable=False),
    Column("sender_phone", String(50)),
    Column("subject", String(255)),
    Column("message", Text, nullable=False),
    Column("read", Boolean, nullable=False, default=False),
    Column("replied", Boolean, nullable=False, default=False),
)

# =============
# Site sections
# =============
portfolio_owner = _table(
    "portfolio_owner",
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("email", String(255)),
    Column("phone", String(50)),
    Column("location", String(255)),
    Column("bio", Text),
    Column("profile_image_url", Text),
    Column("resume_url", Text),
    Column("github_url", Text),
    Column("linkedin_url", Text),
)

hero_section = _table(
    "hero_section",
    Column("title", String(255)),
    Column("subtitle", Text),
    Column("cta_text", String(255)),
    Column("background_image_url", Text),
)

about_section = _table(
    "about_section",
    Column("title", String(255)),
    Column("description", Text),
    Column("image_url", Text),
    Column("highlights", JSON),
)

# ====
# Auth
# ====
admin_users = _table(
    "admin_users",
    Column("username", String(100), nullable=False, unique=True),
    Column("email", String(255)),
    Column("password_hash", String(255), nullable=False),
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Ordering is a list of (column name, descending) pairs.
Ordering = Iterable[Tuple[str, bool]]


class Database:
    """Engine wrapper running one parameterized statement per transaction."""

    def __init__(self, url: str, echo: bool = False, clock: Callable[[], datetime] = utcnow):
        self.url = url
        self.clock = clock
        self.engine: Engine = self._build_engine(url, echo)

    @staticmethod
    def _build_engine(url: str, echo: bool) -> Engine:
        if not url.startswith("sqlite"):
            return create_engine(url, echo=echo, pool_pre_ping=True)
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # every request must see the same in-memory database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        metadata.create_all(self.engine)
        logger.info("Database schema initialized successfully.")

    def dispose(self) -> None:
        self.engine.dispose()

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    # =========
    # Executor
    # =========
    def fetch_all(self, statement) -> List[Dict[str, Any]]:
        with self.engine.begin() as conn:
            return [dict(row._mapping) for row in conn.execute(statement)]

    def fetch_one(self, statement) -> Optional[Dict[str, Any]]:
        with self.engine.begin() as conn:
            row = conn.execute(statement).first()
            return dict(row._mapping) if row is not None else None

    def execute(self, statement) -> int:
        with self.engine.begin() as conn:
            return conn.execute(statement).rowcount

    # ============
    # Row helpers
    # ============
    def get_rows(self, table: Table, order_by: Ordering = (), where=None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        stmt = select(table)
        if where is not None:
            stmt = stmt.where(where)
        for name, descending in order_by:
            column = table.c[name]
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.fetch_all(stmt)

    def get_row(self, table: Table, row_id: int) -> Optional[Dict[str, Any]]:
        return self.fetch_one(select(table).where(table.c.id == row_id))

    def first_row(self, table: Table) -> Optional[Dict[str, Any]]:
        return self.fetch_one(select(table).order_by(table.c.id).limit(1))

    def create_row(self, table: Table, values: Dict[str, Any]) -> Dict[str, Any]:
        now = self.clock()
        stmt = table.insert().values(**values, created_at=now, updated_at=now).returning(*table.c)
        return self.fetch_one(stmt)

    def update_row(self, table: Table, row_id: int, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        stmt = (
            table.update()
            .where(table.c.id == row_id)
            .values(**values, updated_at=self.clock())
            .returning(*table.c)
        )
        return self.fetch_one(stmt)

    def delete_row(self, table: Table, row_id: int) -> int:
        return self.execute(table.delete().where(table.c.id == row_id))


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the app's database."""
    return request.app.state.db
