"""
Single-row site sections: owner profile, hero and about.

Each section is one row. GET returns it (or {} before it was ever saved) and
PUT replaces it, inserting the row the first time.
"""

from typing import Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import Table

from auth import get_current_admin
from database import Database, about_section, get_db, hero_section, portfolio_owner
from schemas import AboutSection, HeroSection, PortfolioOwner

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


def save_section(db: Database, table: Table, values: dict) -> dict:
    current = db.first_row(table)
    if current is None:
        return db.create_row(table, values)
    return db.update_row(table, current["id"], values)


def add_section(path: str, table: Table, schema: Type[BaseModel], label: str) -> None:
    @router.get(path)
    def get_section(db: Database = Depends(get_db)):
        return db.first_row(table) or {}

    @router.put(path)
    def update_section(payload: schema, db: Database = Depends(get_db), _: dict = Depends(get_current_admin)):
        row = save_section(db, table, payload.model_dump())
        return {"message": f"{label} updated", "data": row}


add_section("/owner", portfolio_owner, PortfolioOwner, "Portfolio")
add_section("/hero", hero_section, HeroSection, "Hero")
add_section("/about", about_section, AboutSection, "About section")
