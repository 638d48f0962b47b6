"""SQLModel data models.

Two tables: `department` and `person`. A person owns the relationship by
holding `department_id`; departments keep no back-pointer to their people.
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, Identity, Integer
from sqlmodel import Field, Relationship, SQLModel


class Department(SQLModel, table=True):
    """A department people can be assigned to.

    The identity starts at 0 with increment 1 on stores that support
    identity columns; SQLite falls back to its AUTOINCREMENT sequence,
    which never hands out a deleted id again.
    """
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, Identity(start=0, increment=1), primary_key=True),
    )
    name: str


class Person(SQLModel, table=True):
    """A person record with a postal address and an optional department."""
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    phone: str
    department_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("department.id", ondelete="SET NULL"), nullable=True, index=True),
    )
    street: str
    city: str
    state: str
    zip: str
    country: str
    department: Optional[Department] = Relationship()
