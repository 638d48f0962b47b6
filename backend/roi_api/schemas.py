"""Pydantic request/response schemas used by the API.

Request bodies are full records: updates replace every field, so the
same schema is used for create and update. Unknown keys such as `id` or
a nested `department` are ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# signed 64-bit, the widest integer the store can hold
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class DepartmentIn(BaseModel):
    """Body for creating or renaming a department."""
    name: str


class DepartmentOut(BaseModel):
    """A department as returned by the API (people are never included)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class PersonIn(BaseModel):
    """Full person record accepted by create and update."""
    name: str
    phone: str
    department_id: Optional[int] = Field(default=None, ge=MIN_ID, le=MAX_ID)
    street: str
    city: str
    state: str
    zip: str
    country: str


class PersonOut(PersonIn):
    """A person with the resolved department, or `null` when unassigned."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    department: Optional[DepartmentOut] = None
