"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table. Repositories
return SQLModel objects and flush or commit where appropriate; every
public call is one store round trip awaited by the caller.
"""

from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import joinedload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from . import models


class DepartmentRepository:
    """CRUD operations for `Department` objects."""
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[models.Department]:
        """Return every department ordered by id."""
        stmt = select(models.Department).order_by(models.Department.id)
        return list((await self.session.exec(stmt)).all())

    async def get(self, department_id: int) -> Optional[models.Department]:
        """Get a `Department` by primary key."""
        return await self.session.get(models.Department, department_id)

    async def exists(self, department_id: int) -> bool:
        stmt = select(models.Department.id).where(models.Department.id == department_id)
        return (await self.session.exec(stmt)).first() is not None

    async def count(self) -> int:
        stmt = select(func.count()).select_from(models.Department)
        return (await self.session.exec(stmt)).one()

    async def create(self, department: models.Department) -> models.Department:
        """Persist a new department and return the managed instance."""
        self.session.add(department)
        await self.session.commit()
        await self.session.refresh(department)
        return department

    async def save(self, department: models.Department) -> models.Department:
        self.session.add(department)
        await self.session.commit()
        return department

    async def delete(self, department: models.Department) -> None:
        await self.session.delete(department)
        await self.session.commit()


class PersonRepository:
    """CRUD operations for `Person` objects, eager-loading the department."""
    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_department(self):
        # one JOIN; existing identities are refreshed so a changed
        # department_id never shows a stale department
        return (
            select(models.Person)
            .options(joinedload(models.Person.department))
            .execution_options(populate_existing=True)
        )

    async def list(self) -> List[models.Person]:
        """Return every person with its department resolved, ordered by id."""
        stmt = self._with_department().order_by(models.Person.id)
        return list((await self.session.exec(stmt)).all())

    async def get(self, person_id: int) -> Optional[models.Person]:
        """Fetch a person by id without loading the department."""
        return await self.session.get(models.Person, person_id)

    async def get_with_department(self, person_id: int) -> Optional[models.Person]:
        """Fetch a person and its department in one query."""
        stmt = self._with_department().where(models.Person.id == person_id)
        return (await self.session.exec(stmt)).first()

    async def count(self) -> int:
        stmt = select(func.count()).select_from(models.Person)
        return (await self.session.exec(stmt)).one()

    async def create(self, person: models.Person) -> models.Person:
        self.session.add(person)
        await self.session.commit()
        await self.session.refresh(person)
        return person

    async def save(self, person: models.Person) -> models.Person:
        self.session.add(person)
        await self.session.commit()
        return person

    async def delete(self, person: models.Person) -> None:
        await self.session.delete(person)
        await self.session.commit()

    async def unassign_department(self, department_id: int) -> int:
        """Clear `department_id` on everyone in a department.

        Does not commit; the caller commits together with the department
        delete. Returns the number of people touched.
        """
        stmt = (
            update(models.Person)
            .where(models.Person.department_id == department_id)
            .values(department_id=None)
        )
        result = await self.session.exec(stmt)
        return result.rowcount or 0
