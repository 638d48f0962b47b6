"""Business logic services used by HTTP controllers.

Services coordinate repositories and own the rules that sit above single
store statements: not-found detection, referential integrity of
`department_id`, and what happens to people when their department is
deleted (they are unassigned). Controllers translate the exceptions
defined here into HTTP responses.
"""

import logging
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession

from . import models, repositories
from .schemas import DepartmentIn, PersonIn

logger = logging.getLogger("roi_api.services")


class NotFoundError(LookupError):
    """Raised when a record with the requested id does not exist."""


class InvalidReferenceError(ValueError):
    """Raised when `department_id` names a department that does not exist."""


class DepartmentService:
    """CRUD operations on departments."""
    not_found_message = "Department not found."

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = repositories.DepartmentRepository(session)
        self.person_repo = repositories.PersonRepository(session)

    async def list_departments(self) -> List[models.Department]:
        return await self.repo.list()

    async def get_department(self, department_id: int) -> models.Department:
        department = await self.repo.get(department_id)
        if department is None:
            raise NotFoundError(self.not_found_message)
        return department

    async def create_department(self, data: DepartmentIn) -> models.Department:
        department = await self.repo.create(models.Department(name=data.name))
        logger.info("created department %s", department.id)
        return department

    async def update_department(self, department_id: int, data: DepartmentIn) -> models.Department:
        """Replace the name of an existing department."""
        department = await self.get_department(department_id)
        department.name = data.name
        department = await self.repo.save(department)
        logger.info("updated department %s", department_id)
        return department

    async def delete_department(self, department_id: int) -> None:
        """Delete a department and unassign everyone who belonged to it.

        Both statements are committed together, so readers never see
        people pointing at a department that is already gone.
        """
        department = await self.get_department(department_id)
        unassigned = await self.person_repo.unassign_department(department_id)
        await self.repo.delete(department)
        logger.info("deleted department %s (unassigned %d people)", department_id, unassigned)


class PersonService:
    """CRUD operations on people.

    Reads always return the person with `department` resolved. Writes
    take the full record; an update overwrites every field.
    """
    not_found_message = "Person not found."

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = repositories.PersonRepository(session)
        self.department_repo = repositories.DepartmentRepository(session)

    async def _check_department(self, department_id):
        if department_id is not None and not await self.department_repo.exists(department_id):
            raise InvalidReferenceError(f"Department {department_id} does not exist.")

    async def list_people(self) -> List[models.Person]:
        return await self.repo.list()

    async def get_person(self, person_id: int) -> models.Person:
        person = await self.repo.get_with_department(person_id)
        if person is None:
            raise NotFoundError(self.not_found_message)
        return person

    async def create_person(self, data: PersonIn) -> models.Person:
        await self._check_department(data.department_id)
        person = await self.repo.create(models.Person(**data.model_dump()))
        logger.info("created person %s", person.id)
        return await self.get_person(person.id)

    async def update_person(self, person_id: int, data: PersonIn) -> models.Person:
        logger.debug("update person %s payload=%s", person_id, data.model_dump())
        person = await self.repo.get(person_id)
        if person is None:
            raise NotFoundError(self.not_found_message)
        await self._check_department(data.department_id)
        for field, value in data.model_dump().items():
            setattr(person, field, value)
        await self.repo.save(person)
        logger.info("updated person %s", person_id)
        return await self.get_person(person_id)

    async def delete_person(self, person_id: int) -> None:
        person = await self.repo.get(person_id)
        if person is None:
            raise NotFoundError(self.not_found_message)
        await self.repo.delete(person)
        logger.info("deleted person %s", person_id)
