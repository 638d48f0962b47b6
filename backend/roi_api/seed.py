"""First-run seed data.

`ensure_seeded` inserts the default departments when the department
table is empty and the default people when the person table is empty.
Both checks and inserts run in one transaction, so a concurrent reader
sees either no seed rows or all of them, and calling it again once data
exists changes nothing.
"""

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from . import models, repositories

logger = logging.getLogger("roi_api.seed")

DEPARTMENTS = [
    "General",
    "Information Communications Technology",
    "Finance",
    "Marketing",
    "Human Resources",
]

# department is the position in DEPARTMENTS
PEOPLE = [
    {"name": "John Smith", "phone": "02 9988 2211", "department": 0, "street": "1 Code Lane",
     "city": "Javaville", "state": "NSW", "zip": "0100", "country": "Australia"},
    {"name": "Sue White", "phone": "03 8899 2255", "department": 1, "street": "16 Bit way",
     "city": "Byte Cove", "state": "QLD", "zip": "1101", "country": "Australia"},
    {"name": "Bob O' Bits", "phone": "05 7788 2255", "department": 2, "street": "8 Silicon Road",
     "city": "Cloud Hills", "state": "VIC", "zip": "1001", "country": "Australia"},
    {"name": "Mary Blue", "phone": "06 4455 9988", "department": 1, "street": "4 Processor Boulevard",
     "city": "Appletson", "state": "NT", "zip": "1010", "country": "Australia"},
    {"name": "Mick Green", "phone": "02 9988 1122", "department": 2, "street": "700 Bandwidth Street",
     "city": "Bufferland", "state": "NSW", "zip": "0110", "country": "Australia"},
]


async def ensure_seeded(session: AsyncSession) -> dict:
    """Seed empty tables and return how many rows were inserted."""
    dept_repo = repositories.DepartmentRepository(session)
    person_repo = repositories.PersonRepository(session)
    created = {"departments": 0, "people": 0}

    async with session.begin():
        if await dept_repo.count() == 0:
            for name in DEPARTMENTS:
                session.add(models.Department(name=name))
            await session.flush()
            created["departments"] = len(DEPARTMENTS)

        if await person_repo.count() == 0:
            # people reference departments by position, whatever ids the store assigned
            departments = await dept_repo.list()
            for row in PEOPLE:
                fields = dict(row)
                position = fields.pop("department")
                department_id = departments[position].id if position < len(departments) else None
                session.add(models.Person(department_id=department_id, **fields))
            created["people"] = len(PEOPLE)

    if created["departments"] or created["people"]:
        logger.info("seeded %d departments and %d people", created["departments"], created["people"])
    else:
        logger.info("seed skipped, tables already populated")
    return created
