import pytest

from roi_api import models
from roi_api.repositories import DepartmentRepository, PersonRepository
from roi_api.seed import DEPARTMENTS, PEOPLE, ensure_seeded


@pytest.mark.asyncio
async def test_seed_is_idempotent(session):
    first = await ensure_seeded(session)
    second = await ensure_seeded(session)
    assert first == {'departments': len(DEPARTMENTS), 'people': len(PEOPLE)}
    assert second == {'departments': 0, 'people': 0}
    assert await DepartmentRepository(session).count() == 5
    assert await PersonRepository(session).count() == 5


@pytest.mark.asyncio
async def test_seeded_people_reference_departments_by_position(session):
    await ensure_seeded(session)
    people = {p.name: p for p in await PersonRepository(session).list()}
    assert people['John Smith'].department.name == 'General'
    assert people['Sue White'].department.name == 'Information Communications Technology'
    assert people['Mick Green'].department.name == 'Finance'


@pytest.mark.asyncio
async def test_existing_departments_are_kept(session):
    session.add(models.Department(name='Only'))
    await session.commit()
    created = await ensure_seeded(session)
    assert created == {'departments': 0, 'people': 5}
    names = [d.name for d in await DepartmentRepository(session).list()]
    assert names == ['Only']
    people = await PersonRepository(session).list()
    # only position 0 exists, the rest are left unassigned
    assert people[0].department.name == 'Only'
    assert all(p.department_id is None for p in people[1:])
