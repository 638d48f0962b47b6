"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the ROI people and departments
API. Controllers are intentionally thin: they accept requests, delegate
to services, and translate results and service exceptions into
responses.

Endpoints implemented:
- GET/POST /api/departments
- GET/PUT/DELETE /api/departments/{id}
- GET/POST /api/people
- GET/PUT/DELETE /api/people/{id}
- GET /health
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Path, Request, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from . import services
from .config import Settings, settings as default_settings
from .cors import CorsPolicy, PolicyCORSMiddleware
from .database import Database, get_session
from .schemas import MAX_ID, MIN_ID, DepartmentIn, DepartmentOut, PersonIn, PersonOut
from .seed import ensure_seeded

logger = logging.getLogger("roi_api.api")

router = APIRouter(prefix="/api")

# ids outside the store range are malformed, not missing
RecordId = Annotated[int, Path(ge=MIN_ID, le=MAX_ID)]


def _not_found(exc: services.NotFoundError):
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get('/departments', response_model=List[DepartmentOut])
async def list_departments(db: AsyncSession = Depends(get_session)):
    """List all departments."""
    return await services.DepartmentService(db).list_departments()


@router.get('/departments/{department_id}', response_model=DepartmentOut)
async def get_department(department_id: RecordId, db: AsyncSession = Depends(get_session)):
    try:
        return await services.DepartmentService(db).get_department(department_id)
    except services.NotFoundError as e:
        raise _not_found(e)


@router.post('/departments', response_model=DepartmentOut, status_code=status.HTTP_201_CREATED)
async def create_department(payload: DepartmentIn, response: Response, db: AsyncSession = Depends(get_session)):
    """Create a department and point `Location` at it."""
    department = await services.DepartmentService(db).create_department(payload)
    response.headers['Location'] = f'/api/departments/{department.id}'
    return department


@router.put('/departments/{department_id}', response_model=DepartmentOut)
async def update_department(department_id: RecordId, payload: DepartmentIn, db: AsyncSession = Depends(get_session)):
    try:
        return await services.DepartmentService(db).update_department(department_id, payload)
    except services.NotFoundError as e:
        raise _not_found(e)


@router.delete('/departments/{department_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(department_id: RecordId, db: AsyncSession = Depends(get_session)):
    """Delete a department; its people become unassigned."""
    try:
        await services.DepartmentService(db).delete_department(department_id)
    except services.NotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get('/people', response_model=List[PersonOut])
async def list_people(db: AsyncSession = Depends(get_session)):
    """List all people, each with its department resolved."""
    return await services.PersonService(db).list_people()


@router.get('/people/{person_id}', response_model=PersonOut)
async def get_person(person_id: RecordId, db: AsyncSession = Depends(get_session)):
    try:
        return await services.PersonService(db).get_person(person_id)
    except services.NotFoundError as e:
        raise _not_found(e)


@router.post('/people', response_model=PersonOut, status_code=status.HTTP_201_CREATED)
async def create_person(payload: PersonIn, response: Response, db: AsyncSession = Depends(get_session)):
    """Create a person.

    Returns 400 when `department_id` names a department that does not exist.
    """
    try:
        person = await services.PersonService(db).create_person(payload)
    except services.InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    response.headers['Location'] = f'/api/people/{person.id}'
    return person


@router.put('/people/{person_id}', response_model=PersonOut)
async def update_person(person_id: RecordId, payload: PersonIn, db: AsyncSession = Depends(get_session)):
    """Replace every field of a person with the supplied record."""
    try:
        return await services.PersonService(db).update_person(person_id, payload)
    except services.NotFoundError as e:
        raise _not_found(e)
    except services.InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete('/people/{person_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(person_id: RecordId, db: AsyncSession = Depends(get_session)):
    try:
        await services.PersonService(db).delete_person(person_id)
    except services.NotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    context = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "client": request.client.host if request.client else "unknown",
    }
    try:
        response = await call_next(request)
    except Exception:
        context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", json.dumps(context, ensure_ascii=True))
        raise
    response.headers["X-Request-ID"] = req_id
    context["status_code"] = response.status_code
    context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/api"):
        logger.info("request_done %s", json.dumps(context, ensure_ascii=True))
    return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around its own store handle.

    Tables are created and the seed step runs during startup, before the
    first request is served.
    """
    settings = settings or default_settings
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    db = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.create_tables()
        if settings.SEED_ON_STARTUP:
            async with db.session() as session:
                await ensure_seeded(session)
        try:
            yield
        finally:
            await db.dispose()

    docs = settings.docs_enabled
    app = FastAPI(
        title="ROI API",
        description="Manage people and departments in the ROI system.",
        version="1.0",
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.db = db
    app.state.settings = settings

    app.middleware("http")(request_context_middleware)
    app.add_middleware(
        PolicyCORSMiddleware,
        read_policy=CorsPolicy("default", allow_origins=settings.READ_CORS_ORIGINS),
        write_policy=CorsPolicy("AllowAll", allow_origins=settings.WRITE_CORS_ORIGINS),
    )
    app.include_router(router, tags=["roi"])

    @app.get("/health")
    async def health():
        """Lightweight health check for uptime monitoring."""
        return {"status": "ok"}

    return app


app = create_app()
