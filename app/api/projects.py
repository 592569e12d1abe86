"""Projects API routes."""
import logging
from datetime import datetime

from fastapi import APIRouter, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUserDep, DbDep
from app.core.exceptions import NotFoundException
from app.models.project import Project as ProjectModel
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.project import Project, ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_owned_project(db: AsyncSession, project_id: str, owner_id: str) -> ProjectModel:
    """Load a project owned by owner_id.

    Missing and foreign projects are indistinguishable to the caller.
    """
    result = await db.execute(
        select(ProjectModel).where(
            ProjectModel.id == project_id,
            ProjectModel.owner_id == owner_id,
        )
    )
    project = result.scalar_one_or_none()

    if not project:
        raise NotFoundException("Project not found")

    return project


@router.get("", response_model=ApiResponse[PaginatedResponse[Project]])
async def list_projects(
    current_user: CurrentUserDep,
    db: DbDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """Get user's projects, most recently updated first."""
    query = select(ProjectModel).where(ProjectModel.owner_id == current_user.id)

    count_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = count_result.scalar() or 0

    query = query.order_by(ProjectModel.updated_at.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(query)
    projects = result.scalars().all()

    return ApiResponse(
        data=PaginatedResponse[Project].build(
            items=[Project.model_validate(p) for p in projects],
            total=total,
            page=page,
            page_size=page_size,
        )
    )


@router.get("/{project_id}", response_model=ApiResponse[Project])
async def get_project(
    project_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Get project details."""
    project = await get_owned_project(db, project_id, current_user.id)
    return ApiResponse(data=Project.model_validate(project))


@router.post("", response_model=ApiResponse[Project], status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Create a new project."""
    project = ProjectModel(
        owner_id=current_user.id,
        title=project_data.title,
        description=project_data.description or "",
        tags=project_data.tags or [],
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info(f"Created project {project.id} for user {current_user.id}")
    return ApiResponse(data=Project.model_validate(project))


@router.patch("/{project_id}", response_model=ApiResponse[Project])
async def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Update project."""
    project = await get_owned_project(db, project_id, current_user.id)

    for field, value in project_update.changes().items():
        setattr(project, field, value)
    project.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(project)

    return ApiResponse(data=Project.model_validate(project))


@router.delete("/{project_id}", response_model=ApiResponse[dict])
async def delete_project(
    project_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Delete project together with its script."""
    project = await get_owned_project(db, project_id, current_user.id)

    await db.delete(project)
    await db.commit()

    logger.info(f"Deleted project {project_id}")
    return ApiResponse(data={"deleted": True})
