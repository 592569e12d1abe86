"""Scripts API routes."""
import logging

from fastapi import APIRouter, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.projects import get_owned_project
from app.core.deps import (
    CurrentUserDep,
    DbDep,
    RateLimiterDep,
    ScriptGeneratorDep,
    enforce_script_rate_limit,
)
from app.core.exceptions import BadRequestException, NotFoundException
from app.models.script import Script as ScriptModel
from app.schemas.common import ApiResponse
from app.schemas.script import (
    EstimatePreviewRequest,
    PacingEstimateResponse,
    Script,
    ScriptCreate,
    ScriptUpdate,
)
from app.schemas.voice import VoiceTrack
from app.services.pacing import estimate
from app.services.script_workflow import ScriptWorkflow

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_owned_script(db: AsyncSession, script_id: str, owner_id: str) -> ScriptModel:
    """Load a script owned by owner_id.

    Missing and foreign scripts are indistinguishable to the caller.
    """
    result = await db.execute(
        select(ScriptModel).where(
            ScriptModel.id == script_id,
            ScriptModel.owner_id == owner_id,
        )
    )
    script = result.scalar_one_or_none()

    if not script:
        raise NotFoundException("Script not found")

    return script


def build_voice_track(script: ScriptModel) -> VoiceTrack | None:
    """Voice metadata with a cache-busting audio URL."""
    voice = script.voice
    if voice is None:
        return None

    ts = int(voice.updated_at.timestamp() * 1000)
    return VoiceTrack(
        provider=voice.provider,
        voice_id=voice.voice_id,
        voice_name=voice.voice_name,
        audio_format=voice.audio_format,
        duration_seconds=voice.duration_seconds,
        created_at=voice.created_at,
        updated_at=voice.updated_at,
        audio_url=f"/api/scripts/{script.id}/voice/audio?ts={ts}",
    )


def serialize_script(script: ScriptModel) -> Script:
    return Script(
        id=script.id,
        project_id=script.project_id,
        owner_id=script.owner_id,
        topic=script.topic,
        tone=script.tone,
        style=script.style,
        length_minutes=script.length_minutes,
        chapters=script.chapters,
        outline=script.outline,
        content=script.content,
        target_word_count=script.target_word_count,
        actual_word_count=script.actual_word_count,
        status=script.status,
        error=script.error,
        created_at=script.created_at,
        updated_at=script.updated_at,
        voice=build_voice_track(script),
    )


@router.get("", response_model=ApiResponse[list[Script]])
async def list_scripts(
    current_user: CurrentUserDep,
    db: DbDep,
    project_id: str | None = Query(None),
):
    """List the user's scripts for a project, most recently updated first."""
    if not project_id:
        raise BadRequestException("project_id is required")

    result = await db.execute(
        select(ScriptModel)
        .where(
            ScriptModel.project_id == project_id,
            ScriptModel.owner_id == current_user.id,
        )
        .order_by(ScriptModel.updated_at.desc())
    )
    scripts = result.scalars().all()

    return ApiResponse(data=[serialize_script(s) for s in scripts])


@router.post("", response_model=ApiResponse[Script], status_code=status.HTTP_201_CREATED)
async def create_script(
    script_data: ScriptCreate,
    current_user: CurrentUserDep,
    db: DbDep,
    limiter: RateLimiterDep,
    generator: ScriptGeneratorDep,
):
    """Create a script for a project and generate its content.

    A failed generation is recorded on the script (status ``error``) and
    reported as a 502 carrying the script id.
    """
    enforce_script_rate_limit(limiter, current_user.id)

    project = await get_owned_project(db, script_data.project_id, current_user.id)

    workflow = ScriptWorkflow(db, generator)
    script = await workflow.create(current_user.id, project, script_data)

    return ApiResponse(data=serialize_script(script))


@router.post("/estimate", response_model=ApiResponse[PacingEstimateResponse])
async def preview_estimate(
    request: EstimatePreviewRequest,
    current_user: CurrentUserDep,
):
    """Estimate an unsaved brief and draft without touching any script."""
    result = estimate(request.length_minutes, request.tone, request.style, request.content)
    return ApiResponse(data=PacingEstimateResponse(**result.to_dict()))


@router.get("/{script_id}", response_model=ApiResponse[Script])
async def get_script(
    script_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Get script details."""
    script = await get_owned_script(db, script_id, current_user.id)
    return ApiResponse(data=serialize_script(script))


@router.patch("/{script_id}", response_model=ApiResponse[Script])
async def update_script(
    script_id: str,
    script_update: ScriptUpdate,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Edit the brief or content; word counts and outline follow the edit."""
    script = await get_owned_script(db, script_id, current_user.id)

    workflow = ScriptWorkflow(db)
    script = await workflow.apply_update(script, script_update)

    return ApiResponse(data=serialize_script(script))


@router.delete("/{script_id}", response_model=ApiResponse[dict])
async def delete_script(
    script_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Delete script and its voice track."""
    script = await get_owned_script(db, script_id, current_user.id)

    await db.delete(script)
    await db.commit()

    logger.info(f"Deleted script {script_id}")
    return ApiResponse(data={"deleted": True})


@router.post("/{script_id}/generate", response_model=ApiResponse[Script])
async def regenerate_script(
    script_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
    limiter: RateLimiterDep,
    generator: ScriptGeneratorDep,
):
    """Retry generation for a ready or failed script."""
    enforce_script_rate_limit(limiter, current_user.id)

    script = await get_owned_script(db, script_id, current_user.id)

    workflow = ScriptWorkflow(db, generator)
    script = await workflow.regenerate(script)

    return ApiResponse(data=serialize_script(script))


@router.get("/{script_id}/estimate", response_model=ApiResponse[PacingEstimateResponse])
async def re_estimate_script(
    script_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Recompute and store target and actual word counts."""
    script = await get_owned_script(db, script_id, current_user.id)

    workflow = ScriptWorkflow(db)
    result = await workflow.re_estimate(script)

    return ApiResponse(data=PacingEstimateResponse(**result.to_dict()))
