"""Voices API routes."""
import logging
from datetime import datetime

from fastapi import APIRouter, Response, status
from sqlalchemy import select

from app.api.scripts import build_voice_track, get_owned_script
from app.core.deps import CurrentUserDep, DbDep, TTSEngineDep
from app.core.exceptions import BadRequestException, NotFoundException
from app.models.script_voice import ScriptVoice
from app.schemas.common import ApiResponse
from app.schemas.voice import ScriptVoiceRequest, Voice, VoiceTrack
from app.services.voices import get_voice_by_id, list_voices

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/voices", response_model=ApiResponse[list[Voice]])
async def get_voices():
    """List narration voices."""
    return ApiResponse(
        data=[Voice(id=v.id, title=v.title, demo_url=v.demo_url) for v in list_voices()]
    )


@router.get("/scripts/{script_id}/voice", response_model=ApiResponse[VoiceTrack])
async def get_script_voice(
    script_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Get the voice track attached to a script."""
    script = await get_owned_script(db, script_id, current_user.id)

    track = build_voice_track(script)
    if track is None:
        raise NotFoundException("No voice track found for this script")

    return ApiResponse(data=track)


@router.post("/scripts/{script_id}/voice", response_model=ApiResponse[VoiceTrack])
async def create_script_voice(
    script_id: str,
    request: ScriptVoiceRequest,
    response: Response,
    current_user: CurrentUserDep,
    db: DbDep,
    engine: TTSEngineDep,
):
    """Synthesize the script with a catalog voice.

    Returns 201 for a script's first track and 200 when replacing one.
    """
    script = await get_owned_script(db, script_id, current_user.id)

    if not script.content.strip():
        raise BadRequestException("Generate a script before creating audio.")

    voice_option = get_voice_by_id(request.voice_id)
    if voice_option is None:
        raise BadRequestException("Voice is not supported.")

    synthesis = await engine.synthesize(script.content, voice_option)

    now = datetime.utcnow()
    voice = script.voice
    had_voice = voice is not None
    if voice is None:
        voice = ScriptVoice(script_id=script.id, duration_seconds=None, created_at=now)
        script.voice = voice

    # created_at and duration_seconds survive re-synthesis
    voice.provider = synthesis.provider
    voice.voice_id = voice_option.id
    voice.voice_name = voice_option.title
    voice.audio_format = synthesis.format
    voice.audio_data = synthesis.audio
    voice.updated_at = now
    script.updated_at = now

    await db.commit()

    logger.info(f"Attached voice {voice_option.id} to script {script.id}")
    response.status_code = status.HTTP_200_OK if had_voice else status.HTTP_201_CREATED
    return ApiResponse(data=build_voice_track(script))


@router.get("/scripts/{script_id}/voice/audio")
async def get_script_voice_audio(
    script_id: str,
    current_user: CurrentUserDep,
    db: DbDep,
):
    """Stream the stored audio bytes."""
    script = await get_owned_script(db, script_id, current_user.id)

    result = await db.execute(
        select(ScriptVoice.audio_data, ScriptVoice.audio_format).where(
            ScriptVoice.script_id == script.id
        )
    )
    row = result.one_or_none()
    if row is None or not row.audio_data:
        raise NotFoundException("No audio available for this script")

    return Response(
        content=row.audio_data,
        media_type=row.audio_format or "audio/mpeg",
        headers={"Cache-Control": "no-store"},
    )
