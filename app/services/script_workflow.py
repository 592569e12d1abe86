"""Script lifecycle workflow.

A script is created in ``draft``, moved to ``generating`` before the planner
is called, and ends each attempt in ``ready`` or ``error``. Retrying is an
explicit request that moves ``ready``/``error`` back to ``generating``.
Edits never change status.
"""
import logging
from datetime import datetime
from typing import Awaitable, Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import LLMError, ScriptGenerationError, ScriptStateError
from app.models.project import Project
from app.models.script import Script, ScriptStatus, ScriptTone
from app.schemas.script import ScriptBrief, ScriptUpdate
from app.services.pacing import PacingEstimate, estimate, target_word_count
from app.services.script_planner import (
    GeneratedScript,
    ScriptGenerationParams,
    generate_script,
)
from app.utils.text import count_words, extract_outline, truncate_text

logger = logging.getLogger(__name__)

ScriptGenerator = Callable[[ScriptGenerationParams], Awaitable[GeneratedScript]]

GENERIC_FAILURE_MESSAGE = "Generation failed"
DUPLICATE_SCRIPT_MESSAGE = "A script already exists for this project"

ALLOWED_TRANSITIONS: dict[ScriptStatus, frozenset[ScriptStatus]] = {
    ScriptStatus.DRAFT: frozenset({ScriptStatus.GENERATING}),
    ScriptStatus.GENERATING: frozenset({ScriptStatus.READY, ScriptStatus.ERROR}),
    ScriptStatus.READY: frozenset({ScriptStatus.GENERATING}),
    ScriptStatus.ERROR: frozenset({ScriptStatus.GENERATING}),
}


def can_transition(current: ScriptStatus | str, target: ScriptStatus | str) -> bool:
    """Whether the lifecycle allows moving from current to target."""
    try:
        current, target = ScriptStatus(current), ScriptStatus(target)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current]


def transition(script: Script, target: ScriptStatus) -> None:
    """Move script to target status.

    Raises:
        ScriptStateError: If the lifecycle does not allow the move
    """
    if not can_transition(script.status, target):
        if script.status == ScriptStatus.GENERATING.value and target == ScriptStatus.GENERATING:
            raise ScriptStateError("Script generation is already in progress")
        raise ScriptStateError(
            f"Cannot move script from '{script.status}' to '{ScriptStatus(target).value}'"
        )
    script.status = ScriptStatus(target).value


class ScriptWorkflow:
    """Creates, generates, edits and re-estimates scripts for one session."""

    def __init__(self, db: AsyncSession, generator: ScriptGenerator = generate_script):
        self.db = db
        self.generator = generator

    async def create(self, owner_id: str, project: Project, brief: ScriptBrief) -> Script:
        """Persist a new script for project and run one generation attempt.

        Raises:
            ScriptStateError: If the project already has a script
            ScriptGenerationError: If the attempt failed (recorded on the script)
        """
        project_id = project.id
        if await self.project_has_script(project_id):
            raise ScriptStateError(DUPLICATE_SCRIPT_MESSAGE)

        style = brief.style or ""
        script = Script(
            owner_id=owner_id,
            project_id=project_id,
            topic=brief.topic,
            tone=ScriptTone(brief.tone).value,
            style=style,
            length_minutes=brief.length_minutes,
            chapters=brief.chapters,
            outline=[],
            content="",
            target_word_count=target_word_count(brief.length_minutes, brief.tone, style),
            actual_word_count=0,
            status=ScriptStatus.DRAFT.value,
            error="",
            voice=None,
        )
        transition(script, ScriptStatus.GENERATING)
        self.db.add(script)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # A concurrent request created the project's script after our check
            await self.db.rollback()
            logger.warning(f"Lost script creation race for project {project_id}")
            raise ScriptStateError(DUPLICATE_SCRIPT_MESSAGE) from e

        logger.info(
            f"Created script {script.id} for project {project_id}: "
            f"'{truncate_text(script.topic, 60)}', target {script.target_word_count} words"
        )

        await self.generate(script)
        return script

    async def project_has_script(self, project_id: str) -> bool:
        result = await self.db.execute(select(Script.id).where(Script.project_id == project_id))
        return result.scalar_one_or_none() is not None

    async def regenerate(self, script: Script) -> Script:
        """Explicit retry of a ready or failed script."""
        transition(script, ScriptStatus.GENERATING)
        await self.db.commit()

        logger.info(f"Regenerating script {script.id}")
        await self.generate(script)
        return script

    async def generate(self, script: Script) -> Script:
        """Run exactly one generation attempt for a script in ``generating``.

        On failure the script is left in ``error`` with the failure message and
        its content untouched, then the failure is re-raised.
        """
        if script.status != ScriptStatus.GENERATING.value:
            raise ScriptStateError(
                f"Script must be generating to run the planner, not '{script.status}'"
            )

        params = ScriptGenerationParams(
            topic=script.topic,
            tone=script.tone,
            style=script.style or None,
            chapters=script.chapters,
            target_word_count=script.target_word_count,
        )

        try:
            result = await self.generator(params)
            if not result.content or not result.content.strip():
                raise LLMError("No content returned from the language model")
        except Exception as e:
            message = str(e) or GENERIC_FAILURE_MESSAGE
            transition(script, ScriptStatus.ERROR)
            script.error = message
            await self.db.commit()
            logger.error(f"Script generation failed for {script.id}: {message}", exc_info=True)
            raise ScriptGenerationError(message, script.id) from e

        script.content = result.content
        script.outline = list(result.outline)
        script.actual_word_count = result.actual_word_count
        script.error = ""
        transition(script, ScriptStatus.READY)
        await self.db.commit()

        logger.info(
            f"Script {script.id} ready: {script.actual_word_count}/"
            f"{script.target_word_count} words, {len(script.outline)} chapters"
        )
        return script

    async def apply_update(self, script: Script, update: ScriptUpdate) -> Script:
        """Apply a partial edit, keeping derived counts in step.

        Status is never changed by an edit.
        """
        changes = update.changes()

        if "topic" in changes:
            script.topic = changes["topic"]
        if "chapters" in changes:
            script.chapters = changes["chapters"]

        if {"tone", "style", "length_minutes"} & changes.keys():
            if "tone" in changes:
                script.tone = ScriptTone(changes["tone"]).value
            if "style" in changes:
                script.style = changes["style"]
            if "length_minutes" in changes:
                script.length_minutes = changes["length_minutes"]
            script.target_word_count = target_word_count(
                script.length_minutes, script.tone, script.style
            )

        if "content" in changes:
            script.content = changes["content"]
            script.actual_word_count = count_words(script.content)
            script.outline = extract_outline(script.content)

        script.updated_at = datetime.utcnow()
        await self.db.commit()
        return script

    async def re_estimate(self, script: Script) -> PacingEstimate:
        """Recompute and persist both word counts from the current brief and content."""
        result = estimate(script.length_minutes, script.tone, script.style, script.content)
        script.target_word_count = result.target_word_count
        script.actual_word_count = result.actual_word_count
        script.updated_at = datetime.utcnow()
        await self.db.commit()
        return result
