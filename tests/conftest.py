"""Shared fixtures: in-memory database, app client and fake collaborators."""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.deps import get_script_generator, get_tts_engine
from app.core.rate_limit import FixedWindowRateLimiter, get_rate_limiter
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.services.script_planner import GeneratedScript, ScriptGenerationParams
from app.services.tts_engine import SynthesisResult, TTSEngine
from app.services.voices import VoiceOption
from app.utils.text import count_words, extract_outline

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SAMPLE_CONTENT = """Tonight we follow the moon as it pulls the oceans.

# Chapter 1: The Pull

The moon tugs on the water and the water answers.

# Chapter 2: The Turn

Twice a day the sea leans in and leans away."""


class FakeScriptGenerator:
    """Stands in for the LLM planner; set `error` to make it fail."""

    def __init__(self, content: str = SAMPLE_CONTENT):
        self.content = content
        self.error: Exception | None = None
        self.calls: list[ScriptGenerationParams] = []

    async def __call__(self, params: ScriptGenerationParams) -> GeneratedScript:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return GeneratedScript(
            content=self.content,
            outline=extract_outline(self.content),
            actual_word_count=count_words(self.content),
        )


class FakeTTSEngine(TTSEngine):
    """Returns fixed bytes instead of calling a speech API."""

    provider = "openai"

    def __init__(self):
        self.audio = b"ID3-fake-audio"
        self.calls: list[tuple[str, str]] = []

    async def synthesize(self, text: str, voice: VoiceOption) -> SynthesisResult:
        self.calls.append((text, voice.id))
        return SynthesisResult(audio=self.audio, format="audio/mp3", provider=self.provider)


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def generator() -> FakeScriptGenerator:
    return FakeScriptGenerator()


@pytest.fixture
def tts_engine() -> FakeTTSEngine:
    return FakeTTSEngine()


@pytest.fixture
def rate_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter()


@pytest.fixture
async def client(session_factory, generator, tts_engine, rate_limiter):
    """Create test client wired to the in-memory database and fakes."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_script_generator] = lambda: generator
    fastapi_app.dependency_overrides[get_tts_engine] = lambda: tts_engine
    fastapi_app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    async with AsyncClient(
        transport=ASGITransport(app=fastapi_app),
        base_url="http://test",
    ) as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register an account and return its bearer headers."""

    async def _register(email: str = "narrator@example.com", password: str = "password123") -> dict:
        response = await client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": "Narrator"},
        )
        assert response.status_code == 201, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
async def auth_headers(register) -> dict:
    return await register()


@pytest.fixture
def create_project(client):
    """Create a project for the given headers and return its id."""

    async def _create_project(headers: dict, title: str = "Tides Explained") -> str:
        response = await client.post(
            "/api/projects",
            json={"title": title, "description": "Science narration", "tags": ["science"]},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]

    return _create_project


@pytest.fixture
def script_payload():
    """Valid creation payload for a project id."""

    def _payload(project_id: str, **overrides) -> dict:
        payload = {
            "project_id": project_id,
            "topic": "How ocean tides work",
            "tone": "educational",
            "length_minutes": 5,
            "chapters": 2,
        }
        payload.update(overrides)
        return payload

    return _payload
