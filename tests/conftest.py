"""
Pytest configuration and fixtures.

Services run against in-memory repositories that mirror the SQLAlchemy
repositories' method signatures, so no database is needed.
"""

import itertools
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars!"
os.environ["DATABASE_ENABLED"] = "false"
os.environ.pop("DATABASE_URL", None)

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


# ============ In-memory store ============


class FakeDB:
    """Rows shared by the fake repositories of one test."""

    def __init__(self):
        self.users: dict[UUID, SimpleNamespace] = {}
        self.categories: dict[UUID, SimpleNamespace] = {}
        self.prompts: dict[UUID, SimpleNamespace] = {}
        self.ratings: dict[tuple[UUID, UUID], SimpleNamespace] = {}
        self.comments: list[SimpleNamespace] = []
        self.saves: dict[tuple[UUID, UUID], SimpleNamespace] = {}
        self.follows: dict[tuple[UUID, UUID], SimpleNamespace] = {}
        self.models: dict[str, SimpleNamespace] = {}
        self._clock = itertools.count(1)

    def now(self) -> datetime:
        """Strictly increasing timestamps so ordering is deterministic."""
        return BASE_TIME + timedelta(seconds=next(self._clock))

    # ---- builders ----

    def add_user(self, name: str | None = "Alice", image=None, bio=None, email=None):
        user = SimpleNamespace(
            id=uuid4(),
            auth_id=f"auth-{uuid4().hex[:8]}",
            name=name,
            email=email,
            image=image,
            bio=bio,
            created_at=self.now(),
            last_login_at=None,
        )
        self.users[user.id] = user
        return user

    def add_category(self, name: str, image=None, description=None):
        category = SimpleNamespace(id=uuid4(), name=name, image=image, description=description)
        self.categories[category.id] = category
        return category

    def add_prompt(
        self,
        user,
        title: str = "Blog Post Outliner",
        description: str = "Outlines a blog post",
        prompt_text: str = "Write an outline about {topic}",
        suggested_model: str = "gpt-4o",
        tags: str | None = None,
        image: str | None = None,
        category=None,
    ):
        now = self.now()
        prompt = SimpleNamespace(
            id=uuid4(),
            user_id=user.id,
            title=title,
            description=description,
            prompt_text=prompt_text,
            example_outputs=None,
            suggested_model=suggested_model,
            image=image,
            tags=tags,
            category_id=category.id if category else None,
            created_at=now,
            updated_at=now,
        )
        self.prompts[prompt.id] = prompt
        return prompt

    def add_rating(self, prompt, user, value: int):
        self.ratings[(prompt.id, user.id)] = SimpleNamespace(
            prompt_id=prompt.id, user_id=user.id, rating=value
        )

    def add_comment(self, prompt, user, text: str):
        comment = SimpleNamespace(
            id=uuid4(),
            prompt_id=prompt.id,
            user_id=user.id,
            text=text,
            created_at=self.now(),
            user=user,
        )
        self.comments.append(comment)
        return comment

    def add_model(self, name: str, slug: str, provider=None):
        model = SimpleNamespace(id=uuid4(), name=name, slug=slug, provider=provider, description=None)
        self.models[slug] = model
        return model

    def add_save(self, user, prompt):
        self.saves[(user.id, prompt.id)] = SimpleNamespace(
            user_id=user.id, prompt_id=prompt.id, created_at=self.now()
        )

    def add_follow(self, follower, following):
        self.follows[(follower.id, following.id)] = SimpleNamespace(
            follower_id=follower.id, following_id=following.id, created_at=self.now()
        )


# ============ Fake repositories ============


class FakeUserRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get_by_id(self, user_id):
        return self.db.users.get(user_id)

    async def get_by_auth_id(self, auth_id):
        return next((u for u in self.db.users.values() if u.auth_id == auth_id), None)

    async def exists(self, user_id):
        return user_id in self.db.users

    async def create_or_update_from_auth(self, auth_id, email=None, name=None, image=None):
        user = await self.get_by_auth_id(auth_id)
        if user:
            user.email = user.email or email
            user.name = user.name or name
            user.image = user.image or image
        else:
            user = self.db.add_user(name=name or email or auth_id, image=image, email=email)
            user.auth_id = auth_id
        user.last_login_at = self.db.now()
        return user

    async def update_profile(self, user_id, name=None, bio=None, image=None):
        user = self.db.users.get(user_id)
        if not user:
            return None
        if name is not None:
            user.name = name
        if bio is not None:
            user.bio = bio
        if image is not None:
            user.image = image
        return user

    async def get_counts(self, user_id):
        return {
            "prompt_count": sum(1 for p in self.db.prompts.values() if p.user_id == user_id),
            "follower_count": sum(1 for (_, b) in self.db.follows if b == user_id),
            "following_count": sum(1 for (a, _) in self.db.follows if a == user_id),
        }


class FakePromptRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    def _hydrate(self, prompt):
        prompt.user = self.db.users.get(prompt.user_id)
        prompt.category = self.db.categories.get(prompt.category_id) if prompt.category_id else None
        prompt.ratings = [r for r in self.db.ratings.values() if r.prompt_id == prompt.id]
        prompt.comments = sorted(
            (c for c in self.db.comments if c.prompt_id == prompt.id),
            key=lambda c: c.created_at,
            reverse=True,
        )
        return prompt

    async def get_by_id(self, prompt_id):
        prompt = self.db.prompts.get(prompt_id)
        return self._hydrate(prompt) if prompt else None

    async def exists(self, prompt_id):
        return prompt_id in self.db.prompts

    async def get_with_relations(self, prompt_id):
        return await self.get_by_id(prompt_id)

    async def list_prompts(
        self,
        user_id=None,
        author_ids=None,
        category_id=None,
        category_name=None,
        search=None,
        sort_by="recent",
        limit=20,
        offset=0,
    ):
        rows = [self._hydrate(p) for p in self.db.prompts.values()]
        if user_id is not None:
            rows = [p for p in rows if p.user_id == user_id]
        if author_ids is not None:
            rows = [p for p in rows if p.user_id in author_ids]
        if category_id is not None:
            rows = [p for p in rows if p.category_id == category_id]
        if category_name:
            rows = [p for p in rows if p.category and category_name.lower() in p.category.name.lower()]
        if search:
            needle = search.lower()
            rows = [p for p in rows if needle in p.title.lower() or needle in p.description.lower()]

        if sort_by == "trending":
            rows.sort(key=lambda p: (len(p.ratings), p.created_at), reverse=True)
        else:
            rows.sort(key=lambda p: p.created_at, reverse=True)

        return rows[offset:offset + limit], len(rows)

    async def list_saved_by_user(self, user_id, limit=20, offset=0):
        saves = sorted(
            (s for s in self.db.saves.values() if s.user_id == user_id),
            key=lambda s: s.created_at,
            reverse=True,
        )
        rows = [self._hydrate(self.db.prompts[s.prompt_id]) for s in saves]
        return rows[offset:offset + limit], len(rows)

    @asynccontextmanager
    async def transaction(self):
        snapshot = dict(self.db.prompts)
        try:
            yield
        except Exception:
            self.db.prompts = snapshot
            raise

    async def create(self, user_id, title, description, prompt_text, suggested_model,
                     example_outputs=None, tags=None, category_id=None, image=None):
        prompt = self.db.add_prompt(
            self.db.users[user_id],
            title=title,
            description=description,
            prompt_text=prompt_text,
            suggested_model=suggested_model,
            tags=tags,
            image=image,
        )
        prompt.example_outputs = example_outputs
        prompt.category_id = category_id
        return prompt

    async def update(self, prompt_id, **kwargs):
        prompt = self.db.prompts.get(prompt_id)
        if not prompt:
            return None
        for key, value in kwargs.items():
            setattr(prompt, key, value)
        prompt.updated_at = self.db.now()
        return prompt


class FakeCategoryRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get_by_id(self, category_id):
        return self.db.categories.get(category_id)

    async def list_with_counts(self, sort_by="popular", limit=50):
        rows = [
            (c, sum(1 for p in self.db.prompts.values() if p.category_id == c.id))
            for c in self.db.categories.values()
        ]
        if sort_by == "name":
            rows.sort(key=lambda row: row[0].name)
        else:
            rows.sort(key=lambda row: (-row[1], row[0].name))
        return rows[:limit]


class FakeRatingRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get(self, prompt_id, user_id):
        return self.db.ratings.get((prompt_id, user_id))

    async def upsert(self, prompt_id, user_id, rating):
        existing = self.db.ratings.get((prompt_id, user_id))
        if existing:
            existing.rating = rating
        else:
            self.db.ratings[(prompt_id, user_id)] = SimpleNamespace(
                prompt_id=prompt_id, user_id=user_id, rating=rating
            )

    async def list_values(self, prompt_id):
        return [r.rating for r in self.db.ratings.values() if r.prompt_id == prompt_id]


class FakeCommentRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def create(self, prompt_id, user_id, text):
        return self.db.add_comment(self.db.prompts[prompt_id], self.db.users[user_id], text)

    async def list_by_prompt(self, prompt_id):
        return sorted(
            (c for c in self.db.comments if c.prompt_id == prompt_id),
            key=lambda c: c.created_at,
            reverse=True,
        )


class FakeSavedPromptRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get(self, user_id, prompt_id):
        return self.db.saves.get((user_id, prompt_id))

    async def add(self, user_id, prompt_id):
        if (user_id, prompt_id) in self.db.saves:
            return False
        self.db.saves[(user_id, prompt_id)] = SimpleNamespace(
            user_id=user_id, prompt_id=prompt_id, created_at=self.db.now()
        )
        return True

    async def remove(self, user_id, prompt_id):
        return self.db.saves.pop((user_id, prompt_id), None) is not None

    async def count_by_prompt(self, prompt_id):
        return sum(1 for (_, p) in self.db.saves if p == prompt_id)

    async def count_by_user(self, user_id):
        return sum(1 for (u, _) in self.db.saves if u == user_id)

    async def list_prompt_ids(self, user_id):
        return [p for (u, p) in self.db.saves if u == user_id]


class FakeFollowRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get(self, follower_id, following_id):
        return self.db.follows.get((follower_id, following_id))

    async def create(self, follower_id, following_id):
        if (follower_id, following_id) in self.db.follows:
            raise IntegrityError(
                "INSERT INTO follows", {}, Exception("duplicate key value violates unique constraint")
            )
        edge = SimpleNamespace(
            follower_id=follower_id, following_id=following_id, created_at=self.db.now()
        )
        self.db.follows[(follower_id, following_id)] = edge
        return edge

    async def delete(self, follower_id, following_id):
        return self.db.follows.pop((follower_id, following_id), None) is not None

    async def count_followers(self, user_id):
        return sum(1 for (_, b) in self.db.follows if b == user_id)

    async def count_following(self, user_id):
        return sum(1 for (a, _) in self.db.follows if a == user_id)

    def _edges(self, predicate):
        edges = sorted(
            (e for e in self.db.follows.values() if predicate(e)),
            key=lambda e: e.created_at,
            reverse=True,
        )
        for e in edges:
            e.follower = self.db.users[e.follower_id]
            e.following = self.db.users[e.following_id]
        return edges

    async def list_followers(self, user_id, limit=20, offset=0):
        return self._edges(lambda e: e.following_id == user_id)[offset:offset + limit]

    async def list_following(self, user_id, limit=20, offset=0):
        return self._edges(lambda e: e.follower_id == user_id)[offset:offset + limit]

    async def following_ids(self, follower_id):
        return [b for (a, b) in self.db.follows if a == follower_id]

    async def following_ids_among(self, follower_id, candidate_ids):
        return {b for (a, b) in self.db.follows if a == follower_id and b in candidate_ids}


class FakeAIModelRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get_by_slug(self, slug):
        return self.db.models.get(slug)

    async def upsert(self, name, slug, provider=None, description=None):
        model = self.db.models.get(slug)
        if model:
            model.description = description
            return model
        model = SimpleNamespace(id=uuid4(), name=name, slug=slug, provider=provider, description=description)
        self.db.models[slug] = model
        return model

    async def list_with_prompt_counts(self):
        rows = []
        for model in sorted(self.db.models.values(), key=lambda m: m.name):
            count = sum(
                1 for p in self.db.prompts.values() if p.suggested_model in (model.slug, model.name)
            )
            rows.append((model, count))
        return rows


# ============ Fixtures ============


@pytest.fixture
def fake_db() -> FakeDB:
    return FakeDB()


@pytest.fixture
def image_storage(tmp_path):
    from services.image_storage import PromptImageStorage

    return PromptImageStorage(base_dir=str(tmp_path / "uploads"), url_prefix="/uploads/images")


@pytest.fixture
def prompt_service(fake_db, image_storage):
    from services.prompt_service import PromptService

    return PromptService(
        FakePromptRepository(fake_db),
        FakeSavedPromptRepository(fake_db),
        FakeFollowRepository(fake_db),
        FakeCategoryRepository(fake_db),
        image_storage,
    )


@pytest.fixture
def rating_service(fake_db):
    from services.rating_service import RatingService

    return RatingService(FakeRatingRepository(fake_db), FakePromptRepository(fake_db))


@pytest.fixture
def save_service(fake_db, image_storage):
    from services.save_service import SaveService

    return SaveService(FakeSavedPromptRepository(fake_db), FakePromptRepository(fake_db), image_storage)


@pytest.fixture
def follow_service(fake_db):
    from services.follow_service import FollowService

    return FollowService(FakeFollowRepository(fake_db), FakeUserRepository(fake_db))


@pytest.fixture
def comment_service(fake_db):
    from services.comment_service import CommentService

    return CommentService(FakeCommentRepository(fake_db), FakePromptRepository(fake_db), max_length=50)


@pytest.fixture
def category_service(fake_db):
    from services.catalog_service import CategoryService

    return CategoryService(FakeCategoryRepository(fake_db))


@pytest.fixture
def model_repo(fake_db):
    return FakeAIModelRepository(fake_db)


@pytest.fixture
def model_service(model_repo):
    from services.catalog_service import ModelService

    return ModelService(model_repo)


@pytest.fixture
def user_service(fake_db):
    from services.user_service import UserService

    return UserService(FakeUserRepository(fake_db), FakeFollowRepository(fake_db))


# ============ App Fixtures ============


@pytest.fixture
def app(
    prompt_service,
    rating_service,
    save_service,
    follow_service,
    comment_service,
    category_service,
    model_service,
    user_service,
):
    """The application with every service wired to the in-memory store."""
    from api import dependencies
    from api.main import app as fastapi_app

    overrides = {
        dependencies.get_prompt_service: lambda: prompt_service,
        dependencies.get_rating_service: lambda: rating_service,
        dependencies.get_save_service: lambda: save_service,
        dependencies.get_follow_service: lambda: follow_service,
        dependencies.get_comment_service: lambda: comment_service,
        dependencies.get_category_service: lambda: category_service,
        dependencies.get_model_service: lambda: model_service,
        dependencies.get_user_service: lambda: user_service,
    }
    fastapi_app.dependency_overrides.update(overrides)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Synchronous test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Asynchronous test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers_for():
    """Build bearer headers for a stored user."""
    from core.security import create_access_token

    def _headers(user) -> dict[str, str]:
        token = create_access_token(data={"sub": user.auth_id, "name": user.name, "email": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ============ Test Settings ============


@pytest.fixture
def test_settings(monkeypatch):
    """Override settings for testing."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-for-testing-only-32chars!")

    # Clear cached settings
    from core.config import get_settings

    get_settings.cache_clear()

    yield

    # Restore cached settings
    get_settings.cache_clear()
