"""
Unit tests for comments, catalog listings and user profiles.
"""

from uuid import uuid4

import pytest

from core.auth import AppUser
from core.exceptions import PromptNotFoundError, UserNotFoundError, ValidationError


class TestCommentService:
    @pytest.mark.asyncio
    async def test_add_and_list(self, fake_db, comment_service):
        user = fake_db.add_user(name="Ann")
        prompt = fake_db.add_prompt(user)

        await comment_service.add_comment(prompt.id, user.id, "  Great prompt  ")
        added = await comment_service.add_comment(prompt.id, user.id, "Second")
        comments = await comment_service.list_comments(prompt.id)

        assert added.user_name == "Ann"
        assert [c.text for c in comments] == ["Second", "Great prompt"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_blank_rejected(self, fake_db, comment_service, text):
        user = fake_db.add_user()
        prompt = fake_db.add_prompt(user)

        with pytest.raises(ValidationError):
            await comment_service.add_comment(prompt.id, user.id, text)

    @pytest.mark.asyncio
    async def test_too_long_rejected(self, fake_db, comment_service):
        user = fake_db.add_user()
        prompt = fake_db.add_prompt(user)

        with pytest.raises(ValidationError):
            await comment_service.add_comment(prompt.id, user.id, "x" * 51)

        assert fake_db.comments == []

    @pytest.mark.asyncio
    async def test_unknown_prompt(self, fake_db, comment_service):
        user = fake_db.add_user()

        with pytest.raises(PromptNotFoundError):
            await comment_service.add_comment(uuid4(), user.id, "Hello")


class TestCategoryService:
    @pytest.mark.asyncio
    async def test_popular_then_name(self, fake_db, category_service):
        author = fake_db.add_user()
        writing = fake_db.add_category("Writing")
        coding = fake_db.add_category("Coding", image="https://img/coding.png")
        fake_db.add_category("Art")
        fake_db.add_prompt(author, category=writing)
        fake_db.add_prompt(author, category=writing)
        fake_db.add_prompt(author, category=coding)

        popular = await category_service.list_categories()
        by_name = await category_service.list_categories("name")

        assert [(c.name, c.prompt_count) for c in popular] == [("Writing", 2), ("Coding", 1), ("Art", 0)]
        assert [c.name for c in by_name] == ["Art", "Coding", "Writing"]
        assert popular[1].image == "https://img/coding.png"
        assert popular[0].image.startswith("https://ui-avatars.com/api/?name=Writing")

    @pytest.mark.asyncio
    async def test_limit(self, fake_db, category_service):
        for name in ["A", "B", "C"]:
            fake_db.add_category(name)

        assert len(await category_service.list_categories(limit=2)) == 2

    @pytest.mark.asyncio
    async def test_bad_sort(self, category_service):
        with pytest.raises(ValidationError):
            await category_service.list_categories("random")


class TestModelService:
    @pytest.mark.asyncio
    async def test_models_with_counts(self, fake_db, model_service):
        repo = model_service.models
        await repo.upsert(name="GPT-4o", slug="gpt-4o", provider="OpenAI")
        await repo.upsert(name="Claude 3 Opus", slug="claude-3-opus", provider="Anthropic")
        author = fake_db.add_user()
        fake_db.add_prompt(author, suggested_model="gpt-4o")

        models = await model_service.list_models()

        assert [(m.label, m.value, m.prompt_count) for m in models] == [
            ("Claude 3 Opus", "claude-3-opus", 0),
            ("GPT-4o", "gpt-4o", 1),
        ]
        assert models[1].provider == "OpenAI"


class TestUserService:
    @pytest.mark.asyncio
    async def test_profile_counts(self, fake_db, user_service):
        ann = fake_db.add_user(name="Ann", bio="Writer")
        bob = fake_db.add_user(name="Bob")
        fake_db.add_prompt(ann)
        fake_db.add_follow(bob, ann)

        own = await user_service.get_profile(ann.id, ann.id)
        seen_by_bob = await user_service.get_profile(ann.id, bob.id)

        assert own.prompt_count == 1
        assert own.follower_count == 1
        assert own.following_count == 0
        assert own.is_following is False
        assert own.bio == "Writer"
        assert own.image.startswith("https://ui-avatars.com/api/?name=Ann")
        assert seen_by_bob.is_following is True

    @pytest.mark.asyncio
    async def test_unknown_user(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.get_profile(uuid4())

    @pytest.mark.asyncio
    async def test_update_profile(self, fake_db, user_service):
        ann = fake_db.add_user(name="Ann", bio="Old")

        profile = await user_service.update_profile(
            ann.id, name="  Ann Lee ", bio="", avatar="https://img/ann.png"
        )

        assert profile.name == "Ann Lee"
        assert profile.bio == "Old"
        assert profile.image == "https://img/ann.png"

    @pytest.mark.asyncio
    async def test_inline_avatar_ignored(self, fake_db, user_service):
        ann = fake_db.add_user(name="Ann", image="https://img/old.png")

        profile = await user_service.update_profile(ann.id, avatar="data:image/png;base64,AAAA")

        assert profile.image == "https://img/old.png"

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.update_profile(uuid4(), name="Ghost")

    @pytest.mark.asyncio
    async def test_sync_from_token(self, fake_db, user_service):
        token_user = AppUser(id="auth-42", email="z@example.com", name="Zed", avatar_url=None)

        first = await user_service.sync_from_token(token_user)
        second = await user_service.sync_from_token(token_user)

        assert first.id == second.id
        assert first.auth_id == "auth-42"
        assert len(fake_db.users) == 1
