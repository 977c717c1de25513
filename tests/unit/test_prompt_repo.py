"""
Unit tests for PromptRepository query building.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from database.repositories.prompt_repo import PromptRepository, contains_pattern


class TestContainsPattern:
    def test_plain_text(self):
        assert contains_pattern("email") == "%email%"

    def test_wildcards_are_literal(self):
        assert contains_pattern("50%") == "%50\\%%"
        assert contains_pattern("snake_case") == "%snake\\_case%"
        assert contains_pattern("a\\b") == "%a\\\\b%"


class TestListPromptsQuery:
    @pytest.mark.asyncio
    async def test_search_and_category_escape_wildcards(self):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        session = MagicMock()
        session.scalar = AsyncMock(return_value=0)
        session.execute = AsyncMock(return_value=result)

        prompts, total = await PromptRepository(session).list_prompts(
            search="50%", category_name="to_do"
        )

        assert prompts == []
        assert total == 0

        statement = session.execute.await_args.args[0]
        compiled = statement.compile(dialect=postgresql.dialect())
        sql = str(compiled)
        assert "ILIKE" in sql
        assert "ESCAPE" in sql
        assert "%50\\%%" in compiled.params.values()
        assert "%to\\_do%" in compiled.params.values()
