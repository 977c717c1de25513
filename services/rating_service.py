"""
Rating service: one score per (user, prompt) and the prompt's aggregate.
"""

import logging
from uuid import UUID

from api.schemas.prompts import RatingResult
from core.exceptions import PromptNotFoundError, ValidationError
from database.repositories import PromptRepository, RatingRepository
from utils.format import average_rating

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class RatingService:
    def __init__(self, rating_repo: RatingRepository, prompt_repo: PromptRepository):
        self.ratings = rating_repo
        self.prompts = prompt_repo

    async def rate_prompt(self, user_id: UUID, prompt_id: UUID, rating: int) -> RatingResult:
        """
        Record the user's rating, replacing any previous one, and return the
        prompt's mean rating and number of ratings after the write.
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                message=f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}",
                details={"rating": rating},
            )

        if not await self.prompts.exists(prompt_id):
            raise PromptNotFoundError(details={"prompt_id": str(prompt_id)})

        await self.ratings.upsert(prompt_id, user_id, rating)
        values = await self.ratings.list_values(prompt_id)

        logger.info("User %s rated prompt %s: %d", user_id, prompt_id, rating)
        return RatingResult(average_rating=average_rating(values), total_ratings=len(values))
