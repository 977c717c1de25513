"""Seed script: Insert the curated AI model catalog into the database.

Usage:
    python scripts/seed_models.py            # Insert missing models, refresh descriptions
    python scripts/seed_models.py --dry-run  # List what would be seeded
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from database import close_database, get_session, init_database  # noqa: E402
from database.repositories import AIModelRepository  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


MODELS: list[dict] = [
    {"name": "GPT-5", "slug": "gpt-5", "provider": "OpenAI", "description": "Next-generation GPT-5 model"},
    {"name": "GPT-4o", "slug": "gpt-4o", "provider": "OpenAI", "description": "Omni GPT-4 optimized"},
    {"name": "GPT-4 Turbo", "slug": "gpt-4-turbo", "provider": "OpenAI", "description": "Turbo variant of GPT-4"},
    {"name": "Gemini 1.5 Pro", "slug": "gemini-1.5-pro", "provider": "Google", "description": "High capability Gemini"},
    {"name": "Gemini 1.5 Flash", "slug": "gemini-1.5-flash", "provider": "Google", "description": "Fast Gemini variant"},
    {"name": "Claude 3 Opus", "slug": "claude-3-opus", "provider": "Anthropic", "description": "Claude 3 highest capability"},
    {"name": "Claude 3 Sonnet", "slug": "claude-3-sonnet", "provider": "Anthropic", "description": "Claude 3 balanced"},
    {"name": "Claude 3 Haiku", "slug": "claude-3-haiku", "provider": "Anthropic", "description": "Claude 3 fast, lightweight"},
    {"name": "Mistral Large", "slug": "mistral-large", "provider": "Mistral", "description": "Large Mistral model"},
    {"name": "Mistral Small", "slug": "mistral-small", "provider": "Mistral", "description": "Small Mistral model"},
    {"name": "Llama 3", "slug": "llama-3", "provider": "Meta", "description": "Llama 3 open model"},
]


async def seed_models(session) -> int:
    """Upsert every catalog model by slug. Returns the number processed."""
    repo = AIModelRepository(session)
    seeded = 0
    for m in MODELS:
        await repo.upsert(**m)
        logger.info("Seeded model %s", m["slug"])
        seeded += 1
    return seeded


async def main(args) -> None:
    """Main entry point."""
    if args.dry_run:
        for m in MODELS:
            print(f"{m['slug']:<20} {m['name']} ({m['provider']})")
        return

    await init_database()
    try:
        async for session in get_session():
            seeded = await seed_models(session)
            print(f"Seeded {seeded} AI models.")
    except SQLAlchemyError as e:
        logger.error("Seeding failed (has the schema been migrated?): %s", e)
        sys.exit(1)
    finally:
        await close_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the AI model catalog")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the catalog without touching the database",
    )
    args = parser.parse_args()

    asyncio.run(main(args))
