"""Seed script to populate the local dev database with content and bookmarks.

Usage:
    PYTHONPATH=src python scripts/seed_data.py populate
    PYTHONPATH=src python scripts/seed_data.py populate --force
    PYTHONPATH=src python scripts/seed_data.py clear
"""

import argparse
import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.auth import DEV_AUTH0_ID
from core.config import get_settings
from db.session import build_engine
from models import Base, ContentItem, ContentType, User, UserRole

CONTENT_TYPES = [
    {'name': 'post', 'label': 'Posts'},
    {'name': 'page', 'label': 'Pages'},
    {'name': 'catalog', 'label': None},
    {'name': 'product_review', 'label': 'Product Reviews'},
    {'name': 'revision', 'label': 'Revisions', 'show_ui': False},
]

CONTENT_ITEMS = [
    {'content_type': 'post', 'title': 'Hello world!', 'status': 'publish', 'is_sticky': True},
    {'content_type': 'post', 'title': 'Release notes for the spring update', 'status': 'publish'},
    {'content_type': 'post', 'title': 'Draft: migration checklist', 'status': 'draft'},
    {
        'content_type': 'post',
        'title': 'A very long title about configuring the staging environment',
        'status': 'publish',
        'bookmark_title': 'Staging setup',
    },
    {'content_type': 'post', 'title': '', 'status': 'draft'},
    {'content_type': 'page', 'title': 'About', 'status': 'publish'},
    {'content_type': 'page', 'title': 'Contact', 'status': 'publish'},
    {'content_type': 'page', 'title': 'Privacy Policy', 'status': 'draft'},
    {'content_type': 'catalog', 'title': 'Winter collection', 'status': 'publish'},
    {'content_type': 'catalog', 'title': 'Clearance', 'status': 'pending'},
    {'content_type': 'product_review', 'title': 'Espresso grinder review', 'status': 'publish'},
]

# Indexes into CONTENT_ITEMS, in bookmark order
BOOKMARKED = [6, 0, 3, 8, 4]


async def get_or_create_dev_user(session: AsyncSession) -> User:
    """Get or create the dev user (matches core/auth.py dev mode)."""
    result = await session.execute(select(User).where(User.auth0_id == DEV_AUTH0_ID))
    user = result.scalar_one_or_none()
    if user is not None:
        return user

    user = User(
        auth0_id=DEV_AUTH0_ID,
        email='dev@localhost',
        role=UserRole.ADMINISTRATOR.value,
    )
    session.add(user)
    await session.flush()
    print(f'Created dev user {user.id}')
    return user


async def create_content_types(session: AsyncSession) -> None:
    """Register the seed content types that do not exist yet."""
    existing = set((await session.execute(select(ContentType.name))).scalars().all())
    for data in CONTENT_TYPES:
        if data['name'] in existing:
            continue
        session.add(ContentType(**data))
    await session.flush()


async def create_content_items(session: AsyncSession, user: User) -> list[ContentItem]:
    """Create the seed content items, authored by the dev user."""
    items = [ContentItem(author_id=user.id, **data) for data in CONTENT_ITEMS]
    session.add_all(items)
    await session.flush()
    print(f'  Created {len(items)} content items')
    return items


def bookmark_items(user: User, items: list[ContentItem]) -> None:
    """Bookmark a few seed items for the dev user."""
    user.admin_bookmarks = {str(items[i].id): items[i].id for i in BOOKMARKED}
    print(f'  Bookmarked {len(BOOKMARKED)} items')


async def clear_data(session: AsyncSession) -> None:
    """Clear the dev user's content items and bookmarks."""
    result = await session.execute(select(User).where(User.auth0_id == DEV_AUTH0_ID))
    user = result.scalar_one_or_none()
    if user is None:
        print('No dev user found, nothing to clear.')
        return

    print(f'Clearing data for dev user {user.id}...')
    item_count = (await session.execute(
        select(func.count()).select_from(ContentItem).where(ContentItem.author_id == user.id)
    )).scalar()

    await session.execute(delete(ContentItem).where(ContentItem.author_id == user.id))
    user.admin_bookmarks = None
    await session.flush()

    print(f'  Deleted {item_count} content items and cleared bookmarks')
    print('Clear complete.')


async def populate(force: bool = False) -> None:
    """Populate the database with seed data."""
    settings = get_settings()
    engine = build_engine(settings.database_url)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        try:
            user = await get_or_create_dev_user(session)
            await create_content_types(session)

            item_count = (await session.execute(
                select(func.count()).select_from(ContentItem)
                .where(ContentItem.author_id == user.id)
            )).scalar()

            if item_count and item_count > 0:
                if force:
                    print('Existing data found, clearing first (--force)...')
                    await clear_data(session)
                    await session.flush()
                else:
                    print(
                        f'Data already exists ({item_count} content items). '
                        f'Use --force to clear and re-seed.'
                    )
                    return

            print('Populating seed data...')
            items = await create_content_items(session, user)
            bookmark_items(user, items)
            await session.commit()
            print('Seed data created successfully.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Clear all dev user data."""
    settings = get_settings()
    engine = build_engine(settings.database_url)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            await clear_data(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    if not settings.dev_mode:
        print(
            'ERROR: Seed script requires DEV_MODE=true.\n'
            'This script modifies data directly and must only run against a local dev database.'
        )
        raise SystemExit(1)

    parser = argparse.ArgumentParser(description='Seed the dev database with test data.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Populate database with test data')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing data before populating',
    )
    subparsers.add_parser('clear', help='Clear all dev user data')

    args = parser.parse_args()
    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
