"""
Pytest configuration and fixtures for testing the marketplace API.
"""

import os
from datetime import datetime, timedelta

import pytest
from faker import Faker

from vibehub import create_app, db
from vibehub.models import User, Category, Tool, Listing
from vibehub.utils import create_access_token

fake = Faker()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


def _create_user(**overrides):
    """Helper to create a user with sensible defaults."""
    data = {
        'username': fake.user_name() + fake.pystr(min_chars=4, max_chars=6),
        'email': fake.unique.email(),
        'display_name': fake.name(),
    }
    data.update(overrides)
    user = User(**data)
    db.session.add(user)
    db.session.commit()
    return user


def _headers_for(user):
    return {'Authorization': f'Bearer {create_access_token(user.id)}'}


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    return _create_user()


@pytest.fixture
def second_user(db_session):
    """Create a second test user for ownership tests."""
    return _create_user()


@pytest.fixture
def admin_user(db_session):
    return _create_user(is_admin=True)


@pytest.fixture
def auth_headers(test_user):
    """Authentication headers for test user."""
    return _headers_for(test_user)


@pytest.fixture
def second_auth_headers(second_user):
    return _headers_for(second_user)


@pytest.fixture
def admin_headers(admin_user):
    return _headers_for(admin_user)


@pytest.fixture
def category(db_session):
    category = Category(name='Productivity')
    db.session.add(category)
    db.session.commit()
    return category


@pytest.fixture
def other_category(db_session):
    category = Category(name='Education')
    db.session.add(category)
    db.session.commit()
    return category


@pytest.fixture
def tools(db_session):
    """Three tools keyed by name."""
    created = {}
    for name in ('Cursor', 'v0', 'Replit Agent'):
        tool = Tool(name=name, website_url=fake.url())
        db.session.add(tool)
        created[name] = tool
    db.session.commit()
    return created


@pytest.fixture
def make_listing(db_session, category):
    """Factory for listings with realistic defaults.

    ``days_old`` sets created_at relative to now; any model field can be
    overridden.
    """
    def _make(days_old=0, tools=(), **overrides):
        data = {
            'name': fake.catch_phrase()[:100],
            'short_description': fake.sentence(nb_words=8)[:200],
            'full_description': fake.paragraph(nb_sentences=4),
            'launch_url': fake.url(),
            'screenshot_url': fake.image_url(),
            'category_id': category.id,
            'status': 'published',
            'created_at': datetime.utcnow() - timedelta(days=days_old),
        }
        data.update(overrides)
        listing = Listing(**data)
        listing.tools = list(tools)
        db.session.add(listing)
        db.session.commit()
        return listing

    return _make


@pytest.fixture
def submission(category, tools):
    """Valid JSON body for POST /api/apps."""
    return {
        'name': 'Recipe Remix',
        'short_description': 'Turns leftovers into dinner ideas',
        'full_description': fake.paragraph(nb_sentences=5),
        'launch_url': 'https://recipe-remix.example.com',
        'screenshot_url': 'https://cdn.example.com/recipe.png',
        'category_id': category.id,
        'tool_ids': [tools['Cursor'].id],
        'tags': ['food', 'ai'],
    }
