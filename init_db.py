#!/usr/bin/env python
"""Database initialization script for the app marketplace.

Creates all tables and seeds the reference categories and tools the submit
form offers. Safe to run more than once: existing rows are left alone.

Usage:
    python init_db.py
"""

import logging
import os
import sys
from vibehub import create_app, db
from vibehub.constants import DEFAULT_CATEGORIES, DEFAULT_TOOLS
from vibehub.models import Category, Tool

logger = logging.getLogger('vibehub.init_db')


def seed_reference_data():
    """Insert any missing default categories and tools. Returns rows added."""
    added = 0
    for name in DEFAULT_CATEGORIES:
        if not Category.query.filter_by(name=name).first():
            db.session.add(Category(name=name))
            added += 1
    for tool in DEFAULT_TOOLS:
        if not Tool.query.filter_by(name=tool['name']).first():
            db.session.add(Tool(**tool))
            added += 1
    db.session.commit()
    return added


def init_database():
    """Initialize the database by creating all tables and seeding lookups."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    with app.app_context():
        try:
            logger.info(f"Creating tables on {app.config['SQLALCHEMY_DATABASE_URI']}")
            db.create_all()
            added = seed_reference_data()
            logger.info(f"Database ready, {added} reference rows added")
            return True
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating database: {type(e).__name__}: {e}")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
