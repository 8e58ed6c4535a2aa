"""Listing status, sort and date-range vocabularies.

Must stay in sync with the query-string values the explore page sends.
"""

from datetime import timedelta
from enum import Enum


class ListingStatus(str, Enum):
    DRAFT = 'draft'
    PENDING_APPROVAL = 'pending_approval'
    PUBLISHED = 'published'
    REJECTED = 'rejected'


VALID_STATUSES = {status.value for status in ListingStatus}


class SortKey(str, Enum):
    NEWEST = 'newest'
    OLDEST = 'oldest'
    MOST_LAUNCHED = 'most_launched'
    HIGHEST_RATED = 'highest_rated'
    TRENDING = 'trending'


# Older clients (home page filter panel) send these names
LEGACY_SORT_MAP = {
    'popular': SortKey.MOST_LAUNCHED,
    'rating': SortKey.HIGHEST_RATED,
}

DEFAULT_SORT = SortKey.NEWEST


class DateRange(str, Enum):
    WEEK = 'week'
    MONTH = 'month'
    THREE_MONTHS = '3months'
    SIX_MONTHS = '6months'
    ALL = 'all'


DATE_RANGE_WINDOWS = {
    DateRange.WEEK: timedelta(days=7),
    DateRange.MONTH: timedelta(days=30),
    DateRange.THREE_MONTHS: timedelta(days=90),
    DateRange.SIX_MONTHS: timedelta(days=180),
}

DEFAULT_DATE_RANGE = DateRange.ALL

# Submission limits shown in the submit form
MAX_NAME_LENGTH = 100
MAX_SHORT_DESCRIPTION_LENGTH = 200
MAX_FULL_DESCRIPTION_LENGTH = 2000
MAX_KEY_LEARNINGS_LENGTH = 1500
MAX_TAGS = 5
MAX_TAG_LENGTH = 50

# Reference data seeded by init_db.py
DEFAULT_CATEGORIES = [
    'Productivity',
    'Education',
    'Entertainment',
    'Business',
    'Developer Tools',
    'Design',
    'Other',
]

DEFAULT_TOOLS = [
    {'name': 'Replit Agent', 'website_url': 'https://replit.com'},
    {'name': 'Bolt.new', 'website_url': 'https://bolt.new'},
    {'name': 'v0', 'website_url': 'https://v0.dev'},
    {'name': 'Cursor', 'website_url': 'https://cursor.com'},
    {'name': 'Claude', 'website_url': 'https://claude.ai'},
    {'name': 'ChatGPT', 'website_url': 'https://chatgpt.com'},
    {'name': 'Lovable', 'website_url': 'https://lovable.dev'},
    {'name': 'Windsurf', 'website_url': 'https://windsurf.com'},
    {'name': 'Other', 'website_url': None},
]
