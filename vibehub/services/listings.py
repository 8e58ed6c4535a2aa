"""Listing submission, editing and owner status changes.

Write-side companion to listing_query. Moderation (approve/reject) and the
review aggregate updater live outside this service.
"""

import logging
from urllib.parse import urlparse

from sqlalchemy import update

from vibehub import db
from vibehub.constants import ListingStatus
from vibehub.constants.listing_options import (
    MAX_NAME_LENGTH,
    MAX_SHORT_DESCRIPTION_LENGTH,
    MAX_FULL_DESCRIPTION_LENGTH,
    MAX_KEY_LEARNINGS_LENGTH,
    MAX_TAGS,
    MAX_TAG_LENGTH,
)
from vibehub.models import Listing, Category, Tool, Tag
from vibehub.services.listing_query import get_listing

logger = logging.getLogger(__name__)

# Allowed fields for create/update (prevent mass assignment)
LISTING_ALLOWED_FIELDS = {
    'name', 'short_description', 'full_description', 'launch_url',
    'screenshot_url', 'key_learnings', 'category_id', 'tool_ids', 'tags',
    'submit',
}

REQUIRED_FIELDS = ['name', 'short_description', 'full_description', 'launch_url', 'category_id', 'tool_ids']

TEXT_LIMITS = {
    'name': MAX_NAME_LENGTH,
    'short_description': MAX_SHORT_DESCRIPTION_LENGTH,
    'full_description': MAX_FULL_DESCRIPTION_LENGTH,
    'key_learnings': MAX_KEY_LEARNINGS_LENGTH,
}

# Owner-initiated transitions: target status -> allowed source statuses
OWNER_TRANSITIONS = {
    ListingStatus.PENDING_APPROVAL.value: {ListingStatus.DRAFT.value, ListingStatus.REJECTED.value},
    ListingStatus.DRAFT.value: {ListingStatus.PENDING_APPROVAL.value, ListingStatus.REJECTED.value},
}


class ListingValidationError(ValueError):
    """Submitted listing data failed validation."""


class ListingPermissionError(Exception):
    """The requester does not own the listing."""


def _is_valid_url(value):
    parsed = urlparse(value)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def validate_listing_data(data, partial=False):
    """Validate listing fields. Returns error message or None."""
    if not isinstance(data, dict):
        return 'Request body must be a JSON object'

    unknown = set(data.keys()) - LISTING_ALLOWED_FIELDS
    if unknown:
        return f"Unknown fields: {', '.join(sorted(unknown))}"

    if not partial:
        missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
        if missing:
            return f"Missing required fields: {', '.join(missing)}"

    for field, max_len in TEXT_LIMITS.items():
        if field not in data:
            continue
        if data[field] is None:
            if field != 'key_learnings':
                return f"{field} is required"
            continue
        if not isinstance(data[field], str):
            return f"{field} must be a string"
        if field != 'key_learnings' and not data[field].strip():
            return f"{field} is required"
        if len(data[field]) > max_len:
            return f"{field} must be {max_len} characters or less"

    if 'launch_url' in data and not (isinstance(data['launch_url'], str) and _is_valid_url(data['launch_url'])):
        return 'launch_url must be a valid URL'

    if 'category_id' in data and not data['category_id']:
        return 'category_id is required'

    if data.get('screenshot_url') is not None and not isinstance(data['screenshot_url'], str):
        return 'screenshot_url must be a string'

    if 'tool_ids' in data:
        tool_ids = data['tool_ids']
        if not isinstance(tool_ids, list) or not tool_ids:
            return 'Select at least one tool'

    if data.get('tags') is not None:
        tags = data['tags']
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            return 'tags must be a list of strings'
        if len(tags) > MAX_TAGS:
            return f"Maximum {MAX_TAGS} tags allowed"
        if any(len(t.strip()) > MAX_TAG_LENGTH for t in tags):
            return f"Tags must be {MAX_TAG_LENGTH} characters or less"

    return None


def _resolve_tools(tool_ids):
    unique_ids = list(dict.fromkeys(tool_ids))
    tools = Tool.query.filter(Tool.id.in_(unique_ids)).all()
    if len(tools) != len(unique_ids):
        raise ListingValidationError('Unknown tool id')
    return tools


def _resolve_tags(names):
    """Find or create tags by name (case preserved, duplicates dropped)."""
    tags = []
    seen = set()
    for raw in names:
        name = raw.strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        tag = Tag.query.filter(db.func.lower(Tag.name) == name.lower()).first()
        if tag is None:
            tag = Tag(name=name)
            db.session.add(tag)
        tags.append(tag)
    return tags


def _apply_fields(listing, data):
    for field in ('name', 'short_description', 'full_description', 'launch_url', 'screenshot_url', 'key_learnings'):
        if field in data:
            value = data[field]
            setattr(listing, field, value.strip() if isinstance(value, str) else value)

    if 'category_id' in data:
        if db.session.get(Category, data['category_id']) is None:
            raise ListingValidationError('Unknown category')
        listing.category_id = data['category_id']

    if 'tool_ids' in data:
        listing.tools = _resolve_tools(data['tool_ids'])

    if 'tags' in data:
        listing.tags = _resolve_tags(data['tags'] or [])


def _owned_listing(listing_id, requester_id):
    listing = get_listing(listing_id, requester_id)
    if listing.creator_id is None or listing.creator_id != requester_id:
        raise ListingPermissionError(listing_id)
    return listing


def create_listing(data, creator_id):
    """Create a draft listing (or submit it straight to moderation)."""
    error = validate_listing_data(data)
    if error:
        raise ListingValidationError(error)

    listing = Listing(creator_id=creator_id, status=ListingStatus.DRAFT.value)
    try:
        _apply_fields(listing, data)
        if data.get('submit'):
            listing.status = ListingStatus.PENDING_APPROVAL.value
        db.session.add(listing)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Listing {listing.id} created by user {creator_id} as {listing.status}")
    return listing


def update_listing(listing_id, data, requester_id):
    """Owner edit. Editing a live or rejected listing sends it back to moderation."""
    error = validate_listing_data(data, partial=True)
    if error:
        raise ListingValidationError(error)

    listing = _owned_listing(listing_id, requester_id)
    try:
        _apply_fields(listing, data)
        if listing.status in (ListingStatus.PUBLISHED.value, ListingStatus.REJECTED.value):
            listing.status = ListingStatus.PENDING_APPROVAL.value
            listing.rejection_reason = None
        elif data.get('submit') and listing.status == ListingStatus.DRAFT.value:
            listing.status = ListingStatus.PENDING_APPROVAL.value
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return listing


def change_status(listing_id, new_status, requester_id):
    """Owner submit (-> pending_approval) or withdraw (-> draft)."""
    allowed_from = OWNER_TRANSITIONS.get(new_status)
    if allowed_from is None:
        raise ListingValidationError(f"Cannot change status to {new_status!r}")

    listing = _owned_listing(listing_id, requester_id)
    if listing.status not in allowed_from:
        raise ListingValidationError(f"Cannot change status from {listing.status} to {new_status}")

    try:
        listing.status = new_status
        if new_status == ListingStatus.PENDING_APPROVAL.value:
            listing.rejection_reason = None
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Listing {listing.id} moved to {new_status} by owner {requester_id}")
    return listing


def delete_listing(listing_id, requester_id):
    listing = _owned_listing(listing_id, requester_id)
    try:
        db.session.delete(listing)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Listing {listing_id} deleted by owner {requester_id}")


def record_launch(listing_id, requester_id=None):
    """Increment the launch counter in a single UPDATE and return the new value."""
    listing = get_listing(listing_id, requester_id)
    try:
        db.session.execute(
            update(Listing)
            .where(Listing.id == listing.id)
            .values(view_count=Listing.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    db.session.refresh(listing)
    return listing.view_count


def list_categories():
    return Category.query.order_by(Category.name).all()


def list_tools():
    return Tool.query.order_by(Tool.name).all()


def list_tags():
    return Tag.query.order_by(Tag.name).all()
