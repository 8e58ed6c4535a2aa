"""Listing query engine.

Turns a FilterSpec plus the requesting user into an ordered list of
listings. Visibility is applied before any other predicate:

- explicit status (moderation callers): exactly that status, any creator
- signed-in requester: published, or drafts the requester created
- anonymous: published only

Search is a literal substring match folded with SQL lower(); SQLite only
folds ASCII letters, so accented capitals match case-sensitively there.
Search, tool, category, creator and date predicates are ANDed together;
within tool_ids any one tool is enough. Ordering is one of the SortKey
strategies. The trending score (view_count + average_rating * rating_count)
is computed in the ORDER BY from the denormalized counters; it has no time
decay.

Reads only. The rating pair is maintained by the review service and may lag
a just-written review.
"""

from dataclasses import dataclass, field
from datetime import datetime
import logging

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from vibehub import db
from vibehub.constants import (
    ListingStatus,
    SortKey,
    DateRange,
    LEGACY_SORT_MAP,
    DEFAULT_SORT,
    DEFAULT_DATE_RANGE,
    DATE_RANGE_WINDOWS,
)
from vibehub.models import Listing, Tool

logger = logging.getLogger(__name__)


class ListingQueryError(Exception):
    """Base error for listing reads."""


class ListingNotFound(ListingQueryError):
    """Listing does not exist or is hidden from the requester."""


class DataAccessError(ListingQueryError):
    """The store could not be queried."""


class InvalidFilterValue(ListingQueryError, ValueError):
    """A filter value that cannot be defaulted (an unknown status)."""


def parse_sort_key(value) -> SortKey:
    """Map a raw sortBy value to a SortKey; unknown values fall back to newest."""
    if value is None or value == '':
        return DEFAULT_SORT
    if isinstance(value, SortKey):
        return value
    if value in LEGACY_SORT_MAP:
        return LEGACY_SORT_MAP[value]
    try:
        return SortKey(value)
    except ValueError:
        logger.warning(f"Unknown sortBy value {value!r}, using {DEFAULT_SORT.value}")
        return DEFAULT_SORT


def parse_date_range(value) -> DateRange:
    """Map a raw dateRange value to a DateRange; unknown values fall back to all."""
    if value is None or value == '':
        return DEFAULT_DATE_RANGE
    if isinstance(value, DateRange):
        return value
    try:
        return DateRange(value)
    except ValueError:
        logger.warning(f"Unknown dateRange value {value!r}, using {DEFAULT_DATE_RANGE.value}")
        return DEFAULT_DATE_RANGE


def parse_status(value) -> ListingStatus | None:
    """Map a raw status value to a ListingStatus; unknown values raise InvalidFilterValue."""
    if value is None or value == '':
        return None
    if isinstance(value, ListingStatus):
        return value
    try:
        return ListingStatus(value)
    except ValueError:
        raise InvalidFilterValue(f"Unknown status {value!r}") from None


@dataclass(frozen=True)
class FilterSpec:
    """Optional constraints for a listing query. Empty values match everything."""

    search: str | None = None
    tool_ids: frozenset = field(default_factory=frozenset)
    category_id: str | None = None
    creator_id: int | None = None
    status: ListingStatus | None = None
    date_range: DateRange = DEFAULT_DATE_RANGE
    sort_by: SortKey = DEFAULT_SORT

    @classmethod
    def from_values(cls, search=None, tool_ids=None, category_id=None, creator_id=None,
                    status=None, date_range=None, sort_by=None):
        """Build a spec from loosely typed input such as query-string values."""
        search = search.strip() if search else None
        return cls(
            search=search or None,
            tool_ids=frozenset(t for t in (tool_ids or ()) if t),
            category_id=category_id or None,
            creator_id=creator_id,
            status=parse_status(status),
            date_range=parse_date_range(date_range),
            sort_by=parse_sort_key(sort_by),
        )


def visibility_clause(requester_id=None, status=None):
    """Return the predicate deciding which listings the caller may see."""
    if status is not None:
        return Listing.status == ListingStatus(status).value

    published = Listing.status == ListingStatus.PUBLISHED.value
    if requester_id is None:
        return published
    own_draft = and_(
        Listing.status == ListingStatus.DRAFT.value,
        Listing.creator_id == requester_id,
    )
    return or_(published, own_draft)


def is_visible_to(listing, requester_id=None) -> bool:
    """Single-record form of visibility_clause for detail fetches."""
    if listing.status != ListingStatus.DRAFT.value:
        return True
    return requester_id is not None and listing.creator_id == requester_id


def filter_clauses(spec: FilterSpec, now=None) -> list:
    """Predicates for the optional filters in spec, to be ANDed."""
    clauses = []

    if spec.search:
        term = spec.search.lower()
        clauses.append(or_(
            func.lower(Listing.name).contains(term, autoescape=True),
            func.lower(Listing.short_description).contains(term, autoescape=True),
            func.lower(Listing.full_description).contains(term, autoescape=True),
        ))

    if spec.tool_ids:
        clauses.append(Listing.tools.any(Tool.id.in_(sorted(spec.tool_ids))))

    if spec.category_id:
        clauses.append(Listing.category_id == spec.category_id)

    if spec.creator_id is not None:
        clauses.append(Listing.creator_id == spec.creator_id)

    window = DATE_RANGE_WINDOWS.get(spec.date_range)
    if window is not None:
        now = now or datetime.utcnow()
        clauses.append(Listing.created_at >= now - window)

    return clauses


def trending_score_expression():
    """SQL form of Listing.trending_score."""
    return Listing.view_count + Listing.average_rating * Listing.rating_count


ORDERINGS = {
    SortKey.NEWEST: lambda: (Listing.created_at.desc(),),
    SortKey.OLDEST: lambda: (Listing.created_at.asc(),),
    SortKey.MOST_LAUNCHED: lambda: (Listing.view_count.desc(),),
    SortKey.HIGHEST_RATED: lambda: (Listing.average_rating.desc(), Listing.rating_count.desc()),
    SortKey.TRENDING: lambda: (trending_score_expression().desc(),),
}


def order_by_clauses(sort_key: SortKey) -> tuple:
    """ORDER BY clauses for a sort key (aliases accepted)."""
    return ORDERINGS[parse_sort_key(sort_key)]()


def build_listing_query(spec: FilterSpec, requester_id=None, now=None):
    """Compose visibility, filters and ordering into one query."""
    query = Listing.query.options(joinedload(Listing.creator)).filter(
        visibility_clause(requester_id, spec.status),
        *filter_clauses(spec, now=now)
    )
    return query.order_by(*order_by_clauses(spec.sort_by))


def list_listings(spec: FilterSpec | None = None, requester_id=None, now=None) -> list:
    """Return every listing visible to requester_id that matches spec, in order.

    Args:
        spec: Filters and sort key; None means "all visible, newest first".
        requester_id: Id of the signed-in user, or None for anonymous callers.
        now: Reference time for the date range (defaults to utcnow).

    Raises:
        DataAccessError: The database could not be queried.
    """
    spec = spec or FilterSpec()
    try:
        listings = build_listing_query(spec, requester_id, now=now).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Listing query failed: {e}")
        raise DataAccessError('Failed to fetch listings') from e

    logger.debug(
        f"Listing query sort={spec.sort_by.value} range={spec.date_range.value} "
        f"requester={requester_id} -> {len(listings)} results"
    )
    return listings


def get_listing(listing_id, requester_id=None):
    """Fetch one listing, hiding other people's drafts.

    Raises:
        ListingNotFound: Missing id, or a draft the requester does not own.
        DataAccessError: The database could not be queried.
    """
    try:
        listing = db.session.get(Listing, listing_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Listing fetch failed for {listing_id}: {e}")
        raise DataAccessError('Failed to fetch listing') from e

    if listing is None or not is_visible_to(listing, requester_id):
        raise ListingNotFound(listing_id)
    return listing


def list_creator_listings(creator_id) -> list:
    """Every listing a creator owns, any status, newest first (the "My Apps" view)."""
    try:
        return Listing.query.filter(
            Listing.creator_id == creator_id
        ).order_by(Listing.created_at.desc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Creator listing query failed for user {creator_id}: {e}")
        raise DataAccessError('Failed to fetch listings') from e
