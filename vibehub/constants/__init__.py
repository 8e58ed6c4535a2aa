from vibehub.constants.listing_options import (
    ListingStatus,
    SortKey,
    DateRange,
    VALID_STATUSES,
    LEGACY_SORT_MAP,
    DEFAULT_SORT,
    DEFAULT_DATE_RANGE,
    DATE_RANGE_WINDOWS,
    DEFAULT_CATEGORIES,
    DEFAULT_TOOLS,
)

__all__ = [
    'ListingStatus',
    'SortKey',
    'DateRange',
    'VALID_STATUSES',
    'LEGACY_SORT_MAP',
    'DEFAULT_SORT',
    'DEFAULT_DATE_RANGE',
    'DATE_RANGE_WINDOWS',
    'DEFAULT_CATEGORIES',
    'DEFAULT_TOOLS',
]
