"""Database models for the app marketplace."""

from .user import User
from .catalog import Category, Tool, Tag
from .listing import Listing, listing_tools, listing_tags

__all__ = ['User', 'Category', 'Tool', 'Tag', 'Listing', 'listing_tools', 'listing_tags']
