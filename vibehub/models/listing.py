"""Listing model for submitted AI-built apps."""

from datetime import datetime
from vibehub import db
from vibehub.constants import ListingStatus
from vibehub.models.catalog import generate_id


listing_tools = db.Table(
    'listing_tools',
    db.Column('listing_id', db.String(36), db.ForeignKey('listings.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tool_id', db.String(36), db.ForeignKey('tools.id', ondelete='CASCADE'), primary_key=True),
)

listing_tags = db.Table(
    'listing_tags',
    db.Column('listing_id', db.String(36), db.ForeignKey('listings.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tag_id', db.String(36), db.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class Listing(db.Model):
    """One submitted app shown in the marketplace."""

    __tablename__ = 'listings'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(100), nullable=False, index=True)
    short_description = db.Column(db.String(200), nullable=False)
    full_description = db.Column(db.Text, nullable=False)
    launch_url = db.Column(db.Text, nullable=False)
    screenshot_url = db.Column(db.Text, nullable=True)
    key_learnings = db.Column(db.Text, nullable=True)
    category_id = db.Column(db.String(36), db.ForeignKey('categories.id'), nullable=False, index=True)
    status = db.Column(db.String(20), default=ListingStatus.DRAFT.value, nullable=False, index=True)
    rejection_reason = db.Column(db.Text, nullable=True)
    creator_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)

    # Denormalized counters; the rating pair is maintained by the review service
    view_count = db.Column(db.Integer, default=0, nullable=False)
    average_rating = db.Column(db.Numeric(3, 2, asdecimal=False), default=0, nullable=False)
    rating_count = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    creator = db.relationship('User', back_populates='listings')
    category = db.relationship('Category', lazy='joined')
    tools = db.relationship('Tool', secondary=listing_tools, lazy='selectin', order_by='Tool.name')
    tags = db.relationship('Tag', secondary=listing_tags, lazy='selectin', order_by='Tag.name')

    @property
    def trending_score(self):
        """Traffic plus rating mass; mirrors the ORDER BY used for sort=trending."""
        return (self.view_count or 0) + float(self.average_rating or 0) * (self.rating_count or 0)

    def to_dict(self):
        """Convert listing to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'short_description': self.short_description,
            'full_description': self.full_description,
            'launch_url': self.launch_url,
            'screenshot_url': self.screenshot_url,
            'key_learnings': self.key_learnings,
            'category_id': self.category_id,
            'category': self.category.name if self.category else None,
            'tools': [tool.to_dict() for tool in self.tools],
            'tags': [tag.name for tag in self.tags],
            'status': self.status,
            'rejection_reason': self.rejection_reason,
            'creator_id': self.creator_id,
            'creator': self.creator.to_dict() if self.creator else None,
            'view_count': self.view_count,
            'average_rating': round(float(self.average_rating or 0), 2),
            'rating_count': self.rating_count,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

    def __repr__(self):
        return f'<Listing {self.id}: {self.name}>'
