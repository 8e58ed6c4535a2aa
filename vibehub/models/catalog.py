"""Reference data: categories, tools and tags."""

import uuid
from vibehub import db


def generate_id():
    return str(uuid.uuid4())


class Category(db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(50), unique=True, nullable=False)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f'<Category {self.name}>'


class Tool(db.Model):
    """An AI building tool an app was made with (Cursor, v0, ...)."""

    __tablename__ = 'tools'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(50), unique=True, nullable=False)
    website_url = db.Column(db.String(255), nullable=True)
    logo_url = db.Column(db.String(255), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'website_url': self.website_url,
            'logo_url': self.logo_url,
        }

    def __repr__(self):
        return f'<Tool {self.name}>'


class Tag(db.Model):
    __tablename__ = 'tags'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(50), unique=True, nullable=False)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f'<Tag {self.name}>'
