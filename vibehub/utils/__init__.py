"""Shared utilities for the marketplace backend."""

from vibehub.utils.auth import (
    token_required,
    token_optional,
    admin_required,
    create_access_token,
)

__all__ = [
    'token_required',
    'token_optional',
    'admin_required',
    'create_access_token',
]
