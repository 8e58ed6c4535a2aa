"""Admin routes for the moderation queue.

Approving and rejecting apps is handled by the moderation service; this
blueprint only lists apps by status for it.
"""
from flask import Blueprint, jsonify, request
from vibehub.constants import ListingStatus
from vibehub.services.listing_query import FilterSpec, InvalidFilterValue, list_listings
from vibehub.utils import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/apps', methods=['GET'])
@admin_required
def get_apps_by_status(current_user_id):
    """List apps in one status (default: pending_approval), any creator."""
    try:
        spec = FilterSpec.from_values(
            status=request.args.get('status') or ListingStatus.PENDING_APPROVAL.value,
            search=request.args.get('search'),
            sort_by=request.args.get('sortBy'),
        )
    except InvalidFilterValue as e:
        return jsonify({'error': str(e)}), 400

    listings = list_listings(spec, requester_id=current_user_id)
    return jsonify({
        'apps': [listing.to_dict() for listing in listings],
        'total': len(listings),
        'status': spec.status.value
    }), 200
