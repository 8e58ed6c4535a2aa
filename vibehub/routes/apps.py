"""App listing routes: browse, detail, submit, edit, launch."""

from flask import Blueprint, request, jsonify, current_app
from vibehub import limiter
from vibehub.constants import SortKey
from vibehub.services.listing_query import (
    FilterSpec,
    ListingNotFound,
    list_listings,
    get_listing,
    list_creator_listings,
)
from vibehub.services.listings import (
    ListingValidationError,
    ListingPermissionError,
    create_listing,
    update_listing,
    change_status,
    delete_listing,
    record_launch,
)
from vibehub.utils import token_required, token_optional

apps_bp = Blueprint('apps', __name__)

DEFAULT_LANDING_LIMIT = 8
MAX_LANDING_LIMIT = 50
MAX_PER_PAGE = 100


def _filter_spec_from_args(args):
    """Build a FilterSpec from the explore page query string.

    A ``status`` argument is ignored here; only the admin listing may pick
    a status explicitly.
    """
    tool_ids = args.getlist('tools') + args.getlist('toolIds')
    return FilterSpec.from_values(
        search=args.get('search'),
        tool_ids=tool_ids,
        category_id=args.get('category') or args.get('categoryId'),
        creator_id=args.get('creatorId', type=int),
        date_range=args.get('dateRange'),
        sort_by=args.get('sortBy'),
    )


def _landing_limit():
    limit = request.args.get('limit', DEFAULT_LANDING_LIMIT, type=int)
    return max(1, min(limit, MAX_LANDING_LIMIT))


def _not_found():
    return jsonify({'error': 'App not found'}), 404


@apps_bp.route('', methods=['GET'])
@token_optional
def get_apps(current_user_id):
    """List apps visible to the caller.

    Query params:
    - search: substring of name, short or full description
    - tools: tool id, repeatable (any one matches)
    - category: category id
    - creatorId: only apps by this user
    - sortBy: newest | oldest | most_launched | highest_rated | trending
    - dateRange: week | month | 3months | 6months | all
    - page, per_page: optional slice of the ordered result
    """
    spec = _filter_spec_from_args(request.args)
    listings = list_listings(spec, requester_id=current_user_id)
    total = len(listings)

    response = {'total': total}
    per_page = request.args.get('per_page', type=int)
    if per_page:
        per_page = max(1, min(per_page, MAX_PER_PAGE))
        page = max(1, request.args.get('page', 1, type=int))
        start = (page - 1) * per_page
        listings = listings[start:start + per_page]
        response.update({
            'page': page,
            'per_page': per_page,
            'pages': (total + per_page - 1) // per_page,
        })

    response['apps'] = [listing.to_dict() for listing in listings]
    return jsonify(response), 200


@apps_bp.route('/mine', methods=['GET'])
@token_required
def get_my_apps(current_user_id):
    """All of the caller's own apps, in every status."""
    listings = list_creator_listings(current_user_id)
    return jsonify({
        'apps': [listing.to_dict() for listing in listings],
        'total': len(listings)
    }), 200


@apps_bp.route('/landing/trending', methods=['GET'])
def get_trending_apps():
    listings = list_listings(FilterSpec(sort_by=SortKey.TRENDING))[:_landing_limit()]
    return jsonify({'apps': [listing.to_dict() for listing in listings]}), 200


@apps_bp.route('/landing/top-rated', methods=['GET'])
def get_top_rated_apps():
    listings = list_listings(FilterSpec(sort_by=SortKey.HIGHEST_RATED))[:_landing_limit()]
    return jsonify({'apps': [listing.to_dict() for listing in listings]}), 200


@apps_bp.route('/<listing_id>', methods=['GET'])
@token_optional
def get_app(current_user_id, listing_id):
    """Get a specific app; other people's drafts look like missing apps."""
    try:
        listing = get_listing(listing_id, requester_id=current_user_id)
    except ListingNotFound:
        return _not_found()
    return jsonify(listing.to_dict()), 200


@apps_bp.route('', methods=['POST'])
@token_required
@limiter.limit(lambda: current_app.config['SUBMIT_RATE_LIMIT'])
def submit_app(current_user_id):
    """Create a new app listing as a draft (or pending approval with submit=true)."""
    data = request.get_json(silent=True)
    try:
        listing = create_listing(data, creator_id=current_user_id)
    except ListingValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(listing.to_dict()), 201


@apps_bp.route('/<listing_id>', methods=['PUT'])
@token_required
def edit_app(current_user_id, listing_id):
    data = request.get_json(silent=True)
    try:
        listing = update_listing(listing_id, data, requester_id=current_user_id)
    except ListingNotFound:
        return _not_found()
    except ListingPermissionError:
        return jsonify({'error': 'You can only edit your own apps'}), 403
    except ListingValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(listing.to_dict()), 200


@apps_bp.route('/<listing_id>/status', methods=['PATCH'])
@token_required
def update_app_status(current_user_id, listing_id):
    """Submit a draft for approval, or withdraw it back to draft."""
    data = request.get_json(silent=True) or {}
    new_status = data.get('status')
    if not new_status:
        return jsonify({'error': 'status is required'}), 400
    try:
        listing = change_status(listing_id, new_status, requester_id=current_user_id)
    except ListingNotFound:
        return _not_found()
    except ListingPermissionError:
        return jsonify({'error': 'You can only change your own apps'}), 403
    except ListingValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(listing.to_dict()), 200


@apps_bp.route('/<listing_id>', methods=['DELETE'])
@token_required
def remove_app(current_user_id, listing_id):
    try:
        delete_listing(listing_id, requester_id=current_user_id)
    except ListingNotFound:
        return _not_found()
    except ListingPermissionError:
        return jsonify({'error': 'You can only delete your own apps'}), 403
    return jsonify({'message': 'App deleted'}), 200


@apps_bp.route('/<listing_id>/launch', methods=['POST'])
@token_optional
@limiter.limit(lambda: current_app.config['LAUNCH_RATE_LIMIT'])
def launch_app(current_user_id, listing_id):
    """Count an app launch."""
    try:
        view_count = record_launch(listing_id, requester_id=current_user_id)
    except ListingNotFound:
        return _not_found()
    return jsonify({'success': True, 'view_count': view_count}), 200
