"""Reference data routes used by the submit form and explore filters."""

from flask import Blueprint, jsonify
from vibehub.services.listings import list_categories, list_tools, list_tags

catalog_bp = Blueprint('catalog', __name__)


@catalog_bp.route('/categories', methods=['GET'])
def get_categories():
    return jsonify([category.to_dict() for category in list_categories()]), 200


@catalog_bp.route('/tools', methods=['GET'])
def get_tools():
    return jsonify([tool.to_dict() for tool in list_tools()]), 200


@catalog_bp.route('/tags', methods=['GET'])
def get_tags():
    return jsonify([tag.to_dict() for tag in list_tags()]), 200
