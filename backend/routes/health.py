"""
Health check routes for the bowling community backend.
"""
import logging
from flask import Blueprint, jsonify

from shared import get_otp_store
from utils import get_timestamp

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    store = get_otp_store()
    return jsonify({
        'status': 'healthy',
        'timestamp': get_timestamp(),
        'otp_store': {
            'entries': len(store),
            'expiry_seconds': int(store.expiry_duration().total_seconds())
        }
    })
