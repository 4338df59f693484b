"""
API Route Handlers for The Impostor.

Pure routing layer that delegates to the room manager.
Contains no business logic - only request/response handling.
"""

import logging
from flask import jsonify

logger = logging.getLogger(__name__)


def register_api_handlers(app, room_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        room_manager: Room management instance
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'The Impostor game server is running',
            'active_rooms': len(room_manager.store)
        })

    @app.route('/api/rooms/<code>')
    def get_room(code):
        """Public summary of a room, so clients can check a code before joining."""
        summary = room_manager.get_room_summary(code)
        if summary is None:
            return jsonify({'error': 'Room not found'}), 404
        return jsonify(summary)

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
