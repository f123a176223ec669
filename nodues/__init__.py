"""
No-Dues Application Factory
Department clearance review service in front of the approvals API
"""

import os
from flask import Flask, jsonify
from flask_cors import CORS
from nodues.routes import auth_bp, review_bp
from nodues.utils import setup_logging, log_info, create_response


def create_app(config_name: str = None) -> Flask:
    """
    Application factory

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Import and set configuration
    from config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)
    config_class.init_app(app)

    # Initialize extensions
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)
    app.extensions.setdefault('nodues_stores', {})

    # Setup logging
    with app.app_context():
        setup_logging()
        log_info(f"Application initialized against {app.config['APPROVALS_API_BASE']}")

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(review_bp, url_prefix='/api/review')

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify(create_response(True, "healthy"))

    return app
