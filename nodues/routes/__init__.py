"""
Routes package initialization
"""

from nodues.routes.auth_routes import auth_bp
from nodues.routes.review_routes import review_bp

__all__ = ['auth_bp', 'review_bp']
