"""
Session routes
"""

from flask import Blueprint, request, jsonify
from nodues.services import SessionService
from nodues.utils import ValidationError, AuthenticationError, log_error, create_response, validate_required

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/session', methods=['POST'])
def start_session():
    """Adopt a token issued by the auth service"""
    try:
        data = request.get_json(silent=True) or {}
        token = data.get('token') or data.get('access_token')
        validate_required(token, "Token")

        scope = SessionService.start_session(token, data.get('user'))
        context = SessionService.current_context()
        return jsonify(create_response(True, "Session started", {
            'redirect': scope.landing_path,
            'scope': scope.scope,
            'department': scope.department_code,
            'can_act': scope.can_act,
            'user': context.user.to_dict()
        }))

    except ValidationError as e:
        return jsonify(create_response(False, str(e))), 400
    except AuthenticationError as e:
        return jsonify(create_response(False, str(e))), 401
    except Exception as e:
        log_error("Start session error", e)
        return jsonify(create_response(False, "Could not start session. Please try again.")), 500


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Handle user logout"""
    try:
        SessionService.end_session()
        return jsonify(create_response(True, "Logged out successfully"))
    except Exception as e:
        log_error("Logout error", e)
        return jsonify(create_response(False, "Logout failed")), 500


@auth_bp.route('/current-user', methods=['GET'])
def get_current_user():
    """Get current logged-in user"""
    context = SessionService.current_context()
    try:
        user = context.check()
        return jsonify(create_response(True, "User found", user.to_dict()))
    except AuthenticationError as e:
        return jsonify(create_response(False, str(e))), 401
    except Exception as e:
        log_error("Get current user error", e)
        return jsonify(create_response(False, "Failed to get user info")), 500
    finally:
        SessionService.save(context)
