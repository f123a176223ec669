"""
Department review routes
"""

import requests
from flask import Blueprint, request, jsonify
from nodues.services import SessionService
from nodues.services.status_classifier import display_status, is_actionable
from nodues.utils import (
    ValidationError, AuthenticationError, AuthorizationError, SubmissionError,
    log_error, create_response, validate_page
)

review_bp = Blueprint('review', __name__)


def _record_payload(record):
    data = record.to_dict()
    data['display_status'] = display_status(record.status)
    data['actionable'] = bool(record.stage_id) and is_actionable(
        record.active_stage.status if record.active_stage else record.status
    )
    return data


def _respond(operation):
    """Run a review operation and translate workflow errors into responses"""
    context = SessionService.current_context()
    try:
        return operation(SessionService.review_service(context))
    except ValidationError as e:
        return jsonify(create_response(False, str(e))), 400
    except AuthenticationError as e:
        return jsonify(create_response(False, str(e))), 401
    except AuthorizationError as e:
        return jsonify(create_response(False, str(e))), 403
    except SubmissionError as e:
        status = e.status_code if e.status_code and 400 <= e.status_code < 500 else 502
        return jsonify(create_response(False, e.message, {'retryable': e.retryable})), status
    except requests.RequestException as e:
        log_error("Approvals service error", e)
        return jsonify(create_response(False, "Approvals service unavailable")), 502
    except Exception as e:
        log_error("Review operation error", e)
        return jsonify(create_response(False, "Request failed. Please try again.")), 500
    finally:
        SessionService.save(context)


@review_bp.route('/applications', methods=['GET'])
def list_applications():
    """Applications visible to the current department"""
    query = request.args.get('q', '')
    status_filter = request.args.get('status', 'all')
    refresh = request.args.get('refresh', '').lower() in ['1', 'true', 'yes']

    def operation(service):
        records = service.list_applications(query, status_filter, refresh=refresh)
        degraded = service.last_result.is_degraded if service.last_result else False
        return jsonify(create_response(True, "Applications retrieved", {
            'applications': [_record_payload(record) for record in records],
            'degraded': degraded
        }))

    return _respond(operation)


@review_bp.route('/refresh', methods=['POST'])
def refresh_applications():
    """Re-run reconciliation; the service's view replaces local state"""
    def operation(service):
        result = service.refresh()
        return jsonify(create_response(True, "Applications refreshed", {
            'count': len(result.records),
            'dropped': result.dropped,
            'degraded': [str(warning) for warning in result.degraded]
        }))

    return _respond(operation)


@review_bp.route('/applications/<application_id>', methods=['GET'])
def get_application(application_id):
    """Single application with its actionable stage"""
    def operation(service):
        record = service.application_detail(application_id)
        if record is None:
            return jsonify(create_response(False, "Application not found")), 404
        return jsonify(create_response(True, "Application retrieved", _record_payload(record)))

    return _respond(operation)


@review_bp.route('/applications/<application_id>/<action>', methods=['POST'])
def act_on_application(application_id, action):
    """Approve or reject the application's active stage"""
    data = request.get_json(silent=True) or {}
    remark = data.get('remark') if data.get('remark') is not None else data.get('remarks')

    def operation(service):
        decision = service.act(application_id, action, remark)
        return jsonify(create_response(True, f"Application {decision.status.lower()} successfully", decision.to_dict()))

    return _respond(operation)


@review_bp.route('/stats', methods=['GET'])
def get_stats():
    """Status counters for the dashboard"""
    return _respond(lambda service: jsonify(create_response(True, "Stats retrieved", service.stats())))


@review_bp.route('/history', methods=['GET'])
def get_history():
    """Decision history of the current actor"""
    query = request.args.get('q', '')
    page = request.args.get('page', 1)

    def operation(service):
        return jsonify(create_response(True, "History retrieved", service.history(query, validate_page(page))))

    return _respond(operation)
