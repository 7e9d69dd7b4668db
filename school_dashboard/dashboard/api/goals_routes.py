# Goals API Routes
#
# Monthly targets for leads, enrollments and revenue

from flask import Blueprint, jsonify, request, g, current_app
import logging

from ...auth import requires_auth
from ..validation import parse_goal_payload, validate_period, RecordValidationError

logger = logging.getLogger(__name__)

goals_bp = Blueprint('goals', __name__, url_prefix='/api/goals')


def _repository():
    return current_app.extensions['record_repository']

def _error(message, status_code):
    return jsonify({
        'success': False,
        'error': message
    }), status_code

@goals_bp.route('', methods=['GET'])
@requires_auth
def list_goals():
    """All goals of the school, newest period first"""
    try:
        goals = _repository().list_goals(g.account.id)
        return jsonify({
            'success': True,
            'goals': [goal.to_dict() for goal in goals]
        })
    except Exception as e:
        logger.error(f"Error listing goals: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@goals_bp.route('/<int:year>/<month>', methods=['GET'])
@requires_auth
def get_goal(year, month):
    try:
        month, year = validate_period(month, year)
        goal = _repository().get_goal(g.account.id, month, year)
        if goal is None:
            return _error(f"No goal set for {month} {year}", 404)
        return jsonify({'success': True, 'goal': goal.to_dict()})
    except RecordValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        logger.error(f"Error getting goal: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@goals_bp.route('/<int:year>/<month>', methods=['PUT'])
@requires_auth
def save_goal(year, month):
    """
    Create or update the goal for a month

    Expected JSON payload:
    {
        "target_leads": 50,
        "target_enrollments": 15,
        "target_revenue": 12000
    }
    """
    try:
        data = request.get_json(silent=True)
        if data is None:
            return _error('No data provided in request', 400)

        goal = parse_goal_payload(data, month, year)
        repository = _repository()
        repository.put_goal(g.account.id, goal)

        return jsonify({
            'success': True,
            'goal': repository.get_goal(g.account.id, goal.month, goal.year).to_dict()
        })
    except RecordValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        logger.error(f"Error saving goal: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@goals_bp.route('/<int:year>/<month>', methods=['DELETE'])
@requires_auth
def delete_goal(year, month):
    try:
        month, year = validate_period(month, year)
        if not _repository().delete_goal(g.account.id, month, year):
            return _error(f"No goal set for {month} {year}", 404)
        return jsonify({'success': True})
    except RecordValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        logger.error(f"Error deleting goal: {str(e)}", exc_info=True)
        return _error(str(e), 500)
