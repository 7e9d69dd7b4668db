# Admin API Routes
#
# Aggregate view across all school accounts, restricted to admin accounts

from decimal import Decimal

from flask import Blueprint, jsonify, current_app, Response
import logging

from ...auth import requires_admin
from ..calculators import BaseCalculator
from ..services.export_service import export_school_summaries_to_csv

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


def _repository():
    return current_app.extensions['record_repository']

@admin_bp.route('/schools', methods=['GET'])
@requires_admin
def list_schools():
    """Per-school summaries plus totals across all schools"""
    try:
        summaries = _repository().get_school_summaries()
        totals = {
            'schools': len(summaries),
            'leads': sum(summary.total_leads for summary in summaries),
            'appointments': sum(summary.total_appointments for summary in summaries),
            'enrollments': sum(summary.total_enrollments for summary in summaries),
            'revenue': BaseCalculator.format_money(
                sum((summary.total_revenue for summary in summaries), Decimal('0'))
            ),
        }
        return jsonify({
            'success': True,
            'schools': [summary.to_dict() for summary in summaries],
            'totals': totals
        })
    except Exception as e:
        logger.error(f"Error getting school summaries: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500

@admin_bp.route('/schools/export', methods=['GET'])
@requires_admin
def export_schools():
    """Download the school summaries as CSV"""
    try:
        filename, body = export_school_summaries_to_csv(_repository().get_school_summaries())
        return Response(
            body,
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={filename}'}
        )
    except Exception as e:
        logger.error(f"Error exporting school summaries: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500
