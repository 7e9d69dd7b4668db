# Dashboard API Routes
#
# Provides RESTful API endpoints for monthly records, derived metrics and exports

from flask import Blueprint, jsonify, request, g, current_app, Response
import logging

from ...auth import requires_auth
from ..validation import parse_record_payload, validate_period, RecordValidationError
from ..services.dashboard_service import RecordNotFoundError, InvalidPeriodError
from ..services.export_service import export_to_csv, export_to_pdf

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


def _dashboard_service():
    return current_app.extensions['dashboard_service']

def _error(message, status_code):
    return jsonify({
        'success': False,
        'error': message
    }), status_code

def _attachment(body, filename, mimetype):
    return Response(
        body,
        mimetype=mimetype,
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )

@dashboard_bp.route('/records', methods=['GET'])
@requires_auth
def list_records():
    """List the school's monthly records in chronological order, optionally for one year"""
    try:
        year = request.args.get('year', type=int)
        records = _dashboard_service().repository.list_records(g.account.id, year=year)
        return jsonify({
            'success': True,
            'records': [record.to_dict() for record in records]
        })
    except Exception as e:
        logger.error(f"Error listing records: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@dashboard_bp.route('/records/<int:year>/<month>', methods=['GET'])
@requires_auth
def get_month(year, month):
    """Get a month's record with its derived metrics and goal progress"""
    try:
        month, year = validate_period(month, year)
        result = _dashboard_service().get_month_dashboard(g.account.id, month, year)
        return jsonify({'success': True, **result})
    except RecordValidationError as e:
        return _error(e.message, 400)
    except RecordNotFoundError as e:
        return _error(str(e), 404)
    except Exception as e:
        logger.error(f"Error in get_month: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@dashboard_bp.route('/records/<int:year>/<month>', methods=['PUT'])
@requires_auth
def save_month(year, month):
    """
    Create or update a month's record

    Expected JSON payload (camelCase keys are also accepted):
    {
        "leads": 40, "appointments": 20, "showed": 16, "enrollments": 12,
        "pif": 1000, "down_payments": 500, "event_revenue": 200,
        "pro_shop_sales": 50, "mrr": 300,
        "students_start": 100, "students_end": 95
    }
    """
    try:
        data = request.get_json(silent=True)
        if data is None:
            return _error('No data provided in request', 400)

        record = parse_record_payload(data, month, year)
        service = _dashboard_service()
        service.repository.put_record(g.account.id, record)

        result = service.get_month_dashboard(g.account.id, record.month, record.year)
        return jsonify({'success': True, **result})
    except RecordValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        logger.error(f"Error saving record: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@dashboard_bp.route('/records/<int:year>/<month>', methods=['DELETE'])
@requires_auth
def delete_month(year, month):
    try:
        month, year = validate_period(month, year)
        if not _dashboard_service().repository.delete_record(g.account.id, month, year):
            return _error(f"No data for {month} {year}", 404)
        return jsonify({'success': True})
    except RecordValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        logger.error(f"Error deleting record: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@dashboard_bp.route('/overview/<int:year>', methods=['GET'])
@requires_auth
def year_overview(year):
    """All months of a year with total revenue and student value"""
    try:
        return jsonify({
            'success': True,
            'year': year,
            'months': _dashboard_service().get_year_overview(g.account.id, year)
        })
    except Exception as e:
        logger.error(f"Error in year_overview: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@dashboard_bp.route('/comparison', methods=['GET'])
@requires_auth
def revenue_comparison():
    """Revenue of the most recent months relative to the best of them"""
    try:
        limit = request.args.get('limit', default=6, type=int)
        return jsonify({
            'success': True,
            'comparison': _dashboard_service().get_revenue_comparison(g.account.id, limit=limit)
        })
    except Exception as e:
        logger.error(f"Error in revenue_comparison: {str(e)}", exc_info=True)
        return _error(str(e), 500)

@dashboard_bp.route('/export/<export_format>', methods=['GET'])
@requires_auth
def export_records(export_format):
    """
    Download records as CSV or PDF

    Optional query parameters bound the range inclusively:
    ?start=January-2024&end=June-2024
    """
    if export_format not in ('csv', 'pdf'):
        return _error(f"Unsupported export format '{export_format}'", 400)

    try:
        records = _dashboard_service().get_export_records(
            g.account.id,
            start=request.args.get('start'),
            end=request.args.get('end')
        )

        if export_format == 'csv':
            filename, body = export_to_csv(records)
            return _attachment(body, filename, 'text/csv')

        filename, body = export_to_pdf(records)
        return _attachment(body, filename, 'application/pdf')
    except InvalidPeriodError as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.error(f"Error exporting records: {str(e)}", exc_info=True)
        return _error(str(e), 500)
