"""Timetable API: sessions and virtual slots by day, week or month."""
from datetime import date, timedelta

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from tutorhub.services.timetable_service import TimetableService
from tutorhub.utils.decorators import teacher_required
from tutorhub.utils.errors import ServiceError
from tutorhub.utils.helpers import success_response, error_response
from tutorhub.utils.validators import parse_date

timetable_bp = Blueprint('timetable', __name__)

LIST_VIEW_DAYS = 30

@timetable_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Timetable service is running')

@timetable_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def get_timetable(teacher):
    """Occurrences for the requested view around ``date`` (default today)."""
    try:
        view = request.args.get('view', 'week')
        reference = date.today()
        if request.args.get('date'):
            reference = parse_date(request.args['date'])
            if reference is None:
                return error_response("Invalid date format. Use YYYY-MM-DD", 400)

        filters = {
            'class_id': request.args.get('class_id', type=int),
            'status': request.args.get('status') or None
        }

        if view == 'list':
            start, end = reference, reference + timedelta(days=LIST_VIEW_DAYS - 1)
            occurrences = TimetableService.list_occurrences(teacher, start, end, **filters)
        else:
            start, end = {
                'day': TimetableService.day_range,
                'week': TimetableService.week_range,
                'month': TimetableService.month_range,
            }.get(view, TimetableService.week_range)(reference)
            occurrences = TimetableService.occurrences_for_view(teacher, view, reference, **filters)

        return success_response(
            data=[o.to_dict() for o in occurrences],
            meta={
                'view': view,
                'start_date': start.isoformat(),
                'end_date': end.isoformat(),
                'total': len(occurrences),
                'virtual': sum(1 for o in occurrences if o.is_virtual)
            }
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(f"Failed to load timetable: {str(e)}", 500)
