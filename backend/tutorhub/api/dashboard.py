"""Teacher dashboard API."""
from datetime import date, timedelta

from flask import Blueprint
from flask_jwt_extended import jwt_required

from tutorhub.services.report_service import ReportService
from tutorhub.services.timetable_service import TimetableService
from tutorhub.utils.decorators import teacher_required
from tutorhub.utils.helpers import success_response, error_response, format_money

dashboard_bp = Blueprint('dashboard', __name__)

UPCOMING_DAYS = 7
UPCOMING_LIMIT = 5

@dashboard_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def get_dashboard(teacher):
    """Today's slots, weekly stats, monthly earnings and recent activity."""
    try:
        today = date.today()

        todays = TimetableService.todays_occurrences(teacher, today)
        upcoming = TimetableService.list_occurrences(
            teacher,
            today + timedelta(days=1),
            today + timedelta(days=UPCOMING_DAYS),
            status='scheduled'
        )[:UPCOMING_LIMIT]

        earnings = ReportService.monthly_earnings(teacher, today)

        return success_response(data={
            'teacher': teacher.to_dict(),
            'today': [o.to_dict() for o in todays],
            'weekly_stats': ReportService.weekly_stats(teacher, today),
            'monthly_earnings': earnings,
            'monthly_earnings_display': format_money(earnings),
            'upcoming': [o.to_dict() for o in upcoming],
            'recent_activity': ReportService.recent_activity(teacher)
        })

    except Exception as e:
        return error_response(f"Failed to load dashboard: {str(e)}", 500)
