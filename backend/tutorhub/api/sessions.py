"""Teacher sessions API: listing, lifecycle actions and attendance."""
from datetime import date, datetime

from flask import Blueprint, Response, current_app, request
from flask_jwt_extended import jwt_required

from tutorhub import db
from tutorhub.models.class_model import ClassModel
from tutorhub.models.class_session import ClassSession, SessionStatus
from tutorhub.services.report_service import ReportService
from tutorhub.services.session_service import SessionService
from tutorhub.services.timetable_service import TimetableService
from tutorhub.utils.decorators import teacher_required
from tutorhub.utils.errors import ServiceError, ValidationError
from tutorhub.utils.helpers import (
    success_response, error_response, get_pagination, pagination_meta, format_elapsed
)
from tutorhub.utils.validators import parse_date, parse_time

sessions_bp = Blueprint('sessions', __name__)

@sessions_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Sessions service is running')

def _filtered_query(teacher):
    """Teacher's sessions narrowed by the request's query string."""
    query = ClassSession.query.join(ClassModel).filter(ClassModel.teacher_id == teacher.id)
    today = date.today()

    date_filter = request.args.get('date_filter')
    if date_filter == 'today':
        query = query.filter(ClassSession.session_date == today)
    elif date_filter == 'upcoming':
        query = query.filter(
            ClassSession.session_date >= today,
            ClassSession.status == SessionStatus.SCHEDULED
        )
    elif date_filter == 'past':
        query = query.filter(ClassSession.session_date < today)
    elif date_filter == 'this_week':
        start, end = TimetableService.week_range(today)
        query = query.filter(ClassSession.session_date.between(start, end))

    class_id = request.args.get('class_id', type=int)
    if class_id:
        query = query.filter(ClassSession.class_id == class_id)

    status = request.args.get('status')
    if status:
        try:
            query = query.filter(ClassSession.status == SessionStatus(status))
        except ValueError:
            raise ValidationError(f"Invalid status: {status}")

    search = (request.args.get('search') or '').strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(db.or_(
            ClassModel.title.ilike(pattern),
            ClassSession.teacher_notes.ilike(pattern)
        ))

    return query.order_by(ClassSession.session_date.desc(), ClassSession.session_time.desc())

@sessions_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def list_sessions(teacher):
    """Paginated list of the teacher's sessions."""
    try:
        page, per_page = get_pagination()
        pagination = _filtered_query(teacher).paginate(page=page, per_page=per_page, error_out=False)

        meta = pagination_meta(pagination)
        meta['statistics'] = ReportService.session_statistics(teacher)

        return success_response(
            data=[s.to_dict() for s in pagination.items],
            meta=meta
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(f"Failed to list sessions: {str(e)}", 500)

@sessions_bp.route('/export', methods=['GET'])
@jwt_required()
@teacher_required
def export_sessions(teacher):
    """Export the filtered sessions as CSV."""
    try:
        sessions = _filtered_query(teacher).all()
        csv_data = ReportService.export_sessions_csv(sessions)
        filename = f"sessions_{datetime.utcnow().strftime('%Y%m%d_%H%M%S')}.csv"

        return Response(
            csv_data,
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={filename}'}
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(f"Failed to export sessions: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>', methods=['GET'])
@jwt_required()
@teacher_required
def get_session(session_id, teacher):
    """Session detail with attendance and KPI."""
    try:
        session = SessionService.get_session_for_teacher(teacher, session_id)

        data = session.to_dict(include_attendance=True)
        data['formatted_elapsed'] = session.formatted_elapsed()
        data['duration_variance_minutes'] = session.duration_variance_minutes
        data['kpi_status'] = session.kpi_status(current_app.config['KPI_TOLERANCE_MINUTES'])
        data['attendance_rate'] = ReportService.attendance_rate(session.attendances)
        data['attendance_breakdown'] = ReportService.attendance_breakdown(session.attendances)

        return success_response(data=data)

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(f"Failed to get session: {str(e)}", 500)

@sessions_bp.route('/start-slot', methods=['POST'])
@jwt_required()
@teacher_required
def start_slot(teacher):
    """Start a timetable slot, creating its session on first start."""
    try:
        data = request.get_json(silent=True) or {}

        session_date = parse_date(data.get('date'))
        session_time = parse_time(data.get('time'))
        if not data.get('class_id') or session_date is None or session_time is None:
            return error_response("class_id, date (YYYY-MM-DD) and time (HH:MM) are required", 400)

        klass = SessionService.get_class_for_teacher(teacher, int(data['class_id']))
        session = SessionService.materialize_and_start(teacher, klass, session_date, session_time)

        return success_response(
            data=session.to_dict(include_attendance=True),
            message='Session started'
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to start session: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/start', methods=['POST'])
@jwt_required()
@teacher_required
def start_session(session_id, teacher):
    try:
        session = SessionService.get_session_for_teacher(teacher, session_id)
        session = SessionService.start_session(teacher, session)
        return success_response(data=session.to_dict(include_attendance=True), message='Session started')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to start session: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/complete', methods=['POST'])
@jwt_required()
@teacher_required
def complete_session(session_id, teacher):
    try:
        data = request.get_json(silent=True) or {}
        session = SessionService.get_session_for_teacher(teacher, session_id)
        session = SessionService.complete_session(teacher, session, data.get('notes'))
        return success_response(data=session.to_dict(include_attendance=True), message='Session completed')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to complete session: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/cancel', methods=['POST'])
@jwt_required()
@teacher_required
def cancel_session(session_id, teacher):
    try:
        session = SessionService.get_session_for_teacher(teacher, session_id)
        session = SessionService.cancel_session(teacher, session)
        return success_response(data=session.to_dict(), message='Session cancelled')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to cancel session: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/no-show', methods=['POST'])
@jwt_required()
@teacher_required
def mark_no_show(session_id, teacher):
    try:
        data = request.get_json(silent=True) or {}
        session = SessionService.get_session_for_teacher(teacher, session_id)
        session = SessionService.mark_no_show(teacher, session, data.get('reason'))
        return success_response(data=session.to_dict(), message='Session marked as no-show')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to mark no-show: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/bookmark', methods=['PUT'])
@jwt_required()
@teacher_required
def update_bookmark(session_id, teacher):
    try:
        data = request.get_json(silent=True) or {}
        session = SessionService.get_session_for_teacher(teacher, session_id)
        session = SessionService.update_bookmark(teacher, session, data.get('bookmark', ''))
        return success_response(data={'teacher_notes': session.teacher_notes}, message='Bookmark saved')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to save bookmark: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/attendance/<int:student_id>', methods=['PUT'])
@jwt_required()
@teacher_required
def update_attendance(session_id, student_id, teacher):
    try:
        data = request.get_json(silent=True) or {}
        if not data.get('status'):
            return error_response("Status is required", 400)

        session = SessionService.get_session_for_teacher(teacher, session_id)
        record = SessionService.update_student_attendance(
            teacher, session, student_id, data['status'], data.get('remarks')
        )

        return success_response(
            data={
                'record': record.to_dict(),
                'attendance_rate': ReportService.attendance_rate(session.attendances)
            },
            message='Attendance updated'
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to update attendance: {str(e)}", 500)

@sessions_bp.route('/<int:session_id>/elapsed', methods=['GET'])
@jwt_required()
@teacher_required
def get_elapsed(session_id, teacher):
    """Elapsed time of an ongoing session."""
    try:
        session = SessionService.get_session_for_teacher(teacher, session_id)
        seconds = session.elapsed_seconds()

        return success_response(data={
            'session_id': session.id,
            'status': session.status.value,
            'elapsed_seconds': seconds,
            'formatted': format_elapsed(seconds)
        })

    except ServiceError as e:
        return error_response(e.message, e.status_code)
