"""Teacher classes API."""
from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from tutorhub.models.class_model import ClassModel, ClassStatus, EnrollmentStatus
from tutorhub.models.class_session import ClassSession
from tutorhub.services.report_service import ReportService
from tutorhub.services.session_service import SessionService
from tutorhub.utils.decorators import teacher_required
from tutorhub.utils.errors import ServiceError
from tutorhub.utils.helpers import success_response, error_response

classes_bp = Blueprint('classes', __name__)

@classes_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def list_classes(teacher):
    """Classes taught by the current teacher."""
    try:
        query = teacher.classes
        status = request.args.get('status')
        if status:
            try:
                query = query.filter(ClassModel.status == ClassStatus(status))
            except ValueError:
                return error_response(f"Invalid status: {status}", 400)

        classes = query.order_by(ClassModel.title).all()
        return success_response(data=[c.to_dict() for c in classes], meta={'total': len(classes)})

    except Exception as e:
        return error_response(f"Failed to list classes: {str(e)}", 500)

@classes_bp.route('/<int:class_id>', methods=['GET'])
@jwt_required()
@teacher_required
def get_class(class_id, teacher):
    """Class detail with statistics and sessions grouped by month."""
    try:
        klass = SessionService.get_class_for_teacher(teacher, class_id)
        sessions = klass.sessions.order_by(ClassSession.session_date, ClassSession.session_time).all()

        months = []
        for group in ReportService.monthly_grouping(sessions):
            group['sessions'] = [s.to_dict() for s in group['sessions']]
            months.append(group)

        data = klass.to_dict()
        data['timetable'] = klass.timetable.to_dict() if klass.timetable else None
        data['statistics'] = ReportService.class_statistics(klass)
        data['sessions_by_month'] = months

        return success_response(data=data)

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(f"Failed to get class: {str(e)}", 500)

@classes_bp.route('/<int:class_id>/students', methods=['GET'])
@jwt_required()
@teacher_required
def get_class_students(class_id, teacher):
    """Enrollments of a class; ``include_left=true`` also returns former students."""
    try:
        klass = SessionService.get_class_for_teacher(teacher, class_id)

        query = klass.enrollments
        if request.args.get('include_left', 'false').lower() != 'true':
            query = query.filter_by(status=EnrollmentStatus.ACTIVE)

        enrollments = query.all()
        return success_response(
            data=[e.to_dict() for e in enrollments],
            meta={'total': len(enrollments), 'active': klass.active_student_count}
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(f"Failed to get students: {str(e)}", 500)
