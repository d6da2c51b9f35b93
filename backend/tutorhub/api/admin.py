"""Admin API: session scheduling, verification and payslips."""
from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from tutorhub import db
from tutorhub.models.class_model import ClassModel
from tutorhub.models.class_session import ClassSession
from tutorhub.models.payslip import Payslip
from tutorhub.models.teacher import Teacher
from tutorhub.services.payslip_service import PayslipService
from tutorhub.services.session_service import SessionService
from tutorhub.utils.decorators import admin_required
from tutorhub.utils.errors import ServiceError
from tutorhub.utils.helpers import success_response, error_response
from tutorhub.utils.validators import Validator, parse_date, parse_time

admin_bp = Blueprint('admin', __name__)

@admin_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Admin service is running')

@admin_bp.route('/sessions', methods=['POST'])
@jwt_required()
@admin_required
def create_session(admin):
    """Schedule a session for a class."""
    try:
        data = request.get_json(silent=True) or {}

        validation = Validator.validate_required_fields(data, ['class_id', 'date', 'time'])
        if not validation['is_valid']:
            return error_response(', '.join(validation['errors']), 400)

        session_date = parse_date(data['date'])
        session_time = parse_time(data['time'])
        if session_date is None or session_time is None:
            return error_response("Invalid date or time format", 400)

        klass = db.session.get(ClassModel, int(data['class_id']))
        session = SessionService.create_session(
            klass, session_date, session_time,
            duration=data.get('duration_minutes'),
            notes=data.get('notes')
        )

        return success_response(data=session.to_dict(), message='Session scheduled', status_code=201)

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to create session: {str(e)}", 500)

def _get_session(session_id):
    return db.session.get(ClassSession, session_id)

@admin_bp.route('/sessions/<int:session_id>/verify', methods=['POST'])
@jwt_required()
@admin_required
def verify_session(session_id, admin):
    try:
        session = _get_session(session_id)
        if not session:
            return error_response("Session not found", 404)

        session = PayslipService.verify_session(session, admin)
        return success_response(data=session.to_dict(), message='Session verified')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to verify session: {str(e)}", 500)

@admin_bp.route('/sessions/<int:session_id>/unverify', methods=['POST'])
@jwt_required()
@admin_required
def unverify_session(session_id, admin):
    try:
        session = _get_session(session_id)
        if not session:
            return error_response("Session not found", 404)

        session = PayslipService.unverify_session(session)
        return success_response(data=session.to_dict(), message='Session verification removed')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to unverify session: {str(e)}", 500)

@admin_bp.route('/payslips', methods=['POST'])
@jwt_required()
@admin_required
def generate_payslip(admin):
    """Generate a teacher's payslip for a month (YYYY-MM)."""
    try:
        data = request.get_json(silent=True) or {}

        validation = Validator.validate_required_fields(data, ['teacher_id', 'month'])
        if not validation['is_valid']:
            return error_response(', '.join(validation['errors']), 400)

        teacher = db.session.get(Teacher, int(data['teacher_id']))
        if not teacher:
            return error_response("Teacher not found", 404)

        payslip = PayslipService.generate_for_teacher(teacher, data['month'], generated_by=admin)
        return success_response(
            data=payslip.to_dict(include_sessions=True),
            message='Payslip generated',
            status_code=201
        )

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to generate payslip: {str(e)}", 500)

@admin_bp.route('/payslips/<int:payslip_id>/finalize', methods=['POST'])
@jwt_required()
@admin_required
def finalize_payslip(payslip_id, admin):
    try:
        payslip = db.session.get(Payslip, payslip_id)
        if not payslip:
            return error_response("Payslip not found", 404)

        payslip = PayslipService.finalize(payslip)
        return success_response(data=payslip.to_dict(), message='Payslip finalized')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to finalize payslip: {str(e)}", 500)

@admin_bp.route('/payslips/<int:payslip_id>/pay', methods=['POST'])
@jwt_required()
@admin_required
def pay_payslip(payslip_id, admin):
    try:
        payslip = db.session.get(Payslip, payslip_id)
        if not payslip:
            return error_response("Payslip not found", 404)

        payslip = PayslipService.mark_paid(payslip)
        return success_response(data=payslip.to_dict(), message='Payslip marked as paid')

    except ServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        db.session.rollback()
        return error_response(f"Failed to mark payslip as paid: {str(e)}", 500)
