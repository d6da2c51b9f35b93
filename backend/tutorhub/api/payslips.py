"""Teacher payslips API."""
from flask import Blueprint
from flask_jwt_extended import jwt_required

from tutorhub.models.payslip import Payslip
from tutorhub.utils.decorators import teacher_required
from tutorhub.utils.helpers import success_response, error_response

payslips_bp = Blueprint('payslips', __name__)

@payslips_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def list_payslips(teacher):
    """The teacher's own payslips, newest month first."""
    try:
        payslips = Payslip.query.filter_by(teacher_id=teacher.id).order_by(Payslip.month.desc()).all()
        return success_response(data=[p.to_dict() for p in payslips], meta={'total': len(payslips)})

    except Exception as e:
        return error_response(f"Failed to list payslips: {str(e)}", 500)

@payslips_bp.route('/<int:payslip_id>', methods=['GET'])
@jwt_required()
@teacher_required
def get_payslip(payslip_id, teacher):
    payslip = Payslip.query.filter_by(id=payslip_id, teacher_id=teacher.id).first()
    if not payslip:
        return error_response("Payslip not found", 404)
    return success_response(data=payslip.to_dict(include_sessions=True))
