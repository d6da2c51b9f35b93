"""Session verification and monthly payslip generation."""
from decimal import Decimal
from typing import List

from flask import current_app

from tutorhub import db
from tutorhub.models.base import utcnow
from tutorhub.models.class_model import ClassModel
from tutorhub.models.class_session import ClassSession, SessionStatus, PayoutStatus
from tutorhub.models.payslip import Payslip, PayslipStatus
from tutorhub.services.timetable_service import TimetableService
from tutorhub.utils.errors import InvalidTransition, ValidationError
from tutorhub.utils.validators import parse_month

class PayslipService:

    @staticmethod
    def verify_session(session: ClassSession, verifier) -> ClassSession:
        if session.status != SessionStatus.COMPLETED:
            raise ValidationError("Only completed sessions can be verified")
        if session.is_verified:
            raise ValidationError("Session is already verified")

        session.verified_at = utcnow()
        session.verified_by = verifier.id
        db.session.commit()
        current_app.logger.info(f"Session {session.id} verified by user {verifier.id}")
        return session

    @staticmethod
    def unverify_session(session: ClassSession) -> ClassSession:
        if not session.is_verified:
            raise ValidationError("Session is not verified")
        if session.payout_status != PayoutStatus.UNPAID:
            raise ValidationError("Session is already included in a payslip")

        session.verified_at = None
        session.verified_by = None
        db.session.commit()
        current_app.logger.info(f"Session {session.id} verification removed")
        return session

    @staticmethod
    def _month_bounds(month: str):
        first = parse_month(month)
        if first is None:
            raise ValidationError("Month must be in YYYY-MM format")
        return TimetableService.month_range(first)

    @staticmethod
    def eligible_sessions(teacher, month: str) -> List[ClassSession]:
        start, end = PayslipService._month_bounds(month)
        return ClassSession.query.join(ClassModel).filter(
            ClassModel.teacher_id == teacher.id,
            ClassSession.status == SessionStatus.COMPLETED,
            ClassSession.verified_at.isnot(None),
            ClassSession.allowance_amount.isnot(None),
            ClassSession.payout_status == PayoutStatus.UNPAID,
            ClassSession.session_date >= start,
            ClassSession.session_date <= end
        ).order_by(ClassSession.session_date, ClassSession.session_time).all()

    @staticmethod
    def generate_for_teacher(teacher, month: str, generated_by=None) -> Payslip:
        start, _ = PayslipService._month_bounds(month)

        if Payslip.query.filter_by(teacher_id=teacher.id, month=month).first():
            raise ValidationError(f"Payslip for {month} already exists for this teacher")

        sessions = PayslipService.eligible_sessions(teacher, month)
        if not sessions:
            raise ValidationError("No verified sessions available for this month")

        total = sum((Decimal(str(s.allowance_amount)) for s in sessions), Decimal('0'))
        payslip = Payslip(
            teacher_id=teacher.id,
            month=month,
            year=start.year,
            total_sessions=len(sessions),
            total_amount=total,
            status=PayslipStatus.DRAFT,
            generated_by=generated_by.id if generated_by else None
        )

        try:
            db.session.add(payslip)
            db.session.flush()
            for session in sessions:
                session.payslip_id = payslip.id
                session.payout_status = PayoutStatus.INCLUDED_IN_PAYSLIP
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f"Payslip {payslip.id} generated for teacher {teacher.id} ({month}): "
            f"{len(sessions)} sessions, {total}"
        )
        return payslip

    @staticmethod
    def finalize(payslip: Payslip) -> Payslip:
        if payslip.status != PayslipStatus.DRAFT:
            raise InvalidTransition(payslip.status.value, PayslipStatus.FINALIZED.value,
                                    "Only draft payslips can be finalized")
        payslip.status = PayslipStatus.FINALIZED
        payslip.finalized_at = utcnow()
        db.session.commit()
        current_app.logger.info(f"Payslip {payslip.id} finalized")
        return payslip

    @staticmethod
    def mark_paid(payslip: Payslip) -> Payslip:
        if payslip.status != PayslipStatus.FINALIZED:
            raise InvalidTransition(payslip.status.value, PayslipStatus.PAID.value,
                                    "Only finalized payslips can be marked as paid")
        payslip.status = PayslipStatus.PAID
        payslip.paid_at = utcnow()
        for session in payslip.sessions:
            session.payout_status = PayoutStatus.PAID
        db.session.commit()
        current_app.logger.info(f"Payslip {payslip.id} marked as paid")
        return payslip
