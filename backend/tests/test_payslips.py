"""Session verification and payslip generation."""
from datetime import date, time
from decimal import Decimal

import pytest

from tutorhub.models.class_session import PayoutStatus
from tutorhub.models.payslip import PayslipStatus
from tutorhub.services.payslip_service import PayslipService
from tutorhub.services.session_service import SessionService
from tutorhub.utils.errors import InvalidTransition, ValidationError
from conftest import MONDAY

def completed_session(teacher, klass, day, at=time(9, 0)):
    session = SessionService.materialize_and_start(teacher, klass, day, at)
    return SessionService.complete_session(teacher, session, 'Covered chapter 3')

@pytest.fixture
def verified(teacher, klass, students, admin):
    sessions = [
        completed_session(teacher, klass, MONDAY),
        completed_session(teacher, klass, date(2024, 1, 8)),
    ]
    for session in sessions:
        PayslipService.verify_session(session, admin)
    return sessions

def test_verify_requires_completed(klass, admin):
    scheduled = SessionService.create_session(klass, MONDAY, time(9, 0))
    with pytest.raises(ValidationError):
        PayslipService.verify_session(scheduled, admin)

def test_verify_twice_rejected(verified, admin):
    assert verified[0].verified_by == admin.id
    with pytest.raises(ValidationError):
        PayslipService.verify_session(verified[0], admin)

def test_eligible_sessions(teacher, klass, verified):
    unverified = completed_session(teacher, klass, date(2024, 1, 15))

    eligible = PayslipService.eligible_sessions(teacher, '2024-01')
    assert [s.id for s in eligible] == [s.id for s in verified]
    assert unverified.id not in {s.id for s in eligible}
    assert PayslipService.eligible_sessions(teacher, '2024-02') == []

def test_generate_payslip(teacher, verified, admin):
    payslip = PayslipService.generate_for_teacher(teacher, '2024-01', generated_by=admin)

    assert payslip.status == PayslipStatus.DRAFT
    assert payslip.year == 2024
    assert payslip.total_sessions == 2
    assert payslip.total_amount == Decimal('100.00')
    assert payslip.generated_by == admin.id
    for session in verified:
        assert session.payslip_id == payslip.id
        assert session.payout_status == PayoutStatus.INCLUDED_IN_PAYSLIP

def test_generate_duplicate_rejected(teacher, verified):
    PayslipService.generate_for_teacher(teacher, '2024-01')
    with pytest.raises(ValidationError):
        PayslipService.generate_for_teacher(teacher, '2024-01')

def test_generate_without_sessions_rejected(teacher):
    with pytest.raises(ValidationError):
        PayslipService.generate_for_teacher(teacher, '2024-01')

def test_generate_invalid_month(teacher):
    with pytest.raises(ValidationError):
        PayslipService.generate_for_teacher(teacher, 'January')

def test_unverify(verified, teacher):
    PayslipService.unverify_session(verified[0])
    assert verified[0].verified_at is None

    PayslipService.generate_for_teacher(teacher, '2024-01')
    with pytest.raises(ValidationError):
        PayslipService.unverify_session(verified[1])

def test_finalize_and_pay(teacher, verified):
    payslip = PayslipService.generate_for_teacher(teacher, '2024-01')

    with pytest.raises(InvalidTransition):
        PayslipService.mark_paid(payslip)

    PayslipService.finalize(payslip)
    assert payslip.status == PayslipStatus.FINALIZED
    assert payslip.finalized_at is not None

    with pytest.raises(InvalidTransition):
        PayslipService.finalize(payslip)

    PayslipService.mark_paid(payslip)
    assert payslip.status == PayslipStatus.PAID
    assert payslip.paid_at is not None
    assert all(s.payout_status == PayoutStatus.PAID for s in verified)
