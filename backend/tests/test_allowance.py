"""Teacher allowance by rate type and commission terms."""
from decimal import Decimal
from types import SimpleNamespace

from tutorhub.models.class_model import RateType, CommissionType
from tutorhub.models.course import BillingType
from tutorhub.services.allowance_service import AllowanceService

def fake_session(rate_type, teacher_rate=None, present=0, duration=60,
                 commission_type=None, commission_value=None, course=None):
    klass = SimpleNamespace(
        rate_type=rate_type,
        teacher_rate=teacher_rate,
        commission_type=commission_type,
        commission_value=commission_value,
        course=course
    )
    return SimpleNamespace(class_=klass, present_count=present, duration_minutes=duration)

def course(billing_type, **prices):
    values = dict(price_per_session=None, price_per_month=None,
                  sessions_per_month=None, price_per_minute=None)
    values.update(prices)
    return SimpleNamespace(billing_type=billing_type, **values)

def test_per_class(app):
    session = fake_session(RateType.PER_CLASS, teacher_rate=Decimal('50'))
    assert AllowanceService.compute_allowance(session) == Decimal('50.00')

def test_per_student(app):
    session = fake_session(RateType.PER_STUDENT, teacher_rate=Decimal('12.50'), present=3)
    assert AllowanceService.compute_allowance(session) == Decimal('37.50')

def test_per_session_percentage_of_monthly_fee(app):
    session = fake_session(
        RateType.PER_SESSION,
        commission_type=CommissionType.PERCENTAGE,
        commission_value=Decimal('40'),
        course=course(BillingType.PER_MONTH, price_per_month=Decimal('200'), sessions_per_month=4)
    )
    assert AllowanceService.compute_allowance(session) == Decimal('20.00')

def test_per_session_percentage_of_minute_fee(app):
    session = fake_session(
        RateType.PER_SESSION,
        duration=90,
        commission_type=CommissionType.PERCENTAGE,
        commission_value=Decimal('50'),
        course=course(BillingType.PER_MINUTE, price_per_minute=Decimal('1.5'))
    )
    assert AllowanceService.compute_allowance(session) == Decimal('67.50')

def test_per_session_fixed_commission(app):
    session = fake_session(
        RateType.PER_SESSION,
        commission_type=CommissionType.FIXED,
        commission_value=Decimal('35'),
        course=course(BillingType.PER_SESSION, price_per_session=Decimal('80'))
    )
    assert AllowanceService.compute_allowance(session) == Decimal('35.00')

def test_per_session_without_commission_or_course(app):
    session = fake_session(RateType.PER_SESSION, course=course(BillingType.PER_SESSION,
                                                              price_per_session=Decimal('80')))
    assert AllowanceService.compute_allowance(session) == Decimal('0.00')
    assert AllowanceService.session_fee(fake_session(RateType.PER_SESSION)) == Decimal('0')

def test_unknown_rate_type(app):
    session = fake_session(None, teacher_rate=Decimal('50'))
    assert AllowanceService.compute_allowance(session) == Decimal('0.00')

def test_configured_calculator(app):
    app.config['ALLOWANCE_CALCULATOR'] = lambda session: Decimal('12.345')
    session = fake_session(RateType.PER_CLASS, teacher_rate=Decimal('50'))
    assert AllowanceService.compute_allowance(session) == Decimal('12.35')

def test_configured_calculator_by_path(app):
    app.config['ALLOWANCE_CALCULATOR'] = 'tutorhub.services.allowance_service:AllowanceService.default_calculator'
    session = fake_session(RateType.PER_STUDENT, teacher_rate=Decimal('10'), present=2)
    assert AllowanceService.compute_allowance(session) == Decimal('20.00')
