"""Teacher allowance calculation for completed sessions."""
from decimal import Decimal, ROUND_HALF_UP
from importlib import import_module
from typing import Callable

from flask import current_app

from tutorhub.models.class_model import RateType, CommissionType
from tutorhub.models.course import BillingType

TWO_PLACES = Decimal('0.01')

def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal('0')

class AllowanceService:
    """Computes the amount a teacher earns for one session."""

    @staticmethod
    def session_fee(session) -> Decimal:
        """Course fee attributable to one session, by the course billing type."""
        course = session.class_.course if session.class_ else None
        if not course or not course.billing_type:
            return Decimal('0')

        if course.billing_type == BillingType.PER_SESSION:
            return _dec(course.price_per_session)
        if course.billing_type == BillingType.PER_MONTH:
            return _dec(course.price_per_month) / Decimal(course.sessions_per_month or 1)
        if course.billing_type == BillingType.PER_MINUTE:
            return _dec(course.price_per_minute) * Decimal(session.duration_minutes or 0)
        return Decimal('0')

    @staticmethod
    def session_commission(session) -> Decimal:
        """Teacher share of the session fee under the class commission terms."""
        klass = session.class_
        if klass.commission_type == CommissionType.PERCENTAGE:
            return AllowanceService.session_fee(session) * _dec(klass.commission_value) / Decimal('100')
        if klass.commission_type == CommissionType.FIXED:
            return _dec(klass.commission_value)
        return Decimal('0')

    @staticmethod
    def default_calculator(session) -> Decimal:
        """Allowance by the class rate type."""
        klass = session.class_
        if klass is None:
            return Decimal('0')

        if klass.rate_type == RateType.PER_CLASS:
            amount = _dec(klass.teacher_rate)
        elif klass.rate_type == RateType.PER_STUDENT:
            amount = _dec(klass.teacher_rate) * session.present_count
        elif klass.rate_type == RateType.PER_SESSION:
            amount = AllowanceService.session_commission(session)
        else:
            amount = Decimal('0')

        return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    @staticmethod
    def get_calculator() -> Callable:
        """Configured calculator, falling back to the rate-type default.

        ``ALLOWANCE_CALCULATOR`` may be a callable or a dotted path
        (``package.module:function`` or ``package.module.function``).
        """
        configured = current_app.config.get('ALLOWANCE_CALCULATOR')
        if not configured:
            return AllowanceService.default_calculator
        if callable(configured):
            return configured

        if ':' in configured:
            module_name, attr_path = configured.split(':', 1)
        else:
            module_name, attr_path = configured.rsplit('.', 1)

        target = import_module(module_name)
        for attr in attr_path.split('.'):
            target = getattr(target, attr)
        return target

    @staticmethod
    def compute_allowance(session) -> Decimal:
        amount = AllowanceService.get_calculator()(session)
        return _dec(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
