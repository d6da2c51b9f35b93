"""Class session model and its lifecycle states."""
import enum
from datetime import datetime
from flask import current_app
from tutorhub import db
from tutorhub.models.base import BaseModel, utcnow
from tutorhub.utils.helpers import format_elapsed

class SessionStatus(enum.Enum):
    SCHEDULED = 'scheduled'
    ONGOING = 'ongoing'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    NO_SHOW = 'no_show'

class PayoutStatus(enum.Enum):
    UNPAID = 'unpaid'
    INCLUDED_IN_PAYSLIP = 'included_in_payslip'
    PAID = 'paid'

# Allowed status changes; every lifecycle operation checks this table.
TRANSITIONS = {
    SessionStatus.SCHEDULED: {SessionStatus.ONGOING, SessionStatus.CANCELLED, SessionStatus.NO_SHOW},
    SessionStatus.ONGOING: {SessionStatus.COMPLETED, SessionStatus.NO_SHOW},
    SessionStatus.COMPLETED: set(),
    SessionStatus.CANCELLED: set(),
    SessionStatus.NO_SHOW: set(),
}

TERMINAL_STATUSES = {SessionStatus.COMPLETED, SessionStatus.CANCELLED, SessionStatus.NO_SHOW}

def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    return target in TRANSITIONS.get(current, set())

class ClassSession(BaseModel):
    """One scheduled teaching occurrence of a class."""

    __tablename__ = 'class_sessions'
    __table_args__ = (
        db.UniqueConstraint('class_id', 'session_date', 'session_time', name='uq_class_session_slot'),
    )

    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    session_date = db.Column(db.Date, nullable=False, index=True)
    session_time = db.Column(db.Time, nullable=False)
    duration_minutes = db.Column(db.Integer, nullable=False, default=60)

    status = db.Column(db.Enum(SessionStatus), nullable=False, default=SessionStatus.SCHEDULED, index=True)
    started_at = db.Column(db.DateTime, nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True)
    teacher_notes = db.Column(db.Text, nullable=True)
    allowance_amount = db.Column(db.Numeric(10, 2), nullable=True)

    # Payroll
    verified_at = db.Column(db.DateTime, nullable=True)
    verified_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    payout_status = db.Column(db.Enum(PayoutStatus), nullable=False, default=PayoutStatus.UNPAID)
    payslip_id = db.Column(db.Integer, db.ForeignKey('payslips.id'), nullable=True, index=True)

    # Relationships
    attendances = db.relationship('AttendanceRecord', backref='session', lazy='select',
                                  cascade='all, delete-orphan',
                                  order_by='AttendanceRecord.id')
    verifier = db.relationship('User', foreign_keys=[verified_by])

    @property
    def is_verified(self) -> bool:
        return self.verified_at is not None

    def elapsed_seconds(self, now: datetime = None) -> int:
        """Seconds since start while ongoing, 0 otherwise."""
        if self.status != SessionStatus.ONGOING or not self.started_at:
            return 0
        now = now or utcnow()
        return max(int((now - self.started_at).total_seconds()), 0)

    def formatted_elapsed(self, now: datetime = None) -> str:
        return format_elapsed(self.elapsed_seconds(now))

    @property
    def actual_duration_minutes(self):
        if not self.started_at or not self.completed_at:
            return None
        return int((self.completed_at - self.started_at).total_seconds() // 60)

    @property
    def duration_variance_minutes(self):
        actual = self.actual_duration_minutes
        if actual is None:
            return None
        return actual - (self.duration_minutes or 0)

    def kpi_status(self, tolerance_minutes: int = None) -> str:
        """'met' when the actual duration is within tolerance, else 'missed'."""
        variance = self.duration_variance_minutes
        if self.status != SessionStatus.COMPLETED or variance is None:
            return 'pending'
        if tolerance_minutes is None:
            tolerance_minutes = current_app.config.get('KPI_TOLERANCE_MINUTES', 10)
        return 'met' if abs(variance) <= tolerance_minutes else 'missed'

    def count_by_status(self, status) -> int:
        return sum(1 for record in self.attendances if record.status == status)

    @property
    def present_count(self) -> int:
        from tutorhub.models.attendance import AttendanceStatus
        return self.count_by_status(AttendanceStatus.PRESENT)

    @property
    def attended_count(self) -> int:
        """Present plus late."""
        from tutorhub.models.attendance import AttendanceStatus
        return sum(1 for record in self.attendances
                   if record.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE))

    def to_dict(self, include_attendance: bool = False):
        """Convert to dictionary."""
        result = {
            'id': self.id,
            'class_id': self.class_id,
            'class_title': self.class_.title if self.class_ else None,
            'course_name': self.class_.course.name if self.class_ and self.class_.course else None,
            'session_date': self.session_date.isoformat(),
            'session_time': self.session_time.strftime('%H:%M'),
            'duration_minutes': self.duration_minutes,
            'status': self.status.value,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'teacher_notes': self.teacher_notes,
            'allowance_amount': float(self.allowance_amount) if self.allowance_amount is not None else None,
            'verified_at': self.verified_at.isoformat() if self.verified_at else None,
            'payout_status': self.payout_status.value if self.payout_status else None,
            'payslip_id': self.payslip_id,
            'student_count': len(self.attendances),
            'present_count': self.present_count,
            'elapsed_seconds': self.elapsed_seconds(),
            'actual_duration_minutes': self.actual_duration_minutes,
            'is_virtual': False
        }

        if include_attendance:
            result['attendances'] = [record.to_dict() for record in self.attendances]

        return result
