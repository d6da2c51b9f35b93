"""Monthly teacher payslip built from verified sessions."""
import enum
from tutorhub import db
from tutorhub.models.base import BaseModel, utcnow

class PayslipStatus(enum.Enum):
    DRAFT = 'draft'
    FINALIZED = 'finalized'
    PAID = 'paid'

class Payslip(BaseModel):
    """One payslip per teacher per month."""

    __tablename__ = 'payslips'
    __table_args__ = (
        db.UniqueConstraint('teacher_id', 'month', name='uq_teacher_month'),
    )

    teacher_id = db.Column(db.Integer, db.ForeignKey('teachers.id'), nullable=False, index=True)
    month = db.Column(db.String(7), nullable=False)  # YYYY-MM
    year = db.Column(db.Integer, nullable=False)
    total_sessions = db.Column(db.Integer, nullable=False, default=0)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    status = db.Column(db.Enum(PayslipStatus), nullable=False, default=PayslipStatus.DRAFT)

    generated_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    generated_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    finalized_at = db.Column(db.DateTime, nullable=True)
    paid_at = db.Column(db.DateTime, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    teacher = db.relationship('Teacher', backref=db.backref('payslips', lazy='dynamic'))
    sessions = db.relationship('ClassSession', backref='payslip', lazy='dynamic')

    def to_dict(self, include_sessions: bool = False):
        result = {
            'id': self.id,
            'teacher_id': self.teacher_id,
            'teacher_name': self.teacher.name if self.teacher else None,
            'month': self.month,
            'year': self.year,
            'total_sessions': self.total_sessions,
            'total_amount': float(self.total_amount or 0),
            'status': self.status.value,
            'generated_at': self.generated_at.isoformat() if self.generated_at else None,
            'finalized_at': self.finalized_at.isoformat() if self.finalized_at else None,
            'paid_at': self.paid_at.isoformat() if self.paid_at else None,
            'notes': self.notes
        }

        if include_sessions:
            from tutorhub.models.class_session import ClassSession
            ordered = self.sessions.order_by(ClassSession.session_date, ClassSession.session_time)
            result['sessions'] = [s.to_dict() for s in ordered]

        return result
