"""Attendance record of one student in one class session."""
import enum
from tutorhub import db
from tutorhub.models.base import BaseModel

class AttendanceStatus(enum.Enum):
    PRESENT = 'present'
    LATE = 'late'
    ABSENT = 'absent'
    EXCUSED = 'excused'

class AttendanceRecord(BaseModel):
    """Per-student attendance entry; created when a session starts, never deleted."""

    __tablename__ = 'class_attendances'
    __table_args__ = (
        db.UniqueConstraint('session_id', 'student_id', name='uq_session_student'),
    )

    session_id = db.Column(db.Integer, db.ForeignKey('class_sessions.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False, index=True)
    status = db.Column(db.Enum(AttendanceStatus), nullable=False, default=AttendanceStatus.ABSENT)
    checked_in_at = db.Column(db.DateTime, nullable=True)
    teacher_remarks = db.Column(db.Text, nullable=True)

    student = db.relationship('Student', backref=db.backref('attendance_records', lazy='dynamic'))

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'session_id': self.session_id,
            'student_id': self.student_id,
            'student_name': self.student.full_name if self.student else None,
            'student_code': self.student.student_code if self.student else None,
            'status': self.status.value,
            'checked_in_at': self.checked_in_at.isoformat() if self.checked_in_at else None,
            'teacher_remarks': self.teacher_remarks
        }
