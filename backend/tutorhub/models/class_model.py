"""Class and enrollment models."""
import enum
from flask import current_app
from tutorhub import db
from tutorhub.models.base import BaseModel, utcnow
from tutorhub.models.student import Student, StudentStatus

class ClassType(enum.Enum):
    INDIVIDUAL = 'individual'
    GROUP = 'group'

class ClassStatus(enum.Enum):
    DRAFT = 'draft'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    SUSPENDED = 'suspended'
    CANCELLED = 'cancelled'

class RateType(enum.Enum):
    PER_CLASS = 'per_class'
    PER_STUDENT = 'per_student'
    PER_SESSION = 'per_session'

class CommissionType(enum.Enum):
    PERCENTAGE = 'percentage'
    FIXED = 'fixed'

class EnrollmentStatus(enum.Enum):
    ACTIVE = 'active'
    LEFT = 'left'

class ClassModel(BaseModel):
    """A class run by one teacher under a course."""

    __tablename__ = 'classes'

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    class_type = db.Column(db.Enum(ClassType), nullable=False, default=ClassType.GROUP)
    duration_minutes = db.Column(db.Integer, nullable=True, default=60)
    max_capacity = db.Column(db.Integer, nullable=True)
    location = db.Column(db.String(255), nullable=True)

    # Relations
    teacher_id = db.Column(db.Integer, db.ForeignKey('teachers.id'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=True)

    status = db.Column(db.Enum(ClassStatus), nullable=False, default=ClassStatus.DRAFT)

    # Payment terms
    teacher_rate = db.Column(db.Numeric(10, 2), nullable=True, default=0)
    rate_type = db.Column(db.Enum(RateType), nullable=True, default=RateType.PER_CLASS)
    commission_type = db.Column(db.Enum(CommissionType), nullable=True)
    commission_value = db.Column(db.Numeric(10, 2), nullable=True)

    # Relationships
    enrollments = db.relationship('ClassStudent', backref='class_', lazy='dynamic',
                                  cascade='all, delete-orphan')
    sessions = db.relationship('ClassSession', backref='class_', lazy='dynamic',
                               cascade='all, delete-orphan')
    timetable = db.relationship('ClassTimetable', backref='class_', uselist=False,
                                cascade='all, delete-orphan')

    def active_students_query(self):
        """Students with an active enrollment whose own status is active."""
        return Student.query.join(
            ClassStudent, ClassStudent.student_id == Student.id
        ).filter(
            ClassStudent.class_id == self.id,
            ClassStudent.status == EnrollmentStatus.ACTIVE,
            Student.status == StudentStatus.ACTIVE
        ).order_by(Student.full_name)

    def active_students(self) -> list:
        return self.active_students_query().all()

    @property
    def active_student_count(self) -> int:
        return self.active_students_query().count()

    @property
    def effective_duration(self) -> int:
        return self.duration_minutes or current_app.config.get('DEFAULT_SESSION_DURATION', 60)

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'class_type': self.class_type.value if self.class_type else None,
            'duration_minutes': self.effective_duration,
            'max_capacity': self.max_capacity,
            'location': self.location,
            'teacher_id': self.teacher_id,
            'course': {
                'id': self.course.id,
                'name': self.course.name,
                'code': self.course.code
            } if self.course else None,
            'status': self.status.value if self.status else None,
            'teacher_rate': float(self.teacher_rate) if self.teacher_rate is not None else None,
            'rate_type': self.rate_type.value if self.rate_type else None,
            'active_students': self.active_student_count
        }

class ClassStudent(BaseModel):
    """Enrollment of a student in a class."""

    __tablename__ = 'class_students'
    __table_args__ = (
        db.UniqueConstraint('class_id', 'student_id', name='uq_class_student'),
    )

    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False, index=True)
    status = db.Column(db.Enum(EnrollmentStatus), nullable=False, default=EnrollmentStatus.ACTIVE)
    enrolled_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    left_at = db.Column(db.DateTime, nullable=True)
    reason = db.Column(db.String(255), nullable=True)

    student = db.relationship('Student', backref=db.backref('enrollments', lazy='dynamic'))

    def mark_left(self, reason: str = None) -> None:
        self.status = EnrollmentStatus.LEFT
        self.left_at = utcnow()
        self.reason = reason

    def to_dict(self):
        return {
            'id': self.id,
            'class_id': self.class_id,
            'student': self.student.to_dict() if self.student else None,
            'status': self.status.value if self.status else None,
            'enrolled_at': self.enrolled_at.isoformat() if self.enrolled_at else None,
            'left_at': self.left_at.isoformat() if self.left_at else None,
            'reason': self.reason
        }
