"""Teacher profile attached to a user account."""
import enum
from tutorhub import db
from tutorhub.models.base import BaseModel

class TeacherStatus(enum.Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'

class Teacher(BaseModel):
    """Teacher profile; owns classes."""

    __tablename__ = 'teachers'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    teacher_code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    status = db.Column(db.Enum(TeacherStatus), nullable=False, default=TeacherStatus.ACTIVE)

    # Relationships
    user = db.relationship('User', backref=db.backref('teacher_profile', uselist=False))
    classes = db.relationship('ClassModel', backref='teacher', lazy='dynamic')

    @property
    def name(self) -> str:
        return self.user.name if self.user else ''

    @staticmethod
    def generate_teacher_code(sequence: int) -> str:
        """Generate a teacher code like TCH0001."""
        return f"TCH{sequence:04d}"

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'teacher_code': self.teacher_code,
            'name': self.name,
            'email': self.user.email if self.user else None,
            'status': self.status.value if self.status else None
        }
