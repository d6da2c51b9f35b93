"""Student model."""
import enum
from tutorhub import db
from tutorhub.models.base import BaseModel

class StudentStatus(enum.Enum):
    """Student status enumeration."""
    ACTIVE = 'active'
    INACTIVE = 'inactive'

class Student(BaseModel):
    """Student taking part in classes.

    ``user_id`` is nullable: imported students may not have a login.
    """

    __tablename__ = 'students'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, unique=True)
    student_code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    status = db.Column(db.Enum(StudentStatus), nullable=False, default=StudentStatus.ACTIVE)

    # Relationships
    user = db.relationship('User', backref=db.backref('student_profile', uselist=False))

    @staticmethod
    def generate_student_code(sequence: int) -> str:
        """Generate a student code like STU00001."""
        return f"STU{sequence:05d}"

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'student_code': self.student_code,
            'full_name': self.full_name,
            'phone': self.phone,
            'status': self.status.value if self.status else None
        }
