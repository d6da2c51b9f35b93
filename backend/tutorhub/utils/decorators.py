"""Custom decorators for authorization."""
from functools import wraps
from flask_jwt_extended import get_jwt_identity
from tutorhub import db
from tutorhub.models.user import User, UserRole
from tutorhub.models.teacher import Teacher, TeacherStatus
from tutorhub.utils.helpers import error_response

def get_current_user() -> User:
    """Load the user behind the JWT identity."""
    identity = get_jwt_identity()
    if identity is None:
        return None
    return db.session.get(User, int(identity))

def admin_required(f):
    """Decorator to require admin role; passes the user as ``admin``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_current_user()

        if not user:
            return error_response("User not found", 404)

        if user.role != UserRole.ADMIN:
            return error_response("Admin access required", 403)

        kwargs['admin'] = user
        return f(*args, **kwargs)
    return decorated_function

def teacher_required(f):
    """Decorator to require an active teacher profile; passes it as ``teacher``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_current_user()

        if not user:
            return error_response("User not found", 404)

        if user.role != UserRole.TEACHER:
            return error_response("Teacher access required", 403)

        teacher = Teacher.query.filter_by(user_id=user.id).first()
        if not teacher:
            return error_response("Teacher profile not found", 404)

        if teacher.status != TeacherStatus.ACTIVE:
            return error_response("Teacher account is inactive", 403)

        kwargs['teacher'] = teacher
        return f(*args, **kwargs)
    return decorated_function
