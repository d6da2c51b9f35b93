"""Authentication service for user management."""
from flask_jwt_extended import create_access_token, create_refresh_token
from tutorhub import db
from tutorhub.models.base import utcnow
from tutorhub.models.user import User
from tutorhub.utils.validators import Validator

class AuthService:
    @staticmethod
    def login(email: str, password: str) -> tuple[dict, str]:
        """Authenticate user and return tokens."""
        if not email or not password:
            return None, "Email and password are required"

        if not Validator.validate_email(email):
            return None, "Invalid email format"

        user = User.query.filter_by(email=email.lower().strip()).first()

        if not user:
            return None, "Invalid email or password"

        if not user.check_password(password):
            user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
            user.save()
            return None, "Invalid email or password"

        if not user.is_active:
            return None, "Account is deactivated"

        user.failed_login_attempts = 0
        user.last_login = utcnow()
        user.save()

        # JWT subjects must be strings
        access_token = create_access_token(identity=str(user.id))
        refresh_token = create_refresh_token(identity=str(user.id))

        data = {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user": user.to_dict()
        }
        if user.teacher_profile:
            data["teacher"] = user.teacher_profile.to_dict()

        return data, None

    @staticmethod
    def get_user_by_id(user_id) -> User:
        """Get user by ID."""
        return db.session.get(User, int(user_id))

    @staticmethod
    def refresh_token(user_id) -> tuple[dict, str]:
        """Generate new access token."""
        user = AuthService.get_user_by_id(user_id)
        if not user or not user.is_active:
            return None, "User not found or inactive"

        return {
            "access_token": create_access_token(identity=str(user.id))
        }, None
