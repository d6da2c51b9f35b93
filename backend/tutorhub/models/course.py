"""Course model with billing settings."""
import enum
from tutorhub import db
from tutorhub.models.base import BaseModel

class BillingType(enum.Enum):
    PER_SESSION = 'per_session'
    PER_MONTH = 'per_month'
    PER_MINUTE = 'per_minute'

class Course(BaseModel):
    """Course offered to students; classes are run under a course."""

    __tablename__ = 'courses'

    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.String(50), unique=True, nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Billing
    billing_type = db.Column(db.Enum(BillingType), nullable=True)
    price_per_session = db.Column(db.Numeric(10, 2), nullable=True)
    price_per_month = db.Column(db.Numeric(10, 2), nullable=True)
    sessions_per_month = db.Column(db.Integer, nullable=True)
    price_per_minute = db.Column(db.Numeric(10, 4), nullable=True)

    classes = db.relationship('ClassModel', backref='course', lazy='dynamic')
