"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .teacher import Teacher, TeacherStatus
from .student import Student, StudentStatus
from .course import Course, BillingType
from .class_model import (
    ClassModel, ClassStudent, ClassType, ClassStatus,
    RateType, CommissionType, EnrollmentStatus
)
from .timetable import ClassTimetable
from .class_session import ClassSession, SessionStatus, PayoutStatus, TRANSITIONS
from .attendance import AttendanceRecord, AttendanceStatus
from .payslip import Payslip, PayslipStatus

__all__ = [
    'BaseModel', 'User', 'UserRole', 'Teacher', 'TeacherStatus',
    'Student', 'StudentStatus', 'Course', 'BillingType',
    'ClassModel', 'ClassStudent', 'ClassType', 'ClassStatus',
    'RateType', 'CommissionType', 'EnrollmentStatus',
    'ClassTimetable', 'ClassSession', 'SessionStatus', 'PayoutStatus',
    'TRANSITIONS', 'AttendanceRecord', 'AttendanceStatus',
    'Payslip', 'PayslipStatus'
]
