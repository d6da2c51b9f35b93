"""Shared pytest fixtures."""
from datetime import date
from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from tutorhub import create_app, db
from tutorhub.models.user import User, UserRole
from tutorhub.models.teacher import Teacher
from tutorhub.models.student import Student, StudentStatus
from tutorhub.models.course import Course, BillingType
from tutorhub.models.class_model import ClassModel, ClassStudent, ClassStatus, RateType
from tutorhub.models.timetable import ClassTimetable

# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def make_teacher(app):
    counter = {'n': 0}

    def _make(name='Teacher', email=None):
        counter['n'] += 1
        user = User(
            email=email or f"teacher{counter['n']}@example.com",
            name=name,
            role=UserRole.TEACHER
        )
        user.set_password('password123')
        db.session.add(user)
        db.session.flush()
        teacher = Teacher(user_id=user.id, teacher_code=Teacher.generate_teacher_code(counter['n']))
        db.session.add(teacher)
        db.session.commit()
        return teacher

    return _make

@pytest.fixture
def teacher(make_teacher):
    return make_teacher(name='Aisyah Rahman', email='teacher@example.com')

@pytest.fixture
def other_teacher(make_teacher):
    return make_teacher(name='Other Teacher', email='other@example.com')

@pytest.fixture
def admin(app):
    user = User(email='admin@example.com', name='Admin', role=UserRole.ADMIN)
    user.set_password('password123')
    return user.save()

@pytest.fixture
def course(app):
    return Course(
        name='Form 4 Mathematics',
        code='MATH-F4',
        billing_type=BillingType.PER_MONTH,
        price_per_month=Decimal('200.00'),
        sessions_per_month=4
    ).save()

@pytest.fixture
def make_class(app, course):
    def _make(teacher, title='Maths Group A', **kwargs):
        values = dict(
            title=title,
            teacher_id=teacher.id,
            course_id=course.id,
            duration_minutes=60,
            status=ClassStatus.DRAFT,
            teacher_rate=Decimal('50.00'),
            rate_type=RateType.PER_CLASS
        )
        values.update(kwargs)
        return ClassModel(**values).save()

    return _make

@pytest.fixture
def klass(make_class, teacher):
    return make_class(teacher)

@pytest.fixture
def enroll(app):
    counter = {'n': 0}

    def _enroll(klass, count=1, status=StudentStatus.ACTIVE):
        students = []
        for _ in range(count):
            counter['n'] += 1
            student = Student(
                student_code=Student.generate_student_code(counter['n']),
                full_name=f"Student {counter['n']}",
                status=status
            )
            db.session.add(student)
            db.session.flush()
            db.session.add(ClassStudent(class_id=klass.id, student_id=student.id))
            students.append(student)
        db.session.commit()
        return students

    return _enroll

@pytest.fixture
def students(klass, enroll):
    return enroll(klass, 3)

@pytest.fixture
def timetable(klass):
    return ClassTimetable(
        class_id=klass.id,
        weekly_schedule={'monday': ['09:00', '14:00'], 'wednesday': ['09:00']},
        is_active=True
    ).save()

def auth_headers(user):
    token = create_access_token(identity=str(user.id))
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def teacher_headers(teacher):
    return auth_headers(teacher.user)

@pytest.fixture
def other_headers(other_teacher):
    return auth_headers(other_teacher.user)

@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)
