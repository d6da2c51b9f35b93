"""Database seeding service for demo data."""
from datetime import date, timedelta
from decimal import Decimal
from flask import current_app
from tutorhub import db
from tutorhub.models.user import User, UserRole
from tutorhub.models.teacher import Teacher
from tutorhub.models.student import Student
from tutorhub.models.course import Course, BillingType
from tutorhub.models.class_model import ClassModel, ClassStudent, ClassType, ClassStatus, RateType
from tutorhub.models.timetable import ClassTimetable

DEMO_PASSWORD = 'password123'

class SeedService:
    """Service to seed database with demo data."""

    @staticmethod
    def seed_all():
        """Seed all demo data."""
        SeedService.seed_admin()
        teacher = SeedService.seed_teacher()
        course = SeedService.seed_course()
        students = SeedService.seed_students()
        SeedService.seed_class(teacher, course, students)
        db.session.commit()
        current_app.logger.info("Demo data seeded")

    @staticmethod
    def seed_admin() -> User:
        admin = User.query.filter_by(email='admin@tutorhub.test').first()
        if not admin:
            admin = User(email='admin@tutorhub.test', name='System Administrator', role=UserRole.ADMIN)
            admin.set_password(DEMO_PASSWORD)
            db.session.add(admin)
        return admin

    @staticmethod
    def seed_teacher() -> Teacher:
        user = User.query.filter_by(email='teacher@tutorhub.test').first()
        if user and user.teacher_profile:
            return user.teacher_profile

        user = User(email='teacher@tutorhub.test', name='Aisyah Rahman', role=UserRole.TEACHER)
        user.set_password(DEMO_PASSWORD)
        db.session.add(user)
        db.session.flush()

        teacher = Teacher(user_id=user.id, teacher_code=Teacher.generate_teacher_code(Teacher.query.count() + 1))
        db.session.add(teacher)
        db.session.flush()
        return teacher

    @staticmethod
    def seed_course() -> Course:
        course = Course.query.filter_by(code='MATH-F4').first()
        if not course:
            course = Course(
                name='Form 4 Mathematics',
                code='MATH-F4',
                billing_type=BillingType.PER_MONTH,
                price_per_month=Decimal('200.00'),
                sessions_per_month=4
            )
            db.session.add(course)
            db.session.flush()
        return course

    @staticmethod
    def seed_students(count: int = 5) -> list:
        names = ['Adam Iskandar', 'Nur Aina', 'Daniel Lim', 'Priya Devi', 'Hakim Yusof']
        students = []
        start = Student.query.count()
        for i, name in enumerate(names[:count], start=1):
            student = Student(student_code=Student.generate_student_code(start + i), full_name=name)
            db.session.add(student)
            students.append(student)
        db.session.flush()
        return students

    @staticmethod
    def seed_class(teacher: Teacher, course: Course, students: list) -> ClassModel:
        klass = ClassModel(
            title='Form 4 Mathematics - Group A',
            class_type=ClassType.GROUP,
            duration_minutes=60,
            max_capacity=10,
            teacher_id=teacher.id,
            course_id=course.id,
            status=ClassStatus.ACTIVE,
            teacher_rate=Decimal('50.00'),
            rate_type=RateType.PER_CLASS
        )
        db.session.add(klass)
        db.session.flush()

        for student in students:
            db.session.add(ClassStudent(class_id=klass.id, student_id=student.id))

        db.session.add(ClassTimetable(
            class_id=klass.id,
            weekly_schedule={'monday': ['09:00', '14:00'], 'wednesday': ['09:00']},
            start_date=date.today() - timedelta(days=30),
            is_active=True
        ))
        return klass
