"""Attendance statistics, monthly grouping, earnings and CSV export."""
import io
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List

import pandas as pd

from tutorhub import db
from tutorhub.models.class_model import ClassModel, ClassStudent, EnrollmentStatus
from tutorhub.models.class_session import ClassSession, SessionStatus
from tutorhub.models.attendance import AttendanceStatus
from tutorhub.models.student import Student, StudentStatus
from tutorhub.services.timetable_service import TimetableService

CSV_COLUMNS = [
    'Date', 'Time', 'Class', 'Course', 'Duration', 'Status',
    'Students', 'Present', 'Allowance', 'Notes'
]

def _status_of(record) -> AttendanceStatus:
    status = getattr(record, 'status', record)
    if isinstance(status, AttendanceStatus):
        return status
    return AttendanceStatus(str(status).lower())

class ReportService:
    """Read-side aggregation over sessions and attendance."""

    @staticmethod
    def attendance_breakdown(records: Iterable) -> Dict[str, int]:
        breakdown = {status.value: 0 for status in AttendanceStatus}
        for record in records:
            breakdown[_status_of(record).value] += 1
        return breakdown

    @staticmethod
    def attendance_rate(records: Iterable) -> float:
        """Present and late records over all records, as a percentage (1 decimal)."""
        statuses = [_status_of(record) for record in records]
        if not statuses:
            return 0
        attended = sum(1 for s in statuses if s in (AttendanceStatus.PRESENT, AttendanceStatus.LATE))
        return round(attended / len(statuses) * 100, 1)

    @staticmethod
    def monthly_grouping(sessions: Iterable[ClassSession]) -> List[Dict]:
        """Bucket sessions by calendar month, oldest month first."""
        ordered = sorted(sessions, key=lambda s: (s.session_date, s.session_time))
        buckets = OrderedDict()

        for session in ordered:
            key = (session.session_date.year, session.session_date.month)
            if key not in buckets:
                buckets[key] = {
                    'year': key[0],
                    'month': key[1],
                    'label': session.session_date.strftime('%B %Y'),
                    'sessions': [],
                    'stats': {
                        'total': 0, 'completed': 0, 'cancelled': 0,
                        'no_show': 0, 'upcoming': 0, 'ongoing': 0
                    },
                    'attendance': {status.value: 0 for status in AttendanceStatus}
                }

            bucket = buckets[key]
            bucket['sessions'].append(session)
            stats = bucket['stats']
            stats['total'] += 1
            if session.status == SessionStatus.SCHEDULED:
                stats['upcoming'] += 1
            else:
                stats[session.status.value] += 1

            for status, count in ReportService.attendance_breakdown(session.attendances).items():
                bucket['attendance'][status] += count

        return list(buckets.values())

    @staticmethod
    def teacher_active_students(teacher) -> int:
        """Distinct active students enrolled in any of the teacher's classes."""
        return db.session.query(db.func.count(db.distinct(Student.id))).join(
            ClassStudent, ClassStudent.student_id == Student.id
        ).join(
            ClassModel, ClassModel.id == ClassStudent.class_id
        ).filter(
            ClassModel.teacher_id == teacher.id,
            ClassStudent.status == EnrollmentStatus.ACTIVE,
            Student.status == StudentStatus.ACTIVE
        ).scalar() or 0

    @staticmethod
    def _teacher_sessions(teacher, start: date, end: date):
        return ClassSession.query.join(ClassModel).filter(
            ClassModel.teacher_id == teacher.id,
            ClassSession.session_date >= start,
            ClassSession.session_date <= end
        )

    @staticmethod
    def weekly_stats(teacher, reference_date: date = None) -> Dict:
        reference_date = reference_date or date.today()
        start, end = TimetableService.week_range(reference_date)
        sessions = ReportService._teacher_sessions(teacher, start, end).all()
        completed = [s for s in sessions if s.status == SessionStatus.COMPLETED]

        earnings = sum((Decimal(str(s.allowance_amount or 0)) for s in completed), Decimal('0'))

        present_total = sum(s.present_count for s in completed)
        expected_total = sum(len(s.attendances) for s in completed)
        rate = round(present_total / expected_total * 100, 1) if expected_total else 0

        return {
            'week_start': start.isoformat(),
            'week_end': end.isoformat(),
            'sessions_this_week': len(sessions),
            'completed_this_week': len(completed),
            'earnings': float(earnings),
            'active_students': ReportService.teacher_active_students(teacher),
            'attendance_rate': rate
        }

    @staticmethod
    def monthly_earnings(teacher, reference_date: date = None) -> float:
        reference_date = reference_date or date.today()
        start, end = TimetableService.month_range(reference_date)
        total = db.session.query(db.func.sum(ClassSession.allowance_amount)).join(ClassModel).filter(
            ClassModel.teacher_id == teacher.id,
            ClassSession.status == SessionStatus.COMPLETED,
            ClassSession.session_date >= start,
            ClassSession.session_date <= end
        ).scalar()
        return float(total or 0)

    @staticmethod
    def session_statistics(teacher) -> Dict[str, int]:
        query = ClassSession.query.join(ClassModel).filter(ClassModel.teacher_id == teacher.id)
        return {
            'total': query.count(),
            'upcoming': query.filter(
                ClassSession.status == SessionStatus.SCHEDULED,
                ClassSession.session_date >= date.today()
            ).count(),
            'completed': query.filter(ClassSession.status == SessionStatus.COMPLETED).count(),
            'cancelled': query.filter(ClassSession.status == SessionStatus.CANCELLED).count()
        }

    @staticmethod
    def class_statistics(klass: ClassModel) -> Dict:
        sessions = klass.sessions.all()
        records = [record for s in sessions for record in s.attendances]
        return {
            'total_sessions': len(sessions),
            'completed_sessions': sum(1 for s in sessions if s.status == SessionStatus.COMPLETED),
            'upcoming_sessions': sum(1 for s in sessions if s.status == SessionStatus.SCHEDULED),
            'active_students': klass.active_student_count,
            'attendance_rate': ReportService.attendance_rate(records),
            'attendance': ReportService.attendance_breakdown(records)
        }

    @staticmethod
    def recent_activity(teacher, limit: int = 5) -> List[Dict]:
        """Most recently started or finished sessions."""
        sessions = ClassSession.query.join(ClassModel).filter(
            ClassModel.teacher_id == teacher.id,
            ClassSession.started_at.isnot(None)
        ).order_by(ClassSession.updated_at.desc()).limit(limit).all()
        return [s.to_dict() for s in sessions]

    @staticmethod
    def sessions_dataframe(sessions: Iterable[ClassSession]) -> pd.DataFrame:
        rows = []
        for s in sessions:
            klass = s.class_
            rows.append({
                'Date': s.session_date.isoformat(),
                'Time': s.session_time.strftime('%H:%M'),
                'Class': klass.title if klass else '',
                'Course': klass.course.name if klass and klass.course else '',
                'Duration': s.duration_minutes,
                'Status': s.status.value,
                'Students': len(s.attendances),
                'Present': s.attended_count,
                'Allowance': f"{float(s.allowance_amount):.2f}" if s.allowance_amount is not None else '',
                'Notes': s.teacher_notes or ''
            })
        return pd.DataFrame(rows, columns=CSV_COLUMNS)

    @staticmethod
    def export_sessions_csv(sessions: Iterable[ClassSession]) -> str:
        buffer = io.StringIO()
        ReportService.sessions_dataframe(sessions).to_csv(buffer, index=False)
        return buffer.getvalue()
