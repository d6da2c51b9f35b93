"""Per-student attendance updates during a session."""
from datetime import time

import pytest

from tutorhub.models.attendance import AttendanceStatus
from tutorhub.services.session_service import SessionService
from tutorhub.utils.errors import Forbidden, InvalidTransition, NotFound, ValidationError
from conftest import MONDAY

@pytest.fixture
def ongoing(teacher, klass, students):
    return SessionService.materialize_and_start(teacher, klass, MONDAY, time(9, 0))

def test_mark_present_sets_check_in(teacher, ongoing, students):
    record = SessionService.update_student_attendance(teacher, ongoing, students[0].id, 'present')

    assert record.status == AttendanceStatus.PRESENT
    assert record.checked_in_at is not None

def test_check_in_kept_when_switching_to_late(teacher, ongoing, students):
    record = SessionService.update_student_attendance(teacher, ongoing, students[0].id, 'present')
    checked_in = record.checked_in_at

    record = SessionService.update_student_attendance(
        teacher, ongoing, students[0].id, AttendanceStatus.LATE, remarks='Arrived 10 minutes late'
    )

    assert record.status == AttendanceStatus.LATE
    assert record.checked_in_at == checked_in
    assert record.teacher_remarks == 'Arrived 10 minutes late'

def test_check_in_cleared_when_absent_or_excused(teacher, ongoing, students):
    SessionService.update_student_attendance(teacher, ongoing, students[0].id, 'present')
    record = SessionService.update_student_attendance(teacher, ongoing, students[0].id, 'excused')

    assert record.status == AttendanceStatus.EXCUSED
    assert record.checked_in_at is None

def test_invalid_status_rejected(teacher, ongoing, students):
    with pytest.raises(ValidationError):
        SessionService.update_student_attendance(teacher, ongoing, students[0].id, 'sleeping')

def test_unknown_student_not_found(teacher, ongoing):
    with pytest.raises(NotFound):
        SessionService.update_student_attendance(teacher, ongoing, 9999, 'present')

def test_attendance_locked_outside_ongoing(teacher, klass, students):
    scheduled = SessionService.create_session(klass, MONDAY, time(14, 0))
    with pytest.raises(InvalidTransition):
        SessionService.update_student_attendance(teacher, scheduled, students[0].id, 'present')

def test_attendance_locked_after_completion(teacher, ongoing, students):
    SessionService.complete_session(teacher, ongoing, 'Covered chapter 3')
    with pytest.raises(InvalidTransition):
        SessionService.update_student_attendance(teacher, ongoing, students[0].id, 'present')

def test_other_teacher_cannot_mark(other_teacher, ongoing, students):
    with pytest.raises(Forbidden):
        SessionService.update_student_attendance(other_teacher, ongoing, students[0].id, 'present')
