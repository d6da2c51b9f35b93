"""Class session lifecycle: start, complete, cancel, no-show and attendance."""
from datetime import date, time
from typing import Optional, Union

from flask import current_app
from sqlalchemy.exc import IntegrityError

from tutorhub import db
from tutorhub.models.base import utcnow
from tutorhub.models.class_model import ClassModel, ClassStatus
from tutorhub.models.class_session import (
    ClassSession, SessionStatus, TERMINAL_STATUSES, can_transition
)
from tutorhub.models.attendance import AttendanceRecord, AttendanceStatus
from tutorhub.services.allowance_service import AllowanceService
from tutorhub.utils.errors import Forbidden, InvalidTransition, NotFound, ValidationError
from tutorhub.utils.validators import Validator

class SessionService:
    """All session state changes go through here."""

    # ------------------------------------------------------------------ lookups

    @staticmethod
    def ensure_owner(teacher, klass: ClassModel) -> None:
        if klass is None:
            raise NotFound("Class not found")
        if klass.teacher_id != teacher.id:
            raise Forbidden("You do not teach this class")

    @staticmethod
    def get_class_for_teacher(teacher, class_id: int) -> ClassModel:
        klass = db.session.get(ClassModel, class_id)
        SessionService.ensure_owner(teacher, klass)
        return klass

    @staticmethod
    def get_session_for_teacher(teacher, session_id: int) -> ClassSession:
        session = db.session.get(ClassSession, session_id)
        if session is None:
            raise NotFound("Session not found")
        SessionService.ensure_owner(teacher, session.class_)
        return session

    @staticmethod
    def find_session(class_id: int, session_date: date, session_time: time) -> Optional[ClassSession]:
        return ClassSession.query.filter_by(
            class_id=class_id,
            session_date=session_date,
            session_time=session_time
        ).first()

    # ------------------------------------------------------------------ helpers

    @staticmethod
    def _transition(session: ClassSession, target: SessionStatus) -> None:
        if not can_transition(session.status, target):
            raise InvalidTransition(session.status.value, target.value)
        current_app.logger.info(
            f"Session {session.id}: {session.status.value} -> {target.value}"
        )
        session.status = target

    @staticmethod
    def _ensure_attendance_records(session: ClassSession) -> int:
        """Add an absent record for each actively enrolled student lacking one."""
        existing = {record.student_id for record in session.attendances}
        created = 0
        for student in session.class_.active_students():
            if student.id in existing:
                continue
            session.attendances.append(AttendanceRecord(
                student_id=student.id,
                status=AttendanceStatus.ABSENT
            ))
            created += 1
        return created

    @staticmethod
    def _activate_class(klass: ClassModel) -> None:
        if klass.status == ClassStatus.DRAFT:
            klass.status = ClassStatus.ACTIVE
            current_app.logger.info(f"Class {klass.id} activated")

    @staticmethod
    def _refresh_class_status(klass: ClassModel) -> None:
        """Mark an active class completed once all of its sessions are terminal."""
        if klass.status != ClassStatus.ACTIVE:
            return
        open_sessions = klass.sessions.filter(
            ClassSession.status.notin_(list(TERMINAL_STATUSES))
        ).count()
        if open_sessions == 0 and klass.sessions.count() > 0:
            klass.status = ClassStatus.COMPLETED
            current_app.logger.info(f"Class {klass.id} completed")

    @staticmethod
    def _commit_status_change(session: ClassSession) -> ClassSession:
        db.session.flush()
        SessionService._refresh_class_status(session.class_)
        db.session.commit()
        return session

    # ------------------------------------------------------------------ lifecycle

    @staticmethod
    def materialize_and_start(teacher, klass: ClassModel, session_date: date,
                              session_time: time) -> ClassSession:
        """Start the occurrence at (class, date, time), creating the session if needed.

        Idempotent: an already ongoing session is returned unchanged.
        """
        SessionService.ensure_owner(teacher, klass)

        session = SessionService.find_session(klass.id, session_date, session_time)
        if session is None:
            try:
                session = ClassSession(
                    class_id=klass.id,
                    session_date=session_date,
                    session_time=session_time,
                    duration_minutes=klass.effective_duration,
                    status=SessionStatus.ONGOING,
                    started_at=utcnow()
                )
                db.session.add(session)
                db.session.flush()
                SessionService._ensure_attendance_records(session)
                SessionService._activate_class(klass)
                db.session.commit()
                current_app.logger.info(
                    f"Session {session.id} created and started for class {klass.id} "
                    f"on {session_date.isoformat()} {session_time.strftime('%H:%M')}"
                )
                return session
            except IntegrityError:
                db.session.rollback()
                current_app.logger.info(
                    f"Concurrent start for class {klass.id} on {session_date.isoformat()}, re-reading"
                )
                session = SessionService.find_session(klass.id, session_date, session_time)
                if session is None:
                    raise
            except Exception:
                # Session row and its attendance records are created together or not at all
                db.session.rollback()
                raise

        if session.status == SessionStatus.ONGOING:
            return session
        return SessionService.start_session(teacher, session)

    @staticmethod
    def start_session(teacher, session: ClassSession) -> ClassSession:
        SessionService.ensure_owner(teacher, session.class_)
        SessionService._transition(session, SessionStatus.ONGOING)
        session.started_at = utcnow()
        SessionService._ensure_attendance_records(session)
        return SessionService._commit_status_change(session)

    @staticmethod
    def complete_session(teacher, session: ClassSession, notes: str) -> ClassSession:
        SessionService.ensure_owner(teacher, session.class_)

        config = current_app.config
        validation = Validator.validate_notes(
            notes,
            config.get('BOOKMARK_MIN_LENGTH', 3),
            config.get('BOOKMARK_MAX_LENGTH', 500)
        )
        if not validation['is_valid']:
            raise ValidationError(validation['errors'][0])

        SessionService._transition(session, SessionStatus.COMPLETED)
        session.completed_at = utcnow()
        session.teacher_notes = notes
        session.allowance_amount = AllowanceService.compute_allowance(session)
        return SessionService._commit_status_change(session)

    @staticmethod
    def mark_no_show(teacher, session: ClassSession, reason: str = None) -> ClassSession:
        SessionService.ensure_owner(teacher, session.class_)
        SessionService._transition(session, SessionStatus.NO_SHOW)
        if reason:
            session.teacher_notes = reason
        return SessionService._commit_status_change(session)

    @staticmethod
    def cancel_session(teacher, session: ClassSession) -> ClassSession:
        SessionService.ensure_owner(teacher, session.class_)
        SessionService._transition(session, SessionStatus.CANCELLED)
        return SessionService._commit_status_change(session)

    @staticmethod
    def update_bookmark(teacher, session: ClassSession, text: str) -> ClassSession:
        SessionService.ensure_owner(teacher, session.class_)

        if session.status != SessionStatus.ONGOING:
            raise InvalidTransition(
                session.status.value, session.status.value,
                "Bookmarks can only be updated while the session is ongoing"
            )

        max_length = current_app.config.get('BOOKMARK_MAX_LENGTH', 500)
        text = text or ''
        if len(text) > max_length:
            raise ValidationError(f"Bookmark must not exceed {max_length} characters")

        session.teacher_notes = text
        db.session.commit()
        return session

    @staticmethod
    def update_student_attendance(teacher, session: ClassSession, student_id: int,
                                  status: Union[str, AttendanceStatus],
                                  remarks: str = None) -> AttendanceRecord:
        SessionService.ensure_owner(teacher, session.class_)

        if session.status != SessionStatus.ONGOING:
            raise InvalidTransition(
                session.status.value, session.status.value,
                "Attendance can only be updated while the session is ongoing"
            )

        if not isinstance(status, AttendanceStatus):
            try:
                status = AttendanceStatus(str(status).lower())
            except ValueError:
                raise ValidationError(f"Invalid attendance status: {status}")

        record = AttendanceRecord.query.filter_by(
            session_id=session.id, student_id=student_id
        ).first()
        if record is None:
            raise NotFound("Attendance record not found")

        if status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
            if record.checked_in_at is None:
                record.checked_in_at = utcnow()
        else:
            record.checked_in_at = None

        record.status = status
        if remarks is not None:
            record.teacher_remarks = remarks

        db.session.commit()
        return record

    # ------------------------------------------------------------------ scheduling

    @staticmethod
    def create_session(klass: ClassModel, session_date: date, session_time: time,
                       duration: int = None, notes: str = None) -> ClassSession:
        """Schedule a session ahead of time."""
        if klass is None:
            raise NotFound("Class not found")

        if SessionService.find_session(klass.id, session_date, session_time):
            raise ValidationError("A session already exists for this class at that date and time")

        session = ClassSession(
            class_id=klass.id,
            session_date=session_date,
            session_time=session_time,
            duration_minutes=duration or klass.effective_duration,
            status=SessionStatus.SCHEDULED,
            teacher_notes=notes
        )
        db.session.add(session)
        SessionService._activate_class(klass)

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError("A session already exists for this class at that date and time")

        current_app.logger.info(f"Session {session.id} scheduled for class {klass.id}")
        return session
