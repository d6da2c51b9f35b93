"""Expands weekly timetables into dated occurrences.

Occurrences are either persisted sessions or virtual slots: a slot the
timetable promises but no session row exists for yet. Virtual slots turn
into sessions only when a teacher starts them.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Dict, List, Optional

from tutorhub.models.class_model import ClassModel
from tutorhub.models.class_session import ClassSession, SessionStatus
from tutorhub.utils.errors import ValidationError

@dataclass
class Occurrence:
    class_id: int
    class_title: str
    session_date: date
    session_time: time
    duration_minutes: int
    status: str
    is_virtual: bool
    session: Optional[ClassSession] = None
    # False for a repeated timetable time whose slot another entry already holds
    startable: bool = True

    @property
    def sort_key(self):
        return (self.session_date, self.session_time)

    def to_dict(self) -> Dict:
        if self.session is not None:
            result = self.session.to_dict()
            result['startable'] = self.startable
            return result
        return {
            'id': None,
            'class_id': self.class_id,
            'class_title': self.class_title,
            'session_date': self.session_date.isoformat(),
            'session_time': self.session_time.strftime('%H:%M'),
            'duration_minutes': self.duration_minutes,
            'status': self.status,
            'is_virtual': True,
            'startable': self.startable
        }

def _session_occurrence(session: ClassSession) -> Occurrence:
    return Occurrence(
        class_id=session.class_id,
        class_title=session.class_.title,
        session_date=session.session_date,
        session_time=session.session_time,
        duration_minutes=session.duration_minutes,
        status=session.status.value,
        is_virtual=False,
        session=session,
        startable=session.status == SessionStatus.SCHEDULED
    )

def _date_range(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)

class TimetableService:
    """Read-only view over timetables and persisted sessions."""

    @staticmethod
    def list_occurrences(teacher, start_date: date, end_date: date = None,
                         class_id: int = None, status: str = None) -> List[Occurrence]:
        """Persisted sessions merged with virtual slots, sorted by date and time."""
        end_date = end_date or start_date
        if isinstance(status, SessionStatus):
            status = status.value

        classes = teacher.classes
        if class_id is not None:
            classes = classes.filter(ClassModel.id == class_id)

        occurrences = []
        for klass in classes.all():
            occurrences.extend(
                TimetableService._class_occurrences(klass, start_date, end_date)
            )

        if status:
            occurrences = [o for o in occurrences if o.status == status]

        return sorted(occurrences, key=lambda o: o.sort_key)

    @staticmethod
    def _class_occurrences(klass: ClassModel, start_date: date, end_date: date) -> List[Occurrence]:
        sessions = klass.sessions.filter(
            ClassSession.session_date >= start_date,
            ClassSession.session_date <= end_date
        ).order_by(ClassSession.session_date, ClassSession.session_time, ClassSession.id).all()

        # Unclaimed sessions per slot; each timetable entry claims at most one.
        by_slot = defaultdict(list)
        for session in sessions:
            by_slot[(session.session_date, session.session_time)].append(session)
        taken = set(by_slot)

        occurrences = []
        timetable = klass.timetable
        if timetable is not None:
            for day in _date_range(start_date, end_date):
                for slot_time in timetable.times_for(day):
                    claimed = by_slot.get((day, slot_time))
                    if claimed:
                        occurrences.append(_session_occurrence(claimed.pop(0)))
                    else:
                        occurrences.append(Occurrence(
                            class_id=klass.id,
                            class_title=klass.title,
                            session_date=day,
                            session_time=slot_time,
                            duration_minutes=klass.effective_duration,
                            status=SessionStatus.SCHEDULED.value,
                            is_virtual=True,
                            startable=(day, slot_time) not in taken
                        ))

        # Ad hoc sessions with no timetable entry
        for remaining in by_slot.values():
            occurrences.extend(_session_occurrence(s) for s in remaining)

        return occurrences

    @staticmethod
    def day_range(reference: date):
        return reference, reference

    @staticmethod
    def week_range(reference: date):
        """Monday to Sunday around the reference date."""
        start = reference - timedelta(days=reference.weekday())
        return start, start + timedelta(days=6)

    @staticmethod
    def month_range(reference: date):
        start = reference.replace(day=1)
        next_month = (start + timedelta(days=32)).replace(day=1)
        return start, next_month - timedelta(days=1)

    @staticmethod
    def occurrences_for_view(teacher, view: str, reference: date, **filters) -> List[Occurrence]:
        ranges = {
            'day': TimetableService.day_range,
            'week': TimetableService.week_range,
            'month': TimetableService.month_range,
        }
        if view not in ranges:
            raise ValidationError(f"Unknown view: {view}")
        start, end = ranges[view](reference)
        return TimetableService.list_occurrences(teacher, start, end, **filters)

    @staticmethod
    def todays_occurrences(teacher, today: date = None) -> List[Occurrence]:
        today = today or date.today()
        return TimetableService.list_occurrences(teacher, today, today)
