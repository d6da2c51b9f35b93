"""Weekly recurring timetable of a class."""
from datetime import date, time
from typing import List
from tutorhub import db
from tutorhub.models.base import BaseModel
from tutorhub.utils.validators import WEEKDAYS, Validator, parse_time

class ClassTimetable(BaseModel):
    """Weekly schedule: weekday name -> ordered list of "HH:MM" strings."""

    __tablename__ = 'class_timetables'

    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, unique=True)
    weekly_schedule = db.Column(db.JSON, nullable=False, default=dict)
    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def validate(self) -> dict:
        return Validator.validate_weekly_schedule(self.weekly_schedule)

    def covers(self, day: date) -> bool:
        """True when the date lies inside the optional start/end bounds."""
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False
        return True

    def times_for(self, day: date) -> List[time]:
        """Scheduled times on the given date, in listed order."""
        if not self.is_active or not self.covers(day):
            return []

        weekday = WEEKDAYS[day.weekday()]
        schedule = {str(k).lower(): v for k, v in (self.weekly_schedule or {}).items()}
        times = []
        for value in schedule.get(weekday) or []:
            parsed = parse_time(value)
            if parsed is not None:
                times.append(parsed)
        return times

    def to_dict(self):
        return {
            'id': self.id,
            'class_id': self.class_id,
            'weekly_schedule': self.weekly_schedule,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'is_active': self.is_active
        }
