"""Validation utilities for the application."""
import re
from datetime import datetime, date, time
from typing import Dict, List, Any, Optional

WEEKDAYS = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']

class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []

        for field in required_fields:
            if field not in data or data[field] in (None, ''):
                errors.append(f"{field.title()} is required")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_notes(notes: Optional[str], min_length: int, max_length: int) -> Dict[str, Any]:
        """Validate completion notes: stripped length within bounds."""
        errors = []
        stripped = (notes or '').strip()

        if len(stripped) < min_length:
            errors.append(f"Notes must be at least {min_length} characters long")
        elif len(stripped) > max_length:
            errors.append(f"Notes must not exceed {max_length} characters")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_weekly_schedule(schedule: Any) -> Dict[str, Any]:
        """Validate a weekday -> ["HH:MM", ...] mapping."""
        errors = []

        if not isinstance(schedule, dict):
            return {"is_valid": False, "errors": ["Weekly schedule must be an object"]}

        for day, times in schedule.items():
            if str(day).lower() not in WEEKDAYS:
                errors.append(f"Invalid weekday: {day}")
                continue
            if not isinstance(times, list):
                errors.append(f"Times for {day} must be a list")
                continue
            for value in times:
                if parse_time(value) is None:
                    errors.append(f"Invalid time '{value}' on {day}")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

def parse_date(value: Any) -> Optional[date]:
    """Parse YYYY-MM-DD into a date, None when invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), '%Y-%m-%d').date()
    except (TypeError, ValueError):
        return None

def parse_time(value: Any) -> Optional[time]:
    """Parse HH:MM or HH:MM:SS into a time, None when invalid."""
    if isinstance(value, time):
        return value
    for fmt in ('%H:%M', '%H:%M:%S'):
        try:
            return datetime.strptime(str(value), fmt).time()
        except (TypeError, ValueError):
            continue
    return None

def parse_month(value: Any) -> Optional[date]:
    """Parse YYYY-MM into the first day of that month."""
    try:
        return datetime.strptime(str(value), '%Y-%m').date()
    except (TypeError, ValueError):
        return None
