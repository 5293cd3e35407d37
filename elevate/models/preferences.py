# models/preferences.py

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any

from elevate.models.validation import validate_time_of_day


@dataclass
class UserPreferences:
    """Пользовательские настройки"""
    notifications_enabled: bool = True
    daily_reminder_time: str = "09:00"
    preferred_categories: List[str] = field(default_factory=list)
    dark_mode_enabled: bool = False
    week_starts_on_monday: bool = True
    show_motivational_quotes: bool = True

    def __post_init__(self):
        validate_time_of_day(self.daily_reminder_time, "daily_reminder_time")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserPreferences":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
