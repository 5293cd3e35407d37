from .datetime_utils import (
    DEFAULT_TZ,
    now_in,
    to_local,
    local_date,
    start_of_week,
    start_of_month,
    start_of_year,
    days_in_month,
)
from .logger import configure_logging

__all__ = [
    'DEFAULT_TZ',
    'now_in',
    'to_local',
    'local_date',
    'start_of_week',
    'start_of_month',
    'start_of_year',
    'days_in_month',
    'configure_logging',
]
