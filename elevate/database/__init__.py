from .store import (
    RecordStore,
    MemoryStore,
    JsonFileStore,
    DatabaseError,
    StorageWriteError,
    HABITS_KEY,
    GOALS_KEY,
    TIPS_KEY,
    COMMUNITY_STORIES_KEY,
    VISION_BOARDS_KEY,
    USER_PREFERENCES_KEY,
    ALL_KEYS,
)

__all__ = [
    'RecordStore',
    'MemoryStore',
    'JsonFileStore',
    'DatabaseError',
    'StorageWriteError',
    'HABITS_KEY',
    'GOALS_KEY',
    'TIPS_KEY',
    'COMMUNITY_STORIES_KEY',
    'VISION_BOARDS_KEY',
    'USER_PREFERENCES_KEY',
    'ALL_KEYS',
]
