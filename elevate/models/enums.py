# models/enums.py

from enum import Enum


class HabitCategory(Enum):
    HEALTH = "Health & Fitness"
    MINDFULNESS = "Mindfulness"
    PRODUCTIVITY = "Productivity"
    LEARNING = "Learning"
    SOCIAL = "Social"
    CREATIVITY = "Creativity"
    SELF_CARE = "Self Care"
    NUTRITION = "Nutrition"


class HabitFrequency(Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    CUSTOM = "Custom"


class TimePeriod(Enum):
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"


class GoalCategory(Enum):
    HEALTH = "Health & Fitness"
    CAREER = "Career & Professional"
    RELATIONSHIPS = "Relationships"
    PERSONAL = "Personal Growth"
    FINANCIAL = "Financial"
    EDUCATION = "Education & Learning"
    CREATIVITY = "Creativity & Hobbies"
    SPIRITUALITY = "Spirituality & Mindfulness"


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Mood(Enum):
    EXCITED = "Excited"
    MOTIVATED = "Motivated"
    PEACEFUL = "Peaceful"
    FOCUSED = "Focused"
    GRATEFUL = "Grateful"
    CONFIDENT = "Confident"


class TipCategory(Enum):
    MINDFULNESS = "Mindfulness"
    PRODUCTIVITY = "Productivity"
    WELLNESS = "Wellness"
    RELATIONSHIPS = "Relationships"
    CAREER = "Career Development"
    FINANCE = "Financial Wellness"
    CREATIVITY = "Creativity"
    LEADERSHIP = "Leadership"
    COMMUNICATION = "Communication"
    TIME_MANAGEMENT = "Time Management"


class TipDifficulty(Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class StoryCategory(Enum):
    HEALTH_FITNESS = "Health & Fitness"
    MENTAL_HEALTH = "Mental Health"
    CAREER = "Career Growth"
    RELATIONSHIPS = "Relationships"
    ADDICTION = "Overcoming Addiction"
    EDUCATION = "Education & Learning"
    CREATIVITY = "Creative Journey"
    SPIRITUALITY = "Spiritual Growth"
    FINANCIAL = "Financial Freedom"
    GENERAL = "General Growth"


class InspirationLevel(Enum):
    LOW = "Gentle"
    MODERATE = "Motivating"
    HIGH = "Transformational"
