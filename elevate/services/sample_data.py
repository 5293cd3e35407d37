# services/sample_data.py

from datetime import datetime, timedelta
from typing import List

from elevate.models.enums import TipCategory, TipDifficulty, StoryCategory, InspirationLevel
from elevate.models.story import CommunityStory
from elevate.models.tip import Tip

TEAM_AUTHOR = "Elevate Team"


def sample_tips(now: datetime) -> List[Tip]:
    """Стартовая библиотека советов"""
    return [
        Tip(
            title="The 5-Minute Morning Meditation",
            content=(
                "Start your day with clarity and intention. Find a quiet space, sit comfortably, "
                "and focus on your breath for just 5 minutes. This simple practice can transform "
                "your entire day by reducing stress and increasing focus.\n\n"
                "Begin by taking three deep breaths, then allow your breathing to return to its "
                "natural rhythm. When thoughts arise, gently acknowledge them and return your "
                "attention to your breath."
            ),
            category=TipCategory.MINDFULNESS,
            difficulty=TipDifficulty.BEGINNER,
            estimated_read_time=2,
            tags=["meditation", "morning routine", "stress relief"],
            author=TEAM_AUTHOR,
            action_items=[
                "Set aside 5 minutes each morning",
                "Find a quiet, comfortable space",
                "Focus on your natural breathing",
                "Practice daily for one week",
            ],
            created_at=now,
        ),
        Tip(
            title="The Pomodoro Technique for Peak Productivity",
            content=(
                "Boost your productivity with this time-tested technique. Work in focused "
                "25-minute intervals followed by 5-minute breaks. After four cycles, take a "
                "longer 15-30 minute break.\n\n"
                "This method helps maintain concentration while preventing burnout. Choose one "
                "task, eliminate distractions, and commit fully to the 25-minute work session."
            ),
            category=TipCategory.PRODUCTIVITY,
            difficulty=TipDifficulty.BEGINNER,
            estimated_read_time=3,
            tags=["time management", "focus", "work efficiency"],
            author=TEAM_AUTHOR,
            action_items=[
                "Choose one important task",
                "Set a timer for 25 minutes",
                "Work without distractions",
                "Take a 5-minute break",
                "Repeat for 4 cycles",
            ],
            created_at=now - timedelta(hours=1),
        ),
        Tip(
            title="Building Authentic Relationships",
            content=(
                "Authentic relationships are built on genuine interest in others. Practice active "
                "listening by giving your full attention when someone speaks. Ask thoughtful "
                "questions and remember details from previous conversations.\n\n"
                "Vulnerability creates connection. Be consistent in your interactions and follow "
                "through on commitments. Quality relationships require time and intentional effort."
            ),
            category=TipCategory.RELATIONSHIPS,
            difficulty=TipDifficulty.INTERMEDIATE,
            estimated_read_time=4,
            tags=["communication", "empathy", "connection"],
            author=TEAM_AUTHOR,
            action_items=[
                "Practice active listening daily",
                "Ask one meaningful question in conversations",
                "Remember and reference past conversations",
                "Follow through on all commitments",
            ],
            created_at=now - timedelta(hours=2),
        ),
    ]


def sample_stories(now: datetime) -> List[CommunityStory]:
    """Стартовые истории сообщества, от новых к старым"""
    return [
        CommunityStory(
            title="From Couch to 5K: My Running Journey",
            content=(
                "Six months ago, I couldn't run for more than 30 seconds without getting winded. "
                "Today, I completed my first 5K race! The key was starting small, just walking "
                "for 10 minutes a day, then gradually adding short running intervals.\n\n"
                "To anyone starting their fitness journey: be patient with yourself. Progress "
                "isn't always linear, but consistency beats perfection every time."
            ),
            category=StoryCategory.HEALTH_FITNESS,
            milestone="Completed first 5K",
            inspiration_level=InspirationLevel.HIGH,
            tags=["running", "fitness", "perseverance", "beginner"],
            created_at=now,
        ),
        CommunityStory(
            title="Learning to Say No: Setting Boundaries at Work",
            content=(
                "I used to say yes to everything at work, thinking it would make me "
                "indispensable. Instead, I became overwhelmed and my quality of work suffered.\n\n"
                "I started by evaluating each request against my core responsibilities. The "
                "result was better work quality, less stress and more respect from colleagues."
            ),
            category=StoryCategory.CAREER,
            milestone="Reduced overtime by 50%",
            inspiration_level=InspirationLevel.MODERATE,
            tags=["boundaries", "workplace", "stress management", "communication"],
            created_at=now - timedelta(days=1),
        ),
        CommunityStory(
            title="Finding Peace Through Daily Meditation",
            content=(
                "Anxiety controlled my life for years. A friend suggested meditation, and I "
                "started with just 3 minutes a day using a simple breathing technique.\n\n"
                "Now, 8 months later, meditation is non-negotiable in my routine. It's not about "
                "emptying your mind, it's about changing your relationship with your thoughts."
            ),
            category=StoryCategory.MENTAL_HEALTH,
            milestone="8 months of daily meditation",
            inspiration_level=InspirationLevel.HIGH,
            tags=["meditation", "anxiety", "mindfulness", "mental health"],
            created_at=now - timedelta(days=2),
        ),
        CommunityStory(
            title="Rebuilding After Financial Rock Bottom",
            content=(
                "Two years ago, I had $50 to my name and was living paycheck to paycheck. The "
                "turning point came when I finally faced the numbers honestly.\n\n"
                "I created a simple budget, tracked every expense and put every extra dollar "
                "toward debt. Financial freedom is about being intentional with what you have."
            ),
            category=StoryCategory.FINANCIAL,
            milestone="Debt-free in 18 months",
            inspiration_level=InspirationLevel.HIGH,
            tags=["debt", "budgeting", "financial planning", "discipline"],
            created_at=now - timedelta(days=3),
        ),
    ]
