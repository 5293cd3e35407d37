from datetime import timedelta

import pytest

from elevate.database.store import MemoryStore, COMMUNITY_STORIES_KEY
from elevate.models import CommunityStory, StoryCategory, InspirationLevel
from elevate.services.community_service import CommunityService, StoryFilter, validate_story

VALID_CONTENT = "I started with five minutes a day and kept showing up, even on the hard days."


def make_story(title="Small wins", content=VALID_CONTENT, **kwargs):
    return CommunityStory(title=title, content=content, category=kwargs.pop("category", StoryCategory.GENERAL),
                          **kwargs)


@pytest.fixture
def community(store, clock):
    service = CommunityService(store, clock=clock)
    service.load()
    return service


@pytest.fixture
def empty_community(clock):
    service = CommunityService(MemoryStore({COMMUNITY_STORIES_KEY: []}), clock=clock)
    service.load()
    return service


def test_samples_load_newest_first(community):
    assert len(community.stories) == 4
    assert community.stories[0].title == "From Couch to 5K: My Running Journey"
    created = [s.created_at for s in community.stories]
    assert created == sorted(created, reverse=True)


# ===== ВАЛИДАЦИЯ =====

def test_valid_story_passes():
    assert validate_story(make_story()).is_valid


@pytest.mark.parametrize("story, message", [
    (make_story(title="   "), "Title cannot be empty"),
    (make_story(title="x" * 101), "Title must be 100 characters or less"),
    (make_story(content="Too short"), "Story must be at least 50 characters long"),
    (make_story(content="a" * 2001), "Story must be 2000 characters or less"),
    (make_story(content=VALID_CONTENT + " Click HERE for more"), "Content appears to contain promotional material"),
    (make_story(title="Buy now and change", content=VALID_CONTENT), "Content appears to contain promotional material"),
])
def test_invalid_stories(story, message):
    result = validate_story(story)

    assert not result.is_valid
    assert message in result.errors


def test_empty_content_reports_both_errors():
    result = validate_story(make_story(content=""))

    assert "Story content cannot be empty" in result.errors
    assert "Story must be at least 50 characters long" in result.errors


# ===== ПУБЛИКАЦИЯ =====

def test_add_story_stamps_and_inserts_first(community, store, clock):
    story = make_story(created_at=clock() - timedelta(days=30))

    result = community.add_story(story)

    assert result.is_valid
    assert community.stories[0] is story
    assert story.created_at == clock()
    assert store.raw(COMMUNITY_STORIES_KEY)[0]["story_id"] == story.story_id


def test_invalid_story_is_not_added(empty_community):
    result = empty_community.add_story(make_story(content="spam"))

    assert not result.is_valid
    assert empty_community.stories == []


def test_toggle_like(empty_community):
    story = make_story()
    empty_community.add_story(story)

    assert empty_community.toggle_like(story.story_id).likes == 1
    assert empty_community.get_liked_stories() == [story]
    assert empty_community.toggle_like(story.story_id).likes == 0
    assert empty_community.toggle_like("missing") is None


def test_anonymous_story_hides_author():
    anonymous = make_story(author_name="Sam")
    named = make_story(is_anonymous=False, author_name="Sam")

    assert anonymous.author_name is None
    assert anonymous.display_author == "Anonymous"
    assert named.display_author == "Sam"


# ===== ПОИСК И ПОДБОРКИ =====

def test_search_covers_tags_and_milestone(community):
    assert [s.title for s in community.search_stories("debt-free")] == ["Rebuilding After Financial Rock Bottom"]
    assert len(community.search_stories("MEDITATION")) == 1
    assert len(community.search_stories("")) == 4


def test_filter_stories(community):
    high = community.filter_stories(StoryFilter(inspiration_level=InspirationLevel.HIGH))
    career = community.filter_stories(StoryFilter(category=StoryCategory.CAREER, query="boundaries"))

    assert len(high) == 3
    assert [s.category for s in career] == [StoryCategory.CAREER]
    assert community.filter_stories(StoryFilter(category=StoryCategory.CAREER, query="running")) == []


def test_most_liked_and_inspirational(community):
    liked = community.stories[2]
    community.toggle_like(liked.story_id)

    assert community.get_most_liked_stories(limit=1) == [liked]
    assert community.get_inspirational_stories(limit=1) == [liked]
    assert community.get_total_likes() == 1
    assert len(community.get_recent_stories(limit=2)) == 2


def test_stories_for_categories(community):
    stories = community.get_stories_for_categories([StoryCategory.CAREER, StoryCategory.FINANCIAL])

    assert {s.category for s in stories} == {StoryCategory.CAREER, StoryCategory.FINANCIAL}


def test_distributions_and_stats(community):
    levels = community.get_inspiration_level_distribution()
    categories = community.get_category_distribution()
    stats = community.get_reading_stats()

    assert (levels[0].level, levels[0].count) == (InspirationLevel.HIGH, 3)
    assert len(categories) == 4
    assert stats.total_stories_read == 4
    assert stats.categories_explored == 4
    assert stats.average_story_length == community.get_average_story_length() > 0
    assert len(community.get_stories_with_milestones()) == 4
    assert [(t.tag, t.count) for t in community.get_popular_tags(limit=1)] == [("anxiety", 1)]


def test_templates(empty_community):
    template = empty_community.get_story_templates()[1]

    story = empty_community.create_story_from_template(template, "My habit", VALID_CONTENT)

    assert story.category == StoryCategory.HEALTH_FITNESS
    assert story.tags == ["habits", "routine", "consistency"]
    assert story.is_anonymous


def test_shareable_text():
    story = make_story(milestone="30 days", is_anonymous=False, author_name="Kim")

    text = CommunityService(MemoryStore()).get_shareable_text(story)

    assert text.startswith('"Small wins" - 30 days\n\n')
    assert "- Kim" in text


def test_delete_and_report(empty_community, caplog):
    story = make_story()
    empty_community.add_story(story)

    empty_community.report_story(story, "off-topic")

    assert "off-topic" in caplog.text
    assert empty_community.delete_story(story.story_id)
    assert not empty_community.delete_story(story.story_id)


def test_stories_by_category_and_level(community):
    career = community.get_stories_for_category(StoryCategory.CAREER)
    moderate = community.get_stories_with_inspiration_level(InspirationLevel.MODERATE)

    assert [s.title for s in career] == ["Learning to Say No: Setting Boundaries at Work"]
    assert moderate == career
