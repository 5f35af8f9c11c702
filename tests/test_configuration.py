import random

import pytest

from shibabot.configuration import ACTIVITIES, Activity, ActivityKind, random_activity


def test_render_replaces_placeholder():
    activity = Activity(ActivityKind.WATCHING, "@ servers")
    rendered = activity.render(42)
    assert rendered.name == "42 servers"
    assert rendered.kind is ActivityKind.WATCHING


def test_render_without_placeholder_is_unchanged():
    activity = Activity(ActivityKind.PLAYING, "hide and seek")
    assert activity.render(7) == activity


def test_activities_table_matches_configuration():
    assert len(ACTIVITIES) == 10
    assert ACTIVITIES[0] == Activity(ActivityKind.WATCHING, "the Bee movie")
    assert sum(1 for a in ACTIVITIES if "@" in a.name) == 1


@pytest.mark.parametrize("seed", range(20))
def test_random_activity_is_a_rendered_entry(seed):
    chosen = random_activity(3, random.Random(seed))
    assert chosen in {a.render(3) for a in ACTIVITIES}
    assert "@" not in chosen.name


def test_random_activity_is_deterministic_for_seed():
    first = random_activity(9, random.Random(1234))
    second = random_activity(9, random.Random(1234))
    assert first == second