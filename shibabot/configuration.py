"""Rotating presence activities shown by the bot."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

SERVERS_PLACEHOLDER = "@"


class ActivityKind(Enum):
    """The kind of presence activity displayed next to the bot's name."""

    PLAYING = "playing"
    LISTENING = "listening"
    WATCHING = "watching"
    COMPETING = "competing"


@dataclass(frozen=True)
class Activity:
    """A presence activity; ``@`` in the name stands for the server count."""

    kind: ActivityKind
    name: str

    def render(self, servers: int) -> Activity:
        """Return a copy with the server-count placeholder filled in."""
        return Activity(self.kind, self.name.replace(SERVERS_PLACEHOLDER, str(servers)))


ACTIVITIES: tuple[Activity, ...] = (
    Activity(ActivityKind.WATCHING, "the Bee movie"),
    Activity(ActivityKind.COMPETING, "counting bytes"),
    Activity(ActivityKind.LISTENING, "yeat"),
    Activity(ActivityKind.WATCHING, "@ servers"),
    Activity(ActivityKind.COMPETING, "a cuteness contest"),
    Activity(ActivityKind.PLAYING, "fetch with virtual bones"),
    Activity(ActivityKind.WATCHING, "the code compile"),
    Activity(ActivityKind.WATCHING, "for incoming belly rubs"),
    Activity(ActivityKind.COMPETING, "tail wagging contests"),
    Activity(ActivityKind.PLAYING, "hide and seek"),
)

ROTATION_INTERVAL_SECONDS = 120


def random_activity(servers: int, rng: random.Random | None = None) -> Activity:
    """Pick one of the configured activities at random and render it."""
    chooser = rng if rng is not None else random
    return chooser.choice(ACTIVITIES).render(servers)