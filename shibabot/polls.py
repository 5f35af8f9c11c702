"""Embeds and tallies for simple yes/no polls."""

from __future__ import annotations

from enum import Enum
from typing import Any

from shibabot.constants import EMBED_COLOR

CHECK_EMOJI_ID = 1197545020329300049
CROSS_EMOJI_ID = 1197544989475995739


class PollOutcome(Enum):
    """Which side of a poll is ahead."""

    YES = "Yes"
    NO = "No"
    TIE = "Tie"


def poll_outcome(yes_votes: int, no_votes: int) -> PollOutcome:
    """Compare the vote counts of both sides."""
    if yes_votes > no_votes:
        return PollOutcome.YES
    if yes_votes < no_votes:
        return PollOutcome.NO
    return PollOutcome.TIE


def _field(name: str, value: str) -> dict[str, Any]:
    return {"name": name, "value": value, "inline": True}


def poll_embed(
    topic: str,
    end_timestamp: int,
    outcome: PollOutcome | None = None,
    finished: bool = False,
) -> dict[str, Any]:
    """Build the poll embed, either while running or with the final result."""
    if finished:
        result = (outcome or PollOutcome.TIE).value
        fields = [_field("Topic", topic), _field("Result:", result)]
    else:
        winning = "None" if outcome is None else outcome.value
        fields = [
            _field("Topic", topic),
            _field("Duration", f"<t:{end_timestamp}:R>"),
            _field("Currently winning", winning),
        ]
    return {"title": "Poll", "fields": fields, "color": EMBED_COLOR}


def poll_finished_message(user_id: int) -> str:
    """Text pinging the poll's author once it ends."""
    return f"Hey <@{user_id}>, the poll has finished!"