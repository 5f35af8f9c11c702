"""Chat bot building blocks: reminders, polls, storage, logging and embeds."""

__version__ = "0.1.0"