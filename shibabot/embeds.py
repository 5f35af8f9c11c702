"""Embeds for the informational and moderation commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import psutil

from shibabot.constants import (
    DEFAULT_AVATAR_URL,
    EMBED_COLOR,
    ERROR_AUTHOR_ICON,
    ERROR_EMBED_COLOR,
    INVITE_LINK,
    RUST_LOGO_URL,
    SHIBA_MAIN_IMAGE_URL,
    SUPPORT_SERVER,
)

DEV_SERVER_ID = 1161012273935036528
MAX_PURGE = 100
DEFAULT_PURGE = 100
SUGGESTION_MIN_LENGTH = 10
SUGGESTION_MAX_LENGTH = 1900
CPU_SAMPLE_SECONDS = 0.2

INFO_TITLE = "Shiba Stats:"
INFO_DESCRIPTION = "Hosted in USA :flag_us: made in :flag_es: & :flag_be:"
INFO_DEVELOPERS = "`alawapr.rs`\n`caturndev`"
INFO_FOOTER = "Made with Rust using Serenity and Poise."
PURGE_TOO_MANY = "Can't purge more than 100 messages at a time."
GUILD_ONLY_MESSAGE = "This command can only be used in a server!"
SUGGESTION_THANKS_TITLE = "Thank you for your suggestion!"
SUGGESTION_THANKS_TEXT = "Your suggestion has been received and will be reviewed."

_GIB = 1024.0**3


def _field(name: str, value: Any, inline: bool = True) -> dict[str, Any]:
    return {"name": name, "value": str(value), "inline": inline}


def bytes_to_gb(count: int) -> float:
    """Convert a byte count to gibibytes."""
    return count / _GIB


@dataclass(frozen=True)
class HostStats:
    """A snapshot of the host's CPU, memory, disk and network usage."""

    cpu_usage: float = 0.0
    cpu_count: int = 0
    total_memory: int = 0
    available_memory: int = 0
    used_memory: int = 0
    total_space: int = 0
    free_space: int = 0
    packets_sent: int = 0
    packets_received: int = 0
    bytes_sent: int = 0
    bytes_received: int = 0

    @property
    def used_space(self) -> int:
        """Bytes of disk space in use."""
        return self.total_space - self.free_space

    @property
    def disk_usage(self) -> float:
        """Percentage of disk space in use; zero when there is no disk."""
        if self.total_space == 0:
            return 0.0
        return self.used_space / self.total_space * 100.0


def collect_host_stats() -> HostStats:
    """Measure the current host's resource usage."""
    cpu_usage = psutil.cpu_percent(interval=CPU_SAMPLE_SECONDS)
    cpu_count = psutil.cpu_count(logical=False) or 0
    memory = psutil.virtual_memory()

    total_space = 0
    free_space = 0
    for partition in psutil.disk_partitions(all=False):
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except OSError:
            continue
        total_space += usage.total
        free_space += usage.free

    net = psutil.net_io_counters()
    if net is None:
        packets_sent = packets_received = bytes_sent = bytes_received = 0
    else:
        packets_sent, packets_received = net.packets_sent, net.packets_recv
        bytes_sent, bytes_received = net.bytes_sent, net.bytes_recv

    return HostStats(
        cpu_usage=cpu_usage,
        cpu_count=cpu_count,
        total_memory=memory.total,
        available_memory=memory.available,
        used_memory=memory.used,
        total_space=total_space,
        free_space=free_space,
        packets_sent=packets_sent,
        packets_received=packets_received,
        bytes_sent=bytes_sent,
        bytes_received=bytes_received,
    )


def info_embed(
    startup_unix: int,
    latency_ms: float,
    version: str,
    command_count: int,
    os_name: str,
) -> dict[str, Any]:
    """Build the embed with the bot's uptime, latency and build details."""
    return {
        "title": INFO_TITLE,
        "description": INFO_DESCRIPTION,
        "color": EMBED_COLOR,
        "fields": [
            _field("Developers", INFO_DEVELOPERS),
            _field("Uptime", f"<t:{int(startup_unix)}:R>"),
            _field("Latency", f"`{int(latency_ms)}ms`"),
            _field("Bot version", f"`{version}`"),
            _field("Commands ran", f"`{command_count}`"),
            _field("OS", f"`{os_name}`"),
        ],
        "footer": {"text": INFO_FOOTER, "icon_url": RUST_LOGO_URL},
    }


def host_stats_embed(stats: HostStats) -> dict[str, Any]:
    """Build the developer-only embed describing the host system."""
    return {
        "title": "[DEV] Host System Information:",
        "color": EMBED_COLOR,
        "fields": [
            _field("", "**CPU**", False),
            _field("CPU Usage", f"{stats.cpu_usage:.2f}%"),
            _field("Logical CPU Count", f"{stats.cpu_count}"),
            _field("", "**Memory**", False),
            _field("Total Memory", f"{bytes_to_gb(stats.total_memory):.1f} GB"),
            _field("Available Memory", f"{bytes_to_gb(stats.available_memory):.1f} GB"),
            _field("Memory Usage", f"{bytes_to_gb(stats.used_memory):.1f} GB"),
            _field("", "**Disk**", False),
            _field("Total Space", f"{bytes_to_gb(stats.total_space):.2f} GB"),
            _field("Used Space", f"{bytes_to_gb(stats.used_space):.2f} GB"),
            _field("Free Space", f"{bytes_to_gb(stats.free_space):.2f} GB"),
            _field("Disk Usage", f"{stats.disk_usage:.2f} %"),
            _field("", "**Network**", False),
            _field("Packets Sent", f"{stats.packets_sent}"),
            _field("Packets Received", f"{stats.packets_received}"),
            _field("Bytes Sent", f"{stats.bytes_sent} B"),
            _field("Bytes Received", f"{stats.bytes_received} B"),
        ],
    }


def invite_embed() -> dict[str, Any]:
    """Build the embed with the invite and support links."""
    text = (
        f"Click [this link]({INVITE_LINK}) to invite Shiba to your server!\n"
        f"Having issues? Click [here]({SUPPORT_SERVER}) for help!"
    )
    return {
        "color": EMBED_COLOR,
        "fields": [_field("Invite Shiba", text, False)],
        "thumbnail": {"url": SHIBA_MAIN_IMAGE_URL},
    }


def _error_embed(description: str) -> dict[str, Any]:
    return {
        "author": {"name": "Error", "icon_url": ERROR_AUTHOR_ICON},
        "description": description,
        "color": ERROR_EMBED_COLOR,
    }


def serverinfo_embed(
    name: str | None,
    guild_id: int | None = None,
    owner_id: int | None = None,
    bots: int = 0,
    humans: int = 0,
    region: str = "",
    created_at: datetime | None = None,
    icon_url: str | None = None,
    banner_url: str | None = None,
) -> dict[str, Any]:
    """Build the server information embed.

    Without a guild (``guild_id`` is ``None``) the error shown outside of
    servers is returned instead.
    """
    if guild_id is None:
        return _error_embed(GUILD_ONLY_MESSAGE)
    created = created_at.strftime("%Y-%m-%d %H:%M:%S") if created_at else ""
    embed: dict[str, Any] = {
        "title": f"Information about {name}:",
        "color": EMBED_COLOR,
        "fields": [
            _field("Server Name", f"`{name}`"),
            _field("Server ID", f"`{guild_id}`"),
            _field("Server Owner", f"`{owner_id}`"),
            _field("Member Count", f"`{humans + bots}`"),
            _field("Bot Count", f"`{bots}`"),
            _field("Human Count", f"`{humans}`"),
            _field("Server Region", f"`{region}`"),
            _field("Created at ", f"`{created}`"),
        ],
        "thumbnail": {"url": icon_url or DEFAULT_AVATAR_URL},
    }
    if banner_url:
        embed["image"] = {"url": banner_url}
    return embed


def userinfo_embed(
    user_id: int,
    name: str,
    global_name: str | None,
    created_unix: int,
    is_bot: bool,
    avatar_url: str | None = None,
    banner_url: str | None = None,
    roles: list[int] | None = None,
) -> dict[str, Any]:
    """Build the user information embed.

    A banner is shown when present; otherwise the roles are listed when the
    user was looked up inside a server (``roles`` is not ``None``).
    """
    embed: dict[str, Any] = {
        "title": f"Information about {name}:",
        "color": EMBED_COLOR,
        "fields": [
            _field("User ID", f"`{user_id}`"),
            _field("Username", f"`{name}`"),
            _field("Display Name", f"`{global_name or 'Unknown'}`"),
            _field("Created at", f"<t:{int(created_unix)}:R>"),
            _field("Is it a bot?", f"`{'Yes' if is_bot else 'No'}`"),
        ],
        "thumbnail": {"url": avatar_url or DEFAULT_AVATAR_URL},
    }
    if banner_url:
        embed["image"] = {"url": banner_url}
    elif roles is not None:
        mentions = ", ".join(f"<@&{role}>" for role in roles)
        embed["fields"].append(_field("Roles", mentions))
    return embed


def purge_limit(amount: int | None) -> int:
    """Return how many messages to fetch for a purge of ``amount`` messages.

    One extra message accounts for the bot's own reply. Without an amount
    the default of 100 is used. Raises ``ValueError`` beyond the limit.
    """
    if amount is None:
        return DEFAULT_PURGE
    if amount < 0:
        raise ValueError("amount of messages cannot be negative")
    limit = amount + 1
    if limit > MAX_PURGE:
        raise ValueError(PURGE_TOO_MANY)
    return limit


def purge_embed(amount: int | None) -> dict[str, Any]:
    """Build the confirmation embed after purging messages."""
    count = DEFAULT_PURGE if amount is None else amount
    return {
        "title": "Messages Purged",
        "description": f"Purged {count} messages.",
        "color": EMBED_COLOR,
    }


def suggestion_text(user_id: int, text: str) -> str:
    """Format a suggestion for the suggestions webhook, defusing mentions.

    Raises ``ValueError`` when the text is shorter or longer than allowed.
    """
    if not SUGGESTION_MIN_LENGTH <= len(text) <= SUGGESTION_MAX_LENGTH:
        raise ValueError(
            f"suggestion must be {SUGGESTION_MIN_LENGTH} to "
            f"{SUGGESTION_MAX_LENGTH} characters long"
        )
    return f"**<@{user_id}>**: {text.replace('@', '`@`')}"