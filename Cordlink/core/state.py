from __future__ import annotations

import threading
from typing import Any, Optional


class StateCacheMiss(KeyError):
    """Requested object is not in the state cache."""


class State:
    """In-memory cache of guilds, channels and members seen on the gateway.

    Objects are plain dicts keyed by their ``id``. The cache is filled by the
    connection layer; nothing here performs I/O.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.ready: Optional[dict[str, Any]] = None
        self.max_message_count = 0
        self.track_channels = True
        self.track_members = True
        self._guilds: dict[str, dict[str, Any]] = {}
        self._channels: dict[str, dict[str, Any]] = {}
        self._members: dict[str, dict[str, dict[str, Any]]] = {}

    def add_guild(self, guild: dict[str, Any]) -> None:
        guild_id = _require_id(guild)
        with self._lock:
            existing = self._guilds.get(guild_id)
            if existing is not None:
                existing.update(guild)
                guild = existing
            else:
                self._guilds[guild_id] = guild
            if self.track_channels:
                for channel in guild.get("channels") or []:
                    self._channels[_require_id(channel)] = channel
            if self.track_members:
                members = self._members.setdefault(guild_id, {})
                for member in guild.get("members") or []:
                    user = member.get("user") or {}
                    if user.get("id"):
                        members[str(user["id"])] = member

    def remove_guild(self, guild_id: str) -> None:
        with self._lock:
            guild = self._guilds.pop(str(guild_id), None)
            if guild is None:
                raise StateCacheMiss(guild_id)
            for channel in guild.get("channels") or []:
                self._channels.pop(str(channel.get("id")), None)
            self._members.pop(str(guild_id), None)

    def guild(self, guild_id: str) -> dict[str, Any]:
        with self._lock:
            try:
                return self._guilds[str(guild_id)]
            except KeyError:
                raise StateCacheMiss(guild_id) from None

    def channel(self, channel_id: str) -> dict[str, Any]:
        with self._lock:
            try:
                return self._channels[str(channel_id)]
            except KeyError:
                raise StateCacheMiss(channel_id) from None

    def member(self, guild_id: str, user_id: str) -> dict[str, Any]:
        with self._lock:
            try:
                return self._members[str(guild_id)][str(user_id)]
            except KeyError:
                raise StateCacheMiss(user_id) from None

    @property
    def guild_count(self) -> int:
        with self._lock:
            return len(self._guilds)


def _require_id(obj: dict[str, Any]) -> str:
    value = obj.get("id") if isinstance(obj, dict) else None
    if value in (None, ""):
        raise ValueError("object without id cannot be cached")
    return str(value)
