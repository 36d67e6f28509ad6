"""Application options read by the services at call time."""

from typing import Dict

from notetree.config import settings

NOTE_REVISION_SNAPSHOT_TIME_INTERVAL = "note_revision_snapshot_time_interval"


def default_options() -> Dict[str, str]:
    return {
        NOTE_REVISION_SNAPSHOT_TIME_INTERVAL: str(settings.note_revision_snapshot_time_interval),
    }


class Options:
    """String-valued options, seeded from settings."""

    def __init__(self, values: Dict[str, str] | None = None) -> None:
        self._values = default_options()
        if values:
            self._values.update(values)

    async def get_option(self, name: str) -> str:
        """Get an option value by its name."""
        if name not in self._values:
            raise KeyError(f"Option {name} not found")
        return self._values[name]

    async def get_option_int(self, name: str) -> int:
        return int(await self.get_option(name))

    def set_option(self, name: str, value: str) -> None:
        self._values[name] = value
