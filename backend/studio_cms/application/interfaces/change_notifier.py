"""Abstract change notifier (port) — a best-effort alerting sink."""

from abc import ABC, abstractmethod


class ChangeNotifier(ABC):
    """Port — delivers a human-readable summary somewhere an admin will see it.

    Implementations may raise; callers go through ``notify_in_background``
    or ``deliver_safely``, which log and swallow every failure.
    """

    @property
    @abstractmethod
    def sink_name(self) -> str:
        """Short name used in log lines (e.g. 'telegram')."""
        ...

    @abstractmethod
    async def send(self, text: str, *, section: str | None = None, action: str | None = None) -> None:
        """Deliver ``text``. ``section``/``action`` carry the structured form when known."""
        ...
