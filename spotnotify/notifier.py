"""
Desktop notification backends.

Each backend wraps an external command line tool. Backends are probed in
priority order and the first one found on PATH is used.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from spotnotify.exceptions import NotifyError

logger = logging.getLogger(__name__)


class Notifier:
    """Base class for a notification backend."""

    name = "notifier"
    executable = ""

    def __init__(self, timeout_ms: int = 5000):
        self.timeout_ms = timeout_ms

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def build_command(
        self, title: str, subtitle: str, image: Optional[Path] = None
    ) -> List[str]:
        raise NotImplementedError

    def notify(self, title: str, subtitle: str, image: Optional[Path] = None) -> None:
        """
        Display a notification.

        Raises:
            NotifyError: If the tool cannot be run or exits non-zero
        """
        cmd = self.build_command(title, subtitle, image)
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise NotifyError(f"Cannot run {self.executable}: {e}") from e

        if result.returncode != 0:
            raise NotifyError(
                f"{self.executable} exited with code {result.returncode}: "
                f"{result.stderr.strip()}"
            )


class NotifySendNotifier(Notifier):
    """Native freedesktop notifications via notify-send."""

    name = "notify-send"
    executable = "notify-send"

    def build_command(self, title, subtitle, image=None):
        cmd = [self.executable, f"--expire-time={self.timeout_ms}"]
        if image:
            cmd.append(f"--icon={image}")
        cmd.extend(["--", title, subtitle])
        return cmd


class TerminalNotifier(Notifier):
    """macOS notifications via terminal-notifier. No expiry support."""

    name = "terminal-notifier"
    executable = "terminal-notifier"

    def build_command(self, title, subtitle, image=None):
        cmd = [self.executable, "-title", title, "-message", subtitle]
        if image:
            cmd.extend(["-contentImage", str(image)])
        return cmd


def default_notifiers(timeout_ms: int = 5000) -> List[Notifier]:
    """Backends in priority order."""
    return [NotifySendNotifier(timeout_ms), TerminalNotifier(timeout_ms)]


def select_notifier(notifiers: Sequence[Notifier]) -> Optional[Notifier]:
    """Return the first available backend, or None."""
    for notifier in notifiers:
        if notifier.is_available():
            return notifier
        logger.debug(f"Notifier {notifier.name} not available")
    return None


def notify(
    title: str,
    subtitle: str,
    image: Optional[Path] = None,
    notifiers: Optional[Sequence[Notifier]] = None,
    timeout_ms: int = 5000,
) -> Optional[str]:
    """
    Show a notification with the first available backend.

    Returns:
        Name of the backend used, or None if no backend is installed

    Raises:
        NotifyError: If the chosen backend fails
    """
    if notifiers is None:
        notifiers = default_notifiers(timeout_ms)

    notifier = select_notifier(notifiers)
    if notifier is None:
        logger.info("No notification backend available")
        return None

    logger.info(f"Notifying via {notifier.name}")
    notifier.notify(title, subtitle, image)
    return notifier.name
