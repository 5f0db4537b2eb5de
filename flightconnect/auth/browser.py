"""Open a URL in the user's default browser."""

from __future__ import annotations
import logging
import webbrowser
from typing import Callable

logger = logging.getLogger(__name__)

BrowserLauncher = Callable[[str], None]


def open_default_browser(url: str) -> None:
    """
    Fire-and-forget browser launch.

    webbrowser picks ``open``, ``ShellExecute`` or ``xdg-open`` for the
    platform. A failed launch is not fatal: the user can open the link
    by hand.
    """
    try:
        opened = webbrowser.open(url)
    except (webbrowser.Error, OSError) as e:
        logger.warning("Failed to open browser automatically: %s. Please open %s manually.", e, url)
        return
    if not opened:
        logger.warning("No browser available. Please open %s manually.", url)
