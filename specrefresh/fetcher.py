"""Download the OpenAPI document from the rendered documentation site."""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager
from typing import Callable

from .browser import BrowserSession, PlaywrightBrowser, PlaywrightInstaller
from .errors import raise_if_cancelled
from .logging import get_logger
from .models import SpecDocument
from .paths import random_temp_file_path
from .settings import RefreshSettings

BrowserFactory = Callable[[], AbstractContextManager[BrowserSession]]


class SpecFetcher:
    """Drives a browser to the docs page and saves the triggered download."""

    def __init__(
        self,
        settings: RefreshSettings | None = None,
        *,
        installer: PlaywrightInstaller | None = None,
        browser_factory: BrowserFactory | None = None,
    ) -> None:
        self.settings = settings or RefreshSettings()
        self.installer = installer or PlaywrightInstaller()
        self.browser_factory = browser_factory or PlaywrightBrowser
        self.logger = get_logger("fetcher")

    def fetch(self, cancel_event: threading.Event | None = None) -> SpecDocument:
        """Return the downloaded spec saved at a fresh temporary path."""
        self.installer.ensure_installed()
        raise_if_cancelled(cancel_event)

        url = self.settings.docs_url
        selector = self.settings.download_selector
        with self.browser_factory() as session:
            self.logger.info("Navigating to %s", url)
            session.navigate(url, self.settings.navigation_timeout_ms)
            raise_if_cancelled(cancel_event)

            self.logger.info("Triggering download via %s", selector)
            payload = session.await_download(lambda: session.click(selector))
        raise_if_cancelled(cancel_event)

        destination = random_temp_file_path("json")
        destination.write_bytes(payload)
        self.logger.info("Saved downloaded spec to %s (%d bytes)", destination, len(payload))
        return SpecDocument(path=destination, content=payload.decode("utf-8-sig", errors="replace"))


__all__ = ["BrowserFactory", "SpecFetcher"]
