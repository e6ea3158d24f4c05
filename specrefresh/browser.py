"""Headless browser capability backed by Playwright."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional, Protocol

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from playwright_stealth import Stealth

from .errors import DownloadNotTriggered, NavigationTimeout, RefreshError
from .logging import get_logger
from .process import ProcessRunner

STEALTH_LAUNCH_ARGS = (
    "--disable-blink-features=AutomationControlled",
    "--disable-features=IsolateOrigins,site-per-process",
    "--no-default-browser-check",
)
STEALTH_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
DOWNLOAD_TIMEOUT_MS = 30_000


class BrowserSession(Protocol):
    """Minimal page automation surface the spec fetcher relies on."""

    def navigate(self, url: str, idle_timeout_ms: int) -> None:
        ...

    def click(self, selector: str) -> None:
        ...

    def await_download(self, action: Callable[[], None]) -> bytes:
        ...

    def close(self) -> None:
        ...


class PlaywrightInstaller:
    """Installs the Chromium runtime used by Playwright, once per process."""

    _installed = False

    def __init__(self, runner: ProcessRunner | None = None, browser: str = "chromium") -> None:
        self.runner = runner or ProcessRunner()
        self.browser = browser
        self.logger = get_logger("browser")

    def ensure_installed(self) -> None:
        if PlaywrightInstaller._installed:
            return
        self.logger.info("Ensuring Playwright %s runtime is installed", self.browser)
        result = self.runner.execute(sys.executable, None, ["-m", "playwright", "install", self.browser])
        if not result.ok:
            raise RefreshError(
                f"Playwright install failed with exit code {result.exit_code}: {result.stderr.strip()}"
            )
        PlaywrightInstaller._installed = True


class PlaywrightBrowser:
    """Stealth-configured Chromium session; one browser and context per instance."""

    def __init__(
        self,
        *,
        headless: bool = True,
        download_timeout_ms: int = DOWNLOAD_TIMEOUT_MS,
        stealth: Stealth | None = None,
    ) -> None:
        self.headless = headless
        self.stealth = stealth or Stealth()
        self.download_timeout_ms = download_timeout_ms
        self.logger = get_logger("browser")
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self) -> "PlaywrightBrowser":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(
            headless=self.headless,
            args=list(STEALTH_LAUNCH_ARGS),
        )
        self._context = self._browser.new_context(
            user_agent=STEALTH_USER_AGENT,
            locale="en-US",
            viewport={"width": 1366, "height": 768},
            accept_downloads=True,
        )
        self.stealth.apply_stealth_sync(self._context)
        self._page = self._context.new_page()

    def close(self) -> None:
        if self._context is not None:
            self._context.close()
            self._context = None
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        self._page = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session has not been opened")
        return self._page

    def navigate(self, url: str, idle_timeout_ms: int) -> None:
        try:
            self.page.goto(url, wait_until="networkidle", timeout=idle_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeout(
                f"{url} did not reach network idle within {idle_timeout_ms} ms"
            ) from exc

    def click(self, selector: str) -> None:
        self.page.click(selector, timeout=self.download_timeout_ms)

    def await_download(self, action: Callable[[], None]) -> bytes:
        try:
            with self.page.expect_download(timeout=self.download_timeout_ms) as download_info:
                action()
            download = download_info.value
            failure = download.failure()
            if failure:
                raise DownloadNotTriggered(f"Download failed: {failure}")
            return Path(download.path()).read_bytes()
        except (PlaywrightTimeoutError, PlaywrightError) as exc:
            raise DownloadNotTriggered(f"Expected download did not start: {exc}") from exc


__all__ = ["BrowserSession", "PlaywrightBrowser", "PlaywrightInstaller"]
