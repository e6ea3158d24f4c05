"""End-to-end refresh pipeline: fetch, normalize, stage, generate, build, publish."""

from __future__ import annotations

import threading
from typing import Mapping, Optional

from .errors import raise_if_cancelled
from .fetcher import SpecFetcher
from .generator import ClientGenerator
from .git import GitClient
from .logging import get_logger
from .models import RunOutcome
from .normalizer import SpecNormalizer
from .process import DotnetToolchain, ProcessRunner
from .publisher import BuildPublisher
from .settings import RefreshSettings
from .stager import RepositoryStager


class RefreshPipeline:
    """Runs the five refresh stages strictly in order; any raised error ends the run."""

    def __init__(
        self,
        fetcher: SpecFetcher,
        normalizer: SpecNormalizer,
        stager: RepositoryStager,
        generator: ClientGenerator,
        publisher: BuildPublisher,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.normalizer = normalizer
        self.stager = stager
        self.generator = generator
        self.publisher = publisher
        self.environ = environ
        self.logger = get_logger("pipeline")

    def run(self, cancel_event: threading.Event | None = None) -> RunOutcome:
        raise_if_cancelled(cancel_event)
        self.logger.info("Fetching spec")
        raw = self.fetcher.fetch(cancel_event)

        raise_if_cancelled(cancel_event)
        self.logger.info("Normalizing spec from %s", raw.path)
        normalized = self.normalizer.normalize(raw, cancel_event)

        raise_if_cancelled(cancel_event)
        self.logger.info("Staging repository")
        repository = self.stager.stage(normalized, cancel_event)
        report = self.stager.clean(repository, cancel_event)
        if not report.completed:
            self.logger.warning("Cleaning of %s did not complete; continuing", report.directory)
        elif report.failures:
            self.logger.warning("%d entries could not be removed from %s", len(report.failures), report.directory)

        raise_if_cancelled(cancel_event)
        self.logger.info("Generating client")
        self.generator.generate(repository, cancel_event)

        raise_if_cancelled(cancel_event)
        self.logger.info("Building %s", repository.project_path)
        build, published = self.publisher.build_and_publish(
            repository, environ=self.environ, cancel_event=cancel_event
        )
        if published:
            self.logger.info("Refresh published from %s", repository.root)
        elif build.success:
            self.logger.info("Refresh produced no changes to publish")
        return RunOutcome(repository=repository, build=build, published=published, clean_report=report)


def build_pipeline(settings: RefreshSettings | None = None) -> RefreshPipeline:
    """Wire the default collaborators for a production run."""
    settings = settings or RefreshSettings()
    runner = ProcessRunner()
    git = GitClient()
    return RefreshPipeline(
        fetcher=SpecFetcher(settings),
        normalizer=SpecNormalizer(),
        stager=RepositoryStager(settings, git=git),
        generator=ClientGenerator(settings, runner=runner),
        publisher=BuildPublisher(settings, toolchain=DotnetToolchain(runner), git=git),
    )


__all__ = ["RefreshPipeline", "build_pipeline"]
