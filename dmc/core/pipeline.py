"""Generate pipeline: resolve options, fetch commits, ask Gemini."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from dmc.config.models import DMCConfig, Interval, Template

from .exceptions import ConfigurationError
from .gemini_client import GeminiClient
from .git_utils import CommitBatch, CommitFetcher

DEFAULT_INTERVAL = "daily"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class GenerateOptions:
    """Values given on the command line; ``None`` means not given."""

    author: Optional[str] = None
    interval: Optional[str] = None
    template: Optional[str] = None
    api_key: Optional[str] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class ResolvedOptions:
    """Effective settings after applying flag > config > default."""

    author: str
    interval_key: str
    template_key: str
    api_key: str
    language: str
    interval: Interval
    template: Template


@dataclass
class GenerationResult:
    """Outcome of one pipeline run."""

    options: ResolvedOptions
    batch: CommitBatch
    message: Optional[str] = None

    @property
    def has_commits(self) -> bool:
        return not self.batch.is_empty


class GeneratePipeline:
    """Sequential generate pipeline.

    Each step can be called on its own; :meth:`run` chains all three and
    reports the fetched batch through a callback.
    """

    def __init__(
        self,
        config: DMCConfig,
        options: GenerateOptions,
        repo_path: Optional[Path] = None,
        client_factory: Optional[Callable[[str, DMCConfig], GeminiClient]] = None,
    ):
        self.config = config
        self.options = options
        self.repo_path = repo_path
        self.client_factory = client_factory or GeminiClient

    def resolve(self) -> ResolvedOptions:
        """Resolve effective settings without touching git or the network.

        Raises:
            ConfigurationError: If author or API key is missing
            KeyValidationError: If the template or interval is unknown
        """
        opts = self.options
        cfg = self.config

        author = opts.author or cfg.author
        if not author:
            raise ConfigurationError(
                "author email is required. Use --author flag or set it with "
                "'dmc config set author <email>'"
            )

        api_key = opts.api_key or cfg.api_key
        if not api_key:
            raise ConfigurationError(
                "Gemini API key is required. Use --api-key flag or set "
                "GEMINI_API_KEY env var"
            )

        template_key = opts.template or cfg.default_type
        interval_key = opts.interval or DEFAULT_INTERVAL
        language = opts.language or cfg.language or DEFAULT_LANGUAGE

        template = cfg.get_template(template_key)
        interval = cfg.get_interval(interval_key)

        return ResolvedOptions(
            author=author,
            interval_key=interval_key,
            template_key=template_key,
            api_key=api_key,
            language=language,
            interval=interval,
            template=template,
        )

    def fetch(self, resolved: ResolvedOptions) -> CommitBatch:
        fetcher = CommitFetcher(self.config, self.repo_path)
        return fetcher.fetch_commits(resolved.author, resolved.interval_key)

    def generate(self, resolved: ResolvedOptions, batch: CommitBatch) -> str:
        with self.client_factory(resolved.api_key, self.config) as client:
            return client.generate_message(
                batch.lines,
                resolved.template_key,
                resolved.interval_key,
                resolved.author,
                resolved.language,
            )

    def run(
        self,
        on_fetched: Optional[Callable[[ResolvedOptions, CommitBatch], None]] = None,
    ) -> GenerationResult:
        """Run every step; the generator is skipped when there are no commits.

        ``on_fetched`` is called with the resolved options and the batch
        before the generator runs, so callers can report progress.
        """
        resolved = self.resolve()
        batch = self.fetch(resolved)
        if on_fetched is not None:
            on_fetched(resolved, batch)
        result = GenerationResult(options=resolved, batch=batch)
        if result.has_commits:
            result.message = self.generate(resolved, batch)
        return result
