"""Core dmc functionality."""

from .exceptions import (
    ConfigurationError,
    DMCError,
    GeminiError,
    GeminiHTTPError,
    GeminiRequestError,
    GeminiResponseError,
    GitOperationError,
    IntervalNotFoundError,
    KeyValidationError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from .gemini_client import GeminiClient
from .git_utils import CommitBatch, CommitFetcher, GitUtils, LogQuery
from .pipeline import GenerateOptions, GeneratePipeline, GenerationResult, ResolvedOptions
from .prompts import language_label, render_prompt

__all__ = [
    # Exceptions
    "DMCError",
    "ConfigurationError",
    "GitOperationError",
    "KeyValidationError",
    "TemplateNotFoundError",
    "IntervalNotFoundError",
    "TemplateRenderError",
    "GeminiError",
    "GeminiRequestError",
    "GeminiHTTPError",
    "GeminiResponseError",
    # Git
    "GitUtils",
    "LogQuery",
    "CommitBatch",
    "CommitFetcher",
    # Generation
    "GeminiClient",
    "render_prompt",
    "language_label",
    "GenerateOptions",
    "ResolvedOptions",
    "GenerationResult",
    "GeneratePipeline",
]
