"""Prompt rendering for commit-based messages.

Templates use ``string.Template`` placeholders:

- ``${commits}``: the fetched log lines joined with newlines
- ``${interval}``: display name of the interval (e.g. ``Weekly``)
- ``${author}``: the author filter
- ``${language}``: display name of the output language
"""

from string import Template as PromptTemplate
from typing import Dict, Sequence

from .exceptions import TemplateRenderError

LANGUAGES: Dict[str, str] = {
    "en": "English",
    "tr": "Turkish",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
}


def language_label(code: str) -> str:
    """Human-readable name for a language code; unknown codes pass through."""
    return LANGUAGES.get(code.lower(), code)


def join_commits(commits: Sequence[str]) -> str:
    return "\n".join(commits)


def render_prompt(
    prompt: str,
    commits: Sequence[str],
    interval_name: str,
    author: str = "",
    language: str = "en",
) -> str:
    """Substitute commit data into a template prompt.

    Args:
        prompt: Template text with ``${...}`` placeholders
        commits: Raw log lines
        interval_name: Interval display name
        author: Author filter used for the fetch
        language: Language code or name for the response

    Returns:
        The rendered prompt

    Raises:
        TemplateRenderError: On unknown or malformed placeholders
    """
    values = {
        "commits": join_commits(commits),
        "interval": interval_name,
        "author": author,
        "language": language_label(language),
    }
    try:
        return PromptTemplate(prompt).substitute(values)
    except KeyError as e:
        raise TemplateRenderError(
            f"failed to process template: unknown placeholder {e}"
        ) from e
    except ValueError as e:
        raise TemplateRenderError(f"failed to process template: {e}") from e
