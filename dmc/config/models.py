"""Configuration models for dmc."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from dmc.core.exceptions import IntervalNotFoundError, TemplateNotFoundError

REPORT_PROMPT = """Based on the following git commits from the ${interval} period, create a professional status report:

Git Commits:
${commits}

Create a structured report with:
1. **Summary**: Brief overview of accomplishments
2. **Key Changes**: Main features or improvements
3. **Technical Details**: Important technical aspects
4. **Impact**: How these changes benefit the project
5. **Next Steps**: Planned future work

Format as a professional status update. Write the report in ${language}."""

TRANSCRIPT_PROMPT = """Based on the following git commits from the ${interval} period, create a standup meeting update:

Git Commits:
${commits}

Format as a standup meeting entry:
- **What I accomplished**: Summary of completed work
- **Current focus**: What I'm working on now
- **Next priorities**: Upcoming tasks
- **Blockers/Notes**: Any challenges or important notes

Keep it conversational and concise. Write the update in ${language}."""

SUMMARY_PROMPT = """Summarize the following git commits from the ${interval} period:

${commits}

Provide a concise summary of the work done, highlighting the most important changes and their purpose. Write the summary in ${language}."""


class Interval(BaseModel):
    """A named time window understood by git's date parser."""

    since: str = Field(description="Lower bound passed to git log --since")
    until: str = Field(default="now", description="Upper bound passed to git log --until")
    name: str = Field(description="Display name")

    model_config = {"frozen": True}

    @field_validator("since", "until")
    @classmethod
    def validate_date_expression(cls, v: str) -> str:
        """Validate that a date expression is present."""
        if not v.strip():
            raise ValueError("Date expression cannot be empty")
        return v.strip()


class Template(BaseModel):
    """A named prompt skeleton."""

    name: str = Field(description="Display name")
    prompt: str = Field(description="Prompt text with ${...} placeholders")
    description: str = Field(default="", description="What the output looks like")

    model_config = {"frozen": True}

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Validate that the prompt is not blank."""
        if not v.strip():
            raise ValueError("Template prompt cannot be empty")
        return v


class GitSettings(BaseModel):
    """Options shaping the git log invocation."""

    include_merges: bool = Field(default=False, description="Include merge commits")
    branches: List[str] = Field(
        default_factory=lambda: ["--all"], description="Branch references to scan"
    )
    exclude_paths: List[str] = Field(
        default_factory=list, description="Paths excluded from the log"
    )


def _default_intervals() -> Dict[str, Interval]:
    return {
        "daily": Interval(since="yesterday.midnight", until="now", name="Daily"),
        "weekly": Interval(since="1.week.ago", until="now", name="Weekly"),
        "monthly": Interval(since="1.month.ago", until="now", name="Monthly"),
    }


def _default_templates() -> Dict[str, Template]:
    return {
        "report": Template(
            name="Status Report",
            description="Professional status report format",
            prompt=REPORT_PROMPT,
        ),
        "transcript": Template(
            name="Meeting Transcript",
            description="Daily standup meeting format",
            prompt=TRANSCRIPT_PROMPT,
        ),
        "summary": Template(
            name="Work Summary",
            description="Concise work summary",
            prompt=SUMMARY_PROMPT,
        ),
    }


class DMCConfig(BaseModel):
    """Main dmc configuration."""

    author: str = Field(default="", description="Git author email")
    api_key: Optional[str] = Field(default=None, description="Gemini API key")
    default_type: str = Field(default="report", description="Default template key")
    language: str = Field(default="en", description="Default output language code")
    intervals: Dict[str, Interval] = Field(
        default_factory=_default_intervals, description="Named time windows"
    )
    templates: Dict[str, Template] = Field(
        default_factory=_default_templates, description="Named prompt templates"
    )
    git_settings: GitSettings = Field(
        default_factory=GitSettings, description="Git log settings"
    )

    def get_interval(self, key: str) -> Interval:
        """Look up an interval, failing with the list of valid keys."""
        try:
            return self.intervals[key]
        except KeyError:
            raise IntervalNotFoundError(
                f"unknown interval: {key}. Available: {', '.join(self.intervals)}"
            ) from None

    def get_template(self, key: str) -> Template:
        """Look up a template, failing with the list of valid keys."""
        try:
            return self.templates[key]
        except KeyError:
            raise TemplateNotFoundError(
                f"unknown template: {key}. Available: {', '.join(self.templates)}"
            ) from None
