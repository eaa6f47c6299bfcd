"""Engine settings resolved from the environment.

Variables use the `RHINO_` prefix, for example `RHINO_SECTION` or
`RHINO_ACTION_PATTERN`. Explicit keyword arguments take precedence.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from rhino_snippets.models import SettingsModel

#: Section of a test specification where actions are written.
DEFAULT_SECTION = 'test-actions'


class EngineSettings(SettingsModel):
    """Runtime settings of the completion engine."""

    model_config = SettingsConfigDict(env_prefix='RHINO_')

    section: str = Field(
        default=DEFAULT_SECTION,
        title='Actions section',
        description='Annotation name of the section offering action completions.',
    )

    action_pattern: str | None = Field(
        default=None,
        title='Action recognition pattern',
        description=(
            'Regular expression locating the action phrase on a line. '
            'Derived from the catalog action phrases when not set.'
        ),
    )

    strict: bool = Field(
        default=False,
        title='Strict catalog loading',
        description='Raise on invalid or duplicate catalog records instead of warning.',
    )
