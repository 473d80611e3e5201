"""selectkit — interactive single and multi selection prompts for terminals.

Arrow-key widgets on a real terminal, numbered-list prompts everywhere
else, with the terminal always handed back the way it was found.
"""

from selectkit.api import multi_select, prompt, select
from selectkit.core.models import Option, PromptSpec, SelectionMode, Theme
from selectkit.exceptions import CancelledError, SelectKitError
from selectkit.settings import EngineSettings, load_settings
from selectkit.version import __version__

__all__: list[str] = [
    "CancelledError",
    "EngineSettings",
    "Option",
    "PromptSpec",
    "SelectKitError",
    "SelectionMode",
    "Theme",
    "__version__",
    "load_settings",
    "multi_select",
    "prompt",
    "select",
]
