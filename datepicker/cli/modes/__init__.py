"""Date picker CLI execution modes."""

from .interactive import run_interactive_mode
from .render import run_render_mode

__all__ = ["run_interactive_mode", "run_render_mode"]
