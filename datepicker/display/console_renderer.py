"""Console-based renderer for the month view."""

import logging
import os
import subprocess
from typing import Optional

from ..ui.keyboard import KEY_DESCRIPTIONS
from .view_model import MonthView, RenderedCell

logger = logging.getLogger(__name__)

CELL_WIDTH = 4

LEGEND = "[d] focused | <d> selected | (d) unavailable | d' today"


def secure_clear_screen() -> bool:
    """Clear the console screen without going through a shell.

    Returns:
        True if screen was cleared successfully, False otherwise
    """
    try:
        if os.name == "posix":
            subprocess.run(["clear"], check=True, timeout=5)
        else:
            subprocess.run(["cmd.exe", "/c", "cls"], check=True, timeout=5)
        return True
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.warning(f"Failed to clear screen: {e}")
        print("\n" * 50)
        return False


class ConsoleRenderer:
    """Renders a picker's month view as plain text."""

    def __init__(self, width: int = 40, show_legend: bool = True) -> None:
        """Initialize console renderer.

        Args:
            width: Console display width
            show_legend: Print the cell marker legend under the grid
        """
        self.width = max(width, CELL_WIDTH * 8)
        self.show_legend = show_legend

        logger.debug("Console renderer initialized")

    def render(self, view: MonthView) -> str:
        """Render the input line and, when open, the calendar popup.

        Args:
            view: Month view to draw

        Returns:
            Formatted string for console display
        """
        lines = []

        lines.append("=" * self.width)
        if view.label:
            lines.append(view.label)
        lines.append(self._render_input(view))
        lines.append("=" * self.width)

        if not view.is_open:
            return "\n".join(lines)

        lines.append(self._render_header(view))
        lines.append("-" * self.width)
        lines.append(self._render_day_labels(view))
        for row in view.rows:
            lines.append("".join(self._render_cell(cell) for cell in row))
        lines.append("-" * self.width)

        if view.is_help_open:
            lines.extend(self.render_help())
            lines.append("-" * self.width)
        elif self.show_legend:
            lines.append(LEGEND)
            lines.append("? Keyboard shortcuts | Ctrl+C Quit")

        return "\n".join(lines)

    def _render_input(self, view: MonthView) -> str:
        text = view.input_text or view.placeholder
        annotation = f" {view.week_annotation}" if view.week_annotation else ""
        return f"[{text}]{annotation}"

    def _render_header(self, view: MonthView) -> str:
        previous = "<" if view.previous_enabled else " "
        following = ">" if view.next_enabled else " "
        inner = self.width - 4
        return f"{previous} {view.title.center(inner)} {following}"

    def _render_day_labels(self, view: MonthView) -> str:
        labels = ["Wk", *(label[:2] for label in view.day_labels)]
        return "".join(label.rjust(CELL_WIDTH - 1) + " " for label in labels)

    def _render_cell(self, cell: RenderedCell) -> str:
        """Format one cell as a fixed-width column.

        Focus takes precedence over selection, which takes precedence over
        the disabled marker.
        """
        text = cell.label.rjust(2)
        if cell.date is None:
            return f" {text} "
        if cell.is_focused:
            return f"[{text}]"
        if cell.is_selected:
            return f"<{text}>"
        if cell.disabled:
            return f"({text})"
        if cell.is_today:
            return f" {text}'"
        return f" {text} "

    def render_help(self) -> list[str]:
        """Render the keyboard shortcuts panel.

        Returns:
            Lines of the panel
        """
        lines = ["Calendar Keyboard Shortcuts"]
        lines.extend(f"  {text}" for text in dict.fromkeys(KEY_DESCRIPTIONS.values()))
        return lines

    def clear_screen(self) -> bool:
        """Clear the console screen securely.

        Returns:
            True if screen was cleared successfully, False otherwise
        """
        return secure_clear_screen()

    def display_with_clear(self, content: str) -> None:
        """Display content after clearing screen.

        Args:
            content: Content to display
        """
        self.clear_screen()
        print(content)
        print()

    def display(self, view: MonthView, clear_screen: bool = True) -> Optional[str]:
        """Render and print ``view``.

        Args:
            view: Month view to draw
            clear_screen: Clear the terminal before printing

        Returns:
            The rendered text, or None if rendering failed
        """
        try:
            content = self.render(view)
        except Exception:
            logger.exception("Failed to render month view")
            return None

        if clear_screen:
            self.display_with_clear(content)
        else:
            print(content)
        return content
