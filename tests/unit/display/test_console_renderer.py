"""Unit tests for the console renderer."""

import subprocess
from dataclasses import replace
from unittest.mock import patch

import pytest

from datepicker.display.console_renderer import LEGEND, ConsoleRenderer, secure_clear_screen
from datepicker.display.view_model import MonthView


@pytest.fixture
def renderer() -> ConsoleRenderer:
    return ConsoleRenderer(width=40)


class TestRender:
    """Test text rendering."""

    def test_closed_view_shows_only_input(
        self, renderer: ConsoleRenderer, march_view: MonthView
    ) -> None:
        """Test that the grid is hidden while closed."""
        view = replace(march_view, is_open=False)
        output = renderer.render(view)

        assert "[10/03/2026] (wk 11)" in output
        assert "To" in output.splitlines()
        assert "March 2026" not in output

    def test_placeholder_when_input_empty(
        self, renderer: ConsoleRenderer, march_view: MonthView
    ) -> None:
        """Test the placeholder."""
        view = replace(march_view, input_text="", week_annotation=None)
        assert f"[{view.placeholder}]" in renderer.render(view)

    def test_open_view(self, renderer: ConsoleRenderer, march_view: MonthView) -> None:
        """Test the calendar grid and its markers."""
        output = renderer.render(march_view)
        lines = output.splitlines()

        header = next(line for line in lines if "March 2026" in line)
        assert header.startswith(" ")
        assert header.endswith(">")
        assert any(line.startswith(" Wk  Mo  Tu") for line in lines)
        assert "[15]" in output
        assert "<10>" in output
        assert "( 5)" in output
        assert " 20'" in output
        assert LEGEND in lines

    def test_help_panel(self, renderer: ConsoleRenderer, march_view: MonthView) -> None:
        """Test that the help panel replaces the legend."""
        view = replace(march_view, is_help_open=True)
        output = renderer.render(view)

        assert "Calendar Keyboard Shortcuts" in output
        assert output.count("Enter/Space: Select the focused date.") == 1
        assert LEGEND not in output

    def test_legend_can_be_hidden(self, march_view: MonthView) -> None:
        """Test the show_legend option."""
        assert LEGEND not in ConsoleRenderer(show_legend=False).render(march_view)

    def test_minimum_width(self) -> None:
        """Test that the width always fits the grid."""
        assert ConsoleRenderer(width=10).width == 32


class TestDisplay:
    """Test printing."""

    def test_display_without_clear(
        self, renderer: ConsoleRenderer, march_view: MonthView, capsys
    ) -> None:
        """Test printing the rendered view."""
        content = renderer.display(march_view, clear_screen=False)

        assert content == renderer.render(march_view)
        assert "March 2026" in capsys.readouterr().out

    def test_display_with_clear(self, renderer: ConsoleRenderer, march_view: MonthView) -> None:
        """Test that the screen is cleared first."""
        with patch.object(renderer, "clear_screen") as mock_clear, patch("builtins.print"):
            renderer.display(march_view)

        mock_clear.assert_called_once()

    def test_display_render_failure(
        self, renderer: ConsoleRenderer, march_view: MonthView
    ) -> None:
        """Test that rendering errors are logged, not raised."""
        with patch.object(renderer, "render", side_effect=RuntimeError("boom")):
            assert renderer.display(march_view) is None


class TestSecureClearScreen:
    """Test screen clearing."""

    def test_clear_success(self) -> None:
        """Test a successful clear."""
        with patch("subprocess.run") as mock_run:
            assert secure_clear_screen() is True
        mock_run.assert_called_once()

    def test_clear_failure_falls_back_to_newlines(self, capsys) -> None:
        """Test a missing clear command."""
        with patch("subprocess.run", side_effect=FileNotFoundError("clear")):
            assert secure_clear_screen() is False
        assert capsys.readouterr().out.startswith("\n")

    def test_clear_timeout(self) -> None:
        """Test a hanging clear command."""
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("clear", 5)), patch(
            "builtins.print"
        ):
            assert secure_clear_screen() is False
