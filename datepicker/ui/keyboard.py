"""Keyboard input for the picker: key codes, scoped key subscriptions and terminal input."""

import asyncio
import functools
import inspect
import logging
import sys
from collections.abc import Awaitable, Iterable
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Union

logger = logging.getLogger(__name__)

KeyCallback = Union[Callable[[], None], Callable[[], Awaitable[None]]]


class KeyCode(Enum):
    """Keys understood by the navigation state machine."""

    LEFT_ARROW = "left"
    RIGHT_ARROW = "right"
    UP_ARROW = "up"
    DOWN_ARROW = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    SPACE = "space"
    ESCAPE = "escape"
    QUESTION_MARK = "question_mark"
    UNKNOWN = "unknown"

    @classmethod
    def from_key_name(cls, name: str) -> "KeyCode":
        """Map a browser-style key name ("ArrowLeft", " ", "?") to a KeyCode.

        Args:
            name: Key name as reported by a UI toolkit

        Returns:
            Matching KeyCode, UNKNOWN for anything else
        """
        return _KEY_NAMES.get(name, cls.UNKNOWN)


_KEY_NAMES = {
    "ArrowLeft": KeyCode.LEFT_ARROW,
    "ArrowRight": KeyCode.RIGHT_ARROW,
    "ArrowUp": KeyCode.UP_ARROW,
    "ArrowDown": KeyCode.DOWN_ARROW,
    "PageUp": KeyCode.PAGE_UP,
    "PageDown": KeyCode.PAGE_DOWN,
    "Home": KeyCode.HOME,
    "End": KeyCode.END,
    "Enter": KeyCode.ENTER,
    " ": KeyCode.SPACE,
    "Spacebar": KeyCode.SPACE,
    "Escape": KeyCode.ESCAPE,
    "Esc": KeyCode.ESCAPE,
    "?": KeyCode.QUESTION_MARK,
}

# Keys a picker listens to while its calendar is open
NAVIGATION_KEYS = tuple(key for key in KeyCode if key is not KeyCode.UNKNOWN)


class KeyEventSource(Protocol):
    """Anything that delivers key presses to registered callbacks."""

    def register_key_handler(self, key_code: KeyCode, callback: KeyCallback) -> None: ...

    def unregister_key_handler(self, key_code: KeyCode) -> None: ...


class KeySubscription:
    """Key-event delivery that is held only while a picker is open.

    ``acquire`` registers one callback per key on the source and ``release``
    removes them again. Both are idempotent, and leaving the ``with`` block
    always releases, whatever the exit path.

    Args:
        source: Key event source to register with
        callback: Called with the KeyCode of each delivered key
        keys: Keys to subscribe to, defaults to every navigation key
    """

    def __init__(
        self,
        source: KeyEventSource,
        callback: Callable[[KeyCode], Any],
        keys: Iterable[KeyCode] = NAVIGATION_KEYS,
    ) -> None:
        self._source = source
        self._callback = callback
        self._keys = tuple(keys)
        self._active = False

    @property
    def active(self) -> bool:
        """Check if key delivery is currently held."""
        return self._active

    def acquire(self) -> None:
        """Start receiving key events."""
        if self._active:
            return
        for key_code in self._keys:
            self._source.register_key_handler(
                key_code, functools.partial(self._callback, key_code)
            )
        self._active = True
        logger.debug(f"Acquired key events for {len(self._keys)} keys")

    def release(self) -> None:
        """Stop receiving key events."""
        if not self._active:
            return
        for key_code in self._keys:
            self._source.unregister_key_handler(key_code)
        self._active = False
        logger.debug("Released key events")

    def __enter__(self) -> "KeySubscription":
        self.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()


class KeyboardHandler:
    """Reads keys from the terminal and dispatches them to registered callbacks."""

    def __init__(self) -> None:
        """Initialize keyboard handler."""
        self._running = False
        self._key_callbacks: dict[KeyCode, KeyCallback] = {}
        self._raw_key_callback: Optional[Callable[[str], None]] = None

        self._setup_platform_input()

        logger.debug("Keyboard handler initialized")

    def _setup_platform_input(self) -> None:
        """Set up platform-specific keyboard input handling."""
        self._fallback_mode = False
        self._old_settings: Optional[list[Any]] = None

        try:
            if sys.platform == "win32":
                import msvcrt  # noqa: PLC0415

                def _getch_windows() -> str:
                    key = msvcrt.getwch()
                    # Extended keys arrive as a prefix followed by a scan code
                    if key in ("\x00", "\xe0"):
                        return key + msvcrt.getwch()
                    return key

                self._getch = _getch_windows
                self._kbhit = msvcrt.kbhit
            else:

                def _getch() -> str:
                    """Read a single character in raw mode."""
                    return sys.stdin.read(1)

                def _kbhit() -> bool:
                    """Check for available input using select."""
                    import select  # noqa: PLC0415

                    return select.select([sys.stdin], [], [], 0) == ([sys.stdin], [], [])

                self._getch = _getch
                self._kbhit = _kbhit

        except ImportError as e:
            logger.warning(f"Could not import platform-specific keyboard modules: {e}")
            self._setup_fallback_input()

    def _setup_terminal(self) -> None:
        """Set up terminal for raw input mode on Unix systems."""
        if sys.platform != "win32" and not self._fallback_mode:
            try:
                import termios  # noqa: PLC0415

                fd = sys.stdin.fileno()
                self._old_settings = termios.tcgetattr(fd)

                new_settings = termios.tcgetattr(fd)
                new_settings[3] &= ~(termios.ICANON | termios.ECHO)
                new_settings[6][termios.VMIN] = 0
                new_settings[6][termios.VTIME] = 1

                termios.tcsetattr(fd, termios.TCSAFLUSH, new_settings)
                logger.debug("Terminal set to raw input mode with timeout")

            except Exception as e:
                logger.warning(f"Could not set terminal to raw mode: {e}")
                self._setup_fallback_input()

    def _setup_fallback_input(self) -> None:
        """Setup fallback input method if raw mode fails."""
        logger.info("Using fallback input method - press Enter after each key")
        self._fallback_mode = True

        def _getch_fallback() -> str:
            try:
                return input(
                    "Key (left/right/up/down/pgup/pgdn/home/end/enter/esc/?), digits or q: "
                )
            except EOFError:
                return "q"

        def _kbhit_fallback() -> bool:
            return True

        self._getch = _getch_fallback
        self._kbhit = _kbhit_fallback

    def _restore_terminal(self) -> None:
        """Restore terminal settings on Unix systems."""
        if sys.platform != "win32" and self._old_settings:
            try:
                import termios  # noqa: PLC0415

                fd = sys.stdin.fileno()
                termios.tcsetattr(fd, termios.TCSADRAIN, self._old_settings)

                logger.debug("Terminal settings restored")
            except Exception as e:
                logger.warning(f"Could not restore terminal settings: {e}")

    def _parse_key_sequence(self, key_data: str) -> KeyCode:
        """Parse key sequence and return corresponding KeyCode.

        Args:
            key_data: Raw key data from input

        Returns:
            Corresponding KeyCode
        """
        if not key_data:
            return KeyCode.UNKNOWN

        if self._fallback_mode:
            return self._parse_fallback_mode(key_data)
        if len(key_data) == 1:
            return self._parse_single_char(key_data)
        if key_data.startswith(("\x1b[", "\x1bO")):
            return self._parse_escape_sequence(key_data[2:])
        if key_data[0] in ("\x00", "\xe0"):
            return self._parse_windows_sequence(key_data[1:])

        return KeyCode.UNKNOWN

    def _parse_fallback_mode(self, key_data: str) -> KeyCode:
        """Parse a typed key name in fallback mode.

        Args:
            key_data: Line entered by the user

        Returns:
            Corresponding KeyCode
        """
        fallback_mappings = {
            "left": KeyCode.LEFT_ARROW,
            "l": KeyCode.LEFT_ARROW,
            "right": KeyCode.RIGHT_ARROW,
            "r": KeyCode.RIGHT_ARROW,
            "up": KeyCode.UP_ARROW,
            "u": KeyCode.UP_ARROW,
            "down": KeyCode.DOWN_ARROW,
            "d": KeyCode.DOWN_ARROW,
            "pgup": KeyCode.PAGE_UP,
            "pageup": KeyCode.PAGE_UP,
            "pgdn": KeyCode.PAGE_DOWN,
            "pagedown": KeyCode.PAGE_DOWN,
            "home": KeyCode.HOME,
            "h": KeyCode.HOME,
            "end": KeyCode.END,
            "enter": KeyCode.ENTER,
            "space": KeyCode.SPACE,
            "s": KeyCode.SPACE,
            "esc": KeyCode.ESCAPE,
            "escape": KeyCode.ESCAPE,
            "?": KeyCode.QUESTION_MARK,
            "help": KeyCode.QUESTION_MARK,
        }

        return fallback_mappings.get(key_data.lower().strip(), KeyCode.UNKNOWN)

    def _parse_single_char(self, key_data: str) -> KeyCode:
        """Parse a single character input.

        Args:
            key_data: Single character input

        Returns:
            Corresponding KeyCode
        """
        char_mappings = {
            " ": KeyCode.SPACE,
            "\x1b": KeyCode.ESCAPE,
            "\r": KeyCode.ENTER,
            "\n": KeyCode.ENTER,
            "?": KeyCode.QUESTION_MARK,
        }

        return char_mappings.get(key_data, KeyCode.UNKNOWN)

    def _parse_escape_sequence(self, sequence: str) -> KeyCode:
        """Parse an escape sequence.

        Args:
            sequence: The escape sequence without the CSI or SS3 prefix

        Returns:
            Corresponding KeyCode
        """
        escape_mappings = {
            "A": KeyCode.UP_ARROW,
            "B": KeyCode.DOWN_ARROW,
            "C": KeyCode.RIGHT_ARROW,
            "D": KeyCode.LEFT_ARROW,
            "5~": KeyCode.PAGE_UP,
            "6~": KeyCode.PAGE_DOWN,
        }

        # Home and End keys have several representations
        if sequence in {"H", "1~", "7~"}:
            return KeyCode.HOME
        if sequence in {"F", "4~", "8~"}:
            return KeyCode.END

        return escape_mappings.get(sequence, KeyCode.UNKNOWN)

    def _parse_windows_sequence(self, scan_code: str) -> KeyCode:
        """Parse the scan code that follows a Windows extended-key prefix.

        Args:
            scan_code: Character read after the prefix

        Returns:
            Corresponding KeyCode
        """
        windows_mappings = {
            "H": KeyCode.UP_ARROW,
            "P": KeyCode.DOWN_ARROW,
            "M": KeyCode.RIGHT_ARROW,
            "K": KeyCode.LEFT_ARROW,
            "I": KeyCode.PAGE_UP,
            "Q": KeyCode.PAGE_DOWN,
            "G": KeyCode.HOME,
            "O": KeyCode.END,
        }

        return windows_mappings.get(scan_code, KeyCode.UNKNOWN)

    def register_key_handler(self, key_code: KeyCode, callback: KeyCallback) -> None:
        """Register a callback for a specific key.

        Args:
            key_code: Key code to handle
            callback: Function to call when key is pressed
        """
        self._key_callbacks[key_code] = callback
        logger.debug(f"Registered handler for key: {key_code}")

    def register_raw_key_handler(self, callback: Callable[[str], None]) -> None:
        """Register a callback for raw key input.

        Args:
            callback: Function to call with raw key data
        """
        self._raw_key_callback = callback
        logger.debug("Registered raw key handler")

    def unregister_key_handler(self, key_code: KeyCode) -> None:
        """Unregister a key handler.

        Args:
            key_code: Key code to unregister
        """
        if key_code in self._key_callbacks:
            del self._key_callbacks[key_code]
            logger.debug(f"Unregistered handler for key: {key_code}")

    async def start_listening(self) -> None:
        """Start listening for keyboard input."""
        if self._running:
            logger.warning("Keyboard handler already running")
            return

        self._running = True
        self._setup_terminal()

        logger.info("Started keyboard input listening")

        try:
            await self._input_loop()
        finally:
            self._restore_terminal()
            self._running = False
            logger.info("Stopped keyboard input listening")

    def stop_listening(self) -> None:
        """Stop listening for keyboard input."""
        self._running = False
        logger.debug("Keyboard handler stop requested")

    async def _input_loop(self) -> None:
        """Main input loop for capturing keystrokes."""
        while self._running:
            try:
                if self._fallback_mode:
                    if self._kbhit():
                        key_data = self._getch()
                        if key_data:
                            await self._handle_key_input(key_data)
                    await asyncio.sleep(0.1)
                    continue

                if self._kbhit():
                    key_data = await self._read_key_sequence()
                else:
                    await asyncio.sleep(0.05)
                    continue

                if key_data:
                    await self._handle_key_input(key_data)

            except KeyboardInterrupt:
                logger.info("Keyboard interrupt received")
                break
            except Exception:
                logger.exception("Error in keyboard input loop")
                await asyncio.sleep(0.1)

    async def _read_key_sequence(self) -> str:
        """Read a complete key sequence, handling escape sequences properly."""
        try:
            key_data = self._getch()

            if key_data == "\x1b":
                sequence = key_data

                # With VTIME=1, _getch() returns "" once the sequence is exhausted
                while len(sequence) < 8:
                    next_char = self._getch()
                    if not next_char:
                        break
                    sequence += next_char
                    # Sequences end with a letter or ~ (but "[" and "O" are prefixes)
                    if len(sequence) > 2 and (next_char.isalpha() or next_char == "~"):
                        break

                logger.debug(f"Final escape sequence: {sequence!r}")
                return str(sequence)
            return str(key_data)

        except Exception as e:
            logger.debug(f"Error reading key sequence: {e}")
            return ""

    async def _handle_key_input(self, key_data: str) -> None:
        """Handle a key input.

        Args:
            key_data: Raw key data
        """
        try:
            key_code = self._parse_key_sequence(key_data)
            logger.debug(f"Received key_data={key_data!r}, parsed as={key_code}")

            if key_code == KeyCode.UNKNOWN:
                if self._raw_key_callback:
                    self._raw_key_callback(key_data)
                return

            if key_code in self._key_callbacks:
                callback = self._key_callbacks[key_code]
                if inspect.iscoroutinefunction(callback):
                    await callback()
                else:
                    callback()

                logger.debug(f"Handled key: {key_code}")

        except Exception:
            logger.exception("Error handling key input")

    @property
    def is_running(self) -> bool:
        """Check if keyboard handler is currently running."""
        return self._running

    def get_help_text(self) -> str:
        """Get help text for registered key handlers.

        Returns:
            Formatted help text
        """
        # Enter and Space share a description
        help_lines = list(
            dict.fromkeys(
                KEY_DESCRIPTIONS[key_code]
                for key_code in self._key_callbacks
                if key_code in KEY_DESCRIPTIONS
            )
        )

        return " | ".join(help_lines) if help_lines else "No key handlers registered"


# Shown in the keyboard shortcuts panel
KEY_DESCRIPTIONS = {
    KeyCode.RIGHT_ARROW: "Arrow Right: Move focus to the next day.",
    KeyCode.LEFT_ARROW: "Arrow Left: Move focus to the previous day.",
    KeyCode.DOWN_ARROW: "Arrow Down: Move focus to the same day of the next week.",
    KeyCode.UP_ARROW: "Arrow Up: Move focus to the same day of the previous week.",
    KeyCode.ENTER: "Enter/Space: Select the focused date.",
    KeyCode.SPACE: "Enter/Space: Select the focused date.",
    KeyCode.ESCAPE: "Escape: Close the calendar popup.",
    KeyCode.PAGE_UP: "Page Up: Move focus to the same date of the previous month.",
    KeyCode.PAGE_DOWN: "Page Down: Move focus to the same date of the next month.",
    KeyCode.HOME: "Home: Move focus to the first day of the current month.",
    KeyCode.END: "End: Move focus to the last day of the current month.",
    KeyCode.QUESTION_MARK: "Question Mark: Toggle the keyboard shortcuts information.",
}
