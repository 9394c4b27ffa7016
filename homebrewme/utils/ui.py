"""User interface utilities for homebrewme."""

import sys
import time
import threading
import atexit


# Terminal colors for better output
class Colors:
    BOLD = "\033[1m"
    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    RED = "\033[31m"
    DIM = "\033[2m"


class StatusIcons:
    """Status icons for consistent visual feedback across the application"""
    SUCCESS = "✓"
    FAILED = "✗"
    WARNING = "⚠"
    BULLET = "•"


class SectionDivider:
    """Format section headers and dividers for consistent UI"""

    @staticmethod
    def format_header(title, width=60, color=None):
        """Format a main section header

        Args:
            title: The title text
            width: Total width of the header line
            color: Optional color code from Colors class

        Returns:
            Formatted header string
        """
        if color:
            return f"\n{color}{title}{Colors.RESET}\n{'─' * width}"
        return f"\n{Colors.BOLD}{title}{Colors.RESET}\n{'─' * width}"

    @staticmethod
    def format_rule(width=60):
        return f"{Colors.DIM}{'─' * width}{Colors.RESET}"


class ProgressIndicator:
    """Spinner shown while a blocking operation runs.

    The spinner only animates when stdout is a terminal; otherwise it stays
    silent until stop() prints the final message.
    """

    SPINNER_CHARS = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

    # Indicators with a hidden cursor, restored by a single atexit handler
    _active_indicators = set()
    _registry_lock = threading.Lock()
    _atexit_registered = False

    def __init__(self, message, stream=None):
        self.title = message
        self.message = message
        self.stream = stream or sys.stdout
        self.running = False
        self.thread = None
        self._lock = threading.Lock()
        self._cursor_hidden = False
        self._animate_output = hasattr(self.stream, "isatty") and self.stream.isatty()

    def _write(self, text):
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError):
            # Stream closed or not a terminal
            pass

    def _restore_cursor(self):
        if self._cursor_hidden:
            self._write("\033[?25h")
            self._cursor_hidden = False

    def _register(self):
        with ProgressIndicator._registry_lock:
            ProgressIndicator._active_indicators.add(self)
            if not ProgressIndicator._atexit_registered:
                atexit.register(ProgressIndicator._restore_all_cursors)
                ProgressIndicator._atexit_registered = True

    @classmethod
    def _restore_all_cursors(cls):
        with cls._registry_lock:
            indicators = list(cls._active_indicators)
        for indicator in indicators:
            indicator._restore_cursor()

    def start(self):
        """Start the spinner"""
        with self._lock:
            if self.running:
                return
            self.running = True

        if not self._animate_output:
            return

        # Hide cursor for cleaner display, and make sure it comes back on exit
        self._write("\033[?25l")
        self._cursor_hidden = True
        self._register()

        self.thread = threading.Thread(target=self._animate, daemon=True)
        self.thread.start()

    def update(self, message):
        """Change the message next to the spinner"""
        with self._lock:
            self.message = message

    def stop(self, final_message=None, ok=True):
        """Stop the spinner and print a final status line"""
        with self._lock:
            if not self.running:
                return
            self.running = False

        if self.thread:
            self.thread.join()
            self.thread = None

        if self._animate_output:
            self._write("\033[2K\033[0G")  # Clear line and move to beginning
        tag = f"{Colors.GREEN}[OK]{Colors.RESET}" if ok else f"{Colors.YELLOW}[!]{Colors.RESET}"
        self._write(f"{tag} {final_message or self.title}\n")
        self._restore_cursor()
        with ProgressIndicator._registry_lock:
            ProgressIndicator._active_indicators.discard(self)

    def _animate(self):
        index = 0
        while True:
            with self._lock:
                if not self.running:
                    break
                message = self.message

            spinner = self.SPINNER_CHARS[index % len(self.SPINNER_CHARS)]
            self._write(f"\033[2K\033[0G{Colors.CYAN}{spinner}{Colors.RESET} {message}")
            index += 1
            time.sleep(0.2)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.stop(f"{self.title} - Error: {exc_val}", ok=False)
        else:
            self.stop()
        # Don't suppress exceptions
        return False


def progress_wrapper(message, func, *args, **kwargs):
    """Run a function with a spinner, returning its result"""
    progress = ProgressIndicator(message)
    progress.start()
    try:
        result = func(*args, **kwargs)
        progress.stop(message)
        return result
    except Exception as e:
        progress.stop(f"{message} - Error: {e}", ok=False)
        raise
