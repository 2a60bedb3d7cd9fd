"""Logging setup that survives Unicode/emoji characters on any console."""
import logging
import sys

# Configure stdout/stderr for UTF-8 on Windows
if sys.platform == 'win32':
    try:
        if hasattr(sys.stdout, 'reconfigure'):
            sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        if hasattr(sys.stderr, 'reconfigure'):
            sys.stderr.reconfigure(encoding='utf-8', errors='replace')
    except (OSError, ValueError):
        pass

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class SafeStreamHandler(logging.StreamHandler):
    """Stream handler that degrades to ASCII instead of dropping a record."""

    def emit(self, record):
        try:
            msg = self.format(record)
            try:
                self.stream.write(msg + self.terminator)
            except (UnicodeEncodeError, UnicodeDecodeError):
                self.stream.write(msg.encode('ascii', errors='replace').decode('ascii') + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(level: str = "INFO") -> None:
    """Install a single console handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h, SafeStreamHandler) for h in root.handlers):
        return
    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def safe_print(*args, **kwargs):
    """
    Print that handles Unicode characters including emojis.
    Falls back to ASCII replacement to avoid charmap codec errors.
    """
    try:
        print(*args, **kwargs)
    except (UnicodeEncodeError, UnicodeDecodeError):
        safe_args = [str(arg).encode('ascii', errors='replace').decode('ascii') for arg in args]
        print(*safe_args, **kwargs)
