"""
Unified logging for the content compiler.

Console output plus an optional log file. Warnings and errors are tracked
for an end-of-run summary.

Usage:
    from ase_compiler.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    init_logging(Path("content.log"))   # optional, tools only

    log("Packing texture atlas...")     # Info - section headers, major points
    logWarning("tag has no frames")     # Output may be wrong
    logError("could not decode file")   # Output is broken
    logDebug("blended cel on layer 3")  # Log file only

    print_summary()

Library code (processors, codec) never opens a log file by itself. Until
init_logging() is called, console messages are still printed and debug
messages are dropped.
"""

import sys
import atexit
from pathlib import Path
from datetime import datetime
from typing import List, Optional, TextIO, Tuple


class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


_log_file: Optional[TextIO] = None
_log_path: Optional[Path] = None
_warnings: List[str] = []
_errors: List[str] = []
_atexit_registered = False

_RULE = "=" * 70


def _timestamp() -> str:
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def _paint(text: str, *codes: str, stream: TextIO = None) -> str:
    """Wrap text in ANSI codes when the target stream is a terminal."""
    stream = stream or sys.stdout
    if not getattr(stream, 'isatty', lambda: False)():
        return text
    return ''.join(codes) + text + Colors.RESET


def _write_to_file(msg: str, end: str = "\n"):
    if _log_file is None:
        return
    try:
        _log_file.write(msg + end)
        _log_file.flush()
    except OSError:
        pass


def init_logging(log_path: Path = None):
    """
    Start writing log output to a file, in addition to the console.

    Calling again while a file is open does nothing.

    Args:
        log_path: Log file path. Defaults to ./ase_compiler.log
    """
    global _log_file, _log_path, _atexit_registered

    if _log_file is not None:
        return

    reset_counts()
    _log_path = Path(log_path) if log_path is not None else Path.cwd() / "ase_compiler.log"
    _log_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        _log_file = open(_log_path, 'w', encoding='utf-8')
    except OSError as e:
        print(f"Warning: Could not open log file {_log_path}: {e}", file=sys.stderr)
        _log_file = None
        return

    _write_to_file(f"Run started: {_timestamp()}")
    _write_to_file(_RULE + "\n")

    if not _atexit_registered:
        atexit.register(close_logging)
        _atexit_registered = True


def close_logging():
    """Finish and close the log file, if one is open."""
    global _log_file

    if _log_file is None:
        return

    _write_to_file(f"\n{_RULE}")
    _write_to_file(f"Run finished: {_timestamp()}")
    try:
        _log_file.close()
    except OSError:
        pass
    _log_file = None


def reset_counts():
    """Forget tracked warnings and errors."""
    _warnings.clear()
    _errors.clear()


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def _summary_section(label: str, items: List[str], color: str):
    header = f"{label} ({len(items)}):"
    print("\n" + _paint(header, color, Colors.BOLD))
    for item in items:
        print(_paint(f"  - {item}", color))
    _write_to_file("\n" + header)
    for item in items:
        _write_to_file(f"  - {item}")


def print_summary():
    """Print tracked errors and warnings followed by a one-line count."""
    log("\n" + _RULE)
    log("SUMMARY")
    log(_RULE)

    if _errors:
        _summary_section("Errors", _errors, Colors.RED)
    if _warnings:
        _summary_section("Warnings", _warnings, Colors.YELLOW)

    errors = (_paint(f"{len(_errors)} Error(s)", Colors.RED, Colors.BOLD) if _errors
              else _paint("0 Errors", Colors.GREEN))
    warnings = (_paint(f"{len(_warnings)} Warning(s)", Colors.YELLOW, Colors.BOLD) if _warnings
                else _paint("0 Warnings", Colors.GREEN))
    print(f"\n{errors} | {warnings}")
    _write_to_file(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)")


def log(msg: str = "", end: str = "\n"):
    """Info message: console and log file."""
    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """Warning: output may be wrong. Shown in yellow and tracked for the summary."""
    formatted = f"Warning: {msg}"
    print(_paint(formatted, Colors.YELLOW), end=end)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """Error: output is broken. Shown in red on stderr and tracked for the summary."""
    formatted = f"ERROR: {msg}"
    print(_paint(formatted, Colors.RED, stream=sys.stderr), end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """Debug detail, written to the log file only. Dropped when no file is open."""
    if _log_file is None:
        return
    _write_to_file(f"[DEBUG] {msg}", end)
