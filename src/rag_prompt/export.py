"""Export of a rendered prompt: file download and clipboard copy.

Both operations run only after a render has produced text and never touch
the configuration. Failures are raised as ``ExportError`` or
``ClipboardError`` so the CLI can report them and exit cleanly.
"""

from __future__ import annotations

import os
import re
import shutil
import subprocess
import sys
from pathlib import Path

from rag_prompt.config import ProjectConfig, RagPromptError, Settings

CLIPBOARD_TIMEOUT = 5

# Characters that cannot appear in a filename on at least one platform.
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


class ExportError(RagPromptError):
    """Raised when the document cannot be written to disk."""


class ClipboardError(RagPromptError):
    """Raised when the document cannot be placed on the system clipboard."""


# ---------------------------------------------------------------------------
# File download
# ---------------------------------------------------------------------------


def download_filename(config: ProjectConfig, settings: Settings | None = None) -> str:
    """Return the ``.md`` filename for *config*.

    The project name is used as the stem, falling back to
    ``settings.default_basename`` when it is empty. Path separators and other
    characters that are invalid in filenames are replaced with ``-``, and
    leading dots are dropped so the file is never hidden (``.`` and ``..``
    fall back to the default stem).
    """
    settings = settings or Settings()
    stem = _UNSAFE_FILENAME_CHARS.sub("-", config.project_name).strip().lstrip(".").strip()
    if not stem:
        stem = settings.default_basename
    return f"{stem}{settings.filename_suffix}"


def write_document(text: str, path: str | Path) -> Path:
    """Write *text* to *path* as UTF-8, creating parent directories.

    Returns:
        The resolved path of the written file.

    Raises:
        ExportError: If the directory or file cannot be written.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the "\n" line endings on every platform.
        with target.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)
    except OSError as exc:
        raise ExportError(f"Could not write {target}: {exc}") from exc
    return target.resolve()


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------


def clipboard_commands() -> list[list[str]]:
    """Candidate clipboard writers for the current platform, in preference order."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if sys.platform.startswith("win"):
        return [["clip"]]
    commands: list[list[str]] = []
    if os.environ.get("WAYLAND_DISPLAY"):
        commands.append(["wl-copy"])
    commands.append(["xclip", "-selection", "clipboard"])
    commands.append(["xsel", "--clipboard", "--input"])
    return commands


def copy_to_clipboard(text: str) -> list[str]:
    """Copy *text* to the system clipboard.

    Pipes the text into the first clipboard tool found on ``PATH``.

    Returns:
        The command that was used.

    Raises:
        ClipboardError: If no tool is installed, or the tool fails or hangs.
    """
    candidates = clipboard_commands()
    for cmd in candidates:
        if shutil.which(cmd[0]) is None:
            continue
        try:
            subprocess.run(
                cmd,
                input=text.encode("utf-8"),
                check=True,
                capture_output=True,
                timeout=CLIPBOARD_TIMEOUT,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
            raise ClipboardError(
                f"{cmd[0]} exited with status {exc.returncode}" + (f": {stderr}" if stderr else "")
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ClipboardError(f"{cmd[0]} timed out after {CLIPBOARD_TIMEOUT}s") from exc
        except OSError as exc:
            raise ClipboardError(f"Could not run {cmd[0]}: {exc}") from exc
        return cmd

    names = ", ".join(cmd[0] for cmd in candidates)
    raise ClipboardError(f"No clipboard tool found (tried: {names})")
