"""Word source backed by the aspell spell checker."""

import logging
import subprocess

from keysmith.core.types import WordSourceError

logger = logging.getLogger(__name__)

ASPELL = "aspell"


def split_words(output: str) -> list[str]:
    """Split spell-checker output into words, dropping contractions."""
    return [w for w in output.split() if "'" not in w]


def aspell_words(language: str = "en", executable: str = ASPELL) -> list[str]:
    """
    Dump the master dictionary of ``language`` with all affixes expanded.

    Runs ``aspell -d LANG dump master`` and pipes it through
    ``aspell -l LANG expand``.

    Args:
        language: Dictionary language code
        executable: Name or path of the aspell binary

    Returns:
        Words in dictionary order, without entries containing an apostrophe

    Raises:
        WordSourceError: if aspell is missing, fails or emits non-UTF-8 output
    """
    dump_cmd = [executable, "-d", language, "dump", "master"]
    expand_cmd = [executable, "-l", language, "expand"]
    logger.debug(
        "Loading word list: %s | %s", " ".join(dump_cmd), " ".join(expand_cmd)
    )

    try:
        dump = subprocess.run(dump_cmd, capture_output=True, check=False)
        if dump.returncode != 0:
            raise WordSourceError(_failure(dump_cmd, dump))

        expanded = subprocess.run(
            expand_cmd, input=dump.stdout, capture_output=True, check=False
        )
        if expanded.returncode != 0:
            raise WordSourceError(_failure(expand_cmd, expanded))
    except OSError as e:
        raise WordSourceError(f"Could not run {executable}: {e}") from e

    try:
        text = expanded.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise WordSourceError(f"aspell produced non UTF-8 output: {e}") from e

    words = split_words(text)
    logger.debug("Loaded %d words for language %r", len(words), language)
    return words


def _failure(cmd: list[str], proc: subprocess.CompletedProcess) -> str:
    stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
    message = f"{' '.join(cmd)} exited with status {proc.returncode}"
    return f"{message}: {stderr}" if stderr else message
