"""Printing rendered documents with a three-tier fallback chain.

1. Open the document in the system viewer (print verb on Windows, the
   default browser elsewhere).
2. Send it to the print spooler headlessly (lp / lpr).
3. Save a copy to the downloads directory so the user can print it by hand.
"""

import atexit
import functools
import logging
import os
import shutil
import subprocess
import sys
import tempfile
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from ..exceptions import PrintError

logger = logging.getLogger(__name__)

SPOOLER_TIMEOUT_SEC = 60

PrintStrategy = Callable[[Path], bool]


@functools.lru_cache(maxsize=None)
def get_temp_dir() -> Path:
    """Temp directory shared by every call in this process, removed at exit."""
    directory = Path(tempfile.mkdtemp(prefix="clinicdocs_"))
    atexit.register(shutil.rmtree, directory, ignore_errors=True)
    return directory


def write_document(data: bytes, directory: Optional[Union[str, Path]] = None,
                   filename: str = "invoice.pdf") -> Path:
    """Write PDF bytes to directory (the per-process temp dir when omitted)."""
    if directory is None:
        directory = get_temp_dir()
    path = Path(directory) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def document_url(data: bytes, directory: Optional[Union[str, Path]] = None,
                 filename: str = "invoice.pdf") -> str:
    """Write PDF bytes to a file and return a displayable file:// URL."""
    return write_document(data, directory, filename).resolve().as_uri()


def open_in_viewer(path: Path) -> bool:
    """Tier 1: hand the file to the desktop viewer."""
    if sys.platform == "win32":
        os.startfile(str(path), "print")  # type: ignore[attr-defined]
        return True
    return webbrowser.open(path.resolve().as_uri())


def send_to_spooler(path: Path) -> bool:
    """Tier 2: print headlessly through lp or lpr."""
    for command in ("lp", "lpr"):
        executable = shutil.which(command)
        if executable is None:
            continue
        subprocess.run(
            [executable, str(path)],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=SPOOLER_TIMEOUT_SEC,
        )
        return True
    return False


def get_downloads_dir() -> Path:
    """Downloads directory used by the last-resort tier."""
    return Path.home() / "Downloads"


def save_to_downloads(path: Path) -> bool:
    """Tier 3: leave a copy where the user will find it."""
    target_dir = get_downloads_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy2(path, target_dir / path.name)
    logger.info("Saved %s to %s for manual printing", path.name, target_dir)
    return True


DEFAULT_STRATEGIES: Tuple[Tuple[str, PrintStrategy], ...] = (
    ("viewer", open_in_viewer),
    ("spooler", send_to_spooler),
    ("download", save_to_downloads),
)


@dataclass
class PrintOutcome:
    """Which tier handled the document, and the file it used."""

    strategy: str
    path: Path


class PrintDispatcher:
    """Tries print strategies in order until one reports success."""

    def __init__(self, strategies: Optional[Sequence[Tuple[str, PrintStrategy]]] = None):
        self.strategies: List[Tuple[str, PrintStrategy]] = list(strategies or DEFAULT_STRATEGIES)

    def print_document(self, data: bytes, filename: str = "invoice.pdf",
                       directory: Optional[Union[str, Path]] = None) -> PrintOutcome:
        """Print PDF bytes.

        Raises:
            PrintError: If every strategy failed
        """
        path = write_document(data, directory, filename)
        errors = []
        for name, strategy in self.strategies:
            try:
                if strategy(path):
                    logger.info("Printed %s via %s", path.name, name)
                    return PrintOutcome(strategy=name, path=path)
                logger.warning("Print strategy %s was unavailable", name)
                errors.append(f"{name}: unavailable")
            except Exception as e:
                logger.warning("Print strategy %s failed: %s", name, e)
                errors.append(f"{name}: {e}")
        raise PrintError(f"All print strategies failed ({'; '.join(errors)})")


def print_document(data: bytes, filename: str = "invoice.pdf") -> PrintOutcome:
    """Print with the default three-tier chain."""
    return PrintDispatcher().print_document(data, filename=filename)
