"""Output writing and PDF compilation.

Writes the consolidated markdown and LaTeX files and drives the
external tectonic compiler through a subprocess.
"""

import logging
import shutil
import subprocess
from pathlib import Path

from ..errors import CompilerError

logger = logging.getLogger(__name__)

TECTONIC = "tectonic"

# Name tectonic gives the output of a document read from stdin.
STDIN_JOB_NAME = "texput"


class OutputService:
    """Service for writing plain text artifacts."""

    def write_text(self, extension: str, title: str, data: str, destination: Path) -> Path:
        """Write data to ``<destination>/<title><extension>``.

        The destination directory is created if needed and an existing
        file is truncated.

        Args:
            extension: File extension including the dot, e.g. ``.md``.
            title: The book title, used as file stem.
            data: Text to write.
            destination: Output directory.

        Returns:
            The path of the written file.
        """
        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        path = destination / f"{title}{extension}"
        path.write_text(data, encoding="utf-8")
        logger.info("Wrote %s", path)
        return path


class TectonicCompiler:
    """Compiles a LaTeX document to PDF with the tectonic executable."""

    def __init__(self, executable: str = TECTONIC) -> None:
        self._executable = executable

    def find_executable(self) -> str:
        """Locate the compiler on PATH.

        Raises:
            CompilerError: If the executable cannot be found.
        """
        path = shutil.which(self._executable)
        if path is None:
            raise CompilerError(f"Cannot find {self._executable!r} on PATH")
        return path

    def compile(self, document: str, destination: Path, title: str) -> Path:
        """Compile a document fed on stdin into ``<destination>/<title>.pdf``.

        The compiler runs inside the destination so the relocated
        ``images/`` paths resolve. The call blocks until it exits.

        Raises:
            CompilerError: If the compiler is missing or exits non-zero.
        """
        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        executable = self.find_executable()

        logger.info("Writing PDF with Tectonic...")
        result = subprocess.run(
            [executable, "--outfmt=pdf", "--outdir", str(destination), "-"],
            input=document.encode("utf-8"),
            cwd=destination,
        )
        if result.returncode != 0:
            raise CompilerError(
                f"{self._executable} exited with status {result.returncode}"
            )

        produced = destination / f"{STDIN_JOB_NAME}.pdf"
        pdf_path = destination / f"{title}.pdf"
        if not produced.exists():
            raise CompilerError(f"{self._executable} did not produce {produced}")
        produced.replace(pdf_path)
        logger.info("Wrote %s", pdf_path)
        return pdf_path
