"""
External collaborators used by the generation orchestrator.

Filesystem access, the Java compiler invocation and the archive writer.
Each is a small class so tests and callers can substitute their own.
"""

import os
import subprocess
import zipfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Sequence, Tuple

from .logging_config import get_logger

logger = get_logger(__name__)

MANIFEST_NAME = "META-INF/MANIFEST.MF"


class FileSystem:
    """Directory and text-file operations with guaranteed-close writers."""

    def create_directories(self, path: Path) -> List[Path]:
        """
        Create ``path`` and any missing parents.

        Returns:
            The directories that did not exist before, outermost first
        """
        path = Path(path)
        missing = []
        current = path
        while not current.exists():
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent
        missing.reverse()
        path.mkdir(parents=True, exist_ok=True)
        for directory in missing:
            logger.debug("Created directory %s", directory)
        return missing

    @contextmanager
    def open_text(self, path: Path, encoding: str = "utf-8") -> Iterator[IO[str]]:
        """Create or truncate a text file; the writer is closed on every exit path."""
        with open(path, "w", encoding=encoding, newline="\n") as writer:
            yield writer

    def delete_if_exists(self, path: Path) -> bool:
        """
        Delete a file or an empty directory.

        Returns:
            True if something was deleted, False if nothing was there

        Raises:
            OSError: For failures other than the path being absent
        """
        path = Path(path)
        try:
            if path.is_dir() and not path.is_symlink():
                path.rmdir()
            else:
                path.unlink()
        except FileNotFoundError:
            return False
        return True


class Compiler(ABC):
    """Compiles source files into class files next to them."""

    @abstractmethod
    def compile(self, sources: Sequence[Path], working_dir: Optional[Path] = None) -> int:
        """
        Compile sources.

        Returns:
            Exit status, 0 on success
        """
        pass


class JavacCompiler(Compiler):
    """Runs an external ``javac``-compatible compiler as a subprocess."""

    def __init__(
        self,
        command: str = "javac",
        args: Optional[Sequence[str]] = None,
        classpath: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        encoding: str = "utf-8",
    ):
        self.command = command
        self.args = list(args or [])
        self.classpath = list(classpath or [])
        self.timeout = timeout
        self.encoding = encoding

    def build_command(self, sources: Sequence[Path]) -> List[str]:
        """Full command line for compiling ``sources``."""
        command = [self.command, "-encoding", self.encoding]
        if self.classpath:
            command.extend(["-cp", os.pathsep.join(self.classpath)])
        command.extend(self.args)
        command.extend(str(source) for source in sources)
        return command

    def compile(self, sources: Sequence[Path], working_dir: Optional[Path] = None) -> int:
        command = self.build_command(sources)
        logger.debug("Running compiler: %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=str(working_dir) if working_dir else None,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            logger.error("Compiler not found: %s", self.command)
            return 127
        except subprocess.TimeoutExpired:
            logger.error("Compiler timed out after %s seconds", self.timeout)
            return 124
        except OSError as e:
            logger.error("Cannot run compiler %s: %s", self.command, e)
            return 126

        if result.returncode != 0:
            logger.error("Compiler exited with %d: %s", result.returncode, result.stderr.strip())
        return result.returncode


# An archive entry: (name, bytes) for files, (name, None) for directories
ArchiveEntry = Tuple[str, Optional[bytes]]


class JarWriter:
    """Writes zip archives laid out as JAR files."""

    def __init__(self, manifest_version: str = "1.0", created_by: Optional[str] = None):
        self.manifest_version = manifest_version
        self.created_by = created_by

    def manifest(self) -> bytes:
        """Manifest text with CRLF line endings, terminated by an empty line."""
        lines = [f"Manifest-Version: {self.manifest_version}"]
        if self.created_by:
            lines.append(f"Created-By: {self.created_by}")
        return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")

    def write(self, archive_path: Path, entries: Iterable[ArchiveEntry]):
        """
        Write the manifest followed by ``entries``.

        Directory entries get a trailing ``/`` and no content.
        """
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("META-INF/", b"")
            archive.writestr(MANIFEST_NAME, self.manifest())
            for name, content in entries:
                name = name.replace("\\", "/")
                if content is None:
                    if not name.endswith("/"):
                        name += "/"
                    archive.writestr(name, b"")
                else:
                    archive.writestr(name, content)
                logger.debug("Archived %s", name)
