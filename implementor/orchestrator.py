"""
Generation orchestration.

Resolves output locations, drives the generator, and for packaged
generation compiles the unit and archives the result. All per-call state
lives in a GenerationContext, so one Implementor can serve many calls.
"""

import shutil
import tempfile
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .codegen.core.config import GeneratorConfig
from .codegen.core.generator import ErrorKind, GenerationError
from .codegen.core.types import JavaType
from .codegen.java.generator import JavaImplGenerator
from .logging_config import get_logger
from .toolchain import ArchiveEntry, Compiler, FileSystem, JarWriter, JavacCompiler

logger = get_logger(__name__)


@dataclass
class GenerationContext:
    """Output location and temporary state of one generation call."""

    target: JavaType
    root: Path
    unit_name: str
    file_extension: str = ".java"
    created_directories: List[Path] = field(default_factory=list)
    temporary_files: List[Path] = field(default_factory=list)

    @property
    def package(self) -> str:
        return self.target.package_name

    @property
    def package_parts(self) -> List[str]:
        return [part for part in self.package.split(".") if part]

    @property
    def directory(self) -> Path:
        return self.root.joinpath(*self.package_parts)

    @property
    def source_path(self) -> Path:
        return self.directory / f"{self.unit_name}{self.file_extension}"

    def archive_name(self, path: Path) -> str:
        """Entry name of ``path`` inside an archive rooted at ``root``."""
        return path.relative_to(self.root).as_posix()


class Implementor:
    """Generates implementation sources and packaged archives."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        generator: Optional[JavaImplGenerator] = None,
        filesystem: Optional[FileSystem] = None,
        compiler: Optional[Compiler] = None,
        archiver: Optional[JarWriter] = None,
    ):
        self.config = config or GeneratorConfig()
        self.generator = generator or JavaImplGenerator(self.config)
        self.filesystem = filesystem or FileSystem()
        self.compiler = compiler or JavacCompiler(
            command=self.config.compiler_command,
            args=self.config.compiler_args,
            classpath=self.config.classpath,
            timeout=self.config.compiler_timeout,
            encoding=self.config.encoding,
        )
        self.archiver = archiver or JarWriter(
            manifest_version=self.config.manifest_version,
            created_by=self.config.created_by,
        )

    def new_context(self, target: JavaType, root: Union[str, Path]) -> GenerationContext:
        return GenerationContext(
            target=target,
            root=Path(root),
            unit_name=self.generator.unit_name(target),
            file_extension=self.generator.file_extension,
        )

    def implement(self, target: JavaType, root: Union[str, Path]) -> Path:
        """
        Generate the implementation source of ``target`` under ``root``.

        The file lands in the package directory of the target, named after
        the generated unit.

        Returns:
            Path of the written source file

        Raises:
            GenerationError: If the target is ineligible or the file cannot be written
        """
        context = self.new_context(target, root)
        self._generate_source(context)
        return context.source_path

    def implement_jar(
        self,
        target: JavaType,
        jar_path: Union[str, Path],
        scratch_dir: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Generate, compile and archive the implementation of ``target``.

        Sources and class files are produced in a scratch directory that is
        cleaned up afterwards, whether packaging succeeded or not.

        Returns:
            Path of the written archive

        Raises:
            GenerationError: If generation, compilation or archiving fails
        """
        jar_path = Path(jar_path)
        owns_scratch = scratch_dir is None
        if owns_scratch:
            try:
                scratch = Path(tempfile.mkdtemp(prefix="implementor-"))
            except OSError as e:
                raise GenerationError(
                    f"Cannot create scratch directory: {e}", ErrorKind.IO
                ) from e
        else:
            scratch = Path(scratch_dir)

        context = self.new_context(target, scratch)
        logger.info("Packaging implementation of %s into %s", target.name, jar_path)
        try:
            source = self._generate_source(context)
            context.temporary_files.append(source)
            artifacts = self._compile(context, source)
            self._archive(context, jar_path, artifacts)
        finally:
            self._cleanup(context, scratch if owns_scratch else None)

        logger.info("Wrote %s", jar_path)
        return jar_path

    # Steps

    def _generate_source(self, context: GenerationContext) -> Path:
        target = context.target
        logger.info("Generating %s for %s", context.unit_name, target.name)
        code = self.generator.generate(target)

        try:
            created = self.filesystem.create_directories(context.directory)
        except OSError as e:
            logger.error("Cannot create directory %s: %s", context.directory, e)
            raise GenerationError(
                f"Unable to create directory {context.directory}: {e}", ErrorKind.IO
            ) from e
        context.created_directories.extend(created)

        path = context.source_path
        try:
            with self.filesystem.open_text(path, self.config.encoding) as writer:
                writer.write(code)
        except OSError as e:
            logger.error("Cannot write %s: %s", path, e)
            raise GenerationError(f"Unable to write source file {path}: {e}", ErrorKind.IO) from e

        logger.debug("Wrote %s", path)
        return path

    def _compile(self, context: GenerationContext, source: Path) -> List[Path]:
        status = self.compiler.compile([source], working_dir=context.root)
        # Record artifacts before failing so partial output is cleaned up too
        artifacts = self._compiled_artifacts(context)
        context.temporary_files.extend(artifacts)
        if status != 0:
            raise GenerationError(
                f"Compilation of {source.name} failed with status {status}",
                ErrorKind.COMPILATION,
            )
        if not artifacts:
            raise GenerationError(
                f"Compiler produced no class file for {context.unit_name}",
                ErrorKind.COMPILATION,
            )
        return artifacts

    def _compiled_artifacts(self, context: GenerationContext) -> List[Path]:
        directory = context.directory
        if not directory.is_dir():
            return []
        main = directory / f"{context.unit_name}.class"
        artifacts = [main] if main.exists() else []
        artifacts.extend(sorted(directory.glob(f"{context.unit_name}$*.class")))
        return artifacts

    def _archive(self, context: GenerationContext, jar_path: Path, artifacts: List[Path]):
        entries: List[ArchiveEntry] = []
        prefix = context.root
        for part in context.package_parts:
            prefix = prefix / part
            entries.append((context.archive_name(prefix) + "/", None))
        try:
            for artifact in artifacts:
                entries.append((context.archive_name(artifact), artifact.read_bytes()))
            self.archiver.write(jar_path, entries)
        except (OSError, zipfile.BadZipFile, ValueError) as e:
            logger.error("Cannot write archive %s: %s", jar_path, e)
            self._safe_remove(jar_path)
            raise GenerationError(f"Unable to create archive {jar_path}: {e}", ErrorKind.ARCHIVE) from e

    def _cleanup(self, context: GenerationContext, scratch: Optional[Path]):
        for path in context.temporary_files:
            self._safe_remove(path)
        # Deepest directories first so each is empty when removed
        for directory in reversed(context.created_directories):
            self._safe_remove(directory)
        if scratch is not None:
            shutil.rmtree(scratch, ignore_errors=True)

    def _safe_remove(self, path: Path):
        """Delete a temporary path; failures do not affect the result."""
        try:
            self.filesystem.delete_if_exists(path)
        except OSError as e:
            logger.debug("Could not remove %s: %s", path, e)


def implement(target: JavaType, root: Union[str, Path], config: Optional[GeneratorConfig] = None) -> Path:
    """Generate the implementation source of ``target`` under ``root``."""
    return Implementor(config).implement(target, root)


def implement_jar(
    target: JavaType, jar_path: Union[str, Path], config: Optional[GeneratorConfig] = None
) -> Path:
    """Generate, compile and archive the implementation of ``target``."""
    return Implementor(config).implement_jar(target, jar_path)
