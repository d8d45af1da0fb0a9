"""
Base generator interface for all code generation targets.

Defines the error type shared by the generation pipeline and the contract
that implementation generators must fulfil.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import GeneratorConfig
from .templates import TemplateEngine, create_template_engine
from .types import JavaType


class ErrorKind(Enum):
    """Categories of generation failures."""

    UNSUPPORTED = "unsupported"
    MALFORMED_TEXT = "malformed_text"
    NO_CONSTRUCTOR = "no_constructor"
    IO = "io"
    COMPILATION = "compilation"
    ARCHIVE = "archive"


class GenerationError(Exception):
    """Raised when an implementation cannot be generated."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNSUPPORTED):
        super().__init__(message)
        self.message = message
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.message} [{self.kind.value}]"


class CodeGenerator(ABC):
    """Abstract base class for implementation generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine and register this generator's templates."""
        self._template_engine = create_template_engine()
        for name, content in self.get_templates().items():
            self._template_engine.add_template(name, content)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g. '.java')."""
        pass

    def get_templates(self) -> Dict[str, str]:
        """
        Return in-memory templates used by this generator.

        Returns:
            Mapping of template name to template source
        """
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def unit_name(self, target: JavaType) -> str:
        """Name of the unit generated for ``target``."""
        return f"{target.simple_name}{self.config.unit_suffix}"

    @abstractmethod
    def generate(self, target: JavaType) -> str:
        """
        Generate a complete compilation unit for ``target``.

        Args:
            target: Type to implement

        Returns:
            Generated source text

        Raises:
            GenerationError: If the target cannot be implemented
        """
        pass

    def collect_warnings(self, target: JavaType) -> List[str]:
        """
        Report non-fatal issues about the target.

        Returns:
            List of warning messages (empty if no issues)
        """
        return []

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code ending with a single newline
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a registered template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, target: JavaType) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        target: Type to implement

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.collect_warnings(target)
        code = generator.generate(target)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "target": target.name,
            "unit_name": generator.unit_name(target),
            "package": target.package_name,
        }
        return GenerationResult(code, warnings, metadata)

    except GenerationError as e:
        return GenerationResult.error(f"Code generation failed: {e.message}", exception=e)
