"""
Emission driver.

Turns a root declaration into a complete Java source file in two passes:
a collect pass that computes the import plan, then a render pass that
writes the body with the plan's short names. The file envelope is
rendered from the `java_file` template.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from ...logging_config import get_logger
from .code_block import CodeBlock
from .code_writer import CodeWriter
from .config import EmitterConfig, get_config_manager
from .errors import ScribeError
from .imports import ImportPlan, ImportResolver
from .templates import TemplateEngine, get_default_template_engine

logger = get_logger(__name__)


class GeneratorError(ScribeError):
    """Base exception for file emission errors."""

    pass


class EmissionDriver:
    """Runs the collect and render passes for one root declaration at a time."""

    def __init__(
        self,
        config: Optional[EmitterConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.config = config or EmitterConfig()
        self.template_engine = template_engine or get_default_template_engine()

    def plan(
        self,
        root,
        package_name: str,
        static_imports: Iterable[str] = (),
        skip_java_lang_imports: Optional[bool] = None,
    ) -> ImportPlan:
        """Run only the collect pass."""
        resolver = ImportResolver(self.config)
        return resolver.resolve(root, package_name, static_imports, skip_java_lang_imports)

    def render_body(self, root, plan: ImportPlan, indent: Optional[str] = None) -> str:
        """Run the render pass against a frozen import plan."""
        writer = CodeWriter(
            indent=indent or self.config.indent,
            imported_types=plan.imported_types,
            static_imports=plan.static_imports,
            always_qualify=plan.always_qualify,
            column_limit=self.config.column_limit,
        )
        writer.push_package(plan.package_name)
        root.emit(writer)
        writer.pop_package()
        return writer.text()

    def emit(self, root, package_name: str, **options) -> str:
        """Emit a complete source file for a root declaration; see emit_with_plan."""
        text, _ = self.emit_with_plan(root, package_name, **options)
        return text

    def emit_with_plan(
        self,
        root,
        package_name: str,
        static_imports: Iterable[str] = (),
        file_comment: Optional[CodeBlock] = None,
        skip_java_lang_imports: Optional[bool] = None,
        indent: Optional[str] = None,
    ) -> Tuple[str, ImportPlan]:
        """
        Emit a complete source file and return it with the import plan it used.

        Args:
            root: Root TypeSpec of the file
            package_name: Package of the file; "" for the default package
            static_imports: Static member imports, `pkg.Type.member` or `pkg.Type.*`
            file_comment: Comment emitted above the package line
            skip_java_lang_imports: Override the configured java.lang handling
            indent: Override the configured indent unit

        Returns:
            Tuple of (file text, newline-terminated; ImportPlan)
        """
        plan = self.plan(root, package_name, static_imports, skip_java_lang_imports)
        body = self.render_body(root, plan, indent)

        if file_comment is not None and not file_comment.is_empty():
            comment = str(file_comment)
        else:
            comment = self.config.file_comment

        text = self.template_engine.render_template(
            "java_file",
            {
                "file_comment": comment,
                "package_name": package_name,
                "imports": plan.import_lines(),
                "static_imports": plan.static_import_lines(),
                "body": body,
            },
        )
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)

        logger.debug(
            "Emitted %s.%s with %d imports and %d static imports",
            package_name or "<default>",
            getattr(root, "name", "?"),
            len(plan.imports),
            len(plan.static_imports),
        )
        return text, plan


class GenerationResult:
    """Container for emission results and metadata."""

    def __init__(self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None):
        """
        Initialize generation result.

        Args:
            code: Emitted source text
            warnings: Any warnings from configuration validation
            metadata: Additional metadata about the emitted file
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(java_file, config: Optional[EmitterConfig] = None) -> GenerationResult:
    """
    Emit a JavaFile with error capture.

    Args:
        java_file: JavaFile to emit
        config: Emitter configuration; defaults apply when omitted

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    config = config or EmitterConfig()
    warnings = get_config_manager().validate_config(config)
    driver = EmissionDriver(config)

    try:
        code, plan = java_file.emit_with_plan(driver)
    except ScribeError as e:
        logger.debug("Emission failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "package": java_file.package_name,
        "type_name": java_file.type_spec.name,
        "import_count": len(plan.imports),
        "static_import_count": len(plan.static_imports),
        "imports": plan.import_lines(),
        "line_count": code.count(config.line_ending),
    }
    return GenerationResult(code, warnings, metadata)
