"""
Template engine wrapper for source emission.

The declaration body is produced by the CodeWriter; the file envelope
around it (file comment, package line, import blocks) is a Jinja2
template so it can be replaced without touching the emission passes.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)

from .errors import ScribeError


class TemplateError(ScribeError):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        # in-memory templates take precedence over files on disk
        self._memory = DictLoader({})
        if self.template_dir and self.template_dir.exists():
            loader = ChoiceLoader([self._memory, FileSystemLoader(str(self.template_dir))])
        else:
            loader = self._memory

        # Java text is never HTML-escaped, and whitespace is significant
        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters["line_comment"] = self._line_comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render a template string with the given context."""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._memory.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    # Template filters

    def _line_comment_filter(self, value: str) -> str:
        """Prefix each line with `// `; blank lines get a bare `//`."""
        lines = str(value).rstrip("\n").split("\n")
        return "\n".join(f"// {line}" if line else "//" for line in lines)


JAVA_FILE_TEMPLATE = (
    "{% if file_comment %}{{ file_comment | line_comment }}\n{% endif %}"
    "{% if package_name %}package {{ package_name }};\n\n{% endif %}"
    "{% for name in imports %}import {{ name }};\n{% endfor %}"
    "{% if imports %}\n{% endif %}"
    "{% for member in static_imports %}import static {{ member }};\n{% endfor %}"
    "{% if static_imports %}\n{% endif %}"
    "{{ body }}"
)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine with the built-in file envelope registered."""
    engine = TemplateEngine(template_dir)
    if not engine.template_exists("java_file"):
        engine.add_template("java_file", JAVA_FILE_TEMPLATE)
    return engine


# Default template engine instance
_default_engine = None


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_template_engine()
    return _default_engine
