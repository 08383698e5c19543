"""
A Java source file: one top-level type in a package.
"""

import enum
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .code_block import CodeBlock
from .errors import InvalidNameError
from .generator import EmissionDriver
from .imports import ImportPlan
from .literals import EnumConstant
from .naming import is_valid_name
from .types import ClassName, TypeName

logger = get_logger(__name__)


class JavaFile:
    """An immutable Java file: package, static imports, comment, and a root type."""

    def __init__(self, builder: "JavaFileBuilder"):
        self.package_name = builder.package_name
        self.type_spec = builder.type_spec
        self.file_comment = builder.file_comment.build()
        self.static_imports = tuple(sorted(set(builder.static_imports)))
        self.skip_java_lang_imports = builder.skip_java_lang
        self.indent = builder.indent_unit

    @classmethod
    def builder(cls, package_name: str, type_spec) -> "JavaFileBuilder":
        return JavaFileBuilder(package_name, type_spec)

    def to_builder(self) -> "JavaFileBuilder":
        builder = JavaFileBuilder(self.package_name, self.type_spec)
        builder.file_comment.add_code_block(self.file_comment)
        builder.static_imports.extend(self.static_imports)
        builder.skip_java_lang = self.skip_java_lang_imports
        builder.indent_unit = self.indent
        return builder

    def to_string(self, driver: Optional[EmissionDriver] = None) -> str:
        """Render the whole file with the given driver, or a default one."""
        text, _ = self.emit_with_plan(driver)
        return text

    def emit_with_plan(self, driver: Optional[EmissionDriver] = None) -> Tuple[str, ImportPlan]:
        driver = driver or EmissionDriver()
        return driver.emit_with_plan(
            self.type_spec,
            self.package_name,
            static_imports=self.static_imports,
            file_comment=self.file_comment,
            skip_java_lang_imports=self.skip_java_lang_imports,
            indent=self.indent,
        )

    def relative_path(self) -> Path:
        path = Path(*self.package_name.split(".")) if self.package_name else Path()
        return path / f"{self.type_spec.name}.java"

    def write_to(self, directory: Union[str, Path], driver: Optional[EmissionDriver] = None) -> Path:
        """
        Write the file below directory, creating package directories as needed.

        Returns:
            Path of the written file
        """
        output_path = Path(directory) / self.relative_path()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        text = self.to_string(driver)
        # newline="" keeps the configured line endings untouched
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.debug("Wrote %s", output_path)
        return output_path

    def __str__(self) -> str:
        return self.to_string()


class JavaFileBuilder:
    def __init__(self, package_name: str, type_spec):
        if package_name and not is_valid_name(package_name):
            raise InvalidNameError(package_name)
        self.package_name = package_name or ""
        self.type_spec = type_spec
        self.file_comment = CodeBlock.builder()
        self.static_imports: List[str] = []
        self.skip_java_lang: Optional[bool] = None
        self.indent_unit: Optional[str] = None

    def add_file_comment(self, format_string: str, *args: Any) -> "JavaFileBuilder":
        self.file_comment.add(format_string, *args)
        return self

    def add_static_import(self, type_name: Any, *names: str) -> "JavaFileBuilder":
        """
        Import static members of a class, e.g. `add_static_import(TimeUnit, "SECONDS")`.

        Accepts a ClassName, a Python class, a dotted name, or an enum member
        (in which case no names follow).
        """
        if isinstance(type_name, enum.Enum):
            type_name = EnumConstant.of(type_name)
        if isinstance(type_name, EnumConstant):
            names = names or (type_name.name,)
            type_name = type_name.enum_type
        class_name = TypeName.get(type_name)
        if not isinstance(class_name, ClassName):
            raise ValueError(f"static import requires a class: {class_name}")
        if not names:
            raise ValueError("no names to import statically")
        for name in names:
            if name != "*" and not is_valid_name(name):
                raise InvalidNameError(name)
            self.static_imports.append(f"{class_name.canonical()}.{name}")
        return self

    def skip_java_lang_imports(self, skip: bool) -> "JavaFileBuilder":
        self.skip_java_lang = skip
        return self

    def indent(self, indent: str) -> "JavaFileBuilder":
        self.indent_unit = indent
        return self

    def build(self) -> JavaFile:
        return JavaFile(self)
