"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and
the per-object generation steps shared by every target.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..logging_config import get_logger
from .config import GeneratorConfig
from .naming import ArtifactKind, NamingPolicy
from .schema import FieldDescriptor, ObjectDescription
from .templates import RenderError, TemplateEngine, create_template_engine
from .types import TypeMapper

logger = get_logger(__name__)


class ArtifactWriteError(Exception):
    """Exception raised when a generated file cannot be written."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        super().__init__(f"Error creating {self.path}: {message}")


class GeneratorUtility:
    """Helper bound into every template as ``utility``."""

    def __init__(
        self,
        type_mapper: TypeMapper,
        naming: NamingPolicy,
        constant_rule: Optional[Callable[[str], str]] = None,
    ):
        self.type_mapper = type_mapper
        self.naming = naming
        # Target-language adjustment applied after the naming policy
        self.constant_rule = constant_rule

    def field_type(self, field: FieldDescriptor) -> str:
        return self.type_mapper.resolve(field)

    def enum_type_name(self, field_name: str) -> str:
        return self.naming.enum_type_name(field_name)

    def enum_constant_name(self, value: str) -> str:
        name = self.naming.enum_constant_name(value)
        return self.constant_rule(name) if self.constant_rule else name

    def not_base_field(self, name: str) -> bool:
        return not self.naming.is_inherited_field(name)

    def own_fields(self, description: ObjectDescription) -> List[FieldDescriptor]:
        return list(self.naming.own_fields(description))

    def uses_type(self, description: ObjectDescription, type_name: str) -> bool:
        """True if one of the object's own fields resolves to type_name."""
        return type_name in self.type_mapper.target_types(description)

    def enum_types(self, description: ObjectDescription) -> List[str]:
        """Sorted enum type names referenced by the object's own fields."""
        return sorted(
            {
                self.naming.enum_type_name(f.name)
                for f in self.naming.own_fields(description)
                if f.is_enumerated
            }
        )


@dataclass(frozen=True)
class EntityBindings:
    """Template bindings of the primary and query-records artifacts."""

    package_name: str
    description: ObjectDescription
    generated_at: str
    utility: GeneratorUtility

    def as_context(self) -> Dict[str, Any]:
        return {
            "packageName": self.package_name,
            "entityDescription": self.description,
            "generatedAt": self.generated_at,
            "utility": self.utility,
        }


@dataclass(frozen=True)
class EnumBindings:
    """Template bindings of a picklist enum artifact."""

    package_name: str
    field: FieldDescriptor
    generated_at: str
    utility: GeneratorUtility

    def as_context(self) -> Dict[str, Any]:
        return {
            "packageName": self.package_name,
            "field": self.field,
            "generatedAt": self.generated_at,
            "utility": self.utility,
        }


class SObjectGenerator(ABC):
    """Abstract base class for all SObject code generators."""

    primary_template = "sobject.j2"
    enum_template = "picklist_enum.j2"
    query_records_template = "query_records.j2"

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig(language=self.language_name)
        self.naming = NamingPolicy(self.config.base_fields)
        self.type_mapper = TypeMapper(self.type_table, self.naming)
        self.utility = GeneratorUtility(
            self.type_mapper, self.naming, self.target_constant_name
        )
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java', '.py')."""
        pass

    @property
    @abstractmethod
    def type_table(self) -> Mapping[str, str]:
        """Return the SOAP type to target type table."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def check_templates(self) -> None:
        """
        Make sure all artifact templates can be loaded.

        Raises:
            RenderError: For the first missing template
        """
        for name in (self.primary_template, self.enum_template, self.query_records_template):
            if not self.template_engine.template_exists(name):
                raise RenderError(name, "template not found")

    def target_constant_name(self, name: str) -> str:
        """
        Adjust a sanitized enum constant name for the target language.

        Subclasses override this for names the language reserves.
        """
        return name

    def validate_description(self, description: ObjectDescription) -> None:
        """
        Resolve every field type and enum constant of an object.

        Raises:
            UnsupportedFieldType: For the first field without a mapping
            RenderError: If two picklist values of a field share a constant name
        """
        for field in description.fields:
            self.type_mapper.resolve(field)
            if field.is_enumerated:
                self.check_enum_constants(description, field)

    def check_enum_constants(
        self, description: ObjectDescription, field: FieldDescriptor
    ) -> None:
        """Make sure every picklist value of a field gets its own constant."""
        seen: Dict[str, str] = {}
        for picklist_value in field.picklist_values:
            name = self.utility.enum_constant_name(picklist_value.value)
            previous = seen.get(name)
            if previous is not None:
                raise RenderError(
                    self.enum_template,
                    f"values {previous!r} and {picklist_value.value!r} of "
                    f"{description.name}.{field.name} both map to constant {name}",
                )
            seen[name] = picklist_value.value

    def generate(
        self, pkg_dir: Path, description: ObjectDescription, generated_at: str
    ) -> List[Path]:
        """
        Generate all artifacts of one object.

        Writes the primary class, one enum per picklist field and the
        query-records wrapper. The first failure aborts the remaining steps.

        Args:
            pkg_dir: Package directory receiving the files
            description: Object to generate
            generated_at: Timestamp bound into every template

        Returns:
            Paths of the written files, in generation order
        """
        self.validate_description(description)

        package_name = self.config.package_name
        entity = EntityBindings(package_name, description, generated_at, self.utility)
        written = []

        written.append(
            self._emit(
                pkg_dir,
                self.naming.artifact_file_name(description.name, ArtifactKind.PRIMARY),
                self.primary_template,
                entity.as_context(),
            )
        )

        for field in description.enumerated_fields():
            bindings = EnumBindings(package_name, field, generated_at, self.utility)
            written.append(
                self._emit(
                    pkg_dir,
                    self.naming.artifact_file_name(
                        description.name, ArtifactKind.ENUM, field.name
                    ),
                    self.enum_template,
                    bindings.as_context(),
                )
            )

        written.append(
            self._emit(
                pkg_dir,
                self.naming.artifact_file_name(description.name, ArtifactKind.QUERY_RECORDS),
                self.query_records_template,
                entity.as_context(),
            )
        )

        logger.debug("Generated %d files for %s", len(written), description.name)
        return written

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template and apply formatting."""
        return self.format_code(self.template_engine.render_template(template_name, context))

    def _emit(
        self, pkg_dir: Path, base_name: str, template_name: str, context: Dict[str, Any]
    ) -> Path:
        """Render one artifact and write it to ``pkg_dir``."""
        path = Path(pkg_dir) / f"{base_name}{self.file_extension}"
        content = self.render_template(template_name, context)
        write_artifact(path, content)
        return path

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, allows at most two consecutive blank
        lines and ends the file with a single newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


def write_artifact(path: Path, content: str) -> None:
    """
    Write generated content to a file.

    Raises:
        ArtifactWriteError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        logger.error("Error creating %s: %s", path, e)
        raise ArtifactWriteError(path, str(e)) from e
