"""End-to-end generation run.

Fetches the catalog, selects objects, describes them and writes the
generated sources below the configured package directory.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .core.config import GeneratorConfig, package_path
from .core.generator import ArtifactWriteError, SObjectGenerator
from .core.schema import ObjectDescription
from .logging_config import get_logger
from .provider import MetadataProvider
from .registry import get_generator
from .selector import ObjectSelector

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


@dataclass
class GenerationSummary:
    """Outcome of a generation run."""

    selected: list[str] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    generated_at: str = ""
    package_dir: Path | None = None

    @property
    def object_count(self) -> int:
        return len(self.selected)

    @property
    def file_count(self) -> int:
        return len(self.files)


def current_timestamp() -> str:
    """Timestamp bound into templates when none is pinned."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def describe_objects(
    provider: MetadataProvider, names: list[str]
) -> list[ObjectDescription]:
    """Fetch descriptions in the given order."""
    logger.info("Retrieving Object descriptions...")
    return [provider.fetch_description(name) for name in names]


def create_package_dir(config: GeneratorConfig) -> Path:
    """
    Create the package directory below the output directory.

    Raises:
        ConfigurationError: If the package name is invalid
        ArtifactWriteError: If the directory cannot be created
    """
    pkg_dir = package_path(config)
    try:
        pkg_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Unable to create %s: %s", pkg_dir, e)
        raise ArtifactWriteError(pkg_dir, f"Unable to create directory: {e}") from e
    return pkg_dir


def generate_sources(
    provider: MetadataProvider,
    config: GeneratorConfig,
    generator: SObjectGenerator | None = None,
) -> GenerationSummary:
    """
    Run the whole generation for a configuration.

    Objects are described and generated in name order; any error
    aborts the run.

    Args:
        provider: Metadata source, not closed by this function
        config: Selection, package and output settings
        generator: Generator to use, created from config.language if omitted

    Returns:
        GenerationSummary listing the selected objects and written files
    """
    # Fail on configuration problems before talking to the provider
    package_path(config)
    selector = ObjectSelector(
        config.includes, config.excludes, config.include_pattern, config.exclude_pattern
    )
    if generator is None:
        generator = get_generator(config.language, config)
    generator.check_templates()

    catalog = provider.fetch_catalog()
    selected = sorted(selector.select(catalog))

    descriptions = describe_objects(provider, selected)
    for description in descriptions:
        generator.validate_description(description)

    pkg_dir = create_package_dir(config)
    generated_at = config.generated_at or current_timestamp()

    logger.info("Generating %s classes...", generator.language_name)
    summary = GenerationSummary(
        selected=selected, generated_at=generated_at, package_dir=pkg_dir
    )
    owners: dict[Path, str] = {}

    for description in descriptions:
        for path in generator.generate(pkg_dir, description, generated_at):
            previous = owners.get(path)
            if previous is None:
                summary.files.append(path)
            else:
                logger.warning(
                    "%s generated for %s overwrites the one generated for %s",
                    path.name,
                    description.name,
                    previous,
                )
            owners[path] = description.name

    logger.info("Successfully generated %d files", summary.file_count)
    return summary
