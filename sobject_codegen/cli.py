"""
Command-line interface for SObject code generation.

Provides the ``generate`` and ``list-languages`` commands.
"""

import argparse
import os
import sys
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .core.config import ConfigurationError, GeneratorConfig, load_config
from .core.generator import ArtifactWriteError
from .core.templates import RenderError
from .core.types import UnsupportedFieldType
from .logging_config import get_logger, setup_logging
from .pipeline import GenerationSummary, generate_sources
from .provider import AuthenticationError, ProviderError, create_provider
from .registry import RegistryError, get_language_info, get_registry, list_supported_languages

logger = get_logger(__name__)

# Initialize rich console
console = Console()

# Environment variables used as defaults for Salesforce credentials
CREDENTIAL_ENV = {
    "client_id": "SALESFORCE_CLIENT_ID",
    "client_secret": "SALESFORCE_CLIENT_SECRET",
    "username": "SALESFORCE_USERNAME",
    "password": "SALESFORCE_PASSWORD",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sobject-codegen",
        description="Generate typed DTO sources from Salesforce SObject metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sobject-codegen generate --config salesforce.json
  sobject-codegen generate -l python --package-name crm.dto --include Account --include Contact
  sobject-codegen generate --metadata-file describe.json --exclude-pattern '.*History'
  sobject-codegen list-languages
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Shortcut for --log-level INFO"
    )

    subparsers = parser.add_subparsers(dest="command")
    create_generate_subparser(subparsers)

    languages_parser = subparsers.add_parser(
        "list-languages", help="List supported target languages"
    )
    languages_parser.set_defaults(func=_handle_list_languages)

    return parser


def create_generate_subparser(subparsers) -> argparse.ArgumentParser:
    """Create the ``generate`` subcommand parser."""
    parser = subparsers.add_parser(
        "generate",
        help="Generate sources for SObjects",
        description="Generate DTO sources from Salesforce SObject descriptions",
    )

    # Core generation options
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument("--language", "-l", help="Target language (default: java)")
    parser.add_argument("--package-name", "--package", help="Package name for generated sources")
    parser.add_argument("--output-dir", "-o", help="Root directory for generated sources")
    parser.add_argument(
        "--timestamp",
        dest="generated_at",
        help="Fixed generation timestamp for reproducible output",
    )

    # Object selection
    selection_group = parser.add_argument_group("object selection")
    selection_group.add_argument(
        "--include", action="append", dest="includes", metavar="NAME",
        help="Generate this object (repeatable)",
    )
    selection_group.add_argument(
        "--exclude", action="append", dest="excludes", metavar="NAME",
        help="Do not generate this object (repeatable)",
    )
    selection_group.add_argument(
        "--include-pattern", metavar="REGEX", help="Generate objects fully matching REGEX"
    )
    selection_group.add_argument(
        "--exclude-pattern", metavar="REGEX", help="Skip objects fully matching REGEX"
    )

    # Metadata source
    source_group = parser.add_argument_group("metadata source")
    source_group.add_argument(
        "--metadata-file", metavar="FILE",
        help="Read describe payloads from a JSON dump instead of Salesforce",
    )
    source_group.add_argument("--client-id", help="Connected app client id")
    source_group.add_argument("--client-secret", help="Connected app client secret")
    source_group.add_argument("--username", help="Salesforce user name")
    source_group.add_argument("--password", help="Salesforce password (with security token)")
    source_group.add_argument("--api-version", dest="version", help="REST API version")
    source_group.add_argument("--login-url", help="Login host URL")
    source_group.add_argument("--timeout", type=float, help="Request timeout in seconds")

    parser.set_defaults(func=_handle_generate)
    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments, a config file and the environment."""
    config_dict = {
        key: getattr(args, key, None)
        for key in (
            "package_name",
            "output_dir",
            "generated_at",
            "include_pattern",
            "exclude_pattern",
            "metadata_file",
            "client_id",
            "client_secret",
            "username",
            "password",
            "version",
            "login_url",
            "timeout",
        )
    }

    # Repeatable options only override the file when given
    if args.includes:
        config_dict["includes"] = args.includes
    if args.excludes:
        config_dict["excludes"] = args.excludes

    # Aliases pick up the defaults of their primary language
    language = get_registry().resolve_language(args.language) if args.language else None
    config = load_config(language, config_dict, args.config)

    for key, env_name in CREDENTIAL_ENV.items():
        if not getattr(config, key) and os.environ.get(env_name):
            setattr(config, key, os.environ[env_name])

    return config


def _handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    try:
        config = build_config(args)
        generator = get_registry().create_generator(config.language, config)

        with create_provider(config) as provider:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task(
                    f"[green]Generating {generator.language_name} sources...", total=None
                )
                summary = generate_sources(provider, config, generator)

    except ConfigurationError as e:
        console.print(f"[red]✗ Configuration error:[/red] {escape(str(e))}")
        return 1
    except RegistryError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        console.print(f"[dim]Supported languages: {', '.join(list_supported_languages())}[/dim]")
        return 1
    except AuthenticationError as e:
        console.print(f"[red]✗ Authentication failed:[/red] {escape(str(e))}")
        return 1
    except ProviderError as e:
        console.print(f"[red]✗ Metadata error:[/red] {escape(str(e))}")
        return 1
    except UnsupportedFieldType as e:
        console.print(f"[red]✗ Unsupported field type:[/red] {escape(str(e))}")
        return 1
    except RenderError as e:
        console.print(f"[red]✗ Template error:[/red] {escape(str(e))}")
        return 1
    except ArtifactWriteError as e:
        console.print(f"[red]✗ Write error:[/red] {escape(str(e))}")
        return 1

    _print_summary(summary)
    return 0


def _print_summary(summary: GenerationSummary) -> None:
    """Print the generated files as a table."""
    if not summary.selected:
        console.print("[yellow]⚠️  No matching objects, nothing generated[/yellow]")
        return

    table = Table(
        title="📄 Generated Sources",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("File", style="green")

    for path in summary.files:
        table.add_row(str(path))

    console.print(table)
    console.print(
        f"[green]✓[/green] Generated {summary.file_count} files for "
        f"{summary.object_count} objects in [cyan]{summary.package_dir}[/cyan]"
    )


def _handle_list_languages(args: argparse.Namespace) -> int:
    """List supported languages with details."""
    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Default Package", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            f"🔧 {language}", info["file_extension"], info["default_package"], aliases
        )

    console.print()
    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] sobject-codegen generate --language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command-line interface."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("INFO" if args.verbose else args.log_level, args.log_file)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    logger.debug("Running command %s", args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
