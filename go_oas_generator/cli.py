#!/usr/bin/env python3
"""Command-line interface for the Go OAS Generator."""

import argparse
import contextlib
import json
import logging
import shutil
import sys
import tempfile
import traceback
from collections.abc import Generator
from pathlib import Path

import yaml

from go_oas_generator.errors import ConfigurationError
from go_oas_generator.generator.template_engine import GoCodeGenerator, GoTemplateEngine
from go_oas_generator.parser.oas_parser import OASParser
from go_oas_generator.utils.file_utils import clean_output_directory, list_go_files, write_files_to_disk

# Exit codes for better error reporting
EXIT_SUCCESS = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_SPEC = 2
EXIT_GENERATION_ERROR = 3
EXIT_CONFIGURATION_ERROR = 4

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate Go response decoding code from an OpenAPI specification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s spec.json
  %(prog)s spec.yaml --output ./client --package-name petstore
  %(prog)s spec.json --verbose --continue-on-error
        """,
    )
    parser.add_argument(
        "spec_file",
        type=Path,
        help="Path to OpenAPI specification file (JSON or YAML)",
        metavar="SPEC_FILE",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("./generated"),
        help="Output directory for generated files (default: %(default)s)",
        dest="output_dir",
    )
    parser.add_argument(
        "--package-name",
        "-p",
        default="client",
        help="Name for the generated Go package (default: %(default)s)",
        dest="package_name",
    )
    parser.add_argument(
        "--template-dir",
        "-t",
        type=Path,
        help="Custom template directory (optional)",
        dest="template_dir",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Skip operations with invalid directives instead of aborting",
        dest="continue_on_error",
    )

    parsed_args = parser.parse_args(args)

    # Validate spec file exists
    if not parsed_args.spec_file.exists():
        parser.error(f"Specification file not found: {parsed_args.spec_file}")

    return parsed_args


def configure_logging(*, verbose: bool) -> None:
    """Route generator log records to stderr."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)


def print_generation_summary(*, output_dir: Path, skipped: list[str]) -> None:
    """Print summary of the Go files now present in the output directory."""
    go_files = list_go_files(output_dir)
    print(f"Generated {len(go_files)} files:")
    for file_path in go_files:
        print(f"  {file_path.relative_to(output_dir)}")
    if skipped:
        print(f"Skipped {len(skipped)} operations: {', '.join(skipped)}")
    print(f"\nGo response code generated successfully in {output_dir}")


@contextlib.contextmanager
def backup_and_clean_output_dir(output_dir: Path) -> Generator[None, None, None]:
    """A context manager to backup and clean the output directory."""
    backup_dir = None
    if output_dir.exists() and any(output_dir.iterdir()):
        backup_dir = Path(tempfile.mkdtemp())
        shutil.copytree(output_dir, backup_dir, dirs_exist_ok=True)

    # Clean output directory before generation
    clean_output_directory(output_dir)

    try:
        yield
    except Exception:
        if backup_dir:
            print(
                "Error: Generation failed. Restoring original content.",
                file=sys.stderr,
            )
            if output_dir.exists():
                shutil.rmtree(output_dir)
            shutil.copytree(backup_dir, output_dir, dirs_exist_ok=True)
        raise
    finally:
        if backup_dir:
            shutil.rmtree(backup_dir)


def generate_go_client_from_spec(
    *,
    spec_file: Path,
    output_dir: Path,
    package_name: str,
    template_dir: Path | None = None,
    continue_on_error: bool = False,
) -> tuple[dict[Path, str], list[str]]:
    """Generate Go response code from an OpenAPI specification file.

    Returns:
        The generated files and the ids of operations skipped due to
        configuration errors.
    """
    parser = OASParser()
    parsed_spec = parser.parse_file(spec_file)

    generator = GoCodeGenerator(GoTemplateEngine(template_dir))
    files = generator.generate_client(
        parsed_spec,
        output_dir,
        package_name,
        continue_on_error=continue_on_error,
    )
    return files, generator.skipped_operations


def main(args: list[str] | None = None) -> int:
    """Generate Go response code from an OpenAPI specification."""
    parsed_args = parse_command_line_args(args)
    configure_logging(verbose=parsed_args.verbose)

    try:
        with backup_and_clean_output_dir(parsed_args.output_dir):
            generated_files, skipped = generate_go_client_from_spec(
                spec_file=parsed_args.spec_file,
                output_dir=parsed_args.output_dir,
                package_name=parsed_args.package_name,
                template_dir=parsed_args.template_dir,
                continue_on_error=parsed_args.continue_on_error,
            )

            write_files_to_disk(generated_files)

            if parsed_args.verbose:
                print_generation_summary(
                    output_dir=parsed_args.output_dir,
                    skipped=skipped,
                )
            else:
                print(f"Go response code generated successfully in {parsed_args.output_dir}")

        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Specification file not found: {parsed_args.spec_file}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: Invalid specification file: {e}", file=sys.stderr)
        return EXIT_INVALID_SPEC
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
