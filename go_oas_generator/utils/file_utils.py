"""
File utilities for the Go OAS generator.

This module writes the generated Go sources and manages the output
directory they are written to.
"""

import shutil
from pathlib import Path


def write_files_to_disk(files: dict[Path, str]) -> list[Path]:
    """Write generated files to disk.

    Args:
        files: Dictionary mapping file paths to their content.

    Returns:
        Sorted list of the paths written.
    """
    written = []
    for path, content in sorted(files.items()):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written


def clean_output_directory(output_dir: Path) -> None:
    """Empty the output directory, creating it when missing.

    The directory itself is kept so that it may be a mount point or the
    current working directory.

    Args:
        output_dir: Path to the output directory to clean.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    for child in output_dir.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def list_go_files(directory: Path) -> list[Path]:
    """List all .go files in a directory recursively.

    Args:
        directory: Directory to search for Go files.

    Returns:
        Sorted list of paths to .go files.
    """
    if not directory.is_dir():
        return []
    return sorted(directory.rglob("*.go"))
