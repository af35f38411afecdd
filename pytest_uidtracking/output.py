from pathlib import Path
from typing import Iterable

from pytest_uidtracking.config import TrackingSettings

MAVEN_MARKER = "pom.xml"
MAVEN_OUTPUT_DIR = "target"
GRADLE_EXTENSIONS = (".gradle", ".gradle.kts")
GRADLE_OUTPUT_DIR = "build"


def contains_files_with_extensions(directory: Path, *extensions: str) -> bool:
    """Check the direct children of ``directory`` only."""
    return any(
        path.is_file() and path.name.endswith(extensions)
        for path in directory.iterdir()
    )


def get_output_dir(settings: TrackingSettings, cwd: Path) -> Path:
    if settings.output_dir:
        output_dir = cwd / settings.output_dir
    elif (cwd / MAVEN_MARKER).exists():
        output_dir = cwd / MAVEN_OUTPUT_DIR
    elif contains_files_with_extensions(cwd, *GRADLE_EXTENSIONS):
        output_dir = cwd / GRADLE_OUTPUT_DIR
    else:
        output_dir = cwd

    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def get_output_file(settings: TrackingSettings, cwd: Path) -> Path:
    output_file = get_output_dir(settings, cwd) / settings.output_file

    if output_file.exists():
        output_file.unlink()
    output_file.touch()

    return output_file


def write_unique_ids(output_file: Path, unique_ids: Iterable[str]) -> None:
    with output_file.open("w", encoding="utf-8", newline="\n") as f:
        for unique_id in unique_ids:
            f.write(f"{unique_id}\n")
