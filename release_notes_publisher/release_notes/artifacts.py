"""Reading and writing of pipeline artifacts."""

from pathlib import Path

import structlog

from .exceptions import MissingInputFileError

logger = structlog.get_logger(__name__)


def write_artifact(output_dir: Path, name: str, content: str) -> Path:
    """Write an artifact into the output directory, creating it as needed."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / name
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote artifact", path=str(path), size=len(content))
    return path


def read_artifact(path: Path) -> str:
    """Read a pipeline input file.

    Raises:
        MissingInputFileError: If the file does not exist
    """
    if not path.is_file():
        logger.error("Input file not found", path=str(path))
        raise MissingInputFileError(str(path))
    return path.read_text(encoding="utf-8")
