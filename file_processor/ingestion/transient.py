"""
Transient artifacts - short-lived files for parsers that need a path on disk.

Each artifact gets a fresh uuid4 name, so concurrent extractions never share a
file, and it is removed when its ``with`` block exits, whatever the outcome.
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from file_processor.core.errors import IoError


@dataclass(frozen=True)
class TransientArtifact:
    artifact_id: str
    path: Path


def _remove(path: Path, logger: logging.Logger, strict: bool) -> None:
    try:
        path.unlink()
        logger.debug(f"Transient file removed: {path.name}")
    except FileNotFoundError:
        logger.warning(f"Transient file already gone: {path.name}")
    except OSError as e:
        logger.error(f"Failed to remove transient file {path}: {str(e)}")
        if strict:
            raise IoError("Failed to clean up the temporary file.", details=str(e)) from e


@contextmanager
def transient_artifact(
    payload: bytes,
    directory: Union[str, Path],
    suffix: str = "",
    logger: Optional[logging.Logger] = None
) -> Iterator[TransientArtifact]:
    """
    Write ``payload`` to a uniquely named file and delete it on exit.

    Args:
        payload: Bytes written verbatim to the file
        directory: Directory holding transient files (created if missing)
        suffix: File extension, e.g. ".pdf"
        logger: Optional logger for diagnostics

    Yields:
        TransientArtifact with the generated id and the file path

    Raises:
        IoError: If the file cannot be written, or cannot be removed after a
            successful block. A removal failure after an error in the block is
            logged and the original error propagates.
    """
    logger = logger or logging.getLogger(__name__)

    artifact_id = str(uuid.uuid4())
    directory = Path(directory)
    path = directory / f"{artifact_id}{suffix}"

    created = False
    try:
        directory.mkdir(parents=True, exist_ok=True)
        # "x" refuses to reuse an existing name
        with path.open("xb") as buffer:
            created = True
            buffer.write(payload)
    except OSError as e:
        logger.error(f"Failed to write transient file {path}: {str(e)}")
        if created:
            _remove(path, logger, strict=False)
        raise IoError("Failed to store the uploaded file.", details=str(e)) from e

    logger.debug(f"Transient file created: {path.name} ({len(payload)} bytes)")

    try:
        yield TransientArtifact(artifact_id=artifact_id, path=path)
    except BaseException:
        _remove(path, logger, strict=False)
        raise
    else:
        _remove(path, logger, strict=True)
