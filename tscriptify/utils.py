"""Utility functions for the files around a generated artifact.

This module reads hand-written blocks back out of an existing output file,
makes timestamped backups before overwriting it, writes the new artifact and
resolves ``module:Name`` type references given on the command line.
"""

import importlib
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_config import get_logger

logger = get_logger(__name__)

CUSTOM_CODE_START = "//["
CUSTOM_CODE_START_END = ":]"
CUSTOM_CODE_END = "//[end]"

BACKUP_TIME_FORMAT = "%Y-%m-%dT%H_%M_%S"


def custom_code_start_marker(type_name: str) -> str:
    """Start marker of the custom-code region of a type."""
    return f"{CUSTOM_CODE_START}{type_name}{CUSTOM_CODE_START_END}"


def parse_custom_code(text: str) -> Dict[str, str]:
    """Extract custom-code regions from generated text.

    Args:
        text: Content of a previously generated file.

    Returns:
        Mapping of type name to the text between its markers, with trailing
        whitespace removed.
    """
    result: Dict[str, str] = {}
    current_name = ""
    current_lines = []

    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(CUSTOM_CODE_START) and stripped.endswith(
            CUSTOM_CODE_START_END
        ):
            current_name = stripped[len(CUSTOM_CODE_START) : -len(CUSTOM_CODE_START_END)]
            current_lines = []
        elif stripped == CUSTOM_CODE_END:
            if current_name:
                result[current_name] = "".join(current_lines).rstrip(" \t\r\n")
            current_name = ""
            current_lines = []
        elif current_name:
            current_lines.append(line + "\n")

    return result


def load_custom_code(file_path: str | Path) -> Dict[str, str]:
    """Load custom-code regions from an existing output file.

    Args:
        file_path: Path to the generated file.

    Returns:
        Mapping of type name to custom code; empty when the file does not exist.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        logger.debug(f"No existing output at {file_path}, no custom code to keep")
        return {}

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Error reading {file_path}: {e}", exc_info=True)
        raise

    custom_code = parse_custom_code(text)
    logger.info(f"Loaded {len(custom_code)} custom code block(s) from {file_path}")
    return custom_code


def backup_path_for(file_path: str | Path, extension: str, now: Optional[datetime] = None) -> Path:
    """Timestamped sibling path used for a backup of ``file_path``."""
    now = now or datetime.now()
    # Hundredths of a second without trailing zeros, as in 2024-01-02T15_04_05.5
    hundredths = f"{now.microsecond // 10000:02d}".rstrip("0")
    stamp = now.strftime(BACKUP_TIME_FORMAT)
    if hundredths:
        stamp += f".{hundredths}"
    return Path(f"{file_path}-{stamp}.{extension}")


def backup_file(file_path: str | Path, extension: str = "backup") -> Optional[Path]:
    """Copy an existing file to a timestamped backup next to it.

    Args:
        file_path: File about to be overwritten.
        extension: Extension of the backup file.

    Returns:
        Path of the backup, or None when there was nothing to back up.

    Raises:
        OSError: If the copy fails.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        logger.debug(f"Nothing to back up at {file_path}")
        return None

    target = backup_path_for(file_path, extension)
    try:
        shutil.copyfile(file_path, target)
    except OSError as e:
        logger.error(f"Error backing up {file_path} to {target}: {e}", exc_info=True)
        raise

    logger.info(f"Backed up {file_path} to {target}")
    return target


def write_output(file_path: str | Path, code: str, header: str = "") -> Path:
    """Write a generated artifact.

    Args:
        file_path: Destination file.
        code: Generated code.
        header: Comment placed before the code, followed by a blank line.

    Returns:
        The destination path.

    Raises:
        OSError: If the file cannot be written.
    """
    file_path = Path(file_path)
    content = f"{header}\n\n{code}" if header else code

    try:
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing {file_path}: {e}", exc_info=True)
        raise

    logger.info(f"Wrote {len(content)} characters to {file_path}")
    return file_path


def resolve_type(spec: str) -> Any:
    """Import an object from a ``module:Name`` or ``module.Name`` reference.

    Args:
        spec: Reference such as ``myapp.models:Person`` or ``datetime.date``.
            Nested names after the colon are separated by dots.

    Returns:
        The referenced object.

    Raises:
        ValueError: If the reference is malformed.
        ImportError: If the module cannot be imported.
        AttributeError: If the name does not exist in the module.
    """
    if ":" in spec:
        module_name, _, attr_path = spec.partition(":")
    else:
        module_name, _, attr_path = spec.rpartition(".")

    if not module_name or not attr_path:
        raise ValueError(f"Invalid type reference: {spec!r} (expected module:Name)")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)

    logger.debug(f"Resolved {spec} to {obj!r}")
    return obj
