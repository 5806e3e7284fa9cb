"""Loading and saving group snapshots as JSON files."""

import logging
from pathlib import Path

from pydantic import ValidationError

from .exceptions import LedgerFileError
from .models import Group

logger = logging.getLogger(__name__)


def load_group(path: Path) -> Group:
    """
    Load a group snapshot from a JSON file.

    Args:
        path: Path to the ledger file

    Returns:
        The parsed Group

    Raises:
        LedgerFileError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LedgerFileError(str(path), f"Could not read ledger {path}: {e}") from e

    try:
        group = Group.model_validate_json(raw)
    except ValidationError as e:
        raise LedgerFileError(str(path), f"Invalid ledger {path}:\n{e}") from e

    logger.info(
        f"Loaded group '{group.name}' from {path}: "
        f"{len(group.members)} members, {len(group.transactions)} transactions"
    )
    return group


def dump_group(group: Group, path: Path) -> None:
    """Write a group snapshot to a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(group.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"Saved group '{group.name}' to {path}")
