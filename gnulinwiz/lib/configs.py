from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..errors import (
    DestinationWriteFailed,
    InvalidSourceName,
    SourceUnreadable,
    WizardError,
)
from .command import CommandRunner

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def destination_for(source_path: PathLike, target_dir: PathLike) -> Path:
    name = Path(source_path).name
    if name in {"", ".", ".."}:
        raise InvalidSourceName(str(source_path))
    return Path(target_dir) / name


def copy_user_file(
    source_path: PathLike,
    target_dir: PathLike,
    *,
    confirm: Optional[Callable[[Path], bool]] = None,
) -> bool:
    """Copy ``source_path`` into ``target_dir`` keeping its file name.

    Returns False when the destination exists and ``confirm`` declined the
    overwrite; nothing is written in that case. ``confirm=None`` overwrites.
    """

    dst = destination_for(source_path, target_dir)
    src = Path(source_path)

    try:
        data = src.read_bytes()
    except OSError as e:
        raise SourceUnreadable(str(src), e.strerror or str(e)) from e

    if dst.exists() and confirm is not None and not confirm(dst):
        return False

    try:
        dst.write_bytes(data)
    except OSError as e:
        raise DestinationWriteFailed(str(dst), e.strerror or str(e)) from e
    return True


def install_user_file(
    source_path: PathLike,
    target_dir: PathLike,
    label: str,
    *,
    confirm: Optional[Callable[[Path], bool]] = None,
) -> int:
    try:
        written = copy_user_file(source_path, target_dir, confirm=confirm)
    except WizardError as e:
        logger.error("%s custom config failed to install: %s", label, e)
        return e.status

    if written:
        logger.info("%s custom config was installed", label)
    else:
        logger.info("%s custom config left unchanged (overwrite declined)", label)
    return 0


def mirror_privileged(
    source_dir: PathLike,
    items: Sequence[str],
    target_root: PathLike,
    runner: CommandRunner,
) -> int:
    """Recursively copy each ``source_dir/item`` to ``target_root/item`` as root.

    ``cp -T`` keeps a re-run from nesting a directory inside its previous copy.
    Stops at the first failing item. Items copied before it are kept.
    """

    for item in items:
        src = str(Path(source_dir) / item)
        dst = str(Path(target_root) / item)
        try:
            runner.run_as_root("cp", ["-r", "-T", src, dst])
        except WizardError as e:
            logger.error("failed to copy '%s' to '%s': %s", src, dst, e)
            return 1
        logger.info("%s created configuration", dst)
    return 0
