from __future__ import annotations

import argparse
import logging
import shutil
from pathlib import Path
from typing import Optional, Sequence, Union

from . import config
from .errors import DeployError
from .log import configure_logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def copy_tree(source: PathLike, target: PathLike) -> int:
    """Recursively copy `source` into `target`, returning the number of files copied.

    Missing directories are created and existing files are overwritten, so
    running it twice leaves the same tree behind.
    """
    source = Path(source)
    target = Path(target)
    if not source.exists():
        raise DeployError(f"Source directory does not exist: {source}")
    if not source.is_dir():
        raise DeployError(f"Source is not a directory: {source}")

    resolved_source = source.resolve()
    resolved_target = target.resolve()
    if resolved_target == resolved_source or resolved_source in resolved_target.parents:
        raise DeployError(f"Target {target} lies inside source {source}")

    try:
        return _copy_dir(source, target)
    except OSError as exc:
        raise DeployError(f"Could not copy {source} to {target}: {exc}") from exc


def _copy_dir(source: Path, target: Path) -> int:
    target.mkdir(parents=True, exist_ok=True)

    copied = 0
    for entry in sorted(source.iterdir()):
        dest = target / entry.name
        if entry.is_dir():
            copied += _copy_dir(entry, dest)
        else:
            shutil.copy2(entry, dest)
            copied += 1
    return copied


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="abcalc-deploy",
        description="Copy the static build output into the docs directory for hosting.",
    )
    ap.add_argument("--source", default=config.DEPLOY_SOURCE, help="Build output directory")
    ap.add_argument("--target", default=config.DEPLOY_TARGET, help="Directory served as static site")
    ap.add_argument("--log-level", default=None, help="Override ABCALC_LOG_LEVEL")
    args = ap.parse_args(argv)

    configure_logging(args.log_level)

    try:
        copied = copy_tree(args.source, args.target)
    except DeployError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Copied %d files from %s to %s", copied, args.source, args.target)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
