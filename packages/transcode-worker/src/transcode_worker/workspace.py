"""Job-scoped working directory: {root}/{job_id}/input{ext} and {root}/{job_id}/output/."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from hls_queue_shared import input_suffix_for_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """Paths owned by one executing job."""

    root: Path
    input_path: Path
    output_dir: Path


def create_workspace(root: str | Path, job_id: str, source_key: str) -> Workspace:
    """Create {root}/{job_id}/ with an empty output/ dir. Fails if it already exists."""
    job_root = Path(root) / job_id
    job_root.mkdir(parents=True, exist_ok=False)
    output_dir = job_root / "output"
    output_dir.mkdir()
    return Workspace(
        root=job_root,
        input_path=job_root / f"input{input_suffix_for_key(source_key)}",
        output_dir=output_dir,
    )


def remove_workspace(workspace: Workspace) -> None:
    """Delete the workspace tree. Errors are logged, not raised."""
    try:
        shutil.rmtree(workspace.root)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error("workspace: failed to remove %s: %s", workspace.root, e)


@contextmanager
def job_workspace(root: str | Path, job_id: str, source_key: str) -> Iterator[Workspace]:
    """Create the workspace and remove it on every exit path."""
    workspace = create_workspace(root, job_id, source_key)
    try:
        yield workspace
    finally:
        remove_workspace(workspace)
        logger.debug("workspace: removed %s", workspace.root)
