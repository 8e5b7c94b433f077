import logging
import subprocess  # nosec B404
from pathlib import Path

from ..config import GIT_BIN, Patch, Revision
from ..errors import CheckoutError, CommandError, PatchError

logger = logging.getLogger(__name__)


def _run_git(
    repo_path: Path,
    args: list[str],
    *,
    error_cls: type[CommandError],
    stdin: str | None = None,
) -> None:
    cmd = [GIT_BIN, "-C", str(repo_path), *args]
    logger.debug("Running %s", " ".join(cmd))
    try:
        completed = subprocess.run(  # nosec B603 B607
            cmd,
            input=stdin,
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise error_cls(f"git {' '.join(args)} could not start: {e}", command=cmd) from e
    if completed.returncode == 0:
        return
    stderr = (completed.stderr or completed.stdout or "").strip()
    details = f": {stderr}" if stderr else ""
    raise error_cls(
        f"git {' '.join(args)} failed (code {completed.returncode}){details}",
        command=cmd,
        returncode=completed.returncode,
    )


def checkout_revision(revision: Revision, repo_path: Path) -> None:
    """Discard local modifications, then switch the working tree to `revision`."""
    _run_git(repo_path, ["restore", "."], error_cls=CheckoutError)
    _run_git(repo_path, ["checkout", revision.commit], error_cls=CheckoutError)


def apply_patch(patch: Patch, repo_path: Path) -> None:
    """Pipe `patch` into `git apply` against the current working tree."""
    _run_git(repo_path, ["apply"], error_cls=PatchError, stdin=patch.text)
