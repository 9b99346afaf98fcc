"""Publish the price database as a git commit pushed to a remote."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from pricetracker.ingest.models import TrackingStats
from pricetracker.store.layout import DatabaseLayout, write_json
from pricetracker.utils.dates import iso_timestamp_now

logger = logging.getLogger(__name__)

REMOTE_NAME = "origin"


class PublishError(RuntimeError):
    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        super().__init__(f"{' '.join(command)} failed ({returncode}): {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitPublisher:
    def __init__(
        self,
        layout: DatabaseLayout,
        *,
        remote_url: str | None,
        branch: str = "master",
        author_name: str = "pricetracker",
        author_email: str = "pricetracker@localhost",
    ) -> None:
        self.layout = layout
        self.remote_url = remote_url
        self.branch = branch
        self.author_name = author_name
        self.author_email = author_email

    @property
    def enabled(self) -> bool:
        return bool(self.remote_url)

    def publish(self, stats: TrackingStats) -> bool:
        """Commit and push database changes. Returns ``False`` when nothing was published."""
        if not self.enabled:
            return False
        logger.info("Syncing with repo...")
        self._git("config", "hub.protocol", "https")
        self._switch_branch()
        self._git("add", "-A", "--", ".")
        if self.staged_changes() == 0:
            logger.info("No changes in %s; skipping commit", self.layout.root)
            return False
        write_json(self.layout.tracking_stats_path, stats.to_dict(), pretty=True)
        self._git("add", "--", self.layout.tracking_stats_path.name)
        message = f"Update - {iso_timestamp_now()}"
        self._git(
            "-c", f"user.name={self.author_name}",
            "-c", f"user.email={self.author_email}",
            "commit", "-m", message,
        )
        self._replace_remote()
        self._git("push", "-u", REMOTE_NAME, self.branch)
        logger.info("Changes committed to repo with message %s", message)
        return True

    def staged_changes(self) -> int:
        output = self._git("diff", "--cached", "--name-only", "--", ".")
        return len([line for line in output.splitlines() if line.strip()])

    def _switch_branch(self) -> None:
        current = self._git("symbolic-ref", "--quiet", "--short", "HEAD", check=False).strip()
        if current == self.branch:
            return
        if self._succeeds("rev-parse", "--verify", "--quiet", f"refs/heads/{self.branch}"):
            self._git("checkout", self.branch)
        elif self._succeeds("rev-parse", "--verify", "--quiet", "HEAD"):
            self._git("checkout", "-b", self.branch)
        else:
            self._git("symbolic-ref", "HEAD", f"refs/heads/{self.branch}")

    def _replace_remote(self) -> None:
        remotes = self._git("remote").split()
        if REMOTE_NAME in remotes:
            self._git("remote", "remove", REMOTE_NAME)
        self._git("remote", "add", REMOTE_NAME, str(self.remote_url))

    def _succeeds(self, *args: str) -> bool:
        return self._run(args).returncode == 0

    def _git(self, *args: str, check: bool = True) -> str:
        result = self._run(args)
        if check and result.returncode != 0:
            raise PublishError(["git", *args], result.returncode, result.stderr)
        return result.stdout

    def _run(self, args: tuple[str, ...]) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["git", *args],
            cwd=Path(self.layout.root),
            capture_output=True,
            text=True,
        )
