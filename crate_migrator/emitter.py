"""Script emitter — persists migration pairs as uninstall/install shell scripts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable

from crate_migrator.exceptions import DestinationWriteError
from crate_migrator.models import MigrationPair

logger = logging.getLogger(__name__)


def render(pairs: Iterable[MigrationPair]) -> tuple[list[str], list[str]]:
    """Split pairs into parallel newline-terminated uninstall and install lines."""
    uninstall_lines: list[str] = []
    install_lines: list[str] = []
    for pair in pairs:
        uninstall_lines.append(pair.uninstall_command + "\n")
        install_lines.append(pair.install_command + "\n")
    return uninstall_lines, install_lines


class ScriptEmitter:
    """
    Sole writer of the two script artifacts for a run.

    Artifacts are created empty by open(), appended to one pair at a time,
    and flushed by close(). The Nth uninstall line and the Nth install line
    always come from the same pair; a failure in between is reported through
    DestinationWriteError with the per-artifact line counts.
    """

    def __init__(self, uninstall_path: str | Path, install_path: str | Path) -> None:
        self.uninstall_path = Path(uninstall_path)
        self.install_path = Path(install_path)
        self.uninstall_written = 0
        self.install_written = 0
        self._uninstall_fh: IO[str] | None = None
        self._install_fh: IO[str] | None = None

    def open(self) -> None:
        self._uninstall_fh = self._create(self.uninstall_path)
        try:
            self._install_fh = self._create(self.install_path)
        except DestinationWriteError:
            self._uninstall_fh.close()
            self._uninstall_fh = None
            raise
        self.uninstall_written = 0
        self.install_written = 0

    def _create(self, path: Path) -> IO[str]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return open(path, "w", encoding="utf-8")
        except OSError as e:
            raise DestinationWriteError(str(path), e.strerror or str(e))

    def write_pair(self, pair: MigrationPair) -> None:
        if self._uninstall_fh is None or self._install_fh is None:
            raise RuntimeError("ScriptEmitter.open() must be called before writing")

        self._append(self._uninstall_fh, self.uninstall_path, pair.uninstall_command)
        self.uninstall_written += 1
        self._append(self._install_fh, self.install_path, pair.install_command)
        self.install_written += 1

    def write_pairs(self, pairs: Iterable[MigrationPair]) -> int:
        count = 0
        for pair in pairs:
            self.write_pair(pair)
            count += 1
        return count

    def _append(self, fh: IO[str], path: Path, command: str) -> None:
        try:
            fh.write(command + "\n")
        except OSError as e:
            raise DestinationWriteError(
                str(path),
                e.strerror or str(e),
                uninstall_written=self.uninstall_written,
                install_written=self.install_written,
            )

    def close(self) -> None:
        """Flush and close both artifacts. Closing twice is a no-op."""
        errors: list[DestinationWriteError] = []
        for attr, path in (
            ("_uninstall_fh", self.uninstall_path),
            ("_install_fh", self.install_path),
        ):
            fh = getattr(self, attr)
            if fh is None:
                continue
            setattr(self, attr, None)
            try:
                fh.close()
            except OSError as e:
                errors.append(
                    DestinationWriteError(
                        str(path),
                        e.strerror or str(e),
                        uninstall_written=self.uninstall_written,
                        install_written=self.install_written,
                    )
                )
        if errors:
            raise errors[0]
        logger.debug(
            "Closed scripts: %s (%d lines), %s (%d lines)",
            self.uninstall_path,
            self.uninstall_written,
            self.install_path,
            self.install_written,
        )

    def __enter__(self) -> ScriptEmitter:
        self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
