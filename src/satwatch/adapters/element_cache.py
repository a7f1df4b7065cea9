# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
On-disk element cache: one JSON file of OMM records per group.

A record is valid while its age (now minus file modification time) is at
most the configured lifetime. Unreadable or malformed records are treated
as missing.
"""
import json
import logging
import os
import tempfile
import time
from datetime import timedelta
from pathlib import Path
from typing import Callable

from satwatch.domain.elements import (
    OrbitalElementSet,
    parse_omm_record,
    to_omm_record,
)


_log = logging.getLogger(__name__)


class ElementCache:
    """
    Per-group cache of element sets.

    Args:
        directory: Cache directory; created on first write.
        lifetime: Maximum age of a valid record.
        clock: Callable returning the current POSIX time in seconds.
    """

    def __init__(
        self,
        directory: str | Path,
        lifetime: timedelta,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._directory = Path(directory)
        self._lifetime = lifetime
        self._clock = clock

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def path_for(self, label: str) -> Path:
        return self._directory / f"{label.lower()}.json"

    def exists(self, label: str) -> bool:
        return self.path_for(label).is_file()

    def age(self, label: str) -> timedelta | None:
        """Age of the record for ``label``, or None if there is none."""
        try:
            mtime = self.path_for(label).stat().st_mtime
        except OSError:
            return None
        return timedelta(seconds=self._clock() - mtime)

    def is_fresh(self, label: str) -> bool:
        age = self.age(label)
        return age is not None and age <= self._lifetime

    def load(self, label: str) -> list[OrbitalElementSet] | None:
        """
        Read the record for ``label`` regardless of its age.

        Returns:
            Element sets, or None if the record is missing or unreadable.
        """
        path = self.path_for(label)
        try:
            with open(path, encoding="utf-8") as f:
                records = json.load(f)
            return [parse_omm_record(record) for record in records]
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            _log.warning("Ignoring unreadable cache record %s: %s", path, e)
            return None

    def load_fresh(self, label: str) -> list[OrbitalElementSet] | None:
        """load(), but only when the record is within its lifetime."""
        if not self.is_fresh(label):
            _log.debug("Cache miss for %s", label)
            return None
        return self.load(label)

    def store(self, label: str, elements: list[OrbitalElementSet]) -> None:
        """
        Write the record for ``label``, replacing any previous one.

        The file is written to a temporary name and renamed into place, so
        readers never see a partial record.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(label)
        payload = [to_omm_record(element_set) for element_set in elements]

        fd, tmp_name = tempfile.mkstemp(
            dir=self._directory, prefix=f".{path.stem}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
