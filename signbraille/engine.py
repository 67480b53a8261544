"""
Boundary to the liblouis translator.

The pipeline only needs two things from an engine: ``translate(tables, text)``
returning Unicode braille (or None on failure) and ``version()``. liblouis can
get into a bad state on some inputs (pictographs in particular), so the engine
lives behind an ``EngineHandle`` that the caller can reset and rebuild.
"""

import logging
import os
import re
import shutil
import subprocess
from typing import Callable, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
# Display table that makes liblouis emit Unicode braille instead of ASCII braille
UNICODE_DISPLAY_TABLE = "unicode.dis"


class EngineError(RuntimeError):
    """The translator aborted or could not be run."""


class TranslationEngine(Protocol):
    def translate(self, tables: Sequence[str], text: str) -> Optional[str]:
        ...

    def version(self) -> str:
        ...


class LouTranslateEngine:
    """Runs liblouis's ``lou_translate`` command line tool, one line per call."""

    def __init__(self, executable=None, table_path=None, timeout=DEFAULT_TIMEOUT,
                 display_table=UNICODE_DISPLAY_TABLE):
        self.executable = executable or os.environ.get("LOU_TRANSLATE") or "lou_translate"
        self.table_path = table_path or os.environ.get("LOUIS_TABLEPATH")
        self.timeout = timeout
        self.display_table = display_table
        self._version = None

    def _resolve_executable(self) -> str:
        path = shutil.which(self.executable)
        if path is None:
            raise EngineError(f"liblouis executable not found: {self.executable}")
        return path

    def _env(self):
        env = dict(os.environ)
        if self.table_path:
            env["LOUIS_TABLEPATH"] = self.table_path
        return env

    def table_spec(self, tables: Sequence[str]) -> str:
        names = list(tables)
        if self.display_table and self.display_table not in names:
            names.insert(0, self.display_table)
        return ",".join(names)

    def translate(self, tables: Sequence[str], text: str) -> Optional[str]:
        cmd = [self._resolve_executable(), "--forward", self.table_spec(tables)]
        try:
            proc = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                env=self._env(),
            )
        except subprocess.TimeoutExpired as e:
            raise EngineError(f"lou_translate timed out after {self.timeout}s") from e
        except OSError as e:
            raise EngineError(f"Failed to run lou_translate: {e}") from e

        if proc.returncode != 0:
            raise EngineError(
                f"lou_translate exited with {proc.returncode}: {proc.stderr.strip()}"
            )
        output = proc.stdout.rstrip("\n")
        return output or None

    def version(self) -> str:
        if self._version is None:
            self._version = self._query_version()
        return self._version

    def _query_version(self) -> str:
        try:
            proc = subprocess.run(
                [self._resolve_executable(), "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self._env(),
            )
        except (EngineError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Could not determine liblouis version: %s", e)
            return "unknown"
        match = re.search(r"(\d+\.\d+(?:\.\d+)?)", proc.stdout or "")
        return match.group(1) if match else "unknown"


class EngineHandle:
    """Owns one engine instance; ``reset()`` discards it so the next call builds a fresh one."""

    def __init__(self, factory: Callable[[], TranslationEngine]):
        self._factory = factory
        self._engine = None

    @property
    def engine(self) -> TranslationEngine:
        if self._engine is None:
            self._engine = self._factory()
        return self._engine

    def translate(self, tables: Sequence[str], text: str) -> Optional[str]:
        return self.engine.translate(tables, text)

    def version(self) -> str:
        return self.engine.version()

    def reset(self):
        if self._engine is not None:
            logger.warning("Resetting translation engine %s", type(self._engine).__name__)
        self._engine = None
