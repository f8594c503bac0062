from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from timesince.shared.logging.logger import get_logger
from timesince.shared.storage.paths import default_data_file

log = get_logger("shared.config.settings")

ENV_DATA_FILE = "TIMESINCE_DATA_FILE"
ENV_LOG_LEVEL = "TIMESINCE_LOG_LEVEL"
ENV_LOG_DIR = "TIMESINCE_LOG_DIR"
ENV_NO_COLOR = "NO_COLOR"


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None
    color: bool = True

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        *,
        use_dotenv: bool = True,
    ) -> "Settings":
        """
        Build settings from the process environment.

        A .env file in the working directory seeds variables that are not
        already set. The data file location is only resolved when
        TIMESINCE_DATA_FILE is absent.
        """
        if env is None:
            if use_dotenv:
                load_dotenv(find_dotenv(usecwd=True), override=False)
            env = os.environ

        override = env.get(ENV_DATA_FILE)
        if override:
            data_file = Path(override).expanduser()
            log.debug(f"Using data file from {ENV_DATA_FILE}: {data_file}")
        else:
            data_file = default_data_file(env)

        log_dir = env.get(ENV_LOG_DIR)

        return cls(
            data_file=data_file,
            log_level=(env.get(ENV_LOG_LEVEL) or "WARNING").upper(),
            log_dir=Path(log_dir).expanduser() if log_dir else None,
            # https://no-color.org: any non-empty value disables colour
            color=not env.get(ENV_NO_COLOR),
        )

    def with_overrides(
        self,
        *,
        data_file: Path | str | None = None,
        no_color: bool = False,
        verbose: bool = False,
    ) -> "Settings":
        changes = {}
        if data_file:
            changes["data_file"] = Path(data_file).expanduser()
        if no_color:
            changes["color"] = False
        if verbose:
            changes["log_level"] = "DEBUG"
        return replace(self, **changes) if changes else self
