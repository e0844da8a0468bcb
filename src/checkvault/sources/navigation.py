"""Open vault documents with the platform's default application."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class SystemNavigator:
    """Navigator that hands a vault document to the OS opener."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = base_path

    def open(self, path: str, event: Any = None) -> None:
        target = self._base_path / path
        if sys.platform == "darwin":
            command = ["open", str(target)]
        elif sys.platform.startswith("win"):
            command = ["cmd", "/c", "start", "", str(target)]
        else:
            command = ["xdg-open", str(target)]

        logger.debug(f"Opening {target}")
        try:
            subprocess.run(command, check=False)
        except FileNotFoundError:
            logger.warning(f"No opener available: {command[0]} not found")
