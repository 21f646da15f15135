# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

from pyonu.config.config_manager import ConfigManager
from pyonu.lib.constants import U16_MASK
from pyonu.lib.types import FileNameStr


class SystemConfigSettings:
    """Provides dynamically reloaded system configuration via class properties."""
    _cfg        = ConfigManager()
    _logger     = logging.getLogger("SystemConfigSettings")

    _DEFAULT_LOG_LEVEL: str                 = "INFO"
    _DEFAULT_LOG_DIR: str                   = "logs"
    _DEFAULT_LOG_FILENAME: str              = "pyonu.log"
    _DEFAULT_API_HOST: str                  = "127.0.0.1"
    _DEFAULT_API_PORT: int                  = 8000
    _DEFAULT_NUM_MIB_UPLOADS: int           = 0     # 0 -> derive from the MIB catalog

    @classmethod
    def _config_path(cls, *path: str) -> str:
        """Return dotted path for logging."""
        return ".".join(path)

    @classmethod
    def _get_str(cls, default: str, *path: str) -> str:
        value = cls._cfg.get(*path)
        if value is None:
            cls._logger.error(
                "Missing configuration value for '%s'; using default '%s'",
                cls._config_path(*path),
                default,
            )
            return default
        if not isinstance(value, str):
            coerced = str(value)
            cls._logger.error(
                "Non-string configuration value for '%s': %r; using coerced '%s'",
                cls._config_path(*path),
                value,
                coerced,
            )
            return coerced
        if value == "":
            cls._logger.error(
                "Empty configuration value for '%s'; using default '%s'",
                cls._config_path(*path),
                default,
            )
            return default
        return value

    @classmethod
    def _get_int(cls, default: int, *path: str) -> int:
        value = cls._cfg.get(*path)
        if value is None:
            cls._logger.error(
                "Missing configuration value for '%s'; using default %d",
                cls._config_path(*path),
                default,
            )
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            cls._logger.error(
                "Invalid integer configuration value for '%s': %r; using default %d",
                cls._config_path(*path),
                value,
                default,
            )
            return default

    @classmethod
    def _get_bool(cls, default: bool, *path: str) -> bool:
        value = cls._cfg.get(*path)
        if isinstance(value, bool):
            return value
        if value is None:
            cls._logger.error(
                "Missing configuration value for '%s'; using default %s",
                cls._config_path(*path),
                default,
            )
            return default

        text = str(value).strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False

        cls._logger.error(
            "Invalid boolean configuration value for '%s': %r; using default %s",
            cls._config_path(*path),
            value,
            default,
        )
        return default

    # MIB upload / reset behavior
    @classmethod
    def num_mib_uploads(cls) -> int:
        """
        Number of MIB upload-next commands advertised in the MIB upload response.

        Returns 0 when the count should be derived from the MIB catalog length.
        """
        value = cls._get_int(cls._DEFAULT_NUM_MIB_UPLOADS, "MibUpload", "num_mib_uploads")
        if value < 0 or value > U16_MASK:
            cls._logger.error(
                "Out-of-range configuration value for '%s': %d; using default %d",
                cls._config_path("MibUpload", "num_mib_uploads"),
                value,
                cls._DEFAULT_NUM_MIB_UPLOADS,
            )
            return cls._DEFAULT_NUM_MIB_UPLOADS
        return value

    @classmethod
    def restore_tcont_after_priority_queue(cls) -> bool:
        return cls._get_bool(False, "MibUpload", "restore_tcont_after_priority_queue")

    @classmethod
    def reset_lifecycle(cls) -> bool:
        return cls._get_bool(False, "MibReset", "reset_lifecycle")

    # FastAPI
    @classmethod
    def api_host(cls) -> str:
        return cls._get_str(cls._DEFAULT_API_HOST, "FastApi", "host")

    @classmethod
    def api_port(cls) -> int:
        return cls._get_int(cls._DEFAULT_API_PORT, "FastApi", "port")

    # Logging
    @classmethod
    def log_level(cls) -> str:
        return cls._get_str(cls._DEFAULT_LOG_LEVEL, "logging", "log_level")

    @classmethod
    def log_dir(cls) -> str:
        return cls._get_str(cls._DEFAULT_LOG_DIR, "logging", "log_dir")

    @classmethod
    def log_filename(cls) -> FileNameStr:
        return cast(FileNameStr, cls._get_str(cls._DEFAULT_LOG_FILENAME, "logging", "log_filename"))

    @classmethod
    def log_rotate(cls) -> bool:
        return cls._get_bool(False, "logging", "rotate")

    @classmethod
    def initialize_directories(cls) -> None:
        """
        Create necessary directories if they do not exist.
        """
        Path(cls.log_dir()).mkdir(parents=True, exist_ok=True)

