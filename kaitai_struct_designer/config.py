# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for the Kaitai Struct designer tools."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import CLI_FORMAT, configure_split_stream_logging, configure_stderr_logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_CACHE_SIZE = 256


def _env_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value < 1:
        logger.warning(f"Ignoring {name}={raw!r}: must be at least 1, using {default}")
        return default
    return value


@dataclass
class DesignerConfig:
    """Configuration class for the Kaitai Struct designer tools."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = True
    max_cache_size: int = DEFAULT_MAX_CACHE_SIZE

    @classmethod
    def from_env(cls) -> 'DesignerConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('KSY_DESIGNER_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('KSY_DESIGNER_PRINT_LEVEL', 'WARNING'),
            cache_enabled=os.getenv('KSY_DESIGNER_CACHE_ENABLED', 'true').lower() == 'true',
            max_cache_size=_env_positive_int('KSY_DESIGNER_MAX_CACHE_SIZE', DEFAULT_MAX_CACHE_SIZE)
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging for the command line tools based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter(CLI_FORMAT)
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('kaitai_struct_designer')

    def set_server_logging(self) -> logging.Logger:
        """Setup logging for the language server (stderr only)."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        configure_stderr_logging(level=level)

        return logging.getLogger('kaitai_struct_designer.server')


# Global configuration instance
designer_config = DesignerConfig.from_env()
