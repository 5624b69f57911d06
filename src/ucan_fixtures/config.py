"""
Fixture generator configuration.

Provides sensible defaults with override capability.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .token import UCAN_VERSION


class GeneratorConfig(BaseModel):
    """
    Configuration for a fixture generation run.

    Fixtures are written to `<output_dir>/<version>/`.
    Environment variables override defaults (UCAN_FIXTURES_* prefix).
    """

    # Token format
    version: str = UCAN_VERSION

    # Output
    output_dir: Path = Field(default_factory=lambda: Path("fixtures"))
    indent: Optional[int] = None

    # Failure policy: abort on the first failed scenario, or skip and report
    strict: bool = True

    # Logging
    log_level: str = "INFO"

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def model_post_init(self, __context: Any) -> None:
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self) -> None:
        env_map = {
            "UCAN_FIXTURES_VERSION": ("version", str),
            "UCAN_FIXTURES_OUTPUT_DIR": ("output_dir", Path),
            "UCAN_FIXTURES_INDENT": ("indent", int),
            "UCAN_FIXTURES_STRICT": ("strict", _parse_bool),
            "UCAN_FIXTURES_LOG_LEVEL": ("log_level", str),
        }

        for env_var, (attr, type_fn) in env_map.items():
            value = os.environ.get(env_var)
            if value is not None:
                setattr(self, attr, type_fn(value))

    @property
    def output_path(self) -> Path:
        """Directory the fixture files are written to."""
        return Path(self.output_dir) / self.version

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "output_dir": str(self.output_dir),
            "indent": self.indent,
            "strict": self.strict,
            "log_level": self.log_level,
        }

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load config from a JSON file."""
        with open(path) as f:
            data = json.load(f)

        return cls(
            version=data.get("version", UCAN_VERSION),
            output_dir=Path(data.get("output_dir", "fixtures")),
            indent=data.get("indent"),
            strict=data.get("strict", True),
            log_level=data.get("log_level", "INFO"),
        )


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
