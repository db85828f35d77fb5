"""
Configuration for the sentiment forwarder.
"""

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_DATASET = "centiment"
DEFAULT_TABLE = "sentiments"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ForwarderConfig:
    """Where and how sentiment rows are written.

    Attributes:
        dataset: BigQuery dataset holding the sentiments table
        table: BigQuery table rows are appended to
        project_id: Google Cloud project ID (None uses the client's default)
        timeout: Seconds to wait on each BigQuery call
    """

    dataset: str = DEFAULT_DATASET
    table: str = DEFAULT_TABLE
    project_id: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ValueError(f"timeout must be positive and finite, got {self.timeout}")

    @property
    def dataset_id(self) -> str:
        if self.project_id:
            return f"{self.project_id}.{self.dataset}"
        return self.dataset

    @property
    def table_id(self) -> str:
        return f"{self.dataset_id}.{self.table}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ForwarderConfig":
        """Build the configuration from environment variables.

        Unset and empty variables fall back to the defaults.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ForwarderConfig instance
        """
        if environ is None:
            environ = os.environ

        raw_timeout = environ.get("BQ_TIMEOUT_SECONDS")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"BQ_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}")
        else:
            timeout = DEFAULT_TIMEOUT

        return cls(
            dataset=environ.get("CENTIMENT_DATASET") or DEFAULT_DATASET,
            table=environ.get("CENTIMENT_TABLE") or DEFAULT_TABLE,
            project_id=environ.get("PROJECT_ID") or None,
            timeout=timeout,
        )
