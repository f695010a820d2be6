"""
Generator settings

Shard assignment is an operational concern: a deployment system hands each
process its shard ID, typically through the environment. GeneratorSettings
validates those values before any generator is built.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from shardflake.kernel.errors import ConfigurationError
from shardflake.kernel.ids import MAX_SHARD_ID

ENV_SHARD_ID = "SHARDFLAKE_SHARD_ID"
ENV_EPOCH_MS = "SHARDFLAKE_EPOCH_MS"
ENV_WAIT_INTERVAL_US = "SHARDFLAKE_WAIT_INTERVAL_US"


class GeneratorSettings(BaseModel):
    """
    Configuration for one shard's generator

    Settings are immutable - a generator's shard ID and epoch never change
    for the lifetime of the process.
    """

    model_config = ConfigDict(frozen=True)

    shard_id: int = Field(
        ge=0,
        le=MAX_SHARD_ID,
        description="Shard identifier, unique among all running generators",
    )

    epoch_ms: int = Field(
        default=0,
        ge=0,
        description="Epoch in Unix milliseconds (0 selects the default epoch)",
    )

    wait_interval_us: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Sleep between clock reads while waiting for the clock to advance",
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GeneratorSettings":
        """
        Load settings from environment variables

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If SHARDFLAKE_SHARD_ID is not set
            pydantic.ValidationError: If a value is malformed or out of range
        """
        env = os.environ if environ is None else environ

        shard_id = env.get(ENV_SHARD_ID)
        if shard_id is None or not shard_id.strip():
            raise ConfigurationError(f"{ENV_SHARD_ID} must be set")

        values: dict[str, str] = {"shard_id": shard_id.strip()}
        if env.get(ENV_EPOCH_MS):
            values["epoch_ms"] = env[ENV_EPOCH_MS].strip()
        if env.get(ENV_WAIT_INTERVAL_US):
            values["wait_interval_us"] = env[ENV_WAIT_INTERVAL_US].strip()

        return cls.model_validate(values)
