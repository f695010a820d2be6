"""
Sharded Service Example - several shards issuing IDs side by side

This example demonstrates:
- Loading a shard's settings from the environment
- Running several independent generators (one per shard)
- Reading the shard and issue time back out of an ID
- The different encodings of a fresh ID
"""

import os

from shardflake import Generator, GeneratorSettings
from shardflake.kernel.logging import configure_logging


def example_1_settings_from_environment():
    """
    Example 1: Configuration from the environment

    A deployment system assigns each process its shard ID.
    """
    print("\n=== Example 1: Settings From Environment ===\n")

    os.environ.setdefault("SHARDFLAKE_SHARD_ID", "17")
    settings = GeneratorSettings.from_env()
    gen = Generator.from_settings(settings)

    snowflake_id = gen.generate_id()
    print(f"Shard {gen.shard_id} issued {snowflake_id}")
    print(f"  issued at {gen.issued_at(snowflake_id).isoformat()}")


def example_2_independent_shards():
    """
    Example 2: Independent shards

    IDs from different shards in the same millisecond still differ in the
    shard field.
    """
    print("\n=== Example 2: Independent Shards ===\n")

    generators = [Generator(shard_id) for shard_id in (1, 2, 3)]
    for gen in generators:
        snowflake_id = gen.generate_id()
        parts = gen.parse(snowflake_id)
        print(
            f"shard={parts.shard_id} timestamp={parts.timestamp} "
            f"sequence={parts.sequence} id={snowflake_id}"
        )


def example_3_encodings():
    """
    Example 3: Encodings

    Every call issues a fresh ID.
    """
    print("\n=== Example 3: Encodings ===\n")

    gen = Generator(42)
    print(f"int:       {gen.generate_id()}")
    print(f"hex:       {gen.generate_hex()}")
    print(f"base64:    {gen.generate_base64()}")
    print(f"buffer:    {gen.generate_buffer().hex()}")
    print(f"buffer-be: {gen.generate_buffer_be().hex()}")


if __name__ == "__main__":
    configure_logging(json_output=False, log_level="INFO")
    example_1_settings_from_environment()
    example_2_independent_shards()
    example_3_encodings()
