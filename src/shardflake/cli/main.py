"""
Shardflake CLI

Command-line interface for generating and inspecting Snowflake IDs.

Usage:
    shardflake generate --shard-id 7 --count 5 --format hex
    shardflake parse 0c8a1f3e5b000401
    shardflake bench --count 100000 --threads 8
"""

import json
import threading
from enum import Enum
from typing import Optional

import typer
from typing_extensions import Annotated

from shardflake import encoding
from shardflake.generator import Generator
from shardflake.kernel.errors import ShardflakeError
from shardflake.kernel.ids import DEFAULT_EPOCH_MS, decompose_id
from shardflake.kernel.logging import LogOperation, configure_logging, get_logger
from shardflake.kernel.metrics import start_metrics_server

# Logs go to stderr (keeps stdout clean for generated IDs)
configure_logging(json_output=False, log_level="WARNING")

logger = get_logger(__name__)

app = typer.Typer(
    name="shardflake",
    help="Shardflake - coordination-free 64-bit Snowflake IDs",
    add_completion=False,
)


class OutputFormat(str, Enum):
    INT = "int"
    HEX = "hex"
    BASE64 = "base64"
    BUFFER = "buffer"
    BUFFER_BE = "buffer-be"


ShardOption = Annotated[
    int,
    typer.Option("--shard-id", envvar="SHARDFLAKE_SHARD_ID", help="Shard ID (0-8191)"),
]
EpochOption = Annotated[
    int,
    typer.Option(
        "--epoch",
        envvar="SHARDFLAKE_EPOCH_MS",
        help="Epoch in Unix milliseconds (0 = default epoch)",
    ),
]


def build_generator(shard_id: int, epoch: int) -> Generator:
    """Create a generator, exiting with an error message on bad configuration"""
    try:
        return Generator(shard_id, epoch)
    except ShardflakeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def render(gen: Generator, output_format: OutputFormat) -> str:
    """Generate one fresh ID in the requested format"""
    if output_format is OutputFormat.HEX:
        return gen.generate_hex()
    if output_format is OutputFormat.BASE64:
        return gen.generate_base64()
    if output_format is OutputFormat.BUFFER:
        return gen.generate_buffer().hex()
    if output_format is OutputFormat.BUFFER_BE:
        return gen.generate_buffer_be().hex()
    return str(gen.generate_id())


@app.command()
def generate(
    shard_id: ShardOption,
    epoch: EpochOption = 0,
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Number of IDs")] = 1,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.INT,
) -> None:
    """Generate IDs, one per line"""
    gen = build_generator(shard_id, epoch)
    for _ in range(count):
        typer.echo(render(gen, output_format))


@app.command()
def parse(
    snowflake_id: Annotated[str, typer.Argument(help="ID as decimal, hex or base64")],
    epoch: EpochOption = 0,
    as_json: Annotated[bool, typer.Option("--json", help="Output JSON")] = False,
) -> None:
    """Decode an ID into timestamp, shard and sequence"""
    try:
        value = encoding.decode(snowflake_id)
    except ShardflakeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    parts = decompose_id(value)
    issued_at = parts.issued_at(epoch or DEFAULT_EPOCH_MS)

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "id": value,
                    "hex": encoding.to_hex(value),
                    "base64": encoding.to_base64(value),
                    **parts.model_dump(),
                    "issued_at": issued_at.isoformat(),
                },
                indent=2,
            )
        )
        return

    typer.echo(f"ID:        {value}")
    typer.echo(f"Hex:       {encoding.to_hex(value)}")
    typer.echo(f"Base64:    {encoding.to_base64(value)}")
    typer.echo(f"Timestamp: {parts.timestamp}")
    typer.echo(f"Shard ID:  {parts.shard_id}")
    typer.echo(f"Sequence:  {parts.sequence}")
    typer.echo(f"Issued at: {issued_at.isoformat()}")


@app.command()
def bench(
    shard_id: ShardOption = 0,
    epoch: EpochOption = 0,
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Total IDs to generate")] = 100_000,
    threads: Annotated[int, typer.Option("--threads", "-t", min=1, help="Worker threads")] = 1,
    metrics_port: Annotated[
        Optional[int],
        typer.Option("--metrics-port", help="Expose Prometheus metrics on this port"),
    ] = None,
) -> None:
    """Generate IDs from several threads and verify they are unique"""
    if metrics_port is not None:
        start_metrics_server(metrics_port)

    gen = build_generator(shard_id, epoch)
    per_thread = [count // threads + (1 if i < count % threads else 0) for i in range(threads)]
    results: list[list[int]] = [[] for _ in range(threads)]

    def worker(index: int) -> None:
        out = results[index]
        for _ in range(per_thread[index]):
            out.append(gen.generate_id())

    with LogOperation(logger, "bench", shard_id=shard_id, count=count, threads=threads) as op:
        workers = [threading.Thread(target=worker, args=(i,)) for i in range(threads)]
        for t in workers:
            t.start()
        for t in workers:
            t.join()

    ids = [i for chunk in results for i in chunk]
    unique = len(set(ids))
    elapsed_s = op.duration_ms / 1000
    rate = len(ids) / elapsed_s if elapsed_s > 0 else float("inf")

    typer.echo(f"Generated: {len(ids)}")
    typer.echo(f"Unique:    {unique}")
    typer.echo(f"Threads:   {threads}")
    typer.echo(f"Elapsed:   {elapsed_s:.3f}s")
    typer.echo(f"Rate:      {rate:,.0f} IDs/sec")

    if unique != len(ids):
        typer.echo("Error: duplicate IDs detected", err=True)
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
