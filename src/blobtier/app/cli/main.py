"""CLI main entry point."""

import sys

import click

from ...adapters import FsCacheAdapter, S3StorageAdapter, Sha1Adapter, StdLoggerAdapter
from ...core import (
    BlobService,
    BlobTierConfig,
    SyncAbortedError,
    SyncReport,
    SyncService,
    load_profile,
)
from ...ports import StoragePort

USAGE = """Usage:
  blobtier [options] store < input-file > shafile
  blobtier [options] load < shafile > output-file
  blobtier [options] upload [-n NUM]"""


def create_storage(config: BlobTierConfig) -> StoragePort | None:
    """Create the remote tier, or None in local-only mode.

    Reads the config file, so configuration errors surface here before
    either tier is touched.
    """
    if config.local_mode:
        return None
    return S3StorageAdapter.from_profile(load_profile(config))


def create_service(config: BlobTierConfig) -> BlobService:
    """Create service with wired adapters."""
    return BlobService(
        cache=FsCacheAdapter(config.data_dir),
        hasher=Sha1Adapter(),
        logger=StdLoggerAdapter(level=config.log_level),
        storage=create_storage(config),
    )


def create_sync_service(config: BlobTierConfig) -> SyncService:
    """Create bulk sync service. Requires the remote tier."""
    storage = create_storage(config)
    if storage is None:
        raise click.UsageError("upload needs the remote store and cannot run with --local")
    return SyncService(
        cache=FsCacheAdapter(config.data_dir),
        storage=storage,
        hasher=Sha1Adapter(),
        logger=StdLoggerAdapter(level=config.log_level),
        parallel=config.parallel,
    )


@click.group(invoke_without_command=True)
@click.option("-s", "--section", help="Section name of config file (default: default)")
@click.option("--assetpath", help="Asset directory (default: ~/.blobtier)")
@click.option("--local", "local_mode", is_flag=True, help="Local mode (do not use S3)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    section: str | None,
    assetpath: str | None,
    local_mode: bool,
    debug: bool,
) -> None:
    """blobtier - Content-addressable blob store with an S3 tier."""
    if ctx.invoked_subcommand is None:
        click.echo(USAGE, err=True)
        click.echo(ctx.get_help(), err=True)
        ctx.exit(1)
    ctx.obj = BlobTierConfig.from_env(
        section=section,
        asset_dir=assetpath,
        local_mode=local_mode,
        log_level="DEBUG" if debug else None,
    )


@cli.command()
@click.pass_obj
def store(config: BlobTierConfig) -> None:
    """Store stdin and print its fingerprint."""
    try:
        service = create_service(config)
        data = click.get_binary_stream("stdin").read()
        summary = service.store(data)
        stdout = click.get_binary_stream("stdout")
        stdout.write(summary.fingerprint.encode("ascii"))
        stdout.flush()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_obj
def load(config: BlobTierConfig) -> None:
    """Print the content for the fingerprint on stdin."""
    try:
        service = create_service(config)
        request = click.get_binary_stream("stdin").read()
        result = service.load(request)
        stdout = click.get_binary_stream("stdout")
        stdout.write(result.content)
        stdout.flush()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "-n",
    "--parallel",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Level of parallelism",
)
@click.option("--sequential", is_flag=True, help="Upload one object at a time without worker threads")
@click.option("--strict", is_flag=True, help="Exit non-zero if any object failed to upload")
@click.pass_obj
def upload(config: BlobTierConfig, parallel: int, sequential: bool, strict: bool) -> None:
    """Upload every cached object to S3."""
    config.parallel = parallel
    try:
        sync = create_sync_service(config)
        report = sync.upload_sequential() if sequential else sync.upload()
    except click.UsageError:
        raise
    except SyncAbortedError as e:
        click.echo(f"Error: {e} ({report_line(e.report)})", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if strict and report.failed:
        click.echo(f"Error: {len(report.failed)} object(s) failed to upload", err=True)
        sys.exit(1)


def report_line(report: SyncReport) -> str:
    """One-line summary of a sync report."""
    return (
        f"uploaded={report.uploaded} existing={report.existing} "
        f"failed={len(report.failed)} skipped={len(report.skipped)}"
    )


def main() -> None:
    """Main entry point."""
    cli()
