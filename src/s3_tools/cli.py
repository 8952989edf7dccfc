"""Command-line interface for s3-tools.

Commands:
    - cp: Copy an object between S3 and the local filesystem
    - rm: Delete one or more objects from a bucket
    - ls: List objects in a bucket

Connection options are shared by every command; see ``cli_params``.
"""

from typing import Annotated, List, Optional

import typer

from . import __version__
from .cli_params import (
    aws_access_key_option,
    aws_endpoint_url_option,
    aws_profile_option,
    aws_region_option,
    aws_secret_key_option,
    aws_session_token_option,
    first_byte_option,
    last_byte_option,
    retries_option,
)
from .command_executor import CommandExecutor
from .core import settings
from .objectstorage.clients import HttpTransport, S3ClientConfig
from .objectstorage.operations import ObjectOperations
from .objectstorage.outcome import Err
from .transfer import copy, describe_error, list_all, remove

app = typer.Typer(
    name="s3-tools",
    help="Copy, list and delete objects in S3-compatible storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-tools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    S3-Tools: copy, list and delete objects over the S3 REST API.
    """
    pass


def _create_operations(
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
) -> ObjectOperations:
    """Wire the HTTP transport, executor and object operations together."""
    config = S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name or settings.default_region,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )
    return ObjectOperations(CommandExecutor(HttpTransport(config)))


@app.command("cp")
def cp_cmd(
    src: Annotated[str, typer.Argument(help="Source: local path or s3://bucket/key")],
    dst: Annotated[str, typer.Argument(help="Destination: local path or s3://bucket/key")],
    first: Annotated[Optional[int], first_byte_option()] = None,
    last: Annotated[Optional[int], last_byte_option()] = None,
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[Optional[str], aws_region_option()] = None,
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
    retries: Annotated[int, retries_option()] = settings.retries,
) -> None:
    """
    Copy an object between S3 and the local filesystem.

    Examples:
        s3-tools cp s3://bucket/data.bin ./data.bin --first 0 --last 1023
        s3-tools cp ./data.bin s3://bucket/data.bin --aws-profile myprofile
    """
    try:
        ops = _create_operations(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
        outcome = copy(ops, src, dst, first=first, last=last, retries=retries)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if isinstance(outcome, Err):
        typer.echo(f"Error: {describe_error(outcome.error)}", err=True)
        raise typer.Exit(1)


@app.command("rm")
def rm_cmd(
    bucket: Annotated[str, typer.Argument(help="Bucket to delete from")],
    keys: Annotated[List[str], typer.Argument(help="Keys to delete")],
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[Optional[str], aws_region_option()] = None,
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
    retries: Annotated[int, retries_option()] = settings.retries,
) -> None:
    """
    Delete objects. Several keys are removed with one multi-object delete.
    """
    try:
        ops = _create_operations(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
        outcome = remove(ops, bucket, keys, retries=retries)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if isinstance(outcome, Err):
        typer.echo(f"Error: {describe_error(outcome.error)}", err=True)
        raise typer.Exit(1)


@app.command("ls")
def ls_cmd(
    bucket: Annotated[str, typer.Argument(help="Bucket to list")],
    prefix: Annotated[
        Optional[str], typer.Option("--prefix", help="Only list keys with this prefix")
    ] = None,
    ratelimit: Annotated[
        Optional[int],
        typer.Option("--ratelimit", help="Maximum page requests per second"),
    ] = None,
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[Optional[str], aws_region_option()] = None,
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
    retries: Annotated[int, retries_option()] = settings.retries,
) -> None:
    """
    List objects, one per line: last modified, size, key, etag.
    """
    try:
        ops = _create_operations(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
        for entry in list_all(
            ops, bucket, prefix=prefix, ratelimit=ratelimit, retries=retries
        ):
            typer.echo(
                f"{entry.last_modified.isoformat()}\t{entry.size}\t"
                f"{entry.key}\t{entry.etag.hex()}"
            )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
