"""Shared CLI parameter utilities to reduce duplication.

The parameter functions return Typer options for use inside ``Annotated``
signatures, so every command exposes the same connection options with the
same help text.

Usage:
    @app.command()
    def my_command(
        region_name: Annotated[str, aws_region_option()] = "us-east-1",
    ):
        pass
"""

from typing import Annotated, Optional

import typer


def aws_access_key_option() -> Annotated[Optional[str], typer.Option]:
    """AWS access key ID option."""
    return typer.Option("--access-key-id", help="AWS access key ID")


def aws_secret_key_option() -> Annotated[Optional[str], typer.Option]:
    """AWS secret access key option."""
    return typer.Option("--secret-access-key", help="AWS secret access key")


def aws_session_token_option() -> Annotated[Optional[str], typer.Option]:
    """AWS session token option."""
    return typer.Option("--session-token", help="AWS session token")


def aws_region_option() -> Annotated[str, typer.Option]:
    """AWS region option."""
    return typer.Option("--region", help="AWS region to address first")


def aws_endpoint_url_option() -> Annotated[Optional[str], typer.Option]:
    """AWS endpoint URL option."""
    return typer.Option("--endpoint-url", help="Custom S3 endpoint URL")


def aws_profile_option() -> Annotated[Optional[str], typer.Option]:
    """AWS profile option."""
    return typer.Option("--aws-profile", help="AWS CLI profile name")


def retries_option() -> Annotated[int, typer.Option]:
    """Retries option."""
    return typer.Option("--retries", help="Retries for throttled or failed commands")


def first_byte_option() -> Annotated[Optional[int], typer.Option]:
    return typer.Option("--first", help="First byte of the range to copy")


def last_byte_option() -> Annotated[Optional[int], typer.Option]:
    return typer.Option("--last", help="Last byte of the range to copy")
