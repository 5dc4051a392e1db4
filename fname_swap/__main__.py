"""Command line interface for fname-swap."""

from __future__ import annotations

import click

from fname_swap.config import RenamerConfig
from fname_swap.features.directory.service import DirectoryClient
from fname_swap.features.identity.service import (
    ContractIdentifierRegistry,
    IdentityResolver,
)
from fname_swap.features.relay.client import RelayClient
from fname_swap.features.rename.models import RenameIntent
from fname_swap.features.rename.service import RenameOrchestrator
from fname_swap.features.rename.state import RenameAttempt, RenameStage
from fname_swap.features.signing.signers import LocalAccountSigner
from fname_swap.shared.errors import FnameSwapError, OutcomeUnknown, PartialFailure
from fname_swap.shared.logging import format_error_for_user, setup_logging

STAGE_MESSAGES = {
    RenameStage.CHECKING_AVAILABILITY: "Checking availability...",
    RenameStage.SIGNING_RELEASE: "Signing release of current fname...",
    RenameStage.SIGNING_CLAIM: "Signing claim of new fname...",
    RenameStage.SUBMITTING_RELEASE: "Releasing current fname...",
    RenameStage.SUBMITTING_CLAIM: "Registering new fname...",
}


def _build_directory(config: RenamerConfig) -> DirectoryClient:
    return DirectoryClient(
        config.directory_url,
        timeout_config=config.timeout_config,
        read_retry_config=config.read_retry_config,
    )


def _build_resolver(config: RenamerConfig, directory: DirectoryClient) -> IdentityResolver:
    registry = ContractIdentifierRegistry(
        config.rpc_url,
        config.id_registry_address,
        timeout=config.timeout_config.read_timeout,
    )
    return IdentityResolver(registry, directory)


def _fail(error: FnameSwapError) -> None:
    if isinstance(error, PartialFailure):
        click.secho(error.user_guidance, fg="red", err=True)
        raise click.exceptions.Exit(2)
    if isinstance(error, OutcomeUnknown):
        click.secho(str(error), fg="yellow", err=True)
        raise click.exceptions.Exit(3)
    click.secho(f"Error: {error}", fg="red", err=True)
    click.echo(format_error_for_user(error), err=True)
    raise click.exceptions.Exit(1)


def _echo_stage(stage: RenameStage, attempt: RenameAttempt) -> None:
    message = STAGE_MESSAGES.get(stage)
    if message:
        click.echo(message)


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """Rename a Farcaster fname."""
    setup_logging()
    ctx.obj = RenamerConfig.from_environment()


@main.command("resolve")
@click.argument("address")
@click.pass_obj
def resolve(config: RenamerConfig, address: str):
    """Show the FID and current fname owned by ADDRESS."""
    directory = _build_directory(config)
    try:
        identity = _build_resolver(config, directory).resolve(address)
    except FnameSwapError as e:
        _fail(e)
    click.echo(f"Address: {identity.address}")
    click.echo(f"FID: {identity.fid}")
    if identity.has_handle:
        click.echo(f"Current fname: {identity.current_handle}")
    else:
        click.echo(f"Your FID ({identity.fid}) does not have an fname assigned.")


@main.command("check")
@click.argument("name")
@click.pass_obj
def check(config: RenamerConfig, name: str):
    """Report whether fname NAME is taken."""
    try:
        taken = _build_directory(config).lookup_by_handle(name)
    except FnameSwapError as e:
        _fail(e)
    click.echo(f"{name.lower()}: {'taken' if taken else 'available'}")


@main.command("history")
@click.argument("fid", type=int)
@click.pass_obj
def history(config: RenamerConfig, fid: int):
    """List the directory transfers involving FID, newest first."""
    try:
        transfers = _build_directory(config).fetch_transfers_for_identifier(fid)
    except FnameSwapError as e:
        _fail(e)
    if not transfers:
        click.echo(f"No transfers found for FID {fid}.")
        return
    for transfer in sorted(transfers, key=lambda t: t.timestamp, reverse=True):
        kind = "release" if transfer.is_release else "claim" if transfer.is_claim else "transfer"
        click.echo(
            f"{transfer.timestamp}  {kind:<8} {transfer.username:<16} "
            f"{transfer.from_fid} -> {transfer.to_fid}"
        )


@main.command("rename")
@click.argument("new_name")
@click.option("--relay-url", default=None, help="Submit through a relay instead of directly.")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def rename(config: RenamerConfig, new_name: str, relay_url: str | None, yes: bool):
    """Release your current fname and register NEW_NAME.

    Signs with the key in FNAME_SWAP_PRIVATE_KEY.
    """
    directory = _build_directory(config)
    relay_url = relay_url or config.relay_url

    try:
        signer = LocalAccountSigner.from_environment()
        identity = _build_resolver(config, directory).resolve(signer.address)
        intent = RenameIntent.create(
            fid=identity.fid,
            owner=identity.address,
            current_handle=identity.current_handle,
            desired_handle=new_name,
        )
    except FnameSwapError as e:
        _fail(e)

    click.echo(
        f"This will release '{intent.current_handle}' and register "
        f"'{intent.desired_handle}' for FID {intent.fid}. Two signatures are required."
    )
    if not yes:
        typed = click.prompt(f"Type '{intent.desired_handle}' to confirm")
        if typed.strip().lower() != intent.desired_handle:
            click.echo("Confirmation did not match. Nothing was changed.")
            raise click.exceptions.Exit(1)

    orchestrator = RenameOrchestrator(
        directory,
        relay=RelayClient(relay_url, timeout_config=config.relay_timeout_config)
        if relay_url
        else None,
        on_stage=_echo_stage,
    )
    try:
        result = orchestrator.rename(intent, signer)
    except FnameSwapError as e:
        _fail(e)
    click.secho(result.message, fg="green")


@main.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.pass_obj
def serve(config: RenamerConfig, host: str, port: int):
    """Run the rename relay endpoint."""
    from fname_swap.features.relay.app import create_app

    create_app(config).run(host=host, port=port)


if __name__ == "__main__":
    main()
