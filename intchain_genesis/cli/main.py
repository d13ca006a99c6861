"""Main CLI application for intchain genesis documents."""

import logging
import sys

import click

from ..codec import load_from_file, save_to_file
from ..codec.hexutil import format_rfc3339
from ..errors import GenesisError
from ..fixtures import BUILTIN_FIXTURES, builtin_fixture
from ..models import GenesisDocument

logger = logging.getLogger(__name__)

GENESIS_ENVVAR = 'INTCHAIN_GENESIS'

genesis_file_option = click.option(
    '--genesis', 'genesis_path',
    envvar=GENESIS_ENVVAR,
    type=click.Path(exists=True, dir_okay=False),
    help=f'Path to genesis file (or ${GENESIS_ENVVAR})'
)
preset_option = click.option(
    '--preset',
    type=click.Choice(sorted(BUILTIN_FIXTURES)),
    help='Built-in genesis document'
)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
def cli(debug):
    """Intchain genesis CLI - build, check and inspect genesis documents."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def _load_or_exit(genesis_path, preset=None) -> GenesisDocument:
    """Load a document from a file or preset, exiting on invalid input."""
    if preset:
        return builtin_fixture(preset)
    if not genesis_path:
        raise click.UsageError("Either --genesis or --preset is required")
    try:
        return load_from_file(genesis_path)
    except GenesisError as e:
        logger.debug(f"Failed to load {genesis_path}", exc_info=True)
        click.echo(f"✗ Invalid genesis document {genesis_path}: {e}", err=True)
        sys.exit(1)


@cli.group()
def genesis():
    """Manage genesis documents."""
    pass


@genesis.command('init')
@click.option('--preset', type=click.Choice(sorted(BUILTIN_FIXTURES)), default='mainnet',
              show_default=True, help='Built-in genesis document to start from')
@click.option('--output', required=True, help='Output genesis file path')
def genesis_init(preset, output):
    """Write a built-in genesis document to a file."""
    click.echo(f"Writing {preset} genesis document...")

    doc = builtin_fixture(preset)
    save_to_file(doc, output)

    click.echo(f"\n✓ Genesis document created: {output}")
    click.echo(f"  Chain ID:   {doc.chain_id}")
    click.echo(f"  Validators: {len(doc.validators)}")


@genesis.command('validate')
@click.option('--genesis', 'genesis_path', required=True, envvar=GENESIS_ENVVAR,
              type=click.Path(exists=True, dir_okay=False), help='Path to genesis file')
def genesis_validate(genesis_path):
    """Check that a genesis file is well-formed."""
    click.echo(f"Validating {genesis_path}...")

    doc = _load_or_exit(genesis_path)

    click.echo(f"\n✓ Genesis document is valid")
    click.echo(f"  Chain ID:    {doc.chain_id} ({doc.consensus})")
    click.echo(f"  Validators:  {len(doc.validators)}")
    click.echo(f"  Fingerprint: {doc.fingerprint()}")


@genesis.command('normalize')
@click.option('--genesis', 'genesis_path', required=True, envvar=GENESIS_ENVVAR,
              type=click.Path(exists=True, dir_okay=False), help='Path to genesis file')
@click.option('--output', required=True, help='Output genesis file path')
def genesis_normalize(genesis_path, output):
    """Rewrite a genesis file in canonical form (lowercase minimal hex)."""
    doc = _load_or_exit(genesis_path)
    save_to_file(doc, output)

    click.echo(f"✓ Normalized genesis document written: {output}")


@cli.command()
@genesis_file_option
@preset_option
def info(genesis_path, preset):
    """Display genesis document information."""
    doc = _load_or_exit(genesis_path, preset)
    schedule = doc.reward_schedule
    epoch = doc.current_epoch

    click.echo("=== Genesis Document Information ===\n")
    click.echo(f"Chain ID:      {doc.chain_id}")
    click.echo(f"Consensus:     {doc.consensus}")
    click.echo(f"Genesis Time:  {format_rfc3339(doc.genesis_time, doc.genesis_time_nanos)}")
    click.echo(f"Fingerprint:   {doc.fingerprint()}")
    click.echo(f"\nReward Scheme:")
    click.echo(f"  Total Reward:      {schedule.total_reward}")
    click.echo(f"  First Year Reward: {schedule.reward_first_year}")
    click.echo(f"  Epochs Per Year:   {schedule.epochs_per_year}")
    click.echo(f"  Total Years:       {schedule.total_years}")
    click.echo(f"\nCurrent Epoch {epoch.number}:")
    click.echo(f"  Blocks:           {epoch.start_block} - {epoch.end_block}")
    click.echo(f"  Reward Per Block: {epoch.reward_per_block}")
    click.echo(f"\nValidators ({len(epoch.validators)}, total power {doc.total_voting_power}):")
    for v in epoch.validators:
        label = f" ({v.name})" if v.name else ""
        click.echo(f"  - {v.account}{label}: {v.voting_power}")


def main():
    """Entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
