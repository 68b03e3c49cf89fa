"""CLI entry point for converse-client."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from converse_client import __version__


@click.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option('-n', '--component', default=None, help='Conversation component name on the sidecar.')
@click.option('--address', default=None, help='Sidecar gRPC address (host:port).')
@click.option('--system', 'system_prompt', default=None, help='Optional system message sent before the prompt.')
@click.option('--temperature', type=float, default=None, help='Sampling temperature.')
@click.option('--context-id', default=None, help='Continue an existing conversation context.')
@click.option('--scrub-pii', is_flag=True, default=False, help='Ask the sidecar to scrub PII from inputs and outputs.')
@click.option(
    '--log-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Write a debug log into this directory.',
)
@click.argument('prompt')
@click.version_option(version=__version__)
def cli(config_path, component, address, system_prompt, temperature, context_id, scrub_pii, log_dir, prompt):
    """converse -- send one prompt to the sidecar conversation API and print the reply."""
    from converse_client.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from converse_client.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )

    if log_dir:
        from converse_client.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: only with --log-dir
            setup_file_logging,
        )

        setup_file_logging(Path(log_dir))

    overrides: dict = {}
    if address:
        overrides['sidecar'] = {'grpc_address': address}
    if component:
        overrides['conversation'] = {'component': component}

    try:
        raw = YamlConfigLoader().load_raw(config_path, overrides=overrides if overrides else None)
        config = build_app_config(raw)
    except FileNotFoundError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    outcome = asyncio.run(
        _converse(
            config,
            prompt,
            system_prompt=system_prompt,
            temperature=temperature,
            context_id=context_id,
            scrub_pii=scrub_pii,
        )
    )
    if not outcome.ok:
        click.echo(f'Error: {outcome.error}', err=True)
        sys.exit(1)

    click.echo(outcome.response.first_content())
    if outcome.response.context_id:
        click.echo(f'context_id: {outcome.response.context_id}', err=True)


def _build_request(config, prompt, *, system_prompt=None, temperature=None, context_id=None, scrub_pii=False):
    from converse_client.l1_entities.message import ConversationMessage  # noqa: PLC0415 -- deferred: pydantic not loaded on --help
    from converse_client.l1_entities.request import (  # noqa: PLC0415 -- deferred: pydantic not loaded on --help
        ConversationInputAlpha2,
        new_conversation_request_alpha2,
        with_context_id,
        with_scrub_pii,
        with_temperature,
    )

    messages = []
    if system_prompt:
        messages.append(ConversationMessage.system(system_prompt))
    messages.append(ConversationMessage.user(prompt))

    options = []
    temp = temperature if temperature is not None else config.conversation.temperature
    if temp is not None:
        options.append(with_temperature(temp))
    if context_id:
        options.append(with_context_id(context_id))
    if scrub_pii or config.conversation.scrub_pii:
        options.append(with_scrub_pii(True))

    return new_conversation_request_alpha2(
        config.conversation.component,
        [ConversationInputAlpha2(messages=messages)],
        *options,
    )


async def _converse(config, prompt, **request_kwargs):
    from converse_client.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: grpc stack not loaded on --help
        DependencyContainer,
    )

    container = DependencyContainer(config)
    try:
        request = _build_request(config, prompt, **request_kwargs)
        return await container.converse.execute(request, timeout=config.sidecar.timeout)
    finally:
        await container.aclose()
