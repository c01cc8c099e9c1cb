"""CLI entry point for marytts-client."""

import logging
import sys

import click

from marytts_client import __version__
from marytts_client.client.options import AudioFormat, InputType, OutputType

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", default=None,
              help="Path to custom config YAML")
@click.option("--host", default=None, help="MaryTTS server host")
@click.option("--port", default=None, type=int, help="MaryTTS server port")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"],
                                case_sensitive=False),
              help="Logging level")
@click.pass_context
def main(ctx, config, host, port, log_level):
    """marytts: talk to a MaryTTS server from the command line."""
    from marytts_client.core.config import AppConfig
    from marytts_client.core.exceptions import ConfigError
    from marytts_client.core.logging import setup_logging

    try:
        app_config = AppConfig.load(config_path=config)
    except ConfigError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    if host:
        app_config.server.host = host
    if port:
        app_config.server.port = port

    log_cfg = app_config.logging
    setup_logging(
        level=log_level or log_cfg.get("level", "INFO"),
        log_file=log_cfg.get("file"),
    )

    ctx.obj = app_config


def _client(ctx):
    from marytts_client.client.factory import create_client
    return create_client(ctx.obj)


def _settle(result):
    """Print the error and exit non-zero if the call failed."""
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)
    return result.value


@main.command()
@click.argument("text")
@click.option("--input-type", "-i", default="text",
              type=click.Choice(InputType.keys()), help="Input type")
@click.option("--output-type", "-t", default="audio",
              type=click.Choice(OutputType.keys()), help="Output type")
@click.option("--locale", "-l", default=None, help="Locale, e.g. en_US")
@click.option("--audio", "-a", default="wave_file",
              type=click.Choice(AudioFormat.keys()), help="Audio format")
@click.option("--voice", "-v", default=None, help="Voice name")
@click.option("--base64", "as_base64", is_flag=True,
              help="Print audio as a data URI")
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False),
              help="Write the result to a file")
@click.pass_context
def process(ctx, text, input_type, output_type, locale, audio, voice,
            as_base64, output):
    """Process TEXT on the server."""
    from marytts_client.client.options import ProcessOptions

    defaults = ctx.obj.defaults
    options = ProcessOptions(
        input_type=input_type,
        output_type=output_type,
        locale=locale or defaults.locale,
        audio=audio,
        voice=voice or defaults.voice,
        base64=as_base64,
    )

    with _client(ctx) as client:
        value = _settle(client.process(text, options).result())

    if output:
        if isinstance(value, bytes):
            with open(output, "wb") as f:
                f.write(value)
        else:
            with open(output, "w", encoding="utf-8") as f:
                f.write(value)
        click.echo(f"Wrote {output}")
    elif isinstance(value, bytes):
        click.echo(value, nl=False)
    else:
        click.echo(value)


@main.command()
@click.argument("words", nargs=-1, required=True)
@click.option("--locale", "-l", default=None, help="Locale, e.g. en_US")
@click.option("--voice", "-v", default=None, help="Voice name")
@click.pass_context
def phonemes(ctx, words, locale, voice):
    """Show phonemes, method and part of speech for WORDS."""
    defaults = ctx.obj.defaults
    with _client(ctx) as client:
        result = client.phonemes(
            words,
            locale=locale or defaults.locale,
            voice=voice or defaults.voice,
        ).result()

    if not result.ok:
        logger.warning(f"Transcription incomplete: {result.error}")
    for word, record in result.value.items():
        ph = record.phonemes if record.phonemes is not False else "-"
        click.echo(f"{word}\t{ph}\t{record.method}\t{record.part_of_speech}")


@main.command()
@click.pass_context
def voices(ctx):
    """List the voices installed on the server."""
    with _client(ctx) as client:
        registry = _settle(client.voices().result())
    for voice in registry.values():
        click.echo(f"{voice.name}\t{voice.locale}\t{voice.gender}\t{voice.type}")


@main.command()
@click.pass_context
def locales(ctx):
    """List the locales the server supports."""
    with _client(ctx) as client:
        for locale in _settle(client.locales().result()):
            click.echo(locale)


@main.command()
def types():
    """Show the input types, output types and audio formats."""
    click.echo("Input types:   " + ", ".join(InputType.keys()))
    click.echo("Output types:  " + ", ".join(OutputType.keys()))
    click.echo("Audio formats: " + ", ".join(AudioFormat.keys()))


@main.command()
@click.pass_context
def check(ctx):
    """Check that the server is reachable."""
    with _client(ctx) as client:
        if client.is_available():
            click.echo(f"OK: MaryTTS is running at {client.base_url}")
            return
        click.echo(f"MaryTTS is NOT reachable at {client.base_url}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
