#!/usr/bin/env python3
"""
Command line interface for the version template engine.
"""

import json
import sys
from datetime import datetime
from typing import Optional, Tuple

import click

from . import __version__
from .exceptions import VersionTemplateError
from .renderer import recognizer_pattern
from .state import TimezoneMode
from .tags import latest_version, next_version
from .template import compile_template
from .utils import load_config, setup_logging
from .version import BuildVersion

PARTS = ['auto', 'major', 'minor', 'build', 'timestamp']


def template_options(func):
    """Attach the --template/--recognizer/--local options shared by commands."""
    func = click.option('--local/--utc', 'local', default=None,
                        help='Render and parse date/time in local time (default from config: UTC)')(func)
    func = click.option('--recognizer', '-r',
                        help='Explicit regex used to validate rendered versions')(func)
    func = click.option('--template', '-t',
                        help='Version template, e.g. "v%M%.%m%.%b%" (default from config)')(func)
    return func


def _resolve(ctx: click.Context, template: Optional[str], recognizer: Optional[str],
             local: Optional[bool]) -> Tuple[Optional[str], Optional[str], TimezoneMode]:
    """Merge command options with the loaded configuration."""
    version_config = ctx.obj['version']
    if template is None:
        template = version_config.get('template')
    if recognizer is None:
        recognizer = version_config.get('recognizer') or None
    if local is None:
        local = bool(version_config.get('use_local_timezone', False))
    return template, recognizer, TimezoneMode.from_flag(local)


def _fail(message: str):
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="buildversion")
@click.option('--config', '-c',
              type=click.Path(),
              default='buildversion.yaml',
              help='Configuration file path')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, config: str, verbose: bool):
    """buildversion - render, parse and increment template-based version strings."""
    app_config = load_config(config)
    if verbose:
        app_config['logging']['level'] = 'DEBUG'
    setup_logging(app_config['logging'])
    ctx.obj = app_config


@main.command()
@template_options
@click.option('--major', type=click.IntRange(min=0), default=0, help='Major version')
@click.option('--minor', type=click.IntRange(min=0), default=0, help='Minor version')
@click.option('--build', type=click.IntRange(min=0), default=0, help='Build number')
@click.option('--timestamp', type=click.DateTime(), default=None,
              help='Capture time (defaults to now)')
@click.pass_context
def render(ctx, template, recognizer, local, major, minor, build, timestamp: Optional[datetime]):
    """Render a version string."""
    template, recognizer, mode = _resolve(ctx, template, recognizer, local)
    try:
        version = BuildVersion(template, major, minor, build, timestamp, mode, recognizer)
    except VersionTemplateError as e:
        _fail(str(e))
    click.echo(str(version))


@main.command()
@template_options
@click.argument('candidate')
@click.option('--json', 'as_json', is_flag=True, help='Print the parsed fields as JSON')
@click.pass_context
def parse(ctx, template, recognizer, local, candidate: str, as_json: bool):
    """Parse CANDIDATE back into its version fields."""
    template, recognizer, mode = _resolve(ctx, template, recognizer, local)
    try:
        version = BuildVersion.from_candidate(candidate, template, recognizer, mode)
    except VersionTemplateError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps(version.to_dict(), indent=2))
        return

    click.echo(f"major:     {version.major}")
    click.echo(f"minor:     {version.minor}")
    click.echo(f"build:     {version.build}")
    click.echo(f"timestamp: {version.timestamp.isoformat()}")


@main.command()
@template_options
@click.pass_context
def pattern(ctx, template, recognizer, local):
    """Print the regex matching every version the template renders."""
    template, recognizer, _ = _resolve(ctx, template, recognizer, local)
    try:
        compiled = compile_template(template, recognizer)
    except VersionTemplateError as e:
        _fail(str(e))
    click.echo(recognizer_pattern(compiled))


@main.command()
@template_options
@click.argument('candidate')
@click.option('--part', '-p', type=click.Choice(PARTS), default='auto',
              help='Counter to advance (auto picks build, then minor, then major)')
@click.option('--set-major', type=click.IntRange(min=0), default=None,
              help='Set the major version first, resetting minor when it changes')
@click.pass_context
def bump(ctx, template, recognizer, local, candidate: str, part: str, set_major: Optional[int]):
    """Print the version following CANDIDATE."""
    template, recognizer, mode = _resolve(ctx, template, recognizer, local)
    try:
        version = BuildVersion.from_candidate(candidate, template, recognizer, mode)
    except VersionTemplateError as e:
        _fail(str(e))

    if set_major is not None:
        version.update_major(set_major)

    if part == 'auto':
        version.increment_version()
    elif part == 'major':
        version.increment_major()
    elif part == 'minor':
        version.increment_minor()
    elif part == 'build':
        version.increment_build()
    else:
        version.refresh_timestamp()

    click.echo(str(version))


@main.command()
@template_options
@click.argument('tags', nargs=-1)
@click.option('--next', 'advance', is_flag=True, help='Print the version after the latest tag')
@click.pass_context
def latest(ctx, template, recognizer, local, tags: Tuple[str, ...], advance: bool):
    """
    Find the newest version among TAGS.

    TAGS are read from standard input, one per line, when none are given.
    """
    template, recognizer, mode = _resolve(ctx, template, recognizer, local)
    if not tags:
        with click.open_file('-') as stream:
            tags = tuple(line.strip() for line in stream if line.strip())

    try:
        compiled = compile_template(template, recognizer)
    except VersionTemplateError as e:
        _fail(str(e))

    if advance:
        click.echo(str(next_version(compiled, tags, mode)))
        return

    version = latest_version(compiled, tags, mode)
    if version is None:
        _fail(f"No tags match pattern '{compiled.template}'")
    click.echo(str(version))


if __name__ == '__main__':
    main()
