"""Click CLI with applications, modules, env, and case subcommands."""

from __future__ import annotations

import logging

import click

from commonx.introspection import BuildContext, canonical_name, default_walker
from commonx.introspection.report import IntrospectionReport
from commonx.models import IntrospectionConfig
from commonx.text import camelize, pascalize, snakize

logger = logging.getLogger(__name__)

_CASE_CONVERTERS = {
    "snake": snakize,
    "pascal": pascalize,
    "camel": camelize,
}


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--exclude", "-x", multiple=True, help="Extra system package to skip (repeatable)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, exclude: tuple[str, ...]):
    """commonx: Discover the packages and modules of the running application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = IntrospectionConfig()
    if exclude:
        config.exclude = config.exclude | {canonical_name(x) for x in exclude}
    ctx.obj = config


def _detect(config: IntrospectionConfig) -> BuildContext:
    try:
        return BuildContext.detect(config)
    except ValueError as e:
        raise click.ClickException(str(e))


def _report(config: IntrospectionConfig, packages: tuple[str, ...], with_modules: bool) -> IntrospectionReport:
    context = _detect(config)
    walker = default_walker(config, context=context)
    seeds = [canonical_name(p) for p in packages] if packages else walker.seeds()
    report = IntrospectionReport(
        env=context.env.value,
        main_application=context.current_package,
        seeds=seeds,
        applications=walker.closure(seeds),
    )
    if with_modules:
        report.modules = walker.modules_of(seeds)
    logger.info(
        "%d application(s), %d module(s) from %d seed(s)",
        len(report.applications), len(report.modules), len(seeds),
    )
    return report


@cli.command()
@click.argument("packages", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON report")
@click.pass_obj
def applications(config: IntrospectionConfig, packages: tuple[str, ...], as_json: bool):
    """List PACKAGES and everything they depend on.

    Without PACKAGES, starts from the current project, or from every loaded
    distribution outside a project.
    """
    report = _report(config, packages, with_modules=False)
    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return
    if not report.applications:
        click.echo("No applications found.")
        return
    for app in report.applications:
        style = {"fg": "cyan"} if app in report.seeds else {}
        click.echo(click.style(app, **style))


@cli.command()
@click.argument("packages", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON report")
@click.pass_obj
def modules(config: IntrospectionConfig, packages: tuple[str, ...], as_json: bool):
    """List the modules owned by PACKAGES and their dependencies."""
    report = _report(config, packages, with_modules=True)
    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return
    if not report.modules:
        click.echo("No modules found.")
        return
    for module in report.modules:
        click.echo(module)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print a JSON report")
@click.pass_obj
def env(config: IntrospectionConfig, as_json: bool):
    """Show the detected build environment and main application."""
    context = _detect(config)
    if as_json:
        report = IntrospectionReport(env=context.env.value, main_application=context.current_package)
        click.echo(report.model_dump_json(indent=2))
        return
    click.echo(f"env:  {click.style(context.env.value, fg='green')}")
    click.echo(f"main: {context.current_package or click.style('(none)', dim=True)}")


@cli.command()
@click.argument("style", type=click.Choice(sorted(_CASE_CONVERTERS)))
@click.argument("text")
def case(style: str, text: str):
    """Convert TEXT to snake, pascal, or camel case."""
    click.echo(_CASE_CONVERTERS[style](text))


if __name__ == "__main__":
    cli()
