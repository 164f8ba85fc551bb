"""
CLI do supernal-config.

Resolve `.supernal/project.yaml` (ou `--config`) contra os search paths
de patterns e imprime o resultado composto.

Decisões arquiteturais:
    - Docstrings dos comandos são o texto de `--help` e ficam em inglês,
      como as mensagens de erro e os hints exibidos ao usuário
    - `ConfigError` é impresso em stderr e encerra com código 1

Uso:
    supernal-config show                             # configuração completa (YAML)
    supernal-config show --format=json               # em JSON
    supernal-config show --section=workflow.phases   # apenas uma seção
    supernal-config trace workflow.wip_limit         # qual documento definiu o valor
    supernal-config patterns --type=phases           # patterns disponíveis
    supernal-config inspect agile --resolve          # pattern composto com seus defaults
"""

from __future__ import annotations

import sys
from dataclasses import asdict
from typing import NoReturn

import click

from supernal_config import __version__
from supernal_config.core.config.errors import ConfigError
from supernal_config.display.displayer import ConfigDisplayer
from supernal_config.display.format_helper import SUPPORTED_FORMATS, to_json
from supernal_config.display.pattern_lister import PATTERN_TYPES

_FORMAT = click.Choice(list(SUPPORTED_FORMATS))


def _fail(exc: ConfigError, fmt: str = "yaml") -> NoReturn:
    """Imprime o diagnóstico em stderr (texto ou payload JSON) e encerra com 1."""
    if fmt == "json":
        click.echo(to_json(exc.to_payload().to_dict()), err=True)
    else:
        click.echo(str(exc), err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="supernal-config")
@click.option(
    "--search-path",
    "search_paths",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Pattern directory, repeatable; earlier entries shadow later ones.",
)
@click.pass_context
def cli(ctx: click.Context, search_paths: tuple[str, ...]) -> None:
    """supernal-config — pattern-based configuration composition."""
    ctx.ensure_object(dict)
    ctx.obj["displayer"] = ConfigDisplayer(search_paths=list(search_paths) or None)


@cli.command()
@click.option("--config", "config_path", default=None, help="Config file (default: .supernal/project.yaml)")
@click.option("--format", "fmt", type=_FORMAT, default="yaml", show_default=True)
@click.option("--section", default=None, help="Dotted path, e.g. workflow.phases[0]")
@click.option("--output", default=None, type=click.Path(dir_okay=False), help="Write to file instead of stdout")
@click.pass_context
def show(ctx: click.Context, config_path: str | None, fmt: str, section: str | None, output: str | None) -> None:
    """Show the resolved configuration."""
    displayer: ConfigDisplayer = ctx.obj["displayer"]
    try:
        text = displayer.show(config_path=config_path, fmt=fmt, section=section, output=output)
    except ConfigError as exc:
        _fail(exc, fmt)
    click.echo(text.rstrip("\n"))


@cli.command()
@click.argument("path")
@click.option("--config", "config_path", default=None, help="Config file (default: .supernal/project.yaml)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def trace(ctx: click.Context, path: str, config_path: str | None, as_json: bool) -> None:
    """Show which documents defined PATH and which one won."""
    displayer: ConfigDisplayer = ctx.obj["displayer"]
    try:
        result = displayer.trace(path, config_path=config_path)
    except ConfigError as exc:
        _fail(exc, "json" if as_json else "yaml")

    if as_json:
        click.echo(to_json(result.to_dict()))
        return

    click.echo(f"{result.path} = {result.final_value!r}")
    for entry in result.chain:
        marker = ">" if entry.is_final else " "
        click.echo(f"  {marker} {entry.source}: {entry.value!r}")


@cli.command()
@click.option("--type", "pattern_type", type=click.Choice(["all", *PATTERN_TYPES]), default="all", show_default=True)
@click.option("--usage", is_flag=True, help="Include usage examples")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def patterns(ctx: click.Context, pattern_type: str, usage: bool, as_json: bool) -> None:
    """List available patterns."""
    displayer: ConfigDisplayer = ctx.obj["displayer"]
    try:
        listing = displayer.list_patterns(pattern_type, usage=usage)
    except ConfigError as exc:
        _fail(exc, "json" if as_json else "yaml")

    if as_json:
        click.echo(to_json(asdict(listing)))
        return

    for title, items in (("User-defined", listing.user_defined), ("Shipped", listing.shipped)):
        click.echo(f"{title}:")
        if not items:
            click.echo("  (none)")
        for info in items:
            click.echo(f"  {info.key:<30} {info.description}")
            if info.usage_example:
                for line in info.usage_example.rstrip().splitlines():
                    click.echo(f"      {line}")


@cli.command()
@click.argument("name")
@click.option("--resolve", is_flag=True, help="Compose the pattern with its own defaults")
@click.option("--format", "fmt", type=_FORMAT, default="yaml", show_default=True)
@click.pass_context
def inspect(ctx: click.Context, name: str, resolve: bool, fmt: str) -> None:
    """Print a pattern by NAME or TYPE/NAME."""
    displayer: ConfigDisplayer = ctx.obj["displayer"]
    try:
        text = displayer.inspect_pattern(name, resolve=resolve, fmt=fmt)
    except ConfigError as exc:
        _fail(exc, fmt)
    click.echo(text.rstrip("\n"))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
