"""Command-line entry point: generate barcode artifacts and inspect encodings."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from stocklabel import __version__, get_logger, load_config
from stocklabel.barcodegen.code39 import encode
from stocklabel.barcodegen.errors import BarcodeGenError, BarcodeInputError
from stocklabel.barcodegen.renderers import render_json
from stocklabel.barcodegen.sanitize import barcode_safe
from stocklabel.barcodegen.service import BarcodeService
from stocklabel.barcodegen.storage import DetachedWriter
from stocklabel.model.enums import RenderTarget
from stocklabel.model.request import BarcodeRequest
from stocklabel.model.settings import LabelSettings

logger = get_logger(__name__)

_TARGETS = [t.value for t in RenderTarget]


def _load_settings(config_path: Optional[str]) -> LabelSettings:
    try:
        return LabelSettings.from_config(
            load_config(Path(config_path) if config_path else None)
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="stocklabel")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str]) -> None:
    """stocklabel: Code 39 barcode labels for inventory items."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("product")
@click.option("--variant", default=None, help="Variant name (size, color, ...).")
@click.option("--sku", default=None, help="SKU line for the png_sku_caption target.")
@click.option(
    "--target",
    type=click.Choice(_TARGETS, case_sensitive=False),
    default=None,
    help="Output format (defaults to the configured render_target).",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root directory for barcode artifacts.",
)
@click.option(
    "--wait/--no-wait",
    default=True,
    show_default=True,
    help="Wait for the artifact write before printing the response.",
)
@click.pass_obj
def generate(
    obj: dict,
    product: str,
    variant: Optional[str],
    sku: Optional[str],
    target: Optional[str],
    data_dir: Optional[Path],
    wait: bool,
) -> None:
    """Generate a barcode for PRODUCT and print the response as JSON."""
    settings = _load_settings(obj.get("config_path"))
    if data_dir is not None:
        settings = replace(settings, data_dir=data_dir)
    render_target = RenderTarget.parse(target) if target else settings.render_target

    request = BarcodeRequest(product_name=product, variant_name=variant, sku=sku)
    writer = DetachedWriter(settings.writer_workers)
    try:
        response = BarcodeService(settings, writer=writer).generate(request, render_target)
    except BarcodeInputError as e:
        raise click.UsageError(str(e)) from e
    except BarcodeGenError as e:
        logger.error("Barcode generation failed: %s", e)
        raise click.ClickException(str(e)) from e
    finally:
        # --no-wait: pending writes still finish before interpreter exit
        writer.shutdown(wait=wait)
    click.echo(json.dumps(response.to_dict()))


@cli.command("encode")
@click.argument("text")
@click.option("--height", type=click.IntRange(min=1), default=10, show_default=True)
@click.option("--xdim", type=click.IntRange(min=1), default=1, show_default=True)
def encode_cmd(text: str, height: int, xdim: int) -> None:
    """Print the JSON encoding of TEXT (barcode-safe normalized)."""
    try:
        train = encode(barcode_safe(text))
    except BarcodeInputError as e:
        raise click.UsageError(str(e)) from e
    click.echo(render_json(train, height=height, xdim=xdim))


def main() -> None:
    cli()
