from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from .config import DATA_DIR, OUTPUT_DIR
from .engine import (
    EngineHandle,
    get_genes_for_line,
    list_genes,
    get_tdna_line_details,
    get_tdna_lines,
    get_visualization_bundle,
)
from .modules.output_generator import write_outputs
from .modules.table_reader import load_data_dir
from .utils.exceptions import TDNAError


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(ctx: click.Context) -> EngineHandle:
    try:
        return load_data_dir(ctx.obj["data_dir"])
    except TDNAError as exc:
        raise click.ClickException(str(exc)) from exc


def run_bundle(
    handle: EngineHandle,
    gene_id: str,
    outdir: Path = OUTPUT_DIR,
    write_metadata_json: bool = True,
) -> tuple[Path, Path | None, dict]:
    bundle = get_visualization_bundle(handle, gene_id)
    bundle_path, metadata_path = write_outputs(
        bundle=bundle,
        outdir=outdir,
        write_metadata_json=write_metadata_json,
        load_summary=handle.load_summary(),
    )
    return bundle_path, metadata_path, {
        "gene_id": bundle.gene.id,
        "bundle_path": str(bundle_path),
        "metadata_path": str(metadata_path) if metadata_path else None,
        "n_features": len(bundle.features),
        "n_insertions": len(bundle.insertions),
        "has_coding_sequence": bundle.has_coding_sequence,
        "warnings": bundle.warnings,
    }


@click.group()
@click.option(
    "--data-dir",
    default=str(DATA_DIR),
    type=click.Path(file_okay=False, path_type=Path),
    help="directory holding the annotation, confirmed-insertion and location tables",
)
@click.option("--debug", is_flag=True, default=False)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, debug: bool):
    _configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


@cli.command()
@click.argument("gene_id")
@click.pass_context
def lines(ctx: click.Context, gene_id: str):
    """List confirmed T-DNA lines inserted in GENE_ID's coding sequence."""
    handle = _load(ctx)
    try:
        found = get_tdna_lines(handle, gene_id)
    except TDNAError as exc:
        raise click.ClickException(str(exc)) from exc
    if not found:
        click.echo(f"No confirmed homozygous T-DNA lines sent to the stock center were found in {gene_id.upper()}")
        return
    for line_id in found:
        click.echo(line_id)


@cli.command()
@click.argument("gene_id")
@click.option("--json", "as_json", is_flag=True, default=False, help="print JSON instead of a table")
@click.pass_context
def details(ctx: click.Context, gene_id: str, as_json: bool):
    """Show insertion positions and confirmation metadata for GENE_ID."""
    handle = _load(ctx)
    try:
        matches = get_tdna_line_details(handle, gene_id)
    except TDNAError as exc:
        raise click.ClickException(str(exc)) from exc
    if as_json:
        click.echo(json.dumps([match.model_dump() for match in matches], indent=2))
        return
    for match in matches:
        click.echo(
            f"{match.line_id}\t{match.chromosome}\t{match.position}\t"
            f"{match.hit_region}\t{match.homozygosity_status}\t{match.stock_center_status}"
        )


@cli.command()
@click.argument("gene_id")
@click.option("--outdir", default=str(OUTPUT_DIR), type=click.Path(file_okay=False, path_type=Path), help="output directory")
@click.option("--write-metadata-json/--no-write-metadata-json", default=True)
@click.pass_context
def bundle(ctx: click.Context, gene_id: str, outdir: Path, write_metadata_json: bool):
    """Write the visualization bundle for GENE_ID as JSON."""
    handle = _load(ctx)
    try:
        bundle_path, metadata_path, summary = run_bundle(
            handle,
            gene_id,
            outdir=outdir,
            write_metadata_json=write_metadata_json,
        )
    except TDNAError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Bundle: {bundle_path}")
    if metadata_path:
        click.echo(f"Metadata: {metadata_path}")
    click.echo(f"Features: {summary['n_features']}")
    click.echo(f"Insertions: {summary['n_insertions']}")
    if not summary["has_coding_sequence"]:
        click.echo("- gene has no CDS features in the annotation")
    for warning in summary["warnings"]:
        click.echo(f"- {warning}")


@cli.command("genes-for-line")
@click.argument("line_id")
@click.pass_context
def genes_for_line(ctx: click.Context, line_id: str):
    """List genes with an eligible confirmed insertion for LINE_ID."""
    handle = _load(ctx)
    try:
        genes = get_genes_for_line(handle, line_id)
    except TDNAError as exc:
        raise click.ClickException(str(exc)) from exc
    if not genes:
        click.echo(f"No genes found for T-DNA line {line_id.upper()}")
        return
    for gene in genes:
        click.echo(gene)


@cli.command("genes")
@click.option("--annotated", is_flag=True, default=False, help="list every gene in the annotation instead")
@click.pass_context
def genes_cmd(ctx: click.Context, annotated: bool):
    """List genes with at least one eligible confirmed T-DNA line."""
    handle = _load(ctx)
    for gene in list_genes(handle, annotated=annotated):
        click.echo(gene)


if __name__ == "__main__":
    cli()
