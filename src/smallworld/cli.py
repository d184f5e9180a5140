import copy
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from smallworld.metrics import MetricsParams, degree_histogram
from smallworld.networks import Network, WattsStrogatzParams
from smallworld.utils.config import (
    apply_overrides,
    default_config,
    load_config,
    parse_overrides,
    validate_config,
)
from smallworld.utils.output import network_document, write_json, write_sweep
from smallworld.utils.steps import (
    analyze,
    ensure_seed,
    prepare_metrics_params,
    prepare_network_params,
)
from smallworld.utils.sweep import SweepParams, SweepResult, run_sweep

app = typer.Typer(add_completion=False)


def _fail(exc: Exception) -> None:
    typer.echo(f"Invalid parameters: {exc}", err=True)
    raise typer.Exit(code=2)


def _format_network(network: Network, metrics) -> str:
    lines = [
        f"{'avg_path_length':<20} {metrics.avg_path_length:.3f}",
        f"{'avg_clustering_coef':<20} {metrics.avg_clustering_coef:.3f}",
        f"{'small_world_index':<20} {metrics.small_world_index:.3f}",
        f"{'rewired':<20} {network.rewired_count}",
        f"{'rewire_exhausted':<20} {network.exhausted_count}",
        "",
        f"{'degree':>6} {'count':>6}",
    ]
    for deg, count in degree_histogram(network.nodes).items():
        lines.append(f"{deg:>6} {count:>6}")
    lines += ["", f"{'id':>4} {'angle':>8} {'degree':>6}"]
    for node in network.nodes:
        lines.append(f"{node.id:>4} {node.angle:>8.4f} {node.degree:>6}")
    lines += ["", f"{'source':>6} {'target':>6} {'original':>8}"]
    for edge in network.edges:
        lines.append(f"{edge.source:>6} {edge.target:>6} {str(edge.original):>8}")
    return "\n".join(lines)


def _format_sweep(result: SweepResult) -> str:
    ratios = result.normalized()
    header = (
        f"{'p':>8} {'L':>8} {'C':>8} {'index':>8} {'index_std':>9} "
        f"{'C/C0':>8} {'L/L0':>8}"
    )
    lines = [header, "-" * len(header)]
    for i, p in enumerate(result.p_values):
        lines.append(
            f"{p:>8.4g} "
            f"{result.column('avg_path_length')[i]:>8.3f} "
            f"{result.column('avg_clustering_coef')[i]:>8.3f} "
            f"{result.column('small_world_index')[i]:>8.3f} "
            f"{result.std[i, result.fieldnames.index('small_world_index')]:>9.3f} "
            f"{ratios['clustering_ratio'][i]:>8.3f} "
            f"{ratios['path_length_ratio'][i]:>8.3f}"
        )
    return "\n".join(lines)


@app.callback()
def main(
    log_level: Annotated[str, typer.Option(help="Logging level.")] = "WARNING",
) -> None:
    """Watts-Strogatz small-world network generation and metrics."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    n: Annotated[int, typer.Option(help="Number of nodes.")] = 30,
    k: Annotated[int, typer.Option(help="Lattice degree (even).")] = 4,
    p: Annotated[float, typer.Option(help="Rewiring probability.")] = 0.0,
    seed: Annotated[int | None, typer.Option(help="Random seed.")] = None,
    path_length: Annotated[str, typer.Option(help="approximate or exact.")] = "approximate",
    fmt: Annotated[str, typer.Option("--format", help="table or json.")] = "table",
    output: Annotated[str | None, typer.Option(help="Write the JSON document here.")] = None,
) -> None:
    """Generate one network and print its metrics, nodes and edges."""
    try:
        p_net = WattsStrogatzParams(n=n, k=k, p=p, seed=seed)
        p_metrics = MetricsParams(path_length=path_length)
    except ValidationError as exc:
        _fail(exc)
    if fmt not in ("table", "json"):
        _fail(ValueError(f"Unknown format '{fmt}'"))

    network, metrics = analyze(p_net, p_metrics)
    doc = network_document(network, metrics, p_net.model_dump())
    if output:
        write_json(Path(output), doc)
    if fmt == "json":
        typer.echo(json.dumps(doc, indent=2))
    else:
        typer.echo(_format_network(network, metrics))


@app.command()
def sweep(
    config: Annotated[str | None, typer.Option(help="Path to JSON config.")] = None,
    n: Annotated[int | None, typer.Option(help="Number of nodes.")] = None,
    k: Annotated[int | None, typer.Option(help="Lattice degree (even).")] = None,
    p_values: Annotated[str | None, typer.Option(help="Comma-separated p grid.")] = None,
    realizations: Annotated[int | None, typer.Option(help="Networks per p.")] = None,
    seed: Annotated[int | None, typer.Option(help="Root seed for the sweep.")] = None,
    set_: Annotated[
        list[str] | None, typer.Option("--set", help="Override, e.g. network.n=100.")
    ] = None,
    output_dir: Annotated[str, typer.Option(help="Output directory.")] = "results",
    run_id: Annotated[str, typer.Option(help="Run identifier used for output folder.")] = "sweep_local",
) -> None:
    """Average the metrics over seeded realizations for a grid of p values."""
    try:
        config_data = load_config(Path(config)) if config else default_config()
        config_data = copy.deepcopy(config_data)
        net_cfg = config_data.setdefault("network", {})
        sweep_cfg = config_data.setdefault("sweep", {})
        if not isinstance(net_cfg, dict) or not isinstance(sweep_cfg, dict):
            raise ValueError("'network' and 'sweep' must be JSON objects")
        if n is not None:
            net_cfg["n"] = n
        if k is not None:
            net_cfg["k"] = k
        if realizations is not None:
            sweep_cfg["realizations"] = realizations
        if seed is not None:
            sweep_cfg["seed"] = seed
        if p_values is not None:
            sweep_cfg["p_values"] = [float(x) for x in p_values.split(",") if x.strip()]
        if set_:
            apply_overrides(config_data, parse_overrides(set_))
        validate_config(config_data)
    except (ValueError, OSError) as exc:
        _fail(exc)

    ensure_seed(config_data, "sweep")
    p_net = prepare_network_params(config_data)
    p_metrics = prepare_metrics_params(config_data)
    p_sweep = SweepParams.model_validate(config_data["sweep"])

    if "run_id" in config_data and run_id == "sweep_local":
        run_id = config_data["run_id"]
    run_dir = Path(output_dir) / str(run_id)
    run_dir.mkdir(parents=True, exist_ok=True)
    # Persist config before the sweep so the seed survives an interruption.
    write_json(run_dir / "config_used.json", config_data)

    result = run_sweep(p_net, p_sweep, p_metrics)
    write_sweep(run_dir / "sweep.h5", result)
    typer.echo(_format_sweep(result))
    typer.echo(f"Saved sweep to {run_dir / 'sweep.h5'}")


@app.command("create-config")
def create_config(
    output: Annotated[str, typer.Option(help="Path to write the JSON config.")] = "config.json",
) -> None:
    """Write a default JSON config."""
    write_json(Path(output), default_config())


if __name__ == "__main__":
    app()
