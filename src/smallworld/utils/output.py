import json
from pathlib import Path

import h5py
import numpy as np

from smallworld.metrics import NetworkMetrics, degree_histogram
from smallworld.networks import Network
from smallworld.utils.sweep import SweepResult


def network_document(network: Network, metrics: NetworkMetrics, params: dict) -> dict:
    doc = {"params": params, "metrics": metrics.as_dict()}
    doc["degree_histogram"] = {
        str(deg): count for deg, count in degree_histogram(network.nodes).items()
    }
    doc.update(network.to_dict())
    return doc


def write_json(path: Path, data: dict) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


def write_sweep(path: Path, result: SweepResult) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ratios = result.normalized()
    with h5py.File(path, "w", libver="latest") as fh:
        fh.create_dataset("p_values", data=result.p_values)
        for name in ("mean", "std"):
            fh.create_dataset(
                name,
                data=getattr(result, name),
                compression="gzip",
                compression_opts=4,
            )
        fh.create_dataset("baseline", data=result.baseline)
        fh.create_dataset("exhausted", data=result.exhausted)
        for name, values in ratios.items():
            fh.create_dataset(name, data=values)
        fh.attrs["fieldnames"] = np.asarray(result.fieldnames, dtype="S")
        fh.attrs["count"] = int(result.count)


def read_sweep(path: Path) -> SweepResult:
    with h5py.File(path, "r") as fh:
        fieldnames = tuple(s.decode("utf-8") for s in fh.attrs["fieldnames"].tolist())
        return SweepResult(
            p_values=fh["p_values"][...],
            mean=fh["mean"][...],
            std=fh["std"][...],
            count=int(fh.attrs["count"]),
            baseline=fh["baseline"][...],
            exhausted=fh["exhausted"][...],
            fieldnames=fieldnames,
        )
