from __future__ import annotations
import json
from pathlib import Path
from typing import List, Dict, Any
from ..config import SimConfig
from ..runtime.stats import StatsSnapshot
from . import viz


def format_stats(snapshot: StatsSnapshot) -> str:
    """Formats one run's counters as the classic five-line text block."""
    return "\n".join([
        f"Prefetch {int(snapshot.prefetch)}",
        f"Memory reads: {snapshot.reads}",
        f"Memory writes: {snapshot.writes}",
        f"Cache hits: {snapshot.hits}",
        f"Cache misses: {snapshot.misses}",
    ])


def _stats_rows(results: List[StatsSnapshot]) -> List[Dict[str, Any]]:
    return [{"run": snap.label, **snap.to_dict()} for snap in results]


def generate_report_json(results: List[StatsSnapshot], config: SimConfig) -> Dict[str, Any]:
    """Generates a JSON-compatible dictionary from the run results."""
    cache_config = config.cache_config()
    geometry = {
        "cache_size": cache_config.total_size,
        "associativity": cache_config.associativity,
        "block_size": cache_config.block_size,
        "num_sets": cache_config.num_sets,
        "block_offset_bits": cache_config.block_offset_bits,
        "set_index_bits": cache_config.set_index_bits,
        "policy": str(cache_config.policy),
    }
    report_data = {
        "config": {
            "trace_file": config.trace_file,
            "associativity": config.associativity,
            "policy": config.policy,
        },
        "geometry": geometry,
    }
    for snap in results:
        report_data[snap.label] = snap.to_dict()
    return report_data


def generate_report(results: List[StatsSnapshot], config: SimConfig):
    """Prints the stats and writes report artifacts if a report directory is set."""
    print("\n".join(format_stats(snap) for snap in results))

    if config.ascii_chart:
        print()
        print(viz.export_stats_ascii(_stats_rows(results)))

    if not config.report_dir:
        return

    report_data = generate_report_json(results, config)
    output_dir = Path(config.report_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / "report.json", "w") as f:
        json.dump(report_data, f, indent=4)

    if config.html:
        viz.export_stats_chart(_stats_rows(results), str(output_dir / "report.html"))
