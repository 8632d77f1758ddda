import json
from pathlib import Path
from typing import Any, Dict, Optional

from dylib_relocate.models import DependencyGraph, RelocationSummary


def save_relocation_report(
    graph: DependencyGraph,
    summary: RelocationSummary,
    output_path: Path,
) -> None:
    """
    Writes the dependency graph and run summary of a relocation to a JSON file.

    Raises:
        OSError: If the file cannot be written.
    """
    report = {
        "summary": summary.model_dump(),
        "graph": graph.model_dump(),
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=4)
    print(f"Report: Saved relocation report to {output_path.resolve()}")


def load_relocation_report(input_path: Path) -> Optional[Dict[str, Any]]:
    """
    Loads a report written by save_relocation_report.

    Returns:
        A dict with "summary" and "graph" models, or None if the file is
        missing or does not hold a valid report.
    """
    if not input_path.exists():
        print(f"Report Warning: Report file not found at {input_path.resolve()}")
        return None

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        return {
            "summary": RelocationSummary.model_validate(raw["summary"]),
            "graph": DependencyGraph.model_validate(raw["graph"]),
        }
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Report Error: Could not read relocation report {input_path.resolve()}: {e}")
        return None
    except OSError as e:
        print(f"Report Error: Could not open relocation report {input_path.resolve()}: {e}")
        return None
