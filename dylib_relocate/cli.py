"""Command line entry point: relocate an executable and its dylibs."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dylib_relocate.exceptions import RelocationError
from dylib_relocate.relocator import relocate_executable
from dylib_relocate.report_io import save_relocation_report
from dylib_relocate.utils.config_loader import load_app_config


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Copy an executable's third-party dylibs next to it and rewrite their install names"
    )
    # Optional so that an incomplete invocation is a silent no-op rather than a usage error.
    parser.add_argument("exec_path", nargs="?", help="Executable to relocate (patched in place)")
    parser.add_argument("target_dir", nargs="?", help="Directory receiving the library copies")
    parser.add_argument(
        "fix_base_dir", nargs="?", help="Install name prefix for the copies, e.g. @executable_path/../lib/"
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Optional config YAML"
    )
    parser.add_argument(
        "--report", type=Path, default=None, help="Write the dependency graph and summary as JSON"
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if not (args.exec_path and args.target_dir and args.fix_base_dir):
        return 0

    app_config = load_app_config(args.config)
    if args.verbose:
        app_config.setdefault("general", {})["verbose"] = True

    print(f"Exec path: {args.exec_path}")
    print(f"Target lib folder: {args.target_dir}")
    print(f"Fix lib base folder: {args.fix_base_dir}")

    try:
        graph, summary = relocate_executable(
            args.exec_path, args.target_dir, args.fix_base_dir, app_config
        )
    except RelocationError as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return 1

    for canonical_path in graph.entries:
        print(canonical_path)

    if args.report:
        try:
            save_relocation_report(graph, summary, args.report)
        except OSError as e:
            print(f"Fatal: Could not write report {args.report}: {e}", file=sys.stderr)
            return 1

    print(
        f"All done. {summary.dependencies_found} dylibs are used, "
        f"{summary.libraries_copied} copied, {summary.libraries_fixed} fixed."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
