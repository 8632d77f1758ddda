# dylib_relocate/relocator.py
from typing import Any, Dict, Optional, Tuple

from dylib_relocate.extractor import DependencyExtractor
from dylib_relocate.fixer import ReferenceFixer
from dylib_relocate.graph import DependencyGraphBuilder
from dylib_relocate.models import DependencyGraph, RelocationSummary
from dylib_relocate.stager import CopyStager
from dylib_relocate.toolchain import BinaryToolchain, MachOToolchain


def relocate_executable(
    exec_path: str,
    target_dir: str,
    fix_base_dir: str,
    app_config: Optional[Dict[str, Any]] = None,
    toolchain: Optional[BinaryToolchain] = None,
) -> Tuple[DependencyGraph, RelocationSummary]:
    """
    Makes an executable independent of where its dylibs are installed.

    Runs three strictly ordered passes: discover the dependency closure,
    copy every library into target_dir with a new install name, then
    rewrite the references held by the executable and by each copy.

    Args:
        exec_path: The executable to relocate. It is patched in place.
        target_dir: Directory receiving the library copies.
        fix_base_dir: Prefix of each copy's new install name, e.g. "@executable_path/../lib/".
        app_config: Loaded application config (see utils.config_loader).
        toolchain: Binary tools to use. Defaults to the macOS command line tools.

    Returns:
        The discovered graph and the run's summary counts.

    Raises:
        RelocationError: Any failure aborts the run. Copies made before the
            failure stay on disk.
    """
    app_config = app_config if app_config else {}
    toolchain = toolchain if toolchain else MachOToolchain(app_config)

    # Built up front so configuration errors surface before any tool runs.
    extractor = DependencyExtractor(toolchain, target_dir, fix_base_dir, app_config)
    stager = CopyStager(toolchain, toolchain, app_config)
    fixer = ReferenceFixer(toolchain, app_config)

    graph = DependencyGraphBuilder(extractor, app_config).build(exec_path)
    copied = stager.stage(graph, target_dir)
    fixed = fixer.fix(graph, graph.root, target_dir)

    summary = RelocationSummary(
        root=graph.root,
        dependencies_found=len(graph),
        libraries_copied=copied,
        libraries_fixed=fixed,
    )
    return graph, summary
