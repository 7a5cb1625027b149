"""Loading benchmark files for the CLI.

A benchmark file is a Python module that registers benchmarks at import
time, either on the default suite through ``microbench.bench`` or on a
module-level ``suite = Suite()`` of its own. Exactly one file is loaded per
run.
"""

import importlib.util
import sys
from pathlib import Path

from microbench.errors import BenchmarkFileError
from microbench.registry import Suite, default_suite
from microbench.utils.logger import Logger

log = Logger.child("loader")


def load_benchmark_file(path: str | Path) -> Suite:
    """Import a benchmark file and return the suite it registered on.

    The default suite is cleared first so that repeated loads in one
    process do not accumulate benchmarks.

    Args:
        path: Path to a ``.py`` file.

    Returns:
        The module's ``suite`` attribute if it is a Suite, else the default
        suite.

    Raises:
        BenchmarkFileError: If the file is missing, not Python, or raises
            while being imported.
    """
    filepath = Path(path)
    if not filepath.is_file():
        raise BenchmarkFileError(str(path), "file not found")
    if filepath.suffix != ".py":
        raise BenchmarkFileError(str(path), "not a Python file")

    default_suite.clear()

    module_name = f"microbench_file_{filepath.stem}"
    spec = importlib.util.spec_from_file_location(module_name, filepath)
    if spec is None or spec.loader is None:
        raise BenchmarkFileError(str(path), "cannot create import spec")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise BenchmarkFileError(str(path), f"{type(e).__name__}: {e}") from e

    suite = getattr(module, "suite", None)
    if not isinstance(suite, Suite):
        suite = default_suite

    log.info("Loaded %d benchmark(s) from %s", len(suite), filepath)
    return suite
