"""Batch orchestration over many independent files."""
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from bleedfix.types import FixConfig, FileResult, BatchResult
from bleedfix.pipeline import process_file

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, FileResult], None]


def resolve_worker_count(config: FixConfig, n_files: int) -> int:
    """Pool size: hardware parallelism (or the configured count), capped by the file count."""
    if config.parallel_workers <= 0:
        workers = os.cpu_count() or 1
    else:
        workers = config.parallel_workers
    return max(1, min(workers, n_files))


def run_batch(
    paths: Sequence[Union[str, Path]],
    config: Optional[FixConfig] = None,
    progress: Optional[ProgressCallback] = None
) -> BatchResult:
    """
    Fix every file in ``paths`` on a bounded thread pool.

    Files are independent and complete in any order. Counters belong to
    the returned BatchResult and are only updated here, as futures
    complete, so ``fixed + failed == len(paths)``.

    Args:
        paths: Already validated image paths
        config: Configuration (uses defaults if None)
        progress: Called with (index, total, result) per completed file

    Returns:
        BatchResult with counters, per-file results and elapsed time
    """
    config = config or FixConfig()
    paths = [Path(p) for p in paths]
    results = BatchResult(total=len(paths))

    start_time = time.time()

    if not paths:
        return results

    max_workers = resolve_worker_count(config, len(paths))
    logger.debug(f"Processing {len(paths)} files with {max_workers} workers")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_path = {
            executor.submit(process_file, path, config): path for path in paths
        }

        for i, future in enumerate(as_completed(future_to_path)):
            path = future_to_path[future]
            try:
                result = future.result()
            except Exception as e:
                # process_file converts its own failures; this only guards the pool
                logger.exception(f"Worker failed for {path}")
                result = FileResult(
                    path=str(path), success=False, error="unexpected", message=str(e)
                )

            results.record(result)

            if progress is not None:
                progress(i + 1, len(paths), result)

    results.elapsed = time.time() - start_time
    return results
