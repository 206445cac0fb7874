"""Batch conversion of legacy playlists to .blist archives."""

import logging
import sys
import time
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path

from .legacy import LegacyPlaylist

logger = logging.getLogger(__name__)

BLIST_SUFFIX = ".blist"


@dataclass
class ConversionReport:
    """Outcome of a batch conversion.

    Attributes:
        converted: Destination paths written successfully
        failures: (source path, error message) for each failed conversion
        elapsed: Wall-clock duration of the batch in seconds
        stopped_early: True if the batch was aborted after a failure
    """

    converted: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)
    elapsed: float = 0.0
    stopped_early: bool = False

    @property
    def successful(self) -> int:
        return len(self.converted)


def destination_for(path: Path) -> Path:
    """Destination of a converted playlist: same directory and stem, .blist suffix."""
    return path.with_suffix(BLIST_SUFFIX)


def convert_file(
    path: Path,
    custom_data: bool = True,
    delete_converted: bool = False,
    verbose: bool = False,
) -> Path:
    """Convert a single legacy playlist file.

    Args:
        path: Legacy playlist to convert
        custom_data: Keep unknown legacy fields as custom data
        delete_converted: Delete the legacy file once converted
        verbose: Print progress messages to stderr

    Returns:
        Path of the written .blist file

    Raises:
        FileExistsError: If the destination already exists
        BlistError: If the legacy playlist can't be converted
        OSError: If reading, writing or deleting fails
    """
    path = Path(path)
    destination = destination_for(path)
    if destination.exists():
        raise FileExistsError(f"Destination path `{destination}` already exists")

    if verbose:
        print(f"Converting `{path}` to `{destination}`", file=sys.stderr)

    playlist = LegacyPlaylist.read(path).to_playlist(preserve_custom_data=custom_data)
    data = playlist.save()
    assert data is not None

    # Same-stem sources converted in parallel must never overwrite each other
    try:
        with open(destination, "xb") as f:
            f.write(data)
    except FileExistsError:
        raise FileExistsError(f"Destination path `{destination}` already exists") from None

    if verbose:
        print(f"Done converting `{path}` to `{destination}`", file=sys.stderr)

    if delete_converted:
        if verbose:
            print(f"Deleting `{path}`", file=sys.stderr)
        path.unlink()

    return destination


def convert_paths(
    paths: Iterable[Path],
    workers: int = 1,
    custom_data: bool = True,
    delete_converted: bool = False,
    exit_on_error: bool = False,
    verbose: bool = False,
) -> ConversionReport:
    """Convert many legacy playlists.

    With more than one worker, files are converted in parallel processes.
    Failures are reported per file and never retried.

    Args:
        paths: Legacy playlists to convert
        workers: Number of worker processes
        custom_data: Keep unknown legacy fields as custom data
        delete_converted: Delete each legacy file once converted
        exit_on_error: Stop at the first failure, cancelling pending files
        verbose: Print progress messages to stderr

    Returns:
        ConversionReport describing what was converted and what failed
    """
    paths = [Path(p) for p in paths]
    report = ConversionReport()
    start = time.perf_counter()

    def record(path: Path, outcome: Path | BaseException) -> None:
        if isinstance(outcome, BaseException):
            message = str(outcome)
            print(f"Failed conversion for `{path}`: {message}", file=sys.stderr)
            report.failures.append((path, message))
        else:
            report.converted.append(outcome)

    if workers <= 1 or len(paths) <= 1:
        for path in paths:
            try:
                record(path, convert_file(path, custom_data, delete_converted, verbose))
            except Exception as e:
                record(path, e)
                if exit_on_error:
                    report.stopped_early = True
                    break
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            future_to_path: dict[Future[Path], Path] = {
                executor.submit(convert_file, path, custom_data, delete_converted, verbose): path
                for path in paths
            }
            pending = set(future_to_path)
            while pending and not report.stopped_early:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    error = future.exception()
                    record(future_to_path[future], error if error is not None else future.result())
                    if error is not None and exit_on_error:
                        report.stopped_early = True
            if report.stopped_early:
                for future in pending:
                    future.cancel()

    report.elapsed = time.perf_counter() - start
    logger.debug(
        "Converted %d of %d playlists in %.3f s", report.successful, len(paths), report.elapsed
    )
    return report
