"""Batch file reading and format detection for uploaded exports"""
import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from pydantic import ValidationError

from unwrapped_stats.errors import FileReadError, FormatError, ParseError
from unwrapped_stats.models.stats import StatsResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# Either spelling marks a processed stats file
AGGREGATED_KEY_SETS = (
    ('top_artists', 'top_songs', 'top_albums'),
    ('topArtists', 'topSongs', 'topAlbums'),
)

@dataclass
class DetectedBatch:
    """Outcome of format detection: exactly one of the two fields is set"""
    aggregated: Optional[StatsResult] = None
    raw_events: Optional[List[Any]] = None

    @property
    def is_raw(self) -> bool:
        return self.raw_events is not None

def read_json_file(path: str) -> Any:
    """Read and parse one export file"""
    filename = os.path.basename(path)
    if not filename.lower().endswith('.json'):
        raise FileReadError(filename, "is not a JSON file")
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise FileReadError(filename) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse {path}: {e}")
        raise ParseError(filename) from e

def read_batch(paths: Sequence[str], workers: int = 4,
               on_progress: Optional[ProgressCallback] = None) -> List[Any]:
    """
    Read every file of a batch in parallel.

    Returns payloads in the order of `paths`. Any failing file fails the whole
    batch and the files still queued are cancelled.
    """
    if not paths:
        return []

    total = len(paths)
    executor = ThreadPoolExecutor(max_workers=max(1, min(workers, total)))
    try:
        futures = [executor.submit(read_json_file, path) for path in paths]
        done = 0
        for future in as_completed(futures):
            future.result()
            done += 1
            if on_progress:
                on_progress(done, total)
        payloads = [future.result() for future in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)

    logger.info(f"Read {total} file(s)")
    return payloads

def looks_aggregated(payload: Any) -> bool:
    """True when payload is an object carrying all three top lists"""
    if not isinstance(payload, dict):
        return False
    return any(all(key in payload for key in keys) for keys in AGGREGATED_KEY_SETS)

def detect_format(payloads: Sequence[Any]) -> DetectedBatch:
    """
    Decide between processed stats and raw history from the first payload.

    A processed first payload wins outright and the rest of the batch is
    discarded. A raw first payload makes every payload a raw array, merged in
    batch order.
    """
    if not payloads:
        raise FormatError("No files provided")

    first = payloads[0]
    if looks_aggregated(first):
        if len(payloads) > 1:
            logger.info(f"Processed stats file detected; ignoring {len(payloads) - 1} additional file(s)")
        try:
            return DetectedBatch(aggregated=StatsResult.model_validate(first))
        except ValidationError as e:
            logger.error(f"Processed stats file failed validation: {e}")
            raise FormatError() from e

    if isinstance(first, list):
        merged: List[Any] = []
        for index, payload in enumerate(payloads):
            if not isinstance(payload, list):
                logger.error(f"Payload {index} in a raw history batch is not an array")
                raise FormatError()
            merged.extend(payload)
        logger.info(f"Merged {len(payloads)} raw history file(s) into {len(merged)} records")
        return DetectedBatch(raw_events=merged)

    raise FormatError()
