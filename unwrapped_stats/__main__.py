"""Entry point for stats generation"""
import glob
import json
import logging
import os
import sys
import traceback

from unwrapped_stats.config import settings
from unwrapped_stats.engine import StatsEngine
from unwrapped_stats.session import StatsSession
from unwrapped_stats.utils.formatting import format_date_european, format_time, spotify_url
from unwrapped_stats.utils.json_encoder import DateTimeEncoder

logging.basicConfig(level=settings.LOG_LEVEL, format='%(message)s')
logger = logging.getLogger(__name__)

def build_output(session: StatsSession) -> dict:
    """
    Shape a session into the results.json document.

    Stats fields sit at the top level so the file can be loaded again as
    processed stats; date_range and filterable are ignored on that path.
    """
    output = session.result.truncated(settings.TOP_LIMIT).model_dump()
    output['date_range'] = {'start': session.date_range.start, 'end': session.date_range.end}
    output['filterable'] = session.supports_filtering
    return output

def log_summary(session: StatsSession) -> None:
    """Log a short human-readable overview"""
    result = session.result
    if session.date_range.is_bounded:
        start = session.date_range.start.date() if session.date_range.start else None
        end = session.date_range.end.date() if session.date_range.end else None
        logger.info(f"Showing: {format_date_european(start)} - {format_date_european(end)}")
    logger.info(f"{result.total_streams} streams, {result.total_hours} hours listened")
    for index, artist in enumerate(result.top_artists[:5], start=1):
        link = spotify_url(artist.uri)
        suffix = f" ({link})" if link else ""
        logger.info(f"  {index}. {artist.display_name}: {format_time(artist.playtime_ms)}, {artist.play_count} plays{suffix}")

def run() -> None:
    """Compute stats for all JSON files in the input directory."""
    try:
        # Validate input directory
        if not os.path.isdir(settings.INPUT_DIR) or not os.listdir(settings.INPUT_DIR):
            raise FileNotFoundError(f"No input files found in {settings.INPUT_DIR}")

        logger.info("Using configuration:")
        logger.info(json.dumps(settings.model_dump(), indent=2, cls=DateTimeEncoder))

        paths = sorted(glob.glob(os.path.join(settings.INPUT_DIR, '*.json')))
        if not paths:
            raise FileNotFoundError(f"No .json files found in {settings.INPUT_DIR}")

        engine = StatsEngine(settings)
        session = engine.load_files(
            paths,
            on_progress=lambda current, total: logger.info(f"Processing file {current} of {total}"),
        )
        session = engine.apply_configured_filter(session)
        log_summary(session)

        # Save results
        os.makedirs(settings.OUTPUT_DIR, exist_ok=True)
        output_path = os.path.join(settings.OUTPUT_DIR, "results.json")
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(build_output(session), f, indent=2, cls=DateTimeEncoder)

        logger.info(f"Stats generation complete: {output_path}")

    except Exception as e:
        logger.error(f"Error during stats generation: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    run()
