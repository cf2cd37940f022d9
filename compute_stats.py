import glob
import os

from unwrapped_stats.config import settings
from unwrapped_stats.engine import StatsEngine
from unwrapped_stats.utils.json_encoder import json_dumps

# Create engine instance
engine = StatsEngine(settings)

# Load every export in the input directory
session = engine.load_files(sorted(glob.glob(os.path.join(settings.INPUT_DIR, '*.json'))))
session = engine.apply_configured_filter(session)

# Print results
print(json_dumps(session.result.truncated(settings.TOP_LIMIT).model_dump(), indent=2))
