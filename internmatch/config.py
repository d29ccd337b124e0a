import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Matching
MATCHING_VERSION = "v1.1"
DEFAULT_TOP_N = 10

# Skill normalization (rapidfuzz score, 0-100)
SKILL_MATCH_THRESHOLD = int(os.getenv("SKILL_MATCH_THRESHOLD", "90"))
SKILL_CATALOG_PATH = Path(os.getenv("SKILL_CATALOG_PATH", "data/skills.json"))

# Admin preview
PREVIEW_STUDENT_LIMIT = 150

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
