"""Configuration defaults for the command line tool.

The resolver never reads these; the command line passes them in explicitly.
"""
import os
from pathlib import Path
from dotenv import load_dotenv
from tzlookup.spatial.geodataframe import COARSE_RESOLUTION as DEFAULT_COARSE_RESOLUTION
from tzlookup.spatial.geodataframe import FINE_RESOLUTION as DEFAULT_FINE_RESOLUTION

# Load environment variables from .env file
load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.getenv("TZLOOKUP_DATA_DIR", PROJECT_ROOT / "data"))
COARSE_DATABASE_PATH = Path(os.getenv("TZLOOKUP_COARSE_DB", DATA_DIR / "timezone16.geojson"))
FINE_DATABASE_PATH = Path(os.getenv("TZLOOKUP_FINE_DB", DATA_DIR / "timezone21.geojson"))

# Nominal database resolutions in degrees
COARSE_RESOLUTION: float = float(os.getenv("TZLOOKUP_COARSE_RESOLUTION", str(DEFAULT_COARSE_RESOLUTION)))
FINE_RESOLUTION: float = float(os.getenv("TZLOOKUP_FINE_RESOLUTION", str(DEFAULT_FINE_RESOLUTION)))

LOG_LEVEL: str = os.getenv("TZLOOKUP_LOG_LEVEL", "WARNING")
