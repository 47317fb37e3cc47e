import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()
BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_DIR / "templates"

SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Slider defaults, g/kg
DEFAULT_PROTEIN_PER_KG = float(os.getenv("DEFAULT_PROTEIN_PER_KG", "2.0"))
DEFAULT_FAT_PER_KG = float(os.getenv("DEFAULT_FAT_PER_KG", "1.0"))
DEFAULT_CARBS_PER_KG = float(os.getenv("DEFAULT_CARBS_PER_KG", "3.3"))
