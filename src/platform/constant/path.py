from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory (file sink is only attached in DEBUG mode)
LOG_DIR = BASE_DIR / 'logs'
