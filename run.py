"""Development entry point: `python run.py`."""

import importlib
import logging
import os

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.main import create_app

load_dotenv(override=False)
settings = importlib.import_module(get_settings_module())

logging.basicConfig(
    level=getattr(settings, "LOG_LEVEL", "INFO"),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)

app = create_app()

if __name__ == "__main__":
    logging.info("[Main] Starting Flask app...")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=bool(getattr(settings, "DEBUG", False)))
