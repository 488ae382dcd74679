#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Creates the tables on the configured database, then serves the API with
auto-reload. For production run uvicorn (or gunicorn with uvicorn workers)
against ``app.main:app`` directly.
"""
import os
import sys
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from app.init_db import create_tables

if __name__ == "__main__":
    create_tables()
    print("Starting development server at http://localhost:8000 (docs at /docs)")
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
