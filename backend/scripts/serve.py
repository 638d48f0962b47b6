"""Run the API under uvicorn.

Host and port are read from `HOST` and `PORT`; defaults are `0.0.0.0`
and `8000`. Everything else comes from the usual settings variables.
"""
import os
import pathlib
import sys

import uvicorn

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from roi_api.main import app


if __name__ == '__main__':
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())
