import logging

import uvicorn

from hippodrome.config import HOST, LOG_LEVEL, PORT
from hippodrome.main import app

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
