import logging

import uvicorn
from mealbudget.api.api_run import app
from mealbudget.utilities.config import APP_HOST, APP_PORT, DEBUG, LOG_LEVEL


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("mealbudget_app").info("Serving on http://localhost:%s (Press CTRL+C to quit)", APP_PORT)
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
