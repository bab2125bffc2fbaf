"""Runtime configuration read from the environment (and a local ``.env``)."""

import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("FULFILLMENT_DATABASE_URL", "sqlite:///data/fulfillment.db")
# Upper bound for one checkout unit of work; also the store lock wait.
CHECKOUT_TIMEOUT_SECONDS = float(os.getenv("FULFILLMENT_CHECKOUT_TIMEOUT", 10))
LOG_LEVEL = os.getenv("FULFILLMENT_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("FULFILLMENT_LOG_FILE") or None
