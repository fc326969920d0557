"""Entry point for running the API server as a module.

Allows running with: python -m src.api
"""

import os

import uvicorn
from dotenv import load_dotenv

from src.paths import ENV_FILE


def main() -> None:
    """Run the API with uvicorn."""
    load_dotenv(ENV_FILE)
    uvicorn.run(
        "src.api.app:app",
        host=os.environ.get("API_HOST", "0.0.0.0"),
        port=int(os.environ.get("API_PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
