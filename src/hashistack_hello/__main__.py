"""Run the service with ``python -m hashistack_hello``."""
import uvicorn

from hashistack_hello.app import app
from hashistack_hello.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
