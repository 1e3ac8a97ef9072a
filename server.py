import uvicorn
from loguru import logger

from api.app import create_app
from config import LOG_FILE, PORT

logger.add(LOG_FILE, rotation="10 MB", compression="zip")

app = create_app()

if __name__ == "__main__":
    logger.info(f"Backend server running on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT, log_level="info")
