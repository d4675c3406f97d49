"""
Run the Squeeze Alert backend server.
"""
import os

# Set working directory
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)

# Load environment
from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))

# Run uvicorn
import uvicorn

from squeeze_alert.core.config import settings

if __name__ == "__main__":
    print("Starting Squeeze Alert Server...")
    print(f"Working directory: {backend_dir}")
    print(f"Dashboard: http://localhost:{settings.port}/")
    print("-" * 50)

    uvicorn.run(
        "squeeze_alert.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
