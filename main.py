import os

import uvicorn

from academy.app import app


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("ACADEMY_HOST", "127.0.0.1"),
        port=int(os.environ.get("ACADEMY_PORT", "8000")),
    )
