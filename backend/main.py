# backend/main.py
import uvicorn

from backend.app.main import app  # noqa: F401


def run() -> None:
    uvicorn.run("backend.app.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
