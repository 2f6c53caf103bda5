import uvicorn

from srbrowser.utils.logging import setup_logging

if __name__ == "__main__":
    setup_logging("srbrowser.log")
    uvicorn.run("srbrowser.main:app", host="127.0.0.1", port=8080, log_config=None, log_level=None)
