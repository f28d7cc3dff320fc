import uvicorn

from ipstack_client.logger import log_config


def main() -> None:
    """Run the ipstack FastAPI service with uvicorn."""
    uvicorn.run(
        "ipstack_client.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_config=log_config,
    )


if __name__ == "__main__":
    main()
