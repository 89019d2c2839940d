"""Entry point for the token explorer proxy service."""

import asyncio
import signal

from loguru import logger

from config.settings import settings
from token_explorer.api.server import run_server
from token_explorer.utils.logger import setup_logger


async def main() -> None:
    setup_logger(json_logs=settings.json_logs, level="INFO")
    logger.info("Starting token explorer proxy...")

    # Graceful shutdown on SIGINT/SIGTERM
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    server_task = asyncio.create_task(run_server())

    # Wait for either the server to exit or a shutdown signal
    done, pending = await asyncio.wait(
        [server_task, asyncio.create_task(shutdown_event.wait())],
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    if server_task in done:
        server_task.result()  # re-raises if uvicorn crashed

    logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
