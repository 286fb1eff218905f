"""
Logging Examples

The client accepts any object with debug/info/warning/error(message, **context).
"""

from globalpost_client import GlobalPostAPIError, GlobalPostClient, GlobalPostLogger, LoggingConfig, MemoryLogger


def console_logging():
    """Debug logs for every attempt, colored console output."""
    print("\n=== Console logging ===")

    logger = GlobalPostLogger(LoggingConfig(level="DEBUG", format="colored"))
    client = GlobalPostClient("your-test-token", "TEST", {"debug": True}, logger=logger)

    with client, logger:
        try:
            client.get_countries()
        except GlobalPostAPIError as e:
            print(f"Request failed: {e.code}")


def json_file_logging():
    """JSON lines in a rotating file."""
    print("\n=== JSON file logging ===")

    config = LoggingConfig(
        level="INFO",
        format="json",
        console=False,
        file_path="logs/globalpost.log",
        channel="globalpost-eu",
    )

    with GlobalPostLogger(config) as logger:
        logger.warning("Retrying GlobalPost request after HTTP error.", status=503, attempt=1)
        logger.info("Token is masked", token="secret-value")

    print(open("logs/globalpost.log", encoding="utf-8").read())


def memory_logging():
    """Collect entries in memory, e.g. for a diagnostics page."""
    print("\n=== Memory logging ===")

    logger = MemoryLogger()
    with GlobalPostClient("your-test-token", "TEST", {"debug": True, "max_retries": 0}, logger=logger) as client:
        try:
            client.get_countries()
        except GlobalPostAPIError as e:
            print(f"Request failed: {e.code}")

    for level, message, context in logger.messages:
        print(f"{level:8} {message} {context}")


if __name__ == "__main__":
    console_logging()
    json_file_logging()
    memory_logging()
