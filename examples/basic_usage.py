"""
Basic usage example for spinlog.

Shows the three drivers: the system log (default), daily files and Elastic
Common Schema documents on stdout.
"""

import tempfile

from spinlog import LoggerBuilder, get_logger


def main() -> None:
    # Structured ECS documents, written as they happen
    ecs = get_logger(
        "orders",
        {
            "level": "debug",
            "driver": "ecs",
            "drivers": {
                "ecs": {
                    "output": "stdout",
                    "tags": ["example"],
                    "service": {"name": "orders", "version": "1.0.0"},
                }
            },
        },
    )
    ecs.info("Order placed", order_id=42, amount=19.99)
    # A context "message" is kept as custom_message
    ecs.warning("Payment retried", {"message": "gateway timeout"})
    try:
        1 / 0
    except ZeroDivisionError:
        ecs.exception("Total could not be computed")
    ecs.close()

    # Daily files under <base_path>/logs, written when the buffer is flushed
    with tempfile.TemporaryDirectory() as base_path:
        files = (
            LoggerBuilder("app")
            .with_level("info")
            .with_base_path(base_path)
            .use_file("logs")
            .with_line_format("%datetime% [%level_name%] %message% %context%")
            .with_buffer(100, flush_overflow_to_disk=True)
            .build()
        )
        with files:
            files.info("User signed in", user_id="12345")
            files.error("Disk almost full", free_mb=12)

    # System log, level "error" by default
    system = get_logger("app")
    system.error("Something went wrong")
    system.close()


if __name__ == "__main__":
    main()
