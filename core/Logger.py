# core/Logger.py

import logging
from datetime import datetime, timezone
from termcolor import colored
from core import config

LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "debug": logging.DEBUG,
}


class AppLogger:
    def __init__(self, name: str = "orders_gateway"):
        self.logger = logging.getLogger(name)

    def log(self, event: str, data: dict, store: str = None, level: str = "info"):
        log_entry = {
            "event": event,
            "level": level,
            "store": store,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        self.logger.log(
            LEVELS.get(level, logging.INFO), "%s store=%s data=%s", event, store, data, extra={"entry": log_entry}
        )

        # Only print in development
        if config.IS_DEV:
            icon = {
                "info": "ℹ️",
                "success": "✅",
                "warning": "⚠️",
                "error": "❌",
                "debug": "🐞"
            }.get(level, "🔍")

            color = {
                "info": "blue",
                "success": "green",
                "warning": "yellow",
                "error": "red",
                "debug": "cyan"
            }.get(level, "white")

            label = colored(f"[{level.upper()}]", color)
            target = f" ({store})" if store else ""
            print(f"{icon} {label} {event}{target} {data}")

        return log_entry
