import logging
from datetime import datetime, timedelta
from typing import Optional


class Timer:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    def _log(self, message: str) -> None:
        if self.logger is not None:
            self.logger.debug(message)

    def start(self, start_message: str) -> None:
        self._log(start_message)
        self.start_time = datetime.now()
        self.end_time = None

    def stop(self, stop_message: str) -> None:
        self._log(stop_message)
        self.end_time = datetime.now()

    def elapsed_time(self) -> Optional[timedelta]:
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time

    def elapsed(self, elapsed_message: str) -> str:
        if self.start_time is None:
            return "Timer has not been started."
        if self.end_time is None:
            return "Timer has not been stopped."
        return f"{elapsed_message} {self.elapsed_time()}"
