import logging
import secrets
import typing

logger = logging.getLogger(__name__)


class DiagnosticSink(typing.Protocol):
    """Receives one text line per decision milestone of a request."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class RequestDiagnostics:
    """
    Diagnostic sink bound to a single request.

    Every line is prefixed with a short request id so that lines of concurrent
    requests can be told apart in the shared log. Write errors are handled by the
    logging handlers themselves and never reach the caller.
    """

    def __init__(self, request_id: str | None = None, target: logging.Logger | None = None):
        self.request_id = request_id or secrets.token_hex(4)
        self._logger = target or logger

    def info(self, message: str) -> None:
        self._logger.info(f"[{self.request_id}] {message}")

    def warning(self, message: str) -> None:
        self._logger.warning(f"[{self.request_id}] {message}")


class MemorySink:
    """Collects diagnostic lines in memory, in emission order."""

    def __init__(self):
        self.records: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.records.append(("INFO", message))

    def warning(self, message: str) -> None:
        self.records.append(("WARNING", message))

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.records]

    @property
    def warnings(self) -> list[str]:
        return [message for level, message in self.records if level == "WARNING"]


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Set up process-wide logging, optionally mirroring records into ``log_file``."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
