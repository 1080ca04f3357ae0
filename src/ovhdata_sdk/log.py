"""
Logging setup for the command-line tool

Every invocation gets a session id (milliseconds since epoch). With -v, log
records go to stderr and to a session log file under
<tmp>/<context uuid>/<session id>-ovhdata-cli.log, which
`ovhdata-cli debug <session id>` prints back.
"""

import json
import logging
import tempfile
import time
from pathlib import Path
from typing import Optional

from .config.settings import CLI_NAME

PACKAGE_LOGGER = "ovhdata_sdk"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

SESSION_ID = str(int(time.time() * 1000))


class JsonFormatter(logging.Formatter):
    """Format each record as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'session_id': SESSION_ID,
        }
        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def log_dir(context_uuid: str) -> Path:
    return Path(tempfile.gettempdir()) / context_uuid


def session_log_path(context_uuid: str, session_id: str = SESSION_ID) -> Path:
    """Log file of a session."""
    return log_dir(context_uuid) / f"{session_id}-{CLI_NAME}.log"


def verbosity_level(verbosity: int) -> Optional[int]:
    if verbosity <= 0:
        return None
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    verbosity: int,
    context_uuid: Optional[str] = None,
    json_log: bool = False,
) -> Optional[Path]:
    """
    Configure logging for a CLI invocation.

    Args:
        verbosity: Number of -v flags; 0 keeps logging silent
        context_uuid: Context id grouping the session log files
        json_log: Write records as JSON lines

    Returns:
        Optional[Path]: Session log file, None when nothing is logged to file
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    level = verbosity_level(verbosity)
    if level is None:
        package_logger.addHandler(logging.NullHandler())
        package_logger.propagate = False
        return None

    formatter = JsonFormatter() if json_log else logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    # Only the most verbose level shows the HTTP library internals
    if verbosity >= 3:
        urllib3_logger = logging.getLogger("urllib3")
        urllib3_logger.setLevel(logging.DEBUG)
        urllib3_logger.addHandler(stream_handler)

    if context_uuid is None:
        return None

    log_file = session_log_path(context_uuid)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError as e:
        package_logger.warning(f"Unable to open log file {log_file}: {e}")
        return None

    file_handler.setFormatter(formatter)
    package_logger.addHandler(file_handler)
    if verbosity >= 3:
        logging.getLogger("urllib3").addHandler(file_handler)

    package_logger.debug(f"Session {SESSION_ID} logging to {log_file}")
    return log_file
