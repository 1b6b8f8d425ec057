"""
JSON-lines logging for the relay and the editor.

`setup_logging` owns the root logger: calling it again replaces the handler
instead of stacking a second one.
"""

import json
import logging
from datetime import datetime, timezone

# uvicorn installs its own handlers; route them through ours
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def setup_logging(level: "str | int" = "INFO") -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    for name in _UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
