"""Event Hub batch sender - publish copies of a payload in broker-sized batches."""

__version__ = "1.0.0"

from .batcher import BatchSender, send_messages  # noqa: E402
from .config import SendRequest  # noqa: E402
from .core import SendReport  # noqa: E402

__all__ = ["BatchSender", "SendRequest", "SendReport", "send_messages", "__version__"]
