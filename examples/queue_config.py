"""
Queue-related config schema, bound from the environment.
Shows defaults, a rebind after load and a timedelta field.

    python -m examples.queue_config
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated

from dotenv import load_dotenv

from envbind import Default, Env, UInt32, bind


@dataclass
class QueueConfig:
    """Config for Redis queues and annotation persistence."""

    redis_url: Annotated[str, Env("REDIS_URL"), Default("redis://localhost:6379/0")] = ""
    paper_queue: Annotated[str, Env("PAPER_QUEUE"), Default("q:papers:v1")] = ""
    paper_processing: Annotated[str, Env("PAPER_PROCESSING"), Default("q:papers:processing:v1")] = ""
    ann_queue: Annotated[str, Env("ANN_QUEUE"), Default("q:annotations:completed:v1")] = ""
    ann_flush_threshold: Annotated[UInt32, Env("ANN_FLUSH_THRESHOLD"), Default(1000)] = 0
    ann_persist_path: Annotated[str, Env("ANN_PERSIST_PATH"), Default("data_labeling/annotations.jsonl")] = ""
    ann_flush_on_exit: Annotated[bool, Env("ANN_FLUSH_ON_EXIT"), Default(True)] = False
    socket_timeout: Annotated[timedelta, Env("REDIS_SOCKET_TIMEOUT"), Default("5s")] = timedelta(0)
    queue_weights: Annotated[dict[str, float] | None, Env("QUEUE_WEIGHTS")] = None


if __name__ == "__main__":
    load_dotenv()
    binding = bind(QueueConfig())
    print(f"Loaded: {binding.record}")

    # Raise the flush threshold without touching the environment
    binding.rebind("ann_flush_threshold", "5000")
    print(f"Flush threshold now {binding.record.ann_flush_threshold}")
