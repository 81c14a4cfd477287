"""Asynchronous photo picking.

Loading picked files happens on a worker thread. Results are never applied
there: they are posted to a ``MainThreadQueue`` and applied when the main
thread calls ``drain()``. A delivery whose draft has been committed or
dismissed in the meantime is dropped.
"""

from __future__ import annotations

import io
import queue
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

from loguru import logger
from PIL import Image, UnidentifiedImageError

from photojournal.core.types import PathLike
from photojournal.journal.editor import EntryDraft, NewImage


class MainThreadQueue:
    """Callbacks posted from any thread, run on whichever thread drains."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[tuple[Callable[..., Any], tuple[Any, ...]]] = queue.SimpleQueue()

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.put((callback, args))

    def drain(self) -> int:
        """Run every pending callback. Returns how many ran."""
        count = 0
        while True:
            try:
                callback, args = self._queue.get_nowait()
            except queue.Empty:
                return count
            callback(*args)
            count += 1

    def __len__(self) -> int:
        return self._queue.qsize()


def load_picked_images(paths: Iterable[PathLike]) -> list[NewImage]:
    """Read image files, skipping anything that is missing or not an image."""
    picked: list[NewImage] = []
    for raw_path in paths:
        path = Path(raw_path).expanduser()
        try:
            data = path.read_bytes()
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except (OSError, UnidentifiedImageError) as e:
            logger.warning(f"Skipping {path}: {e}")
            continue
        picked.append(NewImage(data=data, label=path.name))
    return picked


class ImagePicker:
    """Loads photos in the background and delivers them to a draft."""

    def __init__(self, dispatcher: MainThreadQueue, executor: ThreadPoolExecutor | None = None):
        self.dispatcher = dispatcher
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="image-picker")
        self._owns_executor = executor is None

    def pick(self, draft: EntryDraft, paths: Iterable[PathLike]) -> Future[list[NewImage]]:
        """Start loading *paths*; the draft receives them on the next ``drain()``."""
        return self._executor.submit(self._load_and_post, draft, list(paths))

    def _load_and_post(self, draft: EntryDraft, paths: list[PathLike]) -> list[NewImage]:
        # Post before returning so a caller that waited on the future
        # finds the delivery already queued.
        images = load_picked_images(paths)
        self.dispatcher.post(deliver, draft, images)
        return images

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)


def deliver(draft: EntryDraft, images: list[NewImage]) -> int:
    """Apply picked images to *draft* unless it has been closed."""
    if draft.closed:
        logger.debug(f"Dropping {len(images)} picked image(s) for a closed draft")
        return 0
    return draft.add_images(images)
