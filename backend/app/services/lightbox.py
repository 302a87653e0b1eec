"""
Lightbox: full-screen preview of one gallery item.

Two states only, closed and open. Close, a click on the backdrop itself,
or the Escape key all close it, and closing always blanks the image and
caption so a stale preview never flashes on the next open.
"""
import threading
from dataclasses import dataclass

ESCAPE_KEY = "Escape"


@dataclass(frozen=True)
class LightboxState:
    is_open: bool = False
    image_url: str = ""
    caption: str = ""


class Lightbox:

    def __init__(self):
        self._state = LightboxState()
        self._lock = threading.Lock()

    @property
    def state(self) -> LightboxState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    def open(self, url: str, caption: str = "") -> LightboxState:
        with self._lock:
            self._state = LightboxState(is_open=True, image_url=url or "", caption=caption or "")
            return self._state

    def close(self) -> LightboxState:
        with self._lock:
            self._state = LightboxState()
            return self._state

    def backdrop_click(self, target_is_backdrop: bool) -> LightboxState:
        """Clicks on the image or caption bubble up here and must not close."""
        if target_is_backdrop:
            return self.close()
        return self._state

    def key_press(self, key: str) -> LightboxState:
        if key == ESCAPE_KEY:
            return self.close()
        return self._state
