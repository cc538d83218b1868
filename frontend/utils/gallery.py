from dataclasses import dataclass


@dataclass
class Lightbox:
    """Full-screen image viewer state for one gallery.

    Page scrolling is locked exactly while the lightbox is open.
    """

    count: int
    is_open: bool = False
    index: int = 0

    @property
    def scroll_locked(self) -> bool:
        return self.is_open

    def open(self, index: int):
        if self.count <= 0:
            return
        self.index = index % self.count
        self.is_open = True

    def close(self):
        self.is_open = False

    def next(self):
        if self.count:
            self.index = (self.index + 1) % self.count

    def previous(self):
        if self.count:
            self.index = (self.index - 1) % self.count
