"""Page image models.

A letter is submitted as an ordered set of page photographs. The PageSet owns
its pages and keeps their ``order`` values dense (0..n-1) through every
mutation, so indices shown to the user always match pipeline indices.
"""

import uuid
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..errors import InputError

VALID_ROTATIONS = (0, 90, 180, 270)
DEFAULT_MIME_TYPE = "image/jpeg"


def normalize_rotation(degrees: int) -> int:
    """Normalize a rotation to one of 0/90/180/270.

    Raises:
        InputError: If the angle is not a multiple of 90 degrees
    """
    if degrees % 90 != 0:
        raise InputError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    return degrees % 360


class PageImage(BaseModel):
    """One uploaded photograph of one physical sheet."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Opaque page identifier")
    data: bytes = Field(..., description="Encoded image bytes as uploaded")
    mime_type: str = Field(default=DEFAULT_MIME_TYPE, description="MIME type of data")
    rotation: int = Field(default=0, description="Clockwise rotation in degrees")
    order: int = Field(default=0, ge=0, description="Position in the document")

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, value: int) -> int:
        if value not in VALID_ROTATIONS:
            raise ValueError(f"rotation must be one of {VALID_ROTATIONS}")
        return value


class EncodedPage(BaseModel):
    """A preprocessed page, ready to be sent to the model."""

    data: bytes
    mime_type: str
    width: int = 0
    height: int = 0


class PageSet:
    """Ordered, capacity-bounded collection of page images.

    Adding a page beyond capacity is rejected with InputError; pages are never
    silently dropped.
    """

    def __init__(self, capacity: int = 5, pages: Optional[List[PageImage]] = None):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._pages: List[PageImage] = []
        for page in pages or []:
            self._append(page)

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[PageImage]:
        return iter(self._pages)

    def __getitem__(self, index: int) -> PageImage:
        return self._pages[index]

    @property
    def pages(self) -> List[PageImage]:
        return list(self._pages)

    @property
    def is_full(self) -> bool:
        return len(self._pages) >= self.capacity

    def add(self, data: bytes, mime_type: Optional[str] = None, rotation: int = 0) -> PageImage:
        """Append a new page at the end of the set."""
        page = PageImage(
            data=data,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            rotation=normalize_rotation(rotation),
        )
        return self._append(page)

    def get(self, page_id: str) -> PageImage:
        for page in self._pages:
            if page.id == page_id:
                return page
        raise InputError(f"Unknown page: {page_id}")

    def rotate(self, page_id: str, degrees: int = 90) -> PageImage:
        """Rotate a page clockwise by ``degrees`` (cumulative)."""
        page = self.get(page_id)
        page.rotation = normalize_rotation(page.rotation + degrees)
        return page

    def move(self, page_id: str, new_index: int) -> None:
        """Move a page to ``new_index``, shifting the pages in between."""
        if not 0 <= new_index < len(self._pages):
            raise InputError(f"Page index out of range: {new_index}")
        page = self.get(page_id)
        self._pages.remove(page)
        self._pages.insert(new_index, page)
        self._renumber()

    def swap(self, index_a: int, index_b: int) -> None:
        """Swap the pages at two positions. Other pages keep their order."""
        for index in (index_a, index_b):
            if not 0 <= index < len(self._pages):
                raise InputError(f"Page index out of range: {index}")
        self._pages[index_a], self._pages[index_b] = self._pages[index_b], self._pages[index_a]
        self._renumber()

    def remove(self, page_id: str) -> PageImage:
        page = self.get(page_id)
        self._pages.remove(page)
        self._renumber()
        return page

    def reset(self) -> None:
        self._pages.clear()

    def snapshot(self) -> "PageSet":
        """Independent deep copy, unaffected by later mutations of this set."""
        return PageSet(
            capacity=self.capacity,
            pages=[page.model_copy(deep=True) for page in self._pages],
        )

    def _append(self, page: PageImage) -> PageImage:
        if self.is_full:
            raise InputError(
                f"Too many pages: at most {self.capacity} pages can be submitted"
            )
        page.order = len(self._pages)
        self._pages.append(page)
        return page

    def _renumber(self) -> None:
        for index, page in enumerate(self._pages):
            page.order = index
