"""
Before/after photo pairing by (position, state).

Works on any objects exposing ``photo_position`` and ``photo_state``, so it
can be exercised without a database. A missing state and an empty state are
the same key; photos with no position never take part.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

PhotoKey = Tuple[str, str]


@dataclass
class ComparePhotoPair:
    position: str
    photo_state: Optional[str]
    before_photo: Any = None
    after_photo: Any = None

    @property
    def key(self) -> PhotoKey:
        return (self.position, self.photo_state or "")

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "photoState": self.photo_state,
            "beforePhoto": photo_summary(self.before_photo),
            "afterPhoto": photo_summary(self.after_photo),
        }


def photo_summary(photo) -> Optional[dict]:
    if photo is None:
        return None
    return {
        "id": getattr(photo, "id", None),
        "originalPath": getattr(photo, "original_path", None),
        "thumbnailPath": getattr(photo, "thumbnail_path", None),
        "photoState": getattr(photo, "photo_state", None),
    }


def photo_key(photo) -> Optional[PhotoKey]:
    """Composite key for ``photo``, or None when it has no position."""
    position = getattr(photo, "photo_position", None)
    if not position:
        return None
    return (position, getattr(photo, "photo_state", None) or "")


def _first_by_key(photos: Iterable) -> Dict[PhotoKey, Any]:
    # First photo wins; later photos sharing a key are shadowed
    first: Dict[PhotoKey, Any] = {}
    for photo in photos:
        key = photo_key(photo)
        if key is not None and key not in first:
            first[key] = photo
    return first


def iter_photo_pairs(
    before_photos: Iterable,
    after_photos: Iterable,
    order_by: Optional[Callable[[Any], Any]] = None,
) -> Iterator[ComparePhotoPair]:
    """Yield one pair per distinct key found in either collection.

    ``order_by`` is applied (stable sort) to each collection before the
    first-wins lookup; without it the collections' own order decides which
    duplicate is used. Keys from ``before_photos`` are yielded first, then
    keys only present in ``after_photos``, each in first-seen order.
    """
    before = list(before_photos)
    after = list(after_photos)
    if order_by is not None:
        before.sort(key=order_by)
        after.sort(key=order_by)

    before_first = _first_by_key(before)
    after_first = _first_by_key(after)

    keys = list(before_first)
    keys.extend(k for k in after_first if k not in before_first)

    for position, state in keys:
        yield ComparePhotoPair(
            position=position,
            photo_state=state or None,
            before_photo=before_first.get((position, state)),
            after_photo=after_first.get((position, state)),
        )


def match_photos(
    before_photos: Iterable,
    after_photos: Iterable,
    order_by: Optional[Callable[[Any], Any]] = None,
) -> List[ComparePhotoPair]:
    return list(iter_photo_pairs(before_photos, after_photos, order_by=order_by))
