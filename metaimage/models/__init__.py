from .image_ref import ResolvedImageRef
from .page_request import PageRequest
from .target_size import TargetSize
from .thumbnail import Thumbnail

__all__ = [
    "PageRequest",
    "ResolvedImageRef",
    "TargetSize",
    "Thumbnail",
]
