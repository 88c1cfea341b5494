# File: app/core/common/enums.py

from enum import Enum, unique


@unique
class ContainerFormat(str, Enum):
    """Target containers a clip can be delivered in. MP4 is the primary one."""
    MP4 = "mp4"
    WEBM = "webm"

    @property
    def media_type(self) -> str:
        return f"video/{self.value}"
