"""
ドメイン層

スナップショットのデータモデル・一覧パース・pre/post 対応付けロジックを提供します。
"""

from .models import SnapshotType, FsSnapshot
from .errors import (
    FsSnapshotError,
    SnapperNotConfigured,
    SnapshotCreationFailed,
    PreviousSnapshotNotFound,
    MalformedListing,
    SnapshotListingFailed,
)
from .listing_parser import SnapperListParser
from .pairing_resolver import PairingResolver

__all__ = [
    "SnapshotType",
    "FsSnapshot",
    "FsSnapshotError",
    "SnapperNotConfigured",
    "SnapshotCreationFailed",
    "PreviousSnapshotNotFound",
    "MalformedListing",
    "SnapshotListingFailed",
    "SnapperListParser",
    "PairingResolver",
]
