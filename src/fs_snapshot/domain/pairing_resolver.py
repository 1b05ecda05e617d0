"""
pre/post 対応付けロジック

新しく作成する post スナップショットが参照すべき pre スナップショットを決定します。
"""

from typing import List, Optional, TYPE_CHECKING
import logging

from .errors import PreviousSnapshotNotFound
from .models import FsSnapshot

if TYPE_CHECKING:
    from ..infrastructure.snapshot_repository import SnapshotRepository


class PairingResolver:
    """
    pre スナップショット解決

    pre → post の括り (bracket) は同時に 1 つだけ開いている前提で、
    間に作成された single スナップショットは対応付けを妨げません。
    """

    def __init__(self, repository: "SnapshotRepository"):
        """
        PairingResolver を初期化

        Args:
            repository: スナップショット一覧・検索用リポジトリ
        """
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def resolve(self, previous_number: Optional[int] = None) -> int:
        """
        post スナップショットに対応する pre スナップショット番号を解決

        Args:
            previous_number: 呼び出し元が明示した pre スナップショット番号

        Returns:
            int: 対応付ける pre スナップショットの番号

        Raises:
            PreviousSnapshotNotFound: 対応する pre スナップショットが見つからない場合
            SnapperNotConfigured: snapper が未設定の場合

        Note:
            - 明示された番号は存在確認のみ行い、種別はチェックしない
            - 省略時は番号の降順に走査し、single を読み飛ばした最初の
              スナップショットが pre であればそれを採用する
        """
        if previous_number is not None:
            return self._resolve_explicit(previous_number)

        return self._resolve_latest_open_pre(self.repository.list_all())

    def _resolve_explicit(self, previous_number: int) -> int:
        if self.repository.find(previous_number) is None:
            self.logger.error(
                f"Previous filesystem snapshot was not found: {previous_number}",
                extra={"previous_number": previous_number},
            )
            raise PreviousSnapshotNotFound(
                f"Snapshot {previous_number} does not exist",
                previous_number=previous_number,
            )
        return previous_number

    def _resolve_latest_open_pre(self, snapshots: List[FsSnapshot]) -> int:
        """
        一覧から未対応の pre スナップショットを探す

        Args:
            snapshots: 現在のスナップショット一覧 (順序は問わない)

        Returns:
            int: 最新の未対応 pre スナップショットの番号

        Raises:
            PreviousSnapshotNotFound: 最新の非 single が post の場合、
                                      または非 single が存在しない場合
        """
        for snapshot in sorted(snapshots, key=lambda s: s.number, reverse=True):
            if snapshot.is_single:
                continue

            if snapshot.is_pre:
                return snapshot.number

            # 最新の非 single が post: 開いている pre はない
            self.logger.error(
                "Previous filesystem snapshot was not found: "
                f"latest non-single snapshot {snapshot.number} is already a 'post'",
                extra={"latest_number": snapshot.number},
            )
            raise PreviousSnapshotNotFound(
                f"Snapshot {snapshot.number} already closes the last pre/post pair"
            )

        self.logger.error(
            "Previous filesystem snapshot was not found: no 'pre' snapshot in listing",
            extra={"snapshots_count": len(snapshots)},
        )
        raise PreviousSnapshotNotFound("No 'pre' snapshot is available")
