"""
スナップショットリポジトリ

snapper を記録元として、スナップショットの一覧取得・番号検索を提供します。
"""

from typing import List, Optional
import logging

from ..adapters.command_gateway import CommandGateway
from ..adapters.snapper_command import SnapperCommand
from ..domain.errors import SnapperNotConfigured, SnapshotListingFailed
from ..domain.listing_parser import SnapperListParser
from ..domain.models import FsSnapshot
from .settings import SnapperSettings


class SnapshotRepository:
    """
    スナップショット参照

    呼び出しのたびに一覧コマンドを実行してパースし直します (キャッシュなし)。
    複数回の検索で一貫したビューが必要な場合は、list_all() の結果を再利用してください。
    """

    def __init__(self, gateway: CommandGateway, settings: SnapperSettings):
        """
        SnapshotRepository を初期化

        Args:
            gateway: 外部コマンド実行ゲートウェイ
            settings: snapper 連携設定
        """
        self.gateway = gateway
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        """
        snapper の設定が登録されているかを確認

        Returns:
            bool: settings.config_name の設定が存在すれば True
        """
        self.logger.info(
            f"Checking if Snapper is configured: {self.settings.config_name}"
        )
        result = self.gateway.execute(SnapperCommand.list_configs(self.settings))
        if not result.succeeded:
            return False

        for line in result.stdout.splitlines():
            name = line.replace("│", "|").split("|")[0].strip()
            if name == self.settings.config_name:
                return True
        return False

    def ensure_configured(self) -> None:
        """
        設定の事前チェック

        Raises:
            SnapperNotConfigured: 設定が存在しない場合
        """
        if not self.is_configured():
            raise SnapperNotConfigured(self.settings.config_name)

    def list_all(self) -> List[FsSnapshot]:
        """
        スナップショット一覧を取得

        Returns:
            List[FsSnapshot]: snapper の出力順のスナップショット一覧

        Raises:
            SnapperNotConfigured: snapper が未設定の場合 (一覧コマンドは実行しない)
            SnapshotListingFailed: 一覧コマンドが 0 以外で終了した場合
            MalformedListing: 出力が想定した表形式でない場合
        """
        self.ensure_configured()

        self.logger.info("Retrieving snapshots list")
        result = self.gateway.execute(SnapperCommand.list_snapshots(self.settings))
        if not result.succeeded:
            self.logger.error(
                f"Snapshots list could not be retrieved (exit code {result.exit_code})",
                extra={"stderr": result.stderr},
            )
            raise SnapshotListingFailed(
                f"snapper list failed: {result.stderr.strip()}",
                exit_code=result.exit_code,
            )

        snapshots = SnapperListParser.parse(result.stdout)
        self.logger.info(f"Found {len(snapshots)} snapshots")
        return snapshots

    def find(self, number: int) -> Optional[FsSnapshot]:
        """
        番号でスナップショットを検索

        Args:
            number: スナップショット番号

        Returns:
            Optional[FsSnapshot]: 見つからない場合は None
        """
        for snapshot in self.list_all():
            if snapshot.number == number:
                return snapshot
        return None

    def previous(self, snapshot: FsSnapshot) -> Optional[FsSnapshot]:
        """
        post スナップショットに対応する pre スナップショットを取得

        Args:
            snapshot: 基準となるスナップショット

        Returns:
            Optional[FsSnapshot]: previous_number が未設定、または見つからない場合は None
        """
        if snapshot.previous_number is None:
            return None
        return self.find(snapshot.previous_number)
