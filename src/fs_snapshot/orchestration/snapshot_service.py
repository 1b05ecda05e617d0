"""スナップショット作成オーケストレーションサービス"""

from typing import List, Optional
import logging

from ..adapters.command_gateway import CommandGateway
from ..adapters.snapper_command import SnapperCommand
from ..domain.errors import SnapshotCreationFailed
from ..domain.models import FsSnapshot, SnapshotType
from ..domain.pairing_resolver import PairingResolver
from ..infrastructure.settings import SnapperSettings
from ..infrastructure.snapshot_repository import SnapshotRepository


class FsSnapshotService:
    """
    スナップショット操作の公開窓口

    Responsibilities:
    - 設定の事前チェック (未設定時は外部コマンドを実行せず即座に失敗)
    - single / pre / post スナップショットの作成
    - post 作成時の pre スナップショット解決 (PairingResolver へ委譲)
    - 一覧取得・番号検索 (SnapshotRepository へ委譲)

    Note:
        排他制御は行わない。pre/post の作成は単一の呼び出し元から
        逐次実行される前提。
    """

    def __init__(
        self,
        gateway: CommandGateway,
        settings: SnapperSettings,
        repository: Optional[SnapshotRepository] = None,
        pairing_resolver: Optional[PairingResolver] = None,
    ):
        """
        FsSnapshotService を初期化

        Args:
            gateway: 外部コマンド実行ゲートウェイ
            settings: snapper 連携設定
            repository: スナップショットリポジトリ (None の場合は gateway から生成)
            pairing_resolver: pre スナップショット解決 (None の場合は repository から生成)
        """
        self.gateway = gateway
        self.settings = settings
        self.repository = repository or SnapshotRepository(gateway, settings)
        self.pairing_resolver = pairing_resolver or PairingResolver(self.repository)
        self.logger = logging.getLogger(__name__)

    def configured(self) -> bool:
        """snapper の設定が登録されていれば True"""
        return self.repository.is_configured()

    def all(self) -> List[FsSnapshot]:
        """スナップショット一覧を取得"""
        return self.repository.list_all()

    def find(self, number: int) -> Optional[FsSnapshot]:
        """番号でスナップショットを検索 (見つからなければ None)"""
        return self.repository.find(number)

    def previous(self, snapshot: FsSnapshot) -> Optional[FsSnapshot]:
        """snapshot が参照する pre スナップショットを取得"""
        return self.repository.previous(snapshot)

    def create_single(self, description: str) -> FsSnapshot:
        """
        single スナップショットを作成

        Args:
            description: 説明

        Returns:
            FsSnapshot: 作成されたスナップショット

        Raises:
            SnapperNotConfigured: snapper が未設定の場合
            SnapshotCreationFailed: 作成コマンドが失敗した場合
        """
        self.repository.ensure_configured()
        return self._create(SnapshotType.SINGLE, description)

    def create_pre(self, description: str) -> FsSnapshot:
        """
        pre スナップショットを作成

        Args:
            description: 説明

        Returns:
            FsSnapshot: 作成されたスナップショット

        Raises:
            SnapperNotConfigured: snapper が未設定の場合
            SnapshotCreationFailed: 作成コマンドが失敗した場合
        """
        self.repository.ensure_configured()
        return self._create(SnapshotType.PRE, description)

    def create_post(
        self, description: str, previous_number: Optional[int] = None
    ) -> FsSnapshot:
        """
        post スナップショットを作成

        Args:
            description: 説明
            previous_number: 対応付ける pre スナップショット番号。
                             省略時は最新の未対応 pre を自動解決。

        Returns:
            FsSnapshot: 作成されたスナップショット

        Raises:
            SnapperNotConfigured: snapper が未設定の場合
            PreviousSnapshotNotFound: 対応する pre スナップショットが見つからない場合
            SnapshotCreationFailed: 作成コマンドが失敗した場合
        """
        self.repository.ensure_configured()
        pre_number = self.pairing_resolver.resolve(previous_number)
        return self._create(SnapshotType.POST, description, pre_number)

    def _create(
        self,
        snapshot_type: SnapshotType,
        description: str,
        pre_number: Optional[int] = None,
    ) -> FsSnapshot:
        """
        installation-helper を実行し、作成されたスナップショットを取得

        Raises:
            SnapshotCreationFailed: 終了コードが 0 以外、出力が番号でない、
                                    または作成後の一覧に見つからない場合
        """
        command = SnapperCommand.create(
            self.settings, snapshot_type, description, pre_number
        )
        self.logger.info(
            f"Creating {snapshot_type.value} snapshot",
            extra={"description": description, "pre_number": pre_number},
        )

        result = self.gateway.execute(command)
        if not result.succeeded:
            self.logger.error(
                f"Snapshot could not be created: {command} "
                f"returned {result.exit_code}",
                extra={"stdout": result.stdout, "stderr": result.stderr},
            )
            raise SnapshotCreationFailed(
                f"Creation of {snapshot_type.value} snapshot failed "
                f"with exit code {result.exit_code}",
                snapshot_type=snapshot_type.value,
                exit_code=result.exit_code,
                output=result.stderr or result.stdout,
            )

        number = self._parse_snapshot_number(result.stdout)
        if number is None:
            self.logger.error(
                f"Snapshot could not be created: unexpected output from {command}",
                extra={"stdout": result.stdout},
            )
            raise SnapshotCreationFailed(
                f"Unexpected output from installation helper: {result.stdout!r}",
                snapshot_type=snapshot_type.value,
                exit_code=result.exit_code,
                output=result.stdout,
            )

        snapshot = self.repository.find(number)
        if snapshot is None:
            self.logger.error(
                f"Snapshot could not be created: snapshot {number} is not listed",
                extra={"number": number},
            )
            raise SnapshotCreationFailed(
                f"Snapshot {number} was reported as created but is not listed",
                snapshot_type=snapshot_type.value,
                exit_code=result.exit_code,
                output=result.stdout,
            )

        self.logger.info(
            f"Created {snapshot_type.value} snapshot {number}",
            extra={"number": number, "pre_number": pre_number},
        )
        return snapshot

    @staticmethod
    def _parse_snapshot_number(output: str) -> Optional[int]:
        """
        installation-helper の標準出力からスナップショット番号を取得

        Returns:
            Optional[int]: 正の整数として解釈できない場合は None
        """
        try:
            number = int(output.strip())
        except ValueError:
            return None
        return number if number > 0 else None
