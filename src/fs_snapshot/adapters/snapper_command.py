"""
snapper コマンドビルダー

外部コマンドの引数ベクトルと環境変数を型付きで組み立てます。
実行は CommandGateway が一括して担当します。
"""

from typing import Dict, Optional, Tuple, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict, Field

from ..domain.models import SnapshotType

if TYPE_CHECKING:
    from ..infrastructure.settings import SnapperSettings


class SnapperCommand(BaseModel):
    """
    外部コマンド 1 回分の呼び出し内容

    シェルを経由せず、args をそのまま実行します。
    """

    model_config = ConfigDict(frozen=True)

    args: Tuple[str, ...] = Field(..., description="引数ベクトル (先頭は実行ファイル)")
    env: Dict[str, str] = Field(default_factory=dict, description="上書きする環境変数")

    @classmethod
    def list_configs(cls, settings: "SnapperSettings") -> "SnapperCommand":
        """登録済み snapper 設定の一覧取得コマンド"""
        return cls(args=(settings.snapper_bin, "--no-dbus", "list-configs"))

    @classmethod
    def list_snapshots(cls, settings: "SnapperSettings") -> "SnapperCommand":
        """
        スナップショット一覧取得コマンド

        日時の表記を固定するため LANG と LC_ALL を listing_locale に設定します。
        (LC_ALL は LANG より優先されるため両方を上書きする)
        """
        return cls(
            args=(
                settings.snapper_bin,
                "--no-dbus",
                "-c",
                settings.config_name,
                "list",
            ),
            env={"LANG": settings.listing_locale, "LC_ALL": settings.listing_locale},
        )

    @classmethod
    def create(
        cls,
        settings: "SnapperSettings",
        snapshot_type: SnapshotType,
        description: str,
        pre_number: Optional[int] = None,
    ) -> "SnapperCommand":
        """
        スナップショット作成コマンド (installation-helper)

        Args:
            settings: snapper 連携設定
            snapshot_type: 作成するスナップショット種別
            description: 説明
            pre_number: post の場合に対応付ける pre スナップショット番号
        """
        args = [
            settings.installation_helper_bin,
            "--step",
            str(settings.installation_step),
            "--snapshot-type",
            snapshot_type.value,
            "--description",
            description,
        ]
        if pre_number is not None:
            args.extend(["--pre-num", str(pre_number)])
        return cls(args=tuple(args))

    def __str__(self) -> str:
        prefix = "".join(f"{key}={value} " for key, value in self.env.items())
        return prefix + " ".join(self.args)
