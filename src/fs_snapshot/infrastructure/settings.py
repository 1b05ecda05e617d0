"""
設定

snapper 実行ファイルのパスや設定名などを環境変数 (FS_SNAPSHOT_*) から読み込みます。
設定値は不変で、各コンポーネントへ明示的に渡されます。
"""

import logging
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SnapperSettings(BaseSettings):
    """
    snapper 連携設定

    Attributes:
        snapper_bin: snapper コマンドのパス
        installation_helper_bin: installation-helper のパス
        config_name: 対象とする snapper 設定名
        installation_step: installation-helper に渡すステップ番号
        listing_locale: 一覧取得時に強制するロケール (日時表記を固定するため)
        command_timeout: 外部コマンドのタイムアウト秒数 (None で無制限)
        log_level: ログレベル
    """

    snapper_bin: str = Field(default="/usr/bin/snapper")
    installation_helper_bin: str = Field(default="/usr/lib/snapper/installation-helper")
    config_name: str = Field(default="root")
    installation_step: int = Field(default=5)
    listing_locale: str = Field(default="en_US.UTF-8")
    command_timeout: Optional[float] = Field(default=None)
    log_level: LogLevelName = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="FS_SNAPSHOT_",
        frozen=True,
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """ログレベル文字列を logging の数値レベルに変換"""
        return getattr(logging, self.log_level, logging.INFO)
