"""
データモデル定義

このモジュールは fs-snapshot のドメイン層のデータモデルを定義します:
- SnapshotType: スナップショット種別 (single / pre / post)
- FsSnapshot: snapper の一覧出力から構築される不変のスナップショットレコード
"""

from typing import Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SnapshotType(str, Enum):
    """スナップショット種別"""
    SINGLE = "single"
    PRE = "pre"
    POST = "post"


class FsSnapshot(BaseModel):
    """
    ファイルシステムスナップショット

    snapper が作成したスナップショット1件を表す不変の値オブジェクトです。
    一覧取得のたびに新しく生成され、キャッシュはされません。
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "number": 4,
                "snapshot_type": "post",
                "previous_number": 3,
                "timestamp": "2015-05-13T17:03:13",
                "user": "root",
                "cleanup_algo": "number",
                "description": "zypp(zypper)",
            }
        },
    )

    number: int = Field(..., description="スナップショット番号 (snapper が採番)")
    snapshot_type: SnapshotType = Field(..., description="スナップショット種別")
    previous_number: Optional[int] = Field(
        default=None, description="対応する pre スナップショットの番号"
    )
    timestamp: datetime = Field(..., description="作成日時")
    user: str = Field(default="", description="作成ユーザー")
    cleanup_algo: Optional[str] = Field(default=None, description="クリーンアップアルゴリズム")
    description: str = Field(default="", description="説明")

    @field_validator("number")
    @classmethod
    def validate_number(cls, v: int) -> int:
        """
        スナップショット番号の正値チェック

        Raises:
            ValueError: 0 以下の値が渡された場合
        """
        if v <= 0:
            raise ValueError(f"スナップショット番号は正の整数である必要があります: {v}")
        return v

    @field_validator("cleanup_algo")
    @classmethod
    def validate_cleanup_algo(cls, v: Optional[str]) -> Optional[str]:
        """空文字列は None として扱う"""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def is_single(self) -> bool:
        return self.snapshot_type == SnapshotType.SINGLE

    @property
    def is_pre(self) -> bool:
        return self.snapshot_type == SnapshotType.PRE

    @property
    def is_post(self) -> bool:
        return self.snapshot_type == SnapshotType.POST
