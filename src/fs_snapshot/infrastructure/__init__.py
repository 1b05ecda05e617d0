"""
インフラストラクチャ層

設定読み込みと、外部ツールを記録元とするスナップショットリポジトリを提供します。
"""

from .settings import SnapperSettings
from .snapshot_repository import SnapshotRepository

__all__ = ["SnapperSettings", "SnapshotRepository"]
