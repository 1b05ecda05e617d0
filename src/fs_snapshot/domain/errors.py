"""
例外定義

スナップショット操作で呼び出し元に通知されるエラー種別を定義します。
いずれも内部でリトライ・回復はせず、そのまま呼び出し元へ伝播します。
"""

from typing import Optional


class FsSnapshotError(Exception):
    """スナップショット操作エラーの基底クラス"""


class SnapperNotConfigured(FsSnapshotError):
    """
    snapper 未設定例外

    設定の事前チェックに失敗したことを表します。
    この例外が送出された場合、外部コマンドは一切実行されていません。
    """

    def __init__(self, config_name: str = "root"):
        """
        Args:
            config_name: 存在しなかった snapper 設定名
        """
        super().__init__(f"Snapper configuration '{config_name}' is not available")
        self.config_name = config_name


class SnapshotCreationFailed(FsSnapshotError):
    """
    スナップショット作成失敗例外

    作成コマンドが 0 以外で終了した場合、または出力からスナップショット番号を
    読み取れなかった場合を表します。
    """

    def __init__(
        self,
        message: str,
        snapshot_type: Optional[str] = None,
        exit_code: Optional[int] = None,
        output: Optional[str] = None,
    ):
        """
        Args:
            message: エラーメッセージ
            snapshot_type: 作成しようとしたスナップショット種別
            exit_code: 作成コマンドの終了コード
            output: 作成コマンドの出力
        """
        super().__init__(message)
        self.snapshot_type = snapshot_type
        self.exit_code = exit_code
        self.output = output


class PreviousSnapshotNotFound(FsSnapshotError):
    """
    対応する pre スナップショット未検出例外

    指定された番号が存在しない場合、または一覧から対応可能な pre
    スナップショットを特定できなかった場合を表します。
    """

    def __init__(self, message: str, previous_number: Optional[int] = None):
        """
        Args:
            message: エラーメッセージ
            previous_number: 呼び出し元が指定した pre スナップショット番号
        """
        super().__init__(message)
        self.previous_number = previous_number


class MalformedListing(FsSnapshotError):
    """
    一覧出力パースエラー例外

    snapper list の出力が想定した表形式と一致しない場合を表します。
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        """
        Args:
            message: エラーメッセージ
            line: パースに失敗した行
            line_number: パースに失敗した行番号 (1 始まり)
        """
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class SnapshotListingFailed(FsSnapshotError):
    """一覧取得コマンドが 0 以外で終了した場合の例外"""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code
