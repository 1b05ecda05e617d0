"""
コマンドゲートウェイ抽象基底クラス

外部コマンド (snapper / installation-helper) の実行方法を抽象化します。
テストではこのクラスを継承した偽実装に差し替えます。
"""

from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict, Field

from .snapper_command import SnapperCommand


class CommandResult(BaseModel):
    """
    外部コマンドの実行結果

    Attributes:
        exit_code: 終了コード
        stdout: 標準出力
        stderr: 標準エラー出力
    """

    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: str = Field(default="")
    stderr: str = Field(default="")

    @property
    def succeeded(self) -> bool:
        """終了コードが 0 なら True"""
        return self.exit_code == 0


class CommandGateway(ABC):
    """
    外部コマンド実行の抽象インターフェース

    コマンドの組み立ては SnapperCommand、結果の解釈は呼び出し側が担当し、
    このクラスは実行のみを受け持ちます。
    """

    @abstractmethod
    def execute(self, command: SnapperCommand) -> CommandResult:
        """
        コマンドを実行し、完了まで待機

        Args:
            command: 実行するコマンド

        Returns:
            CommandResult: 終了コードと出力

        Note:
            0 以外の終了コードは例外にせず、CommandResult として返す
        """
        pass
