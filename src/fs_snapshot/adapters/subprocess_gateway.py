"""
subprocess ゲートウェイ

CommandGateway を subprocess.run で実装します。
"""

from typing import Optional
import logging
import os
import subprocess

from .command_gateway import CommandGateway, CommandResult
from .snapper_command import SnapperCommand


class SubprocessGateway(CommandGateway):
    """
    ローカルプロセスとして外部コマンドを実行

    シェルは使用せず、引数ベクトルをそのまま渡します。
    """

    # シェルの慣習に合わせた終了コード
    EXIT_COMMAND_NOT_FOUND = 127
    EXIT_TIMEOUT = 124

    def __init__(self, timeout: Optional[float] = None):
        """
        SubprocessGateway を初期化

        Args:
            timeout: コマンドのタイムアウト秒数。None の場合は完了まで待機。
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def execute(self, command: SnapperCommand) -> CommandResult:
        """
        コマンドを実行

        Returns:
            CommandResult: 実行結果

        Note:
            - 実行ファイルが見つからない場合は終了コード 127
            - タイムアウトした場合は終了コード 124
        """
        self.logger.debug(f"Executing: {command}")

        env = None
        if command.env:
            env = {**os.environ, **command.env}

        try:
            completed = subprocess.run(
                list(command.args),
                capture_output=True,
                text=True,
                env=env,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            self.logger.warning(
                f"Command timed out after {self.timeout}s: {command}",
                extra={"timeout": self.timeout},
            )
            return CommandResult(
                exit_code=self.EXIT_TIMEOUT,
                stderr=f"Timed out after {self.timeout}s",
            )
        except OSError as e:
            self.logger.warning(
                f"Command could not be started: {command}",
                extra={"error": str(e)},
            )
            return CommandResult(exit_code=self.EXIT_COMMAND_NOT_FOUND, stderr=str(e))

        self.logger.debug(
            f"Command finished with exit code {completed.returncode}: {command}"
        )
        return CommandResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
