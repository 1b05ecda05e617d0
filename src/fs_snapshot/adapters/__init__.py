"""
アダプター層

snapper / installation-helper の外部コマンド組み立てと実行を提供します。
"""

from .snapper_command import SnapperCommand
from .command_gateway import CommandGateway, CommandResult
from .subprocess_gateway import SubprocessGateway

__all__ = ["SnapperCommand", "CommandGateway", "CommandResult", "SubprocessGateway"]
