"""
テスト共通フィクスチャ

外部コマンドは実行せず、CommandGateway のモックでコマンドごとの結果を返します。
"""

import time
from typing import Optional
from unittest.mock import Mock

import pytest

from src.fs_snapshot.adapters.command_gateway import CommandGateway, CommandResult
from src.fs_snapshot.infrastructure.settings import SnapperSettings


# snapper list の出力 (LANG=en_US.UTF-8、旧形式の表)
SNAPPER_LIST_OUTPUT = """\
Type   | #  | Pre # | Date                             | User | Cleanup  | Description           | Userdata
-------+----+-------+----------------------------------+------+----------+-----------------------+-------------
single | 0  |       |                                  | root |          | current               |
single | 1  |       | Wed 13 May 2015 04:53:57 PM WEST | root |          | first root filesystem |
single | 2  |       | Wed 13 May 2015 04:58:41 PM WEST | root | number   | after installation    | important=yes
pre    | 3  |       | Wed 13 May 2015 05:02:59 PM WEST | root | number   | zypp(zypper)          | important=no
post   | 4  | 3     | Wed 13 May 2015 05:03:13 PM WEST | root | number   | zypp(zypper)          | important=no
single | 5  |       | Wed 13 May 2015 06:00:00 PM WEST | root | timeline | timeline              |
"""

EMPTY_SNAPPER_LIST_OUTPUT = """\
Type   | # | Pre # | Date | User | Cleanup | Description | Userdata
-------+---+-------+------+------+---------+-------------+---------
single | 0 |       |      | root |         | current     |
"""

LIST_CONFIGS_OUTPUT = """\
Config | Subvolume
-------+----------
root   | /
"""


def make_gateway(
    configured: bool = True,
    listing: str = SNAPPER_LIST_OUTPUT,
    create_result: Optional[CommandResult] = None,
) -> Mock:
    """
    コマンド種別ごとに結果を返すゲートウェイのモックを作成

    Args:
        configured: list-configs に root 設定を含めるか
        listing: snapper list の出力
        create_result: installation-helper の実行結果
    """
    gateway = Mock(spec=CommandGateway)

    def execute(command):
        if "list-configs" in command.args:
            if configured:
                return CommandResult(exit_code=0, stdout=LIST_CONFIGS_OUTPUT)
            return CommandResult(exit_code=0, stdout="Config | Subvolume\n")
        if "list" in command.args:
            return CommandResult(exit_code=0, stdout=listing)
        return create_result or CommandResult(exit_code=0, stdout="6\n")

    gateway.execute.side_effect = execute
    return gateway


def list_executed_commands(gateway: Mock):
    """ゲートウェイで実行されたコマンドの引数リスト"""
    return [c.args[0].args for c in gateway.execute.call_args_list]


@pytest.fixture(autouse=True)
def host_tzname(monkeypatch):
    """ホストのタイムゾーン略称を固定 (出力例の WEST などと一致させない)"""
    monkeypatch.setattr(time, "tzname", ("JST", "JST"))


@pytest.fixture
def settings():
    """既定値の SnapperSettings"""
    return SnapperSettings()


@pytest.fixture
def gateway_factory():
    """make_gateway を返すフィクスチャ"""
    return make_gateway


@pytest.fixture
def snapper_list_output():
    """スナップショット 5 件を含む snapper list の出力"""
    return SNAPPER_LIST_OUTPUT


@pytest.fixture
def empty_snapper_list_output():
    """current 行のみの snapper list の出力"""
    return EMPTY_SNAPPER_LIST_OUTPUT


@pytest.fixture
def executed_commands():
    """ゲートウェイで実行されたコマンドの引数を取り出す関数"""
    return list_executed_commands
