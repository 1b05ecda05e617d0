"""CLI エントリーポイントのテスト"""

import json
import pytest
from datetime import datetime
from unittest.mock import Mock, patch

from src.fs_snapshot.__main__ import build_parser, main, run
from src.fs_snapshot.domain.errors import PreviousSnapshotNotFound, SnapperNotConfigured
from src.fs_snapshot.domain.models import FsSnapshot


def _snapshot(number=2, snapshot_type="pre", previous_number=None):
    return FsSnapshot(
        number=number,
        snapshot_type=snapshot_type,
        previous_number=previous_number,
        timestamp=datetime(2015, 5, 13, 17, 2, 59),
        user="root",
        cleanup_algo="number",
        description="zypp(zypper)",
    )


class TestRun:
    """サブコマンド実行のテストケース"""

    @pytest.fixture
    def mock_service(self):
        """モック FsSnapshotService"""
        return Mock()

    def test_configured_yes(self, mock_service, capsys):
        """設定済みの場合は yes を出力し 0 を返すこと"""
        mock_service.configured.return_value = True

        assert run(build_parser().parse_args(["configured"]), mock_service) == 0
        assert capsys.readouterr().out.strip() == "yes"

    def test_configured_no(self, mock_service, capsys):
        """未設定の場合は no を出力し 1 を返すこと"""
        mock_service.configured.return_value = False

        assert run(build_parser().parse_args(["configured"]), mock_service) == 1
        assert capsys.readouterr().out.strip() == "no"

    def test_list_table(self, mock_service, capsys):
        """一覧を表形式で出力すること"""
        mock_service.all.return_value = [_snapshot()]

        assert run(build_parser().parse_args(["list"]), mock_service) == 0

        out = capsys.readouterr().out
        assert out.splitlines()[0] == "# | Type | Pre # | Date | User | Cleanup | Description"
        assert "2 | pre |  | Wed 13 May 2015 05:02:59 PM | root | number | zypp(zypper)" in out

    def test_list_json(self, mock_service, capsys):
        """--json の場合は JSON で出力すること"""
        mock_service.all.return_value = [_snapshot()]

        assert run(build_parser().parse_args(["list", "--json"]), mock_service) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["number"] == 2
        assert payload[0]["snapshot_type"] == "pre"

    def test_show_missing(self, mock_service, capsys):
        """存在しない番号の場合は 1 を返すこと"""
        mock_service.find.return_value = None

        assert run(build_parser().parse_args(["show", "100"]), mock_service) == 1
        mock_service.find.assert_called_once_with(100)

    def test_create_single(self, mock_service):
        """create single は create_single を呼ぶこと"""
        mock_service.create_single.return_value = _snapshot(snapshot_type="single")

        assert run(build_parser().parse_args(["create", "single", "d"]), mock_service) == 0
        mock_service.create_single.assert_called_once_with("d")

    def test_create_post_with_pre_num(self, mock_service):
        """create post --pre-num は番号を渡すこと"""
        mock_service.create_post.return_value = _snapshot(3, "post", 2)

        args = build_parser().parse_args(["create", "post", "d", "--pre-num", "2"])
        assert run(args, mock_service) == 0
        mock_service.create_post.assert_called_once_with("d", 2)

    def test_create_post_without_pre_num(self, mock_service):
        """--pre-num 省略時は None を渡すこと"""
        mock_service.create_post.return_value = _snapshot(3, "post", 2)

        run(build_parser().parse_args(["create", "post", "d"]), mock_service)
        mock_service.create_post.assert_called_once_with("d", None)


class TestMain:
    """main() のテストケース"""

    @patch("src.fs_snapshot.__main__.FsSnapshotService")
    @patch("src.fs_snapshot.__main__.SubprocessGateway")
    def test_main_success_exits_with_zero(self, mock_gateway_class, mock_service_class):
        """成功時に終了コード 0 で終了することを確認"""
        mock_service_class.return_value.all.return_value = []

        with pytest.raises(SystemExit) as exc_info:
            main(["list"])

        assert exc_info.value.code == 0
        mock_gateway_class.assert_called_once()
        mock_service_class.assert_called_once()

    @patch("src.fs_snapshot.__main__.FsSnapshotService")
    @patch("src.fs_snapshot.__main__.SubprocessGateway")
    def test_main_not_configured_exits_with_one(self, mock_gateway_class, mock_service_class):
        """SnapperNotConfigured の場合は終了コード 1 で終了することを確認"""
        mock_service_class.return_value.all.side_effect = SnapperNotConfigured("root")

        with pytest.raises(SystemExit) as exc_info:
            main(["list"])

        assert exc_info.value.code == 1

    @patch("src.fs_snapshot.__main__.FsSnapshotService")
    @patch("src.fs_snapshot.__main__.SubprocessGateway")
    def test_main_pairing_failure_exits_with_one(self, mock_gateway_class, mock_service_class):
        """PreviousSnapshotNotFound の場合は終了コード 1 で終了することを確認"""
        mock_service_class.return_value.create_post.side_effect = PreviousSnapshotNotFound("none")

        with pytest.raises(SystemExit) as exc_info:
            main(["create", "post", "d"])

        assert exc_info.value.code == 1

    def test_main_invalid_arguments_exit_with_two(self):
        """引数エラーの場合は終了コード 2 で終了することを確認"""
        with pytest.raises(SystemExit) as exc_info:
            main(["create", "weekly", "d"])

        assert exc_info.value.code == 2

    @patch("src.fs_snapshot.__main__.SubprocessGateway")
    def test_main_invalid_settings_exits_with_one(self, mock_gateway_class, monkeypatch, caplog):
        """環境変数の設定値が不正な場合は終了コード 1 で終了することを確認"""
        monkeypatch.setenv("FS_SNAPSHOT_INSTALLATION_STEP", "abc")

        with pytest.raises(SystemExit) as exc_info:
            main(["list"])

        assert exc_info.value.code == 1
        assert "Unexpected error" in caplog.text
        mock_gateway_class.assert_not_called()

    @patch("src.fs_snapshot.__main__.FsSnapshotService")
    @patch("src.fs_snapshot.__main__.SubprocessGateway")
    def test_main_unexpected_error_exits_with_one(self, mock_gateway_class, mock_service_class):
        """予期しない例外の場合は終了コード 1 で終了することを確認"""
        mock_service_class.return_value.all.side_effect = RuntimeError("boom")

        with pytest.raises(SystemExit) as exc_info:
            main(["list"])

        assert exc_info.value.code == 1
