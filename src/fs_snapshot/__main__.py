"""CLI エントリーポイント"""

import argparse
import json
import sys
import logging
from typing import List, Optional

from .adapters.subprocess_gateway import SubprocessGateway
from .domain.errors import FsSnapshotError
from .domain.listing_parser import SnapperListParser
from .domain.models import FsSnapshot, SnapshotType
from .infrastructure.settings import SnapperSettings
from .orchestration.snapshot_service import FsSnapshotService


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数パーサーを構築"""
    parser = argparse.ArgumentParser(
        prog="fs_snapshot",
        description="List and create snapper filesystem snapshots",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("configured", help="check whether snapper is configured")

    list_parser = subparsers.add_parser("list", help="list snapshots")
    list_parser.add_argument("--json", action="store_true", help="print as JSON")

    show_parser = subparsers.add_parser("show", help="show one snapshot")
    show_parser.add_argument("number", type=int)

    create_parser = subparsers.add_parser("create", help="create a snapshot")
    create_parser.add_argument(
        "snapshot_type", choices=[t.value for t in SnapshotType]
    )
    create_parser.add_argument("description")
    create_parser.add_argument(
        "--pre-num",
        type=int,
        default=None,
        help="number of the 'pre' snapshot to pair a 'post' with",
    )

    return parser


def _print_snapshots(snapshots: List[FsSnapshot], as_json: bool = False) -> None:
    if as_json:
        payload = [snapshot.model_dump(mode="json") for snapshot in snapshots]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(SnapperListParser.format_listing(snapshots), end="")


def run(args: argparse.Namespace, service: FsSnapshotService) -> int:
    """
    サブコマンドを実行

    Returns:
        int: 終了コード
    """
    if args.command == "configured":
        is_configured = service.configured()
        print("yes" if is_configured else "no")
        return 0 if is_configured else 1

    if args.command == "list":
        _print_snapshots(service.all(), as_json=args.json)
        return 0

    if args.command == "show":
        snapshot = service.find(args.number)
        if snapshot is None:
            print(f"Snapshot {args.number} not found", file=sys.stderr)
            return 1
        _print_snapshots([snapshot])
        return 0

    snapshot_type = SnapshotType(args.snapshot_type)
    if snapshot_type == SnapshotType.SINGLE:
        snapshot = service.create_single(args.description)
    elif snapshot_type == SnapshotType.PRE:
        snapshot = service.create_pre(args.description)
    else:
        snapshot = service.create_post(args.description, args.pre_num)
    _print_snapshots([snapshot])
    return 0


def main(argv: Optional[List[str]] = None):
    """
    CLI エントリーポイント

    Usage:
        python -m fs_snapshot {configured,list,show,create} ...

    Exit codes:
        0: 成功
        1: 失敗
        2: 引数エラー
    """
    args = build_parser().parse_args(argv)

    # ロギング設定 (レベルは設定読み込み後に反映)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    try:
        settings = SnapperSettings()
        logging.getLogger().setLevel(settings.log_level_numeric())

        gateway = SubprocessGateway(timeout=settings.command_timeout)
        service = FsSnapshotService(gateway=gateway, settings=settings)
        sys.exit(run(args, service))

    except FsSnapshotError as e:
        logger.error(f"{type(e).__name__}: {str(e)}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
