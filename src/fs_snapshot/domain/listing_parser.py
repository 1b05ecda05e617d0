"""
一覧出力パーサー

snapper list の表形式テキスト出力を FsSnapshot のリストに変換します。
ヘッダー行・区切り行・"current" 行の扱い、日時文字列の解釈ルールを提供します。
"""

import time
from typing import Dict, List, Optional
from datetime import datetime, timezone

from pydantic import ValidationError

from .errors import MalformedListing
from .models import FsSnapshot, SnapshotType


class SnapperListParser:
    """
    snapper 一覧出力パーサー

    ヘッダー行に続く `|` 区切りの行を 1 行 1 スナップショットとして解釈します。
    出力は入力の行順を保持し、並べ替えは行いません。
    """

    # 新しい snapper は罫線文字 (│) で列を区切る
    COLUMN_SEPARATORS = ("|", "│")

    # 区切り行 (-------+------) を構成する文字
    SEPARATOR_LINE_CHARS = frozenset("-+=─┼━╪ ")

    # ヘッダーが認識できない場合の列順
    POSITIONAL_COLUMNS = [
        "number",
        "snapshot_type",
        "previous_number",
        "timestamp",
        "user",
        "cleanup_algo",
        "description",
    ]

    # ヘッダー名 (小文字) → フィールド名
    HEADER_ALIASES = {
        "#": "number",
        "type": "snapshot_type",
        "pre #": "previous_number",
        "date": "timestamp",
        "user": "user",
        "cleanup": "cleanup_algo",
        "description": "description",
    }

    # "#" 列の既定・稼働中マーカー (例: "1*", "2+")
    NUMBER_MARKERS = "*+-"

    TIMESTAMP_FORMATS = [
        "%a %d %b %Y %I:%M:%S %p",
        "%a %d %b %Y %H:%M:%S",
        "%a %b %d %H:%M:%S %Y",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%dT%H:%M:%S",
    ]

    UTC_ZONE_NAMES = frozenset({"UTC", "GMT", "Z"})

    OUTPUT_TIMESTAMP_FORMAT = "%a %d %b %Y %I:%M:%S %p"

    HEADER = "# | Type | Pre # | Date | User | Cleanup | Description"

    @classmethod
    def parse(cls, text: str) -> List[FsSnapshot]:
        """
        一覧出力をパース

        Args:
            text: snapper list の標準出力

        Returns:
            List[FsSnapshot]: 出力の行順どおりのスナップショット
                              (データ行がなければ空リスト)

        Raises:
            MalformedListing: 行が想定した表形式と一致しない場合
        """
        snapshots: List[FsSnapshot] = []
        columns: Optional[Dict[str, int]] = None
        header_width = 0

        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip() or cls._is_separator_line(line):
                continue

            cells = cls._split_cells(line)

            # 最初の有効行はヘッダー
            if columns is None:
                columns = cls._resolve_columns(cells)
                header_width = len(cells)
                continue

            snapshot = cls._parse_row(cells, columns, header_width, line, line_number)
            if snapshot is not None:
                snapshots.append(snapshot)

        return snapshots

    @classmethod
    def format_row(cls, snapshot: FsSnapshot) -> str:
        """
        スナップショットを一覧出力の 1 行に変換

        列順は POSITIONAL_COLUMNS (HEADER と同じ) に従います。
        """
        return " | ".join([
            str(snapshot.number),
            snapshot.snapshot_type.value,
            "" if snapshot.previous_number is None else str(snapshot.previous_number),
            cls._format_timestamp(snapshot.timestamp),
            snapshot.user,
            snapshot.cleanup_algo or "",
            snapshot.description,
        ])

    @classmethod
    def format_listing(cls, snapshots: List[FsSnapshot]) -> str:
        """ヘッダー付きの一覧テキストを生成"""
        lines = [cls.HEADER]
        lines.extend(cls.format_row(snapshot) for snapshot in snapshots)
        return "\n".join(lines) + "\n"

    @classmethod
    def _is_separator_line(cls, line: str) -> bool:
        return set(line.strip()) <= cls.SEPARATOR_LINE_CHARS

    @classmethod
    def _split_cells(cls, line: str) -> List[str]:
        for separator in cls.COLUMN_SEPARATORS[1:]:
            line = line.replace(separator, cls.COLUMN_SEPARATORS[0])
        return [cell.strip() for cell in line.split(cls.COLUMN_SEPARATORS[0])]

    @classmethod
    def _resolve_columns(cls, header_cells: List[str]) -> Dict[str, int]:
        """
        ヘッダー行から列位置を決定

        必要な列名がすべて揃っていればヘッダー名で対応付け、
        そうでなければ POSITIONAL_COLUMNS の列順を使用します。
        """
        columns: Dict[str, int] = {}
        for index, cell in enumerate(header_cells):
            field = cls.HEADER_ALIASES.get(" ".join(cell.lower().split()))
            if field and field not in columns:
                columns[field] = index

        if set(columns) == set(cls.POSITIONAL_COLUMNS):
            return columns

        return {field: index for index, field in enumerate(cls.POSITIONAL_COLUMNS)}

    @classmethod
    def _parse_row(
        cls,
        cells: List[str],
        columns: Dict[str, int],
        header_width: int,
        line: str,
        line_number: int,
    ) -> Optional[FsSnapshot]:
        """
        データ行を FsSnapshot に変換

        説明に区切り文字が含まれる場合、説明の後ろの列数 (ヘッダー基準) を
        残して余分なセルを説明として結合します。

        Returns:
            Optional[FsSnapshot]: "current" 行 (番号が空または 0) の場合は None

        Raises:
            MalformedListing: 列数不足・数値/種別/日時の解釈に失敗した場合
        """
        required_width = max(columns.values()) + 1
        if len(cells) < required_width:
            raise MalformedListing(
                f"Expected at least {required_width} columns, got {len(cells)}",
                line=line,
                line_number=line_number,
            )

        number_text = cells[columns["number"]].rstrip(cls.NUMBER_MARKERS).strip()
        if number_text in ("", "0"):
            return None

        previous_text = cells[columns["previous_number"]]

        try:
            return FsSnapshot(
                number=cls._parse_int(number_text, "number", line, line_number),
                snapshot_type=cls._parse_type(
                    cells[columns["snapshot_type"]], line, line_number
                ),
                previous_number=(
                    cls._parse_int(previous_text, "previous number", line, line_number)
                    if previous_text
                    else None
                ),
                timestamp=cls._parse_timestamp(
                    cells[columns["timestamp"]], line, line_number
                ),
                user=cells[columns["user"]],
                cleanup_algo=cells[columns["cleanup_algo"]] or None,
                description=cls._join_description(cells, columns, header_width),
            )
        except ValidationError as e:
            raise MalformedListing(
                f"Invalid snapshot row: {e}",
                line=line,
                line_number=line_number,
            ) from e

    @staticmethod
    def _join_description(
        cells: List[str], columns: Dict[str, int], header_width: int
    ) -> str:
        start = columns["description"]
        # 説明より後ろの列 (例: Userdata) の数はヘッダーから決まる
        trailing = max(header_width - start - 1, 0)
        end = max(len(cells) - trailing, start + 1)
        return " | ".join(cells[start:end])

    @staticmethod
    def _parse_int(text: str, field: str, line: str, line_number: int) -> int:
        try:
            return int(text)
        except ValueError:
            raise MalformedListing(
                f"Invalid {field}: {text!r}",
                line=line,
                line_number=line_number,
            )

    @staticmethod
    def _parse_type(text: str, line: str, line_number: int) -> SnapshotType:
        try:
            return SnapshotType(text.strip().lower())
        except ValueError:
            raise MalformedListing(
                f"Unknown snapshot type: {text!r}",
                line=line,
                line_number=line_number,
            )

    @classmethod
    def _parse_timestamp(cls, text: str, line: str, line_number: int) -> datetime:
        """
        snapper の日時表記を datetime に変換

        末尾のタイムゾーン略称 (例: "WEST") を解釈します。
        UTC/GMT の場合は UTC、ホストのタイムゾーン略称 (time.tzname) と
        一致する場合はローカルタイムゾーンの aware な datetime を返します。
        それ以外の略称は読み飛ばし、ローカル時刻 (naive) として扱います。

        Raises:
            MalformedListing: いずれの書式にも一致しない場合
        """
        value = text.strip()
        tzinfo = None
        local_zone = False

        parts = value.rsplit(" ", 1)
        if len(parts) == 2 and parts[1].isalpha() and parts[1].upper() not in ("AM", "PM"):
            value, zone = parts
            if zone.upper() in cls.UTC_ZONE_NAMES:
                tzinfo = timezone.utc
            elif zone in time.tzname:
                local_zone = True

        for fmt in cls.TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
            except ValueError:
                continue
            if tzinfo:
                return parsed.replace(tzinfo=tzinfo)
            return parsed.astimezone() if local_zone else parsed

        raise MalformedListing(
            f"Invalid snapshot date: {text!r}",
            line=line,
            line_number=line_number,
        )

    @classmethod
    def _format_timestamp(cls, timestamp: datetime) -> str:
        if timestamp.tzinfo is None:
            return timestamp.strftime(cls.OUTPUT_TIMESTAMP_FORMAT)
        utc_timestamp = timestamp.astimezone(timezone.utc)
        return f"{utc_timestamp.strftime(cls.OUTPUT_TIMESTAMP_FORMAT)} UTC"
