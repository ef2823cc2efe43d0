from pathlib import Path

import pytest

from sirtiles.core.models import ShardAddress, TileCoordinate
from sirtiles.tiling.address import letter_zoom, resolve, resolve_coordinate, zoom_letter


def test_resolve_known_tile() -> None:
    address = resolve(300, 70, 10)

    assert address == ShardAddress(
        subdirectory="K",
        shard_file="K_1_0.s",
        table="K_4_1",
        row=428,
    )
    assert address.relative_path == Path("K") / "K_1_0.s"
    assert address.shard_path("/data/repo") == Path("/data/repo/K/K_1_0.s")


def test_resolve_is_deterministic() -> None:
    assert resolve(123456, 654321, 20) == resolve(123456, 654321, 20)


@pytest.mark.parametrize("zoom", [0, 1, 5, 8])
def test_low_zooms_share_level_nine_partitioning(zoom: int) -> None:
    assert resolve(17, 3, zoom) == resolve(17, 3, 9)
    assert TileCoordinate(17, 3, zoom).shard_zoom == 9


def test_rows_cover_a_table_block_exactly_once() -> None:
    base_x, base_y = 64 * 7, 64 * 3
    rows = set()
    tables = set()
    for dx in range(64):
        for dy in range(64):
            address = resolve(base_x + dx, base_y + dy, 15)
            assert 0 <= address.row <= 4095
            rows.add(address.row)
            tables.add(address.table)

    assert rows == set(range(4096))
    assert tables == {"P_7_3"}


def test_shard_spans_sixteen_tables() -> None:
    tables = {resolve(x, y, 12).table for x in range(0, 256, 64) for y in range(0, 256, 64)}
    shards = {resolve(x, y, 12).shard_file for x in range(0, 256, 64) for y in range(0, 256, 64)}

    assert len(tables) == 16
    assert shards == {"M_0_0.s"}


def test_letter_helpers() -> None:
    assert zoom_letter(3) == "J"
    assert zoom_letter(25) == "Z"
    assert letter_zoom("O_0_0") == 14
    assert resolve_coordinate(TileCoordinate(300, 70, 10)) == resolve(300, 70, 10)


def test_zoom_above_letter_range_is_not_remapped() -> None:
    assert resolve(0, 0, 26).subdirectory == "["


def test_letter_keeps_counting_past_signed_byte_range() -> None:
    assert zoom_letter(63) == chr(128)
    assert letter_zoom(zoom_letter(100)) == 100
