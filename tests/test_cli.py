import httpx
import pytest

from bulkbridge.cli import build_parser, main, render_parts
from bulkbridge.client.coordinator import UploadCoordinator
from bulkbridge.client.settings import ClientSettings
from bulkbridge.client.splitter import split_parts
from bulkbridge.client.state import PartTable, UploadStatus, mark_completed, mark_uploading

MiB = 1024 * 1024


def test_parser_defaults_from_client_settings(monkeypatch):
    monkeypatch.setenv("BULKBRIDGE_API_BASE_URL", "http://api.internal:9000")
    monkeypatch.setenv("BULKBRIDGE_MAX_CONCURRENCY", "4")
    args = build_parser(ClientSettings(_env_file=None)).parse_args(["movie.mp4"])
    assert args.api == "http://api.internal:9000"
    assert args.max_concurrency == 4
    assert args.part_size == 5 * MiB


def test_render_parts_lists_every_chunk():
    coord = UploadCoordinator(httpx.AsyncClient(base_url="http://api"))
    coord.file_name = "movie.mp4"
    coord.status = UploadStatus.UPLOADING
    coord.table = PartTable(split_parts(12 * MiB, 5 * MiB))
    coord.table.apply(1, mark_uploading)
    coord.table.apply(1, mark_completed, "e1")

    out = render_parts(coord).splitlines()
    assert out[0] == "movie.mp4: uploading (1/3 chunks)"
    assert len(out) == 4
    assert "[+] Chunk    1" in out[1]
    assert "5.0 MB" in out[1]
    assert "2.0 MB" in out[3]


def test_main_rejects_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.bin")])
    assert exc.value.code == 2


@pytest.mark.parametrize(
    "flags, message",
    [
        (["--max-concurrency", "0"], "--max-concurrency must be >= 1"),
        (["--part-size", "0"], "--part-size must be >= 1"),
    ],
)
def test_main_rejects_invalid_tuning_flags(tmp_path, capsys, flags, message):
    path = tmp_path / "movie.mp4"
    path.write_bytes(b"data")
    with pytest.raises(SystemExit) as exc:
        main([str(path), *flags])
    assert exc.value.code == 2
    assert message in capsys.readouterr().err
