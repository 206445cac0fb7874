"""Tests for batch conversion of legacy playlists."""

import json
from pathlib import Path

import pytest

from blist import Playlist
from blist.converter import convert_file, convert_paths, destination_for


def write_legacy(directory: Path, name: str, title: str = "Old List", key: str = "1a2b") -> Path:
    path = directory / name
    path.write_text(json.dumps({"playlistTitle": title, "songs": [{"key": key}]}), encoding="utf-8")
    return path


class TestConvertFile:
    """Test converting one file."""

    def test_writes_blist_next_to_source(self, tmp_path: Path) -> None:
        """Test that the archive lands beside the source with a .blist suffix."""
        source = write_legacy(tmp_path, "old.bplist")

        destination = convert_file(source)

        assert destination == tmp_path / "old.blist"
        assert destination_for(source) == destination
        assert Playlist.load(destination).title == "Old List"
        assert source.exists()

    def test_delete_converted(self, tmp_path: Path) -> None:
        """Test that the source can be removed after converting."""
        source = write_legacy(tmp_path, "old.json")
        convert_file(source, delete_converted=True)
        assert not source.exists()
        assert (tmp_path / "old.blist").exists()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """Test that an existing destination is never overwritten."""
        source = write_legacy(tmp_path, "old.json")
        (tmp_path / "old.blist").write_bytes(b"keep")

        with pytest.raises(FileExistsError):
            convert_file(source)
        assert (tmp_path / "old.blist").read_bytes() == b"keep"

    def test_verbose_progress(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that verbose mode reports progress on stderr."""
        convert_file(write_legacy(tmp_path, "old.json"), verbose=True)
        err = capsys.readouterr().err
        assert "Converting" in err
        assert "Done converting" in err


class TestConvertPaths:
    """Test converting batches."""

    def test_sequential_batch_with_failure(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that a failure is reported and the rest still convert."""
        good = write_legacy(tmp_path, "a.json")
        bad = write_legacy(tmp_path, "b.json", key="not-hex")
        also_good = write_legacy(tmp_path, "c.json")

        report = convert_paths([good, bad, also_good])

        assert report.converted == [tmp_path / "a.blist", tmp_path / "c.blist"]
        assert report.successful == 2
        assert [path for path, _ in report.failures] == [bad]
        assert not report.stopped_early
        assert report.elapsed >= 0
        assert f"Failed conversion for `{bad}`" in capsys.readouterr().err

    def test_exit_on_error(self, tmp_path: Path) -> None:
        """Test that the batch stops at the first failure."""
        bad = write_legacy(tmp_path, "a.json", key="not-hex")
        skipped = write_legacy(tmp_path, "b.json")

        report = convert_paths([bad, skipped], exit_on_error=True)

        assert report.stopped_early
        assert report.converted == []
        assert not destination_for(skipped).exists()

    def test_without_custom_data(self, tmp_path: Path) -> None:
        """Test that custom data can be dropped for a whole batch."""
        source = tmp_path / "a.json"
        source.write_text(json.dumps({"playlistTitle": "x", "songs": [], "syncURL": "y"}), encoding="utf-8")

        convert_paths([source], custom_data=False)

        assert Playlist.load(tmp_path / "a.blist").custom_data == {}

    def test_parallel_batch(self, tmp_path: Path) -> None:
        """Test that worker processes convert every file."""
        sources = [write_legacy(tmp_path, f"{i}.json", title=f"List {i}") for i in range(4)]
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")

        report = convert_paths([*sources, broken], workers=2)

        assert sorted(report.converted) == sorted(destination_for(p) for p in sources)
        assert [path for path, _ in report.failures] == [broken]
        assert {Playlist.load(destination_for(p)).title for p in sources} == {f"List {i}" for i in range(4)}

    @pytest.mark.parametrize("workers", [1, 2])
    def test_same_stem_sources_never_overwrite(self, tmp_path: Path, workers: int) -> None:
        """Test that only one of two sources sharing a destination is converted."""
        first = write_legacy(tmp_path, "a.json", title="From json")
        second = write_legacy(tmp_path, "a.bplist", title="From bplist")

        report = convert_paths([first, second], workers=workers)

        assert report.converted == [tmp_path / "a.blist"]
        assert len(report.failures) == 1
        failed_path, message = report.failures[0]
        assert "already exists" in message
        expected = "From bplist" if failed_path == first else "From json"
        assert Playlist.load(tmp_path / "a.blist").title == expected
