"""Tests for the ``safe-gpx`` command line."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

import pytest
from lxml import etree

from safe_gpx import __version__
from safe_gpx.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main

if TYPE_CHECKING:
    from pathlib import Path

HOME_AREA = "29.2140,53.1370,29.2120,53.1365"
TRKPT = "{http://www.topografix.com/GPX/1/1}trkpt"


@pytest.fixture()
def ride(three_points_gpx: Path, tmp_path: Path) -> Path:
    target = tmp_path / "ride.gpx"
    shutil.copy(three_points_gpx, target)
    return target


class TestSuccessfulRuns:
    """Exit code 0 and the output file."""

    def test_default_output_name(self, ride: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([str(ride), "-s", HOME_AREA])

        output = ride.with_name("ride_safe.gpx")
        assert code == EXIT_OK
        assert output.exists()
        assert sum(1 for _ in etree.parse(str(output)).iter(TRKPT)) == 1
        assert "Removed 2 of 3 track point(s)" in capsys.readouterr().out

    def test_explicit_output(self, ride: Path, tmp_path: Path) -> None:
        output = tmp_path / "public.gpx"
        assert main([str(ride), "--skip-area", HOME_AREA, "-o", str(output)]) == EXIT_OK
        assert output.exists()

    def test_several_areas(self, ride: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([str(ride), "-s", HOME_AREA, "-s", "29.2010,53.0990,29.1990,53.1010"])

        assert code == EXIT_OK
        assert "Removed 3 of 3 track point(s)" in capsys.readouterr().out

    def test_polygon_area(self, ride: Path, capsys: pytest.CaptureFixture[str]) -> None:
        triangle = "29.2200,53.1300,29.2100,53.1300,29.2100,53.1400"
        assert main([str(ride), "-s", triangle]) == EXIT_OK
        assert "Removed 2 of 3 track point(s)" in capsys.readouterr().out

    def test_verbose_lists_regions(
        self, ride: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="safe_gpx"):
            assert main([str(ride), "-s", HOME_AREA, "-v"]) == EXIT_OK

        assert "Region 1: [(29.214000, 53.137000)" in caplog.text
        assert "Skipping track point (29.213000, 53.136800)" in caplog.text


class TestUsageErrors:
    """Argument problems exit with status 2."""

    def test_no_area(self, ride: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(ride)])
        assert exc_info.value.code == EXIT_USAGE

    def test_malformed_area(self, ride: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(ride), "-s", "1,2,3"])
        assert exc_info.value.code == EXIT_USAGE
        assert "latitude/longitude pairs" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"safe-gpx {__version__}"


class TestFailures:
    """Domain errors exit with status 1 and leave no output."""

    def test_single_point_area(self, ride: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="safe_gpx"):
            assert main([str(ride), "-s", "29.2,53.1"]) == EXIT_FAILURE

        assert "REGION_INVALID" in caplog.text
        assert not ride.with_name("ride_safe.gpx").exists()

    def test_missing_input(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="safe_gpx"):
            code = main([str(tmp_path / "missing.gpx"), "-s", HOME_AREA])

        assert code == EXIT_FAILURE
        assert "STREAM_FAILED" in caplog.text

    def test_nested_track_points(
        self, nested_track_points_gpx: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        output = tmp_path / "out.gpx"
        with caplog.at_level(logging.ERROR, logger="safe_gpx"):
            code = main([str(nested_track_points_gpx), "-s", HOME_AREA, "-o", str(output)])

        assert code == EXIT_FAILURE
        assert "TRKPT_NESTED" in caplog.text
        assert not output.exists()

    def test_bad_environment(
        self, ride: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("SAFE_GPX_INDENT_WIDTH", "99")
        with caplog.at_level(logging.ERROR, logger="safe_gpx"):
            assert main([str(ride), "-s", HOME_AREA]) == EXIT_FAILURE
        assert "CONFIG_VALIDATION_FAILED" in caplog.text

    def test_non_integer_environment(
        self, ride: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("SAFE_GPX_CHUNK_SIZE", "abc")
        with caplog.at_level(logging.ERROR, logger="safe_gpx"):
            assert main([str(ride), "-s", HOME_AREA]) == EXIT_FAILURE
        assert "CONFIG_VALIDATION_FAILED" in caplog.text
        assert not ride.with_name("ride_safe.gpx").exists()


class TestNamespacedInput:
    """GPX files with a default namespace are filtered, not reported as errors."""

    def test_default_namespace_document(self, ride: Path) -> None:
        output = ride.with_name("ride_safe.gpx")

        assert main([str(ride), "-s", HOME_AREA]) == EXIT_OK

        text = output.read_text(encoding="utf-8")
        assert 'xmlns="http://www.topografix.com/GPX/1/1"' in text
        assert "ns0:" not in text

    def test_unexpected_failure_propagates(
        self, ride: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken(*args: object, **kwargs: object) -> None:
            raise ValueError("writer bug")

        monkeypatch.setattr("safe_gpx.cli.filter_gpx_file", broken)
        with pytest.raises(ValueError, match="writer bug"):
            main([str(ride), "-s", HOME_AREA])
