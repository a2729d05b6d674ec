import asyncio
import os

import pytest

from mumu_probe.exceptions import DownloadError, InvalidUrlFormatError
from mumu_probe.media.downloader import Downloader, file_name_from_url


def test_file_name_is_the_last_path_segment() -> None:
    url = "https://a11.gdl.netease.com/MuMuNG-setup-V1.0-0001123456.exe"
    assert file_name_from_url(url) == "MuMuNG-setup-V1.0-0001123456.exe"
    assert file_name_from_url("https://host/dir/a%20b.exe?sig=1") == "a b.exe"


@pytest.mark.parametrize("url", ["https://host", "https://host/", "https://host/dir/"])
def test_url_without_file_name_is_rejected(url: str) -> None:
    with pytest.raises(InvalidUrlFormatError):
        file_name_from_url(url)


def test_download_round_trip_creates_missing_directory(stub_mirror, tmp_path) -> None:
    body = os.urandom(300_000)
    url = stub_mirror.add("/MuMuNG-setup-V1.0.0.0-0001123456.exe", body)
    target = tmp_path / "nested" / "downloads"
    progress: list[tuple[int, int]] = []

    result = asyncio.run(
        Downloader(chunk_size=65536).download(
            url, target, on_progress=lambda done, total: progress.append((done, total))
        )
    )

    assert result.path == target / "MuMuNG-setup-V1.0.0.0-0001123456.exe"
    assert result.path.read_bytes() == body
    assert result.bytes_written == result.total_size == len(body)
    assert progress[-1] == (len(body), len(body))
    assert [done for done, _ in progress] == sorted(done for done, _ in progress)


def test_unadvertised_length_reports_zero_total(stub_mirror, tmp_path) -> None:
    body = b"x" * 10_000
    url = stub_mirror.add("/setup.exe", body, advertise_length=False)
    progress: list[tuple[int, int]] = []

    result = asyncio.run(
        Downloader().download(
            url, tmp_path, on_progress=lambda done, total: progress.append((done, total))
        )
    )

    assert result.total_size == 0
    assert (tmp_path / "setup.exe").read_bytes() == body
    assert all(total == 0 for _, total in progress)


def test_missing_file_fails_in_request_phase(stub_mirror, tmp_path) -> None:
    with pytest.raises(DownloadError) as excinfo:
        asyncio.run(Downloader().download(stub_mirror.base_url + "/gone.exe", tmp_path))

    assert excinfo.value.phase == "request"
    assert not (tmp_path / "gone.exe").exists()


def test_unusable_directory_fails_before_any_request(stub_mirror, tmp_path) -> None:
    url = stub_mirror.add("/setup.exe")
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied")

    with pytest.raises(DownloadError) as excinfo:
        asyncio.run(Downloader().download(url, blocker))

    assert excinfo.value.phase == "directory"
    assert stub_mirror.requests == []


def test_invalid_url_fails_before_any_request(stub_mirror, tmp_path) -> None:
    with pytest.raises(InvalidUrlFormatError):
        asyncio.run(Downloader().download(stub_mirror.base_url + "/files/", tmp_path))

    assert stub_mirror.requests == []
    assert list(tmp_path.iterdir()) == []


def test_unwritable_destination_fails_in_create_phase(stub_mirror, tmp_path) -> None:
    url = stub_mirror.add("/setup.exe")
    (tmp_path / "setup.exe").mkdir()

    with pytest.raises(DownloadError) as excinfo:
        asyncio.run(Downloader().download(url, tmp_path))

    assert excinfo.value.phase == "create"
    assert isinstance(excinfo.value.cause, OSError)
