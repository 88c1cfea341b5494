import logging

from app.core.common.files import remove_quietly


def test_remove_quietly_deletes_file(tmp_path):
    path = tmp_path / "aiclips-x.mp4"
    path.write_bytes(b"x")

    assert remove_quietly(path) is True
    assert not path.exists()


def test_remove_quietly_tolerates_missing_files(tmp_path):
    assert remove_quietly(tmp_path / "never-existed.txt") is True


def test_remove_quietly_logs_and_reports_failure(tmp_path, caplog):
    # unlink() on a directory fails with an OSError other than FileNotFoundError
    directory = tmp_path / "not-a-file"
    directory.mkdir()

    with caplog.at_level(logging.WARNING, logger="app.core.common.files"):
        assert remove_quietly(directory) is False

    assert directory.is_dir()
    assert "Could not delete temp file" in caplog.text
